from __future__ import annotations

import pytest
from photoionization import E1, M1, M2, EmProperty, Multipole


@pytest.mark.parametrize(
    ("name", "multipole", "parity"),
    [("E1", E1, -1), ("M1", M1, 1), ("E2", Multipole(2, True), 1), ("M2", M2, -1), ("E3", Multipole(3, True), -1)],
)
def test_multipole(name: str, multipole: Multipole, parity: int) -> None:
    assert Multipole.from_string(name) == multipole
    assert str(multipole) == name
    assert multipole.parity == parity


@pytest.mark.parametrize("name", ["E0", "X1", "e1", "E"])
def test_invalid_multipole(name: str) -> None:
    with pytest.raises(ValueError, match="multipole"):
        Multipole.from_string(name)


@pytest.mark.parametrize(
    ("a", "b", "c", "d"),
    [(1.0, 2.0, 3.0, 4.0), (-0.5, 0.0, 1e-3, 7.25), (1 + 2j, 0.5j, -1j, 3.0)],
)
def test_em_property_arithmetic(a: complex, b: complex, c: complex, d: complex) -> None:
    assert EmProperty(a, b) + EmProperty(c, d) == EmProperty(a + c, b + d)
    assert EmProperty(a, b) - EmProperty(c, d) == EmProperty(a - c, b - d)
    assert EmProperty(a, b) * 2 == EmProperty(2 * a, 2 * b)
    assert 2 * EmProperty(a, b) == EmProperty(2 * a, 2 * b)
    assert EmProperty(a, b) / 4 == EmProperty(a / 4, b / 4)


def test_em_property_access() -> None:
    prop = EmProperty(1.5, 2 + 1j)
    assert prop["Coulomb"] == 1.5
    assert prop["Babushkin"] == 2 + 1j
    assert prop.real == EmProperty(1.5, 2.0)
    assert prop.imag == EmProperty(0.0, 1.0)
    assert EmProperty.uniform(3.0) == EmProperty(3.0, 3.0)
    assert EmProperty() == EmProperty(0.0, 0.0)
    with pytest.raises(KeyError):
        prop["Magnetic"]  # type: ignore [index]
