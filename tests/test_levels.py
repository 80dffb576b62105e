from __future__ import annotations

import pytest
from photoionization import Configuration, InvalidQuantumNumbersError, Level, LevelSymmetry, Shell


@pytest.mark.parametrize(
    ("string", "symmetry"),
    [("1/2-", LevelSymmetry(0.5, -1)), ("0+", LevelSymmetry(0, 1)), ("5/2+", LevelSymmetry(2.5, 1))],
)
def test_level_symmetry(string: str, symmetry: LevelSymmetry) -> None:
    assert LevelSymmetry.from_string(string) == symmetry
    assert str(symmetry) == string


@pytest.mark.parametrize(("j", "parity"), [(-1, 1), (0.25, 1), (1, 0)])
def test_invalid_level_symmetry(j: float, parity: int) -> None:
    with pytest.raises(InvalidQuantumNumbersError):
        LevelSymmetry(j, parity)
    with pytest.raises(InvalidQuantumNumbersError):
        Level(1, j, parity, 0.0)


def test_configuration() -> None:
    config = Configuration.from_string("1s2 2s2 2p6 3s")
    assert config.occupations[Shell(3, 0)] == 1
    assert config.occupations[Shell(2, 1)] == 6
    assert str(Configuration.from_string("2s1 1s2")) == "1s2 2s1"

    ion = Configuration.from_string("1s2 2s2 2p5 3s1")
    assert config.shell_occupation_difference(ion) == [(Shell(2, 1), 1)]
    assert ion.shell_occupation_difference(config) == [(Shell(2, 1), -1)]
    assert hash(Configuration.from_string("1s2 2s1")) == hash(Configuration.from_string("2s1 1s2"))

    with pytest.raises(ValueError, match="Invalid configuration"):
        Configuration.from_string("1x2")
