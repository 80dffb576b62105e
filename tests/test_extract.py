from __future__ import annotations

import numpy as np
import pytest
from photoionization import (
    Configuration,
    EmProperty,
    ExtrapolationError,
    Level,
    Line,
    Shell,
    ShellAssignmentError,
    extract_cross_section,
    extract_cross_section_for_shell,
    extract_lines,
    extract_photon_energies,
    get_line_kappas,
    interpolate_cross_section,
)
from photoionization.channels import Channel
from photoionization.em import E1
from photoionization.levels import LevelSymmetry

GROUND = Level(1, 0, 1, -0.9, Configuration.from_string("1s2 2s2"))
ION_2S = Level(1, 0.5, 1, 0.0, Configuration.from_string("1s2 2s1"))
ION_1S = Level(2, 0.5, 1, 2.0, Configuration.from_string("1s1 2s2"))


def _line(final_level: Level, omega: float, cs: float) -> Line:
    return Line(GROUND, final_level, omega - final_level.energy + GROUND.energy, omega, (), EmProperty(cs, 2 * cs))


@pytest.fixture
def lines() -> list[Line]:
    return [
        _line(ION_2S, 3.0, 1.0),
        _line(ION_2S, 1.0, 3.0),
        _line(ION_1S, 3.0, 0.5),
        _line(ION_2S, 2.0, 2.0),
    ]


def test_photon_energies(lines: list[Line]) -> None:
    assert extract_photon_energies(lines) == [1.0, 2.0, 3.0]
    assert [line.final_level.index for line in extract_lines(lines, 3.0)] == [1, 2]
    assert extract_lines(lines, 1.5) == []


def test_cross_section(lines: list[Line]) -> None:
    cs = extract_cross_section(lines, 3.0, GROUND)
    assert cs.coulomb == 1.5
    assert cs.babushkin == 3.0
    assert extract_cross_section(lines, 3.0, Level(5, 0, 1, -0.5)) == EmProperty(0.0, 0.0)


def test_cross_section_for_shell(lines: list[Line]) -> None:
    cs_2s = extract_cross_section_for_shell(lines, 3.0, Shell.from_string("2s"), GROUND)
    cs_1s = extract_cross_section_for_shell(lines, 3.0, Shell(1, 0), GROUND)
    assert cs_2s.coulomb == 1.0
    assert cs_1s.coulomb == 0.5
    assert extract_cross_section_for_shell(lines, 3.0, Shell(2, 1), GROUND).coulomb == 0


@pytest.mark.parametrize(
    "final_configuration",
    [
        "1s1 2s1",  # two shells differ
        "1s2 2s2 2p1",  # electron added
    ],
)
def test_shell_assignment_error(final_configuration: str) -> None:
    final_level = Level(1, 0.5, 1, 0.0, Configuration.from_string(final_configuration))
    with pytest.raises(ShellAssignmentError):
        extract_cross_section_for_shell([_line(final_level, 3.0, 1.0)], 3.0, Shell(2, 0), GROUND)


def test_shell_assignment_without_configuration() -> None:
    final_level = Level(1, 0.5, 1, 0.0)
    with pytest.raises(ShellAssignmentError, match="configuration"):
        extract_cross_section_for_shell([_line(final_level, 3.0, 1.0)], 3.0, Shell(2, 0), GROUND)


def test_interpolate_cross_section(lines: list[Line]) -> None:
    assert interpolate_cross_section(lines, 2.0, GROUND).coulomb == 2.0
    cs = interpolate_cross_section(lines, 1.25, GROUND)
    assert np.isclose(cs.coulomb, 2.75)
    assert np.isclose(cs.babushkin, 5.5)
    cs = interpolate_cross_section(lines, 2.5, GROUND)
    assert np.isclose(cs.coulomb, (2.0 + 1.5) / 2)

    for omega in (0.5, 3.5):
        with pytest.raises(ExtrapolationError):
            interpolate_cross_section(lines, omega, GROUND)
    with pytest.raises(ExtrapolationError):
        interpolate_cross_section(lines[:1], 2.0, GROUND)


def test_get_line_kappas() -> None:
    symmetry = LevelSymmetry(1, -1)
    channels = tuple(
        Channel(E1, gauge, kappa, symmetry) for kappa in (2, -1, 2) for gauge in ("Coulomb", "Babushkin")
    )
    line = Line(GROUND, ION_2S, 0.5, 1.4, channels)
    assert get_line_kappas(line) == [2, -1]


def test_interpolate_cross_section_per_initial_level() -> None:
    other = Level(2, 0, 1, -0.5, Configuration.from_string("1s2 2s1 3s1"))
    lines = [
        _line(ION_2S, 1.0, 1.0),
        _line(ION_2S, 3.0, 3.0),
        Line(other, ION_2S, 1.5, 2.0, (), EmProperty(5.0, 5.0)),
    ]
    cs = interpolate_cross_section(lines, 1.5, GROUND)
    assert np.isclose(cs.coulomb, 1.5)
    assert np.isclose(cs.babushkin, 3.0)
    with pytest.raises(ExtrapolationError):
        interpolate_cross_section(lines, 2.5, other)
