"""Helpers to extract data from a list of evaluated photoionization lines."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import numpy as np

from photoionization.em import EmProperty
from photoionization.properties.partial import get_line_kappas

if TYPE_CHECKING:
    from collections.abc import Sequence

    from photoionization.levels import Level, Shell
    from photoionization.lines import Line

logger = logging.getLogger(__name__)

__all__ = [
    "ExtrapolationError",
    "ShellAssignmentError",
    "extract_cross_section",
    "extract_cross_section_for_shell",
    "extract_lines",
    "extract_photon_energies",
    "get_line_kappas",
    "interpolate_cross_section",
]


class ExtrapolationError(ValueError):
    pass


class ShellAssignmentError(ValueError):
    pass


def extract_photon_energies(lines: Sequence[Line]) -> list[float]:
    """Return the distinct photon energies (in hartree) of all lines in increasing order."""
    return sorted({line.photon_energy for line in lines})


def extract_lines(lines: Sequence[Line], omega: float) -> list[Line]:
    """Return all lines with the given photon energy (in hartree)."""
    return [line for line in lines if line.photon_energy == omega]


def _is_same_level(level: Level, other: Level) -> bool:
    return level.index == other.index and level.energy == other.energy


def extract_cross_section(lines: Sequence[Line], omega: float, initial_level: Level) -> EmProperty:
    """Sum the cross sections of all lines with the given photon energy and initial level."""
    cs = EmProperty()
    for line in lines:
        if _is_same_level(line.initial_level, initial_level) and line.photon_energy == omega:
            cs = cs + line.cross_section
    return cs


def extract_cross_section_for_shell(
    lines: Sequence[Line], omega: float, shell: Shell, initial_level: Level
) -> EmProperty:
    """Sum the cross sections of all lines with the given photon energy and initial level, which ionize the shell.

    The ionized shell of a line is determined by the difference of the leading configurations
    of its initial and final level.
    """
    cs = EmProperty()
    for line in lines:
        if not (_is_same_level(line.initial_level, initial_level) and line.photon_energy == omega):
            continue
        config_i, config_f = line.initial_level.configuration, line.final_level.configuration
        if config_i is None or config_f is None:
            raise ShellAssignmentError(f"No leading configuration given for the levels of {line}.")
        differences = config_i.shell_occupation_difference(config_f)
        if len(differences) != 1 or differences[0][1] < 0:
            raise ShellAssignmentError(
                f"The configurations {config_i} and {config_f} do not differ by the ionization of a single shell."
            )
        if differences[0][0] == shell:
            cs = cs + line.cross_section
    return cs


def interpolate_cross_section(lines: Sequence[Line], omega: float, initial_level: Level) -> EmProperty:
    """Linearly interpolate the cross section for the initial level at an arbitrary photon energy (in hartree).

    The two photon energies of the lines of this initial level, which enclose omega, are used.
    At one of the available photon energies the stored cross section is returned.

    Raises:
        ExtrapolationError: If omega is outside of the available photon energies.

    """
    omegas = extract_photon_energies([line for line in lines if _is_same_level(line.initial_level, initial_level)])
    if omega in omegas:
        return extract_cross_section(lines, omega, initial_level)
    if len(omegas) < 2 or not omegas[0] < omega < omegas[-1]:
        raise ExtrapolationError(
            f"No extrapolation of cross sections, omega={omega} is outside of the available photon energies {omegas}."
        )

    index = int(np.searchsorted(omegas, omega))
    omega1, omega2 = omegas[index - 1], omegas[index]
    cs1 = extract_cross_section(lines, omega1, initial_level)
    cs2 = extract_cross_section(lines, omega2, initial_level)
    logger.debug("Interpolate the cross section at %s between %s and %s", omega, omega1, omega2)
    return cs1 + (cs2 - cs1) * ((omega - omega1) / (omega2 - omega1))
