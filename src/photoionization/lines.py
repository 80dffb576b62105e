from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Optional

from photoionization.channels import enumerate_channels
from photoionization.em import EmProperty
from photoionization.units import convert_energy_to_au

if TYPE_CHECKING:
    from photoionization.channels import Channel
    from photoionization.levels import Level, Multiplet
    from photoionization.properties.angle_differential import AngleDifferentialResult
    from photoionization.settings import Context, Settings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Line:
    """A photoionization line between an initial (bound) level and a final ionic level.

    Energies are stored in hartree. A line is created with zeroed observables,
    the evaluated line is a new Line instance (see :func:`photoionization.engine.compute_amplitudes_properties`).
    """

    initial_level: Level
    final_level: Level
    electron_energy: float
    photon_energy: float
    channels: tuple[Channel, ...]
    cross_section: EmProperty = field(default_factory=EmProperty)
    angular_beta: EmProperty = field(default_factory=EmProperty)
    coherent_delay: EmProperty = field(default_factory=EmProperty)
    incoherent_delay: EmProperty = field(default_factory=EmProperty)
    partial_cross_sections: Optional[dict[float, EmProperty]] = None
    """Partial cross sections for each projection M_f of the final level."""
    statistical_tensors: Optional[dict[tuple[int, int], EmProperty]] = None
    """Statistical tensors rho_kq of the final level for k = 0, 1, 2 and q = -k ... k."""
    angle_differential: Optional[AngleDifferentialResult] = None

    @property
    def transition_energy(self) -> float:
        return self.final_level.energy - self.initial_level.energy

    def __str__(self) -> str:
        return (
            f"Line({self.initial_level.index} -> {self.final_level.index}, "
            f"{self.initial_level.symmetry} -> {self.final_level.symmetry}, "
            f"omega={self.photon_energy:.6e}, energy={self.electron_energy:.6e}, {len(self.channels)} channels)"
        )


def determine_lines(
    initial_multiplet: Multiplet, final_multiplet: Multiplet, settings: Settings, context: Context
) -> list[Line]:
    """Determine all lines between the levels of the initial and final multiplet.

    For each selected level pair a line is created for each photon energy
    (electron energy = omega - (E_f - E_i) + shift) and for each electron energy
    (omega = electron energy - shift + (E_f - E_i)).
    Combinations with a negative free-electron energy are closed and skipped.
    """
    unit = context.energy_unit
    shift = convert_energy_to_au(settings.free_electron_shift, unit)
    lines: list[Line] = []
    for initial_level in initial_multiplet.levels:
        for final_level in final_multiplet.levels:
            if not settings.line_selection.select_level_pair(initial_level, final_level):
                continue
            delta_energy = final_level.energy - initial_level.energy
            i_index, f_index = initial_level.index, final_level.index
            for omega in settings.photon_energies:
                omega_au = convert_energy_to_au(omega, unit)
                energy = omega_au - delta_energy + shift
                if energy < 0:
                    logger.debug("Skip closed channel %d -> %d at omega=%s", i_index, f_index, omega)
                    continue
                channels = enumerate_channels(initial_level.symmetry, final_level.symmetry, settings)
                lines.append(Line(initial_level, final_level, energy, omega_au, tuple(channels)))
            for electron_energy in settings.electron_energies:
                energy = convert_energy_to_au(electron_energy, unit)
                if energy < 0:
                    logger.debug("Skip closed channel %d -> %d at energy=%s", i_index, f_index, electron_energy)
                    continue
                omega_au = energy - shift + delta_energy
                channels = enumerate_channels(initial_level.symmetry, final_level.symmetry, settings)
                lines.append(Line(initial_level, final_level, energy, omega_au, tuple(channels)))
    return lines
