from __future__ import annotations

import dataclasses
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from photoionization.angular import allowed_kappa_symmetries, allowed_multipole_symmetries, kappa_to_j, kappa_to_l

if TYPE_CHECKING:
    from photoionization.em import Gauge, Multipole
    from photoionization.levels import LevelSymmetry
    from photoionization.settings import Settings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Channel:
    """A single photoionization channel (multipole, gauge, partial wave kappa, symmetry of the total final state).

    A channel is created with amplitude 0 and gets its scattering phase and amplitude exactly once,
    see :meth:`with_amplitude`.
    """

    multipole: Multipole
    gauge: Gauge
    kappa: int
    symmetry: LevelSymmetry
    """Total symmetry J_t^P of the final ion plus the free electron."""
    phase: float = 0.0
    """Scattering phase of the partial wave."""
    amplitude: complex = 0j
    evaluated: bool = False

    @property
    def l(self) -> int:
        return kappa_to_l(self.kappa)

    @property
    def j(self) -> float:
        return kappa_to_j(self.kappa)

    def with_phase(self, phase: float) -> Channel:
        """Return a copy of this (not yet evaluated) channel with the given scattering phase."""
        if self.evaluated:
            raise RuntimeError("The amplitude of this channel was already evaluated, the phase can not be changed.")
        return dataclasses.replace(self, phase=phase)

    def with_amplitude(self, amplitude: complex) -> Channel:
        """Return the evaluated copy of this channel, the amplitude can only be assigned once."""
        if self.evaluated:
            raise RuntimeError("The amplitude of this channel was already evaluated.")
        return dataclasses.replace(self, amplitude=complex(amplitude), evaluated=True)

    def contributes_to(self, gauge: Gauge) -> bool:
        """Magnetic channels are gauge invariant and contribute to both the Coulomb and the Babushkin gauge."""
        return self.gauge in (gauge, "Magnetic")

    def __str__(self) -> str:
        return f"{self.multipole} {self.gauge} kappa={self.kappa} J_t^P={self.symmetry}"


def enumerate_channels(
    initial_symmetry: LevelSymmetry, final_symmetry: LevelSymmetry, settings: Settings
) -> list[Channel]:
    """Determine all channels for a transition from the initial to the final (ionic) symmetry.

    The channels are ordered by multipole, total symmetry, kappa and gauge (in this nesting order),
    so two calls with the same arguments give the same channel list.
    Electric multipoles give one channel per requested gauge, magnetic multipoles exactly one channel
    with gauge "Magnetic".

    Args:
        initial_symmetry: Symmetry of the initial (bound) level.
        final_symmetry: Symmetry of the final ionic level.
        settings: The photoionization settings (multipoles, gauges and allowed l values are used).

    Returns:
        The list of (not yet evaluated) channels.

    """
    gauge_m = "Coulomb" if "Coulomb" in settings.gauges else "Babushkin"
    channels: list[Channel] = []
    for multipole in settings.multipoles:
        for symmetry_t in allowed_multipole_symmetries(initial_symmetry, multipole):
            for kappa in allowed_kappa_symmetries(symmetry_t, final_symmetry):
                if kappa_to_l(kappa) not in settings.l_values:
                    continue
                for gauge in settings.gauges:
                    if multipole.electric:
                        channels.append(Channel(multipole, gauge, kappa, symmetry_t))
                    elif gauge == gauge_m:
                        channels.append(Channel(multipole, "Magnetic", kappa, symmetry_t))
    logger.debug("Found %d channels for %s -> %s", len(channels), initial_symmetry, final_symmetry)
    return channels
