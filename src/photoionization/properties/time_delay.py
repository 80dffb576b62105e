from __future__ import annotations

import logging
import math
from typing import TYPE_CHECKING

from photoionization.angular import calc_wigner_6j, clebsch_gordan, minus_one_pow
from photoionization.em import EmProperty
from photoionization.properties.cross_section import GAUGES, SENTINEL

if TYPE_CHECKING:
    from collections.abc import Sequence

    from photoionization.channels import Channel
    from photoionization.em import UseGauge

logger = logging.getLogger(__name__)

TIME_DELAY_STEP = 0.01
"""Energy increment (in hartree) used for the finite-difference time delays."""


def calc_coupling_factor(channel: Channel, jf: float, l0: int) -> float:
    r"""Recoupling factor of a partial wave (l, j) to the orbital reference momentum l0.

    .. math::
        \sqrt{\frac{3}{4\pi}} (-1)^{j + l + 1/2} \langle l_0 0, 1 0 | l 0 \rangle \sqrt{2j + 1}
        \begin{Bmatrix} J_f & 1/2 & l_0 \\ l & 1 & j \end{Bmatrix}

    """
    j, l = channel.j, channel.l
    return (
        math.sqrt(3 / (4 * math.pi))
        * minus_one_pow(j + l + 0.5)
        * clebsch_gordan(l0, 0, 1, 0, l, 0)
        * math.sqrt(2 * j + 1)
        * calc_wigner_6j(jf, 0.5, l0, l, 1, j)
    )


def _check_channel_order(channels: Sequence[Channel], x_channels: Sequence[Channel]) -> None:
    if len(channels) != len(x_channels):
        raise ValueError(f"Channel lists of different length ({len(channels)} != {len(x_channels)}).")
    for ch, xch in zip(channels, x_channels):
        if (ch.multipole, ch.gauge, ch.kappa, ch.symmetry) != (xch.multipole, xch.gauge, xch.kappa, xch.symmetry):
            raise ValueError(f"Channels at the two energies do not match: {ch} != {xch}.")


def _mean_phase(channels: Sequence[Channel], gauge: UseGauge) -> float | None:
    weights = [abs(ch.amplitude) ** 2 for ch in channels if ch.gauge == gauge]
    norm = sum(weights)
    if norm == 0:
        return None
    phases = [ch.phase for ch in channels if ch.gauge == gauge]
    return sum(w * phase for w, phase in zip(weights, phases)) / norm


def calc_time_delays(
    channels: Sequence[Channel], x_channels: Sequence[Channel], delta_energy: float, jf: float, l0: int = 2
) -> tuple[EmProperty, EmProperty]:
    """Calculate the coherent and the incoherent time delay per gauge.

    Args:
        channels: Evaluated channels at the photon energy E.
        x_channels: Evaluated channels at E + delta_energy, in the same order as channels.
        delta_energy: The energy increment in hartree.
        jf: Total angular momentum of the final ionic level.
        l0: Orbital reference momentum of the coherent sum.

    Returns:
        The coherent and the incoherent time delay (in atomic units of time).
        Gauges with a vanishing normalization get the sentinel -9.

    """
    _check_channel_order(channels, x_channels)

    coherent: dict[UseGauge, float] = {}
    incoherent: dict[UseGauge, float] = {}
    for gauge in GAUGES:
        amp = amp_x = 0j
        n_channels = 0
        for ch, xch in zip(channels, x_channels):
            if ch.gauge != gauge:
                continue
            n_channels += 1
            factor = calc_coupling_factor(ch, jf, l0)
            amp += factor * ch.amplitude
            amp_x += factor * xch.amplitude
        if amp == 0:
            log = logger.warning if n_channels > 0 else logger.debug
            log("Vanishing coherent amplitude in the %s gauge (l0=%d), use delay = %s.", gauge, l0, SENTINEL)
            coherent[gauge] = SENTINEL
        else:
            coherent[gauge] = ((amp_x - amp) / delta_energy / amp).imag

        phase, phase_x = _mean_phase(channels, gauge), _mean_phase(x_channels, gauge)
        if phase is None or phase_x is None:
            logger.debug("No amplitudes in the %s gauge, use incoherent delay = %s.", gauge, SENTINEL)
            incoherent[gauge] = SENTINEL
        else:
            incoherent[gauge] = (phase_x - phase) / delta_energy

    coherent_delay = EmProperty(coherent["Coulomb"], coherent["Babushkin"])
    incoherent_delay = EmProperty(incoherent["Coulomb"], incoherent["Babushkin"])
    return coherent_delay, incoherent_delay
