from __future__ import annotations

import logging
import math
from typing import TYPE_CHECKING

import numpy as np

from photoionization.angular import bracket, calc_wigner_6j, clebsch_gordan, minus_one_pow
from photoionization.em import E1, EmProperty

if TYPE_CHECKING:
    from collections.abc import Sequence

    from photoionization.channels import Channel
    from photoionization.em import UseGauge
    from photoionization.levels import Level

logger = logging.getLogger(__name__)

SENTINEL = -9.0
"""Value returned for anisotropy parameters and time delays, whose normalization vanishes."""

GAUGES: tuple[UseGauge, UseGauge] = ("Coulomb", "Babushkin")


def calc_squared_amplitudes(channels: Sequence[Channel]) -> EmProperty:
    """Sum |amplitude|^2 over all channels per gauge, magnetic channels add to both gauges."""
    values = {gauge: sum(abs(ch.amplitude) ** 2 for ch in channels if ch.contributes_to(gauge)) for gauge in GAUGES}
    return EmProperty(float(values["Coulomb"]), float(values["Babushkin"]))


def calc_cross_section(channels: Sequence[Channel], photon_energy: float, alpha: float) -> EmProperty:
    r"""Calculate the total photoionization cross section (in bohr^2).

    .. math::
        \sigma = \frac{8 \pi^3}{\alpha \omega} \sum_{channels} |M|^2

    """
    factor = 8 * math.pi**3 / alpha / photon_energy
    return calc_squared_amplitudes(channels) * factor


def calc_angular_beta(initial_level: Level, final_level: Level, channels: Sequence[Channel]) -> EmProperty:
    """Calculate the beta anisotropy parameter in the E1 approximation.

    Only E1 channels are taken into account, pairs of channels have to be given in the same gauge.
    If no E1 amplitude contributes for a gauge, the sentinel -9 is returned for this gauge.
    """
    ji, jf = initial_level.J, final_level.J
    e1_channels = [ch for ch in channels if ch.multipole == E1]

    betas: dict[UseGauge, float] = {}
    for gauge in GAUGES:
        gauge_channels = [ch for ch in e1_channels if ch.gauge == gauge]
        norm = sum(abs(ch.amplitude) ** 2 for ch in gauge_channels)
        if norm == 0:
            log = logger.warning if gauge_channels else logger.debug
            log("Vanishing E1 norm in the %s gauge, use beta = %s.", gauge, SENTINEL)
            betas[gauge] = SENTINEL
            continue

        wa = 0j
        for ch in gauge_channels:
            j, l, jt = ch.j, ch.l, ch.symmetry.J
            for chp in gauge_channels:
                jp, lp, jtp = chp.j, chp.l, chp.symmetry.J
                wa += (
                    minus_one_pow(jf - ji - 0.5)
                    * np.sqrt(bracket(jt, jtp, j, jp, l, lp))
                    * clebsch_gordan(l, 0, lp, 0, 2, 0)
                    * calc_wigner_6j(j, l, 0.5, lp, jp, 2)
                    * calc_wigner_6j(j, jt, jf, jtp, jp, 2)
                    * calc_wigner_6j(1, jt, ji, jtp, 1, 2)
                    * ch.amplitude
                    * np.conj(chp.amplitude)
                )
        betas[gauge] = float((np.sqrt(6.0) * wa / norm).real)

    return EmProperty(betas["Coulomb"], betas["Babushkin"])
