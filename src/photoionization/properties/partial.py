from __future__ import annotations

import math
from typing import TYPE_CHECKING

import numpy as np

from photoionization.angular import bracket, calc_wigner_6j, calc_wigner_9j, clebsch_gordan, minus_one_pow
from photoionization.em import EmProperty
from photoionization.properties.cross_section import GAUGES

if TYPE_CHECKING:
    from collections.abc import Iterator

    from photoionization.channels import Channel
    from photoionization.em import UseGauge
    from photoionization.lines import Line
    from photoionization.settings import Stokes

HELICITIES = (-1, 1)


def get_line_kappas(line: Line) -> list[int]:
    """Return the distinct partial waves kappa of a line in the order of their first appearance."""
    return list(dict.fromkeys(ch.kappa for ch in line.channels))


def _iter_same_kappa_pairs(line: Line, gauge: UseGauge) -> Iterator[tuple[Channel, Channel]]:
    """Iterate over all ordered channel pairs with equal kappa, both given in the requested gauge."""
    for kappa in get_line_kappas(line):
        channels = [ch for ch in line.channels if ch.kappa == kappa and ch.gauge == gauge]
        for cha in channels:
            for chp in channels:
                yield cha, chp


def _oplus(j1: float, j2: float) -> list[float]:
    return [float(j) for j in np.arange(abs(j1 - j2), j1 + j2 + 1)]


def _racah_expression(
    j: float,
    ji: float,
    jf: float,
    mf: float,
    jt: float,
    jtp: float,
    multipole_l: int,
    multipole_lp: int,
    p: int,
    pp: int,
) -> complex:
    t_values = sorted(set(_oplus(multipole_lp, jf)) & set(_oplus(multipole_l, jf)))
    value = 0j
    for t in t_values:
        wigner_9j = calc_wigner_9j(j, jtp, jf, jt, ji, multipole_l, jf, multipole_lp, t)
        if wigner_9j == 0:
            continue
        for lam in HELICITIES:
            value += (
                (1j * lam) ** p
                * (-1j * lam) ** pp
                * clebsch_gordan(multipole_lp, lam, jf, mf, t, mf + lam)
                * clebsch_gordan(multipole_l, lam, jf, mf, t, mf + lam)
                * wigner_9j
            )
    return value


def calc_partial_cross_section(line: Line, gauge: UseGauge, mf: float, alpha: float) -> float:
    r"""Calculate the partial cross section for the final ionic projection M_f for initially unpolarized atoms.

    Only channel pairs with the same partial wave kappa, which are both given in the requested gauge, are coupled.
    The sum is scaled by

    .. math::
        \frac{8 \pi^3 \alpha}{2 \omega (2 J_i + 1)}

    """
    ji, jf = line.initial_level.J, line.final_level.J
    wa = 0j
    for cha, chp in _iter_same_kappa_pairs(line, gauge):
        l_a, l_p = cha.multipole.L, chp.multipole.L
        wa += (
            (1j) ** (l_a - l_p)
            * (-1) ** (l_a + l_p)
            * bracket(l_a, l_p, cha.symmetry.J, chp.symmetry.J)
            * _racah_expression(
                cha.j,
                ji,
                jf,
                mf,
                cha.symmetry.J,
                chp.symmetry.J,
                l_a,
                l_p,
                cha.multipole.electric_exponent,
                chp.multipole.electric_exponent,
            )
            * cha.amplitude
            * np.conj(chp.amplitude)
        )
    factor = 8 * math.pi**3 * alpha / (2 * line.photon_energy * (2 * ji + 1))
    return float((factor * wa).real)


def calc_partial_cross_sections(line: Line, alpha: float) -> dict[float, EmProperty]:
    """Partial cross sections for all projections M_f = -J_f ... J_f."""
    jf = line.final_level.J
    result: dict[float, EmProperty] = {}
    for mf in np.arange(-jf, jf + 1):
        values = [calc_partial_cross_section(line, gauge, float(mf), alpha) for gauge in GAUGES]
        result[float(mf)] = EmProperty(*values)
    return result


def calc_statistical_tensor(line: Line, k: int, q: int, gauge: UseGauge, stokes: Stokes) -> complex:
    r"""Calculate the statistical tensor rho_kq of the final ionic level for initially unpolarized atoms.

    The photon helicities are coupled by the spin-density matrix of the incident radiation
    (:meth:`Stokes.density_matrix`, scaled by 2) and by the Clebsch-Gordan coefficient
    :math:`\langle L \lambda, L' -\lambda' | k q \rangle`.
    Only channel pairs with the same partial wave kappa, which are both given in the requested gauge, are coupled.
    """
    ji, jf = line.initial_level.J, line.final_level.J
    wa = 0j
    for cha, chp in _iter_same_kappa_pairs(line, gauge):
        j = cha.j
        jt, jtp = cha.symmetry.J, chp.symmetry.J
        l_a, l_p = cha.multipole.L, chp.multipole.L
        p, pp = cha.multipole.electric_exponent, chp.multipole.electric_exponent
        angular = (
            np.sqrt(bracket(l_a, l_p, jt, jtp))
            * minus_one_pow(jt + jtp + jf + ji + j + 1)
            * calc_wigner_6j(jf, j, jtp, jt, k, jf)
            * calc_wigner_6j(jtp, ji, l_p, l_a, k, jt)
        )
        if angular == 0:
            continue
        for lam in HELICITIES:
            for lamp in HELICITIES:
                wa += (
                    2 * stokes.density_matrix(lam, lamp)
                    * (1j) ** (l_a - l_p + p - pp)
                    * lam**p
                    * lamp**pp
                    * clebsch_gordan(l_a, lam, l_p, -lamp, k, q)
                    * angular
                    * cha.amplitude
                    * np.conj(chp.amplitude)
                )
    return complex(math.pi / (2 * ji + 1) * wa)


def calc_statistical_tensors(line: Line, stokes: Stokes) -> dict[tuple[int, int], EmProperty]:
    """Statistical tensors rho_kq for k = 0, 1, 2 and q = -k ... k."""
    result: dict[tuple[int, int], EmProperty] = {}
    for k in range(3):
        for q in range(-k, k + 1):
            values = [calc_statistical_tensor(line, k, q, gauge, stokes) for gauge in GAUGES]
            result[(k, q)] = EmProperty(*values)
    return result
