r"""Angle-differential photoionization cross sections beyond the electric-dipole approximation.

The cross section for photons with Stokes parameters (P1, P2, P3) along the z-axis is

.. math::
    \frac{d\sigma}{d\Omega}(\theta, \phi) = \frac{2 \pi^3}{\alpha \omega (2 J_i + 1)}
    \left( 1 + \frac{1}{\bar{\sigma}} \sum_{X=1}^{20} \sum_{a, b} \sum_{\lambda_1, \lambda_2 = \pm 1}
    K_X(a, b) W_X(\theta, \phi; a, b, \lambda_1, \lambda_2) M_a M_b^* \right),

where the sum runs over all ordered channel pairs (a, b) and :math:`\bar{\sigma} = \sum_a |M_a|^2`.
At :math:`\theta = \phi = 0` the contributions are collected by (L_a, L_b, X, electric_a, electric_b)
into the named angular parameters beta1, gamma1, gamma3, pi2, pi4, delta1, lambda2, lambda4 and upsilon2.
"""

from __future__ import annotations

import cmath
import logging
import math
from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable, Optional

import numpy as np

from photoionization.angular import (
    bracket,
    calc_wigner_3j,
    calc_wigner_6j,
    calc_wigner_small_d,
    check_triangular,
    kappa_to_j,
    minus_one_pow,
)
from photoionization.em import EmProperty
from photoionization.properties.cross_section import GAUGES, calc_squared_amplitudes

if TYPE_CHECKING:
    from collections.abc import Sequence

    from photoionization.channels import Channel
    from photoionization.em import UseGauge
    from photoionization.lines import Line
    from photoionization.settings import Stokes

logger = logging.getLogger(__name__)

AngleKey = tuple[int, int, int, bool, bool]
"""(L_a, L_b, X, electric_a, electric_b)"""

X_MAX = 20
MU = 0.5
HELICITIES = (-1, 1)

NAMED_PARAMETERS: dict[AngleKey, tuple[str, float]] = {
    (1, 1, 2, True, True): ("beta1", -2.0),
    (1, 2, 1, True, True): ("gamma1", 1.0),
    (1, 2, 3, True, True): ("gamma3", 1.0),
    (2, 2, 2, True, True): ("pi2", 1.0),
    (2, 2, 4, True, True): ("pi4", 1.0),
    (1, 1, 1, True, False): ("delta1", 1.0),
    (1, 3, 2, True, True): ("lambda2", 1.0),
    (1, 3, 4, True, True): ("lambda4", 1.0),
    (1, 2, 2, True, False): ("upsilon2", 1.0),
}
"""Lookup table from the collected (L_a, L_b, X, electric_a, electric_b) key to the named parameter and its scale."""

PARAMETER_NAMES = tuple(name for name, _ in NAMED_PARAMETERS.values())


@dataclass(frozen=True)
class AngleDifferentialPoint:
    theta: float
    phi: float
    cross_section: EmProperty


@dataclass(frozen=True)
class AngleDifferentialResult:
    points: tuple[AngleDifferentialPoint, ...]
    """Angle-differential cross sections for all (theta, phi) of the grid."""
    parameters: Optional[dict[str, EmProperty]]
    """Named angular parameters, None if the grid does not contain theta = phi = 0."""
    diagnostics: dict[AngleKey, EmProperty]
    """All collected contributions at theta = phi = 0 (real parts), including the keys without a name."""


def calc_angular_function_k(
    l1: int, l2: int, x: int, ji: float, jf: float, kappa1: int, jt1: float, kappa2: int, jt2: float
) -> float:
    """Angle-independent factor K_X of the angle-differential cross section.

    No triangle conditions are checked here, a violated triangle gives a vanishing 6j symbol.
    """
    j1, j2 = kappa_to_j(kappa1), kappa_to_j(kappa2)
    return (
        (2 * x + 1)
        * math.sqrt(bracket(l1, j1, jt1, l2, j2, jt2))
        * minus_one_pow(ji - jf + 0.5)
        * calc_wigner_6j(jt2, jt1, x, j1, j2, jf)
        * calc_wigner_6j(jt2, jt1, x, l1, l2, ji)
    )


def calc_angular_function_w(
    theta: float, l1: int, l2: int, x: int, lambda1: int, lambda2: int, kappa1: int, mu1: float, kappa2: int, mu2: float
) -> float:
    """Angle-dependent factor W_X(theta) (without the photon density matrix and helicity phases)."""
    if abs(lambda1) > l1 or abs(lambda2) > l2 or abs(lambda2 - lambda1) > x:
        return 0.0
    j1, j2 = kappa_to_j(kappa1), kappa_to_j(kappa2)
    return (
        calc_wigner_small_d(x, lambda2 - lambda1, mu2 - mu1, theta)
        * calc_wigner_3j(j2, j1, x, abs(mu2), -abs(mu1), mu2 - mu1)
        * calc_wigner_3j(l2, l1, x, -lambda2, lambda1, lambda2 - lambda1)
    )


def canonical_key(cha: Channel, chb: Channel, x: int) -> AngleKey:
    """Order independent key of a channel pair: lower rank first, electric before magnetic for equal ranks."""
    (l_a, el_a), (l_b, el_b) = sorted(
        [(cha.multipole.L, cha.multipole.electric), (chb.multipole.L, chb.multipole.electric)],
        key=lambda item: (item[0], not item[1]),
    )
    return (l_a, l_b, x, el_a, el_b)


def is_allowed_rank(cha: Channel, chb: Channel, x: int) -> bool:
    return (
        check_triangular(cha.multipole.L, chb.multipole.L, x)
        and check_triangular(cha.symmetry.J, chb.symmetry.J, x)
        and check_triangular(cha.j, chb.j, x)
        and (cha.l + chb.l + x) % 2 == 0
    )


def pair_gauges(cha: Channel, chb: Channel) -> list[UseGauge]:
    """Gauges to which a channel pair contributes; Coulomb-Babushkin cross pairs contribute to none."""
    return [gauge for gauge in GAUGES if cha.contributes_to(gauge) and chb.contributes_to(gauge)]


@dataclass(frozen=True)
class _PairTerm:
    cha: Channel
    chb: Channel
    x: int
    key: AngleKey
    gauges: list[UseGauge]
    weight: complex
    """K_X * M_a * M_b^*"""


def _collect_pair_terms(line: Line) -> list[_PairTerm]:
    ji, jf = line.initial_level.J, line.final_level.J
    terms: list[_PairTerm] = []
    for x in range(1, X_MAX + 1):
        for cha in line.channels:
            for chb in line.channels:
                gauges = pair_gauges(cha, chb)
                if not gauges or not is_allowed_rank(cha, chb, x):
                    continue
                # factor 2 from the summation over mu = +-1/2
                k = 2 * calc_angular_function_k(
                    cha.multipole.L, chb.multipole.L, x, ji, jf, cha.kappa, cha.symmetry.J, chb.kappa, chb.symmetry.J
                )
                if k == 0:
                    continue
                weight = k * cha.amplitude * np.conj(chb.amplitude)
                terms.append(_PairTerm(cha, chb, x, canonical_key(cha, chb, x), gauges, weight))
    return terms


def _helicity_factor(term: _PairTerm, theta: float, phi: float, lambda1: int, lambda2: int, stokes: Stokes) -> complex:
    cha, chb = term.cha, term.chb
    w = calc_angular_function_w(
        theta, cha.multipole.L, chb.multipole.L, term.x, lambda1, lambda2, cha.kappa, MU, chb.kappa, MU
    )
    if w == 0:
        return 0j
    return (
        w
        * stokes.density_matrix(lambda1, lambda2)
        * cmath.exp(1j * (lambda1 - lambda2) * phi)
        * (1j) ** (chb.multipole.L - cha.multipole.L)
        * (lambda1 * lambda2)
        / 2
        * (1j * lambda1) ** cha.multipole.electric_exponent
        * (-1j * lambda2) ** chb.multipole.electric_exponent
    )


def calc_angle_differential(
    line: Line, thetas: Sequence[float], phis: Sequence[float], stokes: Stokes, alpha: float
) -> AngleDifferentialResult:
    """Calculate the angle-differential cross sections on the (theta, phi) grid and the named angular parameters.

    Args:
        line: An evaluated line.
        thetas: Polar angles in radians.
        phis: Azimuthal angles in radians.
        stokes: Stokes parameters of the incident radiation.
        alpha: Fine structure constant.

    Returns:
        The angle-differential cross sections (same unit as the total cross section per steradian),
        the named angular parameters (if theta = phi = 0 is part of the grid) and all collected contributions.

    """
    norms = calc_squared_amplitudes(line.channels)
    active_gauges = [gauge for gauge in GAUGES if norms[gauge] != 0]
    for gauge in GAUGES:
        if gauge not in active_gauges and any(ch.contributes_to(gauge) for ch in line.channels):
            logger.warning(
                "Vanishing norm in the %s gauge for %s, skip its angle-differential cross section.", gauge, line
            )

    prefactor = 2 * math.pi**3 / alpha / (line.photon_energy * (2 * line.initial_level.J + 1))
    terms = _collect_pair_terms(line)
    logger.debug("Collected %d channel pair terms for %s", len(terms), line)

    points: list[AngleDifferentialPoint] = []
    buckets: dict[AngleKey, dict[UseGauge, complex]] = {}
    parameters: Optional[dict[str, EmProperty]] = None
    for theta in thetas:
        for phi in phis:
            is_origin = theta == 0 and phi == 0
            cs: dict[UseGauge, complex] = {gauge: 1 + 0j for gauge in active_gauges}
            if is_origin:
                buckets = {}
            for term in terms:
                for lambda1 in HELICITIES:
                    for lambda2 in HELICITIES:
                        value = term.weight * _helicity_factor(term, theta, phi, lambda1, lambda2, stokes)
                        if value == 0:
                            continue
                        for gauge in term.gauges:
                            if gauge not in active_gauges:
                                continue
                            cs[gauge] += value / norms[gauge]
                            if is_origin and lambda1 * lambda2 == 1:
                                bucket = buckets.setdefault(term.key, {"Coulomb": 0j, "Babushkin": 0j})
                                bucket[gauge] += value / norms[gauge]
            values = [prefactor * cs[gauge].real if gauge in active_gauges else 0.0 for gauge in GAUGES]
            points.append(AngleDifferentialPoint(theta, phi, EmProperty(*values)))
            if is_origin:
                parameters = _named_parameters(buckets)

    diagnostics = {
        key: EmProperty(bucket["Coulomb"].real, bucket["Babushkin"].real) for key, bucket in sorted(buckets.items())
    }
    return AngleDifferentialResult(tuple(points), parameters, diagnostics)


def _named_parameters(buckets: dict[AngleKey, dict[UseGauge, complex]]) -> dict[str, EmProperty]:
    parameters = {name: EmProperty() for name in PARAMETER_NAMES}
    for key, bucket in buckets.items():
        if key not in NAMED_PARAMETERS:
            continue
        name, scale = NAMED_PARAMETERS[key]
        parameters[name] = EmProperty(bucket["Coulomb"].real * scale, bucket["Babushkin"].real * scale)
    return parameters


# Closed-form evaluators of the named parameters, each for a fixed rank X and multipole pair.
# They take no Stokes parameters and weight both photon helicities equally, which assumes a photon
# density matrix that is symmetric under the exchange of the helicities.


def _calc_parameter_term(line: Line, cha: Channel, chb: Channel, x: int) -> complex:
    """Contribution of the ordered pair (a, b) at theta = phi = 0, summed over the photon helicities with equal weights.

    Assumes a photon density matrix that is symmetric under the exchange of the helicities.
    """
    ji, jf = line.initial_level.J, line.final_level.J
    l_a, l_b = cha.multipole.L, chb.multipole.L
    return (
        (2 * x + 1)
        * math.sqrt(2 * l_a + 1)
        * math.sqrt(2 * l_b + 1)
        * math.sqrt(bracket(cha.j, cha.symmetry.J, chb.j, chb.symmetry.J))
        * calc_wigner_3j(l_b, l_a, x, -1, 1, 0)
        * calc_wigner_3j(chb.j, cha.j, x, MU, -MU, 0)
        * calc_wigner_6j(chb.symmetry.J, cha.symmetry.J, x, cha.j, chb.j, jf)
        * calc_wigner_6j(chb.symmetry.J, cha.symmetry.J, x, l_a, l_b, ji)
        * (1j) ** (l_b - l_a)
        * cha.amplitude
        * np.conj(chb.amplitude)
        * minus_one_pow(ji - jf + 0.5)
    )


def _sum_parameter_terms(
    line: Line,
    key: AngleKey,
    select: Callable[[Channel, Channel], bool] = lambda cha, chb: True,
    phase: Callable[[Channel, Channel], complex] = lambda cha, chb: 1,
) -> dict[UseGauge, complex]:
    x = key[2]
    norms = calc_squared_amplitudes(line.channels)
    sums: dict[UseGauge, complex] = {"Coulomb": 0j, "Babushkin": 0j}
    for cha in line.channels:
        for chb in line.channels:
            if canonical_key(cha, chb, x) != key or not select(cha, chb) or not is_allowed_rank(cha, chb, x):
                continue
            term = _calc_parameter_term(line, cha, chb, x) * phase(cha, chb)
            for gauge in pair_gauges(cha, chb):
                sums[gauge] += term
    return {gauge: sums[gauge] / norms[gauge] if norms[gauge] != 0 else 0j for gauge in GAUGES}


def _even_parameter(line: Line, key: AngleKey, scale: float = 1.0) -> EmProperty:
    sums = _sum_parameter_terms(line, key)
    return EmProperty(scale * sums["Coulomb"].real, scale * sums["Babushkin"].real)


def calc_beta1(line: Line) -> EmProperty:
    return _even_parameter(line, (1, 1, 2, True, True), scale=-2.0)


def calc_gamma1(line: Line) -> EmProperty:
    return _even_parameter(line, (1, 2, 1, True, True))


def calc_gamma3(line: Line) -> EmProperty:
    return _even_parameter(line, (1, 2, 3, True, True))


def calc_pi2(line: Line) -> EmProperty:
    return _even_parameter(line, (2, 2, 2, True, True))


def calc_pi4(line: Line) -> EmProperty:
    return _even_parameter(line, (2, 2, 4, True, True))


def calc_lambda2(line: Line) -> EmProperty:
    return _even_parameter(line, (1, 3, 2, True, True))


def calc_lambda4(line: Line) -> EmProperty:
    return _even_parameter(line, (1, 3, 4, True, True))


def calc_delta1(line: Line) -> EmProperty:
    """Rank 1 E1-M1 interference parameter; the electric channel of the pair gives an extra sign."""
    sums = _sum_parameter_terms(
        line, (1, 1, 1, True, False), phase=lambda cha, chb: minus_one_pow(cha.multipole.electric_exponent)
    )
    return EmProperty(sums["Coulomb"].imag, sums["Babushkin"].imag)


def calc_upsilon2(line: Line) -> EmProperty:
    """Rank 2 E1-M2 interference parameter.

    Only the ordering (a, b) = (E1, M2) is summed, the reversed ordering gives the complex conjugate.
    """
    sums = _sum_parameter_terms(
        line,
        (1, 2, 2, True, False),
        select=lambda cha, chb: cha.multipole.electric and not chb.multipole.electric,
        phase=lambda cha, chb: (1j) ** cha.multipole.electric_exponent * (-1j) ** chb.multipole.electric_exponent,
    )
    return EmProperty(2 * sums["Coulomb"].real, 2 * sums["Babushkin"].real)


CLOSED_FORM_PARAMETERS: dict[str, Callable[[Line], EmProperty]] = {
    "beta1": calc_beta1,
    "gamma1": calc_gamma1,
    "gamma3": calc_gamma3,
    "pi2": calc_pi2,
    "pi4": calc_pi4,
    "delta1": calc_delta1,
    "lambda2": calc_lambda2,
    "lambda4": calc_lambda4,
    "upsilon2": calc_upsilon2,
}
"""Closed-form evaluators of the named parameters (helicity-symmetric photon density matrix assumed)."""
