from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np

from photoionization.levels import LevelSymmetry

if TYPE_CHECKING:
    from photoionization.em import Multipole


def _check_kappa(kappa: int) -> None:
    if kappa == 0 or not float(kappa).is_integer():
        raise ValueError(f"Invalid relativistic angular quantum number kappa={kappa}.")


def kappa_to_l(kappa: int) -> int:
    """Orbital angular momentum l of the partial wave kappa (l = -kappa - 1 for kappa < 0, l = kappa otherwise)."""
    _check_kappa(kappa)
    if kappa < 0:
        return -kappa - 1
    return kappa


def kappa_to_j(kappa: int) -> float:
    """Total angular momentum j = |kappa| - 1/2 of the partial wave kappa."""
    _check_kappa(kappa)
    return abs(kappa) - 0.5


def kappa_from_lj(l: int, j: float) -> int:
    """Relativistic angular quantum number for given l and j = l +- 1/2."""
    if j == l + 0.5:
        return -(l + 1)
    if j == l - 0.5 and l > 0:
        return l
    raise ValueError(f"Invalid combination of l={l} and j={j}.")


def allowed_multipole_symmetries(symmetry: LevelSymmetry, multipole: Multipole) -> list[LevelSymmetry]:
    """Return all symmetries, which can be reached from the given symmetry by absorbing the multipole photon.

    The total angular momentum runs over |J - L| ... J + L, the parity is parity(J) * parity(multipole).
    """
    parity = symmetry.parity * multipole.parity
    j_min = abs(symmetry.J - multipole.L)
    j_max = symmetry.J + multipole.L
    return [LevelSymmetry(float(j), parity) for j in np.arange(j_min, j_max + 1)]


def allowed_kappa_symmetries(symmetry_t: LevelSymmetry, symmetry_f: LevelSymmetry) -> list[int]:
    """Return all partial waves kappa, which couple the final ionic level with symmetry_f to symmetry_t.

    The partial wave j has to fulfill |J_t - j| <= J_f <= J_t + j
    and the orbital parity (-1)^l has to agree with parity_t * parity_f.
    """
    parity = symmetry_t.parity * symmetry_f.parity
    j_min = abs(symmetry_t.J - symmetry_f.J)
    j_max = symmetry_t.J + symmetry_f.J
    if not float(j_max + 0.5).is_integer():
        return []
    kappas: list[int] = []
    for j in np.arange(max(j_min, 0.5), j_max + 1):
        for l in (int(j - 0.5), int(j + 0.5)):
            if (-1) ** l == parity:
                kappas.append(kappa_from_lj(l, float(j)))
    return kappas
