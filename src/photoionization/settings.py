from __future__ import annotations

import dataclasses
import logging
import math
from dataclasses import dataclass, field
from functools import cache
from typing import TYPE_CHECKING, get_args

from photoionization.em import E1, Multipole, UseGauge
from photoionization.levels import LineSelection
from photoionization.units import get_fine_structure_constant

if TYPE_CHECKING:
    from collections.abc import Sequence

    from typing_extensions import Self

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Stokes:
    """Stokes parameters (P1, P2, P3) of the incident radiation; (0, 0, 0) is unpolarized light."""

    P1: float = 0.0
    P2: float = 0.0
    P3: float = 0.0

    def __post_init__(self) -> None:
        values = (self.P1, self.P2, self.P3)
        if not all(math.isfinite(p) for p in values):
            raise ValueError(f"Stokes parameters must be finite, but are {values}.")
        if sum(p**2 for p in values) > 1 + 1e-12:
            raise ValueError(f"Stokes parameters must fulfill P1^2 + P2^2 + P3^2 <= 1, but are {values}.")

    def density_matrix(self, lambda1: int, lambda2: int) -> complex:
        r"""Photon spin-density matrix element for the helicities lambda1, lambda2 in {+1, -1}.

        .. math::
            \rho = \frac{1}{2} \begin{pmatrix} 1 + P_3 & P_1 - i P_2 \\ P_1 + i P_2 & 1 - P_3 \end{pmatrix}

        """
        if lambda1 == lambda2 == 1:
            return (1 + self.P3) / 2
        if lambda1 == 1 and lambda2 == -1:
            return (self.P1 - 1j * self.P2) / 2
        if lambda1 == -1 and lambda2 == 1:
            return (self.P1 + 1j * self.P2) / 2
        if lambda1 == lambda2 == -1:
            return (1 - self.P3) / 2
        raise ValueError(f"Invalid photon helicities lambda1={lambda1}, lambda2={lambda2}.")


_TUPLE_FIELDS = ("multipoles", "gauges", "photon_energies", "electron_energies", "thetas", "phis", "l_values")


@dataclass(frozen=True)
class Settings:
    """Settings for the computation of photoionization lines.

    All energies (photon energies, electron energies and the free-electron shift) are given in the energy unit
    of the used :class:`Context` (hartree by default). Angles are given in radians.
    """

    multipoles: Sequence[Multipole] = (E1,)
    """Multipoles of the radiation field, which are included."""
    gauges: Sequence[UseGauge] = ("Coulomb", "Babushkin")
    """Gauges, which are included for the electric multipoles."""
    photon_energies: Sequence[float] = ()
    electron_energies: Sequence[float] = ()
    thetas: Sequence[float] = ()
    """Polar angles for the angle-differential cross sections."""
    phis: Sequence[float] = ()
    """Azimuthal angles for the angle-differential cross sections."""
    calc_anisotropy: bool = False
    calc_partial_cs: bool = False
    calc_time_delay: bool = False
    calc_non_e1_angle_differential_cs: bool = False
    calc_tensors: bool = False
    print_before: bool = False
    """Log all selected lines and their channels before the evaluation starts."""
    line_selection: LineSelection = field(default_factory=LineSelection)
    stokes: Stokes = field(default_factory=Stokes)
    free_electron_shift: float = 0.0
    """Overall shift of all free-electron energies."""
    l_values: Sequence[int] = (0, 1, 2, 3, 4, 5)
    """Orbital angular momenta of the free electron, for which partial waves are considered."""
    time_delay_l0: int = 2
    """Orbital-coupling reference momentum l0 of the coherent time delay.

    This should match the dominant continuum channel, e.g. l0 = 1 for a p_1/2, p_3/2 splitting
    and l0 = 2 for a d_3/2, d_5/2 splitting.
    """

    def __post_init__(self) -> None:
        for name in _TUPLE_FIELDS:
            object.__setattr__(self, name, tuple(getattr(self, name)))
        self.sanity_check()

    def sanity_check(self) -> None:
        msgs: list[str] = []
        for gauge in self.gauges:
            if gauge not in get_args(UseGauge):
                msgs.append(f"Invalid gauge {gauge!r}, allowed are {get_args(UseGauge)}.")
        for multipole in self.multipoles:
            if not isinstance(multipole, Multipole):
                msgs.append(f"Invalid multipole {multipole!r}, use Multipole or Multipole.from_string.")
        if any(l < 0 for l in self.l_values):
            msgs.append(f"l_values must be non-negative, but are {self.l_values}.")
        if self.time_delay_l0 < 0:
            msgs.append(f"time_delay_l0 must be non-negative, but is {self.time_delay_l0}.")
        if msgs:
            raise ValueError("Invalid photoionization settings:\n  " + "\n  ".join(msgs))

    def replace(self, **overrides: object) -> Self:
        """Return a copy of the settings, where only the given fields are replaced."""
        names = {f.name for f in dataclasses.fields(self)}
        unknown = set(overrides) - names
        if unknown:
            raise TypeError(f"Unknown settings {sorted(unknown)}, allowed are {sorted(names)}.")
        return dataclasses.replace(self, **overrides)  # type: ignore [arg-type]


@dataclass(frozen=True)
class Context:
    """Read-only, process-wide values used by all entry points."""

    alpha: float
    """Fine structure constant."""
    energy_unit: str = "hartree"
    """Unit in which the user provides and expects energies (any pint energy, frequency or wavenumber unit)."""
    cross_section_unit: str = "megabarn"
    """Unit of the cross sections in the logged summary ("a.u." for bohr^2)."""
    summary_logger: str = "photoionization.summary"
    """Name of the logger, which receives the summary of the computed lines."""


@cache
def get_default_context() -> Context:
    context = Context(alpha=get_fine_structure_constant())
    logger.debug("Initialized the default context %s", context)
    return context
