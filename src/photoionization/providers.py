"""Interfaces of the external collaborators (continuum orbitals, radiative amplitudes, level manipulation).

The photoionization engine does not generate any radial orbitals itself. A backend provides
the continuum orbitals and the reduced radiative matrix elements by implementing the abstract base classes below.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Optional

if TYPE_CHECKING:
    from collections.abc import Sequence

    from photoionization.em import Gauge, Multipole
    from photoionization.levels import Level, LevelSymmetry


@dataclass(frozen=True)
class ContinuumSettings:
    """Settings passed on to the continuum orbital generation."""

    include_exchange: bool = False
    n_continuum: Optional[int] = None
    """Number of grid points used for the continuum orbitals (None lets the provider decide)."""


@dataclass(frozen=True)
class ContinuumLevel:
    """Final ionic level coupled with a free electron to the total symmetry of a channel."""

    ionic_level: Level
    orbital: Any
    symmetry: LevelSymmetry


class ContinuumOrbitalProvider(ABC):
    @abstractmethod
    def generate_orbital_for_level(
        self,
        energy: float,
        kappa: int,
        residual_level: Level,
        nuclear_model: Any,
        grid: Any,
        continuum_settings: ContinuumSettings,
    ) -> tuple[Any, float]:
        """Generate the continuum orbital for the given free-electron energy and partial wave.

        Args:
            energy: Free-electron energy in hartree.
            kappa: Relativistic angular quantum number of the partial wave.
            residual_level: The (symmetry reduced) final ionic level.
            nuclear_model: Nuclear model, passed through unchanged.
            grid: Radial grid, passed through unchanged.
            continuum_settings: Settings of the continuum orbital generation.

        Returns:
            The orbital and its scattering phase.

        """

    def grid_consistency(self, max_energy: float, grid: Any) -> Optional[int]:
        """Check that the grid is suited for free electrons up to max_energy and return the number of grid points."""
        return None


class RadiativeAmplitudeEvaluator(ABC):
    @abstractmethod
    def evaluate_radiative_amplitude(
        self,
        operator_kind: str,
        multipole: Multipole,
        gauge: Gauge,
        energy: float,
        final_level: ContinuumLevel | Level,
        initial_level: Level,
        grid: Any,
    ) -> complex:
        """Evaluate the reduced many-electron matrix element <final || O(multipole, gauge) || initial>."""


class LevelOperations(ABC):
    """Manipulation of the many-electron representation of levels."""

    @abstractmethod
    def subshells(self, level: Level) -> Sequence[Any]: ...

    @abstractmethod
    def symmetry_reduced(self, level: Level, subshells: Sequence[Any]) -> Level: ...

    @abstractmethod
    def with_extra_subshell(self, kappa: int, level: Level) -> Level: ...

    @abstractmethod
    def with_extra_electron(self, orbital: Any, symmetry: LevelSymmetry, level: Level) -> ContinuumLevel | Level: ...


class PassThroughLevelOperations(LevelOperations):
    """Level operations for backends without a many-electron basis: levels are used as they are."""

    def subshells(self, level: Level) -> Sequence[Any]:
        return ()

    def symmetry_reduced(self, level: Level, subshells: Sequence[Any]) -> Level:
        return level

    def with_extra_subshell(self, kappa: int, level: Level) -> Level:
        return level

    def with_extra_electron(self, orbital: Any, symmetry: LevelSymmetry, level: Level) -> ContinuumLevel:
        return ContinuumLevel(level, orbital, symmetry)


@dataclass(frozen=True)
class Backend:
    """Bundle of the external collaborators used by :func:`photoionization.engine.compute_lines`."""

    orbital_provider: ContinuumOrbitalProvider
    amplitude_evaluator: RadiativeAmplitudeEvaluator
    level_operations: LevelOperations = field(default_factory=PassThroughLevelOperations)
