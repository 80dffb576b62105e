from __future__ import annotations

from typing import TYPE_CHECKING, Any

import pytest
from photoionization import (
    Backend,
    ContinuumOrbitalProvider,
    Level,
    Multiplet,
    RadiativeAmplitudeEvaluator,
    get_default_context,
)

if TYPE_CHECKING:
    from photoionization import ContinuumLevel, ContinuumSettings, Context, Multipole
    from photoionization.em import Gauge


class FakeOrbitalProvider(ContinuumOrbitalProvider):
    """Continuum orbitals with a scattering phase linear in the energy: slope * energy + 0.1 * kappa."""

    def __init__(self, slope: float = 0.3) -> None:
        self.slope = slope
        self.calls: list[tuple[float, int]] = []

    def generate_orbital_for_level(
        self,
        energy: float,
        kappa: int,
        residual_level: Level,
        nuclear_model: Any,
        grid: Any,
        continuum_settings: ContinuumSettings,
    ) -> tuple[Any, float]:
        self.calls.append((energy, kappa))
        return ("orbital", kappa, energy), self.slope * energy + 0.1 * kappa

    def grid_consistency(self, max_energy: float, grid: Any) -> int:
        return 400


class FakeAmplitudeEvaluator(RadiativeAmplitudeEvaluator):
    """Deterministic, energy independent and non-vanishing reduced matrix elements."""

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
        assert operator_kind == "absorption"
        kappa = final_level.orbital[1]  # type: ignore [union-attr]
        jt = final_level.symmetry.J
        value = complex(1.0 + 0.1 * abs(kappa) + 0.2 * multipole.L, 0.3 * kappa - 0.1 * jt)
        if not multipole.electric:
            value *= 0.4
        if gauge == "Babushkin":
            value *= 0.9 + 0.05j
        return value


class FailingOrbitalProvider(FakeOrbitalProvider):
    def generate_orbital_for_level(self, energy: float, kappa: int, *args: Any, **kwargs: Any) -> tuple[Any, float]:
        if kappa > 0:
            raise RuntimeError(f"Continuum orbital for kappa={kappa} did not converge.")
        return super().generate_orbital_for_level(energy, kappa, *args, **kwargs)


@pytest.fixture
def backend() -> Backend:
    return Backend(FakeOrbitalProvider(), FakeAmplitudeEvaluator())


@pytest.fixture
def failing_backend() -> Backend:
    return Backend(FailingOrbitalProvider(), FakeAmplitudeEvaluator())


@pytest.fixture
def context() -> Context:
    return get_default_context()


@pytest.fixture
def initial_multiplet() -> Multiplet:
    """Single J=0 even ground level, 0.9 hartree below the ionization threshold."""
    return Multiplet("initial", [Level(1, 0, 1, -0.9)])


@pytest.fixture
def final_multiplet() -> Multiplet:
    """Single J=1/2 odd ionic level at the threshold."""
    return Multiplet("final", [Level(1, 0.5, -1, 0.0)])
