from __future__ import annotations

import cmath
from typing import TYPE_CHECKING, Any, Literal, get_args

if TYPE_CHECKING:
    from photoionization.channels import Channel
    from photoionization.levels import Level
    from photoionization.providers import ContinuumLevel, RadiativeAmplitudeEvaluator

AmplitudeKind = Literal["photoionization"]


class InvalidAmplitudeKindError(ValueError):
    def __init__(self, kind: str) -> None:
        super().__init__(f"Invalid amplitude kind {kind!r}, allowed are {get_args(AmplitudeKind)}.")


def calc_transition_amplitude(
    kind: str,
    channel: Channel,
    photon_energy: float,
    continuum_level: ContinuumLevel | Level,
    initial_level: Level,
    grid: Any,
    evaluator: RadiativeAmplitudeEvaluator,
) -> complex:
    r"""Calculate the photoionization amplitude of a single channel.

    The reduced absorption matrix element of the multipole operator is multiplied by the
    partial wave phase factor

    .. math::
        i^{-l} e^{-i \delta_\kappa}

    so that amplitudes of different partial waves can be summed coherently.

    Args:
        kind: Kind of the amplitude, only "photoionization" is supported.
        channel: The channel (its scattering phase must already be set).
        photon_energy: Photon energy in hartree.
        continuum_level: Final ionic level plus the free electron.
        initial_level: Initial bound level.
        grid: Radial grid, passed through to the evaluator.
        evaluator: Evaluator of the reduced radiative matrix elements.

    Returns:
        The complex amplitude.

    """
    if kind not in get_args(AmplitudeKind):
        raise InvalidAmplitudeKindError(kind)

    matrix_element = evaluator.evaluate_radiative_amplitude(
        "absorption", channel.multipole, channel.gauge, photon_energy, continuum_level, initial_level, grid
    )
    return (1j) ** (-channel.l) * cmath.exp(-1j * channel.phase) * complex(matrix_element)
