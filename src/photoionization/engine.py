from __future__ import annotations

import dataclasses
import logging
from typing import TYPE_CHECKING, Any, Optional

from photoionization.amplitude import calc_transition_amplitude
from photoionization.lines import determine_lines
from photoionization.properties import (
    TIME_DELAY_STEP,
    calc_angle_differential,
    calc_angular_beta,
    calc_cross_section,
    calc_partial_cross_sections,
    calc_statistical_tensors,
    calc_time_delays,
)
from photoionization.providers import ContinuumSettings
from photoionization.settings import get_default_context
from photoionization.units import convert_energy_from_au, convert_from_au

if TYPE_CHECKING:
    from photoionization.channels import Channel
    from photoionization.levels import Level, LevelSelection, Multiplet
    from photoionization.lines import Line
    from photoionization.providers import Backend
    from photoionization.settings import Context, Settings

logger = logging.getLogger(__name__)


def _evaluate_channels(
    line: Line,
    electron_energy: float,
    photon_energy: float,
    initial_level: Level,
    final_level: Level,
    nuclear_model: Any,
    grid: Any,
    continuum_settings: ContinuumSettings,
    backend: Backend,
) -> list[Channel]:
    level_operations = backend.level_operations
    channels: list[Channel] = []
    for channel in line.channels:
        channel_initial_level = level_operations.with_extra_subshell(channel.kappa, initial_level)
        orbital, phase = backend.orbital_provider.generate_orbital_for_level(
            electron_energy, channel.kappa, final_level, nuclear_model, grid, continuum_settings
        )
        continuum_level = level_operations.with_extra_electron(orbital, channel.symmetry, final_level)
        channel_with_phase = channel.with_phase(phase)
        amplitude = calc_transition_amplitude(
            "photoionization",
            channel_with_phase,
            photon_energy,
            continuum_level,
            channel_initial_level,
            grid,
            backend.amplitude_evaluator,
        )
        logger.debug("%s: phase=%.6f, amplitude=%s", channel, phase, amplitude)
        channels.append(channel_with_phase.with_amplitude(amplitude))
    return channels


def compute_amplitudes_properties(
    line: Line,
    nuclear_model: Any,
    grid: Any,
    n_continuum: Optional[int],
    settings: Settings,
    backend: Backend,
    context: Optional[Context] = None,
) -> Line:
    """Compute all amplitudes of a line and the properties requested by the settings.

    The line itself is not changed, a new and fully evaluated line is returned.
    Any failure of the orbital generation or of an amplitude evaluation aborts the whole line.

    Args:
        line: The line with its (not yet evaluated) channels.
        nuclear_model: Nuclear model, passed through to the orbital provider.
        grid: Radial grid, passed through to the orbital provider and the amplitude evaluator.
        n_continuum: Number of grid points for the continuum orbitals.
        settings: The photoionization settings.
        backend: The external collaborators.
        context: The context with the physical constants, defaults to :func:`get_default_context`.

    Returns:
        The evaluated line.

    """
    if context is None:
        context = get_default_context()
    level_operations = backend.level_operations
    initial_subshells = level_operations.subshells(line.initial_level)
    initial_level = level_operations.symmetry_reduced(line.initial_level, initial_subshells)
    final_level = level_operations.symmetry_reduced(line.final_level, level_operations.subshells(initial_level))
    continuum_settings = ContinuumSettings(include_exchange=False, n_continuum=n_continuum)

    channels = _evaluate_channels(
        line,
        line.electron_energy,
        line.photon_energy,
        initial_level,
        final_level,
        nuclear_model,
        grid,
        continuum_settings,
        backend,
    )
    cross_section = calc_cross_section(channels, line.photon_energy, context.alpha)

    new_line = dataclasses.replace(line, channels=tuple(channels), cross_section=cross_section)
    if settings.calc_anisotropy:
        new_line = dataclasses.replace(
            new_line, angular_beta=calc_angular_beta(line.initial_level, line.final_level, channels)
        )
    if settings.calc_time_delay:
        x_channels = _evaluate_channels(
            line,
            line.electron_energy + TIME_DELAY_STEP,
            line.photon_energy + TIME_DELAY_STEP,
            initial_level,
            final_level,
            nuclear_model,
            grid,
            continuum_settings,
            backend,
        )
        coherent_delay, incoherent_delay = calc_time_delays(
            channels, x_channels, TIME_DELAY_STEP, line.final_level.J, settings.time_delay_l0
        )
        new_line = dataclasses.replace(new_line, coherent_delay=coherent_delay, incoherent_delay=incoherent_delay)
    if settings.calc_partial_cs:
        new_line = dataclasses.replace(
            new_line, partial_cross_sections=calc_partial_cross_sections(new_line, context.alpha)
        )
    if settings.calc_tensors:
        new_line = dataclasses.replace(
            new_line, statistical_tensors=calc_statistical_tensors(new_line, settings.stokes)
        )
    if settings.calc_non_e1_angle_differential_cs:
        angle_differential = calc_angle_differential(
            new_line, settings.thetas, settings.phis, settings.stokes, context.alpha
        )
        new_line = dataclasses.replace(new_line, angle_differential=angle_differential)
    return new_line


def compute_lines(
    initial_multiplet: Multiplet,
    final_multiplet: Multiplet,
    nuclear_model: Any,
    grid: Any,
    settings: Settings,
    backend: Backend,
    context: Optional[Context] = None,
    initial_level_selection: Optional[LevelSelection] = None,
) -> list[Line]:
    """Compute the photoionization amplitudes and all requested properties for all selected lines.

    Args:
        initial_multiplet: Multiplet of the initial (bound) levels.
        final_multiplet: Multiplet of the final ionic levels.
        nuclear_model: Nuclear model, passed through to the orbital provider.
        grid: Radial grid, passed through to the external collaborators.
        settings: The photoionization settings.
        backend: The external collaborators.
        context: The context with the physical constants and units, defaults to :func:`get_default_context`.
        initial_level_selection: If given, only lines whose initial level is selected are evaluated
            (e.g. for large cascade computations).

    Returns:
        The list of evaluated lines.

    """
    if context is None:
        context = get_default_context()
    logger.info("The computation of photoionization lines and properties starts now.")

    lines = determine_lines(initial_multiplet, final_multiplet, settings, context)
    if settings.print_before:
        _log_lines(lines)

    max_energy = max((line.electron_energy for line in lines), default=0.0)
    n_continuum = backend.orbital_provider.grid_consistency(max_energy, grid)

    new_lines: list[Line] = []
    for line in lines:
        if initial_level_selection is not None and not initial_level_selection.select_level(line.initial_level):
            continue
        logger.info(
            "Calculate photoionization amplitudes and properties for line %d - %d for the photon energy %.6e %s",
            line.initial_level.index,
            line.final_level.index,
            convert_energy_from_au(line.photon_energy, context.energy_unit),
            context.energy_unit,
        )
        new_lines.append(
            compute_amplitudes_properties(line, nuclear_model, grid, n_continuum, settings, backend, context)
        )

    _log_summary(new_lines, context)
    logger.info("Computed %d of %d photoionization lines.", len(new_lines), len(lines))
    return new_lines


def _log_lines(lines: list[Line]) -> None:
    logger.info("Selected %d photoionization lines:", len(lines))
    for line in lines:
        logger.info("  %s", line)
        for channel in line.channels:
            logger.info("    %s", channel)


def _log_summary(lines: list[Line], context: Context) -> None:
    summary_logger = logging.getLogger(context.summary_logger)
    for line in lines:
        summary_logger.info(
            "%d -> %d  %s -> %s  omega=%.6e %s  cs(Coulomb)=%.6e  cs(Babushkin)=%.6e %s",
            line.initial_level.index,
            line.final_level.index,
            line.initial_level.symmetry,
            line.final_level.symmetry,
            convert_energy_from_au(line.photon_energy, context.energy_unit),
            context.energy_unit,
            convert_from_au(line.cross_section.coulomb, "CROSS_SECTION", context.cross_section_unit),
            convert_from_au(line.cross_section.babushkin, "CROSS_SECTION", context.cross_section_unit),
            context.cross_section_unit,
        )
