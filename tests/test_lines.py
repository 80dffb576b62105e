from __future__ import annotations

import numpy as np
import pytest
from photoionization import Context, Level, LevelSymmetry, LineSelection, Multiplet, Settings, determine_lines


def test_photon_energy(initial_multiplet: Multiplet, final_multiplet: Multiplet, context: Context) -> None:
    lines = determine_lines(initial_multiplet, final_multiplet, Settings(photon_energies=[1.4]), context)
    assert len(lines) == 1
    line = lines[0]
    assert np.isclose(line.electron_energy, 0.5)
    assert line.photon_energy == 1.4
    assert np.isclose(line.transition_energy, 0.9)
    assert [ch.kappa for ch in line.channels] == [-1, -1, 2, 2]
    assert all(not ch.evaluated for ch in line.channels)
    assert line.cross_section.coulomb == 0
    assert line.partial_cross_sections is None


def test_closed_channels(initial_multiplet: Multiplet, final_multiplet: Multiplet, context: Context) -> None:
    settings = Settings(photon_energies=[0.5, 1.4], electron_energies=[-0.1])
    lines = determine_lines(initial_multiplet, final_multiplet, settings, context)
    assert [line.photon_energy for line in lines] == [1.4]


def test_electron_energy(initial_multiplet: Multiplet, final_multiplet: Multiplet, context: Context) -> None:
    settings = Settings(electron_energies=[0.2], free_electron_shift=0.05)
    lines = determine_lines(initial_multiplet, final_multiplet, settings, context)
    assert len(lines) == 1
    assert lines[0].electron_energy == 0.2
    assert np.isclose(lines[0].photon_energy, 0.2 - 0.05 + 0.9)


def test_free_electron_shift(
    initial_multiplet: Multiplet, final_multiplet: Multiplet, context: Context
) -> None:
    settings = Settings(photon_energies=[1.4], free_electron_shift=0.1)
    lines = determine_lines(initial_multiplet, final_multiplet, settings, context)
    assert np.isclose(lines[0].electron_energy, 0.6)


def test_line_selection(context: Context) -> None:
    initial = Multiplet("initial", [Level(1, 0, 1, -0.9), Level(2, 1, 1, -0.8)])
    final = Multiplet("final", [Level(1, 0.5, -1, 0.0), Level(2, 1.5, -1, 0.1)])

    lines = determine_lines(initial, final, Settings(photon_energies=[2.0]), context)
    assert [(line.initial_level.index, line.final_level.index) for line in lines] == [(1, 1), (1, 2), (2, 1), (2, 2)]

    selection = LineSelection(active=True, index_pairs=[(2, 0)])
    lines = determine_lines(initial, final, Settings(photon_energies=[2.0], line_selection=selection), context)
    assert [(line.initial_level.index, line.final_level.index) for line in lines] == [(2, 1), (2, 2)]

    selection = LineSelection(active=True, symmetry_pairs=[(LevelSymmetry(0, 1), LevelSymmetry(1.5, -1))])
    lines = determine_lines(initial, final, Settings(photon_energies=[2.0], line_selection=selection), context)
    assert [(line.initial_level.index, line.final_level.index) for line in lines] == [(1, 2)]


def test_energy_unit(initial_multiplet: Multiplet, final_multiplet: Multiplet) -> None:
    context = Context(alpha=1 / 137.035999, energy_unit="eV")
    lines = determine_lines(initial_multiplet, final_multiplet, Settings(photon_energies=[27.211386]), context)
    assert len(lines) == 1
    assert lines[0].photon_energy == pytest.approx(1.0, rel=1e-6)
    assert lines[0].electron_energy == pytest.approx(0.1, rel=1e-5)
