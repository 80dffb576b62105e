from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np
import pytest
from photoionization import E1, E2, E3, M1, M2, Settings, Stokes, compute_lines
from photoionization.properties import CLOSED_FORM_PARAMETERS, NAMED_PARAMETERS

if TYPE_CHECKING:
    from photoionization import Backend, Line, Multiplet


def _compute_line(
    initial_multiplet: Multiplet, final_multiplet: Multiplet, backend: Backend, **overrides: object
) -> Line:
    settings = Settings(
        photon_energies=[1.4],
        multipoles=[E1, E2, M1, M2, E3],
        calc_non_e1_angle_differential_cs=True,
        stokes=Stokes(0.3, 0.1, 0.5),
        thetas=[0.0, 0.7],
        phis=[0.0, 1.1],
    ).replace(**overrides)
    return compute_lines(initial_multiplet, final_multiplet, None, None, settings, backend)[0]


def test_grid(initial_multiplet: Multiplet, final_multiplet: Multiplet, backend: Backend) -> None:
    line = _compute_line(initial_multiplet, final_multiplet, backend)
    result = line.angle_differential
    assert result is not None
    assert [(p.theta, p.phi) for p in result.points] == [(0.0, 0.0), (0.0, 1.1), (0.7, 0.0), (0.7, 1.1)]
    for point in result.points:
        assert np.isfinite(point.cross_section.coulomb)
        assert np.isfinite(point.cross_section.babushkin)
    # the distribution is not isotropic
    assert not np.isclose(result.points[0].cross_section.coulomb, result.points[3].cross_section.coulomb)


def test_named_parameters(initial_multiplet: Multiplet, final_multiplet: Multiplet, backend: Backend) -> None:
    line = _compute_line(initial_multiplet, final_multiplet, backend)
    assert line.angle_differential is not None
    parameters = line.angle_differential.parameters
    assert parameters is not None
    assert sorted(parameters) == sorted(name for name, _ in NAMED_PARAMETERS.values())
    assert any(parameters[name].coulomb != 0 for name in ("gamma1", "delta1", "upsilon2"))

    for name, calc_parameter in CLOSED_FORM_PARAMETERS.items():
        expected = calc_parameter(line)
        for gauge in ("Coulomb", "Babushkin"):
            assert np.isclose(parameters[name][gauge], expected[gauge], rtol=1e-8, atol=1e-12), name


def test_e1_only(initial_multiplet: Multiplet, final_multiplet: Multiplet, backend: Backend) -> None:
    line = _compute_line(initial_multiplet, final_multiplet, backend, multipoles=[E1])
    assert line.angle_differential is not None
    parameters = line.angle_differential.parameters
    assert parameters is not None
    for name in ("gamma1", "gamma3", "pi2", "pi4", "delta1", "lambda2", "lambda4", "upsilon2"):
        assert parameters[name].coulomb == 0
        assert parameters[name].babushkin == 0
    assert set(line.angle_differential.diagnostics) == {(1, 1, 2, True, True)}


def test_without_origin(initial_multiplet: Multiplet, final_multiplet: Multiplet, backend: Backend) -> None:
    line = _compute_line(initial_multiplet, final_multiplet, backend, thetas=[0.3], phis=[0.0])
    assert line.angle_differential is not None
    assert line.angle_differential.parameters is None
    assert len(line.angle_differential.points) == 1


def test_vanishing_gauge(
    initial_multiplet: Multiplet, final_multiplet: Multiplet, backend: Backend, caplog: pytest.LogCaptureFixture
) -> None:
    line = _compute_line(initial_multiplet, final_multiplet, backend, multipoles=[E1], gauges=["Coulomb"])
    assert line.angle_differential is not None
    for point in line.angle_differential.points:
        assert point.cross_section.coulomb != 0
        assert point.cross_section.babushkin == 0
    assert not any("Vanishing norm" in record.getMessage() for record in caplog.records)
