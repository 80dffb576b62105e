from __future__ import annotations

import numpy as np
import pytest
from photoionization import E1, M1, LineSelection, Settings, Stokes, get_default_context
from photoionization.units import convert_energy_from_au, convert_energy_to_au, convert_from_au


def test_default_settings() -> None:
    settings = Settings()
    assert settings.multipoles == (E1,)
    assert settings.gauges == ("Coulomb", "Babushkin")
    assert settings.photon_energies == ()
    assert settings.electron_energies == ()
    assert settings.l_values == (0, 1, 2, 3, 4, 5)
    assert settings.stokes == Stokes(0, 0, 0)
    assert settings.line_selection == LineSelection()
    assert settings.free_electron_shift == 0
    assert settings.time_delay_l0 == 2
    assert not any(
        [
            settings.calc_anisotropy,
            settings.calc_partial_cs,
            settings.calc_time_delay,
            settings.calc_non_e1_angle_differential_cs,
            settings.calc_tensors,
            settings.print_before,
        ]
    )


def test_replace() -> None:
    settings = Settings(photon_energies=[1.0, 2.0], calc_anisotropy=True)
    new_settings = settings.replace(multipoles=[E1, M1], time_delay_l0=1)
    assert new_settings.multipoles == (E1, M1)
    assert new_settings.time_delay_l0 == 1
    assert new_settings.photon_energies == (1.0, 2.0)
    assert new_settings.calc_anisotropy
    assert settings.multipoles == (E1,)

    with pytest.raises(TypeError, match="Unknown settings"):
        settings.replace(photon_energy=[1.0])


@pytest.mark.parametrize(
    "kwargs",
    [
        {"gauges": ["Magnetic"]},
        {"gauges": ["Length"]},
        {"multipoles": ["E1"]},
        {"l_values": [-1, 0]},
        {"time_delay_l0": -1},
    ],
)
def test_invalid_settings(kwargs: dict[str, object]) -> None:
    with pytest.raises(ValueError, match="Invalid photoionization settings"):
        Settings(**kwargs)  # type: ignore [arg-type]


def test_settings_are_immutable() -> None:
    settings = Settings()
    with pytest.raises(AttributeError):
        settings.calc_tensors = True  # type: ignore [misc]


def test_stokes() -> None:
    with pytest.raises(ValueError, match="P1\\^2"):
        Stokes(1, 0.5, 0)
    with pytest.raises(ValueError, match="finite"):
        Stokes(float("nan"), 0, 0)

    stokes = Stokes(0.3, -0.4, 0.5)
    assert np.isclose(stokes.density_matrix(1, 1) + stokes.density_matrix(-1, -1), 1)
    assert np.isclose(stokes.density_matrix(1, -1), np.conj(stokes.density_matrix(-1, 1)))
    assert np.isclose(stokes.density_matrix(1, -1), (0.3 + 0.4j) / 2)
    with pytest.raises(ValueError, match="helicities"):
        stokes.density_matrix(0, 1)


def test_default_context() -> None:
    context = get_default_context()
    assert context is get_default_context()
    assert np.isclose(1 / context.alpha, 137.035999, rtol=1e-8)
    assert context.energy_unit == "hartree"


def test_unit_conversion() -> None:
    assert np.isclose(convert_energy_to_au(27.211386245988, "eV"), 1.0)
    assert np.isclose(convert_energy_from_au(1.0, "eV"), 27.211386245988)
    assert convert_energy_to_au(0.5, "a.u.") == 0.5
    assert np.isclose(convert_from_au(1.0, "CROSS_SECTION", "megabarn"), 28.0028520, rtol=1e-6)
    assert convert_from_au(2.0, "CROSS_SECTION", "a.u.") == 2.0
