from __future__ import annotations

from typing import TYPE_CHECKING, Literal

from pint import UnitRegistry

if TYPE_CHECKING:
    from pint.facets.plain import PlainUnit

ureg = UnitRegistry(system="atomic")


Dimension = Literal[
    "ENERGY",
    "CROSS_SECTION",
]
BaseUnits: dict[Dimension, PlainUnit] = {
    # ENERGY: 1 hartree = 1 electron_mass * bohr ** 2 / atomic_unit_of_time ** 2
    "ENERGY": ureg.Unit("hartree"),
    # CROSS_SECTION: 1 bohr ** 2 = 2.80028520e-17 cm ** 2
    "CROSS_SECTION": ureg.Unit("bohr ** 2"),
}


def get_fine_structure_constant() -> float:
    """Return the fine structure constant alpha (dimensionless)."""
    return ureg.Quantity(1, "fine_structure_constant").to_base_units().magnitude  # type: ignore [no-any-return]


def convert_energy_to_au(value: float, unit: str) -> float:
    """Convert an energy (or a frequency / wavenumber via the spectroscopy context) to hartree."""
    if unit in ("a.u.", "hartree"):
        return float(value)
    return ureg.Quantity(value, unit).to(BaseUnits["ENERGY"], "spectroscopy").magnitude  # type: ignore [no-any-return]


def convert_energy_from_au(value: float, unit: str) -> float:
    """Convert an energy given in hartree to the desired unit."""
    if unit in ("a.u.", "hartree"):
        return float(value)
    return ureg.Quantity(value, BaseUnits["ENERGY"]).to(unit, "spectroscopy").magnitude  # type: ignore [no-any-return]


def convert_from_au(value: float, dimension: Dimension, unit: str) -> float:
    """Convert a value given in atomic units of the given dimension to the desired unit."""
    if dimension == "ENERGY":
        return convert_energy_from_au(value, unit)
    if unit == "a.u.":
        return float(value)
    return ureg.Quantity(value, BaseUnits[dimension]).to(unit).magnitude  # type: ignore [no-any-return]
