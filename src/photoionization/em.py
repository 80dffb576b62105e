from __future__ import annotations

import re
from dataclasses import dataclass
from typing import TYPE_CHECKING, Literal, Union

if TYPE_CHECKING:
    from typing_extensions import Self

Gauge = Literal["Coulomb", "Babushkin", "Magnetic"]
UseGauge = Literal["Coulomb", "Babushkin"]

ComplexOrFloat = Union[complex, float]


@dataclass(frozen=True, order=True)
class Multipole:
    """Multipole component of the radiation field, e.g. E1 or M2."""

    L: int
    """Rank of the multipole (L >= 1)."""
    electric: bool
    """True for an electric multipole, False for a magnetic one."""

    def __post_init__(self) -> None:
        if not isinstance(self.L, int) or self.L < 1:
            raise ValueError(f"The multipole rank L must be an integer >= 1, but is {self.L}.")

    @classmethod
    def from_string(cls, name: str) -> Self:
        """Parse a multipole name like 'E1' or 'M2'."""
        match = re.match(r"^([EM])(\d+)$", name.strip())
        if match is None:
            raise ValueError(f"Invalid multipole {name!r}, expected something like 'E1' or 'M2'.")
        return cls(int(match.group(2)), match.group(1) == "E")

    @property
    def parity(self) -> int:
        """Parity of the multipole: (-1)^L for electric and (-1)^(L+1) for magnetic multipoles."""
        if self.electric:
            return (-1) ** self.L
        return (-1) ** (self.L + 1)

    @property
    def electric_exponent(self) -> int:
        """1 for electric and 0 for magnetic multipoles, as it appears in the helicity phases."""
        return 1 if self.electric else 0

    def __str__(self) -> str:
        return f"{'E' if self.electric else 'M'}{self.L}"

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}.from_string('{self}')"


E1 = Multipole(1, electric=True)
M1 = Multipole(1, electric=False)
E2 = Multipole(2, electric=True)
M2 = Multipole(2, electric=False)
E3 = Multipole(3, electric=True)


@dataclass(frozen=True)
class EmProperty:
    """A pair of values for the Coulomb (velocity) and the Babushkin (length) gauge.

    All arithmetic acts pointwise on the two gauges, the values of different gauges never mix.
    """

    coulomb: ComplexOrFloat = 0.0
    babushkin: ComplexOrFloat = 0.0

    @classmethod
    def uniform(cls, value: ComplexOrFloat) -> EmProperty:
        """Create an EmProperty with the same value in both gauges."""
        return cls(value, value)

    def __getitem__(self, gauge: UseGauge) -> ComplexOrFloat:
        if gauge == "Coulomb":
            return self.coulomb
        if gauge == "Babushkin":
            return self.babushkin
        raise KeyError(gauge)

    def __add__(self, other: EmProperty) -> EmProperty:
        if not isinstance(other, EmProperty):
            return NotImplemented
        return EmProperty(self.coulomb + other.coulomb, self.babushkin + other.babushkin)

    def __sub__(self, other: EmProperty) -> EmProperty:
        if not isinstance(other, EmProperty):
            return NotImplemented
        return EmProperty(self.coulomb - other.coulomb, self.babushkin - other.babushkin)

    def __mul__(self, factor: ComplexOrFloat) -> EmProperty:
        if isinstance(factor, EmProperty):
            return NotImplemented
        return EmProperty(self.coulomb * factor, self.babushkin * factor)

    __rmul__ = __mul__

    def __truediv__(self, divisor: ComplexOrFloat) -> EmProperty:
        if isinstance(divisor, EmProperty):
            return NotImplemented
        return EmProperty(self.coulomb / divisor, self.babushkin / divisor)

    def __neg__(self) -> EmProperty:
        return EmProperty(-self.coulomb, -self.babushkin)

    @property
    def real(self) -> EmProperty:
        return EmProperty(complex(self.coulomb).real, complex(self.babushkin).real)

    @property
    def imag(self) -> EmProperty:
        return EmProperty(complex(self.coulomb).imag, complex(self.babushkin).imag)
