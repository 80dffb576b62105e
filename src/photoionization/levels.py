from __future__ import annotations

import re
from dataclasses import dataclass, field
from fractions import Fraction
from typing import Any, Optional

L_STR2INT = {"s": 0, "p": 1, "d": 2, "f": 3, "g": 4, "h": 5, "i": 6, "k": 7, "l": 8, "m": 9}
L_INT2STR = {l: l_str for l_str, l in L_STR2INT.items()}


class InvalidQuantumNumbersError(ValueError):
    def __init__(self, obj: object, msg: str = "") -> None:
        _msg = f"Invalid quantum numbers for {obj!r}"
        if len(msg) > 0:
            _msg += f"\n  {msg}"
        super().__init__(_msg)


def check_angular_momentum(j: float) -> bool:
    return j >= 0 and float(2 * j).is_integer()


@dataclass(frozen=True)
class LevelSymmetry:
    """Total angular momentum J and parity (+1 or -1) of a level."""

    J: float
    parity: int

    def __post_init__(self) -> None:
        msgs: list[str] = []
        if not check_angular_momentum(self.J):
            msgs.append(f"J must be a non-negative integer or half-integer, but is {self.J}.")
        if self.parity not in (1, -1):
            msgs.append(f"parity must be +1 or -1, but is {self.parity}.")
        if msgs:
            raise InvalidQuantumNumbersError(self, "\n  ".join(msgs))

    @classmethod
    def from_string(cls, symmetry: str) -> LevelSymmetry:
        """Parse a symmetry like '1/2-' or '0+'."""
        match = re.match(r"^(\d+(?:/2)?)([+-])$", symmetry.strip())
        if match is None:
            raise ValueError(f"Invalid level symmetry {symmetry!r}, expected something like '3/2-' or '0+'.")
        return cls(float(Fraction(match.group(1))), 1 if match.group(2) == "+" else -1)

    def __str__(self) -> str:
        return f"{Fraction(self.J)}{'+' if self.parity == 1 else '-'}"


@dataclass(frozen=True, order=True)
class Shell:
    """Non-relativistic shell (n, l), e.g. 2p."""

    n: int
    l: int

    @classmethod
    def from_string(cls, shell: str) -> Shell:
        match = re.match(r"^(\d+)([a-z])$", shell.strip())
        if match is None or match.group(2) not in L_STR2INT:
            raise ValueError(f"Invalid shell {shell!r}.")
        return cls(int(match.group(1)), L_STR2INT[match.group(2)])

    def __str__(self) -> str:
        return f"{self.n}{L_INT2STR[self.l]}"


@dataclass(frozen=True)
class Configuration:
    """Electron configuration given by the occupation of non-relativistic shells."""

    occupations: dict[Shell, int]

    @classmethod
    def from_string(cls, configuration: str) -> Configuration:
        """Parse a configuration like '1s2 2s2 2p6' or '[Ne] 3s' (without the core notation)."""
        occupations: dict[Shell, int] = {}
        for part in configuration.replace(".", " ").split():
            match = re.match(r"^(\d+)([a-z])(\d*)$", part)
            if match is None or match.group(2) not in L_STR2INT:
                raise ValueError(f"Invalid configuration format: {configuration}.")
            shell = Shell(int(match.group(1)), L_STR2INT[match.group(2)])
            occupations[shell] = occupations.get(shell, 0) + int(match.group(3) or 1)
        return cls(occupations)

    def shell_occupation_difference(self, other: Configuration) -> list[tuple[Shell, int]]:
        """Return all shells, whose occupation differs between self and other, as (shell, self - other)."""
        shells = sorted(set(self.occupations) | set(other.occupations))
        differences = [(shell, self.occupations.get(shell, 0) - other.occupations.get(shell, 0)) for shell in shells]
        return [(shell, diff) for shell, diff in differences if diff != 0]

    def __hash__(self) -> int:
        return hash(tuple(sorted(self.occupations.items())))

    def __str__(self) -> str:
        return " ".join(f"{shell}{occ}" for shell, occ in sorted(self.occupations.items()))


@dataclass(frozen=True)
class Level:
    """Atomic level with index, symmetry and energy (in hartree)."""

    index: int
    J: float
    parity: int
    energy: float
    configuration: Optional[Configuration] = None
    """Leading configuration of the level (only needed for the shell resolved cross sections)."""
    data: Any = field(default=None, compare=False)
    """Backend specific data of the level, e.g. its many-electron basis and mixing coefficients."""

    def __post_init__(self) -> None:
        # validates J and parity
        LevelSymmetry(self.J, self.parity)

    @property
    def symmetry(self) -> LevelSymmetry:
        return LevelSymmetry(self.J, self.parity)


@dataclass(frozen=True)
class Multiplet:
    name: str
    levels: list[Level]


def _match_index(selected: int, index: int) -> bool:
    return selected in (0, index)


@dataclass(frozen=True)
class LineSelection:
    """Selection of (initial, final) level pairs.

    An inactive selection accepts every pair. Index 0 acts as a wildcard in the index pairs.
    """

    active: bool = False
    index_pairs: list[tuple[int, int]] = field(default_factory=list)
    symmetry_pairs: list[tuple[LevelSymmetry, LevelSymmetry]] = field(default_factory=list)

    def select_level_pair(self, initial_level: Level, final_level: Level) -> bool:
        if not self.active:
            return True
        for i_index, f_index in self.index_pairs:
            if _match_index(i_index, initial_level.index) and _match_index(f_index, final_level.index):
                return True
        for i_sym, f_sym in self.symmetry_pairs:
            if i_sym == initial_level.symmetry and f_sym == final_level.symmetry:
                return True
        return False


@dataclass(frozen=True)
class LevelSelection:
    """Selection of single levels by index or symmetry; an inactive selection accepts every level."""

    active: bool = False
    indices: list[int] = field(default_factory=list)
    symmetries: list[LevelSymmetry] = field(default_factory=list)

    def select_level(self, level: Level) -> bool:
        if not self.active:
            return True
        return level.index in self.indices or level.symmetry in self.symmetries
