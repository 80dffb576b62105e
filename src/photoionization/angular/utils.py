from __future__ import annotations

import math
from functools import lru_cache, wraps
from typing import TYPE_CHECKING, Callable, TypeVar

import numpy as np
from sympy import Integer
from sympy.physics.wigner import (
    wigner_3j as sympy_wigner_3j,
    wigner_6j as sympy_wigner_6j,
    wigner_9j as sympy_wigner_9j,
)

if TYPE_CHECKING:
    from typing_extensions import ParamSpec

    P = ParamSpec("P")
    R = TypeVar("R")

    def lru_cache(maxsize: int) -> Callable[[Callable[P, R]], Callable[P, R]]: ...  # type: ignore [no-redef]


def sympify_args(func: Callable[P, R]) -> Callable[P, R]:
    """Check that quantum numbers are valid and convert to sympy.Integer (and half-integer)."""

    def check_arg(arg: float) -> Integer:
        arg = float(arg)
        if arg.is_integer():
            return Integer(int(arg))
        if (arg * 2).is_integer():
            return Integer(int(arg * 2)) / Integer(2)
        raise ValueError(f"Invalid input to {func.__name__}: {arg}.")

    @wraps(func)
    def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
        _args = [check_arg(arg) for arg in args]  # type: ignore[arg-type]
        _kwargs = {key: check_arg(value) for key, value in kwargs.items()}  # type: ignore[arg-type]
        return func(*_args, **_kwargs)

    return wrapper


def is_integer(x: float) -> bool:
    return float(x).is_integer()


def calc_wigner_3j(j1: float, j2: float, j3: float, m1: float, m2: float, m3: float) -> float:
    """Calculate the Wigner 3j symbol.

    Selection-rule violations (triangle, projection sum, |m| > j or non-integer j - m)
    give 0 instead of an exception.
    """
    if m1 + m2 + m3 != 0 or not check_triangular(j1, j2, j3):
        return 0.0
    for j, m in ((j1, m1), (j2, m2), (j3, m3)):
        if abs(m) > j or not is_integer(j - m):
            return 0.0

    if not j1 <= j2 <= j3:  # better use of caching
        args_nd = np.array([j1, j2, j3, m1, m2, m3])
        inds = np.argsort(args_nd[:3])
        wigner = calc_wigner_3j(*args_nd[:3][inds], *args_nd[3:][inds])
        if (inds[1] - inds[0]) in [1, -2]:
            return wigner
        return minus_one_pow(j1 + j2 + j3) * wigner

    if m3 < 0 or (m3 == 0 and m2 < 0):  # better use of caching
        return minus_one_pow(j1 + j2 + j3) * calc_wigner_3j(j1, j2, j3, -m1, -m2, -m3)

    return _calc_wigner_3j(j1, j2, j3, m1, m2, m3)


@lru_cache(maxsize=10_000)
@sympify_args
def _calc_wigner_3j(j1: float, j2: float, j3: float, m1: float, m2: float, m3: float) -> float:
    return float(sympy_wigner_3j(j1, j2, j3, m1, m2, m3).evalf())


def calc_wigner_6j(j1: float, j2: float, j3: float, j4: float, j5: float, j6: float) -> float:
    """Calculate the Wigner 6j symbol {j1 j2 j3; j4 j5 j6}, which is 0 unless all four triads are valid."""
    if not (
        check_triangular(j1, j2, j3)
        and check_triangular(j1, j5, j6)
        and check_triangular(j4, j2, j6)
        and check_triangular(j4, j5, j3)
    ):
        return 0.0

    if not j1 <= j4:  # better use of caching
        return calc_wigner_6j(j4, j2, j6, j1, j5, j3)

    if not j2 <= j5:  # better use of caching
        return calc_wigner_6j(j1, j5, j6, j4, j2, j3)

    if not j1 <= j2 <= j3:  # better use of caching
        args_nd = np.array([j1, j2, j3, j4, j5, j6])
        inds = np.argsort(args_nd[:3])
        return calc_wigner_6j(*args_nd[:3][inds], *args_nd[3:][inds])

    return _calc_wigner_6j(j1, j2, j3, j4, j5, j6)


@lru_cache(maxsize=10_000)
@sympify_args
def _calc_wigner_6j(j1: float, j2: float, j3: float, j4: float, j5: float, j6: float) -> float:
    return float(sympy_wigner_6j(j1, j2, j3, j4, j5, j6).evalf())


def calc_wigner_9j(
    j1: float, j2: float, j3: float, j4: float, j5: float, j6: float, j7: float, j8: float, j9: float
) -> float:
    """Calculate the Wigner 9j symbol, which is 0 unless every row and column forms a valid triad."""
    triads = [(j1, j2, j3), (j4, j5, j6), (j7, j8, j9), (j1, j4, j7), (j2, j5, j8), (j3, j6, j9)]
    if not all(check_triangular(*triad) for triad in triads):
        return 0.0
    return _calc_wigner_9j(j1, j2, j3, j4, j5, j6, j7, j8, j9)


@lru_cache(maxsize=10_000)
@sympify_args
def _calc_wigner_9j(
    j1: float, j2: float, j3: float, j4: float, j5: float, j6: float, j7: float, j8: float, j9: float
) -> float:
    return float(sympy_wigner_9j(j1, j2, j3, j4, j5, j6, j7, j8, j9).evalf())


def clebsch_gordan(j1: float, m1: float, j2: float, m2: float, j: float, m: float) -> float:
    """Calculate the Clebsch-Gordan coefficient <j1 m1, j2 m2 | j m>.

    .. math::
        \\langle j_1 m_1, j_2 m_2 | j m \\rangle = (-1)^{j_1 - j_2 + m} \\sqrt{2j + 1}
        \\begin{pmatrix} j_1 & j_2 & j \\\\ m_1 & m_2 & -m \\end{pmatrix}

    """
    wigner_3j = calc_wigner_3j(j1, j2, j, m1, m2, -m)
    if wigner_3j == 0:
        return 0.0
    return minus_one_pow(j1 - j2 + m) * math.sqrt(2 * j + 1) * wigner_3j


def calc_wigner_small_d(j: float, m_prime: float, m: float, beta: float) -> float:
    """Calculate the Wigner (small) d-matrix element d^j_{m' m}(beta).

    Uses Wigner's explicit sum formula (Morrison and Parker 1987)

    .. math::
        d^j_{m'm}(\\beta) = \\sqrt{(j+m')!(j-m')!(j+m)!(j-m)!}
        \\sum_s \\frac{(-1)^{m'-m+s} \\cos(\\beta/2)^{2j+m-m'-2s} \\sin(\\beta/2)^{m'-m+2s}}
        {(j+m-s)! s! (m'-m+s)! (j-m'-s)!}

    Args:
        j: Angular momentum (integer or half-integer).
        m_prime: Projection of the final state.
        m: Projection of the initial state.
        beta: Rotation angle in radians.

    Returns:
        The value of d^j_{m' m}(beta), 0 if the projections are not allowed for j.

    """
    if abs(m_prime) > j or abs(m) > j or not is_integer(j - m) or not is_integer(j - m_prime):
        return 0.0
    jpm, jmm = round(j + m), round(j - m)
    jpmp, jmmp = round(j + m_prime), round(j - m_prime)
    dm = round(m_prime - m)

    cos_half, sin_half = math.cos(beta / 2), math.sin(beta / 2)
    prefactor = math.sqrt(
        math.factorial(jpmp) * math.factorial(jmmp) * math.factorial(jpm) * math.factorial(jmm)
    )
    value = 0.0
    for s in range(max(0, -dm), min(jpm, jmmp) + 1):
        numerator = minus_one_pow(dm + s) * cos_half ** (jpm + jmmp - 2 * s) * sin_half ** (dm + 2 * s)
        denominator = math.factorial(jpm - s) * math.factorial(s) * math.factorial(dm + s) * math.factorial(jmmp - s)
        value += numerator / denominator
    return prefactor * value


def bracket(*j_values: float) -> float:
    """Return the product of (2j + 1) over all given angular momenta."""
    return math.prod(2 * j + 1 for j in j_values)


def minus_one_pow(n: float) -> int:
    if n % 2 == 0:
        return 1
    if n % 2 == 1:
        return -1
    raise ValueError(f"Invalid input {n}.")


def check_triangular(j1: float, j2: float, j3: float) -> bool:
    """Check the triangle rule |j1 - j2| <= j3 <= j1 + j2 together with an integer sum j1 + j2 + j3."""
    return abs(j1 - j2) <= j3 <= j1 + j2 and is_integer(j1 + j2 + j3)
