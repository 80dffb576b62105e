from photoionization.angular.kappa import (
    allowed_kappa_symmetries,
    allowed_multipole_symmetries,
    kappa_from_lj,
    kappa_to_j,
    kappa_to_l,
)
from photoionization.angular.utils import (
    bracket,
    calc_wigner_3j,
    calc_wigner_6j,
    calc_wigner_9j,
    calc_wigner_small_d,
    check_triangular,
    clebsch_gordan,
    minus_one_pow,
)

__all__ = [
    "allowed_kappa_symmetries",
    "allowed_multipole_symmetries",
    "bracket",
    "calc_wigner_3j",
    "calc_wigner_6j",
    "calc_wigner_9j",
    "calc_wigner_small_d",
    "check_triangular",
    "clebsch_gordan",
    "kappa_from_lj",
    "kappa_to_j",
    "kappa_to_l",
    "minus_one_pow",
]
