from photoionization.properties.angle_differential import (
    CLOSED_FORM_PARAMETERS,
    NAMED_PARAMETERS,
    AngleDifferentialPoint,
    AngleDifferentialResult,
    calc_angle_differential,
)
from photoionization.properties.cross_section import SENTINEL, calc_angular_beta, calc_cross_section
from photoionization.properties.partial import (
    calc_partial_cross_sections,
    calc_statistical_tensors,
    get_line_kappas,
)
from photoionization.properties.time_delay import TIME_DELAY_STEP, calc_time_delays

__all__ = [
    "CLOSED_FORM_PARAMETERS",
    "NAMED_PARAMETERS",
    "SENTINEL",
    "TIME_DELAY_STEP",
    "AngleDifferentialPoint",
    "AngleDifferentialResult",
    "calc_angle_differential",
    "calc_angular_beta",
    "calc_cross_section",
    "calc_partial_cross_sections",
    "calc_statistical_tensors",
    "calc_time_delays",
    "get_line_kappas",
]
