from photoionization import angular, properties
from photoionization.amplitude import InvalidAmplitudeKindError, calc_transition_amplitude
from photoionization.channels import Channel, enumerate_channels
from photoionization.em import E1, E2, E3, M1, M2, EmProperty, Multipole
from photoionization.engine import compute_amplitudes_properties, compute_lines
from photoionization.extract import (
    ExtrapolationError,
    ShellAssignmentError,
    extract_cross_section,
    extract_cross_section_for_shell,
    extract_lines,
    extract_photon_energies,
    get_line_kappas,
    interpolate_cross_section,
)
from photoionization.levels import (
    Configuration,
    InvalidQuantumNumbersError,
    Level,
    LevelSelection,
    LevelSymmetry,
    LineSelection,
    Multiplet,
    Shell,
)
from photoionization.lines import Line, determine_lines
from photoionization.providers import (
    Backend,
    ContinuumLevel,
    ContinuumOrbitalProvider,
    ContinuumSettings,
    LevelOperations,
    PassThroughLevelOperations,
    RadiativeAmplitudeEvaluator,
)
from photoionization.settings import Context, Settings, Stokes, get_default_context
from photoionization.units import ureg

__all__ = [
    "E1",
    "E2",
    "E3",
    "M1",
    "M2",
    "Backend",
    "Channel",
    "Configuration",
    "Context",
    "ContinuumLevel",
    "ContinuumOrbitalProvider",
    "ContinuumSettings",
    "EmProperty",
    "ExtrapolationError",
    "InvalidAmplitudeKindError",
    "InvalidQuantumNumbersError",
    "Level",
    "LevelOperations",
    "LevelSelection",
    "LevelSymmetry",
    "Line",
    "LineSelection",
    "Multiplet",
    "Multipole",
    "PassThroughLevelOperations",
    "RadiativeAmplitudeEvaluator",
    "Settings",
    "Shell",
    "ShellAssignmentError",
    "Stokes",
    "angular",
    "calc_transition_amplitude",
    "compute_amplitudes_properties",
    "compute_lines",
    "determine_lines",
    "enumerate_channels",
    "extract_cross_section",
    "extract_cross_section_for_shell",
    "extract_lines",
    "extract_photon_energies",
    "get_default_context",
    "get_line_kappas",
    "interpolate_cross_section",
    "properties",
    "ureg",
]


__version__ = "0.1.0"
