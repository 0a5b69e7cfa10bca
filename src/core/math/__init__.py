"""
Core math modules

Математические примитивы: численные защиты и модели абсорбции углеводов.
"""

# Numerical Safeguards
from src.core.math.numerical_safeguards import (
    # Epsilon constants
    EPS_DURATION_SEC,
    EPS_FLOAT_COMPARE_ABS,
    EPS_FLOAT_COMPARE_REL,
    EPS_MASS_G,
    # Float checks
    is_close,
    is_valid_float,
    is_zero,
    # Utilities
    clamp,
    # Validation
    validate_non_negative,
    validate_positive,
)

# Absorption Models
from src.core.math.absorption_models import (
    PIECEWISE_PERCENT_END_OF_RISE,
    PIECEWISE_PERCENT_START_OF_FALL,
    PIECEWISE_SCALE,
    AbsorptionModel,
    AbsorptionModelName,
    LinearAbsorption,
    ParabolicAbsorption,
    PiecewiseLinearAbsorption,
    get_absorption_model,
)

__all__ = [
    # Numerical Safeguards — Epsilon constants
    "EPS_DURATION_SEC",
    "EPS_FLOAT_COMPARE_ABS",
    "EPS_FLOAT_COMPARE_REL",
    "EPS_MASS_G",
    # Numerical Safeguards — Float checks
    "is_close",
    "is_valid_float",
    "is_zero",
    # Numerical Safeguards — Utilities
    "clamp",
    # Numerical Safeguards — Validation
    "validate_non_negative",
    "validate_positive",
    # Absorption Models
    "PIECEWISE_PERCENT_END_OF_RISE",
    "PIECEWISE_PERCENT_START_OF_FALL",
    "PIECEWISE_SCALE",
    "AbsorptionModel",
    "AbsorptionModelName",
    "LinearAbsorption",
    "ParabolicAbsorption",
    "PiecewiseLinearAbsorption",
    "get_absorption_model",
]
