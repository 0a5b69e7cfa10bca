"""
Contract Validation Module

Модуль для валидации JSON контрактов снапшотов абсорбции углеводов.
"""

from .validators import (
    CarbStatusValidator,
    ContractValidator,
    SchemaLoader,
    parse_carb_status,
    validate_carb_status,
)

__all__ = [
    # Classes
    "SchemaLoader",
    "ContractValidator",
    "CarbStatusValidator",
    # Functions
    "validate_carb_status",
    "parse_carb_status",
]
