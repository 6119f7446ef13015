"""Run execution domain exports."""

from .conversion_run_use_case import ConversionRunError, execute_conversion_run
from .run_contracts import ConversionOutcome, ConversionRequest

__all__ = [
    "ConversionOutcome",
    "ConversionRequest",
    "ConversionRunError",
    "execute_conversion_run",
]
