"""Value types shared across the sorter."""

from .result import Result, Success, Failure

__all__ = [
    "Result",
    "Success",
    "Failure",
]
