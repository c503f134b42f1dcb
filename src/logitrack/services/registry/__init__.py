"""Registry service exports."""

from .results import ErrorKind, RegistryError, RegistryOperationError, Result
from .service import Registry, report_window

__all__ = [
    "Registry",
    "report_window",
    "Result",
    "ErrorKind",
    "RegistryError",
    "RegistryOperationError",
]
