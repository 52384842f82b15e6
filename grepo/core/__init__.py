"""Core domain types and logic."""

from .config import Config, ConfigCorrupt, ConfigStore, PersistError, RepoRef
from .errors import ErrorCode
from .result import Err, Ok, Result

__all__ = [
    # config
    "Config",
    "ConfigCorrupt",
    "ConfigStore",
    "PersistError",
    "RepoRef",
    # errors
    "ErrorCode",
    # result
    "Err",
    "Ok",
    "Result",
]
