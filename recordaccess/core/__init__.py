"""
Core domain module.

Contains the exception hierarchy shared by the boundary and application layers.
"""

from recordaccess.core.exceptions import (
    BackendUnavailable,
    MetadataUnavailable,
    RecordAccessError,
    RemoteOperationFailed,
)

__all__ = [
    "BackendUnavailable",
    "MetadataUnavailable",
    "RecordAccessError",
    "RemoteOperationFailed",
]
