"""Custom exceptions for the Cassandra properties package.

The properties record itself never raises; these are raised by the
binder and the cluster builder that sit on either side of it.
"""

from typing import Iterable, Optional


class CassandraPropertiesError(Exception):
    """Base exception for all Cassandra properties errors."""

    pass


class PropertyBindingError(CassandraPropertiesError):
    """Raised when raw configuration values cannot be bound to properties."""

    def __init__(self, message: str, fields: Optional[Iterable[str]] = None) -> None:
        super().__init__(message)
        self.fields = list(fields or [])


class PolicyResolutionError(CassandraPropertiesError):
    """Raised when a policy reference cannot be resolved to a driver policy class."""

    pass


class ClusterConfigurationError(CassandraPropertiesError):
    """Raised when properties cannot be mapped onto driver constructs."""

    pass
