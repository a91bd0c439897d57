"""Configuration properties for Cassandra.

``CassandraProperties`` is a passive holder: defaults are applied when it
is constructed, configuration text is coerced into typed values at that
point, and afterwards fields are plain attributes. Assigning to a field
stores the value as given, without validation.
"""

from enum import Enum
from typing import Any, Dict, List, Optional, Type

from cassandra.policies import (LoadBalancingPolicy, ReconnectionPolicy,
                                RetryPolicy)
from pydantic import ConfigDict, field_validator
from pydantic_settings import BaseSettings

from .constants import (CONTACT_POINT_SEPARATOR, DEFAULT_CONNECT_TIMEOUT_MILLIS,
                        DEFAULT_CONTACT_POINTS, DEFAULT_FETCH_SIZE, DEFAULT_PORT,
                        DEFAULT_READ_TIMEOUT_MILLIS, ENV_FILE, ENV_PREFIX,
                        MASKED_VALUE)
from .exceptions import PolicyResolutionError
from .policies import (consistency_level_name, resolve_consistency_level,
                       resolve_policy_class)


class Compression(str, Enum):
    """Compression supported by the Cassandra binary protocol."""

    NONE = "none"
    SNAPPY = "snappy"
    LZ4 = "lz4"

    @property
    def driver_value(self):
        """Value accepted by the ``compression`` argument of ``Cluster``."""
        if self is Compression.NONE:
            return False
        return self.value

    @classmethod
    def parse(cls, value: Any) -> "Compression":
        """Look up a member by name or value, ignoring case."""
        if isinstance(value, cls):
            return value
        text = str(value).strip()
        for member in cls:
            if text.upper() == member.name or text.lower() == member.value:
                return member
        raise ValueError(
            f"Unknown compression '{value}', expected one of: "
            + ", ".join(member.name for member in cls)
        )


class CassandraProperties(BaseSettings):
    """Configuration properties for Cassandra."""

    model_config = ConfigDict(
        env_prefix=ENV_PREFIX, env_file=ENV_FILE, env_ignore_empty=True, extra="ignore"
    )

    # Cluster identity
    keyspace_name: Optional[str] = None
    cluster_name: Optional[str] = None

    # Connection settings
    contact_points: str = DEFAULT_CONTACT_POINTS
    port: int = DEFAULT_PORT
    username: Optional[str] = None
    password: Optional[str] = None
    compression: Compression = Compression.NONE

    # Policies, resolved to driver classes
    load_balancing_policy: Optional[Type[LoadBalancingPolicy]] = None
    reconnection_policy: Optional[Type[ReconnectionPolicy]] = None
    retry_policy: Optional[Type[RetryPolicy]] = None

    # Query options
    consistency_level: Optional[int] = None
    serial_consistency_level: Optional[int] = None
    fetch_size: int = DEFAULT_FETCH_SIZE

    # Socket options
    connect_timeout_millis: int = DEFAULT_CONNECT_TIMEOUT_MILLIS
    read_timeout_millis: int = DEFAULT_READ_TIMEOUT_MILLIS
    ssl: bool = False
    keep_alive: Optional[bool] = None

    # Pooling options, per host distance
    core_pool_local: Optional[int] = None
    max_pool_local: Optional[int] = None
    core_pool_remote: Optional[int] = None
    max_pool_remote: Optional[int] = None
    new_connection_threshold_local: Optional[int] = None
    new_connection_threshold_remote: Optional[int] = None
    max_requests_per_connection_local: Optional[int] = None
    max_requests_per_connection_remote: Optional[int] = None

    @field_validator("compression", mode="before")
    @classmethod
    def parse_compression(cls, v):
        """Accept compression names in any case."""
        if v is None:
            return Compression.NONE
        return Compression.parse(v)

    @field_validator("consistency_level", "serial_consistency_level", mode="before")
    @classmethod
    def parse_consistency_level(cls, v):
        """Accept consistency level names such as QUORUM or LOCAL_ONE."""
        return resolve_consistency_level(v)

    @field_validator("load_balancing_policy", mode="before")
    @classmethod
    def parse_load_balancing_policy(cls, v):
        return _resolve_policy(v, LoadBalancingPolicy)

    @field_validator("reconnection_policy", mode="before")
    @classmethod
    def parse_reconnection_policy(cls, v):
        return _resolve_policy(v, ReconnectionPolicy)

    @field_validator("retry_policy", mode="before")
    @classmethod
    def parse_retry_policy(cls, v):
        return _resolve_policy(v, RetryPolicy)

    @property
    def contact_point_list(self) -> List[str]:
        """Contact points as a list, with blanks dropped."""
        return [
            point.strip()
            for point in str(self.contact_points).split(CONTACT_POINT_SEPARATOR)
            if point.strip()
        ]

    def summary(self) -> Dict[str, Any]:
        """Return all fields in a form suitable for logging, with the password masked."""
        values: Dict[str, Any] = {}
        for name in type(self).model_fields:
            value = getattr(self, name)
            if name == "password" and value is not None:
                value = MASKED_VALUE
            elif isinstance(value, Compression):
                value = value.name
            elif isinstance(value, type):
                value = f"{value.__module__}.{value.__qualname__}"
            elif name in ("consistency_level", "serial_consistency_level"):
                value = consistency_level_name(value)
            values[name] = value
        return values


def _resolve_policy(value, base):
    # Validators must raise ValueError for pydantic to report the field
    try:
        return resolve_policy_class(value, base)
    except PolicyResolutionError as e:
        raise ValueError(str(e)) from e
