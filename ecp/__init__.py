"""Easy Cassandra Properties - ECP Package"""

from .binder import bind_properties, load_properties, normalize_property_name, parse_command_line
from .cluster_builder import ClusterBuilder
from .exceptions import (CassandraPropertiesError, ClusterConfigurationError,
                         PolicyResolutionError, PropertyBindingError)
from .policies import resolve_consistency_level, resolve_policy_class
from .properties import CassandraProperties, Compression

__all__ = [
    "bind_properties",
    "load_properties",
    "normalize_property_name",
    "parse_command_line",
    "ClusterBuilder",
    "CassandraPropertiesError",
    "ClusterConfigurationError",
    "PolicyResolutionError",
    "PropertyBindingError",
    "resolve_consistency_level",
    "resolve_policy_class",
    "CassandraProperties",
    "Compression",
]
