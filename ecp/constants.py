"""Constants used throughout the Cassandra properties package.

This module centralizes default values and naming conventions so the
record, the binder and the cluster builder agree on them.
"""

# Connection defaults
DEFAULT_CONTACT_POINTS = "localhost"
DEFAULT_PORT = 9042
DEFAULT_FETCH_SIZE = 5000
DEFAULT_CONNECT_TIMEOUT_MILLIS = 5000
DEFAULT_READ_TIMEOUT_MILLIS = 12000

# Binding
PROPERTY_NAMESPACE = "cassandra"
ENV_PREFIX = "CASSANDRA_"
ENV_FILE = ".env"
CONTACT_POINT_SEPARATOR = ","

# Driver lookup for bare policy class names
POLICIES_MODULE = "cassandra.policies"

# Logging
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
MASKED_VALUE = "******"
