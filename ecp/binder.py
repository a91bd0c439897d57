"""Binding of raw configuration values into CassandraProperties.

Keys are matched with relaxed names, so ``keyspaceName``,
``keyspace-name``, ``keyspace_name`` and ``KEYSPACE_NAME`` all bind to the
``keyspace_name`` field. Keys may carry the property namespace
(``cassandra.keyspaceName``); keys under any other namespace are ignored.
"""

import logging
import re
import sys
from typing import Any, Dict, Iterable, Mapping, Optional

from pydantic import ValidationError

from .constants import PROPERTY_NAMESPACE
from .exceptions import PropertyBindingError
from .properties import CassandraProperties

logger = logging.getLogger(__name__)

_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])([A-Z])")


def normalize_property_name(name: str) -> str:
    """Convert a relaxed property name to its field name."""
    name = _CAMEL_BOUNDARY.sub(r"_\1", name.strip())
    return name.replace("-", "_").lower()


def _collect(source: Mapping[str, Any], namespace: str) -> Dict[str, Any]:
    prefix = f"{namespace}."
    fields = CassandraProperties.model_fields
    values: Dict[str, Any] = {}

    for key, value in source.items():
        key = str(key).strip()
        if key.startswith(prefix):
            key = key[len(prefix):]
        elif "." in key:
            logger.debug(f"Ignoring property outside namespace '{namespace}': {key}")
            continue

        field_name = normalize_property_name(key)
        if field_name not in fields:
            logger.warning(f"Ignoring unknown Cassandra property '{key}'")
            continue
        if field_name in values:
            logger.debug(f"Property '{field_name}' bound more than once, last value wins")
        values[field_name] = value

    return values


def bind_properties(
    source: Mapping[str, Any],
    namespace: str = PROPERTY_NAMESPACE,
    env_file: Optional[str] = None,
) -> CassandraProperties:
    """Bind a flat mapping of configuration values into CassandraProperties.

    Values from ``source`` take precedence over ``CASSANDRA_`` environment
    variables, which take precedence over the ``.env`` file and defaults.

    Args:
        source: Mapping of property keys to raw values
        namespace: Property namespace that keys may be prefixed with
        env_file: Alternative ``.env`` file to read instead of the default

    Returns:
        Populated CassandraProperties

    Raises:
        PropertyBindingError: If a value cannot be converted to its field type
    """
    values = _collect(source, namespace)
    logger.debug(f"Binding Cassandra properties: {sorted(values)}")

    kwargs: Dict[str, Any] = dict(values)
    if env_file is not None:
        kwargs["_env_file"] = env_file

    try:
        return CassandraProperties(**kwargs)
    except ValidationError as e:
        fields = [".".join(str(part) for part in error["loc"]) for error in e.errors()]
        logger.debug(f"Failed to bind Cassandra properties {fields}: {e}")
        raise PropertyBindingError(
            f"Invalid Cassandra properties: {', '.join(fields)}", fields=fields
        ) from e


def parse_command_line(
    argv: Iterable[str], namespace: str = PROPERTY_NAMESPACE
) -> Dict[str, str]:
    """Collect ``--<namespace>.<field>=<value>`` arguments.

    Only the ``=`` form carries a value; a bare ``--cassandra.ssl`` binds
    ``"true"``. Other arguments, including positional ones, are ignored.
    """
    prefix = f"--{namespace}."
    values: Dict[str, str] = {}

    for arg in argv:
        if not arg.startswith(prefix):
            continue

        key, sep, value = arg[2:].partition("=")
        values[key] = value if sep else "true"

    return values


def load_properties(
    argv: Optional[Iterable[str]] = None,
    env_file: Optional[str] = None,
    namespace: str = PROPERTY_NAMESPACE,
) -> CassandraProperties:
    """Load properties from the command line, environment and ``.env`` file.

    Command-line arguments override environment variables, which override
    the ``.env`` file, which overrides defaults.
    """
    if argv is None:
        argv = sys.argv[1:]

    overrides = parse_command_line(argv, namespace)
    if overrides:
        logger.info(f"Command line overrides for: {sorted(overrides)}")
    return bind_properties(overrides, namespace=namespace, env_file=env_file)
