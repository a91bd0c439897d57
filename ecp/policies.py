"""Resolution of driver policy and consistency references.

Configuration sources carry policies and consistency levels as text.
These helpers turn that text into the objects the driver expects.
"""

import importlib
import inspect
import logging
from typing import Any, Optional, Type

from cassandra import ConsistencyLevel

from .constants import POLICIES_MODULE
from .exceptions import PolicyResolutionError

logger = logging.getLogger(__name__)


def _import_attribute(path: str) -> Any:
    """Import ``module.attr`` or ``module:attr``."""
    if ":" in path:
        module_name, _, attr_name = path.partition(":")
    else:
        module_name, _, attr_name = path.rpartition(".")

    if not module_name or not attr_name:
        raise PolicyResolutionError(f"Invalid policy reference '{path}'")

    try:
        module = importlib.import_module(module_name)
    except ImportError as e:
        raise PolicyResolutionError(
            f"Cannot import module '{module_name}' for policy '{path}': {e}"
        ) from e

    try:
        return getattr(module, attr_name)
    except AttributeError as e:
        raise PolicyResolutionError(
            f"Module '{module_name}' has no attribute '{attr_name}'"
        ) from e


def resolve_policy_class(reference: Any, base: Type) -> Optional[Type]:
    """Resolve a policy reference into a policy class.

    Args:
        reference: A class, a bare class name from ``cassandra.policies``
            (e.g. ``"RoundRobinPolicy"``) or a dotted import path
            (``"cassandra.policies.RoundRobinPolicy"``,
            ``"myapp.policies:CustomRetryPolicy"``). ``None`` and blank
            strings resolve to ``None``.
        base: The driver base class the policy must derive from.

    Returns:
        The resolved class, or None when no policy is configured.

    Raises:
        PolicyResolutionError: If the reference cannot be imported or is not
            a subclass of ``base``.
    """
    if reference is None:
        return None

    if isinstance(reference, str):
        name = reference.strip()
        if not name:
            return None
        if "." in name or ":" in name:
            resolved = _import_attribute(name)
        else:
            resolved = _import_attribute(f"{POLICIES_MODULE}.{name}")
        logger.debug(f"Resolved policy reference '{name}' to {resolved!r}")
    else:
        resolved = reference

    if not inspect.isclass(resolved) or not issubclass(resolved, base):
        raise PolicyResolutionError(
            f"{reference!r} is not a subclass of {base.__name__}"
        )
    return resolved


def resolve_consistency_level(value: Any) -> Optional[int]:
    """Resolve a consistency level name or value into a driver ConsistencyLevel value.

    Names are matched case-insensitively (``"quorum"``, ``"LOCAL_ONE"``);
    integers and numeric strings must be known ConsistencyLevel values.
    """
    if value is None:
        return None

    if isinstance(value, bool):
        raise ValueError(f"Invalid consistency level {value!r}")

    if isinstance(value, str):
        name = value.strip()
        if not name:
            return None
        if name.isdigit():
            value = int(name)
        else:
            try:
                return ConsistencyLevel.name_to_value[name.upper()]
            except KeyError:
                valid = ", ".join(sorted(ConsistencyLevel.name_to_value))
                raise ValueError(
                    f"Unknown consistency level '{name}', expected one of: {valid}"
                ) from None

    if isinstance(value, int) and value in ConsistencyLevel.value_to_name:
        return value
    raise ValueError(f"Invalid consistency level {value!r}")


def consistency_level_name(value: Optional[int]) -> Optional[str]:
    """Return the driver name of a consistency level value, e.g. ``"QUORUM"``."""
    if value is None:
        return None
    return ConsistencyLevel.value_to_name.get(value, str(value))
