import logging
import socket
import ssl
from typing import Any, Dict, Optional

from cassandra import UnsupportedOperation
from cassandra.auth import PlainTextAuthProvider
from cassandra.cluster import EXEC_PROFILE_DEFAULT, Cluster, ExecutionProfile
from cassandra.policies import (HostDistance, LoadBalancingPolicy,
                                ReconnectionPolicy, RetryPolicy)

from .exceptions import ClusterConfigurationError, PolicyResolutionError
from .policies import resolve_consistency_level, resolve_policy_class
from .properties import CassandraProperties, Compression

logger = logging.getLogger(__name__)

MAX_PORT = 65535


class ClusterBuilder:
    """Maps CassandraProperties onto DataStax driver constructs.

    The builder only constructs driver objects. It never connects:
        cluster = ClusterBuilder(properties).build_cluster()
        session = cluster.connect(properties.keyspace_name)
    """

    def __init__(self, properties: CassandraProperties) -> None:
        self.properties = properties

    def build_execution_profile(self) -> ExecutionProfile:
        """Build the default execution profile from query and policy properties.

        Raises:
            ClusterConfigurationError: If a policy or consistency level is invalid
        """
        props = self.properties
        profile_kwargs: Dict[str, Any] = {
            "request_timeout": props.read_timeout_millis / 1000.0,
        }

        load_balancing_policy = self._create_policy(
            props.load_balancing_policy, LoadBalancingPolicy, "load_balancing_policy"
        )
        if load_balancing_policy is not None:
            profile_kwargs["load_balancing_policy"] = load_balancing_policy

        retry_policy = self._create_policy(props.retry_policy, RetryPolicy, "retry_policy")
        if retry_policy is not None:
            profile_kwargs["retry_policy"] = retry_policy

        consistency_level = self._consistency(props.consistency_level, "consistency_level")
        if consistency_level is not None:
            profile_kwargs["consistency_level"] = consistency_level

        serial_consistency_level = self._consistency(
            props.serial_consistency_level, "serial_consistency_level"
        )
        if serial_consistency_level is not None:
            profile_kwargs["serial_consistency_level"] = serial_consistency_level

        try:
            return ExecutionProfile(**profile_kwargs)
        except ValueError as e:
            raise ClusterConfigurationError(f"Invalid execution profile: {e}") from e

    def build_cluster_kwargs(self) -> Dict[str, Any]:
        """Build the keyword arguments for ``Cluster``.

        Returns:
            Dict of keyword arguments accepted by ``cassandra.cluster.Cluster``

        Raises:
            ClusterConfigurationError: If a property cannot be mapped to the driver
        """
        props = self.properties

        contact_points = props.contact_point_list
        if not contact_points:
            raise ClusterConfigurationError("At least one contact point is required")

        port = props.port
        if isinstance(port, bool) or not isinstance(port, int) or not 0 < port <= MAX_PORT:
            raise ClusterConfigurationError(f"Invalid port {port!r}")

        try:
            compression = Compression.parse(props.compression)
        except ValueError as e:
            raise ClusterConfigurationError(str(e)) from e

        cluster_kwargs: Dict[str, Any] = {
            "contact_points": contact_points,
            "port": port,
            "compression": compression.driver_value,
            "connect_timeout": props.connect_timeout_millis / 1000.0,
            "execution_profiles": {EXEC_PROFILE_DEFAULT: self.build_execution_profile()},
        }

        if props.username is not None:
            cluster_kwargs["auth_provider"] = PlainTextAuthProvider(
                username=props.username, password=props.password
            )

        reconnection_policy = self._create_policy(
            props.reconnection_policy, ReconnectionPolicy, "reconnection_policy"
        )
        if reconnection_policy is not None:
            cluster_kwargs["reconnection_policy"] = reconnection_policy

        if props.ssl:
            cluster_kwargs["ssl_context"] = self._create_ssl_context()

        if props.keep_alive is not None:
            cluster_kwargs["sockopts"] = [
                (socket.SOL_SOCKET, socket.SO_KEEPALIVE, 1 if props.keep_alive else 0)
            ]

        return cluster_kwargs

    def build_cluster(self) -> Cluster:
        """Construct a Cluster with socket, policy and pooling options applied.

        The returned cluster is not connected.
        """
        props = self.properties
        cluster_kwargs = self.build_cluster_kwargs()

        logger.info(
            f"Building Cassandra cluster {props.cluster_name or '<unnamed>'} "
            f"for {cluster_kwargs['contact_points']}:{cluster_kwargs['port']}"
        )
        cluster = Cluster(**cluster_kwargs)
        self.apply_pooling_options(cluster)
        return cluster

    def apply_pooling_options(self, cluster: Cluster) -> None:
        """Apply per host distance pooling options to a cluster.

        Options the driver does not support for its protocol version are
        logged and skipped.
        """
        props = self.properties
        settings = [
            ("core_pool_local", cluster.set_core_connections_per_host, HostDistance.LOCAL),
            ("core_pool_remote", cluster.set_core_connections_per_host, HostDistance.REMOTE),
            ("max_pool_local", cluster.set_max_connections_per_host, HostDistance.LOCAL),
            ("max_pool_remote", cluster.set_max_connections_per_host, HostDistance.REMOTE),
            (
                "new_connection_threshold_local",
                cluster.set_max_requests_per_connection,
                HostDistance.LOCAL,
            ),
            (
                "new_connection_threshold_remote",
                cluster.set_max_requests_per_connection,
                HostDistance.REMOTE,
            ),
        ]

        for name, setter, distance in settings:
            value = getattr(props, name)
            if value is None:
                continue
            try:
                setter(distance, value)
                logger.debug(f"Applied pooling option {name}={value}")
            except UnsupportedOperation as e:
                logger.warning(f"Skipping pooling option {name}: {e}")

        for name in ("max_requests_per_connection_local", "max_requests_per_connection_remote"):
            if getattr(props, name) is not None:
                logger.warning(f"Pooling option {name} is not supported by the Python driver")

    def configure_session(self, session: Any) -> Any:
        """Apply session level query options and return the session."""
        session.default_fetch_size = self.properties.fetch_size
        return session

    def _create_policy(self, reference: Any, base: type, name: str) -> Optional[Any]:
        """Instantiate a configured policy class with its no-argument constructor."""
        try:
            policy_class = resolve_policy_class(reference, base)
        except PolicyResolutionError as e:
            raise ClusterConfigurationError(f"Invalid {name}: {e}") from e

        if policy_class is None:
            return None

        try:
            return policy_class()
        except TypeError as e:
            raise ClusterConfigurationError(
                f"Cannot instantiate {name} {policy_class.__name__}: {e}"
            ) from e

    def _consistency(self, value: Any, name: str) -> Optional[int]:
        try:
            return resolve_consistency_level(value)
        except ValueError as e:
            raise ClusterConfigurationError(f"Invalid {name}: {e}") from e

    def _create_ssl_context(self) -> ssl.SSLContext:
        context = ssl.create_default_context()
        # Certificates are verified, host names are not
        context.check_hostname = False
        return context
