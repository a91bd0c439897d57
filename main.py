import json
import logging
import sys

from ecp.binder import load_properties
from ecp.constants import LOG_FORMAT
from ecp.exceptions import PropertyBindingError

# Configure logging
logging.basicConfig(level=logging.INFO, format=LOG_FORMAT)
logger = logging.getLogger(__name__)


def main(argv=None) -> int:
    """Print the effective Cassandra properties as JSON."""
    logger.info("Loading Cassandra properties")

    try:
        properties = load_properties(argv)
    except PropertyBindingError as e:
        logger.error(f"Invalid configuration: {e}")
        return 2

    summary = properties.summary()
    logger.info(
        f"Cassandra contact points {properties.contact_point_list} on port {properties.port}"
    )
    print(json.dumps(summary, indent=2, sort_keys=True))
    return 0


if __name__ == "__main__":
    sys.exit(main())
