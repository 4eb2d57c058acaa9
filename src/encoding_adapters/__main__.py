"""Entry point: health-check the configured transcoding provider."""

import logging
import sys

from .config import get_settings
from .errors import ProviderError
from .registry import build_provider

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)

logger = logging.getLogger(__name__)


def main() -> int:
    """Build the provider named on the command line (or in settings) and probe it."""
    settings = get_settings()
    logging.getLogger().setLevel(settings.log_level.upper())

    name = sys.argv[1] if len(sys.argv) > 1 else settings.transcoding_provider
    try:
        provider = build_provider(name, settings)
    except ProviderError as e:
        logger.error(f"Cannot build provider {name}: {e}")
        return 1

    capabilities = provider.capabilities()
    logger.info(
        f"Provider {name}: inputs={sorted(capabilities.input_formats)} "
        f"outputs={sorted(capabilities.output_formats)} "
        f"destinations={sorted(capabilities.destinations)}"
    )

    try:
        provider.healthcheck()
    except Exception as e:
        logger.error(f"Healthcheck for {name} failed: {e}")
        return 1
    finally:
        provider.close()

    logger.info(f"Provider {name} is healthy")
    return 0


if __name__ == "__main__":
    sys.exit(main())
