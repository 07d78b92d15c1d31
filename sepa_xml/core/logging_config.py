"""
SEPA XML - Logging Setup

The library only emits records through module level loggers; applications
embedding it call configure_logging() once at startup.
"""

import logging
import sys
from typing import Optional

from .config import SEPAConfig


LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(config: Optional[SEPAConfig] = None) -> None:
    """Configure root logging from a SEPAConfig."""
    if config is None:
        config = SEPAConfig()

    level = logging.DEBUG if config.debug else getattr(logging, config.log_level.value)

    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        handlers=[logging.StreamHandler(sys.stdout)],
    )
