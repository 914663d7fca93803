import os
import logging
from typing import Optional


def setup_logging(level: Optional[str] = None, force: bool = False):
    """
    Configure the root logger once for the API process.

    LOG_LEVEL from the environment is used when no level is passed.
    """
    level_name = (level or os.getenv("LOG_LEVEL", "INFO")).upper()

    logging.basicConfig(
        level=getattr(logging, level_name, logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
        force=force,
    )
