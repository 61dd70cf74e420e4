# topicsweep/utils/logging_setup.py

import logging
import sys
from typing import Optional

from topicsweep.core.config import settings


def setup_logging(level: Optional[str] = None):
    logger = logging.getLogger()
    logger.setLevel((level or settings.LOG_LEVEL).upper())
    logger.handlers = []

    formatter = logging.Formatter(
        "%(asctime)s - %(levelname)s - %(name)s - %(message)s"
    )

    stream_handler = logging.StreamHandler(sys.stdout)
    stream_handler.setFormatter(formatter)
    logger.addHandler(stream_handler)

    # gensim is chatty at INFO
    logging.getLogger("gensim").setLevel(logging.WARNING)

    logger.info("✅ Logging system initialized")
