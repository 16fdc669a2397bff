import sys
from functools import lru_cache

from loguru import logger

from common.settings import get_settings


@lru_cache(maxsize=1)
def setup_logger():
    """Replaces loguru's default sink with one honouring LOG_LEVEL / LOG_JSON."""
    settings = get_settings()
    logger.remove()
    logger.add(
        sys.stderr,
        level=settings.log_level,
        serialize=settings.log_json,
        backtrace=False,
    )
    return logger
