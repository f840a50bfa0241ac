import logging
from typing import Optional

LOG_FORMAT = "[%(asctime)s] [%(levelname)s] [%(name)s] %(message)s"
TAROKKA_LOGGER = "src.core.tarokka"


def _level(name: Optional[str], default: int = logging.INFO) -> int:
    if not name:
        return default
    value = logging.getLevelName(name.upper())
    return value if isinstance(value, int) else default


def setup_logging(level: str = "INFO", tarokka_level: Optional[str] = None):
    """Root logging + optional separate level for the tarokka core.

    tarokka_level="DEBUG" surfaces per-card fallback decisions without
    turning on debug output for uvicorn/fastapi.
    """
    root_level = _level(level)
    logging.basicConfig(
        level=root_level,
        format=LOG_FORMAT,
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    logging.getLogger(TAROKKA_LOGGER).setLevel(_level(tarokka_level, root_level))


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
