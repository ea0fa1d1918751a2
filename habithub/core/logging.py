# ============================================================================
# FILE: habithub/core/logging.py
# ============================================================================
import logging
from habithub.config import get_settings

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

def setup_logging() -> None:
    """Configure the root logger once per process"""
    settings = get_settings()
    level = logging.DEBUG if settings.DEBUG else getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO)
    logging.basicConfig(level=level, format=LOG_FORMAT)
    # SQL echo stays off unless debugging
    logging.getLogger("sqlalchemy.engine").setLevel(logging.INFO if settings.DEBUG else logging.WARNING)
