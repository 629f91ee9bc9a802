# poi_finder/core/logger.py
import sys

from loguru import logger

from poi_finder.core.config import settings

# One stdout sink for the whole app; JSON lines when LOG_JSON is set.
logger.remove()
logger.add(
    sys.stdout,
    format="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
           "<level>{level: <8}</level> | "
           "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - "
           "{message}",
    level=settings.LOG_LEVEL.upper(),
    serialize=settings.LOG_JSON,
    backtrace=True,
    diagnose=settings.ENVIRONMENT == "development",
)

__all__ = ["logger"]
