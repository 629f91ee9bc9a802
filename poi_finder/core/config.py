# poi_finder/core/config.py
from typing import List, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables (.env file).
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
    )

    APP_NAME: str = "Nearest POI Finder"
    APP_VERSION: str = "0.1.0"
    ENVIRONMENT: str = "development"
    LOG_LEVEL: str = "INFO"
    LOG_JSON: bool = False

    # Google Maps Platform key (Places + Routes). Without it the static
    # provider is used and realistic directions are disabled.
    MAPS_API_KEY: Optional[str] = None

    PLACES_TEXT_QUERY: str = "McDonald's"
    PLACES_LANGUAGE: str = "pt-BR"
    PLACES_MAX_RESULTS: int = 10
    # Tried in order until the lookup returns something
    PLACES_SEARCH_RADII_M: List[float] = [5_000.0, 10_000.0, 20_000.0]
    # JSON list of {id, name, lat, lng, address} for offline use
    PLACES_FILE: Optional[str] = None

    # Default user -> candidate edge radius (km); None keeps every candidate
    GRAPH_RADIUS_KM: Optional[float] = None

    AVERAGE_SPEED_KMH: float = 40.0
    USE_DIRECTIONS: bool = True
    HTTP_TIMEOUT_S: float = 10.0

    # uvicorn bind address for the `poi-finder` script
    HOST: str = "127.0.0.1"
    PORT: int = 8000


settings = Settings()
