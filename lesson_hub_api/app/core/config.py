"""
Simple configuration management.

The ``Settings`` dataclass reads configuration directly from
environment variables.  Defaults are provided for all fields so that
the API can be started locally against a MongoDB server on the default
port without any setup.
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import List


def _as_bool(value: str) -> bool:
    return value.lower() in {"1", "true", "yes"}


@dataclass
class Settings:
    """Application settings loaded from environment variables."""

    project_name: str = os.getenv("PROJECT_NAME", "Lesson Hub API")
    api_version: str = os.getenv("API_VERSION", "1.0.0")
    debug: bool = _as_bool(os.getenv("DEBUG", "false"))
    log_level: str = os.getenv("LOG_LEVEL", "INFO")

    # Optional path of a log file.  When empty, logs go to the console only.
    log_file: str = os.getenv("LOG_FILE", "")

    # Whether the request logger prints JSON request bodies.
    log_request_bodies: bool = _as_bool(os.getenv("LOG_REQUEST_BODIES", "true"))

    # Connection string and database name for MongoDB.  Both are read
    # once at startup; the connection itself is opened by the
    # application's startup hook.
    mongodb_uri: str = os.getenv("MONGODB_URI", "mongodb://localhost:27017")
    database_name: str = os.getenv("DATABASE_NAME", "lessonHub")

    host: str = os.getenv("HOST", "0.0.0.0")
    port: int = int(os.getenv("PORT", "3000"))

    # Directory holding static images.  Lesson images live in the
    # ``lessons`` subdirectory.  Relative paths are resolved against the
    # current working directory.
    images_dir: str = os.getenv("IMAGES_DIR", os.path.join("public", "images"))

    # Comma‑separated list of allowed CORS origins, ``*`` for any.
    cors_origins: str = os.getenv("CORS_ORIGINS", "*")

    @property
    def images_path(self) -> Path:
        return Path(self.images_dir).resolve()

    @property
    def cors_origin_list(self) -> List[str]:
        origins = [origin.strip() for origin in self.cors_origins.split(",")]
        return [origin for origin in origins if origin] or ["*"]


# Instantiate settings once so other modules can import it without
# repeatedly reading environment variables.  Environment variables
# must therefore be set before importing this module.
settings = Settings()
