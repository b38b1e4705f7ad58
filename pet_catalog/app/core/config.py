"""
Settings for the pet catalog.

Everything is read from the environment once, when this module is
imported, into a :class:`Settings` instance.  Every field has a default
that works for a local checkout: a ``pets.db`` file next to the package
and INFO logging to the console only.
"""

import os
from dataclasses import dataclass


@dataclass
class Settings:
    """Pet catalog settings taken from environment variables."""

    project_name: str = os.getenv("PROJECT_NAME", "Pet Catalog API")
    api_version: str = os.getenv("API_VERSION", "1.0.0")
    debug: bool = os.getenv("DEBUG", "false").lower() in {"1", "true", "yes"}
    log_level: str = os.getenv("LOG_LEVEL", "INFO")

    # Extra log destination; empty means console only.
    log_file: str = os.getenv("LOG_FILE", "")

    # SQLite file with the pets table.  Relative paths are resolved
    # against the package root by ``db.get_database_path``.
    database_url: str = os.getenv("DATABASE_URL", "pets.db")


# Shared instance.  Tests patch its attributes instead of the environment.
settings = Settings()
