"""Configuration management."""

import logging
import os
from pathlib import Path
from typing import Optional

import structlog
from dotenv import dotenv_values
from pydantic import Field
from pydantic_settings import BaseSettings

# Load .env for local runs only for values missing from the environment
BASE_DIR = Path(__file__).resolve().parent.parent
env_file = BASE_DIR / ".env"

if env_file.exists():
    file_env = dotenv_values(env_file)
    for key, value in file_env.items():
        if key not in os.environ and value is not None:
            os.environ[key] = value


class Settings(BaseSettings):
    """Settings pulled from ``VORONOI_*`` environment variables."""

    # Logging
    log_level: str = Field(default="INFO", description="Log level")
    log_format: str = Field(default="json", description="Logging format (json or console)")

    # Numeric policy
    legality_epsilon: float = Field(
        default=0.0, ge=0.0,
        description="Squared-distance slack before an apex counts as inside a circumcircle"
    )
    degeneracy_epsilon: float = Field(
        default=1e-12, ge=0.0,
        description="Circumcenter denominators at or below this fraction of the longest squared edge are degenerate"
    )

    # Field generation
    field_width: int = Field(default=20, ge=2, description="Lattice cells along x")
    field_height: int = Field(default=20, ge=2, description="Lattice cells along y")
    cell_size: float = Field(default=10.0, gt=0, description="Lattice cell size")
    gap: float = Field(default=0.1, ge=0.0, le=0.4, description="Jitter margin as a fraction of a cell")
    seed: int = Field(default=999, description="Seed for jittered fields")

    class Config:
        env_prefix = "VORONOI_"
        extra = "ignore"


settings = Settings()


def configure_logging(level: Optional[str] = None, fmt: Optional[str] = None) -> None:
    """Configure structlog on top of the standard library logger."""
    level = (level or settings.log_level).upper()
    fmt = fmt or settings.log_format

    logging.basicConfig(format="%(message)s", level=getattr(logging, level, logging.INFO))

    if fmt == "console":
        renderer = structlog.dev.ConsoleRenderer()
    else:
        renderer = structlog.processors.JSONRenderer()

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            renderer,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
