"""Settings from environment variables; loads .env locally via python-dotenv."""

from __future__ import annotations

import logging
import os

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

# Load .env only when present (e.g. local dev); does not override existing env
load_dotenv()

SOLVERS = ("greedy", "cp-sat")


class Settings(BaseModel):
    log_level: str = Field(default="INFO", description="Root log level")
    cors_origins: list[str] = Field(default_factory=lambda: ["*"])
    combination_solver: str = Field(default="greedy", description="greedy | cp-sat")
    solver_time_limit: float = Field(default=5.0, gt=0, description="CP-SAT time limit in seconds")

    @field_validator("log_level")
    @classmethod
    def _upper_level(cls, value: str) -> str:
        return value.strip().upper() or "INFO"

    @field_validator("combination_solver")
    @classmethod
    def _known_solver(cls, value: str) -> str:
        value = value.strip().lower()
        if value not in SOLVERS:
            raise ValueError(f"Unknown solver '{value}'. Valid: {list(SOLVERS)}")
        return value


def get_settings() -> Settings:
    """Build settings from the current environment."""
    origins = os.getenv("PACKING_CORS_ORIGINS", "*")
    return Settings(
        log_level=os.getenv("PACKING_LOG_LEVEL", "INFO"),
        cors_origins=[o.strip() for o in origins.split(",") if o.strip()],
        combination_solver=os.getenv("PACKING_COMBINATION_SOLVER", "greedy"),
        solver_time_limit=float(os.getenv("PACKING_SOLVER_TIME_LIMIT", "5.0")),
    )


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
