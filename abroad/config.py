"""Settings loaded from the environment (and a local .env file)."""

import logging
import os
from pathlib import Path

from dotenv import load_dotenv
from pydantic import BaseModel

from abroad.models.session import DEFAULT_CARBON_GOAL

logger = logging.getLogger(__name__)

ENV_DATA_DIR = "ABROAD_DATA_DIR"
ENV_CARBON_GOAL = "ABROAD_CARBON_GOAL"
ENV_LOG_LEVEL = "ABROAD_LOG_LEVEL"

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


class Settings(BaseModel):
    data_dir: Path = Path("data")
    user_carbon_goal: float = DEFAULT_CARBON_GOAL
    log_level: str = "INFO"


def _read_carbon_goal(raw: str) -> float:
    if not raw:
        return DEFAULT_CARBON_GOAL
    try:
        goal = float(raw)
    except ValueError:
        logger.warning("Ignoring %s=%r: not a number", ENV_CARBON_GOAL, raw)
        return DEFAULT_CARBON_GOAL
    if goal <= 0:
        logger.warning("Ignoring %s=%r: must be positive", ENV_CARBON_GOAL, raw)
        return DEFAULT_CARBON_GOAL
    return goal


def load_settings(dotenv: bool = True) -> Settings:
    """Build settings from environment variables, reading .env first."""
    if dotenv:
        load_dotenv()
    return Settings(
        data_dir=Path(os.getenv(ENV_DATA_DIR, "") or "data"),
        user_carbon_goal=_read_carbon_goal(os.getenv(ENV_CARBON_GOAL, "")),
        log_level=(os.getenv(ENV_LOG_LEVEL, "") or "INFO").upper(),
    )


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(level=getattr(logging, level.upper(), logging.INFO), format=LOG_FORMAT)
