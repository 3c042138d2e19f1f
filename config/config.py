from __future__ import annotations

import os
from typing import Literal

from dotenv import find_dotenv, load_dotenv
from pydantic import BaseModel, ConfigDict, Field


env_override = os.getenv("PLAN_CONTEXT_ENV_PATH")
if env_override and os.path.exists(env_override):
    load_dotenv(env_override, override=True)
else:
    # Otherwise, find the nearest .env (project root)
    found = find_dotenv(filename=".env", usecwd=True)
    if found:
        load_dotenv(found, override=False)


class Settings(BaseModel):
    # env-derived defaults go through the same checks as explicit values
    model_config = ConfigDict(validate_default=True)

    # Applied when activate/extend omit an explicit timeout (10 minutes)
    default_timeout_sec: float = Field(
        default=float(os.getenv("PLAN_CONTEXT_DEFAULT_TIMEOUT_SEC", 10 * 60)),
        gt=0,
    )
    # Period between automatic sweeps (5 minutes)
    sweep_interval_sec: float = Field(
        default=float(os.getenv("PLAN_CONTEXT_SWEEP_INTERVAL_SEC", 5 * 60)),
        gt=0,
    )

    log_level: Literal["TRACE", "DEBUG", "INFO", "WARNING", "ERROR"] = os.getenv(  # type: ignore[assignment]
        "PLAN_CONTEXT_LOG_LEVEL", "INFO"
    ).upper()


settings = Settings()
