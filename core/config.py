"""Runtime settings for the analysis gateway."""
from __future__ import annotations

import os
from typing import Mapping, Optional

from pydantic import BaseModel, Field

from core.presets import DEFAULT_GATEWAY_URL, DEFAULT_MODEL, DEFAULT_TIMEOUT_S

# Checked in order; the first non-empty value wins.
API_KEY_VARS = ("PROPERTYIQ_API_KEY", "LOVABLE_API_KEY")


class Settings(BaseModel):
    api_key: Optional[str] = Field(default=None, repr=False)
    gateway_url: str = DEFAULT_GATEWAY_URL
    model: str = DEFAULT_MODEL
    timeout: float = Field(default=DEFAULT_TIMEOUT_S, gt=0)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        """Read settings from ``environ`` (defaults to ``os.environ``)."""
        env = os.environ if environ is None else environ
        api_key = next((env[k] for k in API_KEY_VARS if env.get(k)), None)
        data = {"api_key": api_key}
        if env.get("PROPERTYIQ_GATEWAY_URL"):
            data["gateway_url"] = env["PROPERTYIQ_GATEWAY_URL"]
        if env.get("PROPERTYIQ_MODEL"):
            data["model"] = env["PROPERTYIQ_MODEL"]
        if env.get("PROPERTYIQ_TIMEOUT"):
            data["timeout"] = env["PROPERTYIQ_TIMEOUT"]
        return cls(**data)
