"""neofeeder.config

Connection settings for a feeder instance. The client only ever receives an
explicit :class:`FeederSettings`; reading ``.env`` files and the environment
happens here and nowhere else.
"""
from __future__ import annotations

import os
from typing import Optional, Union
from pathlib import Path

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field

__all__ = ["FeederSettings", "DEFAULT_TIMEOUT", "ENV_PREFIX"]

DEFAULT_TIMEOUT = 15
ENV_PREFIX = "NEOFEEDER_"


class FeederSettings(BaseModel):
    """Configuration options for a NeoFeeder endpoint."""

    model_config = ConfigDict(frozen=True)

    url: str = Field(
        ...,
        min_length=1,
        description="Full web-service URL, e.g. http://host:3003/ws/live2.php",
    )
    username: str = Field(
        default="",
        description="Feeder account username",
    )
    password: str = Field(
        default="",
        description="Feeder account password",
    )
    timeout: int = Field(
        default=DEFAULT_TIMEOUT,
        gt=0,
        description="Seconds to wait for each HTTP request (token and main call)",
    )

    @classmethod
    def from_env(
        cls,
        prefix: str = ENV_PREFIX,
        env_file: Optional[Union[str, Path]] = None,
        **overrides,
    ) -> "FeederSettings":
        """Build settings from ``<prefix>URL``/``USERNAME``/``PASSWORD``/``TIMEOUT``.

        A ``.env`` file is loaded first (``env_file`` or the nearest one);
        variables already set in the environment win. Keyword overrides that
        are not ``None`` win over both.
        """
        load_dotenv(dotenv_path=env_file)

        values = {}
        for name in ("url", "username", "password", "timeout"):
            raw = os.getenv(f"{prefix}{name.upper()}")
            if raw is not None and raw != "":
                values[name] = raw
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)
