# noqa: D104
"""Top-level package for neofeeder."""
from __future__ import annotations

__version__ = "0.1.0"
__all__ = ["FeederClient", "FeederSettings", "Envelope", "FeederError"]


def __getattr__(name):  # type: ignore[override]
    if name == "FeederClient":
        from .client import FeederClient

        return FeederClient
    if name == "FeederSettings":
        from .config import FeederSettings

        return FeederSettings
    if name == "Envelope":
        from .envelope import Envelope

        return Envelope
    if name == "FeederError":
        from .exceptions import FeederError

        return FeederError
    raise AttributeError(name)
