"""Errors raised by :class:`neofeeder.FeederClient` when ``raise_errors`` is on."""
from __future__ import annotations

from typing import Any

from .envelope import DISCONNECTED, EMPTY_DATA, Envelope

__all__ = [
    "FeederError",
    "FeederDisconnected",
    "FeederEmptyData",
    "FeederRemoteError",
    "raise_for_envelope",
]


class FeederError(Exception):
    """Base error; carries the envelope that would have been returned."""

    def __init__(self, envelope: Envelope) -> None:
        super().__init__(f"[{envelope.error_code}] {envelope.error_desc}")
        self.envelope = envelope

    @property
    def error_code(self) -> int:
        return self.envelope.error_code

    @property
    def error_desc(self) -> str:
        return self.envelope.error_desc


class FeederDisconnected(FeederError):
    """Transport failure, non-2xx status or a body that is not a JSON object."""


class FeederEmptyData(FeederError):
    """The feeder answered but returned no data."""


class FeederRemoteError(FeederError):
    """The feeder itself reported an error (e.g. a rejected insert)."""


def raise_for_envelope(envelope: Envelope) -> Any:
    """Return ``envelope.data`` on success, raise the matching error otherwise."""
    if envelope.ok:
        return envelope.data
    if envelope.error_code == DISCONNECTED:
        raise FeederDisconnected(envelope)
    if envelope.error_code == EMPTY_DATA:
        raise FeederEmptyData(envelope)
    raise FeederRemoteError(envelope)
