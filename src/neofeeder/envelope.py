"""neofeeder.envelope

The normalized ``{error_code, error_desc, data}`` result every client call
returns.
"""
from __future__ import annotations

from typing import Any, Dict

from pydantic import BaseModel, ConfigDict, Field, field_validator

__all__ = [
    "Envelope",
    "SUCCESS",
    "EMPTY_DATA",
    "DISCONNECTED",
    "MSG_EMPTY_DATA",
    "MSG_DISCONNECTED",
    "success",
    "failure",
    "disconnected",
    "empty_data",
]

SUCCESS = 0
EMPTY_DATA = 204
DISCONNECTED = 404

MSG_EMPTY_DATA = "empty data from feeder"
MSG_DISCONNECTED = "disconnected from feeder"


class Envelope(BaseModel):
    """Result of a feeder call.

    Extra keys are kept so a remote mutation response that already reports
    its own ``error_code`` survives unchanged.
    """

    model_config = ConfigDict(extra="allow", frozen=True)

    error_code: int = Field(..., description="0 on success, otherwise an error code")
    error_desc: str = Field(default="", description="Empty on success")
    data: Any = Field(default=None, description="Raw `data` from the feeder")

    @field_validator("error_desc", mode="before")
    @classmethod
    def _desc_none_to_empty(cls, v: Any) -> Any:
        return "" if v is None else v

    @property
    def ok(self) -> bool:
        return self.error_code == SUCCESS

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump()


def success(data: Any) -> Envelope:
    return Envelope(error_code=SUCCESS, error_desc="", data=data)


def failure(code: int, message: str) -> Envelope:
    return Envelope(error_code=code, error_desc=message, data=None)


def disconnected() -> Envelope:
    return failure(DISCONNECTED, MSG_DISCONNECTED)


def empty_data() -> Envelope:
    return failure(EMPTY_DATA, MSG_EMPTY_DATA)
