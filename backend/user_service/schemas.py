"""Pydantic request/response schemas used by the API.

Schemas keep API input/output shapes stable. Request fields are optional
on purpose: a missing field is reported by the service as a blank-field
error rather than by FastAPI's own validation.
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import Optional


class UserIn(BaseModel):
    """Plain user payload for the REST endpoints."""
    username: Optional[str] = None
    name: Optional[str] = None
    phone: Optional[str] = None


class Paging(BaseModel):
    """Resolved paging parameters plus the total row count."""
    page: int
    limit: int
    total: int = 0

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


class EnvelopeData(BaseModel):
    """The `data` block carried by envelope responses."""
    username: str = ""
    name: str = ""
    phone: str = ""


class EnvelopeDataIn(BaseModel):
    """The `data` block of an envelope request; null fields count as blank."""
    username: Optional[str] = None
    name: Optional[str] = None
    phone: Optional[str] = None


class EnvelopeIn(BaseModel):
    """Envelope request: `{requestId, requestTime, data: {...}}`."""
    model_config = ConfigDict(populate_by_name=True)

    request_id: Optional[str] = Field(default=None, alias="requestId")
    request_time: Optional[str] = Field(default=None, alias="requestTime")
    data: EnvelopeDataIn = Field(default_factory=EnvelopeDataIn)

    @field_validator("data", mode="before")
    @classmethod
    def _null_data_is_empty(cls, value):
        return {} if value is None else value


class EnvelopeOut(BaseModel):
    """Envelope response returned by every envelope endpoint."""
    model_config = ConfigDict(populate_by_name=True)

    response_id: str = Field(alias="responseId")
    response_time: str = Field(alias="responseTime")
    response_code: str = Field(alias="responseCode")
    response_message: str = Field(alias="responseMessage")
    data: EnvelopeData = Field(default_factory=EnvelopeData)
