"""Pydantic request/response models for the HTTP service."""

from __future__ import annotations

from typing import Optional, Union

from pydantic import BaseModel, Field


class ExtractRequest(BaseModel):
    text: Optional[str] = Field(None, description="Free-form troubleshooting text")


class MatchRecord(BaseModel):
    device: str
    component: Optional[str]
    issue: str
    description: str
    solution: str


class ExtractResponse(BaseModel):
    """Classification result.

    ``matches`` is a list for the exact strategy. For the fuzzy strategy it
    is the single best record, or an empty list when nothing matched.
    ``error`` is only present when the catalog could not be fetched.
    """

    input: str
    matches: Union[MatchRecord, list[MatchRecord]]
    error: Optional[str] = None


class HealthResponse(BaseModel):
    status: str
    timestamp: str
