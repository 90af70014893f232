"""Request / response models for the HTTP API.

Input fields accept any JSON value at the schema level so that a missing or
non-string field is answered with the API's own 400 error body instead of a
validation error.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class JsonRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    text: Any = Field(default=None, alias="json")


class FormatRequest(JsonRequest):
    indent: int | str = 2


class YamlRequest(BaseModel):
    yaml: Any = None


class MarkdownRequest(BaseModel):
    markdown: Any = None


class HistoryRequest(BaseModel):
    content: Any = None
    formatted: str | None = None


class FormattedResponse(BaseModel):
    formatted: str
    valid: bool = True


class ResultResponse(BaseModel):
    result: str
    valid: bool = True


class ErrorResponse(BaseModel):
    error: str
    valid: bool | None = None
