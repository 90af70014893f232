"""Pydantic models for conversion results."""

from __future__ import annotations

from typing import Literal, Union

from pydantic import BaseModel


class ConversionSuccess(BaseModel):
    """A conversion that produced output text."""

    kind: Literal["success"] = "success"
    text: str

    @property
    def valid(self) -> bool:
        return True


class ConversionFailure(BaseModel):
    """A conversion that failed; message is the underlying diagnostic, verbatim."""

    kind: Literal["failure"] = "failure"
    message: str

    @property
    def valid(self) -> bool:
        return False


ConversionResult = Union[ConversionSuccess, ConversionFailure]
