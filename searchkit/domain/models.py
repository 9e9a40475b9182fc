"""Pydantic models exchanged between the coordinator and its collaborators."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class FetchResult(BaseModel):
    """One page as reported by the fetch capability."""

    model_config = ConfigDict(from_attributes=True)

    items: list[Any]
    total: int | float | None = None

    @field_validator("items", mode="before")
    @classmethod
    def _sequence_only(cls, value):
        # Lax list coercion would also take sets, generators and dict views.
        if not isinstance(value, (list, tuple)):
            raise ValueError("items must be a list or tuple")
        return value

    @field_validator("total", mode="before")
    @classmethod
    def _numbers_only(cls, value):
        # Anything that is not a real number leaves the known total untouched.
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            return None
        return value


class SearchProgress(BaseModel):
    """Merged view of every page fetched so far for one query."""

    model_config = ConfigDict(populate_by_name=True)

    items: list[Any] = Field(default_factory=list)
    total: int | float | None = None
    has_more: bool = Field(default=True, alias="hasMore")


__all__ = ["FetchResult", "SearchProgress"]
