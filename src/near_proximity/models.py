"""Pydantic models for proximity window requests and responses."""

from __future__ import annotations

from typing import Annotated

from pydantic import BaseModel, Field, NonNegativeInt, field_validator, model_validator

from near_proximity.proximity import near_proximity


PositionList = Annotated[list[NonNegativeInt], Field(description="Ascending positions of one keyword")]


class WindowsRequest(BaseModel):
    """Positions of each query keyword within a single document.

    Fields:
        keywords: One ascending position list per keyword, in query order
        terms: Optional display names, one per keyword
    """

    keywords: list[PositionList] = Field(default_factory=list, description="Position lists, one per keyword")
    terms: list[str] | None = Field(default=None, description="Optional term names, one per keyword")

    @field_validator("keywords")
    @classmethod
    def validate_sorted(cls, value: list[list[int]]) -> list[list[int]]:
        """Reject position lists that ever decrease."""
        for index, positions in enumerate(value):
            for previous, current in zip(positions, positions[1:]):
                if current < previous:
                    raise ValueError(
                        f"positions for keyword {index} must be non-decreasing (found {current} after {previous})"
                    )
        return value

    @model_validator(mode="after")
    def validate_terms(self) -> "WindowsRequest":
        if self.terms is not None and len(self.terms) != len(self.keywords):
            raise ValueError(f"terms has {len(self.terms)} entries but {len(self.keywords)} keywords were given")
        return self


class WindowResult(BaseModel):
    """A single proximity window."""

    size: int = Field(ge=0, description="Distance between the first and last position")
    positions: list[int] = Field(description="One position per keyword, in keyword order")
    terms: dict[str, int] | None = Field(default=None, description="Term to position mapping when terms were named")


class WindowsResponse(BaseModel):
    """All windows found for one request, smallest first."""

    keyword_count: int
    window_count: int
    windows: list[WindowResult] = Field(default_factory=list)


def enumerate_request(request: WindowsRequest) -> WindowsResponse:
    """Run the enumerator for a validated request."""
    windows = near_proximity(request.keywords)
    results = [
        WindowResult(
            size=window.size,
            positions=list(window.positions),
            terms=dict(zip(request.terms, window.positions)) if request.terms is not None else None,
        )
        for window in windows
    ]
    return WindowsResponse(
        keyword_count=len(request.keywords),
        window_count=len(results),
        windows=results,
    )
