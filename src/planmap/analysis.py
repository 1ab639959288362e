"""Scenario analysis — stand-in for the scoring engine.

The result is a fixed payload returned after a simulated latency; it does
not look at the drawn geometry.
"""

from __future__ import annotations

import asyncio
from enum import Enum

from pydantic import BaseModel, Field


class AnalysisCategory(str, Enum):
    """Scored planning dimensions."""
    WALKABILITY = "walkability"
    GREEN_SPACE = "green_space"
    TRANSIT_ACCESS = "transit_access"
    LAND_USE_MIX = "land_use_mix"


class CategoryScore(BaseModel):
    """Score for one planning dimension (0-100)."""
    category: AnalysisCategory
    score: int = Field(ge=0, le=100)


class Recommendation(BaseModel):
    """A categorized improvement suggestion."""
    category: AnalysisCategory
    message: str


class AnalysisResult(BaseModel):
    """Scores for all four categories plus recommendations."""
    scores: list[CategoryScore]
    recommendations: list[Recommendation]
    feature_count: int = 0


_MOCK_SCORES = {
    AnalysisCategory.WALKABILITY: 72,
    AnalysisCategory.GREEN_SPACE: 58,
    AnalysisCategory.TRANSIT_ACCESS: 81,
    AnalysisCategory.LAND_USE_MIX: 64,
}

_MOCK_RECOMMENDATIONS = [
    (AnalysisCategory.GREEN_SPACE, "Add a pocket park within 400 m of the residential blocks."),
    (AnalysisCategory.WALKABILITY, "Break up long blocks with mid-block pedestrian crossings."),
    (AnalysisCategory.LAND_USE_MIX, "Introduce ground-floor retail along the main corridor."),
]


async def run_mock_analysis(feature_count: int, delay: float) -> AnalysisResult:
    """Wait ``delay`` seconds, then return the fixed scoring payload."""
    await asyncio.sleep(delay)
    return AnalysisResult(
        scores=[CategoryScore(category=c, score=s) for c, s in _MOCK_SCORES.items()],
        recommendations=[Recommendation(category=c, message=m) for c, m in _MOCK_RECOMMENDATIONS],
        feature_count=feature_count,
    )
