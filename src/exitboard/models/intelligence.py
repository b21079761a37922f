"""Request and response models for the external ML intelligence API.

Responses are parsed into these models at the client boundary so that a
payload with an unexpected shape is rejected there instead of travelling
into the UI as untyped data.
"""

from datetime import datetime
from typing import Any, Literal

from pydantic import BaseModel, Field

Impact = Literal["positive", "negative", "neutral"]
Level = Literal["high", "medium", "low"]


class ValuationInputs(BaseModel):
    """Company figures submitted for a valuation."""

    revenue: float = Field(..., ge=0)
    ebitda: float
    industry: str
    growth_rate: float = 0.0
    market_conditions: Literal["excellent", "good", "fair", "poor"] = "good"
    company_size: Literal["small", "medium", "large"] = "small"
    profitability_trend: Literal["increasing", "stable", "decreasing"] = "stable"
    customer_concentration: float = Field(default=0.0, ge=0, le=100)
    recurring_revenue: float = Field(default=0.0, ge=0, le=100)
    debt_to_equity: float = 0.0
    working_capital: float = 0.0


class ValuationRange(BaseModel):
    low: float
    mid: float
    high: float


class KeyMetrics(BaseModel):
    revenue_multiple: float
    ebitda_multiple: float
    growth_adjusted_multiple: float


class RiskFactor(BaseModel):
    factor: str
    impact: Impact
    magnitude: float
    description: str


class MarketComparable(BaseModel):
    company: str
    multiple: float
    similarity_score: float


class ValuationPredictions(BaseModel):
    twelve_month_outlook: Literal["positive", "stable", "negative"]
    growth_trajectory: float
    market_position: str


class ValuationResult(BaseModel):
    """Valuation computed by the ML service."""

    base_valuation: float
    adjusted_valuation: float
    valuation_range: ValuationRange
    confidence_score: float = Field(..., ge=0, le=100)
    key_metrics: KeyMetrics
    risk_factors: list[RiskFactor] = Field(default_factory=list)
    market_comparables: list[MarketComparable] = Field(default_factory=list)
    predictions: ValuationPredictions | None = None


class SupportingData(BaseModel):
    metric: str
    value: str | float
    benchmark: str | float | None = None
    trend: Literal["up", "down", "stable"] | None = None


class Insight(BaseModel):
    """A single generated insight."""

    id: str
    type: Literal["why_insight", "opportunity", "risk", "trend", "action", "benchmark"]
    title: str
    description: str
    why_explanation: str = ""
    confidence_score: float
    impact_level: Level
    category: Literal["financial", "operational", "strategic", "market", "competitive"]
    timeframe: Literal["immediate", "short_term", "medium_term", "long_term"]
    supporting_data: list[SupportingData] = Field(default_factory=list)
    recommendations: list[str] = Field(default_factory=list)
    related_insights: list[str] = Field(default_factory=list)
    created_at: datetime | None = None
    priority_score: float = 0.0


class QuerySource(BaseModel):
    id: str
    title: str = ""
    snippet: str = ""
    relevance_score: float = 0.0
    metadata: dict[str, Any] = Field(default_factory=dict)


class QueryResponse(BaseModel):
    """Answer from the semantic search / chat endpoint."""

    response: str = ""
    sources: list[QuerySource] = Field(default_factory=list)
    confidence: float = 0.0
