"""Client for the external ML intelligence API (valuation, insights, search)."""

from __future__ import annotations

import logging
from typing import Any

from ..models.intelligence import Insight, QueryResponse, ValuationInputs, ValuationResult
from .client import ApiClient, ApiResponseError, parse_response

logger = logging.getLogger(__name__)

DEFAULT_INSIGHT_TYPES = ("why_insight", "opportunity", "risk", "trend", "action")
MIN_QUERY_LENGTH = 3


class IntelligenceClient:
    """Typed access to ``/api/v1/intelligence/*``.

    Every response is validated into a model before it is returned; anything
    that does not validate raises ApiResponseError.
    """

    PREFIX = "/api/v1/intelligence"

    def __init__(self, client: ApiClient) -> None:
        self._client = client

    async def valuation(
        self,
        inputs: ValuationInputs,
        include_predictions: bool = True,
        include_comparables: bool = True,
    ) -> ValuationResult:
        """Request a valuation for the given company figures."""
        data = await self._client.post(
            f"{self.PREFIX}/valuation",
            json={
                "inputs": inputs.model_dump(mode="json"),
                "include_predictions": include_predictions,
                "include_comparables": include_comparables,
            },
        )
        if not data:
            raise ApiResponseError("Empty valuation response")
        result = parse_response(data, ValuationResult)
        logger.info(
            "Valuation for %s: %.0f (confidence %.0f)",
            inputs.industry,
            result.adjusted_valuation,
            result.confidence_score,
        )
        return result

    async def insights(
        self,
        company_data: dict[str, Any],
        insight_types: tuple[str, ...] = DEFAULT_INSIGHT_TYPES,
        include_recommendations: bool = True,
    ) -> list[Insight]:
        data = await self._client.post(
            f"{self.PREFIX}/insights",
            json={
                "company_data": company_data,
                "insight_types": list(insight_types),
                "include_recommendations": include_recommendations,
            },
        )
        return parse_response(data or [], list[Insight])

    async def query(
        self,
        text: str,
        namespace: str = "exit-planning-documents",
        context_window: int = 10,
        include_insights: bool = True,
        confidence_threshold: float = 0.7,
        date_range: str | None = None,
    ) -> QueryResponse:
        """Semantic search over the document namespaces.

        Queries shorter than three characters are not sent and yield an empty
        response.
        """
        text = text.strip()
        if len(text) < MIN_QUERY_LENGTH:
            return QueryResponse()

        filters: dict[str, Any] = {"confidence_threshold": confidence_threshold}
        if date_range and date_range != "all":
            filters["date_range"] = date_range

        data = await self._client.post(
            f"{self.PREFIX}/query",
            json={
                "query": text,
                "namespace": namespace,
                "context_window": context_window,
                "include_insights": include_insights,
                "filters": filters,
            },
        )
        return parse_response(data or {}, QueryResponse)
