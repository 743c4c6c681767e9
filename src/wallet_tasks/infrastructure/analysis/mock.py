from __future__ import annotations

import logging

from src.wallet_tasks.domain.models.analysis import (
    AnalysisType,
    WalletAnalysis,
    WalletTransaction,
)

logger = logging.getLogger(__name__)


class MockAnalysisProvider:
    """Stands in for the AI provider when no API key is configured."""

    async def analyze(
        self,
        wallet_address: str,
        transactions: list[WalletTransaction],
        analysis_type: AnalysisType,
    ) -> WalletAnalysis:
        logger.info(
            "Analysis API key not configured, returning mock analysis",
            extra={"wallet_address": wallet_address},
        )
        return WalletAnalysis(
            insights=["Mock insight: Consider diversifying your portfolio"],
            recommendations=["Mock recommendation: Set up automatic savings"],
            summary="Mock analysis - configure GEMINI_API_KEY for real insights",
            confidence=50,
        )
