"""Spending analysis backed by the Gemini generative language REST API via httpx."""

from __future__ import annotations

import json
import logging
from typing import Any

import httpx
from pydantic import ValidationError

from src.wallet_tasks.domain.exceptions import AnalysisProviderError
from src.wallet_tasks.domain.models.analysis import (
    AnalysisType,
    WalletAnalysis,
    WalletTransaction,
)

logger = logging.getLogger(__name__)

_DEFAULT_BASE_URL = "https://generativelanguage.googleapis.com/v1beta"

_SAFETY_CATEGORIES = (
    "HARM_CATEGORY_HARASSMENT",
    "HARM_CATEGORY_HATE_SPEECH",
    "HARM_CATEGORY_SEXUALLY_EXPLICIT",
    "HARM_CATEGORY_DANGEROUS_CONTENT",
)

_PROMPT = """Analyze the following wallet transaction data and provide financial insights:

Wallet Address: {wallet_address}
Analysis Type: {analysis_type}
Transaction Count: {count}

Transaction Data:
{transactions}

Please provide:
1. 3-5 key insights about spending patterns
2. 3-5 actionable recommendations
3. A brief summary of the analysis
4. Confidence level (0-100) based on data quality

Format your response as JSON:
{{
  "insights": ["insight1", "insight2", "insight3"],
  "recommendations": ["rec1", "rec2", "rec3"],
  "summary": "brief summary",
  "confidence": 85
}}
"""


def build_prompt(
    wallet_address: str,
    transactions: list[WalletTransaction],
    analysis_type: AnalysisType,
) -> str:
    payload = [tx.model_dump(mode="json", by_alias=True, exclude_none=True) for tx in transactions]
    return _PROMPT.format(
        wallet_address=wallet_address,
        analysis_type=analysis_type,
        count=len(transactions),
        transactions=json.dumps(payload, indent=2),
    )


def parse_analysis(text: str) -> WalletAnalysis:
    """Turn the model's reply into an analysis, tolerating non-JSON answers."""
    cleaned = text.strip()
    if cleaned.startswith("```"):
        cleaned = cleaned.strip("`")
        if cleaned.lower().startswith("json"):
            cleaned = cleaned[4:]
    try:
        parsed = json.loads(cleaned)
    except json.JSONDecodeError:
        logger.info("Analysis reply is not JSON, using fallback")
        return _fallback_analysis(text)
    if not isinstance(parsed, dict):
        parsed = {}
    try:
        return WalletAnalysis(
            insights=parsed.get("insights") or ["No insights available"],
            recommendations=parsed.get("recommendations") or ["No recommendations available"],
            summary=parsed.get("summary") or "Analysis completed",
            confidence=parsed.get("confidence") or 50,
        )
    except ValidationError:
        logger.info("Analysis reply has an unexpected shape, using fallback")
        return _fallback_analysis(text)


def _fallback_analysis(text: str) -> WalletAnalysis:
    return WalletAnalysis(
        insights=["Analysis completed successfully"],
        recommendations=["Consider reviewing your spending patterns"],
        summary=text[:200] + "...",
        confidence=70,
    )


class GeminiAnalysisProvider:
    """Analysis provider calling ``models/{model}:generateContent``."""

    def __init__(
        self,
        api_key: str,
        model: str = "gemini-1.5-flash",
        base_url: str = _DEFAULT_BASE_URL,
        timeout: float = 60.0,
        client: httpx.AsyncClient | None = None,
        per_request_client: bool = False,
    ) -> None:
        self._model = model
        self._url = f"{base_url.rstrip('/')}/models/{model}:generateContent"
        self._timeout = timeout
        # A shared client pins its connection pool to one event loop. Workers run
        # every task on a new loop, so they open a client per request instead.
        self._client = client
        if client is None and not per_request_client:
            self._client = httpx.AsyncClient(timeout=timeout)
        self._headers = {"x-goog-api-key": api_key, "Content-Type": "application/json"}

    async def analyze(
        self,
        wallet_address: str,
        transactions: list[WalletTransaction],
        analysis_type: AnalysisType,
    ) -> WalletAnalysis:
        prompt = build_prompt(wallet_address, transactions, analysis_type)
        text = await self._generate(prompt)
        return parse_analysis(text)

    async def _generate(self, prompt: str) -> str:
        body: dict[str, Any] = {
            "contents": [{"role": "user", "parts": [{"text": prompt}]}],
            "generationConfig": {
                "temperature": 0.7,
                "topK": 1,
                "topP": 1,
                "maxOutputTokens": 1500,
            },
            "safetySettings": [
                {"category": category, "threshold": "BLOCK_MEDIUM_AND_ABOVE"}
                for category in _SAFETY_CATEGORIES
            ],
        }
        try:
            if self._client is not None:
                response = await self._client.post(self._url, json=body, headers=self._headers)
            else:
                async with httpx.AsyncClient(timeout=self._timeout) as client:
                    response = await client.post(self._url, json=body, headers=self._headers)
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPStatusError as exc:
            raise AnalysisProviderError(
                f"Gemini request failed with status {exc.response.status_code}"
            ) from exc
        except (httpx.HTTPError, ValueError) as exc:
            raise AnalysisProviderError(f"Gemini request failed: {exc}") from exc

        try:
            parts = data["candidates"][0]["content"]["parts"]
        except (KeyError, IndexError, TypeError) as exc:
            raise AnalysisProviderError("Gemini returned no candidates") from exc
        return "".join(part.get("text", "") for part in parts)

    async def close(self) -> None:
        if self._client is not None:
            await self._client.aclose()
