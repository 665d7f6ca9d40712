"""Ollama-based reasoning service for savings recommendations.

This module implements the SavingsAdvisorPort using Ollama, a self-hosted
LLM runtime. The adapter only transports text: it never interprets the
answer. Validation happens in the domain parser.

Recommended models (in order of size/quality):
- qwen2.5:1.5b  (1GB)  - Fast, answers are sometimes not valid JSON
- qwen2.5:3b    (2GB)  - Default
- llama3.2:3b   (2GB)  - Alternative
- mistral:7b    (4GB)  - Best advice quality
"""

import json
import logging
from typing import Optional

import httpx

from spendsight.application.ports import SavingsAdvisorPort
from spendsight.domain.analytics.value_objects import SpendingSummary
from spendsight.domain.shared.exceptions import ExternalServiceError

logger = logging.getLogger(__name__)


class OllamaSavingsAdvisor(SavingsAdvisorPort):
    """Savings advisor backed by the Ollama chat endpoint."""

    SYSTEM_PROMPT = (
        "You are a concise and smart AI financial coach. "
        "Always answer in pure JSON without any additional text."
    )

    DEFAULT_PROMPT_TEMPLATE = """Based on this spending data from the last 3 months, give 3-5 specific, actionable savings recommendations.

SPENDING BY CATEGORY:
{spending}

Respond with ONLY a JSON array in this format:
[{{"title": "Short title", "description": "One or two sentences", "potential_savings": 25.00, "category": "Category name"}}]

- potential_savings: estimated monthly savings as a number, or null if unknown
- category: one of the category names above, or null
"""  # NOQA: E501

    def __init__(
        self,
        model: str = "qwen2.5:3b",
        base_url: str = "http://localhost:11434",
        timeout: float = 60.0,
        prompt_template: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self._model = model
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._prompt_template = prompt_template or self.DEFAULT_PROMPT_TEMPLATE
        self._transport = transport

    @property
    def model_name(self) -> str:
        return self._model

    async def suggest_savings(self, summary: SpendingSummary) -> str:
        prompt = self._build_prompt(summary)
        logger.debug("AI Prompt:\n%s", prompt)

        try:
            response_text = await self._call_ollama(prompt)
        except httpx.HTTPStatusError as e:
            logger.warning(
                "Ollama answered with status %d",
                e.response.status_code,
            )
            raise ExternalServiceError(
                "Reasoning service returned an error",
                details={"status_code": e.response.status_code},
            ) from e
        except httpx.HTTPError as e:
            self._log_request_error(e)
            raise ExternalServiceError(
                "Reasoning service is unavailable",
                details={"error": type(e).__name__},
            ) from e

        if not response_text or not response_text.strip():
            raise ExternalServiceError("Reasoning service returned an empty response")

        logger.debug("AI Response: %s", response_text)
        return response_text

    def _log_request_error(self, e: Exception) -> None:
        if isinstance(e, httpx.TimeoutException):
            logger.warning("Ollama request timed out after %.1fs", self._timeout)
        elif isinstance(e, httpx.ConnectError):
            logger.warning(
                "Could not connect to Ollama at %s. Is it running?",
                self._base_url,
            )
        elif isinstance(e, httpx.ReadError):
            logger.warning(
                "Connection to Ollama was interrupted while reading response. "
                "The model may still be loading. Try again in a few seconds.",
            )
        else:
            logger.warning(
                "Savings request failed: %s (type: %s)",
                str(e) or repr(e),
                type(e).__name__,
            )

    def _build_prompt(self, summary: SpendingSummary) -> str:
        spending = json.dumps(summary.to_dict(), indent=2)
        return self._prompt_template.format(spending=spending)

    async def _call_ollama(self, prompt: str) -> str:
        url = f"{self._base_url}/api/chat"

        payload = {
            "model": self._model,
            "messages": [
                {"role": "system", "content": self.SYSTEM_PROMPT},
                {"role": "user", "content": prompt},
            ],
            "stream": False,
            "options": {"temperature": 0.3},
        }

        # Allow extra time for model loading (cold start)
        timeout = httpx.Timeout(connect=5.0, read=self._timeout, write=10.0, pool=5.0)
        async with httpx.AsyncClient(
            timeout=timeout,
            transport=self._transport,
        ) as client:
            response = await client.post(url, json=payload)
            response.raise_for_status()

            data = response.json()
            return (data.get("message") or {}).get("content", "")
