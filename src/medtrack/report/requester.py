"""Request an occupancy report from the Gemini text-generation API."""

from __future__ import annotations

import json
import logging
import os
import re
from typing import Any, List, Optional

from medtrack.domain.model import Bed

from .model import OccupancyReport
from .prompt import REPORT_SCHEMA, build_prompt

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "gemini-2.5-flash"
UNAVAILABLE_MESSAGE = "AI Service Unavailable."

_FENCE_RE = re.compile(r"^```(?:json)?\s*|\s*```$")


class ReportUnavailable(RuntimeError):
    """The report service failed or answered with something unusable."""


def _api_key() -> Optional[str]:
    return os.getenv("GEMINI_API_KEY") or os.getenv("API_KEY")


def default_model() -> str:
    return os.getenv("MEDTRACK_REPORT_MODEL", DEFAULT_MODEL)


def parse_report_text(text: str) -> OccupancyReport:
    """Decode the service's JSON answer into an :class:`OccupancyReport`."""

    if not isinstance(text, str) or not text.strip():
        raise ValueError("Empty report response")
    cleaned = _FENCE_RE.sub("", text.strip())
    start = cleaned.find("{")
    if start == -1:
        raise ValueError("Report response does not contain a JSON object")
    payload, _ = json.JSONDecoder().raw_decode(cleaned[start:])
    return OccupancyReport.from_dict(payload)


class ReportRequester:
    """Builds the prompt, calls the service once and parses the answer.

    ``client`` is anything exposing ``models.generate_content`` like
    ``google.genai.Client``; when omitted one is created on first use.
    """

    def __init__(self, client: Any = None, model: Optional[str] = None) -> None:
        self._client = client
        self.model = model or default_model()

    def _get_client(self) -> Any:
        if self._client is None:
            from google import genai

            self._client = genai.Client(api_key=_api_key())
        return self._client

    def _config(self) -> Any:
        from google.genai import types

        return types.GenerateContentConfig(
            response_mime_type="application/json",
            response_schema=REPORT_SCHEMA,
        )

    def request(self, beds: List[Bed]) -> OccupancyReport:
        prompt = build_prompt(beds)
        logger.info("Requesting occupancy report model=%s beds=%d", self.model, len(beds))
        try:
            client = self._get_client()
            response = client.models.generate_content(
                model=self.model,
                contents=prompt,
                config=self._config(),
            )
            report = parse_report_text(getattr(response, "text", None) or "")
        except Exception as exc:
            logger.exception("Failed to generate report")
            raise ReportUnavailable(UNAVAILABLE_MESSAGE) from exc
        logger.info("Report received insights=%d", len(report.insights))
        return report


__all__ = [
    "DEFAULT_MODEL",
    "UNAVAILABLE_MESSAGE",
    "ReportUnavailable",
    "default_model",
    "parse_report_text",
    "ReportRequester",
]
