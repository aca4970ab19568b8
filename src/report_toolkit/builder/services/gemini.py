"""
Module: builder.services.gemini

Purpose:
    Gemini-backed collaborators: automatic focal-point detection and
    report text enhancement. Both request structured JSON output.

Key Classes:
    - GeminiFocalPointDetector: FocalPointDetector implementation
    - GeminiContentEnhancer: ContentEnhancer implementation

Failure Policy:
    The detector returns None for empty or malformed responses and lets
    transport errors propagate; FocalPointService turns both into a
    center fallback. The enhancer swallows every failure and returns
    None so the caller keeps the existing text.

Dependencies:
    - google-genai: Gemini API client

Used By:
    - builder.controller: build_report(detect=True / enhance=True)
    - report_toolkit.cli
"""

from __future__ import annotations

import json
import logging
from typing import Any, Mapping, Optional

from google import genai
from google.genai import types

from report_toolkit.builder.config import DEFAULT_GEMINI_MODEL
from report_toolkit.builder.state.commands import EnhancedContent

from .enhancer import parse_enhanced_content

logger = logging.getLogger(__name__)

DEFAULT_MODEL = DEFAULT_GEMINI_MODEL

FOCAL_PROMPT = (
    "Identify the bounding box of the most prominent face or group of people "
    "in this image. Return the center of that box as percentages (0-100) of "
    "the image width (x) and height (y). Output strictly as JSON: "
    '{"x": number, "y": number}.'
)

ENHANCE_PROMPT = """
Rewrite the following program details as a concise, professional
infographic-style report.
- Title: {title}
- Details: {description}

Keep it tight and impactful. Provide a refined title, a short description
(at most two sentences), one main objective and one short impact statement.
Write the output in {language}.
"""

FOCAL_SCHEMA = types.Schema(
    type=types.Type.OBJECT,
    properties={
        "x": types.Schema(type=types.Type.NUMBER),
        "y": types.Schema(type=types.Type.NUMBER),
    },
    required=["x", "y"],
)

ENHANCE_SCHEMA = types.Schema(
    type=types.Type.OBJECT,
    properties={
        name: types.Schema(type=types.Type.STRING)
        for name in ("title", "description", "objective", "impact")
    },
    required=["title", "description", "objective", "impact"],
)


def create_client(api_key: Optional[str] = None, timeout_s: Optional[float] = None) -> genai.Client:
    """
    Create a Gemini client.

    Without ``api_key`` the SDK reads GEMINI_API_KEY / GOOGLE_API_KEY.
    """
    http_options = None
    if timeout_s is not None:
        http_options = types.HttpOptions(timeout=int(timeout_s * 1000))
    return genai.Client(api_key=api_key, http_options=http_options)


def _json_response(response: Any) -> Optional[Any]:
    """Parse ``response.text`` as JSON, None if empty or invalid."""
    text = getattr(response, "text", None)
    if not text:
        return None
    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        logger.warning(f"Gemini returned invalid JSON: {e}")
        return None


class GeminiFocalPointDetector:
    """
    Detects the most prominent face or group of people.

    Example:
        >>> detector = GeminiFocalPointDetector(create_client())
        >>> detector.detect(data, "image/jpeg")
        {'x': 42.0, 'y': 31.5}
    """

    def __init__(self, client: genai.Client, model: str = DEFAULT_MODEL) -> None:
        self._client = client
        self.model = model

    def detect(self, data: bytes, mime_type: str) -> Optional[Mapping[str, Any]]:
        response = self._client.models.generate_content(
            model=self.model,
            contents=[
                types.Part.from_bytes(data=data, mime_type=mime_type),
                FOCAL_PROMPT,
            ],
            config=types.GenerateContentConfig(
                response_mime_type="application/json",
                response_schema=FOCAL_SCHEMA,
            ),
        )
        parsed = _json_response(response)
        if not isinstance(parsed, dict):
            return None
        return parsed


class GeminiContentEnhancer:
    """Rewrites title/description into title, description, objective, impact."""

    def __init__(
        self,
        client: genai.Client,
        model: str = DEFAULT_MODEL,
        language: str = "English",
    ) -> None:
        self._client = client
        self.model = model
        self.language = language

    def enhance(self, title: str, description: str) -> Optional[EnhancedContent]:
        prompt = ENHANCE_PROMPT.format(
            title=title,
            description=description,
            language=self.language,
        )
        try:
            response = self._client.models.generate_content(
                model=self.model,
                contents=prompt,
                config=types.GenerateContentConfig(
                    response_mime_type="application/json",
                    response_schema=ENHANCE_SCHEMA,
                ),
            )
        except Exception as e:
            logger.warning(f"Content enhancement failed: {e}")
            return None

        content = parse_enhanced_content(_json_response(response))
        if content is None:
            logger.warning("Content enhancement returned an incomplete response")
        return content
