"""
Module: builder.services.enhancer

Purpose:
    Contract for the text content-enhancement collaborator and the
    validation of its responses.

Key Classes:
    - ContentEnhancer: Protocol for enhancer collaborators

Key Functions:
    - parse_enhanced_content(): Validate a raw response mapping

Used By:
    - builder.services.gemini: GeminiContentEnhancer
    - builder.session: ReportSession.enhance()
"""

from __future__ import annotations

from typing import Any, Mapping, Optional, Protocol

from report_toolkit.builder.state.commands import EnhancedContent

ENHANCED_FIELDS = ("title", "description", "objective", "impact")


class ContentEnhancer(Protocol):
    """Rewrites raw program text into concise report copy."""

    def enhance(self, title: str, description: str) -> Optional[EnhancedContent]:
        """Return rewritten fields, or None on any failure."""
        ...


def parse_enhanced_content(obj: Any) -> Optional[EnhancedContent]:
    """
    Validate an enhancer response.

    Returns None unless ``obj`` is a mapping with a non-empty string for
    every field.

    Example:
        >>> parse_enhanced_content({"title": "T", "description": "D",
        ...                         "objective": "O", "impact": "I"}).title
        'T'
    """
    if not isinstance(obj, Mapping):
        return None
    values = {}
    for name in ENHANCED_FIELDS:
        value = obj.get(name)
        if not isinstance(value, str) or not value.strip():
            return None
        values[name] = value.strip()
    return EnhancedContent(**values)
