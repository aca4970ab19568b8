"""
Module: builder.services

Purpose:
    External AI collaborators: focal-point detection and text
    enhancement, plus the enhancer contract.
"""

from .enhancer import ContentEnhancer, parse_enhanced_content

__all__ = [
    "ContentEnhancer",
    "parse_enhanced_content",
]
