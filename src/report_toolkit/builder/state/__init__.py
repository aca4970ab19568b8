"""
Module: builder.state

Purpose:
    Command types and the pure reducer that turn one immutable
    ReportDocument into the next.

Key Functions:
    - reduce(): Apply one command
    - reduce_all(): Apply a sequence of commands
"""

from .commands import (
    AddImage,
    ApplyDetection,
    ApplyEnhancement,
    Command,
    EnhancedContent,
    MarkProcessing,
    MoveImage,
    RemoveImage,
    SetFocalPoint,
    SetOrientation,
    SetThemeColor,
    UpdateFields,
)
from .reducer import reduce, reduce_all

__all__ = [
    "AddImage",
    "ApplyDetection",
    "ApplyEnhancement",
    "Command",
    "EnhancedContent",
    "MarkProcessing",
    "MoveImage",
    "RemoveImage",
    "SetFocalPoint",
    "SetOrientation",
    "SetThemeColor",
    "UpdateFields",
    "reduce",
    "reduce_all",
]
