"""
Module: builder.state.reducer

Purpose:
    Pure reducer: ``reduce(document, command) -> document``.
    Every change to a report replaces the document with a new version;
    nothing is mutated in place.

Key Functions:
    - reduce(): Apply one command
    - reduce_all(): Apply a sequence of commands

Rules:
    - Images are addressed by stable id. Commands naming an id that is no
      longer in the document are no-ops (late detection results land here).
    - Manual focal points always win over automatic detection.
    - The first image added to an empty report sets the theme colour;
      removing the last image restores the default colour.
    - A no-op returns the same document object (version unchanged).

Dependencies:
    - builder.state.commands
    - builder.focal.resolver

Used By:
    - builder.session.ReportSession
"""

from __future__ import annotations

import logging
from dataclasses import fields, replace
from typing import Callable, Dict, Iterable, Type

from report_toolkit.core.models import (
    DEFAULT_THEME_COLOR,
    LayoutMode,
    ProcessingStatus,
    ReportDocument,
)
from report_toolkit.builder.focal.resolver import apply_detection, resolve
from report_toolkit.builder.images.palette import normalize_hex_color

from .commands import (
    AddImage,
    ApplyDetection,
    ApplyEnhancement,
    Command,
    MarkProcessing,
    MoveImage,
    RemoveImage,
    SetFocalPoint,
    SetOrientation,
    SetThemeColor,
    UpdateFields,
)

logger = logging.getLogger(__name__)


def _bump(document: ReportDocument, **changes) -> ReportDocument:
    return replace(document, version=document.version + 1, **changes)


def _add_image(document: ReportDocument, command: AddImage) -> ReportDocument:
    entry = command.entry
    if entry.id in document:
        raise ValueError(f"Image id already in report: {entry.id}")

    entries = dict(document.entries)
    entries[entry.id] = entry
    theme_color = document.theme_color
    if document.image_count == 0 and command.theme_color:
        theme_color = command.theme_color
    return _bump(
        document,
        entries=entries,
        order=document.order + (entry.id,),
        theme_color=theme_color,
    )


def _remove_image(document: ReportDocument, command: RemoveImage) -> ReportDocument:
    if command.image_id not in document:
        return document

    entries = dict(document.entries)
    del entries[command.image_id]
    order = tuple(image_id for image_id in document.order if image_id != command.image_id)
    theme_color = document.theme_color if order else DEFAULT_THEME_COLOR
    return _bump(document, entries=entries, order=order, theme_color=theme_color)


def _move_image(document: ReportDocument, command: MoveImage) -> ReportDocument:
    if command.image_id not in document:
        return document

    order = [image_id for image_id in document.order if image_id != command.image_id]
    index = min(max(0, command.index), len(order))
    order.insert(index, command.image_id)
    if tuple(order) == document.order:
        return document
    return _bump(document, order=tuple(order))


def _replace_entry(document: ReportDocument, entry) -> ReportDocument:
    if document.entries[entry.id] == entry:
        return document
    entries = dict(document.entries)
    entries[entry.id] = entry
    return _bump(document, entries=entries)


def _set_focal_point(document: ReportDocument, command: SetFocalPoint) -> ReportDocument:
    entry = document.get(command.image_id)
    if entry is None:
        return document
    point = resolve(entry, manual_point=command.point)
    return _replace_entry(document, entry.with_manual_point(point))


def _mark_processing(document: ReportDocument, command: MarkProcessing) -> ReportDocument:
    entry = document.get(command.image_id)
    if entry is None or entry.manual:
        return document
    return _replace_entry(document, entry.with_status(ProcessingStatus.PROCESSING))


def _apply_detection(document: ReportDocument, command: ApplyDetection) -> ReportDocument:
    entry = document.get(command.image_id)
    if entry is None:
        logger.debug(f"Discarding detection for removed image {command.image_id}")
        return document
    return _replace_entry(document, apply_detection(entry, command.result))


def _set_orientation(document: ReportDocument, command: SetOrientation) -> ReportDocument:
    mode = LayoutMode.parse(command.mode)
    if mode is document.orientation:
        return document
    return _bump(document, orientation=mode)


def _set_theme_color(document: ReportDocument, command: SetThemeColor) -> ReportDocument:
    color = normalize_hex_color(command.color)
    if color == document.theme_color:
        return document
    return _bump(document, theme_color=color)


def _update_fields(document: ReportDocument, command: UpdateFields) -> ReportDocument:
    changes = {
        f.name: getattr(command, f.name)
        for f in fields(command)
        if getattr(command, f.name) is not None
        and getattr(command, f.name) != getattr(document, f.name)
    }
    if not changes:
        return document
    return _bump(document, **changes)


def _apply_enhancement(document: ReportDocument, command: ApplyEnhancement) -> ReportDocument:
    content = command.content
    if content is None:
        return document
    return _update_fields(document, UpdateFields(
        title=content.title,
        description=content.description,
        objective=content.objective,
        impact=content.impact,
    ))


_HANDLERS: Dict[Type, Callable[[ReportDocument, object], ReportDocument]] = {
    AddImage: _add_image,
    RemoveImage: _remove_image,
    MoveImage: _move_image,
    SetFocalPoint: _set_focal_point,
    MarkProcessing: _mark_processing,
    ApplyDetection: _apply_detection,
    SetOrientation: _set_orientation,
    SetThemeColor: _set_theme_color,
    UpdateFields: _update_fields,
    ApplyEnhancement: _apply_enhancement,
}


def reduce(document: ReportDocument, command: Command) -> ReportDocument:
    """
    Apply ``command`` to ``document`` and return the resulting document.

    Raises:
        TypeError: If ``command`` is not a known command type
        ValueError: If AddImage reuses an existing id or a theme colour
            is malformed

    Example:
        >>> doc = reduce(ReportDocument(), SetOrientation(LayoutMode.TALL))
        >>> doc.orientation, doc.version
        (<LayoutMode.TALL: 'tall'>, 1)
    """
    handler = _HANDLERS.get(type(command))
    if handler is None:
        raise TypeError(f"Unknown report command: {command!r}")
    return handler(document, command)


def reduce_all(document: ReportDocument, commands: Iterable[Command]) -> ReportDocument:
    """Apply commands in order."""
    for command in commands:
        document = reduce(document, command)
    return document
