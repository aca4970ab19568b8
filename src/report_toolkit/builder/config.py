"""
Module: builder.config

Purpose:
    Configuration dataclass for building a report. Immutable
    configuration with validation on construction.

Key Classes:
    - BuilderConfig: Main configuration for building reports

Dependencies:
    - dataclasses (std)
    - pathlib (std)
    - builder.layout.config: LayoutConfig

Used By:
    - builder.controller: Main build controller
    - builder.session: Detection worker pool settings
    - report_toolkit.cli
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping, Optional

from report_toolkit.builder.layout.config import LayoutConfig

DEFAULT_GEMINI_MODEL = "gemini-2.5-flash"


@dataclass(frozen=True)
class BuilderConfig:
    """
    Configuration for building reports (immutable).

    Attributes:
        output_dir: Directory for generated files
        output_name: PDF file name stem
        layout: Page layout configuration
        gemini_model: Model used for detection and enhancement
        gemini_api_key: API key (None = let the SDK read the environment)
        enhancement_language: Output language for text enhancement
        detection_timeout_s: How long to wait for focal-point detection
        max_detection_workers: Concurrent detection jobs
        render_dpi: Pixel density for gallery cell images
        export_preview: Also write a PNG preview of the page

    Example:
        >>> config = BuilderConfig(output_dir=Path("output"))
        >>> config.pdf_path
        PosixPath('output/report.pdf')
    """

    output_dir: Path = Path("output")
    output_name: str = "report"
    layout: LayoutConfig = field(default_factory=LayoutConfig)

    # AI collaborators
    gemini_model: str = DEFAULT_GEMINI_MODEL
    gemini_api_key: Optional[str] = None
    enhancement_language: str = "English"
    detection_timeout_s: float = 30.0
    max_detection_workers: int = 4

    # Output
    render_dpi: int = 200
    export_preview: bool = False

    def __post_init__(self) -> None:
        """Validate configuration on construction."""
        if not self.output_name or any(sep in self.output_name for sep in ("/", "\\")):
            raise ValueError(f"output_name must be a plain file stem: {self.output_name!r}")
        if self.detection_timeout_s <= 0:
            raise ValueError(f"detection_timeout_s must be positive: {self.detection_timeout_s}")
        if self.max_detection_workers < 1:
            raise ValueError(f"max_detection_workers must be at least 1: {self.max_detection_workers}")
        if not 36 <= self.render_dpi <= 1200:
            raise ValueError(f"render_dpi out of range: {self.render_dpi}")

    @property
    def pdf_path(self) -> Path:
        return Path(self.output_dir) / f"{self.output_name}.pdf"

    @property
    def preview_path(self) -> Path:
        return Path(self.output_dir) / f"{self.output_name}.png"

    @property
    def metadata_path(self) -> Path:
        return Path(self.output_dir) / f"{self.output_name}_metadata.json"

    @classmethod
    def from_env(
        cls,
        environ: Optional[Mapping[str, str]] = None,
        **overrides,
    ) -> "BuilderConfig":
        """
        Build a config, reading API settings from the environment.

        Reads GEMINI_API_KEY (falling back to GOOGLE_API_KEY) and
        REPORT_GEMINI_MODEL. Explicit keyword overrides win.
        """
        env = os.environ if environ is None else environ
        values = {}
        api_key = env.get("GEMINI_API_KEY") or env.get("GOOGLE_API_KEY")
        if api_key:
            values["gemini_api_key"] = api_key
        model = env.get("REPORT_GEMINI_MODEL")
        if model:
            values["gemini_model"] = model
        values.update(overrides)
        return cls(**values)
