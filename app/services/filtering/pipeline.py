"""
Filter pipeline entry points used by the HTTP layer: resolve profile + overrides into a
FilterConfig, run the TextProcessor, hand back the processor for timing and statistics.
"""

from pathlib import Path
from typing import Any

from app.config.filtering.static import resolve_filter_config
from app.services.filtering.processor import TextProcessor


def build_processor(profile_name: str, overrides: dict[str, Any] | None = None) -> TextProcessor:
    """Raises InvalidArgumentError if the profile is unknown or the merged config is invalid."""
    config = resolve_filter_config(profile_name, overrides)
    return TextProcessor(config)


def run_filter_text(
    text: str,
    profile_name: str,
    overrides: dict[str, Any] | None = None,
) -> tuple[str, TextProcessor]:
    """Filter an in-memory text. Returns (filtered_text, processor)."""
    processor = build_processor(profile_name, overrides)
    return processor.process_text(text), processor


def run_filter_file(
    input_path: str | Path,
    output_path: str | Path,
    profile_name: str,
    overrides: dict[str, Any] | None = None,
) -> TextProcessor:
    """Filter input_path into output_path. Returns the processor after the run."""
    processor = build_processor(profile_name, overrides)
    processor.process_file(input_path, output_path)
    return processor
