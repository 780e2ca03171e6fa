"""
Word transformer (pure, no I/O): drops words shorter than min_word_length, then
optionally strips every character that is neither a word character nor whitespace.
Length filtering runs on the original word boundaries before punctuation is stripped.
"""

from dataclasses import dataclass, field
from itertools import groupby

from app.services.filtering.classifier import is_word_char
from app.services.filtering.splitter import SubBlock
from app.services.filtering.statistics import LineTally


@dataclass(frozen=True)
class TransformOptions:
    """Per-run options handed to every worker. Picklable for process pools."""

    min_word_length: int
    remove_punctuation: bool = False
    collect_statistics: bool = False


@dataclass(frozen=True)
class TransformResult:
    text: str
    total_words: int = 0
    filtered_words: int = 0
    lines: LineTally = field(default_factory=LineTally)


@dataclass(frozen=True)
class SubBlockResult:
    """Transformed sub-block plus the counters the worker accumulated locally."""

    ordinal: int
    text: str
    total_words: int = 0
    filtered_words: int = 0
    lines: LineTally = field(default_factory=LineTally)


def filter_short_words(text: str, min_word_length: int) -> tuple[str, int, int]:
    """Remove word runs shorter than min_word_length. Returns (text, words_seen, words_removed)."""
    pieces: list[str] = []
    total = 0
    removed = 0
    for is_word, run in groupby(text, key=is_word_char):
        piece = "".join(run)
        if is_word:
            total += 1
            if len(piece) < min_word_length:
                removed += 1
                continue
        pieces.append(piece)
    return "".join(pieces), total, removed


def strip_punctuation(text: str) -> str:
    """Delete characters that are neither word characters nor whitespace."""
    return "".join(ch for ch in text if is_word_char(ch) or ch.isspace())


def transform_text(text: str, options: TransformOptions) -> TransformResult:
    if not text:
        return TransformResult(text="")
    # Words are at least one character long, so a minimum of 1 removes nothing.
    if options.min_word_length > 1 or options.collect_statistics:
        result, total, removed = filter_short_words(text, options.min_word_length)
    else:
        result, total, removed = text, 0, 0
    if options.remove_punctuation:
        result = strip_punctuation(result)
    if not options.collect_statistics:
        return TransformResult(text=result)
    return TransformResult(text=result, total_words=total, filtered_words=removed, lines=LineTally.of(text))


def transform_sub_block(sub_block: SubBlock, options: TransformOptions) -> SubBlockResult:
    """Worker entry point: transform exactly one sub-block."""
    r = transform_text(sub_block.text, options)
    return SubBlockResult(
        ordinal=sub_block.ordinal,
        text=r.text,
        total_words=r.total_words,
        filtered_words=r.filtered_words,
        lines=r.lines,
    )
