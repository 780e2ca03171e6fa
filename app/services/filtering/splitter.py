"""Block splitter: divides one chunk into up to N sub-blocks, each cut right after a separator."""

from typing import NamedTuple

from app.services.filtering.classifier import is_separator


class SubBlock(NamedTuple):
    """Contiguous slice of a chunk tagged with its position in the chunk."""

    ordinal: int
    text: str


def _next_cut(block: str, pos: int) -> int:
    """Index just past the first separator at or after pos, or len(block)."""
    n = len(block)
    while pos < n:
        if is_separator(block[pos]):
            return pos + 1
        pos += 1
    return n


def split_block(block: str, target_count: int) -> list[SubBlock]:
    """
    Split block into at most target_count sub-blocks of roughly even size.
    Cut points move forward to the next separator so no word is split.
    Empty or single-target input is returned whole as one sub-block.
    """
    if target_count <= 1 or not block:
        return [SubBlock(0, block)]
    n = len(block)
    target = n // target_count
    pieces: list[str] = []
    start = 0
    for i in range(1, target_count):
        if start >= n:
            break
        cut = _next_cut(block, max(start, i * target))
        pieces.append(block[start:cut])
        start = cut
    if start < n:
        pieces.append(block[start:])
    return [SubBlock(i, text) for i, text in enumerate(pieces)]
