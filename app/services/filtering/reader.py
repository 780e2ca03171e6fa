"""
Block reader: pulls word-boundary-safe chunks from a text stream.
Every returned chunk ends on a separator or at true end of stream.
"""

from collections.abc import Iterator
from typing import TextIO

from app.config.logging import get_logger
from app.services.filtering.classifier import SEPARATORS, is_separator
from app.services.filtering.errors import IOFailureError, WordTooLargeError

logger = get_logger(__name__)

_SEPARATORS_TO_SPACE = str.maketrans({ch: " " for ch in SEPARATORS})


def _trailing_run_length(text: str) -> int:
    """Length of the non-separator run at the end of text."""
    n = 0
    for ch in reversed(text):
        if is_separator(ch):
            break
        n += 1
    return n


def longest_run(text: str) -> int:
    """Length of the longest run of non-separator characters in text."""
    if not text:
        return 0
    return max(len(part) for part in text.translate(_SEPARATORS_TO_SPACE).split(" "))


class BlockReader:
    """
    Reads chunks of up to chunk_size characters, extending a chunk that ends mid-word
    one character at a time until the next separator. The extension is bounded by
    max_word_size; longer runs raise WordTooLargeError.
    """

    def __init__(self, stream: TextIO, chunk_size: int, max_word_size: int, name: str = "<stream>"):
        self._stream = stream
        self._chunk_size = chunk_size
        self._max_word_size = max_word_size
        self._name = name
        self.blocks_read = 0

    def _read(self, size: int) -> str:
        try:
            return self._stream.read(size)
        except (OSError, UnicodeDecodeError) as e:
            raise IOFailureError(f"Failed to read from {self._name}: {e}", cause=e) from e

    def _extend_to_separator(self, block: str) -> str:
        run = _trailing_run_length(block)
        if run > self._max_word_size:
            raise WordTooLargeError(self._max_word_size)
        parts = [block]
        while True:
            ch = self._read(1)
            if not ch:
                break
            parts.append(ch)
            if is_separator(ch):
                break
            run += 1
            if run > self._max_word_size:
                raise WordTooLargeError(self._max_word_size)
        return "".join(parts)

    def next_block(self) -> str | None:
        """Return the next chunk, or None at end of stream."""
        block = self._read(self._chunk_size)
        if not block:
            return None
        if not is_separator(block[-1]):
            block = self._extend_to_separator(block)
        if longest_run(block) > self._max_word_size:
            raise WordTooLargeError(self._max_word_size)
        self.blocks_read += 1
        logger.debug(
            "Read block",
            extra={"source": self._name, "block_index": self.blocks_read - 1, "chars": len(block)},
        )
        return block

    def __iter__(self) -> Iterator[str]:
        while (block := self.next_block()) is not None:
            yield block
