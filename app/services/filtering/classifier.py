"""Per-codepoint word/separator classification used for boundaries and word scanning."""

from enum import Enum

# Whitespace and common ASCII punctuation. Extend here, not per call.
SEPARATORS: frozenset[str] = frozenset(" \t\n\r\f\v" + ".,;:!?\"'()[]{}<>-/\\|@#$%^&*+=~`")


class CharClass(str, Enum):
    """Boundary class of a single character."""

    WORD = "word"
    SEPARATOR = "separator"


def is_separator(ch: str) -> bool:
    """True if ch may terminate a chunk or sub-block."""
    return ch in SEPARATORS


def is_word_char(ch: str) -> bool:
    """Letters, digits and underscore."""
    return ch == "_" or ch.isalnum()


def classify(ch: str) -> CharClass:
    """Only separator-set characters break words; anything else counts as WORD for boundaries."""
    if ch in SEPARATORS:
        return CharClass.SEPARATOR
    return CharClass.WORD
