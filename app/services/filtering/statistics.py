"""
Line and word counters for a filtering run.
Workers build local LineTally/word counts per sub-block; the orchestrator merges them
in sub-block order after each join, so no locking is needed.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from app.utils.time import utc_now


@dataclass(frozen=True)
class LineTally:
    """Line shape of one slice of text. Head/tail are the fragments before the first and after the last newline."""

    newlines: int = 0
    blank_lines: int = 0
    head_length: int = 0
    head_blank: bool = True
    tail_length: int = 0
    tail_blank: bool = True

    @classmethod
    def of(cls, text: str) -> "LineTally":
        segments = text.split("\n")
        head, tail = segments[0], segments[-1]
        return cls(
            newlines=len(segments) - 1,
            blank_lines=sum(1 for s in segments[1:-1] if not s.strip()),
            head_length=len(head),
            head_blank=not head.strip(),
            tail_length=len(tail),
            tail_blank=not tail.strip(),
        )


@dataclass
class ProcessingStatistics:
    """Totals for one run. Call complete() once the stream is exhausted."""

    total_lines: int = 0
    empty_lines: int = 0
    total_words: int = 0
    filtered_words: int = 0
    start_time: datetime = field(default_factory=utc_now)
    end_time: datetime | None = None
    _open_length: int = field(default=0, repr=False)
    _open_blank: bool = field(default=True, repr=False)

    def add_words(self, total: int, filtered: int) -> None:
        self.total_words += total
        self.filtered_words += filtered

    def add_lines(self, tally: LineTally) -> None:
        """Stitch the next slice onto the line left open by the previous one."""
        if tally.newlines == 0:
            self._open_length += tally.head_length
            self._open_blank = self._open_blank and tally.head_blank
            return
        self.total_lines += tally.newlines
        if self._open_blank and tally.head_blank:
            self.empty_lines += 1
        self.empty_lines += tally.blank_lines
        self._open_length = tally.tail_length
        self._open_blank = tally.tail_blank

    def complete(self) -> None:
        """Close a final line that has no trailing newline and stamp end_time."""
        if self._open_length:
            self.total_lines += 1
            if self._open_blank:
                self.empty_lines += 1
        self._open_length = 0
        self._open_blank = True
        self.end_time = utc_now()

    @property
    def duration_seconds(self) -> float:
        end = self.end_time or utc_now()
        return (end - self.start_time).total_seconds()

    def to_dict(self) -> dict[str, Any]:
        return {
            "total_lines": self.total_lines,
            "empty_lines": self.empty_lines,
            "total_words": self.total_words,
            "filtered_words": self.filtered_words,
            "start_time": self.start_time,
            "end_time": self.end_time,
            "duration_seconds": self.duration_seconds,
        }

    def summary(self) -> str:
        return (
            "File Processing Statistics:\n"
            f"- Total lines processed: {self.total_lines}\n"
            f"- Empty lines: {self.empty_lines}\n"
            f"- Total words: {self.total_words}\n"
            f"- Filtered words: {self.filtered_words}\n"
            f"- Processing time: {self.duration_seconds:.2f} seconds"
        )
