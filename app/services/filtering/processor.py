"""
Stream orchestrator: read -> split -> transform in parallel -> join -> write, chunk by chunk,
until the input is exhausted. The loop runs on the caller's thread and owns both streams;
only the transform step fans out. Output order always equals input order.
"""

import io
import os
import threading
from contextlib import suppress
from pathlib import Path
from typing import BinaryIO, TextIO

from app.config.filtering.models import FilterConfig
from app.config.logging import get_logger, log_extra
from app.services.filtering.errors import (
    FilterError,
    IOFailureError,
    InvalidArgumentError,
    ProcessingCancelledError,
)
from app.services.filtering.parallel import ParallelChunkProcessor
from app.services.filtering.reader import BlockReader
from app.services.filtering.splitter import split_block
from app.services.filtering.statistics import ProcessingStatistics
from app.services.filtering.transformer import TransformOptions
from app.utils.ids import generate_run_id
from app.utils.time import Stopwatch

logger = get_logger(__name__)

ENCODING = "utf-8"


def _release(wrapper: io.TextIOWrapper) -> None:
    """Detach a text wrapper so the caller's binary stream stays open."""
    with suppress(ValueError):
        wrapper.detach()


def _validate_paths(input_path: str | Path | None, output_path: str | Path | None) -> tuple[Path, Path]:
    if input_path is None or not str(input_path).strip():
        raise InvalidArgumentError("Input file path cannot be empty.")
    if output_path is None or not str(output_path).strip():
        raise InvalidArgumentError("Output file path cannot be empty.")
    src = Path(input_path).resolve()
    dst = Path(output_path).resolve()
    # normcase folds case only where the platform's filesystem does (Windows).
    same = os.path.normcase(str(src)) == os.path.normcase(str(dst))
    if not same and src.exists() and dst.exists():
        # Hard links and case-insensitive mounts resolve to different strings.
        same = os.path.samefile(src, dst)
    if same:
        raise InvalidArgumentError(
            "Input and output file paths must not be the same. Choose a different output file."
        )
    return src, dst


class TextProcessor:
    """
    Filters text streams and files per FilterConfig.

    After a run, processing_time holds the elapsed wall-clock seconds and statistics
    holds the line/word counters (None when collect_statistics is off). cancel() stops
    a run at the next chunk boundary.
    """

    def __init__(self, config: FilterConfig, cancel_event: threading.Event | None = None):
        if config is None:
            raise InvalidArgumentError("Filter configuration is required.")
        self.config = config
        self.processing_time: float = 0.0
        self.statistics: ProcessingStatistics | None = None
        self.run_id: str | None = None
        self._cancel_event = cancel_event or threading.Event()

    @property
    def processing_time_ms(self) -> int:
        return int(self.processing_time * 1000)

    def cancel(self) -> None:
        """Request cancellation; takes effect before the next chunk is read."""
        self._cancel_event.set()

    @property
    def cancelled(self) -> bool:
        return self._cancel_event.is_set()

    def _options(self) -> TransformOptions:
        return TransformOptions(
            min_word_length=self.config.min_word_length,
            remove_punctuation=self.config.remove_punctuation,
            collect_statistics=self.config.collect_statistics,
        )

    def process_stream(
        self,
        input_stream: BinaryIO,
        output_stream: BinaryIO,
        source: str = "<input stream>",
        sink: str = "<output stream>",
    ) -> None:
        """Filter UTF-8 bytes from input_stream into output_stream. Both streams are left open."""
        if input_stream is None:
            raise InvalidArgumentError("Input stream cannot be None.")
        if output_stream is None:
            raise InvalidArgumentError("Output stream cannot be None.")
        reader_io = io.TextIOWrapper(input_stream, encoding=ENCODING, newline="")
        try:
            writer_io = io.TextIOWrapper(output_stream, encoding=ENCODING, newline="")
            try:
                self._run(reader_io, writer_io, source, sink)
            finally:
                _release(writer_io)
        finally:
            _release(reader_io)

    def process_file(self, input_path: str | Path, output_path: str | Path) -> None:
        """Filter input_path into output_path (truncated). Both handles are closed on every exit path."""
        src, dst = _validate_paths(input_path, output_path)
        try:
            fin = open(src, "rb")
        except OSError as e:
            raise IOFailureError(f"Failed to open input file {src}: {e}", cause=e) from e
        with fin:
            try:
                fout = open(dst, "wb")
            except OSError as e:
                raise IOFailureError(f"Failed to open output file {dst}: {e}", cause=e) from e
            with fout:
                self.process_stream(fin, fout, source=str(src), sink=str(dst))

    def process_text(self, text: str) -> str:
        """In-memory convenience over process_stream."""
        out = io.BytesIO()
        self.process_stream(io.BytesIO(text.encode(ENCODING)), out, source="<text>", sink="<text>")
        return out.getvalue().decode(ENCODING)

    def _write(self, writer: TextIO, text: str, sink: str) -> None:
        try:
            writer.write(text)
        except OSError as e:
            raise IOFailureError(f"Failed to write to {sink}: {e}", cause=e) from e

    def _flush(self, writer: TextIO, sink: str) -> None:
        try:
            writer.flush()
        except OSError as e:
            raise IOFailureError(f"Failed to flush {sink}: {e}", cause=e) from e

    def _run(self, reader_io: TextIO, writer_io: TextIO, source: str, sink: str) -> None:
        cfg = self.config
        self.run_id = generate_run_id()
        self.statistics = ProcessingStatistics() if cfg.collect_statistics else None
        stats = self.statistics
        stopwatch = Stopwatch()
        logger.info(
            "Filtering started",
            **log_extra({
                "run_id": self.run_id,
                "source": source,
                "sink": sink,
                "workers": cfg.worker_count,
                "executor": cfg.executor.value,
                "chunk_size": cfg.chunk_size,
            }),
        )
        reader = BlockReader(reader_io, cfg.chunk_size, cfg.max_word_size, name=source)
        try:
            with ParallelChunkProcessor(cfg.worker_count, self._options(), cfg.executor) as processor:
                while True:
                    if self._cancel_event.is_set():
                        raise ProcessingCancelledError(
                            f"Processing cancelled after {processor.chunks_processed} chunks"
                        )
                    block = reader.next_block()
                    if block is None:
                        break
                    results = processor.process_chunk(split_block(block, cfg.worker_count))
                    if stats is not None:
                        # Merged by this thread only, after the join.
                        for r in results:
                            stats.add_words(r.total_words, r.filtered_words)
                            stats.add_lines(r.lines)
                    self._write(writer_io, "".join(r.text for r in results), sink)
                self._flush(writer_io, sink)
        except FilterError as e:
            self.processing_time = stopwatch.stop()
            logger.warning(
                "Filtering failed",
                **log_extra({"run_id": self.run_id, "error_type": type(e).__name__, "error": str(e)}),
            )
            raise
        finally:
            self._cancel_event.clear()
        if stats is not None:
            stats.complete()
        self.processing_time = stopwatch.stop()
        logger.info(
            "Filtering completed",
            **log_extra({
                "run_id": self.run_id,
                "chunks": reader.blocks_read,
                "elapsed_ms": self.processing_time_ms,
            }),
        )
