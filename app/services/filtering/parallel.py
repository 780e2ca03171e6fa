"""
Parallel chunk processor: fans sub-blocks of one chunk out to a worker pool and joins
the results in sub-block order. The pool lives for one run; one task per sub-block.
"""

from concurrent.futures import Executor, Future, ProcessPoolExecutor, ThreadPoolExecutor, wait

from app.config.filtering.models import ExecutorKind
from app.config.logging import get_logger
from app.services.filtering.errors import ChunkProcessingError
from app.services.filtering.splitter import SubBlock
from app.services.filtering.transformer import SubBlockResult, TransformOptions, transform_sub_block

logger = get_logger(__name__)


class ParallelChunkProcessor:
    """
    Dispatches each sub-block to the pool and waits for all of them (barrier) before
    returning. Results come back in ordinal order, never completion order. Use as a
    context manager so the pool is shut down on every exit path.
    """

    def __init__(
        self,
        worker_count: int,
        options: TransformOptions,
        executor_kind: ExecutorKind = ExecutorKind.THREAD,
    ):
        self.worker_count = worker_count
        self.options = options
        self.executor_kind = ExecutorKind(executor_kind)
        self._executor: Executor | None = None
        self.chunks_processed = 0

    def __enter__(self) -> "ParallelChunkProcessor":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def _get_executor(self) -> Executor:
        if self._executor is None:
            if self.executor_kind == ExecutorKind.PROCESS:
                self._executor = ProcessPoolExecutor(max_workers=self.worker_count)
            else:
                self._executor = ThreadPoolExecutor(
                    max_workers=self.worker_count, thread_name_prefix="filter-worker"
                )
            logger.debug(
                "Started worker pool",
                extra={"executor": self.executor_kind.value, "workers": self.worker_count},
            )
        return self._executor

    def close(self) -> None:
        if self._executor is not None:
            self._executor.shutdown(wait=True, cancel_futures=True)
            self._executor = None

    def process_chunk(self, sub_blocks: list[SubBlock]) -> list[SubBlockResult]:
        """Transform every sub-block of one chunk. Raises ChunkProcessingError if any worker fails."""
        chunk_index = self.chunks_processed
        if self.worker_count == 1 or len(sub_blocks) <= 1:
            try:
                results = [transform_sub_block(sb, self.options) for sb in sub_blocks]
            except Exception as e:
                raise ChunkProcessingError(
                    f"Worker failed on chunk {chunk_index}: {e}", chunk_index=chunk_index, cause=e
                ) from e
        else:
            results = self._fan_out(sub_blocks, chunk_index)
        self.chunks_processed += 1
        return sorted(results, key=lambda r: r.ordinal)

    def _fan_out(self, sub_blocks: list[SubBlock], chunk_index: int) -> list[SubBlockResult]:
        executor = self._get_executor()
        futures: list[Future[SubBlockResult]] = [
            executor.submit(transform_sub_block, sb, self.options) for sb in sub_blocks
        ]
        wait(futures)
        results: list[SubBlockResult] = []
        for sb, fut in zip(sub_blocks, futures):
            exc = fut.exception()
            if exc is not None:
                logger.warning(
                    "Worker failed",
                    extra={"chunk_index": chunk_index, "ordinal": sb.ordinal, "error_type": type(exc).__name__},
                )
                raise ChunkProcessingError(
                    f"Worker failed on chunk {chunk_index}, sub-block {sb.ordinal}: {exc}",
                    chunk_index=chunk_index,
                    cause=exc,
                ) from exc
            results.append(fut.result())
        return results
