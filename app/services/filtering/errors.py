"""Error taxonomy for the filtering engine. No retries anywhere; callers re-run the whole operation."""


class FilterError(Exception):
    """Base error for filtering runs. Keeps the underlying exception as `cause`."""

    def __init__(self, message: str, cause: Exception | None = None):
        super().__init__(message)
        self.cause = cause


class InvalidArgumentError(FilterError, ValueError):
    """Raised before any I/O for bad paths, missing streams, or invalid config values."""


class IOFailureError(FilterError):
    """Raised when reading or writing a stream or file fails. Message names the failing context."""


class WordTooLargeError(FilterError):
    """Raised when a run of non-separator characters exceeds max_word_size."""

    def __init__(self, max_word_size: int, cause: Exception | None = None):
        super().__init__(
            f"Word exceeds max_word_size={max_word_size} characters without a separator",
            cause=cause,
        )
        self.max_word_size = max_word_size


class ChunkProcessingError(FilterError):
    """Raised when a worker fails while transforming a sub-block. The whole chunk is discarded."""

    def __init__(self, message: str, chunk_index: int, cause: Exception | None = None):
        super().__init__(message, cause=cause)
        self.chunk_index = chunk_index


class ProcessingCancelledError(FilterError):
    """Raised when a run is cancelled between chunks."""
