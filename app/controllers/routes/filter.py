"""POST /filter and POST /filter/file: run the streaming word filter over inline text or server-side files."""

from pathlib import Path

from fastapi import APIRouter, HTTPException

from app.config.logging import get_logger
from app.config.settings import get_settings
from app.controllers.schema.filter import (
    FilterFileRequest,
    FilterOptions,
    FilterStatistics,
    FilterTextRequest,
    FilterTextResponse,
    FilterFileResponse,
)
from app.services.filtering.errors import (
    ChunkProcessingError,
    IOFailureError,
    InvalidArgumentError,
    WordTooLargeError,
)
from app.services.filtering.pipeline import run_filter_file, run_filter_text
from app.services.filtering.processor import TextProcessor

logger = get_logger(__name__)

router = APIRouter(prefix="/filter", tags=["filtering"])


def _check_limits(body: FilterOptions) -> None:
    settings = get_settings()
    if body.worker_count is not None and body.worker_count > settings.max_worker_count:
        raise HTTPException(
            status_code=400,
            detail=f"worker_count must not exceed {settings.max_worker_count}",
        )


def _resolve_data_path(raw: str) -> Path:
    """Resolve a request path under settings.data_dir, following symlinks. Escapes are rejected."""
    base = get_settings().data_dir.resolve()
    candidate = (base / raw).resolve()
    if not candidate.is_relative_to(base):
        raise InvalidArgumentError(f"Path {raw!r} is outside the data directory")
    return candidate


def _statistics(processor: TextProcessor) -> FilterStatistics | None:
    if processor.statistics is None:
        return None
    return FilterStatistics.model_validate(processor.statistics.to_dict())


def _raise_http(e: Exception) -> None:
    """Map filtering errors to HTTP errors without leaking stream internals."""
    if isinstance(e, InvalidArgumentError):
        raise HTTPException(status_code=400, detail=str(e)) from e
    if isinstance(e, WordTooLargeError):
        raise HTTPException(status_code=422, detail=str(e)) from e
    if isinstance(e, IOFailureError):
        raise HTTPException(status_code=500, detail="Failed to read or write the requested data") from e
    if isinstance(e, ChunkProcessingError):
        raise HTTPException(status_code=500, detail="Text processing failed") from e
    raise e


@router.post("", response_model=FilterTextResponse)
def filter_text(body: FilterTextRequest) -> FilterTextResponse:
    """
    Filter inline text. Config comes from the requested profile (default: settings.filter_profile)
    with any fields set on the request merged on top.
    """
    settings = get_settings()
    _check_limits(body)
    if len(body.text) > settings.max_text_length:
        raise HTTPException(status_code=400, detail=f"text must not exceed {settings.max_text_length} characters")
    try:
        text, processor = run_filter_text(body.text, body.profile or settings.filter_profile, body.overrides())
    except (InvalidArgumentError, WordTooLargeError, IOFailureError, ChunkProcessingError) as e:
        _raise_http(e)
    return FilterTextResponse(
        run_id=processor.run_id,
        text=text,
        processing_time_ms=processor.processing_time_ms,
        statistics=_statistics(processor),
    )


@router.post("/file", response_model=FilterFileResponse)
def filter_file(body: FilterFileRequest) -> FilterFileResponse:
    """Filter a server-side file into another. Input and output must be different files."""
    settings = get_settings()
    _check_limits(body)
    try:
        input_path = _resolve_data_path(body.input_path)
        output_path = _resolve_data_path(body.output_path)
        processor = run_filter_file(
            input_path,
            output_path,
            body.profile or settings.filter_profile,
            body.overrides(),
        )
    except (InvalidArgumentError, WordTooLargeError, IOFailureError, ChunkProcessingError) as e:
        logger.warning("File filtering failed", extra={"error_type": type(e).__name__})
        _raise_http(e)
    return FilterFileResponse(
        run_id=processor.run_id,
        output_path=body.output_path,
        processing_time_ms=processor.processing_time_ms,
        statistics=_statistics(processor),
    )
