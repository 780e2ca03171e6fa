"""Request/response schemas for POST /filter and POST /filter/file."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field

from app.config.filtering.models import ExecutorKind


class FilterOptions(BaseModel):
    """Profile name plus optional per-request overrides. Unset fields keep the profile's values."""

    profile: str | None = Field(default=None, description="Filter profile from static.json; 'active' by default")
    min_word_length: int | None = Field(default=None)
    remove_punctuation: bool | None = Field(default=None)
    worker_count: int | None = Field(default=None)
    chunk_size: int | None = Field(default=None)
    max_word_size: int | None = Field(default=None)
    executor: ExecutorKind | None = Field(default=None, description="thread|process")
    collect_statistics: bool | None = Field(default=None)

    def overrides(self) -> dict[str, Any]:
        """Config overrides actually set on the request."""
        return self.model_dump(exclude={"profile", "text", "input_path", "output_path"}, exclude_none=True)


class FilterTextRequest(FilterOptions):
    """POST /filter request body."""

    text: str = Field(..., description="UTF-8 text to filter")


class FilterFileRequest(FilterOptions):
    """POST /filter/file request body. Paths are resolved on the server."""

    input_path: str = Field(..., min_length=1)
    output_path: str = Field(..., min_length=1)


class FilterStatistics(BaseModel):
    total_lines: int = Field(..., ge=0)
    empty_lines: int = Field(..., ge=0)
    total_words: int = Field(..., ge=0)
    filtered_words: int = Field(..., ge=0)
    start_time: datetime
    end_time: datetime | None = None
    duration_seconds: float = Field(..., ge=0)


class FilterTextResponse(BaseModel):
    """POST /filter response body."""

    run_id: str
    text: str
    processing_time_ms: int = Field(..., ge=0)
    statistics: FilterStatistics | None = None


class FilterFileResponse(BaseModel):
    """POST /filter/file response body."""

    run_id: str
    output_path: str
    processing_time_ms: int = Field(..., ge=0)
    statistics: FilterStatistics | None = None
