"""Filtering configuration models. Read-only; no business logic."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_CHUNK_SIZE = 1_000_000
DEFAULT_MAX_WORD_SIZE = 1024


class ExecutorKind(str, Enum):
    """Worker pool flavour. Processes sidestep the GIL for large inputs."""

    THREAD = "thread"
    PROCESS = "process"


class FilterConfig(BaseModel):
    """Word filter and streaming parameters for one run."""

    model_config = ConfigDict(extra="forbid")

    min_word_length: int = Field(..., ge=0, description="Words shorter than this are removed")
    remove_punctuation: bool = Field(default=False, description="Strip non-word, non-whitespace characters")
    worker_count: int = Field(default=1, ge=1, description="Sub-blocks per chunk and pool size")
    chunk_size: int = Field(default=DEFAULT_CHUNK_SIZE, ge=1, description="Characters per read")
    max_word_size: int = Field(default=DEFAULT_MAX_WORD_SIZE, ge=1, description="Longest accepted word")
    executor: ExecutorKind = Field(default=ExecutorKind.THREAD, description="thread|process")
    collect_statistics: bool = Field(default=True, description="Count lines and words during the run")
