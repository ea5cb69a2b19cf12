"""Exceptions that abort a pipeline run."""

from __future__ import annotations


class PipelineError(RuntimeError):
    """Base class for failures that terminate the whole run."""


class RowParseError(PipelineError):
    """Raised when tabular text cannot be tokenized."""


class SourceFetchError(PipelineError):
    """Raised when a required source unit cannot be retrieved."""

    def __init__(self, url: str, reason: str):
        super().__init__(f"Failed to fetch {url}: {reason}")
        self.url = url
        self.reason = reason


class ArtifactWriteError(PipelineError):
    """Raised when an output artifact cannot be persisted."""
