"""Post-processing pipeline orchestration."""

from arrftercare.workflow.processor import PostProcessor
from arrftercare.workflow.types import FileOutcome, FileResult, PipelineState

__all__ = [
    "FileOutcome",
    "FileResult",
    "PipelineState",
    "PostProcessor",
]
