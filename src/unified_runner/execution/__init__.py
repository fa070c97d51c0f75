"""Execution-side collaborators: URI merging, matcher resolution, worker threads."""

from unified_runner.execution.matcher import DocumentMatcher, MismatchError, load_matcher
from unified_runner.execution.uri import merge_uri_options
from unified_runner.execution.worker import (
    ExecuteOperation,
    Stop,
    WorkerThread,
    WorkerThreadError,
)

__all__ = [
    "DocumentMatcher",
    "ExecuteOperation",
    "MismatchError",
    "Stop",
    "WorkerThread",
    "WorkerThreadError",
    "load_matcher",
    "merge_uri_options",
]
