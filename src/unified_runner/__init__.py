"""Unified test format runner: requirement evaluation and expectation verification."""

__version__ = "0.1.0"
