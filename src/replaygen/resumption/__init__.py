"""Resumption module for persisted generators.

This module provides:
- A registry of named generator factories
- Start/resume by storage key
- A checkpointing driver
"""

from .manager import ResumptionManager, RunResult

__all__ = [
    "ResumptionManager",
    "RunResult",
]
