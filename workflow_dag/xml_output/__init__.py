"""
XML output generation for workflow graphs.

This module renders a workflow graph as a Pegasus DAX 3.6 document:
- Streaming output through lxml's incremental writer
- Deterministic job and dependency ordering
- "tbd" placeholders for runtimes and file sizes
"""

from .renderer import DaxRenderer, job_name, uses_attributes
from .types import (
    ConfigurationError,
    DaxConfig,
    OutputError,
    PreconditionViolation,
    RenderResult,
    XMLError,
)

__all__ = [
    # Core classes
    "DaxRenderer",
    # Helpers
    "job_name",
    "uses_attributes",
    # Configuration
    "DaxConfig",
    "RenderResult",
    # Exceptions
    "XMLError",
    "PreconditionViolation",
    "OutputError",
    "ConfigurationError",
]
