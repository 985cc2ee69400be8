"""
Workflow Graph Module.

This module implements the workflow dependency graph consumed by the
document renderers: ordered vertices carrying a unit of work (input and
output files), and ordered edges between them, with a NetworkX mirror for
structural queries.
"""

from .dag import WorkflowDAG
from .factory import DAGFactory
from .types import (
    DAGStats,
    Edge,
    FileParam,
    GraphError,
    ProcessConfig,
    SerializedDAG,
    Vertex,
)

__all__ = [
    # Core classes
    "WorkflowDAG",
    "DAGFactory",
    # Data types
    "Vertex",
    "Edge",
    "ProcessConfig",
    "FileParam",
    "SerializedDAG",
    "DAGStats",
    # Exceptions
    "GraphError",
]
