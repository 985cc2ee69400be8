"""
Type definitions for workflow graph module.
"""

import json
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


class GraphError(Exception):
    """Base exception for graph-related errors."""

    def __init__(
        self,
        message: str,
        graph_id: Optional[str] = None,
        vertex_name: Optional[str] = None,
    ):
        self.graph_id = graph_id
        self.vertex_name = vertex_name
        super().__init__(message)


@dataclass(frozen=True)
class FileParam:
    """A named data artifact consumed or produced by a process."""

    name: str

    # Not known until the workflow has run
    size: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        data: Dict[str, Any] = {"name": self.name}
        if self.size is not None:
            data["size"] = self.size
        return data

    @classmethod
    def from_dict(cls, data: Any) -> "FileParam":
        """Create from a dictionary or a bare file name."""
        if isinstance(data, str):
            return cls(name=data)
        return cls(name=data["name"], size=data.get("size"))


@dataclass(frozen=True)
class ProcessConfig:
    """Unit of work attached to a vertex: its ordered inputs and outputs."""

    inputs: List[FileParam] = field(default_factory=list)
    outputs: List[FileParam] = field(default_factory=list)

    @classmethod
    def of(cls, inputs: Optional[List[str]] = None,
           outputs: Optional[List[str]] = None) -> "ProcessConfig":
        """Build a process config from plain file names."""
        return cls(
            inputs=[FileParam(name) for name in inputs or []],
            outputs=[FileParam(name) for name in outputs or []],
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        return {
            "inputs": [p.to_dict() for p in self.inputs],
            "outputs": [p.to_dict() for p in self.outputs],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ProcessConfig":
        """Create from dictionary representation."""
        return cls(
            inputs=[FileParam.from_dict(p) for p in data.get("inputs", [])],
            outputs=[FileParam.from_dict(p) for p in data.get("outputs", [])],
        )


@dataclass(frozen=True)
class Vertex:
    """A job in the workflow graph."""

    name: str
    label: Optional[str] = None
    process: Optional[ProcessConfig] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        data: Dict[str, Any] = {"name": self.name}
        if self.label is not None:
            data["label"] = self.label
        if self.process is not None:
            data["process"] = self.process.to_dict()
        return data


@dataclass(frozen=True)
class Edge:
    """
    Directed dependency between two vertices.

    Either endpoint may be missing while the graph is being assembled
    (a channel fed from outside the workflow, or one nobody consumes).
    """

    from_vertex: Optional[Vertex]
    to_vertex: Optional[Vertex]
    label: Optional[str] = None

    @property
    def is_complete(self) -> bool:
        """Check if both endpoints are present."""
        return self.from_vertex is not None and self.to_vertex is not None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        data: Dict[str, Any] = {
            "from": self.from_vertex.name if self.from_vertex else None,
            "to": self.to_vertex.name if self.to_vertex else None,
        }
        if self.label is not None:
            data["label"] = self.label
        return data


@dataclass
class SerializedDAG:
    """Serialized representation of a workflow graph."""

    graph_id: str
    vertices: List[Dict[str, Any]]
    edges: List[Dict[str, Any]]

    # Additional metadata
    metadata: Dict[str, Any] = field(default_factory=dict)

    def to_json(self, indent: int = 2) -> str:
        """Convert to JSON string."""
        return json.dumps(self.__dict__, indent=indent, ensure_ascii=False)

    @classmethod
    def from_json(cls, json_str: str) -> "SerializedDAG":
        """Create from JSON string."""
        data = json.loads(json_str)
        return cls(**data)


@dataclass
class DAGStats:
    """Statistics about a workflow graph."""

    vertex_count: int
    edge_count: int
    dangling_edge_count: int
    input_count: int
    output_count: int
    is_acyclic: bool

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        return {
            "vertices": self.vertex_count,
            "edges": {
                "total": self.edge_count,
                "dangling": self.dangling_edge_count,
            },
            "files": {
                "inputs": self.input_count,
                "outputs": self.output_count,
            },
            "is_acyclic": self.is_acyclic,
        }
