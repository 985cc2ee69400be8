"""
Workflow dependency graph backed by NetworkX.
"""

from typing import Any, Dict, List, Optional
import uuid

import networkx as nx
import structlog

from .types import (
    DAGStats, Edge, GraphError, ProcessConfig, SerializedDAG, Vertex
)


logger = structlog.get_logger(__name__)


class WorkflowDAG:
    """
    Directed acyclic graph of workflow jobs and their dependencies.

    Vertices and edges keep their insertion order, which is the order
    renderers visit them in. Complete edges are mirrored into a NetworkX
    DiGraph for structural queries.
    """

    def __init__(self, graph_id: Optional[str] = None):
        """
        Initialize workflow graph.

        Args:
            graph_id: Unique identifier for the graph
        """
        self.graph_id = graph_id or str(uuid.uuid4())

        self._vertices: Dict[str, Vertex] = {}
        self._edges: List[Edge] = []
        self.graph = nx.DiGraph()

        self.metadata: Dict[str, Any] = {}

        self.logger = logger.bind(
            component="WorkflowDAG",
            graph_id=self.graph_id[:8]
        )

    # Vertex management
    def add_vertex(self, name: Optional[str] = None, label: Optional[str] = None,
                   process: Optional[ProcessConfig] = None) -> Vertex:
        """
        Add a vertex to the graph.

        Args:
            name: Vertex identifier, ``p<index>`` when omitted
            label: Display label
            process: Inputs and outputs of the vertex's unit of work

        Returns:
            The new vertex
        """
        if name is None:
            name = f"p{len(self._vertices)}"

        if name in self._vertices:
            raise GraphError(f"Vertex '{name}' already exists", self.graph_id, name)

        vertex = Vertex(name=name, label=label, process=process)
        self._vertices[name] = vertex
        self.graph.add_node(name)

        self.logger.debug("Added vertex to graph", vertex=name, label=label)
        return vertex

    def get_vertex(self, name: str) -> Optional[Vertex]:
        """Get a vertex by name, or None if not found."""
        return self._vertices.get(name)

    # Edge management
    def add_edge(self, from_name: Optional[str], to_name: Optional[str],
                 label: Optional[str] = None) -> Edge:
        """
        Add a dependency between two vertices.

        Args:
            from_name: Upstream vertex name, or None for an external source
            to_name: Downstream vertex name, or None for an unconsumed output
            label: Channel label

        Returns:
            The new edge
        """
        from_vertex = self._resolve(from_name)
        to_vertex = self._resolve(to_name)

        edge = Edge(from_vertex=from_vertex, to_vertex=to_vertex, label=label)
        self._edges.append(edge)

        if edge.is_complete:
            self.graph.add_edge(from_name, to_name)

        self.logger.debug("Added edge to graph", source=from_name, target=to_name)
        return edge

    def _resolve(self, name: Optional[str]) -> Optional[Vertex]:
        if name is None:
            return None
        vertex = self._vertices.get(name)
        if vertex is None:
            raise GraphError(f"Vertex '{name}' not found", self.graph_id, name)
        return vertex

    # Graph analysis
    def is_acyclic(self) -> bool:
        """Check that the complete edges form a DAG."""
        return nx.is_directed_acyclic_graph(self.graph)

    def topological_order(self) -> List[str]:
        """
        Get vertex names in dependency order.

        Raises:
            GraphError: If the graph contains a cycle
        """
        try:
            return list(nx.topological_sort(self.graph))
        except nx.NetworkXUnfeasible as e:
            self.logger.error("Graph contains a cycle", error=str(e))
            raise GraphError(f"Graph is not acyclic: {e}", self.graph_id) from e

    def get_statistics(self) -> DAGStats:
        """Get graph statistics."""
        input_count = 0
        output_count = 0
        for vertex in self._vertices.values():
            if vertex.process is not None:
                input_count += len(vertex.process.inputs)
                output_count += len(vertex.process.outputs)

        return DAGStats(
            vertex_count=len(self._vertices),
            edge_count=len(self._edges),
            dangling_edge_count=sum(1 for e in self._edges if not e.is_complete),
            input_count=input_count,
            output_count=output_count,
            is_acyclic=self.is_acyclic(),
        )

    # Serialization
    def to_serialized(self) -> SerializedDAG:
        """Convert graph to serialized representation."""
        return SerializedDAG(
            graph_id=self.graph_id,
            vertices=[v.to_dict() for v in self._vertices.values()],
            edges=[e.to_dict() for e in self._edges],
            metadata=self.metadata,
        )

    @classmethod
    def from_serialized(cls, serialized: SerializedDAG) -> "WorkflowDAG":
        """Create graph from serialized representation."""
        try:
            dag = cls(graph_id=serialized.graph_id)
            dag.metadata = dict(serialized.metadata)

            for vertex_data in serialized.vertices:
                process = vertex_data.get("process")
                dag.add_vertex(
                    name=vertex_data.get("name"),
                    label=vertex_data.get("label"),
                    process=ProcessConfig.from_dict(process) if process is not None else None,
                )

            for edge_data in serialized.edges:
                dag.add_edge(edge_data.get("from"), edge_data.get("to"),
                             label=edge_data.get("label"))

            logger.debug(
                "Loaded serialized graph",
                graph_id=dag.graph_id[:8],
                vertices=len(serialized.vertices),
                edges=len(serialized.edges)
            )
            return dag

        except GraphError:
            raise
        except (KeyError, TypeError, AttributeError) as e:
            logger.error("Error loading serialized graph", error=str(e))
            raise GraphError(f"Failed to load serialized graph: {e}", serialized.graph_id) from e

    # Properties
    @property
    def vertices(self) -> List[Vertex]:
        """Vertices in insertion order."""
        return list(self._vertices.values())

    @property
    def edges(self) -> List[Edge]:
        """Edges in insertion order."""
        return list(self._edges)

    @property
    def is_empty(self) -> bool:
        """Check if graph is empty."""
        return not self._vertices

    def __len__(self) -> int:
        """Get vertex count."""
        return len(self._vertices)

    def __contains__(self, name: str) -> bool:
        """Check if vertex exists in graph."""
        return name in self._vertices

    def __repr__(self) -> str:
        return (
            f"WorkflowDAG(id={self.graph_id[:8]}, "
            f"vertices={len(self._vertices)}, edges={len(self._edges)})"
        )
