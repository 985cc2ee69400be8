"""
Factory methods for building workflow graphs from descriptions.
"""

from pathlib import Path
from typing import Any, Dict, Union
import json
import uuid

import structlog
import yaml

from .dag import WorkflowDAG
from .types import GraphError, ProcessConfig, SerializedDAG


logger = structlog.get_logger(__name__)


class DAGFactory:
    """
    Factory for creating workflow graphs from JSON or YAML descriptions.

    A description holds an ordered ``vertices`` list and an ordered
    ``edges`` list::

        vertices:
          - name: align
            label: Align reads
            inputs: [reads.fq]
            outputs: [aligned.bam]
        edges:
          - {from: align, to: call}

    A vertex may carry its files under a ``process`` mapping instead, which
    is the form ``WorkflowDAG.to_serialized`` produces.
    """

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> WorkflowDAG:
        """
        Create workflow graph from a description mapping.

        Args:
            data: Graph description

        Returns:
            Workflow graph with vertices and edges in description order
        """
        if not isinstance(data, dict):
            raise GraphError("Graph description must be a mapping")

        vertices = []
        for vertex_data in data.get("vertices") or []:
            vertex_data = dict(vertex_data)
            if "process" not in vertex_data and (
                "inputs" in vertex_data or "outputs" in vertex_data
            ):
                vertex_data["process"] = ProcessConfig.from_dict({
                    "inputs": vertex_data.pop("inputs", []),
                    "outputs": vertex_data.pop("outputs", []),
                }).to_dict()
            vertices.append(vertex_data)

        serialized = SerializedDAG(
            graph_id=data.get("graph_id") or str(uuid.uuid4()),
            vertices=vertices,
            edges=list(data.get("edges") or []),
            metadata=dict(data.get("metadata") or {}),
        )

        dag = WorkflowDAG.from_serialized(serialized)

        logger.debug(
            "Created graph from description",
            vertices=len(dag),
            edges=len(serialized.edges)
        )
        return dag

    @staticmethod
    def from_file(file_path: Union[str, Path]) -> WorkflowDAG:
        """
        Load a workflow graph description from a JSON or YAML file.

        Args:
            file_path: Path to a ``.json``, ``.yaml`` or ``.yml`` file

        Returns:
            Workflow graph
        """
        path = Path(file_path)
        try:
            with open(path, "r", encoding="utf-8") as f:
                if path.suffix.lower() in (".yaml", ".yml"):
                    data = yaml.safe_load(f)
                else:
                    data = json.load(f)
        except (OSError, ValueError, yaml.YAMLError) as e:
            logger.error("Error loading graph description", file_path=str(path), error=str(e))
            raise GraphError(f"Failed to load graph from {path}: {e}") from e

        dag = DAGFactory.from_dict(data)
        dag.metadata.setdefault("source", str(path))

        logger.info("Loaded graph description", file_path=str(path), vertices=len(dag))
        return dag
