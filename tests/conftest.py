import json
from pathlib import Path

import pytest
import yaml

from workflow_dag.graph import ProcessConfig, WorkflowDAG


@pytest.fixture
def two_job_dag() -> WorkflowDAG:
    """A consumes x, B produces y, and A runs before B."""
    dag = WorkflowDAG(graph_id="two-job-graph")
    dag.add_vertex("A", process=ProcessConfig.of(inputs=["x"]))
    dag.add_vertex("B", process=ProcessConfig.of(inputs=[], outputs=["y"]))
    dag.add_edge("A", "B")
    return dag


@pytest.fixture
def genome_dag() -> WorkflowDAG:
    """Split / align / merge workflow with labels and shared files."""
    dag = WorkflowDAG(graph_id="genome-graph")
    dag.add_vertex("split", label="fastqSplit_chr21",
                   process=ProcessConfig.of(inputs=["chr21.sfq"],
                                            outputs=["chr21.0.sfq", "chr21.1.sfq"]))
    dag.add_vertex("align0", label="",
                   process=ProcessConfig.of(inputs=["chr21.0.sfq", "ref.fa"],
                                            outputs=["chr21.0.bam"]))
    dag.add_vertex("align1", label=None,
                   process=ProcessConfig.of(inputs=["chr21.1.sfq", "ref.fa"],
                                            outputs=["chr21.1.bam"]))
    dag.add_vertex("merge", label="mergeBam",
                   process=ProcessConfig.of(inputs=["chr21.0.bam", "chr21.1.bam"],
                                            outputs=["chr21.bam"]))
    dag.add_edge("split", "align0", label="chunks")
    dag.add_edge("align0", "merge")
    dag.add_edge("split", "align1", label="chunks")
    dag.add_edge("align1", "merge")
    return dag


@pytest.fixture
def graph_description() -> dict:
    """Plain description of a two-step workflow."""
    return {
        "graph_id": "described-graph",
        "vertices": [
            {"name": "fetch", "label": "Fetch reads", "outputs": ["reads.fq"]},
            {"name": "count", "inputs": ["reads.fq"], "outputs": ["counts.tsv"]},
        ],
        "edges": [
            {"from": "fetch", "to": "count", "label": "reads"},
        ],
    }


@pytest.fixture
def yaml_graph_file(tmp_path: Path, graph_description: dict) -> Path:
    path = tmp_path / "graph.yaml"
    path.write_text(yaml.safe_dump(graph_description), encoding="utf-8")
    return path


@pytest.fixture
def json_graph_file(tmp_path: Path, graph_description: dict) -> Path:
    path = tmp_path / "graph.json"
    path.write_text(json.dumps(graph_description), encoding="utf-8")
    return path
