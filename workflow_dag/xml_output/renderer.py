"""
Pegasus DAX renderer for workflow graphs.
"""

import time
from contextlib import ExitStack
from pathlib import Path
from typing import Any, BinaryIO, Dict, Optional, Union

import structlog
from lxml import etree

from ..graph import Edge, FileParam, Vertex, WorkflowDAG
from .types import (
    ConfigurationError, DaxConfig, OutputError, PreconditionViolation, RenderResult
)


logger = structlog.get_logger(__name__)

DAX_VERSION = "3.6"
DAX_NAMESPACE = "http://pegasus.isi.edu/schema/DAX"
XSI_NAMESPACE = "http://www.w3.org/2001/XMLSchema-instance"
XSI_SCHEMA_LOCATION = "http://pegasus.isi.edu/schema/DAX http://pegasus.isi.edu/schema/dax-3.6.xsd"

# Runtimes and file sizes are not computed
PLACEHOLDER = "tbd"


def _dax(tag: str) -> str:
    return f"{{{DAX_NAMESPACE}}}{tag}"


def job_name(vertex: Vertex) -> str:
    """Display name of a job: its label, or its identifier when unlabelled."""
    return vertex.label if vertex.label else vertex.name


def uses_attributes(param: FileParam, link: str) -> Dict[str, str]:
    """Attributes of the ``uses`` element declaring a job's file."""
    return {
        "file": param.name,
        "link": link,
        "register": "true",
        "transfer": "true",
        "optional": "false",
        "type": "data",
        "size": PLACEHOLDER,
    }


class _GuardedSink:
    """Forward writes to a destination, holding on to the first failure."""

    def __init__(self, destination: BinaryIO):
        self.destination = destination
        self.error: Optional[Exception] = None

    def write(self, data: bytes) -> None:
        if self.error is not None:
            return
        try:
            self.destination.write(data)
        except Exception as e:
            # lxml does not propagate exceptions raised by file-like writers
            self.error = e
            raise


class DaxRenderer:
    """
    Render a workflow graph as a Pegasus DAX document.

    The document is streamed through ``lxml.etree.xmlfile`` in one pass:
    every vertex becomes a ``job`` with its input and output files as
    ``uses`` children, then every edge ``a -> b`` becomes
    ``<child ref="b"><parent ref="a"/></child>``.

    Only ``dag.vertices`` and ``dag.edges`` are read, so any read-only
    view exposing those two ordered sequences can be rendered.
    """

    def __init__(self, config: Optional[DaxConfig] = None):
        self.config = config or DaxConfig()
        self.logger = logger.bind(component="DaxRenderer")

    def render_document(self, dag: WorkflowDAG, file: Union[str, Path]) -> RenderResult:
        """Render the graph into the file at ``file``."""
        return self.render(dag, file)

    def render(self, dag: WorkflowDAG, destination: Union[str, Path, BinaryIO],
               close: bool = False) -> RenderResult:
        """
        Render the graph into a destination.

        Args:
            dag: Graph to render, left unmodified
            destination: File path, or a binary file-like object
            close: Close a file-like destination when done. Paths are
                always opened and closed here.

        Returns:
            Render result with element counts

        Raises:
            PreconditionViolation: An edge is missing an endpoint
            OutputError: The destination cannot be written
            ConfigurationError: The configured encoding is unknown
        """
        encoding = self.config.canonical_encoding()
        start_time = time.time()
        graph_id = getattr(dag, "graph_id", None)

        self.logger.info("Starting DAX rendering",
                         graph_id=graph_id,
                         vertices=len(dag.vertices),
                         encoding=encoding)

        try:
            if isinstance(destination, (str, Path)):
                with open(destination, "wb") as output_file:
                    counts = self._write_document(dag, output_file, encoding)
            else:
                try:
                    counts = self._write_document(dag, destination, encoding)
                finally:
                    destination.flush()
                    if close:
                        destination.close()

        except PreconditionViolation as e:
            self.logger.error("Invalid graph for DAX rendering",
                              error=str(e), edge_index=e.edge_index)
            raise
        except ConfigurationError as e:
            self.logger.error("Encoding not supported by XML writer",
                              encoding=encoding, error=str(e))
            raise
        except OutputError as e:
            self.logger.error("Error writing DAX document", error=str(e))
            raise
        except (OSError, etree.SerialisationError) as e:
            self.logger.error("Error writing DAX document", error=str(e), exc_info=True)
            raise OutputError(f"Failed to write DAX document: {e}") from e

        result = RenderResult(
            encoding=encoding,
            render_time=time.time() - start_time,
            **counts
        )

        self.logger.info("DAX rendering completed",
                         graph_id=graph_id,
                         jobs=result.jobs_written,
                         dependencies=result.dependencies_written,
                         render_time=result.render_time)
        return result

    def _write_document(self, dag: WorkflowDAG, output_file: BinaryIO,
                        encoding: str) -> Dict[str, int]:
        counts = {"jobs_written": 0, "uses_written": 0, "dependencies_written": 0}
        sink = _GuardedSink(output_file)

        with ExitStack() as stack:
            try:
                xf = stack.enter_context(etree.xmlfile(sink, encoding=encoding))
            except LookupError as e:
                # known to Python codecs but not to libxml2
                raise ConfigurationError(f"Unsupported encoding for XML output: {encoding}") from e

            xf.write_declaration(version="1.0")

            root_attrib = {
                f"{{{XSI_NAMESPACE}}}schemaLocation": XSI_SCHEMA_LOCATION,
                "version": DAX_VERSION,
            }
            nsmap = {None: DAX_NAMESPACE, "xsi": XSI_NAMESPACE}

            with xf.element(_dax("adag"), root_attrib, nsmap=nsmap):
                for vertex in dag.vertices:
                    self._newline(xf, 1)
                    counts["uses_written"] += self._render_vertex(xf, vertex)
                    counts["jobs_written"] += 1

                for index, edge in enumerate(dag.edges):
                    self._newline(xf, 1)
                    self._render_edge(xf, edge, index)
                    counts["dependencies_written"] += 1

                if counts["jobs_written"] or counts["dependencies_written"]:
                    self._newline(xf, 0)

        if sink.error is not None:
            raise OutputError(f"Failed to write DAX document: {sink.error}") from sink.error

        return counts

    def _render_vertex(self, xf: Any, vertex: Vertex) -> int:
        """Write one job element; returns the number of uses written."""
        # <job id="ID00000" name="fastqSplit_chr21" runtime="tbd">
        #   <uses file="chr210.sfq" link="input" register="true" .../>
        # </job>
        attrib = {
            "id": vertex.name,
            "name": job_name(vertex),
            "runtime": PLACEHOLDER,
        }

        uses = []
        if vertex.process is not None:
            uses.extend(uses_attributes(p, "input") for p in vertex.process.inputs)
            uses.extend(uses_attributes(p, "output") for p in vertex.process.outputs)

        with xf.element(_dax("job"), attrib):
            for uses_attrib in uses:
                self._newline(xf, 2)
                with xf.element(_dax("uses"), uses_attrib):
                    pass
            if uses:
                self._newline(xf, 1)

        return len(uses)

    def _render_edge(self, xf: Any, edge: Edge, index: int) -> None:
        # <child ref="ID00001">
        #   <parent ref="ID00000"/>
        # </child>
        if edge.from_vertex is None or edge.to_vertex is None:
            missing = "source" if edge.from_vertex is None else "target"
            raise PreconditionViolation(
                f"Edge #{index} ({getattr(edge, 'label', None) or 'unlabelled'}) has no {missing} vertex",
                edge_index=index
            )

        with xf.element(_dax("child"), {"ref": edge.to_vertex.name}):
            self._newline(xf, 2)
            with xf.element(_dax("parent"), {"ref": edge.from_vertex.name}):
                pass
            self._newline(xf, 1)

    def _newline(self, xf: Any, depth: int) -> None:
        if self.config.pretty_print:
            xf.write("\n" + " " * (self.config.indent_size * depth))
