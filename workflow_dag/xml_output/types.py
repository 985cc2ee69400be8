"""
Type definitions for XML output module.
"""

import codecs
from dataclasses import dataclass
from typing import Optional


class XMLError(Exception):
    """Base exception for XML output errors."""
    pass


class PreconditionViolation(XMLError):
    """The graph handed to a renderer breaks its input contract."""

    def __init__(self, message: str, edge_index: Optional[int] = None):
        self.edge_index = edge_index
        super().__init__(message)


class OutputError(XMLError):
    """The destination could not be opened, written or closed."""
    pass


class ConfigurationError(XMLError):
    """Invalid renderer configuration."""
    pass


@dataclass
class DaxConfig:
    """Configuration for DAX document rendering."""

    # Charset for the declaration and the bytes written
    encoding: str = "UTF-8"

    # Compact output matches a plain stream writer; pretty indents nesting
    pretty_print: bool = False
    indent_size: int = 2

    @classmethod
    def for_production(cls) -> "DaxConfig":
        """Create configuration optimized for machine consumption."""
        return cls(pretty_print=False)

    @classmethod
    def for_debugging(cls) -> "DaxConfig":
        """Create configuration optimized for reading the output."""
        return cls(pretty_print=True)

    def canonical_encoding(self) -> str:
        """
        Resolve the configured encoding to the name written in the
        XML declaration.

        Raises:
            ConfigurationError: If the encoding is unknown
        """
        try:
            info = codecs.lookup(self.encoding)
        except LookupError as e:
            raise ConfigurationError(f"Unknown encoding: {self.encoding!r}") from e

        name = info.name.upper()
        if name.startswith("ISO8859-"):
            name = "ISO-8859-" + name[len("ISO8859-"):]
        return name


@dataclass
class RenderResult:
    """Result of rendering a graph to a document."""

    encoding: str
    render_time: float

    # Statistics
    jobs_written: int = 0
    uses_written: int = 0
    dependencies_written: int = 0

    def summary(self) -> str:
        """Get rendering summary."""
        return (
            f"DAX rendering successful: "
            f"{self.jobs_written} jobs, "
            f"{self.uses_written} file uses, "
            f"{self.dependencies_written} dependencies ({self.encoding})"
        )
