"""
Command line tool for rendering workflow graphs as Pegasus DAX documents.
"""

import json
import sys

import click
import yaml

from workflow_dag.core.config import get_settings
from workflow_dag.core.logging import bind_graph_id, clear_graph_id, configure_logging
from workflow_dag.graph import DAGFactory, GraphError
from workflow_dag.xml_output import DaxRenderer, XMLError


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose logging")
def cli(verbose):
    """Workflow graph tooling for Pegasus DAX output."""
    configure_logging(get_settings(), level="DEBUG" if verbose else None)


@cli.command()
@click.argument("graph_file", type=click.Path(exists=True, dir_okay=False))
@click.argument("output", type=click.Path(dir_okay=False, writable=True))
@click.option("--encoding", "-e", help="Output charset (default from settings)")
@click.option("--pretty/--compact", default=None, help="Indent nested elements")
def render(graph_file, output, encoding, pretty):
    """Render GRAPH_FILE (JSON or YAML) as a DAX document in OUTPUT."""
    config = get_settings().to_dax_config()
    if encoding:
        config.encoding = encoding
    if pretty is not None:
        config.pretty_print = pretty

    try:
        dag = DAGFactory.from_file(graph_file)
        bind_graph_id(dag.graph_id)
        result = DaxRenderer(config).render_document(dag, output)
    except (GraphError, XMLError) as e:
        click.echo(f"❌ Rendering failed: {e}", err=True)
        sys.exit(1)
    finally:
        clear_graph_id()

    click.echo(f"✅ {result.summary()}: {output}")


@cli.command()
@click.argument("graph_file", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--format",
    "-f",
    type=click.Choice(["json", "yaml"]),
    default="yaml",
    help="Output format",
)
def summary(graph_file, format):
    """Show statistics for the graph described in GRAPH_FILE."""
    try:
        dag = DAGFactory.from_file(graph_file)
    except GraphError as e:
        click.echo(f"❌ Error loading graph: {e}", err=True)
        sys.exit(1)

    stats = dag.get_statistics().to_dict()

    if format == "json":
        click.echo(json.dumps(stats, indent=2))
    else:
        click.echo(yaml.dump(stats, default_flow_style=False))


if __name__ == "__main__":
    cli()
