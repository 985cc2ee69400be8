"""
Workflow graph tooling: build job dependency graphs and render them as
Pegasus DAX documents.
"""

__version__ = "0.1.0"
