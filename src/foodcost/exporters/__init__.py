"""Exporters package — render recipe summaries for printing."""
from foodcost.exporters.markdown import render_markdown

__all__ = ["render_markdown"]
