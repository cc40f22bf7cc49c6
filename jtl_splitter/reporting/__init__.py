"""Tabular reports built from phase summaries."""
