"""Plots of split JTL files."""
