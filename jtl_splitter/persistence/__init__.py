"""Parsing, statistics, and output for JTL records."""
