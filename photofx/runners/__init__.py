"""Runners that drive effect pipelines over files."""
