"""Bundled data files for batchctl."""
