"""Bundled data files for recyclectl."""
