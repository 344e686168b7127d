"""Semantic version tagging for CI, driven by conventional commits."""
