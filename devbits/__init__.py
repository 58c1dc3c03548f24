"""Helpers for developer tooling: source messages, linter output, Go package indexes, compiler core JSON models and 3D spatial types."""

__version__ = "0.1.0"