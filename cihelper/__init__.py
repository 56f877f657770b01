"""Release metadata and build helper for CI pipelines."""

__version__ = "0.1.0"
