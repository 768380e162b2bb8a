"""A teaching database engine: CSV relations, a '#' schema catalogue, simple queries and a simulated, file-backed disk."""

__version__ = "0.1.0"