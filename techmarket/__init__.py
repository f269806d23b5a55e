"""Benchmark harness comparing PostgreSQL, MongoDB and Cassandra on the TechMarket e-commerce schema."""

__version__ = "0.1.0"
