"""Content writer/reader for Neo4j."""

__version__ = "1.0.0"
