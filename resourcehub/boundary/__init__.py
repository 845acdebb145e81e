"""Boundary adapters: relational database and object storage."""
