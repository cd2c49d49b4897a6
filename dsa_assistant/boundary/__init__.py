"""Boundary adapters: database, model providers and similarity search."""
