"""
Similarity search backends.

Exports:
  - LinearScanIndex: Exhaustive cosine scan over the embedding store
"""

from dsa_assistant.boundary.vdb.linear_scan_index import LinearScanIndex

__all__ = ["LinearScanIndex"]
