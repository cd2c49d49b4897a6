"""
Core retrieval-augmented Q&A building blocks.

Pure domain logic: chunking, similarity search, confidence scoring,
context assembly, chapter attribution and per-user rate limiting.
"""
