"""Application layer: services orchestrating the Q&A and indexing pipelines."""
