"""DSA learning platform assistant: retrieval-augmented Q&A over lesson content."""
