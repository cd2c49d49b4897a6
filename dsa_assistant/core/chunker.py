"""
Fixed-window text chunker with overlap.

Splits lesson text into windows of ``chunk_size`` characters, each window
starting ``chunk_size - overlap`` characters after the previous one. The
final window may be shorter and ends exactly at the end of the text.

Dependencies: dsa_assistant.core.schemas, dsa_assistant.core.exceptions
System role: First stage of lesson ingestion
"""

from dsa_assistant.core.exceptions import InvalidArgumentError
from dsa_assistant.core.schemas import TextChunk


def validate_chunk_params(chunk_size: int, overlap: int) -> None:
    """
    Check chunking parameters.

    Args:
        chunk_size: Maximum characters per chunk
        overlap: Characters shared by adjacent chunks

    Raises:
        InvalidArgumentError: When chunk_size <= 0 or overlap is outside [0, chunk_size)
    """
    if chunk_size <= 0:
        raise InvalidArgumentError("Chunk size must be positive", field="chunk_size")
    if overlap < 0:
        raise InvalidArgumentError("Overlap cannot be negative", field="chunk_overlap")
    if overlap >= chunk_size:
        raise InvalidArgumentError(
            "Overlap must be less than chunk size", field="chunk_overlap"
        )


def chunk_text(text: str | None, chunk_size: int, overlap: int) -> list[TextChunk]:
    """
    Split text into overlapping fixed-size chunks.

    Args:
        text: Source text (None or empty yields no chunks)
        chunk_size: Maximum characters per chunk
        overlap: Characters shared by adjacent chunks

    Returns:
        list[TextChunk]: Chunks indexed 0..n-1. Concatenating chunk 0 with the
        text after the first ``overlap`` characters of every later chunk
        reproduces the input.

    Raises:
        InvalidArgumentError: When the parameters are invalid
    """
    validate_chunk_params(chunk_size, overlap)

    if not text:
        return []

    text_length = len(text)
    if text_length <= chunk_size:
        return [TextChunk(text=text, index=0)]

    step = chunk_size - overlap
    chunks: list[TextChunk] = []
    position = 0

    while True:
        end = min(position + chunk_size, text_length)
        chunks.append(TextChunk(text=text[position:end], index=len(chunks)))
        if end == text_length:
            break
        position += step

    return chunks
