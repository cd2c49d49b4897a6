"""
Test suite for the text chunker.

Covers parameter validation, boundary cases, the documented scenario and
the reconstruction property over seeded random inputs.

System role: Verification of lesson chunking
"""

import math
import random
import string

import pytest

from dsa_assistant.core.chunker import chunk_text, validate_chunk_params
from dsa_assistant.core.exceptions import InvalidArgumentError


def reconstruct(chunks, overlap: int) -> str:
    """Join chunk 0 with the non-overlapping suffix of each later chunk."""
    if not chunks:
        return ""
    return chunks[0].text + "".join(chunk.text[overlap:] for chunk in chunks[1:])


class TestValidateChunkParams:
    """Test suite for validate_chunk_params()."""

    @pytest.mark.parametrize(
        "chunk_size, overlap, field",
        [
            (0, 0, "chunk_size"),
            (-5, 0, "chunk_size"),
            (10, -1, "chunk_overlap"),
            (10, 10, "chunk_overlap"),
            (10, 15, "chunk_overlap"),
        ],
    )
    def test_invalid_params_should_raise(self, chunk_size: int, overlap: int, field: str) -> None:
        """Test invalid size/overlap combinations are rejected with the offending field."""
        # Act / Assert
        with pytest.raises(InvalidArgumentError) as exc_info:
            validate_chunk_params(chunk_size, overlap)

        assert exc_info.value.details["field"] == field

    def test_valid_params_should_pass(self) -> None:
        """Test the largest valid overlap is accepted."""
        validate_chunk_params(10, 9)

    def test_chunk_text_validates_before_empty_check(self) -> None:
        """Test bad params fail even when there is no text to chunk."""
        with pytest.raises(InvalidArgumentError):
            chunk_text("", 0, 0)


class TestChunkText:
    """Test suite for chunk_text()."""

    @pytest.mark.parametrize("text", ["", None])
    def test_empty_text_should_return_no_chunks(self, text) -> None:
        """Test empty or missing text yields an empty list."""
        assert chunk_text(text, 4, 1) == []

    def test_short_text_should_return_single_chunk(self) -> None:
        """Test text no longer than chunk_size is returned whole."""
        # Act
        chunks = chunk_text("ABCD", 4, 1)

        # Assert
        assert len(chunks) == 1
        assert chunks[0].text == "ABCD"
        assert chunks[0].index == 0

    def test_documented_scenario(self) -> None:
        """Test ABCDEFGHIJ with size 4 and overlap 1."""
        # Act
        chunks = chunk_text("ABCDEFGHIJ", chunk_size=4, overlap=1)

        # Assert
        assert [chunk.text for chunk in chunks] == ["ABCD", "DEFG", "GHIJ"]
        assert [chunk.index for chunk in chunks] == [0, 1, 2]

    def test_final_chunk_may_be_shorter(self) -> None:
        """Test the last window ends at the end of the text."""
        # Act
        chunks = chunk_text("ABCDEFGHIJK", chunk_size=4, overlap=1)

        # Assert
        assert [chunk.text for chunk in chunks] == ["ABCD", "DEFG", "GHIJ", "JK"]

    def test_zero_overlap_should_partition_text(self) -> None:
        """Test chunks without overlap are disjoint."""
        chunks = chunk_text("ABCDEFGH", chunk_size=3, overlap=0)

        assert [chunk.text for chunk in chunks] == ["ABC", "DEF", "GH"]

    def test_adjacent_full_chunks_share_overlap(self) -> None:
        """Test neighbouring full-length chunks share exactly `overlap` characters."""
        # Arrange
        text = string.ascii_letters * 3
        overlap = 7

        # Act
        chunks = chunk_text(text, chunk_size=20, overlap=overlap)

        # Assert
        for left, right in zip(chunks, chunks[1:]):
            if len(left.text) == 20 and len(right.text) == 20:
                assert left.text[-overlap:] == right.text[:overlap]


class TestChunkProperties:
    """Property checks over seeded random inputs."""

    @pytest.mark.parametrize("seed", range(25))
    def test_round_trip_bound_and_count(self, seed: int) -> None:
        """Test reconstruction, size bound, contiguous indices and chunk count."""
        # Arrange
        rng = random.Random(seed)
        chunk_size = rng.randint(1, 60)
        overlap = rng.randint(0, chunk_size - 1)
        length = rng.randint(0, 400)
        text = "".join(rng.choice(string.printable) for _ in range(length))

        # Act
        chunks = chunk_text(text, chunk_size, overlap)

        # Assert
        assert reconstruct(chunks, overlap) == text
        assert all(len(chunk.text) <= chunk_size for chunk in chunks)
        assert [chunk.index for chunk in chunks] == list(range(len(chunks)))
        if length == 0:
            assert chunks == []
        elif length <= chunk_size:
            assert len(chunks) == 1
        else:
            step = chunk_size - overlap
            assert len(chunks) == math.ceil((length - overlap) / step)
