"""Splits contract text into bounded-size segments for single model calls.

Splitting is purely positional: a chunk boundary may fall mid-sentence.
"""

from lexisense.analysis.models import AnalysisChunk

DEFAULT_MAX_CHUNK_CHARS = 80_000


def chunk_text(text: str, max_chunk_chars: int = DEFAULT_MAX_CHUNK_CHARS) -> list[str]:
    """Split *text* into contiguous, non-overlapping segments.

    Concatenating the returned segments reproduces *text* exactly. Empty text
    yields a single empty segment so downstream stages always see one chunk.

    Raises:
        ValueError: if max_chunk_chars is not positive.
    """
    if max_chunk_chars <= 0:
        raise ValueError(f"max_chunk_chars must be positive, got {max_chunk_chars}")
    if not text:
        return [""]
    return [
        text[start:start + max_chunk_chars]
        for start in range(0, len(text), max_chunk_chars)
    ]


def build_chunks(
    text: str,
    max_chunk_chars: int = DEFAULT_MAX_CHUNK_CHARS,
) -> list[AnalysisChunk]:
    """Split *text* and pair each segment with its sequence index."""
    return [
        AnalysisChunk(index=i, text=segment)
        for i, segment in enumerate(chunk_text(text, max_chunk_chars))
    ]
