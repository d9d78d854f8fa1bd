"""Fixed-size character windows with overlap.

    chunk_text("abcdefgh", size=4, overlap=1) -> ["abcd", "defg", "gh"]
"""

from typing import List

from support_rag.core.exceptions import ConfigurationError

__all__ = ["chunk_text"]


def chunk_text(text: str, size: int = 500, overlap: int = 50) -> List[str]:
    """Split *text* into windows of at most *size* characters.

    Each window starts ``size - overlap`` characters after the previous one,
    so consecutive windows share *overlap* characters. Empty text gives an
    empty list.
    """
    if size <= 0:
        raise ConfigurationError("Chunk size must be positive", details={"size": size})
    if overlap < 0 or overlap >= size:
        raise ConfigurationError(
            "Chunk overlap must be >= 0 and smaller than chunk size",
            details={"size": size, "overlap": overlap},
        )

    step = size - overlap
    return [text[start : start + size] for start in range(0, len(text), step)]
