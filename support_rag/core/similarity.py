from typing import Sequence

import numpy as np


def cosine_similarity(a: Sequence[float], b: Sequence[float]) -> float:
    """
    Cosine similarity of two equal-length vectors.

    Returns 0.0 when either vector has zero magnitude, so degenerate
    embeddings never outrank a real match. The result is clipped to [-1, 1].
    """
    vec_a = np.asarray(a, dtype=np.float64)
    vec_b = np.asarray(b, dtype=np.float64)
    if vec_a.shape != vec_b.shape:
        raise ValueError(f"Vector length mismatch: {vec_a.shape[0]} != {vec_b.shape[0]}")

    norm = np.linalg.norm(vec_a) * np.linalg.norm(vec_b)
    if norm == 0.0:
        return 0.0
    return float(np.clip(np.dot(vec_a, vec_b) / norm, -1.0, 1.0))
