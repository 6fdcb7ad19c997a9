"""
Confidence scoring and ranking of quadrilateral candidates
"""

import logging
from typing import List, Sequence, Tuple

import numpy as np

from .config import DetectionConfig, DEFAULT_CONFIG
from .exceptions import ConfigurationError

logger = logging.getLogger(__name__)


def polygon_area(polygon: np.ndarray) -> float:
    """Absolute shoelace area of a closed polygon given as (N, 2) points."""
    pts = np.asarray(polygon, dtype=np.float64).reshape(-1, 2)
    if len(pts) < 3:
        return 0.0
    x = pts[:, 0]
    y = pts[:, 1]
    return float(abs(np.dot(x, np.roll(y, -1)) - np.dot(y, np.roll(x, -1))) / 2.0)


def interior_angles(polygon: np.ndarray) -> np.ndarray:
    """
    Angle in degrees at every vertex, between the edges to its two neighbours.

    Values are in [0, 180]; a vertex with a zero-length edge gets 0.
    """
    pts = np.asarray(polygon, dtype=np.float64).reshape(-1, 2)
    prev_vec = np.roll(pts, 1, axis=0) - pts
    next_vec = np.roll(pts, -1, axis=0) - pts

    norms = np.linalg.norm(prev_vec, axis=1) * np.linalg.norm(next_vec, axis=1)
    dots = np.einsum("ij,ij->i", prev_vec, next_vec)

    with np.errstate(invalid="ignore", divide="ignore"):
        cosines = np.where(norms > 0, dots / norms, 1.0)
    return np.degrees(np.arccos(np.clip(cosines, -1.0, 1.0)))


def rectangularity_score(polygon: np.ndarray) -> float:
    """
    How close the interior angles are to 90 degrees.

    Each vertex scores 1 - |90 - angle| / 90; the mean is clamped to [0, 1].
    """
    angles = interior_angles(polygon)
    if len(angles) == 0:
        return 0.0
    per_vertex = 1.0 - np.abs(90.0 - angles) / 90.0
    return float(np.clip(per_vertex.mean(), 0.0, 1.0))


def score_polygon(
    polygon: np.ndarray,
    image_area: float,
    config: DetectionConfig = DEFAULT_CONFIG
) -> float:
    """
    Confidence in [0, 1] that the polygon is the intended subject.

    Relative size is weighted above angle regularity: a large, slightly
    skewed quadrilateral is usually the subject, a small perfect square
    usually is not.
    """
    if image_area <= 0:
        return 0.0

    size_score = min(1.0, polygon_area(polygon) / image_area)
    rect_score = rectangularity_score(polygon)
    confidence = config.size_weight * size_score + config.rectangularity_weight * rect_score
    return float(np.clip(confidence, 0.0, 1.0))


def rank_candidates(
    scored: Sequence[Tuple[np.ndarray, float]],
    max_results: int = DEFAULT_CONFIG.max_results
) -> List[Tuple[np.ndarray, float]]:
    """
    Sort (polygon, confidence) pairs by confidence, highest first.

    The sort is stable, so ties keep contour discovery order. The result
    holds at most max_results entries; an empty input gives an empty list.
    """
    if max_results < 0:
        raise ConfigurationError("max_results", max_results, "must not be negative")

    ranked = sorted(scored, key=lambda item: item[1], reverse=True)
    if len(ranked) > max_results:
        logger.debug("Truncating %d candidates to %d", len(ranked), max_results)
    return ranked[:max_results]
