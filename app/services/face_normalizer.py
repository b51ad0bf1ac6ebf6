import math
from typing import Iterable, List, Optional
from app.models.face_models import RawAnnotation, Rectangle
from app.core.logging import get_logger

logger = get_logger("face-normalizer")


def _is_usable(value) -> bool:
    """True for a present, finite, non-boolean number."""
    if value is None or isinstance(value, bool):
        return False
    if not isinstance(value, (int, float)):
        return False
    return math.isfinite(value)


def bounding_rectangle(annotation: RawAnnotation) -> Optional[Rectangle]:
    """
    Reduces one provider polygon to its axis-aligned bounding rectangle.

    Each vertex contributes to the x set and the y set independently, so a
    vertex missing one coordinate still counts on the other axis. Returns None
    when either axis has no usable coordinate at all; such polygons are dropped
    rather than defaulted to zero.
    """
    xs = [v.x for v in annotation.vertices if _is_usable(v.x)]
    ys = [v.y for v in annotation.vertices if _is_usable(v.y)]

    if not xs or not ys:
        return None

    min_x, max_x = min(xs), max(xs)
    min_y, max_y = min(ys), max(ys)
    return Rectangle(x=min_x, y=min_y, w=max_x - min_x, h=max_y - min_y)


def normalize_annotations(annotations: Iterable[RawAnnotation]) -> List[Rectangle]:
    """
    Converts raw face polygons into rectangles ordered left to right.

    Degenerate annotations are filtered out, never raised on. The sort is on
    the left edge only and is stable, so faces sharing a left edge keep their
    input order.
    """
    rectangles: List[Rectangle] = []
    dropped = 0
    for index, annotation in enumerate(annotations):
        rect = bounding_rectangle(annotation)
        if rect is None:
            dropped += 1
            logger.debug(f"Dropping annotation #{index}: no usable coordinate on at least one axis.")
            continue
        rectangles.append(rect)

    if dropped:
        logger.info(f"Dropped {dropped} degenerate face annotation(s).")

    return sorted(rectangles, key=lambda r: r.x)
