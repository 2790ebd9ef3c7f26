# helicave/env/observations.py
from __future__ import annotations
from typing import Iterable, List, Optional, Sequence, Tuple
import numpy as np

from helicave.game.config import OBS_PROBE_OFFSETS
from helicave.game.geometry import Dimensions, Rectangle
from helicave.game.objects import Craft, Obstacle

OBS_SIZE = 1 + 4 * len(OBS_PROBE_OFFSETS)


def _clamp01(x: float) -> float:
    return 0.0 if x < 0.0 else (1.0 if x > 1.0 else x)

def _norm_top_y(y_top: float, dims: Dimensions, size: float) -> float:
    """Normalize a top coordinate into [0,1] using [0, height-size]."""
    denom = max(1.0, dims.height - size)
    return _clamp01(y_top / denom)

def _surfaces_at_x(
    boxes: Iterable[Rectangle],
    x: float,
    height: float
) -> Tuple[Optional[float], Optional[float], Optional[float]]:
    """
    Returns (ceiling_y, floor_y, floating_center_y) along the vertical ray at x.
    - ceiling_y: lowest bottom edge among boxes touching the top of the screen
    - floor_y  : highest top edge among boxes touching the bottom
    - floating_center_y: center of the first box touching neither
    None if absent.
    """
    ceil_y: Optional[float] = None
    floor_y: Optional[float] = None
    float_y: Optional[float] = None

    for r in boxes:
        # strict start<=x<end to avoid double-counting vertical edges
        if not (r.start.x <= x < r.end.x):
            continue
        if r.start.y <= 0:
            ceil_y = r.end.y if (ceil_y is None or r.end.y > ceil_y) else ceil_y
        elif r.end.y >= height:
            floor_y = r.start.y if (floor_y is None or r.start.y < floor_y) else floor_y
        elif float_y is None:
            float_y = (r.start.y + r.end.y) / 2

    return ceil_y, floor_y, float_y

def build_observation(
    craft: Craft,
    obstacles: Sequence[Obstacle],
    dims: Dimensions,
    probe_offsets: Tuple[int, ...] = OBS_PROBE_OFFSETS
) -> np.ndarray:
    """
    Returns a fixed (1 + 4*len(probe_offsets),) float32 vector:
      [ y_norm,
        ceil@p, floor@p, block@p, block_y@p   for each probe p ]
    - y_norm in [0,1], craft top over the reachable range
    - ceil/floor normalized by viewport height;
      sentinel: ceil=0.0 if no ceiling; floor=1.0 if no floor.
    - block is 0.0/1.0 for a floating obstacle on the ray, block_y its
      normalized vertical center (0.5 when there is none)
    Probes are measured in world x from the craft's left edge.
    """
    boxes: List[Rectangle] = [o.bounding_box() for o in obstacles]
    pos = craft.position
    h = float(dims.height)

    feats: List[float] = [_norm_top_y(float(pos.y), dims, craft.size)]

    for dx in probe_offsets:
        px = pos.x + dx
        ceil_y, floor_y, float_y = _surfaces_at_x(boxes, px, h)

        ceil_norm = 0.0 if ceil_y is None else _clamp01(ceil_y / h)
        floor_norm = 1.0 if floor_y is None else _clamp01(floor_y / h)
        if float_y is None:
            block, block_y = 0.0, 0.5
        else:
            block, block_y = 1.0, _clamp01(float_y / h)
        feats.extend([ceil_norm, floor_norm, block, block_y])

    return np.asarray(feats, dtype=np.float32)
