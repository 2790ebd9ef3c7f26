# helicave/game/objects.py
from __future__ import annotations
from collections import deque
from dataclasses import dataclass
from typing import Deque, Optional, Protocol

from .config import CRAFT_SIZE, CRAFT_CLIMB, COLOR_CRAFT, COLOR_TRAIL, COLOR_OBSTACLE
from .controls import Controller
from .geometry import Dimensions, Point, Rectangle, overlaps
from .render import Frame


class GameObject(Protocol):
    def draw(self, frame: Frame) -> None:
        ...

    def bounding_box(self) -> Rectangle:
        ...


def collides_with(a: GameObject, b: GameObject) -> bool:
    return overlaps(a.bounding_box(), b.bounding_box())


@dataclass(frozen=True)
class Obstacle:
    position: Point
    dims: Dimensions

    def draw(self, frame: Frame) -> None:
        frame.draw_rect(self.position, self.dims, COLOR_OBSTACLE)

    def bounding_box(self) -> Rectangle:
        return Rectangle.from_origin(self.position, self.dims)


class Craft:
    """
    The player's helicopter. Moves right by the scroll step every tick and
    one px up or down depending on the controller.
    - trail keeps previous positions, oldest first
    - trail_limit=None keeps every position ever visited
    """

    def __init__(self, start: Point, controller: Controller,
                 size: float = CRAFT_SIZE, trail_limit: Optional[int] = None):
        if size <= 0:
            raise ValueError("craft size must be > 0")
        if trail_limit is not None and trail_limit < 0:
            raise ValueError("trail_limit must be >= 0")
        self.position = start
        self.controller = controller
        self.size = size
        self.trail: Deque[Point] = deque(maxlen=trail_limit)

    @property
    def dims(self) -> Dimensions:
        return Dimensions(self.size, self.size)

    def advance(self, step: float):
        dy = -CRAFT_CLIMB if self.controller.ascend() else CRAFT_CLIMB
        self.trail.append(self.position)
        self.position = Point(self.position.x + step, self.position.y + dy)

    def draw(self, frame: Frame) -> None:
        dims = self.dims
        for p in self.trail:
            frame.draw_rect(p, dims, COLOR_TRAIL)
        frame.draw_rect(self.position, dims, COLOR_CRAFT)

    def bounding_box(self) -> Rectangle:
        return Rectangle.from_origin(self.position, self.dims)
