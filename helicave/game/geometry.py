# helicave/game/geometry.py
from __future__ import annotations
from dataclasses import dataclass


@dataclass(frozen=True)
class Point:
    x: float
    y: float


@dataclass(frozen=True)
class Dimensions:
    width: float
    height: float


@dataclass(frozen=True)
class Rectangle:
    """
    Axis-aligned box. `start` is the min-x/min-y corner, `end` the max corner.
    Nothing checks that start <= end.
    """
    start: Point
    end: Point

    @classmethod
    def from_origin(cls, origin: Point, dims: Dimensions) -> "Rectangle":
        return cls(origin, Point(origin.x + dims.width, origin.y + dims.height))


def overlaps(a: Rectangle, b: Rectangle) -> bool:
    """Strict AABB test: boxes that only share an edge do not overlap."""
    return (a.start.x < b.end.x and a.end.x > b.start.x and
            a.start.y < b.end.y and a.end.y > b.start.y)
