# helicave/game/render.py
from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, List, Optional, Protocol, Tuple
import pygame

from .config import COLOR_BG
from .geometry import Dimensions, Point


class Frame(Protocol):
    """One draw pass. World x is translated to screen x by the frame itself."""

    def clear(self) -> None:
        ...

    def draw_rect(self, position: Point, dims: Dimensions, color: Any) -> None:
        ...


class FrameFactory(Protocol):
    def new_frame(self, offset: float) -> Frame:
        ...


class SurfaceFrame:
    """Draws onto a pygame Surface, shifted left by the scroll offset."""

    def __init__(self, surf: pygame.Surface, offset: float,
                 background: Tuple[int, int, int] = COLOR_BG):
        self.surf = surf
        self.offset = offset
        self.background = background

    def clear(self) -> None:
        self.surf.fill(self.background)

    def draw_rect(self, position: Point, dims: Dimensions, color: Any) -> None:
        rect = pygame.Rect(int(position.x - self.offset), int(position.y),
                           int(dims.width), int(dims.height))
        pygame.draw.rect(self.surf, color, rect)


class SurfaceFrameFactory:
    def __init__(self, surf: pygame.Surface, background: Tuple[int, int, int] = COLOR_BG):
        self.surf = surf
        self.background = background

    def new_frame(self, offset: float) -> SurfaceFrame:
        return SurfaceFrame(self.surf, offset, self.background)


@dataclass(frozen=True)
class DrawCall:
    x: float        # screen space
    y: float
    width: float
    height: float
    color: Any


@dataclass
class RecordingFrame:
    """Headless frame: keeps the translated draw calls instead of pixels."""
    offset: float
    calls: List[DrawCall] = field(default_factory=list)
    cleared: bool = False

    def clear(self) -> None:
        self.calls.clear()
        self.cleared = True

    def draw_rect(self, position: Point, dims: Dimensions, color: Any) -> None:
        self.calls.append(DrawCall(position.x - self.offset, position.y,
                                   dims.width, dims.height, color))


class RecordingFrameFactory:
    """Keeps only the most recent frame, plus a count of frames handed out."""

    def __init__(self):
        self.last: Optional[RecordingFrame] = None
        self.count = 0

    def new_frame(self, offset: float) -> RecordingFrame:
        self.last = RecordingFrame(offset)
        self.count += 1
        return self.last
