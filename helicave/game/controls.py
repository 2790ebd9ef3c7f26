# helicave/game/controls.py
from __future__ import annotations
from dataclasses import dataclass
from typing import Protocol
import pygame


class Controller(Protocol):
    def ascend(self) -> bool:
        """Instantaneous 'go up' level, read once per craft update."""
        ...


class PygameController:
    """
    Polls device state: ascend while the left mouse button or SPACE is held.
    Needs an initialised pygame display to report anything.
    """

    def ascend(self) -> bool:
        if pygame.mouse.get_pressed()[0]:
            return True
        return bool(pygame.key.get_pressed()[pygame.K_SPACE])


@dataclass
class ScriptedController:
    """Flag set by the caller (env actions, tests)."""
    pressed: bool = False

    def ascend(self) -> bool:
        return self.pressed
