# helicave/env/heli_env.py
from __future__ import annotations
from typing import Optional, Dict, Any
import numpy as np
import gymnasium as gym
import pygame

from helicave.game.config import (
    WIDTH, HEIGHT, FPS, STEP, OBS_PROBE_OFFSETS,
    COLOR_FG, COLOR_DANGER
)
from helicave.game.controls import ScriptedController
from helicave.game.engine import Game
from helicave.game.geometry import Dimensions
from helicave.game.level import ChannelGen
from helicave.game.render import RecordingFrameFactory, SurfaceFrameFactory
from helicave.env.observations import OBS_SIZE, build_observation


class HeliEnv(gym.Env):
    """
    Helicopter cave Gymnasium environment (vector observations).
    - One sim tick scrolls STEP px.
    - Agent acts every `frame_skip` ticks (default 4); the chosen action is
      held for all of them.
    - Observation: shape (13,), float32, see build_observation.
    """
    metadata = {"render_modes": ["human", "rgb_array"], "render_fps": FPS}

    def __init__(self,
                 render_mode: Optional[str] = None,
                 frame_skip: int = 4,
                 time_limit_ticks: Optional[int] = 6000,
                 width: int = WIDTH,
                 height: int = HEIGHT):
        super().__init__()
        assert frame_skip >= 1, "frame_skip must be >= 1"
        assert render_mode is None or render_mode in self.metadata["render_modes"], \
            f"Unknown render_mode {render_mode}"
        self.render_mode = render_mode
        self.frame_skip = int(frame_skip)
        self.dims = Dimensions(width, height)

        # Optional built-in truncation (you can also use a TimeLimit wrapper)
        self.time_limit_decisions = None
        if time_limit_ticks is not None:
            self.time_limit_decisions = max(1, int(time_limit_ticks) // self.frame_skip)

        # --- Gym spaces ---
        # Actions: 0 = DESCEND, 1 = ASCEND
        self.action_space = gym.spaces.Discrete(2)
        self.observation_space = gym.spaces.Box(
            low=np.zeros(OBS_SIZE, dtype=np.float32),
            high=np.ones(OBS_SIZE, dtype=np.float32),
            dtype=np.float32,
        )

        # --- Runtime state ---
        self.controller = ScriptedController()
        self.game: Optional[Game] = None
        self.timestep: int = 0                   # number of *decision* steps elapsed
        self.current_seed: Optional[int] = None  # ChannelGen's effective seed for this episode

        # Rendering
        self.screen = None
        self.clock = None
        self.font = None

    # -------------------- Core API --------------------

    def reset(self, *, seed: Optional[int] = None, options: Optional[Dict[str, Any]] = None):
        super().reset(seed=seed)  # initializes self.np_random

        # Level seed comes from np_random so seeded episodes replay exactly,
        # and unseeded resets keep walking the same stream.
        level_seed = int(self.np_random.integers(0, 2**31 - 1))

        self.controller.pressed = False
        gen = ChannelGen.for_viewport(self.dims, seed=level_seed)
        self.game = Game(self._frame_factory(), gen, self.dims, self.controller)
        self.current_seed = gen.seed
        self.timestep = 0

        if self.render_mode == "human":
            self.render()
        return self._get_obs(), self._info()

    def step(self, action):
        assert self.action_space.contains(action), f"Invalid action {action}"
        assert self.game is not None, "Call reset() before step()"

        self.controller.pressed = int(action) == 1

        # Simulate frame_skip ticks (early exit on collision)
        collided = False
        for _ in range(self.frame_skip):
            self.game.tick()
            if self.game.has_collided():
                collided = True
                break

        # Reward: +1 if alive after this decision; -1 on collision
        reward = -1.0 if collided else 1.0

        self.timestep += 1
        terminated = collided
        truncated = False
        if (self.time_limit_decisions is not None) and (self.timestep >= self.time_limit_decisions):
            truncated = not terminated

        if self.render_mode == "human":
            self.render()

        return self._get_obs(), reward, terminated, truncated, self._info()

    # -------------------- Helpers --------------------

    def _frame_factory(self):
        if self.render_mode is None:
            return RecordingFrameFactory()
        if self.screen is None:
            if self.render_mode == "human":
                pygame.init()
                self.screen = pygame.display.set_mode((int(self.dims.width), int(self.dims.height)))
                pygame.display.set_caption("helicave - Gym Env")
                self.clock = pygame.time.Clock()
            else:
                self.screen = pygame.Surface((int(self.dims.width), int(self.dims.height)))
        return SurfaceFrameFactory(self.screen)

    def _get_obs(self) -> np.ndarray:
        assert self.game is not None
        return build_observation(self.game.craft, self.game.obstacles, self.dims, OBS_PROBE_OFFSETS)

    def _info(self) -> Dict[str, Any]:
        assert self.game is not None
        return {
            "score": self.game.score(),
            "offset": self.game.offset,
            "distance_px": self.game.score() * STEP,
            "timestep": self.timestep,
            "seed": self.current_seed,
        }

    # -------------------- Rendering --------------------

    def render(self):
        if self.render_mode is None or self.game is None:
            return None

        # Pump minimal event queue so the OS doesn't think we're hung
        if self.render_mode == "human":
            pygame.event.pump()

        self.game.draw()
        if self.render_mode == "human":
            if self.font is None:
                pygame.font.init()
                self.font = pygame.font.SysFont("jetbrainsmono", 18)
            color = COLOR_DANGER if self.game.has_collided() else COLOR_FG
            self.screen.blit(self.font.render(f"Score: {self.game.score()}", True, color), (12, 10))
            pygame.display.flip()
            if self.clock is not None:
                self.clock.tick(self.metadata.get("render_fps", FPS))
            return None

        # Return an (H, W, 3) uint8 array
        arr = pygame.surfarray.array3d(self.screen)  # (W, H, 3)
        return np.transpose(arr, (1, 0, 2))

    def close(self):
        if self.screen is not None and self.render_mode == "human":
            pygame.display.quit()
            pygame.quit()
        self.screen = None
        self.clock = None
        self.font = None
