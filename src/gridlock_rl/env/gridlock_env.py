from __future__ import annotations

from typing import Any, Dict, List, Optional, Tuple

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from gridlock_rl.game import GameConfig, Level, LevelCatalog, MoveError

# Action direction index -> step direction
DIRECTIONS = (-1, 1)


def _compute_action_mask(level: Level, max_pieces: int) -> np.ndarray:
    mask = np.zeros((max_pieces, len(DIRECTIONS)), dtype=np.bool_)
    for piece_idx, direction in level.legal_steps():
        if piece_idx < max_pieces:
            mask[piece_idx, DIRECTIONS.index(direction)] = True
    return mask


class GridlockEnv(gym.Env):
    """Sliding-block puzzle as a gymnasium environment.

    Action (piece_idx, d) slides piece `piece_idx` one cell backwards (d=0)
    or forwards (d=1) along its axis. The observation is the occupancy grid
    (0 empty, piece index + 1 otherwise). An episode ends when the main piece
    reaches the level exit.
    """

    metadata = {"render_modes": ["rgb_array"], "render_fps": 10}

    def __init__(self, config: Optional[GameConfig] = None, catalog: Optional[LevelCatalog] = None,
                 render_mode: Optional[str] = None,
                 solve_reward: float = 10.0,
                 invalid_action_penalty: float = -0.1,
                 step_penalty: float = -0.01) -> None:
        super().__init__()
        self.config = config if config is not None else GameConfig()
        self.catalog = catalog if catalog is not None else LevelCatalog.default()
        self.render_mode = render_mode

        self.solve_reward = float(solve_reward)
        self.invalid_action_penalty = float(invalid_action_penalty)
        self.step_penalty = float(step_penalty)

        size = self.config.grid_size
        k = self.config.max_pieces
        self.observation_space = spaces.Box(low=0, high=k, shape=(size, size), dtype=np.min_scalar_type(k))
        self.action_space = spaces.MultiDiscrete((k, len(DIRECTIONS)))

        self.level: Optional[Level] = None
        self.level_index = 0
        self._steps = 0
        self._moves = 0

        # Levels matching the observation size, sampled on reset
        self._playable: List[int] = [
            i for i in range(len(self.catalog)) if self.catalog.load(i, self.config.main_char).n == size
        ]

    def _get_obs(self) -> np.ndarray:
        assert self.level is not None
        return self.level.occupancy(self.observation_space.dtype)

    def _get_info(self) -> Dict[str, Any]:
        assert self.level is not None
        return {
            "action_mask": _compute_action_mask(self.level, self.config.max_pieces),
            "valid_actions": [(i, DIRECTIONS.index(d)) for i, d in self.level.legal_steps()],
            "moves": self._moves,
            "level_index": self.level_index,
        }

    def reset(self, *, seed: Optional[int] = None, options: Optional[dict] = None) -> Tuple[np.ndarray, Dict[str, Any]]:
        super().reset(seed=seed)
        if options and "level" in options:
            index = int(options["level"])
        else:
            if not self._playable:
                raise ValueError(f"No {self.config.grid_size}x{self.config.grid_size} level in catalog")
            index = int(self.np_random.choice(self._playable))

        level = self.catalog.load(index, self.config.main_char)
        if level.n != self.config.grid_size:
            raise ValueError(f"Level {index} is {level.n}x{level.n}, env expects {self.config.grid_size}")
        if len(level.pieces) > self.config.max_pieces:
            raise ValueError(f"Level {index} has {len(level.pieces)} pieces, env allows {self.config.max_pieces}")

        self.level = level
        self.level_index = index
        self._steps = 0
        self._moves = 0
        return self._get_obs(), self._get_info()

    def step(self, action: np.ndarray | Tuple[int, int]):
        assert self.level is not None
        piece_idx, d = map(int, action)

        reward_components: Dict[str, float] = {}
        moved = False
        if 0 <= piece_idx < len(self.level.pieces) and 0 <= d < len(DIRECTIONS):
            piece = self.level.pieces[piece_idx]
            try:
                self.level.step_one(piece.x, piece.y, DIRECTIONS[d])
                moved = True
            except MoveError:
                pass

        if moved:
            self._moves += 1
            reward_components["step"] = self.step_penalty
        else:
            reward_components["invalid"] = self.invalid_action_penalty

        terminated = self.level.is_solved()
        if terminated:
            reward_components["solved"] = self.solve_reward
        self._steps += 1
        truncated = not terminated and self._steps >= self.config.max_episode_steps

        reward = float(sum(reward_components.values()))
        info = self._get_info()
        info["reward_components"] = reward_components
        return self._get_obs(), reward, terminated, truncated, info

    def get_action_mask(self) -> np.ndarray:
        assert self.level is not None
        return _compute_action_mask(self.level, self.config.max_pieces)

    def render(self) -> Optional[np.ndarray]:
        if self.render_mode != "rgb_array" or self.level is None:
            return None
        grid = self.level.occupancy()
        main_value = self.level.pieces.index(self.level.main_piece) + 1
        cell = 12
        h, w = grid.shape
        img = np.zeros((h * cell, w * cell, 3), dtype=np.uint8)
        for y in range(h):
            for x in range(w):
                v = int(grid[y, x])
                if v == 0:
                    color = (30, 30, 36)
                elif v == main_value:
                    color = (220, 40, 40)
                else:
                    color = (70, 200, 120)
                img[y * cell : (y + 1) * cell, x * cell : (x + 1) * cell, :] = color
        return img

    def close(self) -> None:
        pass
