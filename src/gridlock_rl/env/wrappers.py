from __future__ import annotations

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from .gridlock_env import _compute_action_mask


class FlattenDiscreteActionWrapper(gym.ActionWrapper):
    """Flattens MultiDiscrete (piece, direction) -> Discrete(N) for PPO-style agents.

    Also exposes `get_action_mask()` returning a 1D boolean mask of shape (N,).
    Order: piece, direction (C-order flattening).
    """

    def __init__(self, env: gym.Env):
        super().__init__(env)
        assert isinstance(env.action_space, spaces.MultiDiscrete)
        k, directions = map(int, env.action_space.nvec)
        self.k = k
        self.directions = directions
        self.n = int(k * directions)
        self.action_space = spaces.Discrete(self.n)

    def _unflatten(self, idx: int) -> tuple[int, int]:
        return int(idx // self.directions), int(idx % self.directions)

    def action(self, action: int):  # type: ignore[override]
        return np.array(self._unflatten(int(action)), dtype=np.int64)

    def get_action_mask(self) -> np.ndarray:
        unwrapped = self.env.unwrapped
        return _compute_action_mask(unwrapped.level, self.k).reshape(-1)


class ResampleInvalidActionWrapper(gym.Wrapper):
    """If a sampled action is invalid, resample uniformly among valid ones.

    Uses the wrapped env's RNG so seeded runs stay reproducible.
    """

    def step(self, action):  # type: ignore[override]
        if isinstance(self.action_space, spaces.Discrete):
            mask = self.get_action_mask()
            if 0 <= int(action) < mask.shape[0] and not bool(mask[int(action)]):
                valid_idxs = np.flatnonzero(mask)
                if valid_idxs.size > 0:
                    action = int(self.env.unwrapped.np_random.choice(valid_idxs))
        return self.env.step(action)

    def get_action_mask(self) -> np.ndarray:
        if hasattr(self.env, "get_action_mask"):
            return getattr(self.env, "get_action_mask")()
        raise AttributeError("Underlying env does not provide get_action_mask")
