"""Gymnasium environments for Gridlock RL."""

from __future__ import annotations

from gymnasium.envs.registration import register

# Register the default 6x6 sliding-block environment
register(
    id="Gridlock-v0",
    entry_point="gridlock_rl.env.gridlock_env:GridlockEnv",
)

__all__ = ["Gridlock-v0"]
