"""Gymnasium environments for Reverse Block Blast."""

from __future__ import annotations

from gymnasium.envs.registration import register

# The agent plays the clicking side; shapes are placed by the built-in policy
register(
    id="ReverseBlockBlast-12x12-v0",
    entry_point="reverse_blockblast.env.clicker_env:ReverseBlockBlastEnv",
)

__all__ = ["ReverseBlockBlast-12x12-v0"]
