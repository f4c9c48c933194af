from __future__ import annotations

from typing import Any, Dict, Optional, Tuple

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from block_drop.game import Action, GameConfig, GameController, GameState, PieceKind
from block_drop.visualization.text_renderer import grid_to_text


class BlockDropEnv(gym.Env):
    """Drives a GameController one action at a time.

    Every step applies the action and then lets one descent interval elapse,
    so the piece falls by one row (or locks) per step regardless of the
    action taken. The reward is the score gained during the step.
    """

    metadata = {"render_modes": ["ansi"], "render_fps": 4}

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        render_mode: Optional[str] = None,
        max_episode_steps: int = 10000,
    ) -> None:
        super().__init__()
        if render_mode is not None and render_mode not in self.metadata["render_modes"]:
            raise ValueError(f"unsupported render_mode {render_mode!r}")
        self.game = GameController(config)
        self.render_mode = render_mode
        self.max_episode_steps = int(max_episode_steps)

        rows, cols = self.game.config.rows, self.game.config.cols
        self.observation_space = spaces.Dict(
            {
                "grid": spaces.Box(low=-1, high=1, shape=(rows, cols), dtype=np.int8),
                "next_piece": spaces.Discrete(len(PieceKind)),
            }
        )
        self.action_space = spaces.Discrete(len(Action))
        self._steps = 0

    def _get_obs(self) -> Dict[str, Any]:
        next_piece = self.game.next_piece
        return {
            "grid": self.game.board.to_array(),
            "next_piece": int(next_piece.kind) if next_piece is not None else 0,
        }

    def _get_info(self) -> Dict[str, Any]:
        return {
            "score": self.game.score,
            "lines_cleared": self.game.lines_cleared,
            "steps": self._steps,
        }

    def reset(self, *, seed: Optional[int] = None, options: Optional[dict] = None) -> Tuple[Dict[str, Any], Dict[str, Any]]:
        super().reset(seed=seed)
        if seed is not None:
            self.game.reseed(seed)
        self.game.stop()
        self.game.start()
        self._steps = 0
        return self._get_obs(), self._get_info()

    def step(self, action: int):
        score_before = self.game.score
        self.game.step(Action(int(action)))
        if self.game.is_running:
            self.game.advance(self.game.config.tick_interval_ms)
        self._steps += 1

        reward = float(self.game.score - score_before)
        terminated = self.game.state is GameState.GAME_OVER
        truncated = self._steps >= self.max_episode_steps
        return self._get_obs(), reward, terminated, truncated, self._get_info()

    def render(self) -> Optional[str]:
        if self.render_mode == "ansi":
            return grid_to_text(self.game.board.to_array())
        return None

    def close(self) -> None:
        pass
