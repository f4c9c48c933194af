import gymnasium as gym
import pytest

import block_drop.env  # noqa: F401
from block_drop.env.block_drop_env import BlockDropEnv
from block_drop.game import Action, GameState
from block_drop.rl.random_agent import run_random


def test_reset_returns_observation_in_space():
    env = BlockDropEnv()
    obs, info = env.reset(seed=3)

    assert env.observation_space.contains(obs)
    assert info["score"] == 0
    assert env.game.state is GameState.RUNNING
    assert (obs["grid"] == -1).sum() == 4


def test_each_step_applies_one_gravity_tick():
    env = BlockDropEnv()
    env.reset(seed=3)
    y = env.game.board.current_piece.y

    obs, reward, terminated, truncated, info = env.step(int(Action.NONE))

    assert env.game.board.current_piece.y == y + 1
    assert reward == 0.0
    assert not terminated and not truncated


def test_idle_play_stacks_until_game_over():
    env = BlockDropEnv()
    env.reset(seed=11)

    terminated = False
    for _ in range(1000):
        _, _, terminated, truncated, _ = env.step(int(Action.NONE))
        if terminated:
            break

    assert terminated
    assert env.game.state is GameState.GAME_OVER


def test_truncates_at_step_limit():
    env = BlockDropEnv(max_episode_steps=3)
    env.reset(seed=0)
    results = [env.step(int(Action.NONE)) for _ in range(3)]
    assert results[-1][3]


def test_ansi_render():
    env = BlockDropEnv(render_mode="ansi")
    env.reset(seed=5)
    text = env.render()
    assert len(text.splitlines()) == 20


def test_rejects_unknown_render_mode():
    with pytest.raises(ValueError):
        BlockDropEnv(render_mode="human")


def test_registered_and_runs_random_agent():
    env = gym.make("BlockDrop-v0")
    obs, _ = env.reset(seed=1)
    assert obs["grid"].shape == (20, 10)
    env.close()

    assert run_random(steps=50, seed=1) >= 0.0
