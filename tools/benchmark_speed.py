"""
Performance Benchmark
=====================

Measures simulation and environment step throughput.

Usage:
    python -m tools.benchmark_speed [--steps S] [--seed N]
"""

from __future__ import annotations

import argparse
import sys
import time
import numpy as np

from star_catch.catch_core.collector import InputIntent
from star_catch.catch_core.config_loader import load_config
from star_catch.catch_core.env_gym import CatchEnv
from star_catch.catch_core.game import RoundStateMachine


def benchmark_core(num_ticks: int = 100_000, seed: int = 42) -> dict:
    """
    Benchmark raw RoundStateMachine.tick() throughput.

    The round is restarted whenever it ends so every tick does real work.
    """
    config = load_config()
    game = RoundStateMachine(config=config, seed=seed)
    rng = np.random.default_rng(seed)
    intents = [InputIntent.NONE, InputIntent.LEFT, InputIntent.RIGHT, InputIntent.BOTH]
    tick_rate = config.round.tick_rate

    game.start_round()
    start = time.perf_counter()

    for i in range(num_ticks):
        game.tick(intents[int(rng.integers(0, 4))])
        if (i + 1) % tick_rate == 0:
            game.second_tick()
        if not game.is_running:
            game.start_round()

    elapsed = time.perf_counter() - start

    return {
        "mode": "core",
        "num_steps": num_ticks,
        "elapsed_seconds": elapsed,
        "steps_per_second": num_ticks / elapsed,
        "ms_per_step": (elapsed * 1000) / num_ticks
    }


def benchmark_env(num_steps: int = 20_000, seed: int = 42) -> dict:
    """Benchmark CatchEnv.step() including observation packing."""
    env = CatchEnv()
    rng = np.random.default_rng(seed)

    obs, _ = env.reset(seed=seed)
    start = time.perf_counter()

    for _ in range(num_steps):
        obs, _, terminated, truncated, _ = env.step(int(rng.integers(0, 4)))
        if terminated or truncated:
            obs, _ = env.reset()

    elapsed = time.perf_counter() - start
    env.close()

    return {
        "mode": "env",
        "num_steps": num_steps,
        "elapsed_seconds": elapsed,
        "steps_per_second": num_steps / elapsed,
        "ms_per_step": (elapsed * 1000) / num_steps
    }


def print_result(result: dict) -> None:
    print(f"[{result['mode']}] {result['num_steps']} steps in {result['elapsed_seconds']:.2f}s "
          f"-> {result['steps_per_second']:.0f} steps/s ({result['ms_per_step']:.4f} ms/step)")


def main():
    parser = argparse.ArgumentParser(description="Benchmark Star Catch throughput")
    parser.add_argument("--steps", type=int, default=20_000, help="Environment steps")
    parser.add_argument("--seed", type=int, default=42, help="Random seed")

    args = parser.parse_args()

    print_result(benchmark_core(num_ticks=args.steps * 5, seed=args.seed))
    print_result(benchmark_env(num_steps=args.steps, seed=args.seed))
    return 0


if __name__ == "__main__":
    sys.exit(main())
