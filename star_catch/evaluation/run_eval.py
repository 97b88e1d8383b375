"""
Evaluation Harness
==================

Plays an agent through one full round per seed and reports how well it
catches: final score, misses, longest catch streak and the session best.

Agents see the same observation dict as CatchEnv, one call per tick.

Usage:
    python -m star_catch.evaluation.run_eval --agent contestants/baseline_tracker
"""

from __future__ import annotations

import argparse
import importlib.util
import json
import sys
import time
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional
import numpy as np

from star_catch.catch_core.collector import InputIntent
from star_catch.catch_core.config_loader import load_config
from star_catch.catch_core.game import RoundEvent, RoundEventKind, RoundStateMachine
from star_catch.catch_core.scoring import HighScoreTracker

SEED_BANK_PATH = Path(__file__).with_name("seed_bank.json")

AgentFn = Callable[[Dict[str, np.ndarray]], int]


@dataclass
class RoundReport:
    """Outcome of one seeded round."""
    seed: int
    score: int
    missed: int
    spawned: int
    ticks: int
    longest_streak: int  # Most catches without a miss in between

    @property
    def catch_rate(self) -> float:
        """Share of stars that reached the basket row and were caught."""
        resolved = self.score + self.missed
        return self.score / resolved if resolved else 0.0


@dataclass
class EvalSummary:
    """All rounds of one evaluation run."""
    reports: List[RoundReport]
    high_score: int
    rounds_played: int
    wall_seconds: float

    @property
    def scores(self) -> np.ndarray:
        return np.array([r.score for r in self.reports], dtype=np.int64)

    @property
    def mean_score(self) -> float:
        return float(self.scores.mean())

    @property
    def std_score(self) -> float:
        return float(self.scores.std())

    @property
    def median_score(self) -> float:
        return float(np.median(self.scores))

    @property
    def mean_catch_rate(self) -> float:
        return float(np.mean([r.catch_rate for r in self.reports]))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "rounds": self.rounds_played,
            "high_score": self.high_score,
            "mean_score": self.mean_score,
            "std_score": self.std_score,
            "median_score": self.median_score,
            "mean_catch_rate": self.mean_catch_rate,
            "wall_seconds": self.wall_seconds,
            "reports": [asdict(r) for r in self.reports],
        }


def load_seed_bank(path: Optional[str] = None) -> List[int]:
    """
    Read the list of evaluation seeds.

    Raises:
        ValueError: If the file does not hold a non-empty list of integers.
    """
    seed_path = Path(path) if path is not None else SEED_BANK_PATH
    with open(seed_path, "r") as f:
        seeds = json.load(f).get("seeds")

    if not seeds or not all(isinstance(s, int) for s in seeds):
        raise ValueError(f"{seed_path} must contain a non-empty 'seeds' list of integers")
    return seeds


def load_agent(agent_path: str) -> AgentFn:
    """
    Import a contestant and return its act callable.

    Args:
        agent_path: Contestant directory (holding agent.py) or the file itself.

    Returns:
        CatchAgent().act if the module defines CatchAgent, else its act function.
    """
    path = Path(agent_path)
    agent_file = path / "agent.py" if path.is_dir() else path
    if not agent_file.is_file():
        raise FileNotFoundError(f"Agent file not found: {agent_file}")

    module_spec = importlib.util.spec_from_file_location(
        f"contestant_{agent_file.parent.name}", agent_file
    )
    if module_spec is None or module_spec.loader is None:
        raise ImportError(f"Cannot import {agent_file}")
    module = importlib.util.module_from_spec(module_spec)
    module_spec.loader.exec_module(module)

    agent_cls = getattr(module, "CatchAgent", None)
    if agent_cls is not None:
        agent = agent_cls()
        if not callable(getattr(agent, "act", None)):
            raise AttributeError(f"{agent_file}: CatchAgent has no act() method")
        return agent.act

    act = getattr(module, "act", None)
    if callable(act):
        return act

    raise AttributeError(f"{agent_file} defines neither CatchAgent nor act()")


def play_round(agent: AgentFn, game: RoundStateMachine, seed: int) -> RoundReport:
    """
    Play one full round, one agent decision per tick.

    The countdown advances every tick_rate ticks, so a default round takes
    duration_seconds * tick_rate decisions.
    """
    tick_rate = game.config.round.tick_rate
    game.start_round(seed=seed)

    streak = 0
    longest = 0
    while game.is_running:
        action = int(agent(game.snapshot().to_obs_dict()))
        result = game.tick(InputIntent.from_action(action))

        # Misses are pruned before catches resolve within a tick
        if result.missed:
            streak = 0
        streak += result.caught
        longest = max(longest, streak)

        if game.state.ticks % tick_rate == 0:
            game.second_tick()

    state = game.state
    return RoundReport(
        seed=seed,
        score=state.score,
        missed=state.missed_total,
        spawned=state.spawned_total,
        ticks=state.ticks,
        longest_streak=longest
    )


def evaluate_agent(
    agent: AgentFn,
    seeds: Optional[List[int]] = None,
    config_path: Optional[str] = None,
    verbose: bool = True
) -> EvalSummary:
    """
    Play one round per seed on a single state machine.

    Args:
        agent: Callable mapping an observation dict to an action in {0, 1, 2, 3}.
        seeds: Seeds to play. Uses the bundled seed bank if None.
        config_path: Optional game_config.yaml override.
        verbose: If True, print one line per round and a closing table.

    Returns:
        EvalSummary over all rounds.
    """
    if seeds is None:
        seeds = load_seed_bank()

    game = RoundStateMachine(config=load_config(config_path))
    high_scores = HighScoreTracker()

    def on_round_event(event: RoundEvent) -> None:
        if event.kind is not RoundEventKind.ROUND_ENDED:
            return
        if high_scores.record(event.score) and verbose:
            print(f"  new best: {event.score}")

    game.subscribe(on_round_event)

    reports: List[RoundReport] = []
    start = time.perf_counter()
    for seed in seeds:
        report = play_round(agent, game, seed)
        reports.append(report)
        if verbose:
            print(f"seed {seed:>6}  score {report.score:>4}  missed {report.missed:>4}  "
                  f"streak {report.longest_streak:>3}  catch {report.catch_rate:6.1%}")

    summary = EvalSummary(
        reports=reports,
        high_score=high_scores.high_score,
        rounds_played=high_scores.rounds_played,
        wall_seconds=time.perf_counter() - start
    )

    if verbose:
        print(format_summary(summary))
    return summary


def format_summary(summary: EvalSummary) -> str:
    """Closing table for the console."""
    scores = summary.scores
    rows = [
        ("rounds", f"{summary.rounds_played}"),
        ("high score", f"{summary.high_score}"),
        ("mean score", f"{summary.mean_score:.2f} +/- {summary.std_score:.2f}"),
        ("median score", f"{summary.median_score:.1f}"),
        ("score range", f"{scores.min()}..{scores.max()}"),
        ("catch rate", f"{summary.mean_catch_rate:.1%}"),
        ("wall time", f"{summary.wall_seconds:.2f}s"),
    ]
    return "\n".join(f"{label:>13}: {value}" for label, value in rows)


def save_results(summary: EvalSummary, agent_name: str, output_path: str) -> None:
    """Write the summary and every round report as JSON."""
    data = {"agent": agent_name, **summary.to_dict()}
    with open(output_path, "w") as f:
        json.dump(data, f, indent=2)
    print(f"Results saved to {output_path}")


def main():
    parser = argparse.ArgumentParser(description="Evaluate a Star Catch agent over the seed bank")
    parser.add_argument("--agent", type=str, required=True,
                        help="Contestant directory or agent.py file")
    parser.add_argument("--seeds", type=str, default=None, help="Seed bank JSON")
    parser.add_argument("--config", type=str, default=None, help="Path to game_config.yaml")
    parser.add_argument("--output", type=str, default=None, help="Write results JSON here")
    parser.add_argument("--quiet", action="store_true", help="Only print errors")

    args = parser.parse_args()

    try:
        agent = load_agent(args.agent)
        seeds = load_seed_bank(args.seeds) if args.seeds else None
    except (FileNotFoundError, ImportError, AttributeError, ValueError) as e:
        print(f"Error: {e}")
        return 1

    summary = evaluate_agent(agent, seeds=seeds, config_path=args.config, verbose=not args.quiet)

    if args.output:
        save_results(summary, Path(args.agent).name, args.output)
    return 0


if __name__ == "__main__":
    sys.exit(main())
