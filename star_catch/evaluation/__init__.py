"""
Evaluation Package
==================

Contains the seed bank and evaluation harness for scoring Star Catch agents.
"""

from star_catch.evaluation.run_eval import evaluate_agent, load_seed_bank, play_round

__all__ = ["evaluate_agent", "load_seed_bank", "play_round"]
