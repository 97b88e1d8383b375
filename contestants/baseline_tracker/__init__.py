"""
Baseline Tracker Agent
======================

Heuristic agent that steers the basket under the lowest falling star.
"""
