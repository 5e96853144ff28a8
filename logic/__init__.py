"""logic — Game systems package.

Subpackages
-----------
navigation/ — visibility graph, regions, precomputed routes, Pathfinder
ai/         — enemy routing policy and steering helpers

Top-level modules
-----------------
tick            — per-frame system orchestrator
movement        — character motor, input, wall-sliding movement
containment     — return agents that left the known map to a spawner
"""
