"""logic/ai — AI subpackage.

Modules
-------
routing     — direct / graph-routed / idle pursuit policy + enemy system
steering    — direction and facing helpers
"""
