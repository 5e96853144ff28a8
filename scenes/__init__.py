"""scenes — pygame screens.  ``GameScene`` is the only one."""
