"""Match rules, state machine and supporting game objects."""
