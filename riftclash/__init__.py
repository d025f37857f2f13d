"""Rift Clash: a turn-based two-player lane battler."""
