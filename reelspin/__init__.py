"""
ReelSpin - Slot Machine Spin-Resolution Engine

A deterministic, configuration-driven engine for resolving slot spins.
Given a machine spec and a randomness source, the engine provides:
- Reel grid generation
- Left-anchored payline evaluation
- A single-spin-at-a-time lifecycle with started/completed notifications
"""

__version__ = "0.1.0"
