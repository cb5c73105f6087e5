"""Bastion: a single-player, turn-based territory and army simulation."""

__version__ = "0.1.0"
