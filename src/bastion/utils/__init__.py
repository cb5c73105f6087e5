"""Utility functions for the Bastion engine."""

from bastion.utils.rng import generate_seed, random_choice, random_int

__all__ = [
    "generate_seed",
    "random_choice",
    "random_int",
]
