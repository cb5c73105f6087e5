"""Domain model and rules for Bastion.

This package holds the whole turn-resolution core.  It exposes:

* Dataclasses describing the world (see :mod:`models`) and the static
  building/unit tables (see :mod:`catalog`).
* Enumerations and strongly-typed identifiers used across the rules layer.
* Rule configuration objects (see :mod:`rules_config`).
* Pure rule modules: ledger arithmetic, command validation, combat, raid
  scheduling and the end-turn pipeline.
* :class:`engine.GameEngine`, the single owner of a running world.
"""

from . import (
    catalog,
    combat,
    commands,
    engine,
    enums,
    ledger,
    models,
    notifications,
    raids,
    rules_config,
    seed_data,
    turn,
    validation,
)

__all__ = [
    "catalog",
    "combat",
    "commands",
    "engine",
    "enums",
    "ledger",
    "models",
    "notifications",
    "raids",
    "rules_config",
    "seed_data",
    "turn",
    "validation",
]
