"""Bounded notification log kept on the world state."""

from __future__ import annotations

from collections.abc import Iterable

from .models import WorldState


def record(state: WorldState, lines: Iterable[str], *, window: int) -> None:
    """Append ``lines`` and keep only the most recent ``window`` entries."""

    state.notifications.extend(lines)
    if len(state.notifications) > window:
        del state.notifications[: len(state.notifications) - window]
