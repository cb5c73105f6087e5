"""Resource arithmetic over the immutable :class:`Ledger`."""

from __future__ import annotations

from collections.abc import Collection, Mapping
from dataclasses import dataclass, replace

from .enums import ResourceKind
from .models import Ledger


class LedgerError(ValueError):
    """Raised when a debit would drive a protected resource negative."""


@dataclass(frozen=True, slots=True)
class Shortfall:
    """A single resource the ledger cannot cover."""

    kind: ResourceKind
    needed: int
    available: int


def shortfalls(
    cost: Mapping[ResourceKind, int],
    ledger: Ledger,
    *,
    exempt: Collection[ResourceKind] = (),
) -> list[Shortfall]:
    """Return every positive cost entry the ledger cannot pay, in cost order."""

    missing: list[Shortfall] = []
    for raw_kind, amount in cost.items():
        kind = ResourceKind(raw_kind)
        if amount <= 0 or kind in exempt:
            continue
        have = ledger.get(kind)
        if have < amount:
            missing.append(Shortfall(kind, amount, have))
    return missing


def can_afford(
    cost: Mapping[ResourceKind, int],
    ledger: Ledger,
    *,
    exempt: Collection[ResourceKind] = (),
) -> bool:
    """True iff every positive, non-exempt cost entry is covered."""

    return not shortfalls(cost, ledger, exempt=exempt)


def debit(
    cost: Mapping[ResourceKind, int],
    ledger: Ledger,
    *,
    allow_negative: Collection[ResourceKind] = (),
) -> Ledger:
    """Subtract every entry of ``cost``.

    Callers check affordability first; reaching a negative balance for a kind
    outside ``allow_negative`` is a programming error.
    """

    missing = shortfalls(cost, ledger, exempt=allow_negative)
    if missing:
        detail = ", ".join(f"{s.kind}: need {s.needed}, have {s.available}" for s in missing)
        raise LedgerError(f"cannot debit {detail}")
    return _apply(ledger, {kind: -amount for kind, amount in cost.items()})


def credit(production: Mapping[ResourceKind, int], ledger: Ledger) -> Ledger:
    """Add every entry of ``production``. No upper bound."""

    return _apply(ledger, production)


def credit_shields(amount: int, ledger: Ledger, *, cap: int) -> Ledger:
    """Add shields, clamping the resulting balance at ``cap``."""

    return replace(ledger, shields=min(ledger.shields + amount, cap))


def _apply(ledger: Ledger, delta: Mapping[ResourceKind, int]) -> Ledger:
    changes: dict[str, int] = {}
    for raw_kind, amount in delta.items():
        kind = ResourceKind(raw_kind)
        changes[kind.value] = changes.get(kind.value, ledger.get(kind)) + amount
    return replace(ledger, **changes) if changes else ledger
