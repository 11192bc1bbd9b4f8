"""Lineup eligibility: slot usage caps, selection validation, default lineups."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional, Sequence, Union

from league.errors import SelectionError
from league.models import LineupEntry, RosterSlot

MAX_USES = 8
LINEUP_SIZE = 4


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of validate_lineup_selection. error/code are set only when invalid."""
    valid: bool
    error: Optional[str] = None
    code: Optional[SelectionError] = None
    warning: Optional[str] = None


def can_use_slot(slot: RosterSlot) -> bool:
    """True if the slot is under the usage cap."""
    return slot.times_used < MAX_USES


def _invalid(code: SelectionError, error: str) -> ValidationResult:
    return ValidationResult(valid=False, error=error, code=code)


def validate_lineup_selection(selected_slots: Sequence[int], roster: Iterable[RosterSlot]) -> ValidationResult:
    """Check a team's slot selection against its roster.

    Checks run in order and the first failure is reported: empty selection,
    more than LINEUP_SIZE slots, repeated slot, slot not on roster, slot at
    the usage cap. Fewer than LINEUP_SIZE slots is allowed but carries a
    warning.
    """
    if len(selected_slots) == 0:
        return _invalid(SelectionError.EMPTY_SELECTION, "Must select at least 1 golfer")

    if len(selected_slots) > LINEUP_SIZE:
        return _invalid(SelectionError.TOO_MANY_SELECTED, f"Cannot select more than {LINEUP_SIZE} golfers")

    if len(set(selected_slots)) != len(selected_slots):
        return _invalid(SelectionError.DUPLICATE_SLOT, "Cannot select the same slot twice")

    by_slot = {r.slot: r for r in roster}
    for slot in selected_slots:
        entry = by_slot.get(slot)
        if entry is None:
            return _invalid(SelectionError.SLOT_NOT_ON_ROSTER, f"Slot {slot} is not on roster")
        if not can_use_slot(entry):
            return _invalid(SelectionError.SLOT_EXHAUSTED, f"Slot {slot} has already been used {MAX_USES} times")

    if len(selected_slots) < LINEUP_SIZE:
        n = len(selected_slots)
        return ValidationResult(
            valid=True,
            warning=f"You have only selected {n} golfer{'' if n == 1 else 's'}. You can select up to {LINEUP_SIZE}.",
        )
    return ValidationResult(valid=True)


def _slot_numbers(lineup: Iterable[Union[int, LineupEntry]]) -> list[int]:
    return [x if isinstance(x, int) else x.slot for x in lineup]


def get_default_lineup(
    roster: Iterable[RosterSlot],
    previous_lineup: Iterable[Union[int, LineupEntry]],
    size: int = LINEUP_SIZE,
) -> list[int]:
    """Pre-selected slots for a new lineup, ascending.

    Keeps every previous-lineup slot that is still under the cap, then fills
    up to `size` with the lowest-numbered eligible slots not already chosen.
    With no previous lineup this is simply the `size` lowest eligible slots.
    """
    eligible = sorted(r.slot for r in roster if can_use_slot(r))
    eligible_set = set(eligible)

    selected: list[int] = []
    for slot in _slot_numbers(previous_lineup):
        if slot in eligible_set and slot not in selected and len(selected) < size:
            selected.append(slot)

    for slot in eligible:
        if len(selected) >= size:
            break
        if slot not in selected:
            selected.append(slot)

    return sorted(selected)


def build_carryover_lineup(roster: Iterable[RosterSlot], previous_slots: Sequence[int]) -> list[int]:
    """Lineup for a team that missed the deadline.

    Same rules as get_default_lineup, but keeps the previous lineup's size so
    a two-golfer week carries over as two golfers. Without a previous lineup
    it falls back to a full default lineup.
    """
    size = min(len(set(previous_slots)), LINEUP_SIZE) or LINEUP_SIZE
    return get_default_lineup(roster, previous_slots, size=size)
