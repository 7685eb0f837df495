"""Deterministic lifecycle transition policy.

This module contains no bookkeeping; :mod:`mapevents.lifecycle.tracker`
applies the transitions decided here.
"""

from __future__ import annotations

from enum import StrEnum

from mapevents.lifecycle.keys import LifecycleState
from mapevents.models.kinds import LOADING_KINDS, TERMINAL_DATA_KINDS, EventKind


class Phase(StrEnum):
    """What an observed event means for a load."""

    LOADING = "loading"
    TERMINAL = "terminal"


def phase_of(kind: EventKind) -> Phase | None:
    """Classify *kind*; ``None`` for kinds the tracker ignores."""
    if kind in LOADING_KINDS:
        return Phase.LOADING
    if kind in TERMINAL_DATA_KINDS or kind is EventKind.ERROR:
        return Phase.TERMINAL
    return None


def next_state(current: LifecycleState, phase: Phase) -> LifecycleState:
    """Return the state after observing *phase* in *current*.

    Policy:
    - A loading signal always leads to LOADING; a duplicate while already
      loading collapses into the same state.
    - A terminal signal always leads to SETTLED, including from IDLE:
      the loading announcement is advisory, not mandatory.
    """
    if phase is Phase.LOADING:
        return LifecycleState.LOADING
    return LifecycleState.SETTLED
