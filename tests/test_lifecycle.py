from __future__ import annotations

import pytest

from mapevents.builders import build_data_payload, build_error_payload, build_event_payload
from mapevents.lifecycle.keys import LifecycleKey, LifecycleState
from mapevents.lifecycle.policy import Phase, next_state, phase_of
from mapevents.lifecycle.tracker import DataLifecycleTracker
from mapevents.models.kinds import DataType, EventKind


def _source(kind: str, resource_id: str | None = "r1", **extras: object):
    return build_data_payload(kind, "source", resource_id=resource_id, **extras)


def test_terminal_without_loading_settles_directly() -> None:
    tracker = DataLifecycleTracker()

    state = tracker.observe("sourcedata", _source("sourcedata"))

    assert state is LifecycleState.SETTLED
    assert tracker.is_outstanding("source", "r1") is False


def test_loading_then_data_resolves() -> None:
    tracker = DataLifecycleTracker()

    tracker.observe("sourcedataloading", _source("sourcedataloading"))
    assert tracker.is_outstanding("source", "r1") is True

    tracker.observe("sourcedata", _source("sourcedata"))
    assert tracker.is_outstanding("source", "r1") is False


def test_duplicate_loading_collapses() -> None:
    tracker = DataLifecycleTracker()

    assert tracker.observe("dataloading", _source("dataloading")) is LifecycleState.LOADING
    assert tracker.observe("sourcedataloading", _source("sourcedataloading")) is LifecycleState.LOADING
    tracker.observe("data", _source("data"))

    assert tracker.is_outstanding("source", "r1") is False


def test_settled_resource_can_reload() -> None:
    tracker = DataLifecycleTracker()

    tracker.observe("dataloading", _source("dataloading"))
    tracker.observe("data", _source("data"))
    tracker.observe("dataloading", _source("dataloading"))

    assert tracker.is_outstanding("source", "r1") is True


def test_correlated_error_settles_load() -> None:
    tracker = DataLifecycleTracker()
    tracker.observe("sourcedataloading", _source("sourcedataloading"))

    state = tracker.observe("error", build_error_payload(None, "404", data_type="source", resource_id="r1"))

    assert state is LifecycleState.SETTLED
    assert tracker.is_outstanding("source", "r1") is False


def test_uncorrelated_error_is_ignored() -> None:
    tracker = DataLifecycleTracker()
    tracker.observe("sourcedataloading", _source("sourcedataloading"))

    assert tracker.observe("error", build_error_payload(None, "something broke")) is None
    assert tracker.is_outstanding("source", "r1") is True


def test_tile_loads_roll_up_to_resource() -> None:
    tracker = DataLifecycleTracker()
    tracker.observe("sourcedataloading", _source("sourcedataloading", coordinate=(1, 0, 0)))
    tracker.observe("sourcedataloading", _source("sourcedataloading", coordinate=(1, 1, 0)))

    assert tracker.is_outstanding("source", "r1") is True
    assert tracker.is_outstanding("source", "r1", (1, 0, 0)) is True
    assert tracker.is_outstanding("source", "r1", (1, 1, 1)) is False

    tracker.observe("sourcedata", _source("sourcedata", coordinate=(1, 0, 0)))
    assert tracker.is_outstanding("source", "r1", (1, 0, 0)) is False
    assert tracker.is_outstanding("source", "r1") is True

    tracker.observe("error", build_error_payload(None, "x", data_type="source", resource_id="r1", coordinate=(1, 1, 0)))
    assert tracker.is_outstanding("source", "r1") is False


def test_settled_loads_are_not_retained() -> None:
    tracker = DataLifecycleTracker()
    coordinates = [(5, x, y) for x in range(32) for y in range(32)]
    for coordinate in coordinates:
        tracker.observe("sourcedataloading", _source("sourcedataloading", coordinate=coordinate))
    assert len(tracker) == len(coordinates)

    for coordinate in coordinates:
        tracker.observe("sourcedata", _source("sourcedata", coordinate=coordinate))

    assert len(tracker) == 0
    assert tracker.is_outstanding("source", "r1") is False


def test_terminal_for_unseen_key_stores_nothing() -> None:
    tracker = DataLifecycleTracker()
    tracker.observe("sourcedata", _source("sourcedata", coordinate=(0, 0, 0)))
    tracker.observe("error", build_error_payload(None, "x", data_type="source", resource_id="r2"))

    assert len(tracker) == 0


def test_keys_for_other_resources_are_independent() -> None:
    tracker = DataLifecycleTracker()
    tracker.observe("sourcedataloading", _source("sourcedataloading", resource_id="roads"))
    tracker.observe("sourcedataloading", _source("sourcedataloading", resource_id="water"))
    tracker.observe("sourcedata", _source("sourcedata", resource_id="roads"))

    assert tracker.is_outstanding("source", "roads") is False
    assert tracker.is_outstanding("source", "water") is True
    assert tracker.is_outstanding("style", "water") is False


def test_style_loads_use_default_key() -> None:
    tracker = DataLifecycleTracker()
    tracker.observe("styledataloading", build_data_payload("styledataloading", "style"))

    assert tracker.is_outstanding(DataType.STYLE, "style") is True

    tracker.observe("styledata", build_data_payload("styledata", "style"))
    assert tracker.is_outstanding(DataType.STYLE, "style") is False


def test_source_event_without_resource_id_is_untracked() -> None:
    tracker = DataLifecycleTracker()
    assert tracker.observe("sourcedataloading", _source("sourcedataloading", resource_id=None)) is None
    assert len(tracker) == 0


def test_non_data_events_are_ignored() -> None:
    tracker = DataLifecycleTracker()
    assert tracker.observe("zoom", build_event_payload("zoom", None)) is None
    assert tracker.observe("style.load", build_event_payload("style.load", None)) is None


def test_reset_forgets_everything() -> None:
    tracker = DataLifecycleTracker()
    tracker.observe("dataloading", _source("dataloading"))
    tracker.reset()
    assert tracker.is_outstanding("source", "r1") is False
    assert len(tracker) == 0


def test_key_rejects_tile_on_style() -> None:
    with pytest.raises(ValueError):
        LifecycleKey.of("style", "style", (0, 0, 0))


def test_key_str() -> None:
    assert str(LifecycleKey.of("source", "roads")) == "source:roads"
    assert str(LifecycleKey.of("source", "roads", (2, 1, 3))) == "source:roads@2/1/3"


@pytest.mark.parametrize(
    ("current", "kind", "expected"),
    [
        (LifecycleState.IDLE, EventKind.DATALOADING, LifecycleState.LOADING),
        (LifecycleState.LOADING, EventKind.SOURCEDATALOADING, LifecycleState.LOADING),
        (LifecycleState.SETTLED, EventKind.STYLEDATALOADING, LifecycleState.LOADING),
        (LifecycleState.IDLE, EventKind.DATA, LifecycleState.SETTLED),
        (LifecycleState.LOADING, EventKind.ERROR, LifecycleState.SETTLED),
        (LifecycleState.SETTLED, EventKind.SOURCEDATA, LifecycleState.SETTLED),
    ],
)
def test_transition_table(current: LifecycleState, kind: EventKind, expected: LifecycleState) -> None:
    phase = phase_of(kind)
    assert phase is not None
    assert next_state(current, phase) is expected


def test_phase_of_ignores_other_kinds() -> None:
    assert phase_of(EventKind.CLICK) is None
    assert phase_of(EventKind.STYLE_LOAD) is None
    assert phase_of(EventKind.DATALOADING) is Phase.LOADING
