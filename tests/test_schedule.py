import math

import pytest

from schedule import (
    Appear,
    Highlight,
    LengthMismatchError,
    Schedule,
    UpdateValue,
    build_appearance_schedule,
    build_schedule,
)
from sorting import InvalidArgumentError, counting_sort


def test_two_element_example():
    schedule = build_schedule([3, 1], [1, 3], 600)
    assert list(schedule) == [
        Highlight(0, 300.0),
        Highlight(1, 600.0),
        UpdateValue(0, 1, 300.0),
        UpdateValue(1, 3, 600.0),
    ]
    assert schedule.sorted == (1, 3)


def test_length_mismatch():
    with pytest.raises(LengthMismatchError):
        build_schedule([1, 2], [1], 600)


def test_empty_schedule():
    schedule = build_schedule([], [], 600)
    assert list(schedule.events()) == []
    assert len(schedule) == 0
    assert schedule.is_empty()
    assert schedule.total_playback_ms == 0


@pytest.mark.parametrize("n", [1, 12, 50, 500])
def test_ordering_and_offsets(n):
    original = [(i * 7) % 21 for i in range(n)]
    sorted_values = counting_sort(original)
    schedule = build_schedule(original, sorted_values, 600.0)
    events = list(schedule)

    assert len(events) == 2 * n == len(schedule)
    highlights, updates = events[:n], events[n:]
    assert all(isinstance(e, Highlight) for e in highlights)
    assert all(isinstance(e, UpdateValue) for e in updates)

    for phase in (highlights, updates):
        assert [e.index for e in phase] == list(range(n))
        offsets = [e.offset_ms for e in phase]
        assert all(a < b for a, b in zip(offsets, offsets[1:]))
        assert offsets[-1] == pytest.approx(600.0)

    assert [e.new_value for e in updates] == sorted_values


def test_per_step_delay_shrinks_with_size():
    small = build_schedule([1] * 12, [1] * 12, 600)
    large = build_schedule([1] * 500, [1] * 500, 600)
    assert small.per_step_delay_ms == pytest.approx(50.0)
    assert large.per_step_delay_ms == pytest.approx(1.2)


def test_update_phase_starts_after_highlight_phase():
    schedule = build_schedule([2, 0, 1], [0, 1, 2], 300)
    assert schedule.update_phase_start_ms == pytest.approx(300.0)
    absolute = [schedule.absolute_offset_ms(e) for e in schedule]
    assert absolute == pytest.approx([100.0, 200.0, 300.0, 400.0, 500.0, 600.0])
    assert schedule.total_playback_ms == pytest.approx(600.0)


def test_events_are_lazy_and_repeatable():
    schedule = build_schedule([1, 0], [0, 1], 100)
    it = schedule.events()
    assert next(it) == Highlight(0, 50.0)
    assert list(schedule) == list(schedule)


def test_event_kinds():
    assert Highlight(0, 1.0).kind == "highlight"
    assert UpdateValue(0, 3, 1.0).kind == "update"
    assert Appear(0, 0.0).kind == "appear"


def test_schedule_copies_inputs():
    original = [2, 1]
    sorted_values = [1, 2]
    schedule = build_schedule(original, sorted_values, 600)
    sorted_values[0] = 99
    assert isinstance(schedule, Schedule)
    assert schedule.sorted == (1, 2)


@pytest.mark.parametrize("duration", [0, -10, "abc", None, math.inf, -math.inf, math.nan])
def test_invalid_duration(duration):
    with pytest.raises(InvalidArgumentError):
        build_schedule([1], [1], duration)


def test_appearance_schedule():
    events = build_appearance_schedule([5, 5, 5, 5], 600)
    assert [e.index for e in events] == [0, 1, 2, 3]
    assert [e.offset_ms for e in events] == pytest.approx([0.0, 150.0, 300.0, 450.0])
    assert build_appearance_schedule([], 600) == []


@pytest.mark.parametrize("duration", [0, -5, None, math.inf])
def test_empty_schedule_ignores_duration(duration):
    schedule = build_schedule([], [], duration)
    assert list(schedule) == []
    assert schedule.total_playback_ms == 0
