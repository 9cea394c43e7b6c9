import pytest

from player import SchedulePlayer
from schedule import Highlight, UpdateValue, build_schedule


class FakeClock:
    def __init__(self):
        self.now = 0.0

    def __call__(self):
        return self.now

    def advance_ms(self, ms):
        self.now += ms / 1000.0


@pytest.fixture
def clock():
    return FakeClock()


def test_plays_events_at_their_offsets(clock):
    player = SchedulePlayer(clock=clock)
    player.start(build_schedule([3, 1], [1, 3], 600))

    assert player.due_events() == []
    clock.advance_ms(301)
    assert player.due_events() == [Highlight(0, 300.0)]
    clock.advance_ms(300)
    assert player.due_events() == [Highlight(1, 600.0)]
    # фаза обновления отсчитывается от конца фазы подсветки
    clock.advance_ms(297)
    assert player.due_events() == []
    clock.advance_ms(3)
    assert player.due_events() == [UpdateValue(0, 1, 300.0)]
    assert player.active
    clock.advance_ms(300)
    assert player.due_events() == [UpdateValue(1, 3, 600.0)]
    assert player.finished
    assert not player.active
    assert player.delivered == 4


def test_late_frame_delivers_everything_once_in_order(clock):
    finished = []
    player = SchedulePlayer(clock=clock)
    schedule = build_schedule([2, 0, 1], [0, 1, 2], 600)
    player.start(schedule, on_finished=finished.append)

    clock.advance_ms(10_000)
    events = player.due_events()
    assert events == list(schedule)
    assert player.due_events() == []
    assert finished == [schedule]


def test_empty_schedule_finishes_immediately(clock):
    finished = []
    player = SchedulePlayer(clock=clock)
    player.start(build_schedule([], [], 600), on_finished=finished.append)
    assert player.finished
    assert player.due_events() == []
    assert len(finished) == 1


def test_start_supersedes_previous_schedule(clock):
    finished = []
    player = SchedulePlayer(clock=clock)
    player.start(build_schedule([1, 0], [0, 1], 600), on_finished=lambda s: finished.append("old"))
    clock.advance_ms(350)
    assert len(player.due_events()) == 1

    player.start(build_schedule([9], [9], 100), on_finished=lambda s: finished.append("new"))
    clock.advance_ms(1000)
    assert player.due_events() == [Highlight(0, 100.0), UpdateValue(0, 9, 100.0)]
    assert finished == ["new"]


def test_cancel_discards_timeline(clock):
    finished = []
    player = SchedulePlayer(clock=clock)
    player.start(build_schedule([1, 0], [0, 1], 600), on_finished=finished.append)
    player.cancel()
    clock.advance_ms(5000)
    assert player.due_events() == []
    assert not player.active
    assert finished == []


def test_progress(clock):
    player = SchedulePlayer(clock=clock)
    assert player.progress() == 0.0
    player.start(build_schedule([1, 0], [0, 1], 600))
    clock.advance_ms(600)
    assert player.progress() == pytest.approx(0.5)
    clock.advance_ms(700)
    player.due_events()
    assert player.progress() == 1.0


def test_failing_finish_callback_does_not_break_playback(clock):
    def boom(schedule):
        raise RuntimeError("boom")

    player = SchedulePlayer(clock=clock)
    player.start(build_schedule([1], [1], 100), on_finished=boom)
    clock.advance_ms(500)
    assert len(player.due_events()) == 2
    assert player.finished
