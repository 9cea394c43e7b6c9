"""
player.py — воспроизведение расписания анимации по часам.

SchedulePlayer ничего не рисует: на каждом кадре UI спрашивает, какие
события уже «наступили», и применяет их к своему состоянию.
"""

import logging
import time
from typing import Callable, Iterator, List, Optional

from schedule import Schedule, VisualEvent

logger = logging.getLogger(__name__)


class SchedulePlayer:
    """
    Проигрыватель одного Schedule за раз.

    Args:
        clock: Источник времени в секундах (по умолчанию time.perf_counter).

    Примечания:
        - Каждое событие выдаётся ровно один раз и в порядке расписания.
        - start() во время воспроизведения отменяет предыдущее расписание.
        - on_finished вызывается один раз после выдачи последнего события.
    """

    def __init__(self, clock: Callable[[], float] = time.perf_counter):
        self.clock = clock
        self.schedule: Optional[Schedule] = None
        self.on_finished: Optional[Callable[[Schedule], None]] = None
        self._events: Optional[Iterator[VisualEvent]] = None
        self._pending: Optional[VisualEvent] = None
        self._t0 = 0.0
        self._delivered = 0
        self._finished = False

    # ---------- PUBLIC API ----------

    def start(
        self,
        schedule: Schedule,
        now: Optional[float] = None,
        on_finished: Optional[Callable[[Schedule], None]] = None,
    ) -> None:
        """Запускает воспроизведение; текущее расписание (если есть) отбрасывается."""
        if self.active:
            logger.debug("Superseding in-flight schedule (%d/%d events played)",
                         self._delivered, len(self.schedule))

        self.schedule = schedule
        self.on_finished = on_finished
        self._events = schedule.events()
        self._pending = None
        self._t0 = self.clock() if now is None else now
        self._delivered = 0
        self._finished = False

        # Пустое расписание — no-op, но завершение всё равно сообщаем
        if schedule.is_empty():
            self._finish()

    def cancel(self) -> None:
        """Отбрасывает текущее расписание без вызова on_finished."""
        self.schedule = None
        self.on_finished = None
        self._events = None
        self._pending = None
        self._finished = False

    @property
    def active(self) -> bool:
        return self.schedule is not None and not self._finished

    @property
    def finished(self) -> bool:
        return self._finished

    @property
    def delivered(self) -> int:
        return self._delivered

    def elapsed_ms(self, now: Optional[float] = None) -> float:
        if self.schedule is None:
            return 0.0
        now = self.clock() if now is None else now
        return max(0.0, (now - self._t0) * 1000.0)

    def progress(self, now: Optional[float] = None) -> float:
        """Доля пройденного времени воспроизведения, 0..1."""
        if self.schedule is None:
            return 0.0
        if self._finished:
            return 1.0
        span = self.schedule.total_playback_ms
        if span <= 0:
            return 1.0
        return min(1.0, self.elapsed_ms(now) / span)

    def due_events(self, now: Optional[float] = None) -> List[VisualEvent]:
        """
        Возвращает события, время которых уже наступило и которые ещё не выдавались.

        Returns:
            Список событий в порядке расписания (может быть пустым).
        """
        if not self.active:
            return []

        schedule = self.schedule
        elapsed = self.elapsed_ms(now)
        due: List[VisualEvent] = []

        while True:
            if self._pending is None:
                self._pending = next(self._events, None)
                if self._pending is None:
                    self._finish()
                    break
            if schedule.absolute_offset_ms(self._pending) > elapsed:
                break
            due.append(self._pending)
            self._pending = None
            self._delivered += 1

        return due

    # ---------- INTERNALS ----------

    def _finish(self) -> None:
        self._finished = True
        callback, self.on_finished = self.on_finished, None
        if callback is None:
            return
        try:
            callback(self.schedule)
        except Exception as e:
            # Ошибка колбэка не должна ломать кадр; состояние проигрывателя уже консистентно
            logger.debug(f"on_finished callback failed: {e}", exc_info=True)
