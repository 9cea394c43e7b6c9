"""
schedule.py — построение расписания анимации сортировки.

По паре (исходный массив, отсортированный массив) строится декларативная
временная шкала событий: сначала подсветка каждой позиции, затем обновление
значений. Модуль не спит и не заводит таймеров — воспроизведением занимается
поверхность отрисовки (см. player.py и ui.py).
"""

import math
from dataclasses import dataclass, field
from typing import Iterator, List, Sequence, Tuple, Union

from sorting import InvalidArgumentError


class LengthMismatchError(ValueError):
    """Длины исходного и отсортированного массивов не совпадают."""


@dataclass(frozen=True)
class Highlight:
    """Позиция index «просматривается» (фаза 1)."""
    index: int
    offset_ms: float
    kind: str = field(default="highlight", init=False)


@dataclass(frozen=True)
class UpdateValue:
    """Отображаемое значение позиции index меняется на new_value (фаза 2)."""
    index: int
    new_value: int
    offset_ms: float
    kind: str = field(default="update", init=False)


@dataclass(frozen=True)
class Appear:
    """Столбец index появляется на графике (анимация появления)."""
    index: int
    offset_ms: float
    kind: str = field(default="appear", init=False)


VisualEvent = Union[Highlight, UpdateValue]


@dataclass(frozen=True)
class Schedule:
    """
    Расписание одного прохода сортировки.

    Смещения событий каждой фазы отсчитываются от начала этой фазы.
    Фаза обновления начинается только после последней подсветки;
    для пересчёта в смещение от начала воспроизведения есть absolute_offset_ms().

    События генерируются лениво: для 500 столбцов список из 1000 объектов
    создаётся только если его действительно запросили.
    """
    original: Tuple[int, ...]
    sorted: Tuple[int, ...]
    total_duration_ms: float

    @property
    def size(self) -> int:
        return len(self.original)

    @property
    def per_step_delay_ms(self) -> float:
        if not self.original:
            return 0.0
        return self.total_duration_ms / len(self.original)

    @property
    def update_phase_start_ms(self) -> float:
        """Смещение последней подсветки (= конец фазы 1)."""
        return self.size * self.per_step_delay_ms

    @property
    def total_playback_ms(self) -> float:
        """Смещение последнего обновления от начала воспроизведения."""
        return 2 * self.update_phase_start_ms

    def is_empty(self) -> bool:
        return not self.original

    def highlight_events(self) -> Iterator[Highlight]:
        delay = self.per_step_delay_ms
        for i in range(self.size):
            yield Highlight(index=i, offset_ms=(i + 1) * delay)

    def update_events(self) -> Iterator[UpdateValue]:
        delay = self.per_step_delay_ms
        for i, value in enumerate(self.sorted):
            yield UpdateValue(index=i, new_value=value, offset_ms=(i + 1) * delay)

    def events(self) -> Iterator[VisualEvent]:
        """Все события: сначала фаза подсветки, затем фаза обновления."""
        yield from self.highlight_events()
        yield from self.update_events()

    def absolute_offset_ms(self, event: VisualEvent) -> float:
        if isinstance(event, UpdateValue):
            return self.update_phase_start_ms + event.offset_ms
        return event.offset_ms

    def __iter__(self) -> Iterator[VisualEvent]:
        return self.events()

    def __len__(self) -> int:
        return 2 * self.size


def _check_duration(total_duration_ms) -> float:
    try:
        duration = float(total_duration_ms)
    except (TypeError, ValueError) as e:
        raise InvalidArgumentError(f"total_duration_ms must be a number: {total_duration_ms!r}") from e
    if not math.isfinite(duration) or not duration > 0:
        raise InvalidArgumentError(f"total_duration_ms must be a finite number > 0, got {total_duration_ms!r}")
    return duration


def build_schedule(
    original: Sequence[int],
    sorted_sample: Sequence[int],
    total_duration_ms: float,
) -> Schedule:
    """
    Строит расписание анимации для одного прохода сортировки.

    Args:
        original: Массив до сортировки.
        sorted_sample: Тот же массив после сортировки.
        total_duration_ms: Бюджет времени на фазу (мс); шаг = бюджет / n.

    Returns:
        Schedule из 2n событий. Для пустого массива — пустое расписание.

    Raises:
        LengthMismatchError: Если длины массивов различаются.
        InvalidArgumentError: Если массив непуст, а total_duration_ms <= 0,
                              бесконечен или не число.
    """
    if len(original) != len(sorted_sample):
        raise LengthMismatchError(
            f"original has {len(original)} items, sorted has {len(sorted_sample)}"
        )
    # пустой массив — пустое расписание при любом бюджете
    if len(original) == 0:
        return Schedule(original=(), sorted=(), total_duration_ms=0.0)
    duration = _check_duration(total_duration_ms)

    return Schedule(
        original=tuple(original),
        sorted=tuple(sorted_sample),
        total_duration_ms=duration,
    )


def build_appearance_schedule(sample: Sequence[int], total_duration_ms: float) -> List[Appear]:
    """
    Расписание появления столбцов после генерации нового массива.

    Первый столбец появляется сразу, следующие — с шагом total / n.
    """
    duration = _check_duration(total_duration_ms)
    n = len(sample)
    if n == 0:
        return []
    delay = duration / n
    return [Appear(index=i, offset_ms=i * delay) for i in range(n)]
