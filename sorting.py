"""
sorting.py — логика сортировки подсчётом (Counting Sort) и генерации данных.

Модуль не знает ничего про окно, таймеры и анимации: функции чистые,
на вход получают последовательность целых чисел и возвращают новый список.
"""

import random
from typing import List, Optional, Sequence


class InvalidArgumentError(ValueError):
    """Недопустимый аргумент генерации (отрицательный count или max_value)."""


def _check_non_negative(name: str, value) -> int:
    # bool — подкласс int, но как количество элементов это почти наверняка ошибка
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidArgumentError(f"{name} must be an int, got {value!r}")
    if value < 0:
        raise InvalidArgumentError(f"{name} must be >= 0, got {value}")
    return value


def generate_random_numbers(
    count: int,
    max_value: int,
    rng: Optional[random.Random] = None,
) -> List[int]:
    """
    Генерирует список случайных целых чисел.

    Args:
        count: Количество элементов.
        max_value: Верхняя граница значений (ВКЛЮЧИТЕЛЬНО).
        rng: Необязательный генератор random.Random (для воспроизводимости).

    Returns:
        Список из count значений, равномерно распределённых в [0, max_value].

    Raises:
        InvalidArgumentError: Если count < 0 или max_value < 0.
    """
    count = _check_non_negative("count", count)
    max_value = _check_non_negative("max_value", max_value)

    rnd = rng if rng is not None else random
    return [rnd.randint(0, max_value) for _ in range(count)]


def build_count_table(sample: Sequence[int]) -> List[int]:
    """
    Строит таблицу частот: table[v] — сколько раз v встречается в sample.

    Args:
        sample: Непустая последовательность неотрицательных целых.

    Returns:
        Список длины max(sample) + 1; сумма элементов равна len(sample).

    Raises:
        RuntimeError: Если sample пуст (максимум не определён) — это ошибка
                      вызывающего кода, а не пользовательская ситуация.
        ValueError: Если в sample есть отрицательные значения.
    """
    if not sample:
        raise RuntimeError("build_count_table() called on an empty sample")

    max_value = max(sample)
    min_value = min(sample)
    if min_value < 0:
        raise ValueError(f"Counting sort supports only values >= 0, got {min_value}")

    table = [0] * (max_value + 1)
    for v in sample:
        table[v] += 1
    return table


def counting_sort(sample: Sequence[int]) -> List[int]:
    """
    Сортирует последовательность подсчётом, не изменяя исходные данные.

    Args:
        sample: Последовательность неотрицательных целых.

    Returns:
        Новый список, отсортированный по возрастанию.

    Примечания:
        - Сложность O(n + max): сравнений между элементами нет.
        - Пустой вход возвращает [] сразу, без таблицы частот.
    """
    if not sample:
        return []

    table = build_count_table(sample)

    result: List[int] = []
    for value, occurrences in enumerate(table):
        result.extend([value] * occurrences)
    return result
