"""
text_input.py — разбор пользовательского текста в массив чисел и обратно.
"""

import logging
import re
from typing import Iterable, List

_INT_RE = re.compile(r"[+-]?\d+")

# диапазон 32-битного int: всё, что за его пределами, не число для поля ввода
INT_MIN = -2 ** 31
INT_MAX = 2 ** 31 - 1

logger = logging.getLogger(__name__)


def parse_sample(text: str) -> List[int]:
    """
    Превращает текст (по одному числу в строке) в список целых.

    Примечания:
        - Пустые строки и строки из одних пробелов пропускаются.
        - Строки, которые не являются целым числом, молча отбрасываются.
        - Значения вне [INT_MIN, INT_MAX] отбрасываются так же.
        - Знак минуса разбирается; отбрасывать отрицательные — задача вызывающего.
    """
    if not text:
        return []

    values: List[int] = []
    for lineno, line in enumerate(text.splitlines(), start=1):
        line = line.strip()
        if not line:
            continue
        if not _INT_RE.fullmatch(line):
            logger.debug("Skipping non-integer line %d: %r", lineno, line)
            continue
        value = int(line)
        if not INT_MIN <= value <= INT_MAX:
            logger.debug("Skipping out-of-range line %d: %r", lineno, line)
            continue
        values.append(value)
    return values


def format_sample(sample: Iterable[int]) -> str:
    """Один элемент на строку, с завершающим переводом строки."""
    return "".join(f"{v}\n" for v in sample)
