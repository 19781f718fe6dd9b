# roster/processing.py
"""Модуль для обработки данных: сравнение, сортировка и статистика по группе."""
from dataclasses import dataclass, field
from enum import Enum
from functools import cmp_to_key
from typing import Callable, Dict, List, Sequence

from .errors import EmptyRosterError
from .models import Grade, Student

Comparator = Callable[[Student, Student], int]


class SortKey(Enum):
    ROLL = "roll"
    NAME = "name"
    AVERAGE = "avg"


class SortOrder(Enum):
    ASC = "asc"
    DESC = "desc"


def cmp_roll_asc(a: Student, b: Student) -> int:
    return (a.roll > b.roll) - (a.roll < b.roll)

def cmp_roll_desc(a: Student, b: Student) -> int:
    return -cmp_roll_asc(a, b)

def cmp_name_asc(a: Student, b: Student) -> int:
    """Сравнение имён без учёта регистра."""
    x, y = a.name.casefold(), b.name.casefold()
    return (x > y) - (x < y)

def cmp_name_desc(a: Student, b: Student) -> int:
    return -cmp_name_asc(a, b)

def cmp_avg_asc(a: Student, b: Student) -> int:
    return (a.average > b.average) - (a.average < b.average)

def cmp_avg_desc(a: Student, b: Student) -> int:
    return -cmp_avg_asc(a, b)


COMPARATORS: Dict[SortKey, Dict[SortOrder, Comparator]] = {
    SortKey.ROLL: {SortOrder.ASC: cmp_roll_asc, SortOrder.DESC: cmp_roll_desc},
    SortKey.NAME: {SortOrder.ASC: cmp_name_asc, SortOrder.DESC: cmp_name_desc},
    SortKey.AVERAGE: {SortOrder.ASC: cmp_avg_asc, SortOrder.DESC: cmp_avg_desc},
}


def get_comparator(key: SortKey, order: SortOrder = SortOrder.ASC) -> Comparator:
    """Возвращает функцию сравнения для ключа и направления."""
    try:
        return COMPARATORS[SortKey(key)][SortOrder(order)]
    except ValueError:
        raise ValueError("Неверный ключ для сортировки. Доступно: 'roll', 'name', 'avg'; 'asc', 'desc'.")


def sort_students(students: Sequence[Student], key: SortKey,
                  order: SortOrder = SortOrder.ASC) -> List[Student]:
    """Возвращает новый отсортированный список.

    Сортировка устойчивая: при равных ключах сохраняется исходный порядок.
    """
    return sorted(students, key=cmp_to_key(get_comparator(key, order)))


@dataclass
class GroupStats:
    total: int
    class_average: float
    topper: Student
    lowest: Student
    grade_counts: Dict[Grade, int] = field(default_factory=dict)


def compute_stats(students: Sequence[Student]) -> GroupStats:
    """Рассчитывает статистику по группе студентов.

    При равенстве средних лучшим и худшим считается первый встреченный.
    """
    if not students:
        raise EmptyRosterError("Список студентов пуст, статистика недоступна.")

    grade_counts = {grade: 0 for grade in Grade}
    total_average = 0.0
    topper = lowest = students[0]

    for s in students:
        total_average += s.average
        if s.average > topper.average:
            topper = s
        if s.average < lowest.average:
            lowest = s
        grade_counts[Grade(s.grade)] += 1

    return GroupStats(
        total=len(students),
        class_average=total_average / len(students),
        topper=topper,
        lowest=lowest,
        grade_counts=grade_counts,
    )
