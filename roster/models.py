# roster/models.py
"""Модуль, определяющий основные модели данных: Student и Grade."""
from enum import Enum
from typing import Iterable, List, Optional

from . import config
from .errors import EmptyName, InvalidScoreCount, InvalidScoreValue


class Grade(str, Enum):
    """Буквенная оценка. Значение записывается в файл данных как есть."""
    A = "A"
    B = "B"
    C = "C"
    D = "D"
    F = "F"

    def __str__(self) -> str:
        return self.value


# Нижние границы включительно, проверяются сверху вниз.
GRADE_THRESHOLDS = (
    (90.0, Grade.A),
    (75.0, Grade.B),
    (60.0, Grade.C),
    (50.0, Grade.D),
)


def derive_grade(average: float) -> Grade:
    """Возвращает букву по среднему баллу."""
    for threshold, grade in GRADE_THRESHOLDS:
        if average >= threshold:
            return grade
    return Grade.F


def sanitize_name(name: str) -> str:
    """Заменяет запятые и переводы строк пробелами, обрезает пробелы по краям и длину имени."""
    if not isinstance(name, str):
        raise EmptyName("Имя студента не может быть пустым.")
    cleaned = name.replace(",", " ").replace("\r", " ").replace("\n", " ").strip()[:config.MAX_NAME_LENGTH].rstrip()
    if not cleaned:
        raise EmptyName("Имя студента не может быть пустым.")
    return cleaned


def validate_scores(scores: Iterable[int], max_subjects: int = config.MAX_SUBJECTS) -> List[int]:
    """Проверяет оценки и возвращает их копию в виде списка."""
    checked = list(scores)
    if not 1 <= len(checked) <= max_subjects:
        raise InvalidScoreCount(
            f"Количество оценок {len(checked)} недопустимо. Разрешено от 1 до {max_subjects}."
        )
    for score in checked:
        # bool - подкласс int, но оценкой не является
        if not isinstance(score, int) or isinstance(score, bool):
            raise InvalidScoreValue(f"Оценка '{score}' должна быть целым числом.")
        if score < config.MIN_SCORE or score > config.MAX_SCORE:
            raise InvalidScoreValue(
                f"Оценка {score} недопустима. Разрешен диапазон {config.MIN_SCORE}-{config.MAX_SCORE}."
            )
    return checked


def recompute(student: "Student") -> None:
    """Пересчитывает средний балл и букву студента на месте."""
    student.average = sum(student.scores) / len(student.scores)
    student.grade = derive_grade(student.average)


class Student:
    """Представляет студента: номер, имя, оценки и производные поля.

    Средний балл и буква пересчитываются при каждом присваивании ``scores``.
    Явно переданные ``average`` и ``grade`` принимаются как есть: так
    восстанавливаются записи из файла данных.
    """

    def __init__(self, roll: int, name: str, scores: List[int],
                 average: Optional[float] = None, grade: Optional[Grade] = None):
        if not isinstance(roll, int) or isinstance(roll, bool) or roll <= 0:
            raise ValueError("Номер студента должен быть положительным целым числом.")
        self.roll = roll
        self.name = name
        self.average = 0.0
        self.grade = Grade.F
        self.scores = scores
        if average is not None:
            self.average = average
            self.grade = Grade(grade) if grade is not None else derive_grade(average)

    @property
    def scores(self) -> List[int]:
        return self._scores

    @scores.setter
    def scores(self, value: List[int]) -> None:
        if not value:
            raise InvalidScoreCount("Список оценок не может быть пустым.")
        self._scores = list(value)
        recompute(self)

    @property
    def subject_count(self) -> int:
        return len(self._scores)

    def __repr__(self) -> str:
        """Возвращает строковое представление объекта для отладки."""
        return (f"Student(roll={self.roll}, name='{self.name}', "
                f"average={self.average:.2f}, grade={self.grade.value})")

    def __str__(self) -> str:
        """Возвращает удобное для пользователя строковое представление объекта."""
        scores_str = ", ".join(map(str, self.scores))
        return (f"Номер: {self.roll:<4} | Имя: {self.name:<25} | Средний балл: {self.average:<6.2f} "
                f"| Оценка: {self.grade.value} | Оценки: [{scores_str}]")
