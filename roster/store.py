# roster/store.py
"""Хранилище студентов: упорядоченный список записей и операции над ним.

Каждая изменяющая операция сразу перезаписывает файл данных, если у
хранилища задан ``path``. Ошибка записи не откатывает изменение в памяти:
запись остаётся в списке, а вызывающая сторона получает
``PersistenceWriteFailed``.
"""
import logging
from typing import Iterator, List, Optional

from . import config, io_utils
from .errors import CapacityExceeded, NotFound
from .models import Student, recompute, sanitize_name, validate_scores
from .processing import GroupStats, SortKey, SortOrder, compute_stats, sort_students

logger = logging.getLogger(__name__)


class Store:
    """Владеет списком студентов. Порядок списка - порядок отображения и сохранения."""

    def __init__(self, path=None, capacity: int = config.MAX_STUDENTS,
                 max_subjects: int = config.MAX_SUBJECTS):
        self.path = path
        self.capacity = capacity
        self.max_subjects = max_subjects
        self._students: List[Student] = []

    def __len__(self) -> int:
        return len(self._students)

    def __iter__(self) -> Iterator[Student]:
        return iter(self._students)

    @property
    def records(self) -> List[Student]:
        """Копия списка в текущем порядке."""
        return list(self._students)

    # --- Сохранение ---

    def load(self) -> int:
        """Заменяет список содержимым файла. Возвращает число пропущенных строк."""
        if self.path is None:
            return 0
        result = io_utils.read_students_from_csv(self.path, self.max_subjects, self.capacity)
        self._students = result.students
        return result.skipped

    def save(self) -> None:
        if self.path is None:
            return
        io_utils.write_students_to_csv(self.path, self._students)

    # --- Поиск ---

    def next_roll(self) -> int:
        return max((s.roll for s in self._students), default=0) + 1

    def find_by_roll(self, roll: int) -> int:
        """Возвращает индекс студента с заданным номером."""
        for i, s in enumerate(self._students):
            if s.roll == roll:
                return i
        raise NotFound(roll)

    def get(self, roll: int) -> Student:
        return self._students[self.find_by_roll(roll)]

    def find_by_name_substring(self, query: str) -> List[Student]:
        """Поиск по части имени без учёта регистра. Пустой запрос находит всех."""
        needle = query.casefold()
        return [s for s in self._students if needle in s.name.casefold()]

    # --- Изменение ---

    def add(self, name: str, scores: List[int]) -> Student:
        """Добавляет студента с автоматически назначенным номером."""
        if len(self._students) >= self.capacity:
            raise CapacityExceeded(f"Нельзя добавить больше {self.capacity} студентов.")
        clean_name = sanitize_name(name)
        checked = validate_scores(scores, self.max_subjects)

        student = Student(self.next_roll(), clean_name, checked)
        self._students.append(student)
        logger.debug("Добавлен студент %r", student)
        self.save()
        return student

    def update(self, roll: int, name: Optional[str] = None,
               scores: Optional[List[int]] = None) -> Student:
        """Заменяет имя и/или оценки. Всё проверяется до изменения записи."""
        student = self.get(roll)
        clean_name = sanitize_name(name) if name is not None else None
        checked = validate_scores(scores, self.max_subjects) if scores is not None else None

        if clean_name is not None:
            student.name = clean_name
        if checked is not None:
            student.scores = checked
        recompute(student)
        logger.debug("Обновлён студент %r", student)
        self.save()
        return student

    def delete(self, roll: int) -> Student:
        """Удаляет студента, порядок остальных сохраняется."""
        student = self._students.pop(self.find_by_roll(roll))
        logger.debug("Удалён студент %r", student)
        self.save()
        return student

    def sort(self, key: SortKey, order: SortOrder = SortOrder.ASC) -> None:
        """Сортирует весь список на месте; новый порядок сохраняется в файл."""
        self._students[:] = sort_students(self._students, key, order)
        logger.info("Список отсортирован: %s, %s", SortKey(key).value, SortOrder(order).value)
        self.save()

    # --- Статистика ---

    def stats(self) -> GroupStats:
        return compute_stats(self._students)
