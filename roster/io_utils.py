# roster/io_utils.py
"""Модуль для операций ввода/вывода: файл данных (CSV) и текстовый отчёт.

Формат файла данных, одна строка на студента::

    roll,name,subjectCount,score1;score2;...;scoreN,average,grade

Первая строка, начинающаяся с ``roll,``, считается заголовком.
"""
import csv
import logging
import math
from typing import List, NamedTuple, Sequence

from . import config
from .errors import EmptyRosterError, FileProcessingError, MalformedPersistenceLine, PersistenceWriteFailed
from .models import Grade, Student
from .processing import GroupStats, compute_stats

logger = logging.getLogger(__name__)

HEADER = ["roll", "name", "subjectCount", "marks", "average", "grade"]

TABLE_HEADER = f"{'Roll':<6}  {'Name':<25}  {'Subjects':<8}  {'Average':<8}  {'Grade':<5}"
TABLE_DIVIDER = "------  -------------------------  --------  --------  -----"
BANNER = "=" * 46


class LoadResult(NamedTuple):
    students: List[Student]
    skipped: int


def read_students_from_csv(filepath, max_subjects: int = config.MAX_SUBJECTS,
                           capacity: int = config.MAX_STUDENTS) -> LoadResult:
    """Читает студентов из файла данных.

    Отсутствующий файл даёт пустой список. Каждая строка разбирается
    отдельно: строки, которые не разбираются (в том числе с байтами не в
    UTF-8), пропускаются, их количество возвращается в ``LoadResult.skipped``.
    Средний балл и буква берутся из файла без пересчёта.
    """
    students: List[Student] = []
    seen_rolls = set()
    skipped = 0
    try:
        with open(filepath, mode='r', encoding='utf-8', errors='replace', newline='') as file:
            for i, line in enumerate(file, start=1):
                if i == 1 and line.startswith("roll,"):
                    continue  # Заголовок
                if not line.strip():
                    continue
                if len(students) >= capacity:
                    logger.warning("Строка %d: превышен лимит в %d записей, строка пропущена", i, capacity)
                    skipped += 1
                    continue
                try:
                    student = parse_line(line, i, max_subjects)
                    if student.roll in seen_rolls:
                        raise MalformedPersistenceLine(i, f"повторяющийся номер {student.roll}")
                except MalformedPersistenceLine as e:
                    logger.warning("Пропущена строка файла %s. %s", filepath, e)
                    skipped += 1
                    continue
                seen_rolls.add(student.roll)
                students.append(student)

    except FileNotFoundError:
        logger.info("Файл %s не найден, начинаем с пустого списка", filepath)
        return LoadResult([], 0)
    except OSError as e:
        raise FileProcessingError(f"Не удалось прочитать файл {filepath}: {e}")

    if skipped:
        logger.warning("При загрузке %s пропущено строк: %d", filepath, skipped)
    logger.info("Загружено %d студентов из %s", len(students), filepath)
    return LoadResult(students, skipped)


def parse_line(line: str, line_num: int, max_subjects: int = config.MAX_SUBJECTS) -> Student:
    """Разбирает одну строку файла данных как CSV."""
    if "\ufffd" in line:
        raise MalformedPersistenceLine(line_num, "байты не в кодировке UTF-8")
    try:
        row = next(csv.reader([line]), [])
    except csv.Error as e:
        raise MalformedPersistenceLine(line_num, f"ошибка CSV ({e})")
    return parse_row(row, line_num, max_subjects)


def parse_row(row: List[str], line_num: int, max_subjects: int = config.MAX_SUBJECTS) -> Student:
    """Разбирает одну строку файла данных."""
    if len(row) != len(HEADER):
        raise MalformedPersistenceLine(line_num, f"ожидалось {len(HEADER)} полей, получено {len(row)}")
    roll_str, name, count_str, scores_str, average_str, grade_str = row
    name = name.strip()[:config.MAX_NAME_LENGTH].rstrip()

    try:
        roll = int(roll_str)
        subject_count = int(count_str)
        scores = [int(score) for score in scores_str.split(";")]
        average = float(average_str)
    except ValueError as e:
        raise MalformedPersistenceLine(line_num, f"некорректное число ({e})")

    if not math.isfinite(average):
        raise MalformedPersistenceLine(line_num, f"средний балл {average_str!r} не является конечным числом")
    if roll <= 0:
        raise MalformedPersistenceLine(line_num, f"номер {roll} должен быть положительным")
    if not name:
        raise MalformedPersistenceLine(line_num, "пустое имя")
    if not 1 <= subject_count <= max_subjects:
        raise MalformedPersistenceLine(line_num, f"количество предметов {subject_count} вне диапазона 1-{max_subjects}")
    if len(scores) != subject_count:
        raise MalformedPersistenceLine(line_num, f"указано {subject_count} оценок, найдено {len(scores)}")
    if any(score < config.MIN_SCORE or score > config.MAX_SCORE for score in scores):
        raise MalformedPersistenceLine(line_num, "оценка вне диапазона 0-100")
    try:
        grade = Grade(grade_str.strip())
    except ValueError:
        raise MalformedPersistenceLine(line_num, f"неизвестная оценка '{grade_str}'")

    return Student(roll, name, scores, average=average, grade=grade)


def format_row(student: Student) -> List[str]:
    scores_str = ";".join(map(str, student.scores))
    return [str(student.roll), student.name, str(student.subject_count), scores_str,
            repr(student.average), student.grade.value]


def write_students_to_csv(filepath, students: Sequence[Student]) -> None:
    """Перезаписывает файл данных целиком."""
    try:
        with open(filepath, mode='w', encoding='utf-8', newline='') as file:
            writer = csv.writer(file, lineterminator='\n')
            writer.writerow(HEADER)
            for s in students:
                writer.writerow(format_row(s))
    except OSError as e:
        logger.error("Ошибка записи в файл %s: %s", filepath, e)
        raise PersistenceWriteFailed(f"Ошибка записи в файл {filepath}: {e}")
    logger.debug("Сохранено %d студентов в %s", len(students), filepath)


def format_student_line(student: Student) -> str:
    return (f"{student.roll:<6}  {student.name[:25]:<25}  {student.subject_count:<8}  "
            f"{student.average:<8.2f}  {student.grade.value:<5}")


def format_table(students: Sequence[Student]) -> str:
    """Таблица с фиксированной шириной колонок: заголовок, разделитель, строки."""
    lines = [TABLE_HEADER, TABLE_DIVIDER]
    lines.extend(format_student_line(s) for s in students)
    return "\n".join(lines)


def _describe(student: Student) -> str:
    return f"Roll {student.roll} ({student.name}) Avg {student.average:.2f}"


def format_summary(stats: GroupStats) -> str:
    return "\n".join([
        f"Total students : {stats.total}",
        f"Class average  : {stats.class_average:.2f}",
        f"Topper         : {_describe(stats.topper)}",
        f"Lowest         : {_describe(stats.lowest)}",
    ])


def format_stats(stats: GroupStats) -> str:
    """Блок статистики для экрана, с распределением по буквам."""
    counts = ", ".join(f"{grade.value}={stats.grade_counts.get(grade, 0)}" for grade in Grade)
    return "\n".join([
        "--- Statistics ---",
        format_summary(stats),
        f"Grades         : {counts}",
    ])


def render_report(students: Sequence[Student]) -> str:
    """Текст отчёта: шапка, таблица всех студентов и итоговый блок."""
    if not students:
        raise EmptyRosterError("Нет записей для отчёта.")
    stats = compute_stats(students)
    return "\n".join([
        BANNER,
        f"{'Student Management Report':^46}",
        BANNER,
        "",
        format_table(students),
        "",
        "--- Summary ---",
        format_summary(stats),
        "",
    ])


def export_report(filepath, students: Sequence[Student]) -> None:
    """Записывает отчёт в текстовый файл."""
    text = render_report(students)
    try:
        with open(filepath, mode='w', encoding='utf-8') as file:
            file.write(text)
    except OSError as e:
        logger.error("Ошибка экспорта отчёта в %s: %s", filepath, e)
        raise PersistenceWriteFailed(f"Ошибка экспорта в файл {filepath}: {e}")
    logger.info("Отчёт по %d студентам записан в %s", len(students), filepath)
