# roster/__init__.py
"""Учёт студентов: хранилище записей, сортировка, статистика и отчёты."""
from .errors import (
    CapacityExceeded, DataValidationError, EmptyName, EmptyRosterError, FileProcessingError,
    InvalidScoreCount, InvalidScoreValue, MalformedPersistenceLine, NotFound,
    PersistenceWriteFailed, StudentAppError,
)
from .models import Grade, Student, derive_grade, recompute
from .processing import GroupStats, SortKey, SortOrder, compute_stats, sort_students
from .store import Store

__version__ = "1.0.0"
