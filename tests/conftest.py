# tests/conftest.py
import pytest
from typing import List
from roster.models import Student
from roster.store import Store

@pytest.fixture
def sample_students() -> List[Student]:
    """Фикстура, предоставляющая тестовый набор студентов."""
    return [
        Student(1, "Alice", [85, 90, 78]),
        Student(3, "carol", [92, 88, 95]),
        Student(2, "Bob", [40, 45, 50]),
    ]

@pytest.fixture
def store() -> Store:
    """Хранилище без файла с двумя студентами из примера."""
    s = Store()
    s.add("Alice", [85, 90, 78])
    s.add("Bob", [40, 45, 50])
    return s

@pytest.fixture
def file_store(tmp_path) -> Store:
    """Хранилище, сохраняющее данные во временный файл."""
    return Store(tmp_path / "students.csv")
