# roster/errors.py
"""Модуль для определения пользовательских исключений приложения."""

class StudentAppError(Exception):
    """Базовый класс для всех исключений в этом приложении."""
    pass

class DataValidationError(StudentAppError, ValueError):
    """Исключение, связанное с некорректными данными (в файле или вводе)."""
    pass

class EmptyName(DataValidationError):
    """Имя студента пустое (или состоит только из пробелов и запятых)."""
    pass

class InvalidScoreCount(DataValidationError):
    """Количество оценок вне допустимого диапазона."""
    pass

class InvalidScoreValue(DataValidationError):
    """Оценка вне диапазона 0-100 или не является целым числом."""
    pass

class NotFound(StudentAppError, LookupError):
    """Исключение, когда студент с заданным номером не найден."""

    def __init__(self, roll: int):
        super().__init__(f"Студент с номером {roll} не найден.")
        self.roll = roll

class CapacityExceeded(StudentAppError):
    """Достигнуто максимальное количество записей."""
    pass

class EmptyRosterError(StudentAppError, ValueError):
    """Операция требует хотя бы одной записи."""
    pass

class FileProcessingError(StudentAppError):
    """Исключение, связанное с ошибками файловых операций."""
    pass

class PersistenceWriteFailed(FileProcessingError):
    """Не удалось записать файл данных или отчёта."""
    pass

class MalformedPersistenceLine(FileProcessingError):
    """Строка файла данных не разбирается. При загрузке такие строки пропускаются."""

    def __init__(self, line_num: int, reason: str):
        super().__init__(f"Строка {line_num}: {reason}")
        self.line_num = line_num
        self.reason = reason
