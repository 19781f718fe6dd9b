# roster/config.py
"""Ограничения и имена файлов по умолчанию."""

MAX_STUDENTS = 1000
MAX_SUBJECTS = 10
MAX_NAME_LENGTH = 99

MIN_SCORE = 0
MAX_SCORE = 100

DATA_FILE = "students.csv"
REPORT_FILE = "report.txt"
