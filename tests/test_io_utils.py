# tests/test_io_utils.py
import pytest
from roster.io_utils import (
    export_report, format_stats, format_table, parse_row, read_students_from_csv,
    render_report, write_students_to_csv,
)
from roster.models import Grade, Student
from roster.processing import compute_stats
from roster.store import Store
from roster.errors import EmptyRosterError, MalformedPersistenceLine, PersistenceWriteFailed

def test_csv_roundtrip(sample_students, tmp_path):
    """Тестирует полный цикл: запись в CSV и чтение обратно."""
    filepath = tmp_path / "test.csv"

    write_students_to_csv(filepath, sample_students)
    result = read_students_from_csv(filepath)

    assert result.skipped == 0
    assert len(result.students) == len(sample_students)

    # Порядок файла совпадает с порядком списка
    for original, read in zip(sample_students, result.students):
        assert original.roll == read.roll
        assert original.name == read.name
        assert original.scores == read.scores
        assert original.grade is read.grade
        assert original.average == read.average

def test_written_format(tmp_path):
    filepath = tmp_path / "students.csv"
    write_students_to_csv(filepath, [Student(1, "Alice Johnson", [85, 90, 78])])
    assert filepath.read_text(encoding="utf-8") == (
        "roll,name,subjectCount,marks,average,grade\n"
        f"1,Alice Johnson,3,85;90;78,{253 / 3!r},B\n"
    )

def test_read_without_header(tmp_path):
    filepath = tmp_path / "students.csv"
    filepath.write_text("1,Alice,2,80;90,85.00,B\n2,Bob,1,40,40.00,F\n", encoding="utf-8")
    result = read_students_from_csv(filepath)
    assert [s.roll for s in result.students] == [1, 2]
    assert result.skipped == 0

def test_read_trusts_average_and_grade(tmp_path):
    filepath = tmp_path / "students.csv"
    filepath.write_text("roll,name,subjectCount,marks,average,grade\n7, Eve ,1,10,99.50,A\n",
                        encoding="utf-8")
    eve = read_students_from_csv(filepath).students[0]
    assert eve.name == "Eve"
    assert eve.average == 99.5
    assert eve.grade is Grade.A

def test_malformed_lines_are_skipped(tmp_path, caplog):
    filepath = tmp_path / "students.csv"
    filepath.write_text(
        "roll,name,subjectCount,marks,average,grade\n"
        "1,Alice,3,85;90;78,84.33,B\n"
        "2,Bob,3,40;45,45.00,F\n"          # оценок меньше, чем указано
        "3,Carol,0,,0.00,F\n"              # предметов 0
        "4,Dave,11,1;1;1;1;1;1;1;1;1;1;1,1.00,F\n"
        "5,Eve,1,80\n"                     # не хватает полей
        "x,Frank,1,80,80.00,B\n"
        "1,Alice again,1,80,80.00,B\n"     # повторный номер
        "\n"
        "8,Heidi,2,60;70,65.00,C\n",
        encoding="utf-8",
    )
    with caplog.at_level("WARNING"):
        result = read_students_from_csv(filepath)
    assert [s.roll for s in result.students] == [1, 8]
    assert result.skipped == 6
    assert "пропущено строк: 6" in caplog.text

def test_capacity_limits_load(tmp_path):
    filepath = tmp_path / "students.csv"
    filepath.write_text("1,A,1,50,50.00,D\n2,B,1,60,60.00,C\n3,C,1,70,70.00,C\n", encoding="utf-8")
    result = read_students_from_csv(filepath, capacity=2)
    assert [s.roll for s in result.students] == [1, 2]
    assert result.skipped == 1

def test_read_missing_file(tmp_path):
    result = read_students_from_csv(tmp_path / "missing.csv")
    assert result.students == []
    assert result.skipped == 0

def test_read_empty_file(tmp_path):
    filepath = tmp_path / "empty.csv"
    filepath.write_text("", encoding="utf-8")
    assert read_students_from_csv(filepath).students == []

def test_parse_row_errors():
    with pytest.raises(MalformedPersistenceLine) as exc:
        parse_row(["1", "A", "2", "50", "50.00", "D"], 3)
    assert exc.value.line_num == 3
    with pytest.raises(MalformedPersistenceLine):
        parse_row(["1", "A", "1", "150", "150.00", "A"], 1)
    with pytest.raises(MalformedPersistenceLine):
        parse_row(["1", "A", "1", "50", "50.00", "Z"], 1)
    with pytest.raises(MalformedPersistenceLine):
        parse_row(["-1", "A", "1", "50", "50.00", "D"], 1)

def test_write_failure(tmp_path):
    with pytest.raises(PersistenceWriteFailed):
        write_students_to_csv(tmp_path / "missing_dir" / "x.csv", [])

def test_format_table(sample_students):
    long_name = Student(9, "N" * 40, [100])
    lines = format_table(sample_students + [long_name]).splitlines()
    assert lines[0].split() == ["Roll", "Name", "Subjects", "Average", "Grade"]
    assert lines[1].startswith("------  ----")
    assert lines[2] == "1       Alice                      3         84.33     B    "
    assert "N" * 25 in lines[-1]
    assert "N" * 26 not in lines[-1]

def test_format_stats():
    stats = compute_stats([Student(1, "Alice", [85, 90, 78]), Student(2, "Bob", [40, 45, 50])])
    text = format_stats(stats)
    assert "Class average  : 64.67" in text
    assert "Topper         : Roll 1 (Alice) Avg 84.33" in text
    assert "Lowest         : Roll 2 (Bob) Avg 45.00" in text
    assert "Grades         : A=0, B=1, C=0, D=0, F=1" in text

def test_render_report(sample_students):
    report = render_report(sample_students)
    assert "Student Management Report" in report
    assert "--- Summary ---" in report
    assert "Total students : 3" in report
    assert "Topper         : Roll 3 (carol) Avg 91.67" in report
    assert "Lowest         : Roll 2 (Bob) Avg 45.00" in report

def test_render_report_empty():
    with pytest.raises(EmptyRosterError):
        render_report([])

def test_export_report(sample_students, tmp_path):
    filepath = tmp_path / "report.txt"
    export_report(filepath, sample_students)
    assert filepath.read_text(encoding="utf-8") == render_report(sample_students)

def test_roundtrip_keeps_average_consistent_with_grade(tmp_path):
    filepath = tmp_path / "students.csv"
    almost_a = Student(1, "Almost", [90], average=89.996, grade=Grade.B)
    write_students_to_csv(filepath, [almost_a])
    read = read_students_from_csv(filepath).students[0]
    assert read.average == 89.996
    assert read.grade is Grade.B

def test_invalid_utf8_skips_only_its_line(tmp_path):
    filepath = tmp_path / "students.csv"
    filepath.write_bytes(
        b"1,Alice,1,80,80.0,B\n"
        b"2,B\xff\xfeob,1,40,40.0,F\n"
        b"3,Carol,1,70,70.0,C\n"
    )
    result = read_students_from_csv(filepath)
    assert [s.roll for s in result.students] == [1, 3]
    assert result.skipped == 1

def test_oversized_field_skips_only_its_line(tmp_path):
    filepath = tmp_path / "students.csv"
    filepath.write_text(
        "1,Alice,1,80,80.0,B\n"
        "2," + "x" * 200000 + ",1,40,40.0,F\n"
        "3,Carol,1,70,70.0,C\n",
        encoding="utf-8",
    )
    result = read_students_from_csv(filepath)
    assert [s.roll for s in result.students] == [1, 3]
    assert result.skipped == 1

@pytest.mark.parametrize("first_line", ["ROLL,Alice,1,80,80.0,B", " roll,x", "roll"])
def test_only_roll_comma_prefix_is_header(tmp_path, first_line):
    filepath = tmp_path / "students.csv"
    filepath.write_text(first_line + "\n2,Bob,1,40,40.0,F\n", encoding="utf-8")
    result = read_students_from_csv(filepath)
    assert [s.roll for s in result.students] == [2]
    assert result.skipped == 1

def test_long_name_truncated_on_load(tmp_path):
    filepath = tmp_path / "students.csv"
    filepath.write_text("1," + "N" * 150 + ",1,80,80.0,B\n", encoding="utf-8")
    student = read_students_from_csv(filepath).students[0]
    assert student.name == "N" * 99

@pytest.mark.parametrize("average", ["nan", "inf", "-inf"])
def test_non_finite_average_is_malformed(average):
    with pytest.raises(MalformedPersistenceLine):
        parse_row(["1", "A", "1", "50", average, "D"], 1)

def test_name_with_newline_survives_roundtrip(tmp_path):
    store = Store(tmp_path / "students.csv")
    store.add("Multi\nLine", [70])
    reloaded = Store(store.path)
    assert reloaded.load() == 0
    assert [s.name for s in reloaded] == ["Multi Line"]
