# roster/main.py
"""Главный модуль, реализующий консольный интерфейс (CLI) для учёта студентов."""
import logging
import sys
from typing import List, Optional

from . import config, errors, io_utils
from .processing import SortKey, SortOrder
from .store import Store

SORT_CHOICES = {
    '1': (SortKey.ROLL, SortOrder.ASC),
    '2': (SortKey.ROLL, SortOrder.DESC),
    '3': (SortKey.NAME, SortOrder.ASC),
    '4': (SortKey.NAME, SortOrder.DESC),
    '5': (SortKey.AVERAGE, SortOrder.ASC),
    '6': (SortKey.AVERAGE, SortOrder.DESC),
}


def print_menu():
    """Выводит на экран главное меню."""
    print("\n" + "="*30)
    print("      МЕНЮ УПРАВЛЕНИЯ")
    print("="*30)
    print("1. Добавить студента")
    print("2. Показать всех студентов")
    print("3. Найти по номеру")
    print("4. Найти по имени")
    print("5. Изменить студента")
    print("6. Удалить студента")
    print("7. Сортировать список")
    print("8. Статистика по группе")
    print("9. Экспорт отчёта")
    print("0. Выход")
    print("="*30)


def input_int(prompt: str, low: int, high: int) -> int:
    """Читает целое число в диапазоне [low, high]; иначе ValueError."""
    value = int(input(prompt))
    if value < low or value > high:
        raise ValueError(f"Введите число от {low} до {high}.")
    return value


def input_scores(max_subjects: int) -> List[int]:
    count = input_int(f"Количество предметов (1-{max_subjects}): ", 1, max_subjects)
    return [input_int(f"Оценка по предмету {i + 1} (0-100): ", config.MIN_SCORE, config.MAX_SCORE)
            for i in range(count)]


def main_cli(store: Optional[Store] = None):
    """Основной цикл консольного приложения."""
    if store is None:
        store = Store(config.DATA_FILE)
        try:
            skipped = store.load()
            if skipped:
                print(f"⚠️ Пропущено повреждённых строк в файле данных: {skipped}.")
        except errors.FileProcessingError as e:
            # Файл не перезаписываем, чтобы не потерять данные
            store.path = None
            print(f"❌ {e}")
            print("⚠️ Изменения в этом сеансе не будут сохранены в файл.")

    while True:
        print_menu()
        choice = input("Выберите пункт меню: ").strip()

        try:
            if choice == '1':
                name = input("Введите имя студента: ")
                scores = input_scores(store.max_subjects)
                student = store.add(name, scores)
                print(f"✅ Добавлен: номер {student.roll} | {student.name} | "
                      f"ср. балл: {student.average:.2f} | оценка: {student.grade.value}")

            elif choice == '2':
                if not len(store):
                    print("ℹ️ Список студентов пуст.")
                else:
                    print(io_utils.format_table(store.records))

            elif choice == '3':
                roll = input_int("Введите номер студента: ", 1, sys.maxsize)
                student = store.get(roll)
                print(io_utils.format_table([student]))
                print("Оценки: " + ", ".join(map(str, student.scores)))

            elif choice == '4':
                query = input("Введите имя (или его часть): ")
                found = store.find_by_name_substring(query)
                if not found:
                    print(f"ℹ️ Совпадений для \"{query}\" нет.")
                else:
                    print(io_utils.format_table(found))

            elif choice == '5':
                roll = input_int("Введите номер студента для изменения: ", 1, sys.maxsize)
                student = store.get(roll)
                print(f"\nИзменение: номер {student.roll} ({student.name})")
                print("1. Изменить имя")
                print("2. Изменить предметы и оценки")
                print("3. Отмена")
                action = input_int("Выберите: ", 1, 3)
                if action == 1:
                    store.update(roll, name=input("Новое имя: "))
                    print("✅ Имя обновлено.")
                elif action == 2:
                    store.update(roll, scores=input_scores(store.max_subjects))
                    print("✅ Оценки обновлены.")
                else:
                    print("Отменено.")

            elif choice == '6':
                roll = input_int("Введите номер студента для удаления: ", 1, sys.maxsize)
                student = store.get(roll)
                answer = input(f"Удалить номер {student.roll} ({student.name})? (y/n): ")
                if answer.strip().lower() == 'y':
                    store.delete(roll)
                    print(f"✅ Студент с номером {roll} удалён.")
                else:
                    print("Отменено.")

            elif choice == '7':
                print("\nСортировать по:")
                print("1. Номеру (по возрастанию)")
                print("2. Номеру (по убыванию)")
                print("3. Имени (по возрастанию)")
                print("4. Имени (по убыванию)")
                print("5. Среднему баллу (по возрастанию)")
                print("6. Среднему баллу (по убыванию)")
                key, order = SORT_CHOICES[str(input_int("Выберите: ", 1, 6))]
                store.sort(key, order)
                print("✅ Отсортировано.")

            elif choice == '8':
                if not len(store):
                    print("ℹ️ Список студентов пуст, статистика недоступна.")
                else:
                    print(io_utils.format_stats(store.stats()))

            elif choice == '9':
                if not len(store):
                    print("ℹ️ Нет записей для экспорта.")
                else:
                    io_utils.export_report(config.REPORT_FILE, store.records)
                    print(f"✅ Отчёт сохранён в '{config.REPORT_FILE}'.")

            elif choice == '0':
                try:
                    store.save()
                    print("👋 Данные сохранены. До свидания!" if store.path is not None else "👋 До свидания!")
                except errors.PersistenceWriteFailed as e:
                    print(f"❌ Не удалось сохранить данные: {e}")
                break

            else:
                print("❌ Неверный выбор. Пожалуйста, введите число от 0 до 9.")

        except errors.StudentAppError as e:
            print(f"❌ Ошибка: {e}")
        except ValueError as e:
            print(f"❌ Ошибка ввода: {e}")


def main():
    logging.basicConfig(level=logging.INFO)
    try:
        main_cli()
    except (KeyboardInterrupt, EOFError):
        print("\nПрограмма принудительно остановлена.")


if __name__ == '__main__':
    main()
