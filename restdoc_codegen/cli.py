import argparse
import logging
import os
import sys

from restdoc_codegen.config import CodegenConfig
from restdoc_codegen.exceptions import ConfigError, GenerationError
from restdoc_codegen.generator import ClientGenerator
from restdoc_codegen.internal.generator.method_compiler import DEFAULT_BASE_PATH
from restdoc_codegen.internal.parser.records import (
    RecordsParser,
    load_stream_overrides,
)
from restdoc_codegen.internal.types.code import Project

TARGETS = ("types", "rest", "all")


def confirm_choice(message: str) -> bool:
    """Запрос подтверждения у пользователя"""
    while True:
        choice = input(f"{message} (y/n): ").lower().strip()
        if choice in ["y", "yes", "да", ""]:
            return True
        elif choice in ["n", "no", "нет"]:
            return False
        print("Введите y/n")


def _generate_client_core(config: CodegenConfig, target: str = "all") -> Project:
    """Ядро генерации клиента - только генерация без сохранения"""
    if not config.records:
        raise ConfigError("Источник записей не указан в конфигурации")

    print(f"🚀 Генерация клиента из {config.records}")

    print("📥 Загрузка записей документации...")
    records = RecordsParser.from_source(config.records).parse()
    stream_overrides = load_stream_overrides(config.stream)

    print("⚙️ Генерация кода...")
    generator = ClientGenerator(
        records,
        stream_overrides=stream_overrides,
        api_version=config.resolve_api_version(),
        base_path=config.base_path,
    )
    return generator.generate(
        types=target in ("types", "all"), rest=target in ("rest", "all")
    )


def _save_project_files(project: Project, target_path: str):
    """Сохранение файлов проекта"""
    print(f"💾 Сохранение {len(project.files)} файлов...")

    for code_file in project.files:
        path = os.path.join(target_path, code_file.file_name)
        os.makedirs(os.path.dirname(path), exist_ok=True)

        with open(path, "w", encoding="utf-8") as f:
            f.write(str(code_file))

    print("✅ Генерация завершена успешно!")
    print(f"📦 Код клиента создан в: {os.path.abspath(target_path)}")


def generate():
    """Команда генерации клиента из записей REST документации"""
    parser = argparse.ArgumentParser(
        description="Генерация клиента из записей REST документации"
    )
    parser.add_argument(
        "target", nargs="?", choices=TARGETS, default="all", help="Что генерировать"
    )
    parser.add_argument("--records", type=str, help="Путь или URL к JSON с записями")
    parser.add_argument("--stream", type=str, help="TOML с переопределениями Stream")
    parser.add_argument("--dirname", type=str, help="Директория для генерации")
    parser.add_argument("--api-version", type=str, help="Версия API для ссылок")
    parser.add_argument("--base-path", type=str, help="Базовый путь клиента")
    parser.add_argument(
        "--init-config", action="store_true", help="Создать конфиг файл restdoc.toml"
    )
    parser.add_argument(
        "--force", action="store_true", help="Генерировать без подтверждения"
    )
    parser.add_argument("--verbose", action="store_true", help="Подробный лог")

    args = parser.parse_args()

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG)

    # Инициализация конфига
    if args.init_config:
        config = CodegenConfig(
            records=args.records,
            stream=args.stream,
            dirname=args.dirname or "generated",
            api_version=args.api_version,
            base_path=args.base_path or DEFAULT_BASE_PATH,
        )
        config.save_to_file()
        print("✅ Создан конфиг файл restdoc.toml")
        return

    try:
        file_config = CodegenConfig.from_file()
    except ConfigError as e:
        print(f"❌ Ошибка: {e}")
        sys.exit(1)

    has_overrides = any(
        [args.records, args.stream, args.dirname, args.api_version, args.base_path]
    )

    # Определение финальной конфигурации
    if file_config and has_overrides:
        print("🔧 Найден конфиг файл restdoc.toml:")
        print(f"   Записи: {file_config.records}")
        print(f"   Директория: {file_config.dirname}")
        print()

        if args.force or confirm_choice("Использовать конфиг из файла?"):
            final_config = file_config
        else:
            final_config = file_config.merge_with_args(args)
    elif file_config:
        print("📋 Используется конфиг из restdoc.toml")
        final_config = file_config
    elif args.records:
        final_config = CodegenConfig(
            records=args.records,
            stream=args.stream,
            dirname=args.dirname or "generated",
            api_version=args.api_version,
            base_path=args.base_path or DEFAULT_BASE_PATH,
        )
    else:
        print("❌ Ошибка: Укажите --records или создайте конфиг с --init-config")
        sys.exit(1)

    try:
        # Файлы пишутся только после успешной генерации всего проекта
        project = _generate_client_core(final_config, args.target)
        _save_project_files(project, final_config.dirname or "generated")
    except GenerationError as e:
        print(f"❌ Ошибка генерации: {e}")
        sys.exit(1)


if __name__ == "__main__":
    generate()
