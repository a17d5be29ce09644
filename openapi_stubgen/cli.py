import argparse
import json
import logging
import os
import sys
from typing import Any, Dict, Iterable, List, Optional

import httpx
import jsonref
import yaml

from openapi_stubgen.config import CONFIG_FILE_NAME, StubGenConfig
from openapi_stubgen.generator import StubGenerator
from openapi_stubgen.internal.generator.backends import backends
from openapi_stubgen.internal.generator.library_generator import GenerationResult
from openapi_stubgen.internal.types.errors import DocumentParseError, StubGenError
from openapi_stubgen.internal.types.models import SourceUnit

logger = logging.getLogger(__name__)

YAML_EXTENSIONS = (".yaml", ".yml")


def load_spec(source: str) -> Dict[str, Any]:
    """Загрузка спецификации из URL или файла, ссылки $ref - через jsonref"""
    if source.startswith(("http://", "https://")):
        # Это URL - загружаем по HTTP
        try:
            response = httpx.get(source, follow_redirects=True, timeout=30.0)
            response.raise_for_status()
        except httpx.HTTPError as e:
            raise DocumentParseError(source, str(e)) from e
        text = response.text
        is_yaml = source.endswith(YAML_EXTENSIONS) or "yaml" in response.headers.get(
            "content-type", ""
        )
    elif os.path.exists(source):
        # Это локальный файл - читаем его
        with open(source, "r", encoding="utf-8") as f:
            text = f.read()
        is_yaml = source.endswith(YAML_EXTENSIONS)
    else:
        raise DocumentParseError(source, "файл не найден")

    try:
        spec = yaml.safe_load(text) if is_yaml else json.loads(text)
    except (yaml.YAMLError, json.JSONDecodeError) as e:
        raise DocumentParseError(source, str(e)) from e

    if not isinstance(spec, dict):
        raise DocumentParseError(source, "корень спецификации должен быть объектом")

    return jsonref.replace_refs(spec, lazy_load=True)


def save_source_units(units: Iterable[SourceUnit], target_path: str) -> List[str]:
    """Сохранение файлов, по одному на каждый SourceUnit"""
    os.makedirs(target_path, exist_ok=True)

    written = []
    for unit in units:
        path = os.path.join(target_path, unit.file_name)
        with open(path, "w", encoding="utf-8", newline="\n") as f:
            f.write(str(unit))
        logger.debug("Записан %s", path)
        written.append(path)

    return written


def run(config: StubGenConfig, dry_run: bool = False) -> GenerationResult:
    """Загрузка, генерация и сохранение по конфигурации"""
    if not config.spec_source:
        raise ValueError("Источник спецификации не указан в конфигурации")

    print(f"📥 Загрузка спецификации {config.spec_source}...")
    openapi_spec = load_spec(config.spec_source)

    print(f"⚙️ Генерация кода ({config.target})...")
    generator = StubGenerator(
        openapi_spec,
        namespace_name=config.namespace_name,
        client_name=config.client_name,
        target=config.target,
        source=config.spec_source,
    )
    result = generator.generate()

    if dry_run:
        for unit in result.units:
            print(f"   {unit.file_name}")
        return result

    print(f"💾 Сохранение {len(result.units)} файлов...")
    save_source_units(result.units, config.output_directory)
    print(f"📦 Файлы созданы в: {os.path.abspath(config.output_directory)}")
    return result


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Генерация моделей и заглушек клиента из OpenAPI"
    )
    parser.add_argument("--spec", type=str, help="Путь или URL к OpenAPI спецификации")
    parser.add_argument("--namespace", type=str, help="Пространство имен для типов")
    parser.add_argument("--client-name", type=str, help="Имя класса клиента")
    parser.add_argument("--output", type=str, help="Директория для файлов")
    parser.add_argument(
        "--target", type=str, choices=sorted(backends), help="Целевой язык"
    )
    parser.add_argument(
        "--init-config",
        action="store_true",
        help=f"Создать конфиг файл {CONFIG_FILE_NAME}",
    )
    parser.add_argument(
        "--dry-run", action="store_true", help="Только показать список файлов"
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Подробный лог")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = _build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    # Инициализация конфига
    if args.init_config:
        config = StubGenConfig().merge_with_args(args)
        config.save_to_file()
        print(f"✅ Создан конфиг файл {CONFIG_FILE_NAME}")
        return 0

    file_config = StubGenConfig.from_file()
    if file_config:
        print(f"📋 Используется конфиг из {CONFIG_FILE_NAME}")
    config = (file_config or StubGenConfig()).merge_with_args(args)

    if not config.spec_source:
        print("❌ Ошибка: Укажите --spec или создайте конфиг с --init-config")
        return 1

    try:
        result = run(config, dry_run=args.dry_run)
    except StubGenError as e:
        logger.error("%s", e)
        print(f"❌ Ошибка генерации: {e}")
        return 1

    if not result.ok:
        print(f"⚠️ Пропущено сущностей: {len(result.errors)}")
        for issue in result.errors:
            print(f"   {issue}")
        return 1

    print("✅ Генерация завершена успешно!")
    return 0


def generate():
    """Команда генерации моделей и клиента"""
    sys.exit(main())


if __name__ == "__main__":
    generate()
