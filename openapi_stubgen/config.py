"""
Конфигурация генерации
"""

import logging
import os
from dataclasses import asdict, dataclass
from typing import Optional

import toml

from .generator import DEFAULT_CLIENT_NAME, DEFAULT_NAMESPACE

logger = logging.getLogger(__name__)

CONFIG_FILE_NAME = "openapi-stubgen.toml"


@dataclass
class StubGenConfig:
    """Конфигурация генератора"""

    spec_source: Optional[str] = None
    namespace_name: str = DEFAULT_NAMESPACE
    client_name: str = DEFAULT_CLIENT_NAME
    output_directory: str = "generated"
    target: str = "python"

    @classmethod
    def from_file(
        cls, config_path: str = CONFIG_FILE_NAME, search_dir: str = None
    ) -> Optional["StubGenConfig"]:
        """Загрузка конфигурации из файла"""
        # Если указана директория для поиска, ищем конфиг там
        if search_dir and os.path.isdir(search_dir):
            config_in_dir = os.path.join(search_dir, CONFIG_FILE_NAME)
            if os.path.exists(config_in_dir):
                config_path = config_in_dir

        if not os.path.exists(config_path):
            return None

        try:
            config_data = toml.load(config_path)
        except toml.TomlDecodeError as e:
            logger.warning("Конфиг %s не прочитан: %s", config_path, e)
            return None

        defaults = cls()
        return cls(
            spec_source=config_data.get("spec_source"),
            namespace_name=config_data.get("namespace_name", defaults.namespace_name),
            client_name=config_data.get("client_name", defaults.client_name),
            output_directory=config_data.get(
                "output_directory", defaults.output_directory
            ),
            target=config_data.get("target", defaults.target),
        )

    def save_to_file(self, config_path: str = CONFIG_FILE_NAME) -> None:
        """Сохранение конфигурации в файл"""
        config_data = {k: v for k, v in asdict(self).items() if v is not None}

        with open(config_path, "w", encoding="utf-8") as f:
            toml.dump(config_data, f)

    def merge_with_args(self, args) -> "StubGenConfig":
        """Объединение с аргументами командной строки"""
        return StubGenConfig(
            spec_source=getattr(args, "spec", None) or self.spec_source,
            namespace_name=getattr(args, "namespace", None) or self.namespace_name,
            client_name=getattr(args, "client_name", None) or self.client_name,
            output_directory=getattr(args, "output", None) or self.output_directory,
            target=getattr(args, "target", None) or self.target,
        )
