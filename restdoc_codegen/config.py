"""
Конфигурация генератора клиента
"""

import os
from typing import Mapping, Optional
import toml
from dataclasses import dataclass

from .exceptions import ConfigError
from .internal.generator.method_compiler import DEFAULT_BASE_PATH

CONFIG_FILE = "restdoc.toml"
API_VERSION_ENV = "KEYCLOAK_VERSION"
DEFAULT_API_VERSION = "latest"


@dataclass
class CodegenConfig:
    """Конфигурация генератора"""

    records: Optional[str] = None
    stream: Optional[str] = None
    dirname: Optional[str] = None
    api_version: Optional[str] = None
    base_path: str = DEFAULT_BASE_PATH

    @classmethod
    def from_file(
        cls, config_path: str = CONFIG_FILE, search_dir: str = None
    ) -> Optional["CodegenConfig"]:
        """Загрузка конфигурации из файла"""
        # Если указана директория для поиска, ищем конфиг там
        if search_dir and os.path.isdir(search_dir):
            config_in_dir = os.path.join(search_dir, CONFIG_FILE)
            if os.path.exists(config_in_dir):
                config_path = config_in_dir

        if not os.path.exists(config_path):
            return None

        try:
            config_data = toml.load(config_path)
        except toml.TomlDecodeError as e:
            raise ConfigError(f"Некорректный конфиг {config_path}: {e}") from e

        return cls(
            records=config_data.get("records"),
            stream=config_data.get("stream"),
            dirname=config_data.get("dirname", "generated"),
            api_version=config_data.get("api_version"),
            base_path=config_data.get("base_path", DEFAULT_BASE_PATH),
        )

    def save_to_file(self, config_path: str = CONFIG_FILE) -> None:
        """Сохранение конфигурации в файл"""
        config_data = {
            "records": self.records,
            "stream": self.stream,
            "dirname": self.dirname,
            "api_version": self.api_version,
            "base_path": self.base_path,
        }
        # toml не умеет сохранять None
        config_data = {k: v for k, v in config_data.items() if v is not None}

        with open(config_path, "w") as f:
            toml.dump(config_data, f)

    def merge_with_args(self, args) -> "CodegenConfig":
        """Объединение с аргументами командной строки"""
        return CodegenConfig(
            records=args.records or self.records,
            stream=args.stream or self.stream,
            dirname=args.dirname or self.dirname,
            api_version=args.api_version or self.api_version,
            base_path=args.base_path or self.base_path,
        )

    def resolve_api_version(self, environ: Mapping[str, str] = os.environ) -> str:
        """Версия API: из конфига, затем из окружения, затем latest"""
        return self.api_version or environ.get(API_VERSION_ENV) or DEFAULT_API_VERSION
