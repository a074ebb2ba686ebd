import json
import os
from typing import Dict, Any, Optional

import httpx
import toml
from pydantic import ValidationError

from ...exceptions import RecordsLoadError
from ..types.models import ApiRecords


class RecordsParser:
    """Парсер документа с записями, извлеченными из HTML документации"""

    def __init__(self, records_dict: Dict[str, Any], source: str = "<dict>"):
        self.records_dict = records_dict
        self.source = source

    def parse(self) -> ApiRecords:
        """Валидация словаря в ApiRecords"""
        try:
            return ApiRecords.model_validate(self.records_dict)
        except ValidationError as e:
            raise RecordsLoadError(self.source, str(e)) from e

    @classmethod
    def from_source(cls, source: str) -> "RecordsParser":
        """Загрузка записей из локального файла или по URL"""
        if source.startswith(("http://", "https://")):
            try:
                response = httpx.get(source)
                response.raise_for_status()
                records_dict = response.json()
            except (httpx.HTTPError, ValueError) as e:
                raise RecordsLoadError(source, str(e)) from e
        elif os.path.exists(source):
            try:
                with open(source, "r", encoding="utf-8") as f:
                    records_dict = json.load(f)
            except ValueError as e:
                raise RecordsLoadError(source, str(e)) from e
        else:
            raise RecordsLoadError(source, "файл не найден")

        return cls(records_dict, source)


def load_stream_overrides(path: Optional[str]) -> Dict[str, str]:
    """
    Загрузка таблицы переопределений из TOML.

    Ключи вида "<path>" задают тип элемента для ответов Stream,
    ключи вида "<path>:<param>:<type>" исправляют тип параметра.
    """
    if not path:
        return {}

    if not os.path.exists(path):
        raise RecordsLoadError(path, "файл переопределений не найден")

    try:
        data = toml.load(path)
    except toml.TomlDecodeError as e:
        raise RecordsLoadError(path, str(e)) from e

    overrides = {}
    for key, value in data.items():
        if not isinstance(value, str):
            raise RecordsLoadError(path, f"значение для {key!r} должно быть строкой")
        overrides[key] = value
    return overrides
