"""
Главный модуль генератора - чистый интерфейс
"""

import logging
from typing import Dict, Any, Optional, Union

from .internal.generator.code_emitter import CodeEmitter
from .internal.generator.method_compiler import DEFAULT_BASE_PATH, MethodCompiler
from .internal.parser.records import RecordsParser
from .internal.types.code import Project
from .internal.types.models import ApiRecords
from .internal.types.type_resolver import TypeResolver

logger = logging.getLogger(__name__)


class ClientGenerator:
    """
    Генерация исходного кода клиента из записей документации.

    Этапы выполняются последовательно: резолвер типов заполняет реестр,
    компилятор методов строит модели всех методов, и только после этого
    эмиттер формирует файлы. Любая ошибка прерывает генерацию до
    появления результата.
    """

    def __init__(
        self,
        records: Union[ApiRecords, Dict[str, Any]],
        stream_overrides: Optional[Dict[str, str]] = None,
        api_version: str = "latest",
        base_path: str = DEFAULT_BASE_PATH,
    ):
        if not isinstance(records, ApiRecords):
            records = RecordsParser(records).parse()

        self.records = records
        self.stream_overrides = stream_overrides or {}
        self.api_version = api_version
        self.base_path = base_path

    def generate(self, types: bool = True, rest: bool = True) -> Project:
        """Генерация проекта клиента"""
        registry = TypeResolver().resolve(self.records.resources)

        methods = []
        if rest:
            compiler = MethodCompiler(
                registry,
                stream_overrides=self.stream_overrides,
                api_version=self.api_version,
                base_path=self.base_path,
            )
            methods = compiler.compile_all(self.records.methods)

        project = Project(name="client")
        emitter = CodeEmitter(registry)
        if types:
            emitter.emit_types(project)
        if rest:
            emitter.emit_rest(project, methods)

        logger.debug("Сгенерировано файлов: %d", len(project.files))
        return project


def generate_client(
    records: Union[ApiRecords, Dict[str, Any]],
    stream_overrides: Optional[Dict[str, str]] = None,
    api_version: str = "latest",
) -> Project:
    """Создание клиента из записей документации"""
    generator = ClientGenerator(records, stream_overrides, api_version)
    return generator.generate()
