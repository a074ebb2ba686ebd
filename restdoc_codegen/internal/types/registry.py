import logging
from typing import Dict, List, Optional

from ...exceptions import GenerationError, UnresolvedReferenceError
from .models import StructType, EnumType

logger = logging.getLogger(__name__)


class TypeRegistry:
    """
    Реестр структур и enum'ов по имени.

    Заполняется за один проход, после seal() не изменяется.
    Ссылки между структурами хранятся по имени, поэтому циклы
    (A содержит B, B содержит A) представимы без проблем.
    """

    def __init__(self):
        self._structs: Dict[str, StructType] = {}
        self._enums: Dict[str, EnumType] = {}
        self._lifetimes: Dict[str, bool] = {}
        self._sealed = False

    def register_struct(self, struct: StructType):
        """Регистрация структуры, имена уникальны"""
        self._check_not_sealed()
        if struct.name in self._structs:
            raise GenerationError(f"Структура {struct.name!r} уже зарегистрирована")
        self._structs[struct.name] = struct

    def register_enum(self, enum: EnumType) -> bool:
        """Регистрация enum, повторная регистрация игнорируется"""
        self._check_not_sealed()
        if enum.name in self._enums:
            return False
        self._enums[enum.name] = enum
        logger.debug("Синтезирован enum %s %s", enum.name, enum.variants)
        return True

    def seal(self):
        self._sealed = True

    def _check_not_sealed(self):
        if self._sealed:
            raise GenerationError("Реестр типов уже заполнен и не может изменяться")

    def get(self, name: str, context: Optional[str] = None) -> StructType:
        """Получение структуры по имени"""
        if name not in self._structs:
            raise UnresolvedReferenceError(name, context)
        return self._structs[name]

    def __contains__(self, name: str) -> bool:
        return name in self._structs

    @property
    def structs(self) -> List[StructType]:
        return list(self._structs.values())

    @property
    def enums(self) -> List[EnumType]:
        return list(self._enums.values())

    def needs_lifetime(self, name: str) -> bool:
        """
        Нужен ли структуре параметр времени жизни.

        Структура нуждается во времени жизни, если у нее есть поле
        WITH_LIFETIME или она (транзитивно) ссылается на такую структуру.
        Результат запоминается по имени. Обход с множеством посещенных
        узлов завершается на циклах; известный False отсекает поддерево,
        известный True сразу дает ответ.
        """
        if name in self._lifetimes:
            return self._lifetimes[name]

        result = False
        seen = set()
        stack = [name]
        while stack:
            current = stack.pop()
            if current in seen:
                continue
            seen.add(current)

            if current != name and current in self._lifetimes:
                if self._lifetimes[current]:
                    result = True
                    break
                continue

            struct = self.get(current, context=f"ссылка из {name}")
            if struct.has_lifetime_field():
                result = True
                break
            stack.extend(struct.registry_references())

        self._lifetimes[name] = result
        logger.debug("%s: время жизни %s", name, "нужно" if result else "не нужно")
        return result

    def validate(self):
        """Проверка, что все ссылки между структурами разрешаются"""
        for struct in self._structs.values():
            for ref in struct.registry_references():
                self.get(ref, context=f"поле структуры {struct.name}")
