"""Утилиты для преобразования регистра имен"""

import re
from typing import Iterable

# Идентификаторы, которые нельзя использовать как имена параметров/полей
RESERVED_PARAMETER_NAMES = ("ref", "type")
RESERVED_FIELD_NAMES = ("type", "self", "use")


def snake_case(name: str) -> str:
    """
    Преобразует произвольную строку в snake_case.

    Любой символ кроме букв и цифр считается разделителем слов,
    поэтому функция подходит и для путей ("/groups/{id}").
    Результат содержит только [a-z0-9_] и является неподвижной точкой:
    snake_case(snake_case(x)) == snake_case(x).

    Examples:
        >>> snake_case("clientId")
        'client_id'
        >>> snake_case("group-id")
        'group_id'
        >>> snake_case("//groups/with_group_id/childrenGET")
        'groups_with_group_id_children_get'
    """
    # Шаг 1: все разделители приводим к подчеркиванию
    s0 = re.sub(r"[^a-zA-Z0-9]+", "_", name)
    # Шаг 2: HTTPError -> HTTP_Error, clientId -> client_Id
    s1 = re.sub("(.)([A-Z][a-z]+)", r"\1_\2", s0)
    # Шаг 3: childrenGET -> children_GET
    s2 = re.sub("([a-z0-9])([A-Z])", r"\1_\2", s1)
    # Шаг 4: убираем дублирующиеся подчеркивания
    s3 = re.sub("_+", "_", s2)
    return s3.strip("_").lower()


def _words(name: str) -> list[str]:
    return [w for w in snake_case(name).split("_") if w]


def lower_camel_case(name: str) -> str:
    """clientId, realmId..."""
    words = _words(name)
    if not words:
        return ""
    return words[0] + "".join(w.capitalize() for w in words[1:])


def upper_camel_case(name: str) -> str:
    """PascalCase преобразование: ACTIVE -> Active, not_before -> NotBefore"""
    return "".join(w.capitalize() for w in _words(name))


def kebab_case(name: str) -> str:
    return snake_case(name).replace("_", "-")


def sanitize_identifier(name: str, reserved: Iterable[str]) -> str:
    """snake_case + подчеркивание в конце для зарезервированных слов"""
    result = snake_case(name)
    if result in reserved:
        result += "_"
    return result
