"""
Резолвер типов: записи полей ресурсов -> реестр структур и enum'ов
"""

import logging
from typing import Dict, List, Optional, Tuple

from ...exceptions import UnknownTypeError
from ..utils import (
    RESERVED_FIELD_NAMES,
    lower_camel_case,
    snake_case,
    upper_camel_case,
)
from .models import (
    EnumType,
    Field,
    FieldCase,
    FieldRecord,
    ResourceRecord,
    StructType,
    TypeRef,
)
from .registry import TypeRegistry

logger = logging.getLogger(__name__)

STRING_TYPE = "Cow<'a, str>"
UNIT_TYPE = "()"

PRIMITIVE_TYPES: Dict[str, TypeRef] = {
    "No Content": TypeRef.simple(UNIT_TYPE),
    "Response": TypeRef.simple(UNIT_TYPE),
    "file": TypeRef.simple("&[u8]"),
    "string": TypeRef.with_lifetime(STRING_TYPE),
    "< string > array(csv)": TypeRef.with_lifetime(STRING_TYPE),
    "string(byte)": TypeRef.simple("u8"),
    "integer(int32)": TypeRef.simple("i32"),
    "integer(int64)": TypeRef.simple("i64"),
    "number(float)": TypeRef.simple("f32"),
    "boolean": TypeRef.simple("bool"),
    "Map": TypeRef.with_lifetime(f"HashMap<{STRING_TYPE}, {STRING_TYPE}>"),
    "MultivaluedHashMap": TypeRef.with_lifetime(f"HashMap<{STRING_TYPE}, Vec<Value>>"),
    "Object": TypeRef.simple("Value"),
}

# Исправления автоматического PascalCase для вариантов enum
ENUM_RENAME_TABLE: Dict[str, str] = {
    "Userinfo": "UserInfo",
}

ARRAY_PREFIX = "< "
ARRAY_SUFFIX = " > array"
ENUM_PREFIX = "enum ("


def split_array(raw_type: str) -> Tuple[str, bool]:
    """'< T > array' -> ('T', True), иначе (raw_type, False)"""
    if raw_type.startswith(ARRAY_PREFIX) and raw_type.endswith(ARRAY_SUFFIX):
        return raw_type[len(ARRAY_PREFIX) : -len(ARRAY_SUFFIX)], True
    return raw_type, False


def parse_enum_variants(raw_type: str) -> Optional[List[str]]:
    """'enum (A, B, C)' -> ['A', 'B', 'C'], для остальных строк None"""
    if raw_type.startswith(ENUM_PREFIX) and raw_type.endswith(")"):
        return raw_type[len(ENUM_PREFIX) : -1].split(", ")
    return None


def convert_type(raw_type: str, context: Optional[str] = None) -> TypeRef:
    """
    Классификация строки типа без учета массивов и enum'ов.

    Известные примитивы берутся из таблицы, любое другое имя с заглавной
    буквы считается ссылкой на ресурс в реестре. Все остальное -
    неизвестный тип, генерация прерывается.
    """
    if raw_type in PRIMITIVE_TYPES:
        return PRIMITIVE_TYPES[raw_type]

    if raw_type[:1].isupper():
        return TypeRef.registry(raw_type)

    raise UnknownTypeError(raw_type, context)


def detect_field_case(original: str) -> FieldCase:
    """
    Определение соглашения об именовании поля.

    - snake_case совпадает с оригиналом -> переименование не нужно
    - camelCase от snake_case дает оригинал -> camelCase на уровне структуры
    - иначе -> явный rename с оригинальным именем
    """
    field_name = snake_case(original)
    camel_name = lower_camel_case(field_name)

    if field_name == original:
        return FieldCase.UNKNOWN if field_name == camel_name else FieldCase.SNAKE_CASE
    if camel_name == original:
        return FieldCase.CAMEL_CASE
    return FieldCase.CUSTOM


class TypeResolver:
    """Построение реестра типов из записей ресурсов"""

    def __init__(self, rename_table: Optional[Dict[str, str]] = None):
        self.registry = TypeRegistry()
        self.rename_table = {**ENUM_RENAME_TABLE, **(rename_table or {})}

    def resolve(self, resources: List[ResourceRecord]) -> TypeRegistry:
        """Один проход по всем ресурсам, после него реестр только читается"""
        for resource in resources:
            self.registry.register_struct(self.resolve_struct(resource))

        self.registry.seal()
        self.registry.validate()

        logger.debug(
            "Реестр заполнен: %d структур, %d enum",
            len(self.registry.structs),
            len(self.registry.enums),
        )
        return self.registry

    def resolve_struct(self, resource: ResourceRecord) -> StructType:
        struct_name = resource.struct_name.replace("-", "")
        struct = StructType(name=struct_name)

        for record in resource.fields:
            field = self.resolve_field(struct_name, record)
            if field.rename_policy == FieldCase.CAMEL_CASE:
                struct.is_camel_case = True
            struct.fields.append(field)

        return struct

    def resolve_field(self, struct_name: str, record: FieldRecord) -> Field:
        original = record.original_field
        field_name = snake_case(original)
        field_case = detect_field_case(original)

        raw_type = record.raw_type_string.replace("-", "")
        inner_type, is_array = split_array(raw_type)

        variants = parse_enum_variants(inner_type)
        if variants is not None:
            type_ref = self._synthesize_enum(struct_name, field_name, variants)
        else:
            type_ref = convert_type(inner_type, context=f"{struct_name}.{original}")

        generated_name = field_name
        if generated_name in RESERVED_FIELD_NAMES:
            field_case = FieldCase.CUSTOM
            generated_name += "_"

        return Field(
            wire_name=original,
            generated_name=generated_name,
            is_optional=record.is_optional,
            is_array=is_array,
            rename_policy=field_case,
            type_ref=type_ref,
        )

    def _synthesize_enum(
        self, struct_name: str, field_name: str, variants: List[str]
    ) -> TypeRef:
        """Синтез enum для inline 'enum (A, B, C)'"""
        enum_name = struct_name + upper_camel_case(field_name)

        is_upper_case = all(all(c.isupper() for c in v) for v in variants)
        renamed = []
        for variant in variants:
            variant = upper_camel_case(variant)
            renamed.append(self.rename_table.get(variant, variant))

        self.registry.register_enum(
            EnumType(name=enum_name, is_upper_case=is_upper_case, variants=renamed)
        )
        return TypeRef.simple(enum_name)
