"""
Тесты для резолвера типов
"""

import pytest

from restdoc_codegen.exceptions import UnknownTypeError, UnresolvedReferenceError
from restdoc_codegen.internal.types.models import (
    FieldCase,
    ResourceRecord,
    TypeKind,
    TypeRef,
)
from restdoc_codegen.internal.types.type_resolver import (
    TypeResolver,
    convert_type,
    detect_field_case,
    split_array,
)


def resource(name, *fields):
    """Ресурс из кортежей (имя, тип[, optional])"""
    return ResourceRecord.model_validate(
        {
            "struct_name": name,
            "fields": [
                {
                    "original_field": f[0],
                    "raw_type_string": f[1],
                    "optionality_text": f[2] if len(f) > 2 else "required",
                }
                for f in fields
            ],
        }
    )


class TestNamingConvention:
    """Тесты определения соглашения об именовании"""

    def test_detect_field_case(self):
        assert detect_field_case("clientId") == FieldCase.CAMEL_CASE
        assert detect_field_case("created_at") == FieldCase.SNAKE_CASE
        assert detect_field_case("name") == FieldCase.UNKNOWN
        assert detect_field_case("clientID") == FieldCase.CUSTOM
        assert detect_field_case("ID") == FieldCase.CUSTOM

    def test_camel_case_struct(self):
        """clientId, realmId -> camelCase на уровне структуры, без rename полей"""
        registry = TypeResolver().resolve(
            [resource("ClientRepresentation", ("clientId", "string"), ("realmId", "string"))]
        )
        struct = registry.get("ClientRepresentation")

        assert struct.is_camel_case
        assert [f.generated_name for f in struct.fields] == ["client_id", "realm_id"]
        assert all(f.rename_policy == FieldCase.CAMEL_CASE for f in struct.fields)

    def test_reserved_field_gets_custom_rename(self):
        """self среди snake_case полей -> ровно один Custom"""
        registry = TypeResolver().resolve(
            [
                resource(
                    "Link",
                    ("self", "string"),
                    ("name", "string"),
                    ("created_at", "integer(int64)"),
                )
            ]
        )
        struct = registry.get("Link")

        custom = [f for f in struct.fields if f.rename_policy == FieldCase.CUSTOM]
        assert [f.wire_name for f in custom] == ["self"]
        assert custom[0].generated_name == "self_"
        assert not struct.is_camel_case

    def test_field_order_preserved(self):
        registry = TypeResolver().resolve(
            [resource("Item", ("zeta", "string"), ("alpha", "boolean"), ("mid", "Object"))]
        )
        assert [f.wire_name for f in registry.get("Item").fields] == [
            "zeta",
            "alpha",
            "mid",
        ]


class TestTypeClassification:
    """Тесты классификации строк типов"""

    def test_primitives(self):
        assert convert_type("integer(int32)") == TypeRef.simple("i32")
        assert convert_type("integer(int64)") == TypeRef.simple("i64")
        assert convert_type("number(float)") == TypeRef.simple("f32")
        assert convert_type("boolean") == TypeRef.simple("bool")
        assert convert_type("Object") == TypeRef.simple("Value")
        assert convert_type("No Content") == TypeRef.simple("()")

    def test_string_types_need_lifetime(self):
        assert convert_type("string").kind == TypeKind.WITH_LIFETIME
        assert convert_type("Map").kind == TypeKind.WITH_LIFETIME

    def test_registry_reference(self):
        assert convert_type("UserRepresentation") == TypeRef.registry(
            "UserRepresentation"
        )

    def test_unknown_type_is_fatal(self):
        with pytest.raises(UnknownTypeError) as exc_info:
            convert_type("uuid")
        assert exc_info.value.raw_type == "uuid"

    def test_unknown_field_type_aborts_resolution(self):
        with pytest.raises(UnknownTypeError) as exc_info:
            TypeResolver().resolve([resource("Broken", ("when", "date-time"))])
        # Дефисы удаляются из строки типа перед классификацией
        assert exc_info.value.raw_type == "datetime"

    def test_split_array(self):
        assert split_array("< string > array") == ("string", True)
        assert split_array("string") == ("string", False)

    def test_array_field(self):
        registry = TypeResolver().resolve(
            [resource("Holder", ("names", "< string > array", "optional"))]
        )
        field = registry.get("Holder").fields[0]

        assert field.is_array
        assert field.is_optional
        assert field.type_ref.kind == TypeKind.WITH_LIFETIME

    def test_unresolved_reference(self):
        with pytest.raises(UnresolvedReferenceError) as exc_info:
            TypeResolver().resolve([resource("Holder", ("item", "Missing"))])
        assert exc_info.value.name == "Missing"

    def test_forward_reference(self):
        """Ссылка на ресурс, описанный позже"""
        registry = TypeResolver().resolve(
            [
                resource("First", ("second", "Second")),
                resource("Second", ("count", "integer(int32)")),
            ]
        )
        assert registry.get("First").fields[0].type_ref == TypeRef.registry("Second")


class TestEnumSynthesis:
    """Тесты синтеза inline enum"""

    def test_inline_enum(self):
        resolver = TypeResolver()
        registry = resolver.resolve(
            [resource("Policy", ("status", "enum (ACTIVE, DISABLED)"))]
        )

        assert len(registry.enums) == 1
        enum = registry.enums[0]
        assert enum.name == "PolicyStatus"
        assert enum.variants == ["Active", "Disabled"]
        assert enum.is_upper_case
        assert registry.get("Policy").fields[0].type_ref == TypeRef.simple(
            "PolicyStatus"
        )

    def test_rename_table(self):
        registry = TypeResolver().resolve(
            [resource("Token", ("category", "enum (userinfo, access)"))]
        )
        enum = registry.enums[0]

        assert enum.variants == ["UserInfo", "Access"]
        assert not enum.is_upper_case

    def test_enum_array(self):
        registry = TypeResolver().resolve(
            [resource("Policy", ("modes", "< enum (READ, WRITE) > array"))]
        )
        field = registry.get("Policy").fields[0]

        assert field.is_array
        assert registry.enums[0].name == "PolicyModes"


class TestLifetimePropagation:
    """Тесты распространения времени жизни"""

    @pytest.mark.parametrize("first", ["A", "B"])
    def test_cycle(self, first):
        """A{b: B}, B{a: A, note: string} - обе структуры с временем жизни"""
        registry = TypeResolver().resolve(
            [
                resource("A", ("b", "B")),
                resource("B", ("a", "A"), ("note", "string")),
            ]
        )
        second = "B" if first == "A" else "A"

        assert registry.needs_lifetime(first)
        assert registry.needs_lifetime(second)

    @pytest.mark.parametrize("first", ["A", "B"])
    def test_cycle_with_string_behind_reference(self, first):
        registry = TypeResolver().resolve(
            [
                resource("A", ("b", "B"), ("note", "string")),
                resource("B", ("a", "A")),
            ]
        )
        second = "B" if first == "A" else "A"

        assert registry.needs_lifetime(first)
        assert registry.needs_lifetime(second)

    def test_cycle_without_strings(self):
        registry = TypeResolver().resolve(
            [
                resource("C", ("d", "D")),
                resource("D", ("c", "C"), ("count", "integer(int32)")),
            ]
        )

        assert not registry.needs_lifetime("C")
        assert not registry.needs_lifetime("D")

    def test_transitive(self):
        registry = TypeResolver().resolve(
            [
                resource("Outer", ("middle", "Middle")),
                resource("Middle", ("inner", "< Inner > array")),
                resource("Inner", ("name", "string")),
            ]
        )

        assert registry.needs_lifetime("Outer")
        assert registry.needs_lifetime("Middle")
