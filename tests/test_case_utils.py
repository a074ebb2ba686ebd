"""
Тесты для утилит преобразования регистра и doc-комментариев
"""

import pytest

from restdoc_codegen.internal.utils import (
    RESERVED_PARAMETER_NAMES,
    flatten_text,
    format_doc_comment,
    kebab_case,
    lower_camel_case,
    sanitize_identifier,
    snake_case,
    upper_camel_case,
)

NAMES = [
    "clientId",
    "realmId",
    "group-id",
    "HTTPValidationError",
    "self",
    "created_at",
    "ACTIVE",
    "NOT_BEFORE",
    "x509Certificate",
    "//groups/with_group_id/childrenGET",
    "/{realm}/users/{id}",
    "Client Scopes",
    "__already__snake__",
    "",
]


class TestCaseConversion:
    """Тесты преобразования регистра"""

    @pytest.mark.parametrize(
        "name,expected",
        [
            ("clientId", "client_id"),
            ("group-id", "group_id"),
            ("HTTPValidationError", "http_validation_error"),
            ("ACTIVE", "active"),
            ("childrenGET", "children_get"),
            ("//groups/with_group_id/childrenGET", "groups_with_group_id_children_get"),
            ("Client Scopes", "client_scopes"),
        ],
    )
    def test_snake_case(self, name, expected):
        assert snake_case(name) == expected

    @pytest.mark.parametrize("name", NAMES)
    def test_snake_case_fixpoint(self, name):
        """snake_case(snake_case(x)) == snake_case(x)"""
        once = snake_case(name)
        assert snake_case(once) == once

    def test_lower_camel_case_round_trip(self):
        assert lower_camel_case(snake_case("clientId")) == "clientId"
        assert lower_camel_case("created_at") == "createdAt"
        assert lower_camel_case("self") == "self"

    def test_upper_camel_case(self):
        assert upper_camel_case("ACTIVE") == "Active"
        assert upper_camel_case("NOT_BEFORE") == "NotBefore"
        assert upper_camel_case("status") == "Status"
        assert upper_camel_case("userinfo") == "Userinfo"

    def test_kebab_case(self):
        assert kebab_case("Client Scopes") == "client-scopes"

    def test_sanitize_reserved(self):
        assert sanitize_identifier("type", RESERVED_PARAMETER_NAMES) == "type_"
        assert sanitize_identifier("ref", RESERVED_PARAMETER_NAMES) == "ref_"
        assert sanitize_identifier("briefRepresentation", RESERVED_PARAMETER_NAMES) == (
            "brief_representation"
        )


class TestDocComment:
    """Тесты форматирования doc-комментариев"""

    def test_groups_separated_by_empty_line(self):
        text = format_doc_comment([["a"], ["b", "c"]], indent="")
        assert text == "/// a\n///\n/// b\n/// c\n"

    def test_indent(self):
        text = format_doc_comment([["a"]])
        assert text == "    /// a\n"

    def test_flatten_text(self):
        assert flatten_text("one\ntwo") == "one two"
        assert flatten_text(None) is None
