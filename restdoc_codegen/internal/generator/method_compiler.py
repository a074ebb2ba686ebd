"""
Компилятор методов: запись REST метода -> MethodModel
"""

import logging
import re
from typing import Dict, List, Optional

from ...exceptions import StreamOverrideError
from ..types.models import (
    BodyEncoding,
    DecodeKind,
    MethodModel,
    MethodRecord,
    Parameter,
    ParameterKind,
    ParameterRecord,
    ResponseShape,
    TypeRef,
)
from ..types.registry import TypeRegistry
from ..types.type_resolver import UNIT_TYPE, convert_type, split_array
from ..utils import (
    RESERVED_PARAMETER_NAMES,
    flatten_text,
    sanitize_identifier,
    snake_case,
)

logger = logging.getLogger(__name__)

DOCS_URL_TEMPLATE = (
    "https://www.keycloak.org/docs-api/{version}/rest-api/index.html#{anchor}"
)
DEFAULT_BASE_PATH = "/admin/realms"
STREAM_TYPE = "Stream"
PLACEHOLDER = re.compile(r"\{([^{}]+)\}")


def placeholders(path: str) -> List[str]:
    """Имена {placeholder} в порядке появления в пути"""
    return PLACEHOLDER.findall(path)


class MethodCompiler:
    """
    Построение MethodModel для каждого REST метода.

    Версия API и таблица переопределений Stream передаются явно,
    компилятор не читает окружение.
    """

    def __init__(
        self,
        registry: TypeRegistry,
        stream_overrides: Optional[Dict[str, str]] = None,
        api_version: str = "latest",
        base_path: str = DEFAULT_BASE_PATH,
        docs_url_template: str = DOCS_URL_TEMPLATE,
    ):
        self.registry = registry
        self.stream_overrides = stream_overrides or {}
        self.api_version = api_version
        self.base_path = base_path
        self.docs_url_template = docs_url_template

    def compile_all(self, methods: List[MethodRecord]) -> List[MethodModel]:
        """Компиляция всех методов в исходном порядке"""
        models = []
        seen = {}
        for method in methods:
            model = self.compile(method)
            if model.identifier in seen:
                # Коллизии имен не разрешаются
                logger.warning(
                    "Имя %s совпадает для %s %s и %s",
                    model.identifier,
                    model.http_verb,
                    model.original_path,
                    seen[model.identifier],
                )
            else:
                seen[model.identifier] = f"{model.http_verb} {model.original_path}"
            models.append(model)
        return models

    def compile(self, method: MethodRecord) -> MethodModel:
        parameters = self._order_parameters(
            method, [self._resolve_parameter(method, p) for p in method.parameters]
        )
        mapping = {p.wire_name: p for p in parameters}

        body_parameters = [
            p
            for p in parameters
            if p.kind in (ParameterKind.BODY, ParameterKind.FORM_DATA)
        ]
        query_parameters = [p for p in parameters if p.kind == ParameterKind.QUERY]

        path = self.rewrite_path(method, mapping)
        response = self.resolve_response(method)

        model = MethodModel(
            identifier=self.synthesize_identifier(method),
            http_verb=method.http_verb,
            resource_tag=method.resource_tag,
            original_path=method.path_template,
            path=path,
            request_path=self.request_path(path),
            parameters=parameters,
            body_parameters=body_parameters,
            body_encoding=self._body_encoding(body_parameters),
            query_parameters=query_parameters,
            response=response,
        )
        model.doc_groups = self.build_documentation(method, model)
        return model

    def _resolve_parameter(
        self, method: MethodRecord, record: ParameterRecord
    ) -> Parameter:
        inner_type, is_array = split_array(record.raw_type_string)
        # Точечное исправление типа параметра: "path:name:type" = "новый тип"
        inner_type = self.stream_overrides.get(
            f"{method.path_template}:{record.name}:{inner_type}", inner_type
        )

        context = f"{method.http_verb} {method.path_template}, параметр {record.name}"
        type_ref = convert_type(inner_type, context=context)
        if type_ref.is_registry:
            self.registry.get(type_ref.name, context=context)

        return Parameter(
            wire_name=record.name,
            generated_name=sanitize_identifier(record.name, RESERVED_PARAMETER_NAMES),
            kind=record.kind,
            is_optional=record.is_optional,
            is_array=record.is_array or is_array,
            comment=record.comment,
            type_ref=type_ref,
        )

    @staticmethod
    def _order_parameters(
        method: MethodRecord, parameters: List[Parameter]
    ) -> List[Parameter]:
        """Path параметры в порядке шаблона пути, затем остальные по порядку"""
        path_parameters = []
        rest = list(parameters)

        for name in placeholders(method.path_template):
            for i, parameter in enumerate(rest):
                if parameter.kind == ParameterKind.PATH and parameter.wire_name == name:
                    path_parameters.append(rest.pop(i))
                    break

        # Path параметры, которых нет в шаблоне, остаются в группе path
        path_parameters.extend(p for p in rest if p.kind == ParameterKind.PATH)
        rest = [p for p in rest if p.kind != ParameterKind.PATH]

        return path_parameters + rest

    @staticmethod
    def _body_encoding(body_parameters: List[Parameter]) -> Optional[BodyEncoding]:
        if not body_parameters:
            return None
        if len(body_parameters) > 1 or any(
            p.kind == ParameterKind.FORM_DATA for p in body_parameters
        ):
            return BodyEncoding.FORM
        return BodyEncoding.JSON

    @staticmethod
    def rewrite_path(method: MethodRecord, mapping: Dict[str, Parameter]) -> str:
        """
        Подстановка очищенных имен в шаблон пути.

        Метод без параметров: все placeholder'ы удаляются.
        Placeholder без параметра остается как есть.
        """
        if not method.parameters:
            return PLACEHOLDER.sub("", method.path_template)

        def substitute(match: re.Match) -> str:
            parameter = mapping.get(match.group(1))
            if parameter is None:
                return match.group(0)
            return "{" + parameter.generated_name + "}"

        return PLACEHOLDER.sub(substitute, method.path_template)

    def relative_path(self, path: str) -> str:
        if self.base_path and path.startswith(self.base_path):
            return path[len(self.base_path) :]
        return path

    def request_path(self, path: str) -> str:
        """Путь запроса всегда начинается с базового пути клиента"""
        if self.base_path and not path.startswith(self.base_path):
            return self.base_path + path
        return path

    def synthesize_identifier(self, method: MethodRecord) -> str:
        """
        Имя функции из пути и HTTP метода.

        {realm} не дает токена, остальные path параметры превращаются
        в with_<имя>. Пример: /{realm}/groups/{group-id}/children + GET
        -> groups_with_group_id_children_get
        """
        path = self.relative_path(method.path_template)
        for parameter in method.parameters:
            if parameter.kind != ParameterKind.PATH:
                continue
            token = ""
            if parameter.name != "realm":
                token = "with_" + snake_case(parameter.name)
            path = path.replace("{" + parameter.name + "}", token)

        return snake_case(path + method.http_verb)

    def resolve_response(self, method: MethodRecord) -> ResponseShape:
        raw_type = method.response_type.replace("-", "")
        inner_type, is_array = split_array(raw_type)
        context = f"ответ {method.http_verb} {method.path_template}"
        type_ref = convert_type(inner_type, context=context)

        if type_ref.name == STREAM_TYPE:
            item_type = self.stream_overrides.get(method.path_template)
            if item_type is None:
                raise StreamOverrideError(method.path_template)
            type_ref = TypeRef.registry(item_type)
            is_array = True

        if type_ref.is_registry:
            self.registry.get(type_ref.name, context=context)

        return ResponseShape(
            is_array=is_array,
            type_ref=type_ref,
            decode=self._decode_kind(type_ref, is_array),
        )

    @staticmethod
    def _decode_kind(type_ref: TypeRef, is_array: bool) -> DecodeKind:
        if type_ref.name == UNIT_TYPE and not is_array:
            return DecodeKind.UNIT
        if type_ref.name == "&[u8]" or (type_ref.name == "u8" and is_array):
            return DecodeKind.BYTES
        return DecodeKind.JSON

    def build_documentation(
        self, method: MethodRecord, model: MethodModel
    ) -> List[List[str]]:
        """Группы строк doc-комментария в фиксированном порядке"""
        rest_line = f"{method.http_verb} {model.path}"
        generated_names = {p.wire_name: p.generated_name for p in model.parameters}

        groups = []
        if method.display_name != rest_line:
            groups.append([method.display_name])

        description = flatten_text(method.description)
        if description is not None:
            groups.append([description])

        if method.parameters:
            groups.append(["Parameters:"])
            lines = []
            for parameter in method.parameters:
                if parameter.kind == ParameterKind.QUERY:
                    name = generated_names[parameter.name]
                else:
                    name = snake_case(parameter.name)
                comment = ""
                if parameter.comment:
                    comment = ": " + parameter.comment.replace("\n", "")
                lines.append(f"- `{name}`{comment}")
            groups.append(lines)

        groups.append([f"Resource: `{method.resource_tag}`"])
        groups.append([f"`{rest_line}`"])

        if method.anchor:
            url = self.docs_url_template.format(
                version=self.api_version, anchor=method.anchor
            )
            groups.append([f"Documentation: <{url}>"])

        if model.path != method.path_template:
            groups.append(
                [f"REST method: `{method.http_verb} {method.path_template}`"]
            )

        return groups
