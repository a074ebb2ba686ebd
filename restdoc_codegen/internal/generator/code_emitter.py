"""
Эмиттер кода: реестр типов и MethodModel -> файлы проекта
"""

import logging
from typing import Dict, List

from ..types.code import (
    CodeFile,
    EnumDefinition,
    FieldDefinition,
    Function,
    FunctionParameter,
    ImplBlock,
    Project,
    StructDefinition,
)
from ..types.models import (
    BodyEncoding,
    DecodeKind,
    EnumType,
    Field,
    FieldCase,
    MethodModel,
    Parameter,
    ResponseShape,
    StructType,
    TypeRef,
)
from ..types.registry import TypeRegistry
from ..types.type_resolver import STRING_TYPE
from ..utils import format_doc_comment, kebab_case, snake_case
from .templates import templates

logger = logging.getLogger(__name__)

TYPES_FILE = "src/types.rs"
REST_DIR = "src/rest/generated_rest"

# clippy::too_many_arguments срабатывает при количестве аргументов больше 7
MAX_ARGUMENTS = 7


class CodeEmitter:
    """Детерминированная сериализация моделей в исходный текст"""

    def __init__(self, registry: TypeRegistry):
        self.registry = registry

    # Типы

    def render_type(self, type_ref: TypeRef, lifetime: str = "'a") -> str:
        """Имя типа с нужным временем жизни"""
        if type_ref.is_registry:
            if self.registry.needs_lifetime(type_ref.name):
                return f"{type_ref.name}<{lifetime}>"
            return type_ref.name

        return type_ref.name.replace("'a", lifetime)

    @staticmethod
    def wrap_type(var_type: str, is_array: bool, is_optional: bool) -> str:
        if is_array:
            var_type = f"Vec<{var_type}>"
        if is_optional:
            var_type = f"Option<{var_type}>"
        return var_type

    def render_field_type(self, field: Field) -> str:
        return self.wrap_type(
            self.render_type(field.type_ref), field.is_array, field.is_optional
        )

    def render_parameter_type(self, parameter: Parameter) -> str:
        if (
            parameter.type_ref.name == STRING_TYPE
            and not parameter.is_array
            and not parameter.is_optional
        ):
            return "&str"

        return self.wrap_type(
            self.render_type(parameter.type_ref, "'_"),
            parameter.is_array,
            parameter.is_optional,
        )

    def render_response_type(self, response: ResponseShape) -> str:
        if response.decode == DecodeKind.BYTES:
            return "Vec<u8>"

        return self.wrap_type(
            self.render_type(response.type_ref, "'static"), response.is_array, False
        )

    @staticmethod
    def is_rename(struct: StructType, field: Field) -> bool:
        """Нужен ли явный rename поля с учетом rename_all структуры"""
        if field.rename_policy == FieldCase.CUSTOM:
            return True
        if field.rename_policy == FieldCase.CAMEL_CASE:
            return not struct.is_camel_case
        if field.rename_policy == FieldCase.SNAKE_CASE:
            return struct.is_camel_case
        return False

    def build_enum(self, enum: EnumType) -> EnumDefinition:
        attributes = list(templates.enum_attributes)
        if enum.is_upper_case:
            attributes.append(templates.upper_case_attribute)

        return EnumDefinition(
            name=enum.name, attributes=attributes, variants=list(enum.variants)
        )

    def build_struct(self, struct: StructType) -> StructDefinition:
        attributes = list(templates.struct_attributes)
        if struct.is_camel_case:
            attributes.append(templates.camel_case_attribute)

        fields = []
        for field in struct.fields:
            field_attributes = []
            if self.is_rename(struct, field):
                field_attributes.append(
                    templates.rename_attribute.format(name=field.wire_name)
                )
            fields.append(
                FieldDefinition(
                    name=field.generated_name,
                    var_type=self.render_field_type(field),
                    attributes=field_attributes,
                )
            )

        return StructDefinition(
            name=struct.name,
            attributes=attributes,
            generics="'a" if self.registry.needs_lifetime(struct.name) else None,
            fields=fields,
        )

    def emit_types(self, project: Project) -> CodeFile:
        """Все enum в порядке синтеза, затем все структуры в порядке документа"""
        types_file = project.add_file(TYPES_FILE)
        types_file.imports.extend(templates.types_header)

        for enum in self.registry.enums:
            types_file.add_item(self.build_enum(enum))

        for struct in self.registry.structs:
            types_file.add_item(self.build_struct(struct))

        logger.debug(
            "%s: %d enum, %d структур",
            TYPES_FILE,
            len(self.registry.enums),
            len(self.registry.structs),
        )
        return types_file

    # Методы

    def build_function(self, model: MethodModel) -> Function:
        parameters = [
            FunctionParameter(
                name=p.generated_name, var_type=self.render_parameter_type(p)
            )
            for p in model.parameters
        ]

        attributes = []
        if len(parameters) + 1 > MAX_ARGUMENTS:
            attributes.append(templates.too_many_arguments_attribute)

        function = Function(
            name=model.identifier,
            parameters=parameters,
            response=f"Result<{self.render_response_type(model.response)}, "
            f"{templates.error_type}>",
            doc_comment=format_doc_comment(model.doc_groups, indent=""),
            attributes=attributes,
        )
        return function.set_code_block(self.build_body(model))

    def build_body(self, model: MethodModel) -> str:
        lines = []

        # Path параметры-строки кодируются перед подстановкой в URL
        for parameter in model.path_parameters:
            if self.render_parameter_type(parameter) == "&str":
                name = parameter.generated_name
                lines.append(f"let {name} = p({name});")

        if model.uses_raw_request:
            call = "request(reqwest::Method::OPTIONS, "
        else:
            call = model.http_verb.lower() + "("

        chain = [
            templates.request_builder.format(
                mutable="mut " if model.query_parameters else "",
                call=call,
                url=model.request_path,
            )
        ]

        if model.body_encoding == BodyEncoding.FORM:
            chain.append(
                "    .form(&json!({\n"
                + "".join(
                    f'        "{p.wire_name}": {p.generated_name},\n'
                    for p in model.body_parameters
                )
                + "    }))"
            )
        elif model.body_encoding == BodyEncoding.JSON:
            chain.append(f"    .json(&{model.body_parameters[0].generated_name})")
        elif model.needs_empty_content_length:
            chain.append(templates.empty_content_length)

        chain.append(templates.bearer_auth)
        lines.append("\n".join(chain))

        for parameter in model.query_parameters:
            template = (
                templates.optional_query
                if parameter.is_optional
                else templates.required_query
            )
            lines.append(
                template.format(
                    name=parameter.generated_name, wire_name=parameter.wire_name
                )
            )

        lines.append(templates.send)

        if model.response.decode == DecodeKind.UNIT:
            lines.append(templates.unit_response)
        elif model.response.decode == DecodeKind.BYTES:
            lines.append(templates.bytes_response)
        else:
            lines.append(templates.json_response)

        return "\n".join(lines)

    def emit_rest(self, project: Project, methods: List[MethodModel]) -> List[CodeFile]:
        """Файл на каждый тег ресурса и mod.rs с их перечислением"""
        by_tag: Dict[str, List[MethodModel]] = {}
        for model in methods:
            by_tag.setdefault(model.resource_tag, []).append(model)

        mod_file = project.add_file(f"{REST_DIR}/mod.rs")
        mod_file.imports.extend(templates.rest_module_header)

        files = [mod_file]
        for tag, models in by_tag.items():
            module = snake_case(tag)
            mod_file.add_code_block(
                templates.rest_module.format(
                    tag=tag, feature=kebab_case(tag), module=module
                )
            )

            tag_file = project.add_file(f"{REST_DIR}/{module}.rs")
            tag_file.imports.extend(templates.rest_tag_header)
            impl_block = tag_file.add_item(
                ImplBlock(header=templates.impl_header, comment=tag)
            )
            for model in models:
                impl_block.add_function(self.build_function(model))

            logger.debug("%s: %d методов", tag_file.file_name, len(models))
            files.append(tag_file)

        return files
