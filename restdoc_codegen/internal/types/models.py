from enum import Enum
from typing import Optional, List, Iterator

from pydantic import BaseModel, ConfigDict, field_validator


class FieldCase(str, Enum):
    """Почему для поля генерируется (или не генерируется) rename"""

    CAMEL_CASE = "CamelCase"
    SNAKE_CASE = "SnakeCase"
    CUSTOM = "Custom"
    UNKNOWN = "Unknown"


class ParameterKind(str, Enum):
    PATH = "Path"
    QUERY = "Query"
    BODY = "Body"
    FORM_DATA = "FormData"


class TypeKind(str, Enum):
    SIMPLE = "simple"
    REGISTRY = "registry"
    WITH_LIFETIME = "with_lifetime"


class DecodeKind(str, Enum):
    """Способ обработки тела ответа"""

    UNIT = "unit"
    BYTES = "bytes"
    JSON = "json"


class BodyEncoding(str, Enum):
    JSON = "json"
    FORM = "form"


class TypeRef(BaseModel):
    """
    Ссылка на тип.

    REGISTRY ссылки хранят только имя и разрешаются через реестр при
    генерации кода, что позволяет описывать циклические структуры.
    """

    model_config = ConfigDict(frozen=True)

    kind: TypeKind
    name: str

    @classmethod
    def simple(cls, name: str) -> "TypeRef":
        return cls(kind=TypeKind.SIMPLE, name=name)

    @classmethod
    def registry(cls, name: str) -> "TypeRef":
        return cls(kind=TypeKind.REGISTRY, name=name)

    @classmethod
    def with_lifetime(cls, name: str) -> "TypeRef":
        return cls(kind=TypeKind.WITH_LIFETIME, name=name)

    @property
    def is_registry(self) -> bool:
        return self.kind == TypeKind.REGISTRY


# Сырые записи, полученные от экстрактора документации


class FieldRecord(BaseModel):
    original_field: str
    raw_type_string: str
    optionality_text: str = ""

    @property
    def is_optional(self) -> bool:
        return self.optionality_text == "optional"


class ResourceRecord(BaseModel):
    struct_name: str
    fields: List[FieldRecord] = []


class ParameterRecord(BaseModel):
    name: str
    kind: ParameterKind
    is_optional: bool = False
    is_array: bool = False
    comment: Optional[str] = None
    raw_type_string: str


class MethodRecord(BaseModel):
    anchor: Optional[str] = None
    display_name: str
    resource_tag: str
    path_template: str
    http_verb: str
    description: Optional[str] = None
    response_type: str
    parameters: List[ParameterRecord] = []

    @field_validator("http_verb")
    def verb_check(cls, value):
        return value.upper()


class ApiRecords(BaseModel):
    """Полный вывод экстрактора"""

    resources: List[ResourceRecord] = []
    methods: List[MethodRecord] = []


# Разрешенная модель


class Field(BaseModel):
    wire_name: str
    generated_name: str
    is_optional: bool = False
    is_array: bool = False
    rename_policy: FieldCase = FieldCase.UNKNOWN
    type_ref: TypeRef


class StructType(BaseModel):
    name: str
    fields: List[Field] = []
    is_camel_case: bool = False

    def has_lifetime_field(self) -> bool:
        return any(f.type_ref.kind == TypeKind.WITH_LIFETIME for f in self.fields)

    def registry_references(self) -> Iterator[str]:
        for f in self.fields:
            if f.type_ref.is_registry:
                yield f.type_ref.name


class EnumType(BaseModel):
    name: str
    is_upper_case: bool = False
    variants: List[str] = []


class Parameter(BaseModel):
    """Параметр метода с очищенным именем"""

    wire_name: str
    generated_name: str
    kind: ParameterKind
    is_optional: bool = False
    is_array: bool = False
    comment: Optional[str] = None
    type_ref: TypeRef


class ResponseShape(BaseModel):
    is_array: bool = False
    type_ref: TypeRef
    decode: DecodeKind = DecodeKind.JSON


class MethodModel(BaseModel):
    """Полностью разрешенное описание одного REST метода"""

    identifier: str
    http_verb: str
    resource_tag: str
    original_path: str
    path: str
    request_path: str

    # Порядок: сначала path параметры в порядке шаблона, затем остальные
    parameters: List[Parameter] = []
    body_parameters: List[Parameter] = []
    body_encoding: Optional[BodyEncoding] = None
    query_parameters: List[Parameter] = []

    response: ResponseShape
    doc_groups: List[List[str]] = []

    @property
    def uses_raw_request(self) -> bool:
        return self.http_verb == "OPTIONS"

    @property
    def needs_empty_content_length(self) -> bool:
        # PUT без тела требует явного Content-Length: 0
        return self.http_verb == "PUT" and self.body_encoding is None

    @property
    def path_parameters(self) -> List[Parameter]:
        return [p for p in self.parameters if p.kind == ParameterKind.PATH]
