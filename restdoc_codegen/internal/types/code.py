"""Узлы генерируемого кода, каждый узел рендерится через __str__"""

from typing import Optional, Union, List

from pydantic import BaseModel


def indent(text: str, prefix: str = "    ") -> str:
    """Отступ для непустых строк"""
    return "\n".join(prefix + line if line else line for line in text.split("\n"))


class CodeBlock(BaseModel):
    order: int = 0
    code: str = ""

    def __str__(self):
        return self.code.replace("\t", "    ")


class EnumDefinition(BaseModel):
    name: str
    attributes: list[str] = []
    variants: list[str] = []

    order: int = 0

    def __str__(self) -> str:
        return (
            "".join(f"{attr}\n" for attr in self.attributes)
            + f"pub enum {self.name} {{\n"
            + "".join(f"    {variant},\n" for variant in self.variants)
            + "}"
        )


class FieldDefinition(BaseModel):
    name: str
    var_type: str
    attributes: list[str] = []

    def __str__(self) -> str:
        return "".join(f"{attr}\n" for attr in self.attributes) + (
            f"pub {self.name}: {self.var_type},"
        )


class StructDefinition(BaseModel):
    name: str
    attributes: list[str] = []
    generics: Optional[str] = None
    fields: list[FieldDefinition] = []

    order: int = 0

    def __str__(self) -> str:
        return (
            "".join(f"{attr}\n" for attr in self.attributes)
            + f"pub struct {self.name}"
            + (f"<{self.generics}>" if self.generics else "")
            + " {\n"
            + "".join(indent(str(f)) + "\n" for f in self.fields)
            + "}"
        )


class FunctionParameter(BaseModel):
    name: str
    var_type: str

    def __str__(self):
        return f"{self.name}: {self.var_type}"


class Function(BaseModel):
    name: str
    parameters: list[FunctionParameter] = []
    response: str = "()"

    async_def: bool = True
    receiver: Optional[str] = "&self"
    doc_comment: str = ""
    attributes: list[str] = []

    code: CodeBlock = CodeBlock()

    order: int = 0

    def __str__(self) -> str:
        arguments = ([self.receiver] if self.receiver else []) + [
            str(p) for p in self.parameters
        ]

        return (
            self.doc_comment
            + "".join(f"{attr}\n" for attr in self.attributes)
            + f"pub {'async ' if self.async_def else ''}fn {self.name}(\n"
            + "".join(f"    {arg},\n" for arg in arguments)
            + f") -> {self.response} {{\n"
            + indent(str(self.code))
            + "\n}"
        )

    def set_code_block(self, code_block: Union["CodeBlock", str]) -> "Function":
        if isinstance(code_block, str):
            code_block = CodeBlock(code=code_block)

        self.code = code_block
        return self


class ImplBlock(BaseModel):
    header: str
    comment: Optional[str] = None
    functions: list[Function] = []

    order: int = 0

    def __str__(self) -> str:
        body = "\n\n".join(str(f) for f in self.functions)
        return (
            f"{self.header} {{\n"
            + (f"    // {self.comment}\n\n" if self.comment else "")
            + (indent(body) + "\n" if body else "")
            + "}"
        )

    def add_function(self, function: Union["Function", str], **kwargs) -> "Function":
        if isinstance(function, str):
            function = Function(name=function, **kwargs)

        self.functions.append(function)
        return function


Item = Union[CodeBlock, EnumDefinition, StructDefinition, Function, ImplBlock]


class CodeFile(BaseModel):
    file_name: str

    imports: list[str] = []
    items: list[Item] = []

    def __str__(self):
        # Сортировка устойчива: при равном order сохраняется порядок добавления
        body = "\n\n".join(
            str(item)
            for item in sorted(self.items, key=lambda x: x.order, reverse=True)
        )
        return (
            "\n\n".join(
                filter(
                    bool,
                    [("\n".join(self.imports) if self.imports else ""), body],
                )
            )
            + "\n"
        ).replace("\t", "    ")

    def add_item(self, item: Item) -> Item:
        self.items.append(item)
        return item

    def add_code_block(
        self, code_block: Union["CodeBlock", str], **kwargs
    ) -> "CodeBlock":
        if isinstance(code_block, str):
            code_block = CodeBlock(code=code_block, **kwargs)

        self.items.append(code_block)
        return code_block


class Project(BaseModel):
    name: str
    files: list[CodeFile] = []

    def add_file(self, file_name: Union["CodeFile", str], **kwargs) -> "CodeFile":
        if isinstance(file_name, str):
            file_name = CodeFile(file_name=file_name, **kwargs)

        self.files.append(file_name)
        return file_name

    def get_file(self, file_name: str) -> Optional["CodeFile"]:
        for code_file in self.files:
            if code_file.file_name == file_name:
                return code_file
        return None
