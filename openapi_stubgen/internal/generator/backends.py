"""
Целевые языки генерации: отображение описаний типов в синтаксис языка
и сборка текста файлов из шаблонов
"""

import json
import re
import textwrap
from typing import Dict, FrozenSet, List, Sequence, Type

from ..types.errors import UnknownTargetError
from ..types.models import (
    AnyType,
    ArrayType,
    AsyncResultType,
    ClientMethodSignature,
    MethodBody,
    ModelField,
    NamedType,
    PrimitiveKind,
    PrimitiveType,
    SourceUnit,
    SourceUnitKind,
)
from ..utils import clean_identifier
from .templates import csharp_templates, python_templates


class TargetBackend:
    """Базовый класс целевого языка"""

    name: str = ""
    extension: str = ""
    primitive_names: Dict[PrimitiveKind, str] = {}
    any_name: str = ""
    indent: str = "    "
    # Имена, недоступные для параметров методов клиента
    reserved_parameters: FrozenSet[str] = frozenset()

    def unit_name(self, name: str) -> str:
        """Базовое имя файла для модели или клиента"""
        return name

    def identifier(self, name: str) -> str:
        return name

    def render_type(self, descriptor, quote_named: bool = False) -> str:
        if isinstance(descriptor, PrimitiveType):
            return self.primitive_names[descriptor.kind]
        if isinstance(descriptor, ArrayType):
            return self.render_array(self.render_type(descriptor.item, quote_named))
        if isinstance(descriptor, NamedType):
            return self.render_named(descriptor.name, quote_named)
        if isinstance(descriptor, AnyType):
            return self.any_name
        raise TypeError(f"Неизвестное описание типа: {descriptor!r}")

    def render_array(self, item: str) -> str:
        raise NotImplementedError

    def render_named(self, name: str, quote: bool) -> str:
        return name

    def render_return(self, return_type: AsyncResultType) -> str:
        raise NotImplementedError

    def render_body(self, body: MethodBody) -> str:
        raise NotImplementedError

    def render_model(
        self,
        namespace: str,
        name: str,
        fields: Sequence[ModelField],
        references: Sequence[str],
    ) -> str:
        raise NotImplementedError

    def render_client(
        self,
        namespace: str,
        name: str,
        methods: Sequence[ClientMethodSignature],
        references: Sequence[str],
    ) -> str:
        raise NotImplementedError

    def support_units(
        self, namespace: str, client_name: str, model_names: Sequence[str]
    ) -> List[SourceUnit]:
        """Дополнительные файлы, нужные языку (например __init__.py)"""
        return []

    def _indent(self, text: str, depth: int = 1) -> str:
        return textwrap.indent(text, self.indent * depth)


class PythonBackend(TargetBackend):
    """Pydantic модели и async клиент"""

    name = "python"
    extension = ".py"
    primitive_names = {
        PrimitiveKind.STRING: "str",
        PrimitiveKind.INT32: "int",
        PrimitiveKind.INT64: "int",
        PrimitiveKind.FLOAT32: "float",
        PrimitiveKind.FLOAT64: "float",
        PrimitiveKind.BOOL: "bool",
    }
    any_name = "Any"
    reserved_parameters = frozenset({"self"})

    def __init__(self):
        self.templates = python_templates

    def unit_name(self, name: str) -> str:
        # Имя модуля должно быть импортируемым
        return name if name.isidentifier() else clean_identifier(name)

    def identifier(self, name: str) -> str:
        return clean_identifier(name)

    def render_array(self, item: str) -> str:
        return f"List[{item}]"

    def render_named(self, name: str, quote: bool) -> str:
        name = self.identifier(name)
        return f'"{name}"' if quote else name

    def render_return(self, return_type: AsyncResultType) -> str:
        # Асинхронность выражается через async def
        if return_type.payload is None:
            return "None"
        return self.render_type(return_type.payload)

    def render_body(self, body: MethodBody) -> str:
        if body == MethodBody.UNIMPLEMENTED:
            return self.templates.method
        raise ValueError(f"Неподдерживаемое тело метода: {body}")

    def render_field(self, field: ModelField) -> str:
        var_type = self.render_type(field.var_type, quote_named=True)
        if not isinstance(field.var_type, AnyType):
            var_type = f"Optional[{var_type}]"

        name = self.identifier(field.name)
        if name != field.name:
            return self.templates.aliased_field.format(
                name=name, var_type=var_type, alias=json.dumps(field.name)
            )
        return self.templates.field.format(name=name, var_type=var_type)

    def render_model(self, namespace, name, fields, references):
        members = [self.render_field(field) for field in fields]
        if any(self.identifier(field.name) != field.name for field in fields):
            members.insert(0, self.templates.model_config + "\n")

        class_name = self.identifier(name)
        imports = [
            f"from .{self.unit_name(ref)} import {self.identifier(ref)}"
            for ref in references
            if ref != name
        ]
        type_checking = ""
        if imports:
            type_checking = self.templates.type_checking.format(
                imports=self._indent("\n".join(imports))
            )

        return self.templates.model.format(
            header=self._header(namespace),
            type_checking=type_checking,
            name=class_name,
            members=self._indent("\n".join(members) or self.templates.empty_body),
        )

    def render_method(self, signature: ClientMethodSignature) -> str:
        parameters = ["self"] + [
            f"{self.identifier(p.name)}: {self.render_type(p.var_type)}"
            for p in signature.parameters
        ]
        operation = f"{signature.method.value.upper()} {signature.route}"
        return self.render_body(signature.body).format(
            name=self.identifier(signature.name),
            parameters=", ".join(parameters),
            return_type=self.render_return(signature.return_type),
            operation=json.dumps(operation),
        )

    def render_client(self, namespace, name, methods, references):
        imports = "".join(
            f"\nfrom .{self.unit_name(ref)} import {self.identifier(ref)}"
            for ref in references
        )
        members = "\n\n".join(self.render_method(method) for method in methods)

        return self.templates.client.format(
            header=self._header(namespace),
            imports=imports + ("\n" if imports else ""),
            name=self.identifier(name),
            members=self._indent(members or self.templates.empty_body),
        )

    def support_units(self, namespace, client_name, model_names):
        imports = [
            f"from .{self.unit_name(name)} import {self.identifier(name)}"
            for name in model_names
        ]
        imports.append(
            f"from .{self.unit_name(client_name)} import {self.identifier(client_name)}"
        )
        rebuilds = "".join(
            f"{self.identifier(name)}.model_rebuild()\n" for name in model_names
        )
        exports = sorted(
            {self.identifier(name) for name in model_names}
            | {self.identifier(client_name)}
        )

        content = self.templates.package_init.format(
            header=self._header(namespace),
            imports="\n".join(imports) + "\n",
            rebuilds=rebuilds,
            exports=", ".join(json.dumps(name) for name in exports),
        )
        return [
            SourceUnit(
                name="__init__",
                extension=self.extension,
                kind=SourceUnitKind.SUPPORT,
                content=content,
            )
        ]

    def _header(self, namespace: str) -> str:
        return self.templates.header.format(namespace=namespace)


class CSharpBackend(TargetBackend):
    """Классы C# в пространстве имен, методы возвращают Task"""

    name = "csharp"
    extension = ".cs"
    primitive_names = {
        PrimitiveKind.STRING: "string",
        PrimitiveKind.INT32: "int",
        PrimitiveKind.INT64: "long",
        PrimitiveKind.FLOAT32: "float",
        PrimitiveKind.FLOAT64: "double",
        PrimitiveKind.BOOL: "bool",
    }
    any_name = "object"

    keywords = {
        "abstract", "base", "bool", "break", "byte", "case", "catch", "char",
        "checked", "class", "const", "continue", "decimal", "default",
        "delegate", "do", "double", "else", "enum", "event", "explicit",
        "extern", "false", "finally", "fixed", "float", "for", "foreach",
        "goto", "if", "implicit", "in", "int", "interface", "internal", "is",
        "lock", "long", "namespace", "new", "null", "object", "operator",
        "out", "override", "params", "private", "protected", "public",
        "readonly", "ref", "return", "sbyte", "sealed", "short", "sizeof",
        "stackalloc", "static", "string", "struct", "switch", "this", "throw",
        "true", "try", "typeof", "uint", "ulong", "unchecked", "unsafe",
        "ushort", "using", "virtual", "void", "volatile", "while",
    }

    def __init__(self):
        self.templates = csharp_templates

    def identifier(self, name: str) -> str:
        name = re.sub(r"\W", "_", name)
        if name and name[0].isdigit():
            name = f"_{name}"
        return f"@{name}" if name in self.keywords else name

    def render_array(self, item: str) -> str:
        return f"List<{item}>"

    def render_return(self, return_type: AsyncResultType) -> str:
        if return_type.payload is None:
            return "Task"
        return f"Task<{self.render_type(return_type.payload)}>"

    def render_body(self, body: MethodBody) -> str:
        if body == MethodBody.UNIMPLEMENTED:
            return self.templates.method
        raise ValueError(f"Неподдерживаемое тело метода: {body}")

    def render_model(self, namespace, name, fields, references):
        members = [
            self.templates.property.format(
                var_type=self.render_type(field.var_type),
                name=self.identifier(field.name),
            )
            for field in fields
        ]
        return self.templates.model.format(
            namespace=namespace,
            name=self.identifier(name),
            members=self._indent("\n".join(members), depth=2),
        )

    def render_method(self, signature: ClientMethodSignature) -> str:
        parameters = ", ".join(
            f"{self.render_type(p.var_type)} {self.identifier(p.name)}"
            for p in signature.parameters
        )
        return self.render_body(signature.body).format(
            return_type=self.render_return(signature.return_type),
            name=self.identifier(signature.name),
            parameters=parameters,
        )

    def render_client(self, namespace, name, methods, references):
        members = "\n\n".join(self.render_method(method) for method in methods)
        return self.templates.client.format(
            namespace=namespace,
            name=self.identifier(name),
            members=self._indent(members, depth=2),
        )


backends: Dict[str, Type[TargetBackend]] = {
    PythonBackend.name: PythonBackend,
    CSharpBackend.name: CSharpBackend,
}


def get_backend(name: str) -> TargetBackend:
    """Получение целевого языка по имени"""
    backend_class = backends.get(name.lower())
    if backend_class is None:
        raise UnknownTargetError(name, sorted(backends))
    return backend_class()
