from enum import Enum
from typing import Annotated, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


# --- Входной документ -------------------------------------------------------


class SchemaKind(str, Enum):
    STRING = "string"
    INTEGER = "integer"
    NUMBER = "number"
    BOOLEAN = "boolean"
    ARRAY = "array"
    OBJECT = "object"
    REFERENCE = "reference"
    UNKNOWN = "unknown"


class HttpMethod(str, Enum):
    GET = "get"
    PUT = "put"
    POST = "post"
    DELETE = "delete"
    OPTIONS = "options"
    HEAD = "head"
    PATCH = "patch"
    TRACE = "trace"

    @property
    def canonical_name(self) -> str:
        """Имя метода в виде Get, Post, Delete..."""
        return self.value.capitalize()


class SchemaNode(BaseModel):
    kind: SchemaKind = SchemaKind.UNKNOWN
    format: Optional[str] = None
    items: Optional["SchemaNode"] = None
    properties: Dict[str, "SchemaNode"] = {}
    ref_name: Optional[str] = None

    # Исходное значение type для диагностики неизвестных схем
    raw_type: Optional[str] = None


class OperationParameter(BaseModel):
    name: str
    location: str = "query"
    schema_node: SchemaNode = Field(default_factory=SchemaNode)


class Response(BaseModel):
    content: Dict[str, SchemaNode] = {}


class Operation(BaseModel):
    method: HttpMethod
    parameters: List[OperationParameter] = []
    request_body: Optional[Dict[str, SchemaNode]] = None
    responses: Dict[str, Response] = {}

    summary: Optional[str] = None


class RouteEntry(BaseModel):
    path: str
    operations: Dict[HttpMethod, Operation] = {}


class Document(BaseModel):
    title: str = "API"
    version: str = "0.0.0"
    schemas: Dict[str, SchemaNode] = {}
    routes: List[RouteEntry] = []


SchemaNode.model_rebuild()


# --- Описания типов ----------------------------------------------------------


class PrimitiveKind(str, Enum):
    STRING = "string"
    INT32 = "int32"
    INT64 = "int64"
    FLOAT32 = "float32"
    FLOAT64 = "float64"
    BOOL = "bool"


class _Descriptor(BaseModel):
    model_config = ConfigDict(frozen=True)


class PrimitiveType(_Descriptor):
    tag: Literal["primitive"] = "primitive"
    kind: PrimitiveKind


class ArrayType(_Descriptor):
    tag: Literal["array"] = "array"
    item: "TypeDescriptor"


class NamedType(_Descriptor):
    tag: Literal["named"] = "named"
    name: str


class AnyType(_Descriptor):
    tag: Literal["any"] = "any"


TypeDescriptor = Annotated[
    Union[PrimitiveType, ArrayType, NamedType, AnyType],
    Field(discriminator="tag"),
]

ArrayType.model_rebuild()


class AsyncResultType(_Descriptor):
    """Маркер асинхронного завершения, payload=None - без результата"""

    tag: Literal["async"] = "async"
    payload: Optional[TypeDescriptor] = None


# --- Модель кода -------------------------------------------------------------


class ModelField(BaseModel):
    name: str
    var_type: TypeDescriptor


class ModelDefinition(BaseModel):
    name: str
    fields: List[ModelField] = []

    def referenced_names(self) -> List[str]:
        """Имена моделей, на которые ссылаются поля (без повторов, по порядку)"""
        names: List[str] = []
        for field in self.fields:
            for name in iter_named(field.var_type):
                if name not in names:
                    names.append(name)
        return names


class MethodBody(str, Enum):
    # Единственная точка расширения для будущей реализации транспорта
    UNIMPLEMENTED = "unimplemented"


class MethodParameter(BaseModel):
    name: str
    var_type: TypeDescriptor


class ClientMethodSignature(BaseModel):
    name: str
    route: str
    method: HttpMethod
    parameters: List[MethodParameter] = []
    return_type: AsyncResultType = AsyncResultType()
    body: MethodBody = MethodBody.UNIMPLEMENTED

    description: Optional[str] = None

    def referenced_names(self) -> List[str]:
        names: List[str] = []
        descriptors = [p.var_type for p in self.parameters]
        if self.return_type.payload is not None:
            descriptors.append(self.return_type.payload)

        for descriptor in descriptors:
            for name in iter_named(descriptor):
                if name not in names:
                    names.append(name)
        return names


class SourceUnitKind(str, Enum):
    MODEL = "model"
    CLIENT = "client"
    SUPPORT = "support"


class SourceUnit(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    extension: str
    kind: SourceUnitKind
    content: str

    @property
    def file_name(self) -> str:
        return self.name + self.extension

    def __str__(self) -> str:
        return self.content


def iter_named(descriptor):
    """Обход описания типа с выдачей имен NamedType"""
    if isinstance(descriptor, NamedType):
        yield descriptor.name
    elif isinstance(descriptor, ArrayType):
        yield from iter_named(descriptor.item)
    elif isinstance(descriptor, AsyncResultType) and descriptor.payload is not None:
        yield from iter_named(descriptor.payload)
