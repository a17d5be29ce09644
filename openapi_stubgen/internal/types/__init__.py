from .models import (
    AnyType,
    ArrayType,
    AsyncResultType,
    ClientMethodSignature,
    Document,
    HttpMethod,
    MethodBody,
    MethodParameter,
    ModelDefinition,
    ModelField,
    NamedType,
    Operation,
    OperationParameter,
    PrimitiveKind,
    PrimitiveType,
    Response,
    RouteEntry,
    SchemaKind,
    SchemaNode,
    SourceUnit,
    SourceUnitKind,
    TypeDescriptor,
)
from .type_resolver import TypeResolver
