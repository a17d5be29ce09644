from typing import Iterator, Optional

from .errors import MissingArrayItemSchemaError
from .models import (
    AnyType,
    ArrayType,
    NamedType,
    PrimitiveKind,
    PrimitiveType,
    SchemaKind,
    SchemaNode,
    TypeDescriptor,
)


class TypeResolver:
    """Отображение схемы в описание типа, без состояния"""

    # (kind, format) -> примитив; format=None - значение по умолчанию
    primitive_mapping = {
        (SchemaKind.STRING, None): PrimitiveKind.STRING,
        (SchemaKind.INTEGER, "int64"): PrimitiveKind.INT64,
        (SchemaKind.INTEGER, None): PrimitiveKind.INT32,
        (SchemaKind.NUMBER, "float"): PrimitiveKind.FLOAT32,
        (SchemaKind.NUMBER, None): PrimitiveKind.FLOAT64,
        (SchemaKind.BOOLEAN, None): PrimitiveKind.BOOL,
    }

    def resolve(
        self, schema: SchemaNode, context: Optional[str] = None
    ) -> TypeDescriptor:
        """Получение типа из схемы

        context - имя схемы или операции, попадает в текст ошибки
        """
        kind = schema.kind

        if kind == SchemaKind.ARRAY:
            if schema.items is None:
                raise MissingArrayItemSchemaError(context or "<array>")
            return ArrayType(item=self.resolve(schema.items, context))

        if kind == SchemaKind.REFERENCE and schema.ref_name:
            return NamedType(name=schema.ref_name)

        primitive = self.primitive_mapping.get((kind, schema.format))
        if primitive is None:
            primitive = self.primitive_mapping.get((kind, None))

        if primitive is not None:
            return PrimitiveType(kind=primitive)

        # object, unknown и все остальное
        return AnyType()

    @classmethod
    def find_unmodeled(cls, schema: SchemaNode) -> Iterator[str]:
        """Исходные type схем, которые генератор не моделирует"""
        if schema.kind == SchemaKind.UNKNOWN:
            yield schema.raw_type or "<без типа>"
        elif schema.kind == SchemaKind.ARRAY and schema.items is not None:
            yield from cls.find_unmodeled(schema.items)
