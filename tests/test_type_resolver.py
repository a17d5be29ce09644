"""
Тесты отображения схем в описания типов
"""

import pytest

from openapi_stubgen.internal.types.errors import MissingArrayItemSchemaError
from openapi_stubgen.internal.types.models import (
    AnyType,
    ArrayType,
    NamedType,
    PrimitiveKind,
    PrimitiveType,
    SchemaKind,
    SchemaNode,
)
from openapi_stubgen.internal.types.type_resolver import TypeResolver


def node(kind, format=None, **kwargs):
    return SchemaNode(kind=kind, format=format, **kwargs)


class TestTypeResolver:
    """Тесты таблицы соответствия типов"""

    @pytest.mark.parametrize(
        "kind, format, expected",
        [
            (SchemaKind.STRING, None, PrimitiveKind.STRING),
            (SchemaKind.STRING, "date-time", PrimitiveKind.STRING),
            (SchemaKind.INTEGER, "int64", PrimitiveKind.INT64),
            (SchemaKind.INTEGER, "int32", PrimitiveKind.INT32),
            (SchemaKind.INTEGER, None, PrimitiveKind.INT32),
            (SchemaKind.NUMBER, "float", PrimitiveKind.FLOAT32),
            (SchemaKind.NUMBER, "double", PrimitiveKind.FLOAT64),
            (SchemaKind.NUMBER, None, PrimitiveKind.FLOAT64),
            (SchemaKind.BOOLEAN, None, PrimitiveKind.BOOL),
            (SchemaKind.BOOLEAN, "whatever", PrimitiveKind.BOOL),
        ],
    )
    def test_primitives(self, kind, format, expected):
        """Тест примитивных типов"""
        assert TypeResolver().resolve(node(kind, format)) == PrimitiveType(kind=expected)

    def test_nested_arrays(self):
        """Тест вложенных массивов"""
        schema = node(
            SchemaKind.ARRAY,
            items=node(SchemaKind.ARRAY, items=node(SchemaKind.STRING)),
        )

        result = TypeResolver().resolve(schema)

        assert result == ArrayType(
            item=ArrayType(item=PrimitiveType(kind=PrimitiveKind.STRING))
        )

    def test_object_is_any(self):
        """Тест что object без ссылки отображается в Any"""
        schema = node(SchemaKind.OBJECT, properties={"a": node(SchemaKind.STRING)})
        assert TypeResolver().resolve(schema) == AnyType()

    @pytest.mark.parametrize("raw_type", [None, "null", "allOf", "file"])
    def test_unknown_is_any(self, raw_type):
        """Тест что неизвестные типы не ломают генерацию"""
        schema = node(SchemaKind.UNKNOWN, raw_type=raw_type)
        assert TypeResolver().resolve(schema) == AnyType()

    def test_reference_is_named(self):
        """Тест ссылки на именованную схему"""
        schema = node(SchemaKind.REFERENCE, ref_name="User")
        assert TypeResolver().resolve(schema) == NamedType(name="User")

    def test_array_of_references(self):
        schema = node(
            SchemaKind.ARRAY, items=node(SchemaKind.REFERENCE, ref_name="User")
        )
        assert TypeResolver().resolve(schema) == ArrayType(item=NamedType(name="User"))

    def test_missing_items_fails_with_context(self):
        """Тест ошибки массива без items"""
        with pytest.raises(MissingArrayItemSchemaError) as exc_info:
            TypeResolver().resolve(node(SchemaKind.ARRAY), "Order.items")

        assert exc_info.value.context == "Order.items"
        assert "Order.items" in str(exc_info.value)

    def test_nested_missing_items_fails(self):
        schema = node(SchemaKind.ARRAY, items=node(SchemaKind.ARRAY))
        with pytest.raises(MissingArrayItemSchemaError):
            TypeResolver().resolve(schema, "Matrix")

    def test_resolve_is_pure(self):
        """Тест что результат зависит только от схемы"""
        schema = node(SchemaKind.ARRAY, items=node(SchemaKind.INTEGER, "int64"))
        assert TypeResolver().resolve(schema) == TypeResolver().resolve(schema)

    def test_find_unmodeled(self):
        """Тест поиска немоделируемых схем для предупреждений"""
        schema = node(
            SchemaKind.ARRAY, items=node(SchemaKind.UNKNOWN, raw_type="oneOf")
        )
        assert list(TypeResolver.find_unmodeled(schema)) == ["oneOf"]
        assert list(TypeResolver.find_unmodeled(node(SchemaKind.STRING))) == []
