from typing import List, Optional

from ..types.models import (
    AsyncResultType,
    MethodParameter,
    Operation,
    SchemaNode,
)
from ..types.type_resolver import TypeResolver

JSON_MEDIA_TYPE = "application/json"
SUCCESS_STATUS = "200"
REQUEST_BODY_PARAMETER = "requestBody"


class ParameterBuilder:
    """Список параметров метода клиента"""

    def __init__(self, type_resolver: Optional[TypeResolver] = None):
        self.type_resolver = type_resolver or TypeResolver()

    def build(
        self, operation: Operation, context: Optional[str] = None
    ) -> List[MethodParameter]:
        """Объявленные параметры по порядку, затем requestBody если есть JSON тело"""
        parameters = []

        for param in operation.parameters:
            var_type = self.type_resolver.resolve(
                param.schema_node, self._context(context, param.name)
            )
            parameters.append(MethodParameter(name=param.name, var_type=var_type))

        body_schema = self.request_body_schema(operation)
        if body_schema is not None:
            var_type = self.type_resolver.resolve(
                body_schema, self._context(context, REQUEST_BODY_PARAMETER)
            )
            parameters.append(
                MethodParameter(name=REQUEST_BODY_PARAMETER, var_type=var_type)
            )

        return parameters

    @staticmethod
    def request_body_schema(operation: Operation) -> Optional[SchemaNode]:
        if not operation.request_body:
            return None
        return operation.request_body.get(JSON_MEDIA_TYPE)

    @staticmethod
    def _context(context: Optional[str], name: str) -> Optional[str]:
        return f"{context}: {name}" if context else name


class ReturnResolver:
    """Тип возврата метода клиента"""

    def __init__(self, type_resolver: Optional[TypeResolver] = None):
        self.type_resolver = type_resolver or TypeResolver()

    def resolve(
        self, operation: Operation, context: Optional[str] = None
    ) -> AsyncResultType:
        # Смотрим только на "200" - остальные 2xx и ошибки не учитываются
        response = operation.responses.get(SUCCESS_STATUS)
        if response is None:
            return AsyncResultType()

        schema = response.content.get(JSON_MEDIA_TYPE)
        if schema is None:
            return AsyncResultType()

        payload = self.type_resolver.resolve(
            schema, f"{context}: response" if context else "response"
        )
        return AsyncResultType(payload=payload)
