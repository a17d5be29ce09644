import logging
from collections.abc import Mapping
from typing import Any, Dict, List, Optional

import jsonref

from ..types.errors import DocumentParseError
from ..types.models import (
    Document,
    HttpMethod,
    Operation,
    OperationParameter,
    Response,
    RouteEntry,
    SchemaKind,
    SchemaNode,
)

logger = logging.getLogger(__name__)

SCHEMA_REF_PREFIX = "#/components/schemas/"
COMPOSITION_KEYWORDS = ("allOf", "oneOf", "anyOf", "not")


class OpenApiParser:
    """Парсер OpenAPI спецификации в документ генератора

    Принимает словарь как есть или после jsonref.replace_refs: ссылки на
    components/schemas остаются именованными, остальные ссылки разрешаются.
    """

    def __init__(self, openapi_dict: Dict[str, Any], source: str = "<document>"):
        self.openapi_dict = openapi_dict
        self.source = source

    def parse(self) -> Document:
        """Парсинг OpenAPI в Document"""
        if not isinstance(self.openapi_dict, Mapping):
            raise DocumentParseError(
                self.source,
                f"ожидался объект, получен {type(self.openapi_dict).__name__}",
            )

        info = self.openapi_dict.get("info") or {}
        schemas = (self.openapi_dict.get("components") or {}).get("schemas") or {}

        document = Document(
            title=str(info.get("title", "API")),
            version=str(info.get("version", "0.0.0")),
            schemas={
                str(name): self.parse_schema(schema) for name, schema in schemas.items()
            },
            routes=[
                self._parse_route(str(path), path_item)
                for path, path_item in (self.openapi_dict.get("paths") or {}).items()
            ],
        )
        logger.debug(
            "%s: %d схем, %d путей",
            self.source,
            len(document.schemas),
            len(document.routes),
        )
        return document

    def parse_schema(self, raw: Any) -> SchemaNode:
        if not isinstance(raw, Mapping):
            return SchemaNode(kind=SchemaKind.UNKNOWN)

        ref_name = self._schema_ref_name(raw)
        if ref_name is not None:
            return SchemaNode(kind=SchemaKind.REFERENCE, ref_name=ref_name)

        raw = self._follow(raw)
        raw_type = self._raw_type(raw)

        if raw_type == "array":
            items = raw.get("items")
            return SchemaNode(
                kind=SchemaKind.ARRAY,
                items=self.parse_schema(items) if items is not None else None,
            )

        if raw_type == "object" or (raw_type is None and "properties" in raw):
            return SchemaNode(
                kind=SchemaKind.OBJECT,
                properties={
                    str(name): self.parse_schema(prop)
                    for name, prop in (raw.get("properties") or {}).items()
                },
            )

        if raw_type in ("string", "integer", "number", "boolean"):
            return SchemaNode(kind=SchemaKind(raw_type), format=raw.get("format"))

        if raw_type is None:
            # Композиции (allOf/oneOf/...) не моделируются
            raw_type = next((k for k in COMPOSITION_KEYWORDS if k in raw), None)

        return SchemaNode(kind=SchemaKind.UNKNOWN, raw_type=raw_type)

    def _parse_route(self, path: str, path_item: Any) -> RouteEntry:
        path_item = self._follow(path_item) if isinstance(path_item, Mapping) else {}
        shared_parameters = path_item.get("parameters") or []

        operations = {}
        for key, raw_operation in path_item.items():
            try:
                method = HttpMethod(str(key).lower())
            except ValueError:
                # summary, description, parameters, servers...
                continue
            operations[method] = self._parse_operation(
                method, raw_operation, shared_parameters
            )

        return RouteEntry(path=path, operations=operations)

    def _parse_operation(
        self, method: HttpMethod, raw: Any, shared_parameters: List[Any]
    ) -> Operation:
        raw = self._follow(raw) if isinstance(raw, Mapping) else {}

        parameters = self._parse_parameters(
            list(shared_parameters), list(raw.get("parameters") or [])
        )

        request_body = None
        raw_body = raw.get("requestBody")
        if isinstance(raw_body, Mapping):
            request_body = self._parse_content(self._follow(raw_body))

        responses = {}
        for status, raw_response in (raw.get("responses") or {}).items():
            content = {}
            if isinstance(raw_response, Mapping):
                content = self._parse_content(self._follow(raw_response))
            # YAML может отдать код ответа числом
            responses[str(status)] = Response(content=content)

        return Operation(
            method=method,
            parameters=parameters,
            request_body=request_body,
            responses=responses,
            summary=raw.get("summary"),
        )

    def _parse_parameters(
        self, shared: List[Any], own: List[Any]
    ) -> List[OperationParameter]:
        """Параметры пути и операции, параметр операции перекрывает параметр пути"""
        own_params = [self._parse_parameter(p) for p in own]
        own_keys = {(p.name, p.location) for p in own_params if p is not None}

        parameters = [
            p
            for p in (self._parse_parameter(raw) for raw in shared)
            if p is not None and (p.name, p.location) not in own_keys
        ]
        parameters.extend(p for p in own_params if p is not None)
        return parameters

    def _parse_parameter(self, raw: Any) -> Optional[OperationParameter]:
        if not isinstance(raw, Mapping):
            return None
        raw = self._follow(raw)
        if "name" not in raw:
            logger.warning("%s: параметр без имени пропущен", self.source)
            return None

        return OperationParameter(
            name=str(raw["name"]),
            location=str(raw.get("in", "query")),
            schema_node=self.parse_schema(raw.get("schema")),
        )

    def _parse_content(self, raw: Mapping) -> Dict[str, SchemaNode]:
        return {
            str(media_type): self.parse_schema(
                media.get("schema") if isinstance(media, Mapping) else None
            )
            for media_type, media in (raw.get("content") or {}).items()
        }

    @staticmethod
    def _raw_type(raw: Mapping) -> Optional[str]:
        raw_type = raw.get("type")
        # OpenAPI 3.1: type может быть списком, например ["string", "null"]
        if isinstance(raw_type, list):
            raw_type = next((t for t in raw_type if t != "null"), None)
        return str(raw_type) if raw_type is not None else None

    @staticmethod
    def _schema_ref_name(raw: Mapping) -> Optional[str]:
        """Имя схемы из components/schemas, если узел - ссылка на нее"""
        if isinstance(raw, jsonref.JsonRef):
            ref = raw.__reference__.get("$ref")
        else:
            ref = raw.get("$ref")

        if not isinstance(ref, str) or not ref.startswith(SCHEMA_REF_PREFIX):
            return None

        name = ref[len(SCHEMA_REF_PREFIX) :]
        return name.replace("~1", "/").replace("~0", "~")

    def _follow(self, raw: Mapping) -> Mapping:
        """Разрешение локальной ссылки в необработанном словаре"""
        seen = set()
        while (
            not isinstance(raw, jsonref.JsonRef)
            and isinstance(raw.get("$ref"), str)
            and raw["$ref"].startswith("#/")
        ):
            ref = raw["$ref"]
            if ref in seen:
                raise DocumentParseError(self.source, f"циклическая ссылка {ref}")
            seen.add(ref)

            node = self.openapi_dict
            for part in ref[2:].split("/"):
                part = part.replace("~1", "/").replace("~0", "~")
                if not isinstance(node, Mapping) or part not in node:
                    raise DocumentParseError(
                        self.source, f"ссылка {ref} не найдена"
                    )
                node = node[part]

            if not isinstance(node, Mapping):
                raise DocumentParseError(self.source, f"ссылка {ref} не на объект")
            raw = node
        return raw
