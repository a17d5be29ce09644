import logging
from collections import defaultdict
from typing import Dict, List, Optional, Union

from ..types.errors import (
    DocumentMissingError,
    FieldNameCollisionError,
    GenerationFailedError,
    GenerationIssue,
    MethodNameCollisionError,
    ParameterNameCollisionError,
    StubGenError,
    UnresolvedModelError,
)
from ..types.models import (
    ClientMethodSignature,
    Document,
    ModelDefinition,
    ModelField,
    Operation,
    SchemaNode,
    SourceUnit,
    SourceUnitKind,
)
from ..types.type_resolver import TypeResolver
from .backends import TargetBackend, get_backend
from .emitters import ClientEmitter, ModelEmitter
from .naming import NameSynthesizer
from .operations import REQUEST_BODY_PARAMETER, ParameterBuilder, ReturnResolver

logger = logging.getLogger(__name__)


class GenerationResult:
    """Результат генерации: готовые файлы и ошибки по сущностям"""

    def __init__(self, units: List[SourceUnit], errors: List[GenerationIssue]):
        self.units = units
        self.errors = errors

    @property
    def ok(self) -> bool:
        return not self.errors

    @property
    def model_units(self) -> List[SourceUnit]:
        return [u for u in self.units if u.kind == SourceUnitKind.MODEL]

    @property
    def client_unit(self) -> Optional[SourceUnit]:
        for unit in self.units:
            if unit.kind == SourceUnitKind.CLIENT:
                return unit
        return None

    def get(self, name: str) -> Optional[SourceUnit]:
        for unit in self.units:
            if unit.name == name:
                return unit
        return None

    def raise_for_errors(self) -> "GenerationResult":
        if self.errors:
            raise GenerationFailedError(self.errors)
        return self

    def __iter__(self):
        return iter(self.units)

    def __len__(self) -> int:
        return len(self.units)


class LibraryGenerator:
    """Генерация моделей и клиента из документа"""

    def __init__(
        self,
        namespace_name: str,
        client_name: str,
        backend: Union[TargetBackend, str] = "python",
    ):
        if isinstance(backend, str):
            backend = get_backend(backend)

        self.namespace_name = namespace_name
        self.client_name = client_name
        self.backend = backend

        self.type_resolver = TypeResolver()
        self.name_synthesizer = NameSynthesizer()
        self.parameter_builder = ParameterBuilder(self.type_resolver)
        self.return_resolver = ReturnResolver(self.type_resolver)
        self.model_emitter = ModelEmitter(backend, namespace_name)
        self.client_emitter = ClientEmitter(backend, namespace_name)

    def generate(self, document: Optional[Document]) -> GenerationResult:
        """Основная генерация"""
        if document is None:
            raise DocumentMissingError()

        units: List[SourceUnit] = []
        errors: List[GenerationIssue] = []

        definitions: Dict[str, ModelDefinition] = {}
        for schema_name, schema in document.schemas.items():
            try:
                definitions[schema_name] = self.build_model(schema_name, schema)
            except StubGenError as e:
                logger.warning("Модель %s пропущена: %s", schema_name, e)
                errors.append(GenerationIssue(schema_name, e))

        self._drop_unresolved_models(definitions, errors)
        units.extend(
            self.model_emitter.emit_definition(definition)
            for definition in definitions.values()
        )

        signatures = self._build_signatures(document, errors)
        signatures = self._drop_unresolved_signatures(signatures, definitions, errors)
        units.append(self.client_emitter.emit(self.client_name, signatures))
        units.extend(
            self.backend.support_units(
                self.namespace_name, self.client_name, list(definitions)
            )
        )

        logger.info(
            "Сгенерировано %d моделей и %d методов клиента %s, ошибок: %d",
            len(definitions),
            len(signatures),
            self.client_name,
            len(errors),
        )
        return GenerationResult(units, errors)

    def build_model(self, schema_name: str, schema: SchemaNode) -> ModelDefinition:
        fields = []
        field_names = set()
        for property_name, property_schema in schema.properties.items():
            context = f"{schema_name}.{property_name}"
            self._warn_unmodeled(context, property_schema)

            field_name = self.backend.identifier(property_name)
            if field_name in field_names:
                raise FieldNameCollisionError(schema_name, field_name)
            field_names.add(field_name)

            var_type = self.type_resolver.resolve(property_schema, context)
            fields.append(ModelField(name=property_name, var_type=var_type))

        return ModelDefinition(name=schema_name, fields=fields)

    def build_signature(
        self, route: str, operation: Operation
    ) -> ClientMethodSignature:
        context = f"{operation.method.value.upper()} {route}"

        for param in operation.parameters:
            self._warn_unmodeled(f"{context}: {param.name}", param.schema_node)

        body_schema = self.parameter_builder.request_body_schema(operation)
        if body_schema is not None:
            self._warn_unmodeled(f"{context}: {REQUEST_BODY_PARAMETER}", body_schema)

        parameters = self.parameter_builder.build(operation, context)
        # Имена параметров должны различаться после приведения к синтаксису языка
        seen = set(self.backend.reserved_parameters)
        for param in parameters:
            name = self.backend.identifier(param.name)
            if name in seen:
                raise ParameterNameCollisionError(context, name)
            seen.add(name)

        return ClientMethodSignature(
            name=self.name_synthesizer.synthesize(route, operation.method),
            route=route,
            method=operation.method,
            parameters=parameters,
            return_type=self.return_resolver.resolve(operation, context),
            description=operation.summary,
        )

    def _build_signatures(
        self, document: Document, errors: List[GenerationIssue]
    ) -> List[ClientMethodSignature]:
        signatures: List[ClientMethodSignature] = []

        for route in document.routes:
            for operation in route.operations.values():
                try:
                    signature = self.build_signature(route.path, operation)
                except StubGenError as e:
                    entity = f"{operation.method.value.upper()} {route.path}"
                    logger.warning("Операция %s пропущена: %s", entity, e)
                    errors.append(GenerationIssue(entity, e))
                    continue
                signatures.append(signature)

        return self._drop_collisions(signatures, errors)

    @staticmethod
    def _drop_collisions(
        signatures: List[ClientMethodSignature], errors: List[GenerationIssue]
    ) -> List[ClientMethodSignature]:
        """Методы с одинаковыми именами не генерируются, коллизия - ошибка"""
        by_name: Dict[str, List[ClientMethodSignature]] = defaultdict(list)
        for signature in signatures:
            by_name[signature.name].append(signature)

        collided = set()
        for name, group in by_name.items():
            if len(group) < 2:
                continue
            operations = [f"{s.method.value.upper()} {s.route}" for s in group]
            logger.warning("Коллизия имени метода %s: %s", name, operations)
            errors.append(
                GenerationIssue(name, MethodNameCollisionError(name, operations))
            )
            collided.add(name)

        return [s for s in signatures if s.name not in collided]

    @staticmethod
    def _drop_unresolved_models(
        definitions: Dict[str, ModelDefinition], errors: List[GenerationIssue]
    ) -> None:
        """Модели, ссылающиеся на отсутствующие модели, тоже не генерируются

        Повторяется до неподвижной точки: выпавшая модель может тянуть за собой
        следующие.
        """
        changed = True
        while changed:
            changed = False
            for name, definition in list(definitions.items()):
                missing = next(
                    (r for r in definition.referenced_names() if r not in definitions),
                    None,
                )
                if missing is None:
                    continue
                error = UnresolvedModelError(name, missing)
                logger.warning("Модель %s пропущена: %s", name, error)
                errors.append(GenerationIssue(name, error))
                del definitions[name]
                changed = True

    @staticmethod
    def _drop_unresolved_signatures(
        signatures: List[ClientMethodSignature],
        definitions: Dict[str, ModelDefinition],
        errors: List[GenerationIssue],
    ) -> List[ClientMethodSignature]:
        kept = []
        for signature in signatures:
            missing = next(
                (r for r in signature.referenced_names() if r not in definitions),
                None,
            )
            if missing is None:
                kept.append(signature)
                continue
            entity = f"{signature.method.value.upper()} {signature.route}"
            error = UnresolvedModelError(entity, missing)
            logger.warning("Операция %s пропущена: %s", entity, error)
            errors.append(GenerationIssue(entity, error))
        return kept

    @staticmethod
    def _warn_unmodeled(context: str, schema: SchemaNode) -> None:
        for raw_type in TypeResolver.find_unmodeled(schema):
            logger.warning(
                "%s: тип %s не поддерживается, используется Any", context, raw_type
            )
