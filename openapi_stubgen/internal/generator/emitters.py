import logging
from typing import Iterable, List, Sequence, Tuple, Union

from ..types.models import (
    ClientMethodSignature,
    ModelDefinition,
    ModelField,
    SourceUnit,
    SourceUnitKind,
    TypeDescriptor,
)
from .backends import TargetBackend

logger = logging.getLogger(__name__)


class ModelEmitter:
    """Генерация файла модели данных"""

    def __init__(self, backend: TargetBackend, namespace_name: str):
        self.backend = backend
        self.namespace_name = namespace_name

    def emit(
        self,
        name: str,
        fields: Iterable[Union[ModelField, Tuple[str, TypeDescriptor]]],
    ) -> SourceUnit:
        """Файл с одной моделью, поля в объявленном порядке"""
        definition = ModelDefinition(
            name=name,
            fields=[
                field
                if isinstance(field, ModelField)
                else ModelField(name=field[0], var_type=field[1])
                for field in fields
            ],
        )
        return self.emit_definition(definition)

    def emit_definition(self, definition: ModelDefinition) -> SourceUnit:
        content = self.backend.render_model(
            self.namespace_name,
            definition.name,
            definition.fields,
            definition.referenced_names(),
        )
        logger.debug(
            "Модель %s: %d полей", definition.name, len(definition.fields)
        )
        return SourceUnit(
            name=self.backend.unit_name(definition.name),
            extension=self.backend.extension,
            kind=SourceUnitKind.MODEL,
            content=content,
        )


class ClientEmitter:
    """Генерация файла клиента с заглушками методов"""

    def __init__(self, backend: TargetBackend, namespace_name: str):
        self.backend = backend
        self.namespace_name = namespace_name

    def emit(
        self, client_name: str, signatures: Sequence[ClientMethodSignature]
    ) -> SourceUnit:
        references: List[str] = []
        for signature in signatures:
            for name in signature.referenced_names():
                if name not in references:
                    references.append(name)

        content = self.backend.render_client(
            self.namespace_name, client_name, signatures, sorted(references)
        )
        logger.debug("Клиент %s: %d методов", client_name, len(signatures))
        return SourceUnit(
            name=self.backend.unit_name(client_name),
            extension=self.backend.extension,
            kind=SourceUnitKind.CLIENT,
            content=content,
        )
