"""
Главный модуль генератора - чистый интерфейс
"""

from typing import Any, Dict, Optional, Union

from .internal.generator.backends import TargetBackend
from .internal.generator.library_generator import GenerationResult, LibraryGenerator
from .internal.parser.openapi import OpenApiParser
from .internal.types.models import Document

DEFAULT_NAMESPACE = "Generated.Client"
DEFAULT_CLIENT_NAME = "ApiClient"


class StubGenerator:
    """Чистый интерфейс для генерации моделей и клиента"""

    def __init__(
        self,
        openapi_spec: Union[Dict[str, Any], Document],
        namespace_name: str = DEFAULT_NAMESPACE,
        client_name: str = DEFAULT_CLIENT_NAME,
        target: Union[TargetBackend, str] = "python",
        source: str = "<document>",
    ):
        self.openapi_spec = openapi_spec
        self.source = source
        self.library_generator = LibraryGenerator(namespace_name, client_name, target)

    def parse(self) -> Optional[Document]:
        if self.openapi_spec is None or isinstance(self.openapi_spec, Document):
            return self.openapi_spec
        return OpenApiParser(self.openapi_spec, self.source).parse()

    def generate(self) -> GenerationResult:
        """Генерация всех файлов"""
        return self.library_generator.generate(self.parse())


def generate_library(
    openapi_spec: Union[Dict[str, Any], Document],
    namespace_name: str = DEFAULT_NAMESPACE,
    client_name: str = DEFAULT_CLIENT_NAME,
    target: Union[TargetBackend, str] = "python",
) -> GenerationResult:
    """Генерация моделей и клиента из OpenAPI спецификации"""
    generator = StubGenerator(openapi_spec, namespace_name, client_name, target)
    return generator.generate()
