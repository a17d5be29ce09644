"""
Генератор моделей данных и заглушек async клиента из OpenAPI
"""

from .generator import StubGenerator, generate_library
from .internal.generator.library_generator import GenerationResult, LibraryGenerator
from .internal.types.errors import GenerationFailedError, StubGenError

__all__ = [
    "StubGenerator",
    "generate_library",
    "GenerationResult",
    "LibraryGenerator",
    "GenerationFailedError",
    "StubGenError",
]
