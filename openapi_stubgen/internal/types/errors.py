"""
Ошибки генератора
"""

from typing import List, Sequence


class StubGenError(Exception):
    """Базовая ошибка генератора"""


class MissingArrayItemSchemaError(StubGenError):
    def __init__(self, context: str):
        self.context = context
        super().__init__(f"{context}: схема типа array не содержит items")


class MethodNameCollisionError(StubGenError):
    def __init__(self, method_name: str, operations: Sequence[str]):
        self.method_name = method_name
        self.operations = list(operations)
        super().__init__(
            f"Имя метода {method_name} получено для нескольких операций: "
            + ", ".join(self.operations)
        )


class ParameterNameCollisionError(StubGenError):
    def __init__(self, operation: str, parameter_name: str):
        self.operation = operation
        self.parameter_name = parameter_name
        super().__init__(
            f"{operation}: несколько параметров получают имя {parameter_name}"
        )


class FieldNameCollisionError(StubGenError):
    def __init__(self, model_name: str, field_name: str):
        self.model_name = model_name
        self.field_name = field_name
        super().__init__(
            f"{model_name}: несколько свойств получают имя поля {field_name}"
        )


class UnresolvedModelError(StubGenError):
    """Сущность ссылается на модель, которой нет в результате"""

    def __init__(self, entity: str, model_name: str):
        self.entity = entity
        self.model_name = model_name
        super().__init__(f"{entity}: зависит от несгенерированной модели {model_name}")


class DocumentMissingError(StubGenError, ValueError):
    def __init__(self):
        super().__init__("Документ не передан: генерация невозможна")


class DocumentParseError(StubGenError):
    def __init__(self, source: str, reason: str):
        self.source = source
        self.reason = reason
        super().__init__(f"Не удалось разобрать спецификацию {source}: {reason}")


class UnknownTargetError(StubGenError, ValueError):
    def __init__(self, target: str, available: Sequence[str]):
        self.target = target
        super().__init__(
            f"Неизвестный целевой язык {target!r}, доступны: {', '.join(available)}"
        )


class GenerationFailedError(StubGenError):
    def __init__(self, issues: List["GenerationIssue"]):
        self.issues = issues
        lines = [f"Генерация завершилась с ошибками ({len(issues)}):"]
        lines.extend(f"  - {issue}" for issue in issues)
        super().__init__("\n".join(lines))


class GenerationIssue:
    """Ошибка, относящаяся к одной сущности документа"""

    def __init__(self, entity: str, error: Exception):
        self.entity = entity
        self.error = error

    @property
    def message(self) -> str:
        return str(self.error)

    def __str__(self) -> str:
        return f"[{self.entity}] {self.message}"

    def __repr__(self) -> str:
        return f"GenerationIssue({self.entity!r}, {self.message!r})"
