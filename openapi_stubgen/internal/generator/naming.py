"""Имена методов клиента из пути и HTTP метода.

Примеры:
  GET  /users                  -> GetUsers
  GET  /users/{id}             -> GetUsersById
  POST /users                  -> PostUsers
  GET  /orders/{orderId}/items -> GetOrdersByOrderIdItems
"""

from typing import Union

from ..types.models import HttpMethod
from ..utils import capitalize_first


class NameSynthesizer:
    """Генератор имен методов клиента"""

    def synthesize(self, route: str, method: Union[HttpMethod, str]) -> str:
        method = HttpMethod(method.lower()) if isinstance(method, str) else method
        parts = [method.canonical_name]

        for segment in route.split("/"):
            if not segment:
                continue

            if self.is_placeholder(segment):
                parts.append("By")
                parts.append(capitalize_first(segment[1:-1]))
            else:
                parts.append(capitalize_first(segment))

        return "".join(parts)

    @staticmethod
    def is_placeholder(segment: str) -> bool:
        return segment.startswith("{") and segment.endswith("}")
