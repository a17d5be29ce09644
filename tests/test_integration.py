"""
Интеграционные тесты: сгенерированный пакет импортируется и работает
"""

import importlib
import uuid

import pytest

from openapi_stubgen import generate_library
from openapi_stubgen.cli import save_source_units


def import_generated(result, tmp_path, monkeypatch):
    """Сохранение результата генерации и импорт его как пакета"""
    package_name = f"shop_api_{uuid.uuid4().hex[:8]}"
    save_source_units(result.units, str(tmp_path / package_name))
    monkeypatch.syspath_prepend(str(tmp_path))
    return importlib.import_module(package_name)


@pytest.fixture
def shop_package(tmp_path, monkeypatch, shop_spec):
    """Сгенерированный Python пакет по спецификации магазина"""
    result = generate_library(shop_spec, "Shop.Client", "ShopClient")
    assert result.ok, result.errors
    return import_generated(result, tmp_path, monkeypatch)


class TestIntegration:
    """Интеграционные тесты"""

    def test_package_exports(self, shop_package):
        assert shop_package.__all__ == ["Order", "OrderItem", "ShopClient", "User"]

    def test_models_validate(self, shop_package):
        """Тест что модели принимают данные с вложенными ссылками"""
        order = shop_package.Order.model_validate(
            {
                "orderId": 7,
                "total": 10.5,
                "paid": True,
                "user": {"id": 1, "name": "Ann", "tags": ["vip"]},
                "items": [{"sku": "A-1", "quantity": 2}],
                "created-at": "2024-01-01T00:00:00Z",
                "meta": {"source": "web"},
            }
        )

        assert order.orderId == 7
        assert isinstance(order.user, shop_package.User)
        assert order.user.tags == ["vip"]
        assert order.items[0].quantity == 2
        assert order.created_at == "2024-01-01T00:00:00Z"
        assert order.meta == {"source": "web"}

    def test_fields_optional(self, shop_package):
        user = shop_package.User()
        assert user.name is None
        assert user.model_dump(by_alias=True) == {
            "id": None,
            "name": None,
            "score": None,
            "tags": None,
        }

    def test_alias_by_name(self, shop_package):
        order = shop_package.Order(created_at="today")
        assert order.model_dump(by_alias=True)["created-at"] == "today"

    def test_client_methods(self, shop_package):
        client = shop_package.ShopClient()
        for name in (
            "GetUsers",
            "PostUsers",
            "DeleteOrdersByOrderId",
            "GetOrdersByOrderIdItems",
        ):
            assert callable(getattr(client, name))

    @pytest.mark.asyncio
    async def test_client_stub_not_implemented(self, shop_package):
        client = shop_package.ShopClient()

        with pytest.raises(NotImplementedError, match="DELETE /orders/"):
            await client.DeleteOrdersByOrderId(1)

    @pytest.mark.asyncio
    async def test_client_stub_with_body(self, shop_package):
        client = shop_package.ShopClient()

        with pytest.raises(NotImplementedError):
            await client.PostUsers(shop_package.User(name="Ann"))


class TestPartialGeneration:
    """Пакет после частично неудачной генерации остается импортируемым"""

    def test_failed_model_dependents(self, tmp_path, monkeypatch, shop_spec):
        schemas = shop_spec["components"]["schemas"]
        schemas["Broken"] = {
            "type": "object",
            "properties": {"values": {"type": "array"}},
        }
        schemas["User"]["properties"]["broken"] = {
            "$ref": "#/components/schemas/Broken"
        }
        shop_spec["paths"]["/broken"] = {
            "get": {
                "responses": {
                    "200": {
                        "description": "OK",
                        "content": {
                            "application/json": {
                                "schema": {"$ref": "#/components/schemas/Broken"}
                            }
                        },
                    }
                }
            }
        }

        result = generate_library(shop_spec, "Shop.Client", "ShopClient")
        assert not result.ok

        package = import_generated(result, tmp_path, monkeypatch)

        assert package.__all__ == ["OrderItem", "ShopClient"]
        item = package.OrderItem.model_validate({"sku": "A-1", "quantity": 2})
        assert item.quantity == 2
        client = package.ShopClient()
        assert not hasattr(client, "GetBroken")
        assert not hasattr(client, "GetUsers")
        assert callable(client.GetOrdersByOrderIdItems)

    def test_parameter_collision(self, tmp_path, monkeypatch, user_spec):
        user_spec["paths"]["/users/{id}"]["get"]["parameters"].append(
            {"name": "id", "in": "query", "schema": {"type": "string"}}
        )
        user_spec["paths"]["/users"] = {
            "get": {"responses": {"204": {"description": "OK"}}}
        }

        result = generate_library(user_spec, "Users", "UsersClient")
        assert len(result.errors) == 1

        package = import_generated(result, tmp_path, monkeypatch)

        client = package.UsersClient()
        assert not hasattr(client, "GetUsersById")
        assert callable(client.GetUsers)
