"""
Общие фикстуры для тестов генератора
"""

import copy

import pytest


USER_SPEC = {
    "openapi": "3.0.0",
    "info": {"title": "Users API", "version": "1.0.0"},
    "components": {
        "schemas": {
            "User": {
                "type": "object",
                "properties": {
                    "name": {"type": "string"},
                    "age": {"type": "integer"},
                },
            }
        }
    },
    "paths": {
        "/users/{id}": {
            "get": {
                "parameters": [
                    {
                        "name": "id",
                        "in": "path",
                        "required": True,
                        "schema": {"type": "integer"},
                    }
                ],
                "responses": {
                    "200": {
                        "description": "Success",
                        "content": {
                            "application/json": {
                                "schema": {"$ref": "#/components/schemas/User"}
                            }
                        },
                    }
                },
            }
        }
    },
}


SHOP_SPEC = {
    "openapi": "3.0.0",
    "info": {"title": "Shop API", "version": "2.0.0"},
    "components": {
        "schemas": {
            "User": {
                "type": "object",
                "properties": {
                    "id": {"type": "integer", "format": "int64"},
                    "name": {"type": "string"},
                    "score": {"type": "number", "format": "float"},
                    "tags": {"type": "array", "items": {"type": "string"}},
                },
            },
            "Order": {
                "type": "object",
                "properties": {
                    "orderId": {"type": "integer"},
                    "total": {"type": "number"},
                    "paid": {"type": "boolean"},
                    "user": {"$ref": "#/components/schemas/User"},
                    "items": {
                        "type": "array",
                        "items": {"$ref": "#/components/schemas/OrderItem"},
                    },
                    "created-at": {"type": "string", "format": "date-time"},
                    "meta": {"type": "object"},
                },
            },
            "OrderItem": {
                "type": "object",
                "properties": {
                    "sku": {"type": "string"},
                    "quantity": {"type": "integer"},
                },
            },
        },
        "parameters": {
            "OrderId": {
                "name": "orderId",
                "in": "path",
                "required": True,
                "schema": {"type": "integer", "format": "int64"},
            }
        },
    },
    "paths": {
        "/users": {
            "get": {
                "parameters": [
                    {"name": "limit", "in": "query", "schema": {"type": "integer"}},
                    {"name": "q", "in": "query", "schema": {"type": "string"}},
                ],
                "responses": {
                    "200": {
                        "description": "OK",
                        "content": {
                            "application/json": {
                                "schema": {
                                    "type": "array",
                                    "items": {"$ref": "#/components/schemas/User"},
                                }
                            }
                        },
                    }
                },
            },
            "post": {
                "requestBody": {
                    "content": {
                        "application/json": {
                            "schema": {"$ref": "#/components/schemas/User"}
                        }
                    }
                },
                "responses": {"201": {"description": "Created"}},
            },
        },
        "/orders/{orderId}": {
            "delete": {
                "parameters": [{"$ref": "#/components/parameters/OrderId"}],
                "responses": {"204": {"description": "Deleted"}},
            }
        },
        "/orders/{orderId}/items": {
            "get": {
                "parameters": [{"$ref": "#/components/parameters/OrderId"}],
                "responses": {
                    "200": {
                        "description": "OK",
                        "content": {
                            "application/json": {
                                "schema": {
                                    "type": "array",
                                    "items": {
                                        "$ref": "#/components/schemas/OrderItem"
                                    },
                                }
                            }
                        },
                    }
                },
            }
        },
    },
}


@pytest.fixture
def user_spec():
    return copy.deepcopy(USER_SPEC)


@pytest.fixture
def shop_spec():
    return copy.deepcopy(SHOP_SPEC)
