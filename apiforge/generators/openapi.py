"""OpenAPI documents served by the scaffolds that expose a documentation route."""
from typing import Any, Dict
from apiforge.generators.types import FeatureFlags
from apiforge.generators.utils import to_json


def _json_response(description: str, schema: Dict[str, Any]) -> Dict[str, Any]:
    return {"description": description, "content": {"application/json": {"schema": schema}}}


def _id_parameter(id_type: str) -> Dict[str, Any]:
    return {
        "name": "id",
        "in": "path",
        "required": True,
        "description": "User ID",
        "schema": {"type": id_type},
    }


def build_openapi_document(title: str, server_url: str, features: FeatureFlags, id_type: str = "integer") -> Dict[str, Any]:
    """Build an OpenAPI 3.0.3 document describing the generated user (and auth) endpoints.

    Args:
        title: API title shown by the documentation UI
        server_url: Base URL of the development server
        features: Feature flags of the scaffold; ``jwt`` adds the auth paths and bearer security
        id_type: OpenAPI type of the user identifier ("integer" or "string")

    Returns:
        The document as a plain dict, ready for JSON serialisation
    """
    user_ref = {"$ref": "#/components/schemas/User"}
    user_input_ref = {"$ref": "#/components/schemas/UserInput"}
    error = _json_response("Error", {"$ref": "#/components/schemas/Error"})
    secured: Dict[str, Any] = {"security": [{"bearerAuth": []}]} if features.jwt else {}

    paths: Dict[str, Any] = {
        "/api/users": {
            "get": {
                "summary": "Get all users",
                "tags": ["Users"],
                **secured,
                "responses": {"200": _json_response("List of users", {"type": "array", "items": user_ref})},
            },
            "post": {
                "summary": "Create a new user",
                "tags": ["Users"],
                **secured,
                "requestBody": {"required": True, "content": {"application/json": {"schema": user_input_ref}}},
                "responses": {"201": _json_response("User created", user_ref), "400": error},
            },
        },
        "/api/users/{id}": {
            "parameters": [_id_parameter(id_type)],
            "get": {
                "summary": "Get a user by ID",
                "tags": ["Users"],
                **secured,
                "responses": {"200": _json_response("User details", user_ref), "404": error},
            },
            "put": {
                "summary": "Update a user",
                "tags": ["Users"],
                **secured,
                "requestBody": {"required": True, "content": {"application/json": {"schema": user_input_ref}}},
                "responses": {"200": _json_response("User updated", user_ref), "404": error},
            },
            "delete": {
                "summary": "Delete a user",
                "tags": ["Users"],
                **secured,
                "responses": {"200": {"description": "User deleted"}, "404": error},
            },
        },
    }

    components: Dict[str, Any] = {
        "schemas": {
            "User": {
                "type": "object",
                "properties": {
                    "id": {"type": id_type},
                    "username": {"type": "string"},
                    "email": {"type": "string"},
                },
            },
            "UserInput": {
                "type": "object",
                "required": ["username", "email", "password"],
                "properties": {
                    "username": {"type": "string"},
                    "email": {"type": "string"},
                    "password": {"type": "string"},
                },
            },
            "Error": {"type": "object", "properties": {"error": {"type": "string"}}},
        }
    }

    if features.jwt:
        credentials = {
            "type": "object",
            "required": ["email", "password"],
            "properties": {"email": {"type": "string"}, "password": {"type": "string"}},
        }
        paths["/api/auth/register"] = {
            "post": {
                "summary": "Register a new user",
                "tags": ["Auth"],
                "requestBody": {"required": True, "content": {"application/json": {"schema": user_input_ref}}},
                "responses": {"201": {"description": "User registered"}, "400": error},
            }
        }
        paths["/api/auth/login"] = {
            "post": {
                "summary": "Login and get a JWT token",
                "tags": ["Auth"],
                "requestBody": {"required": True, "content": {"application/json": {"schema": credentials}}},
                "responses": {
                    "200": _json_response(
                        "Login successful",
                        {"type": "object", "properties": {"token": {"type": "string"}, "user": user_ref}},
                    ),
                    "401": error,
                },
            }
        }
        components["securitySchemes"] = {
            "bearerAuth": {"type": "http", "scheme": "bearer", "bearerFormat": "JWT"}
        }

    return {
        "openapi": "3.0.3",
        "info": {"title": title, "version": "1.0.0", "description": "API Documentation"},
        "servers": [{"url": server_url, "description": "Development server"}],
        "paths": paths,
        "components": components,
    }


def render_openapi_json(title: str, server_url: str, features: FeatureFlags, id_type: str = "integer") -> str:
    return to_json(build_openapi_document(title, server_url, features, id_type))
