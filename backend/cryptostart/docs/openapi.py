"""Builds a minimal OpenAPI spec from existing Pydantic schemas."""
from __future__ import annotations

from typing import Any, Dict, List

from flask import request

from ..api.admin_posts.schemas import PostCreateIn, PostOut, PostUpdateIn, PublishIn
from ..api.auth.schemas import TokenIn
from ..api.comments.schemas import CommentCreatedOut, CommentCreateIn, CommentThreadOut
from ..api.moderation.schemas import CommentAdminOut, CommentStatusIn
from ..api.taxonomy.schemas import AuthorIn, AuthorOut, CategoryIn, CategoryOut
from ..api.users.schemas import UserCreateIn, UserOut, UserUpdateIn

_MODELS = (
    UserCreateIn, UserUpdateIn, UserOut, TokenIn,
    CommentCreateIn, CommentCreatedOut, CommentThreadOut, CommentStatusIn, CommentAdminOut,
    PostCreateIn, PostUpdateIn, PostOut, PublishIn,
    AuthorIn, AuthorOut, CategoryIn, CategoryOut,
)
_BEARER: List[Dict[str, List[str]]] = [{"BearerAuth": []}]


def _schemas() -> Dict[str, Any]:
    return {
        m.__name__: m.model_json_schema(ref_template="#/components/schemas/{model}")
        for m in _MODELS
    }


def _ref(name: str) -> Dict[str, Any]:
    return {"$ref": f"#/components/schemas/{name}"}


def _op(tag: str, summary: str, *, body: str | None = None, status: str = "200", secure: bool = True) -> Dict[str, Any]:
    op: Dict[str, Any] = {"tags": [tag], "summary": summary, "responses": {status: {"description": "OK"}}}
    if body:
        op["requestBody"] = {"required": True, "content": {"application/json": {"schema": _ref(body)}}}
    if secure:
        op["security"] = _BEARER
    return op


def _path_param(name: str) -> List[Dict[str, Any]]:
    return [{"name": name, "in": "path", "required": True, "schema": {"type": "string"}}]


def build_openapi() -> Dict[str, Any]:
    base_url = f"{request.scheme}://{request.host}"
    security_schemes = {
        "BearerAuth": {
            "type": "http",
            "scheme": "bearer",
            "bearerFormat": "JWT"
        }
    }
    return {
        "openapi": "3.0.3",
        "info": {"title": "TheCryptoStart Content API", "version": "1.0.0"},
        "servers": [{"url": base_url}],
        "tags": [
            {"name": "Health"}, {"name": "Auth"}, {"name": "Comments"}, {"name": "Posts"},
            {"name": "Moderation"}, {"name": "Admin"}, {"name": "Dashboards"}, {"name": "Users"},
        ],
        "paths": {
            "/api/health/": {"get": _op("Health", "Liveness probe with database status", secure=False)},
            "/api/auth/token": {"post": _op("Auth", "Exchange credentials for a Bearer token", body="TokenIn", secure=False)},
            "/api/comments/": {
                "get": {
                    **_op("Comments", "Approved comments with approved replies", secure=False),
                    "parameters": [{"name": "postSlug", "in": "query", "required": True, "schema": {"type": "string"}}],
                },
                "post": _op("Comments", "Submit a comment", body="CommentCreateIn", status="201", secure=False),
            },
            "/api/posts/{slug}/faq": {
                "parameters": _path_param("slug"),
                "get": _op("Posts", "Generated FAQ and quick answer for a published post", secure=False),
            },
            "/api/admin/comments/": {"get": _op("Moderation", "List comments by status")},
            "/api/admin/comments/{comment_id}": {
                "parameters": _path_param("comment_id"),
                "patch": _op("Moderation", "Set comment status", body="CommentStatusIn"),
                "delete": _op("Moderation", "Delete comment and replies", status="204"),
            },
            "/api/admin/posts/": {
                "get": _op("Admin", "List posts"),
                "post": _op("Admin", "Create post", body="PostCreateIn", status="201"),
            },
            "/api/admin/posts/{post_id}": {
                "parameters": _path_param("post_id"),
                "get": _op("Admin", "Get post by id or slug"),
                "put": _op("Admin", "Update post", body="PostUpdateIn"),
                "delete": _op("Admin", "Delete post"),
            },
            "/api/admin/posts/{post_id}/publish": {
                "parameters": _path_param("post_id"),
                "post": _op("Admin", "Publish or unpublish a post", body="PublishIn"),
            },
            "/api/admin/authors/": {
                "get": _op("Admin", "List authors"),
                "post": _op("Admin", "Create author", body="AuthorIn", status="201"),
            },
            "/api/admin/authors/{entity_id}": {
                "parameters": _path_param("entity_id"),
                "get": _op("Admin", "Get author"),
                "put": _op("Admin", "Update author"),
                "delete": _op("Admin", "Delete author"),
            },
            "/api/admin/categories/": {
                "get": _op("Admin", "List categories"),
                "post": _op("Admin", "Create category", body="CategoryIn", status="201"),
            },
            "/api/admin/categories/{entity_id}": {
                "parameters": _path_param("entity_id"),
                "get": _op("Admin", "Get category"),
                "put": _op("Admin", "Update category"),
                "delete": _op("Admin", "Delete category"),
            },
            "/api/admin/ai-optimization/scores": {"get": _op("Dashboards", "AI optimization score per post")},
            "/api/admin/seo/metrics": {"get": _op("Dashboards", "Corpus SEO metrics, expansion and linking suggestions")},
            "/api/admin/seo/posts/{slug}": {
                "parameters": _path_param("slug"),
                "get": _op("Dashboards", "SEO analysis of one post"),
            },
            "/api/users/": {
                "get": _op("Users", "List users"),
                "post": _op("Users", "Create user", body="UserCreateIn", status="201"),
            },
            "/api/users/{user_id}": {
                "parameters": _path_param("user_id"),
                "get": _op("Users", "Get user by id"),
                "put": _op("Users", "Update user", body="UserUpdateIn"),
                "delete": _op("Users", "Delete user"),
            },
        },
        "components": {
            "schemas": _schemas(),
            "securitySchemes": security_schemes
        },
    }
