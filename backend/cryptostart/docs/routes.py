"""Docs blueprint: /openapi.json, /docs (Swagger UI), /redoc."""
from __future__ import annotations

from flask import Blueprint, Response, jsonify

from .openapi import build_openapi

bp = Blueprint("docs", __name__)

_PAGE = """<!doctype html>
<html>
<head>
  <meta charset="utf-8"/>
  <title>TheCryptoStart {title}</title>
  {head}
  <style>body{{margin:0;}} #{mount}{{height:100vh;}}</style>
</head>
<body>
  {body}
</body>
</html>
"""

_SWAGGER_HEAD = '<link rel="stylesheet" href="https://unpkg.com/swagger-ui-dist@5/swagger-ui.css" />'
_SWAGGER_BODY = (
    '<div id="swagger-ui"></div>\n'
    '  <script src="https://unpkg.com/swagger-ui-dist@5/swagger-ui-bundle.js"></script>\n'
    "  <script>window.ui = SwaggerUIBundle({ url: '/openapi.json', dom_id: '#swagger-ui' });</script>"
)
_REDOC_HEAD = '<script src="https://cdn.jsdelivr.net/npm/redoc@next/bundles/redoc.standalone.js"></script>'


def _html(title: str, mount: str, head: str, body: str) -> Response:
    return Response(_PAGE.format(title=title, mount=mount, head=head, body=body), mimetype="text/html")


@bp.get("/openapi.json")
def openapi_json() -> Response:
    return jsonify(build_openapi())


@bp.get("/docs")
def swagger_ui() -> Response:
    return _html("API Docs", "swagger-ui", _SWAGGER_HEAD, _SWAGGER_BODY)


@bp.get("/redoc")
def redoc() -> Response:
    return _html("ReDoc", "redoc", _REDOC_HEAD, '<redoc spec-url="/openapi.json"></redoc>')
