"""Helpers shared by the blueprints: camelCase schemas, paging, client info."""
from __future__ import annotations

from typing import Any, Dict, Tuple

from flask import request
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

DEFAULT_PAGE_SIZE = 20
MAX_PAGE_SIZE = 100


class CamelModel(BaseModel):
    """Accepts camelCase or snake_case keys and dumps camelCase."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)

    def out(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True, mode="json")


def json_body() -> Dict[str, Any]:
    payload = request.get_json(silent=True)
    return payload if isinstance(payload, dict) else {}


def _int_arg(name: str, default: int) -> int:
    try:
        return int(request.args.get(name, default))
    except (TypeError, ValueError):
        return default


def page_args(default_limit: int = DEFAULT_PAGE_SIZE) -> Tuple[int, int]:
    page = max(1, _int_arg("page", 1))
    limit = min(MAX_PAGE_SIZE, max(1, _int_arg("limit", default_limit)))
    return page, limit


def pagination(total: int, page: int, limit: int) -> Dict[str, int]:
    return {"total": total, "pages": -(-total // limit) if limit else 0, "currentPage": page}


def client_ip() -> str:
    forwarded = request.headers.get("X-Forwarded-For")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return request.remote_addr or "127.0.0.1"
