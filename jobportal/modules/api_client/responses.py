"""
Helpers that normalize backend response bodies.

Every body is ``{"success": ..., "data": ...}``; listings carry their
pagination either flat (``count/total/page/pages``, jobs and applications)
or nested under ``pagination`` (users, connections, posts, chat).
"""

from typing import Any, Dict, List, Type, TypeVar

from pydantic import BaseModel

from jobportal.core.models import Page

M = TypeVar("M", bound=BaseModel)


def unwrap(body: Dict[str, Any]) -> Any:
    """Return the ``data`` payload of a response body."""
    return body.get("data")


def parse_list(items: Any, model: Type[M]) -> List[M]:
    return [model.model_validate(item) for item in (items or [])]


def parse_page(body: Dict[str, Any], model: Type[M]) -> Page[M]:
    """Build a typed page from either pagination shape."""
    items = parse_list(unwrap(body), model)
    pagination = body.get("pagination")
    if pagination:
        page = int(pagination.get("currentPage", 1))
        total = next(
            (v for k, v in pagination.items() if k.startswith("total") and k != "totalPages"),
            len(items),
        )
        if "totalPages" in pagination:
            pages = int(pagination["totalPages"])
        elif pagination.get("hasMore") or pagination.get("hasNext"):
            # feed-style listings only say whether another page exists
            pages = page + 1
        else:
            pages = page
        return Page[model](items=items, page=page, pages=pages, total=int(total))
    return Page[model](
        items=items,
        page=int(body.get("page", 1)),
        pages=int(body.get("pages", 1)),
        total=int(body.get("total", len(items))),
    )
