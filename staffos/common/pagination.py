"""Offset/limit pagination helpers for list endpoints that return a total."""

import math

from pydantic import BaseModel

from staffos.common.constants import DEFAULT_AUDIT_PAGE_SIZE


# ── Pydantic models ────────────────────────────────────────────────

class PaginationMeta(BaseModel):
    """Metadata block derived from ``offset``/``limit``/``total``."""

    page: int
    page_size: int
    total: int
    total_pages: int
    has_next: bool
    has_prev: bool


# ── Helpers ─────────────────────────────────────────────────────────

def build_meta(offset: int, limit: int, total: int) -> PaginationMeta:
    """Page numbers are 1-indexed; an empty result has zero pages."""
    limit = limit or DEFAULT_AUDIT_PAGE_SIZE
    total_pages = math.ceil(total / limit) if total else 0
    page = offset // limit + 1
    return PaginationMeta(
        page=page,
        page_size=limit,
        total=total,
        total_pages=total_pages,
        has_next=page < total_pages,
        has_prev=page > 1,
    )


def offset_for_page(page: int, limit: int = DEFAULT_AUDIT_PAGE_SIZE) -> int:
    return max(page - 1, 0) * limit
