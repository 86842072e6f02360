"""SocialHub Backend — Shared pagination query parameters."""

from fastapi import Query, Response

from socialhub.schemas.common import Page, PageParams


def page_params(
    page: int = Query(default=0, ge=0, description="0-based page index"),
    size: int = Query(default=10, ge=1, le=100, description="Items per page (max 100)"),
) -> PageParams:
    return PageParams(page=page, size=size)


def with_total_count(response: Response, page: Page) -> Page:
    """Mirror page.total into the X-Total-Count header."""
    response.headers["X-Total-Count"] = str(page.total)
    return page
