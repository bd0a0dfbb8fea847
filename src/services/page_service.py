"""Page service: slug uniqueness, hierarchy checks, and deletion."""

import logging
from typing import Any

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from src.database import MAX_INTEGER, Statement, execute_transaction
from src.errors import ConflictError, NotFoundError, ValidationError
from src.models.enums import PageStatus
from src.models.page import Page
from src.schemas.page import PageCreate, PageUpdate

logger = logging.getLogger(__name__)

# Columns that may not be cleared by an update
REQUIRED_FIELDS = frozenset(
    {"title", "slug", "status", "page_template", "menu_order", "show_in_menu", "show_in_footer"}
)


class PageService:
    """Service for CMS page operations."""

    def __init__(self, db: Session):
        self.db = db

    def list_pages(self) -> list[Page]:
        return self.db.query(Page).order_by(Page.menu_order, Page.title).all()

    def get_page(self, page_id: int) -> Page:
        page = self._find(page_id)
        if page is None:
            raise NotFoundError("Page not found")
        return page

    def get_published_by_slug(self, slug: str) -> Page:
        page = (
            self.db.query(Page)
            .filter(Page.slug == slug, Page.status == PageStatus.PUBLISHED.value)
            .first()
        )
        if page is None:
            raise NotFoundError("Page not found")
        return page

    def menu_pages(self, footer: bool = False) -> list[Page]:
        """Published pages flagged for the header menu (or footer)."""
        flag = Page.show_in_footer if footer else Page.show_in_menu
        return (
            self.db.query(Page)
            .filter(flag.is_(True), Page.status == PageStatus.PUBLISHED.value)
            .order_by(Page.menu_order, Page.title)
            .all()
        )

    def create_page(self, data: PageCreate) -> Page:
        self._ensure_slug_available(data.slug)
        if data.parent_id is not None:
            self.get_parent(data.parent_id)

        page = Page(**data.model_dump(mode="json"))
        self.db.add(page)
        self._commit(page.slug)
        self.db.refresh(page)
        logger.info(f"Created page {page.id} ({page.slug})")
        return page

    def update_page(self, page_id: int, data: PageUpdate) -> Page:
        page = self.get_page(page_id)
        changes: dict[str, Any] = data.model_dump(mode="json", exclude_unset=True)

        for name in REQUIRED_FIELDS & changes.keys():
            if changes[name] is None:
                del changes[name]

        if "slug" in changes and changes["slug"] != page.slug:
            self._ensure_slug_available(changes["slug"])
        if changes.get("parent_id") is not None:
            self.check_parent(page.id, changes["parent_id"])

        for name, value in changes.items():
            setattr(page, name, value)

        self._commit(page.slug)
        self.db.refresh(page)
        return page

    def delete_page(self, page_id: int) -> None:
        """Delete a page, detaching its children first in the same transaction."""
        page_id = self.get_page(page_id).id
        # Release the session's snapshot before the raw transaction writes
        self.db.rollback()
        execute_transaction(
            [
                Statement("UPDATE pages SET parent_id = NULL WHERE parent_id = :id", {"id": page_id}),
                Statement("DELETE FROM pages WHERE id = :id", {"id": page_id}),
            ]
        )
        logger.info(f"Deleted page {page_id}")

    def get_parent(self, parent_id: int) -> Page:
        parent = self._find(parent_id)
        if parent is None:
            raise ValidationError(
                "Validation failed", {"parent_id": ["Parent page does not exist"]}
            )
        return parent

    def check_parent(self, page_id: int, parent_id: int) -> None:
        """Reject a parent that is the page itself or one of its descendants.

        Walks the ancestor chain of the proposed parent; meeting ``page_id``
        on the way means the update would close a cycle.
        """
        seen: set[int] = set()
        current: Page | None = self.get_parent(parent_id)
        while current is not None:
            if current.id == page_id:
                raise ValidationError(
                    "Validation failed",
                    {"parent_id": ["A page cannot be nested under itself or its descendants"]},
                )
            if current.id in seen:
                # Pre-existing cycle not involving this page
                break
            seen.add(current.id)
            if current.parent_id is None:
                break
            current = self.db.query(Page).filter(Page.id == current.parent_id).first()

    def _find(self, page_id: int) -> Page | None:
        if page_id > MAX_INTEGER:
            return None
        return self.db.query(Page).filter(Page.id == page_id).first()

    def _commit(self, slug: str) -> None:
        try:
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            raise ConflictError(f"A page with slug '{slug}' already exists") from e

    def _ensure_slug_available(self, slug: str) -> None:
        if self.db.query(Page.id).filter(Page.slug == slug).first() is not None:
            raise ConflictError(f"A page with slug '{slug}' already exists")
