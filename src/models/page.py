"""CMS page model."""

from sqlalchemy import JSON, Boolean, Column, Integer, String, Text

from src.database import Base
from src.models.enums import PageStatus
from src.models.mixins import TimestampMixin


class Page(Base, TimestampMixin):
    """Marketing/CMS page.

    ``parent_id`` points at another page but is not a foreign key; the pages
    service checks existence and prevents cycles on write.
    """

    __tablename__ = "pages"

    id = Column(Integer, primary_key=True, index=True)
    slug = Column(String(255), unique=True, nullable=False, index=True)
    title = Column(String(255), nullable=False)
    status = Column(String(20), nullable=False, default=PageStatus.DRAFT.value)
    content = Column(JSON(none_as_null=True), nullable=True)
    page_builder_content = Column(Text, nullable=True)
    page_template = Column(String(50), nullable=False, default="default")

    # Menu placement
    show_in_menu = Column(Boolean, nullable=False, default=False)
    show_in_footer = Column(Boolean, nullable=False, default=False)
    menu_order = Column(Integer, nullable=False, default=0)
    parent_id = Column(Integer, nullable=True, index=True)

    # SEO
    meta_title = Column(String(255), nullable=True)
    meta_description = Column(String(500), nullable=True)
    meta_keywords = Column(String(500), nullable=True)
