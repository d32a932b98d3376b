"""SQLAlchemy declarative schema for the reference host's posts."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import BigInteger, Boolean, DateTime, ForeignKey, Index, Integer, String, Text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship


class Base(DeclarativeBase):
    """Base class for SQLAlchemy declarative mappings."""


class DbPost(Base):
    """ORM mapping for a post record."""

    __tablename__ = "posts"
    __table_args__ = (
        Index("ix_posts_status_published", "status", "published_at"),
        Index("ix_posts_sticky", "sticky"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=False)
    title: Mapped[str] = mapped_column(Text, default="", nullable=False)
    slug: Mapped[str] = mapped_column(String(200), default="", nullable=False)
    status: Mapped[str] = mapped_column(String(20), default="publish", nullable=False)
    sticky: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    published_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    thumbnail_url: Mapped[str | None] = mapped_column(Text, nullable=True)

    categories: Mapped[list[DbPostCategory]] = relationship(
        back_populates="post",
        cascade="all, delete-orphan",
        lazy="selectin",
    )


class DbPostCategory(Base):
    """Association between a post and a category id."""

    __tablename__ = "post_categories"
    __table_args__ = (Index("ix_post_categories_category", "category_id"),)

    post_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("posts.id", ondelete="CASCADE"), primary_key=True
    )
    category_id: Mapped[int] = mapped_column(BigInteger, primary_key=True)

    post: Mapped[DbPost] = relationship(back_populates="categories")


def create_all(engine: Engine) -> None:
    """Create database tables for the schema."""
    Base.metadata.create_all(engine, checkfirst=True)


__all__ = ["Base", "DbPost", "DbPostCategory", "create_all"]
