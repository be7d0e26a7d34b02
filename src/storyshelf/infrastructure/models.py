"""SQLAlchemy ORM models."""

from sqlalchemy import Integer, Text
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """Base class for all ORM models."""

    pass


class StoryModel(Base):
    """SQLAlchemy model for stories table.

    ``sqlite_autoincrement`` emits ``AUTOINCREMENT`` so ids of deleted rows
    are never handed out again.
    """

    __tablename__ = "stories"
    __table_args__ = {"sqlite_autoincrement": True}

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(Text, nullable=False)
    full_text: Mapped[str] = mapped_column(Text, nullable=False)
