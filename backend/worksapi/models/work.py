"""
Works API - Work SQLAlchemy Model
==================================

What:  ORM model representing the `works` table.
Who:   Used by WorkService for CRUD operations; created by Database.connect().

Table Design:
    - UUID primary key, generated in Python so it works on PostgreSQL and SQLite
    - title / description: TEXT NOT NULL, the only client-visible fields
    - created_at: internal, gives GET /api/works its insertion order;
      rows with equal timestamps fall back to id order
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import DateTime, Index, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from worksapi.database import Base


class Work(Base):
    """
    A single work item.

    Lifecycle:
        1. Created by POST /api/works (id assigned here, never changed)
        2. Read by GET /api/works and GET /api/works/{id}
        3. title/description replaced by PUT /api/works/{id}
        4. Removed by DELETE /api/works/{id}
    """

    __tablename__ = "works"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
    )

    title: Mapped[str] = mapped_column(Text, nullable=False)

    description: Mapped[str] = mapped_column(Text, nullable=False)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    __table_args__ = (
        Index("idx_works_created_at", "created_at"),
    )

    def __repr__(self) -> str:
        return f"<Work(id={self.id}, title='{self.title}')>"
