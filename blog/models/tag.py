from datetime import datetime, UTC
import uuid
from typing import List
from sqlalchemy import DateTime, ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship
from blog.db.database import Base
from blog.models.post_tag import posts_tags
from blog.models.validation import Validatable

class Tag(Validatable, Base):
    """Tag model"""
    __tablename__ = "tags"
    __presence_of__ = ("name",)

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    name: Mapped[str] = mapped_column(String(50), unique=True)  # tag name must be unique
    description: Mapped[str] = mapped_column(Text, nullable=True)  # tag description, optional
    user_id: Mapped[str] = mapped_column(String(36), ForeignKey("users.id"))  # creator
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(UTC))
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(UTC),
        onupdate=lambda: datetime.now(UTC)
    )

    posts: Mapped[List["Post"]] = relationship(secondary=posts_tags, back_populates="tags")
