from datetime import datetime, UTC
import uuid
from sqlalchemy import DateTime, ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship
from blog.db.database import Base
from blog.models.validation import Validatable

class Comment(Validatable, Base):
    """Comment model"""
    __tablename__ = "comments"
    __presence_of__ = ("body",)

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    # plain column, no FK: comments outlive their post
    post_id: Mapped[str] = mapped_column(String(36), index=True)
    user_id: Mapped[str] = mapped_column(String(36), ForeignKey("users.id"), index=True)
    body: Mapped[str] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(UTC))
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(UTC),
        onupdate=lambda: datetime.now(UTC)
    )

    post: Mapped["Post"] = relationship(
        primaryjoin="Post.id == foreign(Comment.post_id)",
        back_populates="comments"
    )
    user: Mapped["User"] = relationship(back_populates="comments")
