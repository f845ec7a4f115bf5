from datetime import datetime, UTC
import uuid
from typing import List
from sqlalchemy import DateTime, ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship
from blog.db.database import Base
from blog.models.post_tag import posts_tags
from blog.models.validation import Validatable
from blog.search import register_searchable

class Post(Validatable, Base):
    """Post model

    Belongs to a user, has many comments and many tags. Comments are not
    dependent: deleting a post leaves them in place. Tag links live in
    ``posts_tags`` and go away with the post.
    """
    __tablename__ = "posts"
    __presence_of__ = ("title", "body")

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id: Mapped[str] = mapped_column(String(36), ForeignKey("users.id"), index=True)
    title: Mapped[str] = mapped_column(String(255), nullable=True)
    body: Mapped[str] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(UTC))
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(UTC),
        onupdate=lambda: datetime.now(UTC)
    )

    user: Mapped["User"] = relationship(back_populates="posts")
    comments: Mapped[List["Comment"]] = relationship(
        primaryjoin="Post.id == foreign(Comment.post_id)",
        back_populates="post",
        passive_deletes="all",
        order_by="Comment.created_at"
    )
    tags: Mapped[List["Tag"]] = relationship(secondary=posts_tags, back_populates="posts")

    @property
    def tag_ids(self) -> List[str]:
        return [tag.id for tag in self.tags]

    @property
    def comments_count(self) -> int:
        return len(self.comments)

    def __repr__(self):
        return f"<Post {self.id} {self.title!r}>"

register_searchable(Post, "title", "body")
