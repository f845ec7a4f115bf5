from sqlalchemy import Column, ForeignKey, String, Table
from blog.db.database import Base

# 文章与标签的多对多关联表，只有两个外键列
posts_tags = Table(
    "posts_tags",
    Base.metadata,
    Column("post_id", String(36), ForeignKey("posts.id", ondelete="CASCADE"), primary_key=True),
    Column("tag_id", String(36), ForeignKey("tags.id", ondelete="CASCADE"), primary_key=True),
)
