from datetime import datetime
from pydantic import BaseModel, Field

class CommentBase(BaseModel):
    """评论基础模型"""
    body: str = Field(..., description="评论内容")

class CommentCreate(CommentBase):
    """创建评论请求模型"""
    pass

class CommentUpdate(CommentBase):
    """更新评论请求模型"""
    pass

class CommentResponse(CommentBase):
    """评论响应模型"""
    id: str = Field(..., description="评论ID")
    post_id: str = Field(..., description="文章ID")
    user_id: str = Field(..., description="作者ID")
    created_at: datetime = Field(..., description="创建时间")
    updated_at: datetime = Field(..., description="更新时间")

    class Config:
        from_attributes = True
