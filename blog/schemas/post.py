from pydantic import BaseModel, Field
from datetime import datetime
from typing import Optional, List

class PostBase(BaseModel):
    """文章基础模型"""
    title: str = Field(..., max_length=255, description="标题")
    body: str = Field(..., description="正文")

class PostCreate(PostBase):
    """创建文章请求模型"""
    tag_ids: Optional[List[str]] = Field(default=None, description="标签ID列表")

class PostUpdate(BaseModel):
    """更新文章请求模型，tag_ids 会替换原有标签"""
    title: Optional[str] = Field(default=None, max_length=255)
    body: Optional[str] = None
    tag_ids: Optional[List[str]] = Field(default=None, description="标签ID列表")

class PostResponse(PostBase):
    """文章响应模型"""
    id: str
    user_id: str
    created_at: datetime
    updated_at: datetime
    tag_ids: List[str] = Field(default_factory=list)
    comments_count: int = 0

    class Config:
        from_attributes = True
