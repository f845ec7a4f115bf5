from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session
from blog.db.database import get_session
from blog.models.post import Post
from blog.models.tag import Tag
from blog.models.user import User
from blog.schemas.post import PostCreate, PostUpdate, PostResponse
from blog.core.security import get_current_user
from blog.search import search
from typing import List, Optional

router = APIRouter()

def get_post_or_404(session: Session, post_id: str) -> Post:
    post = session.query(Post).filter(Post.id == post_id).first()
    if not post:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Post not found"
        )
    return post

def load_tags(session: Session, tag_ids: List[str]) -> List[Tag]:
    """Tags for the given ids, in request order; 404 if any is missing"""
    tag_ids = list(dict.fromkeys(tag_ids))
    tags = session.query(Tag).filter(Tag.id.in_(tag_ids)).all() if tag_ids else []
    if len(tags) != len(tag_ids):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Some tags not found"
        )
    by_id = {tag.id: tag for tag in tags}
    return [by_id[tag_id] for tag_id in tag_ids]

@router.post("", response_model=PostResponse, status_code=status.HTTP_201_CREATED, summary="Create a new post")
def create_post(
    post_in: PostCreate,
    current_user: User = Depends(get_current_user),
    session: Session = Depends(get_session)
):
    """Create a new post"""
    post = Post(
        title=post_in.title,
        body=post_in.body,
        user_id=current_user.id
    )
    if post_in.tag_ids:
        post.tags = load_tags(session, post_in.tag_ids)

    session.add(post)
    session.commit()
    session.refresh(post)
    return post

@router.get("", response_model=List[PostResponse], summary="List posts")
def list_posts(
    user_id: Optional[str] = None,
    tag_id: Optional[str] = None,
    session: Session = Depends(get_session)
):
    """List posts, newest first, optionally filtered by author or tag"""
    query = session.query(Post)
    if user_id:
        query = query.filter(Post.user_id == user_id)
    if tag_id:
        query = query.join(Post.tags).filter(Tag.id == tag_id)
    return query.order_by(Post.created_at.desc()).all()

@router.get("/search", response_model=List[PostResponse], summary="Full-text search over post titles and bodies")
def search_posts(
    q: str = Query(..., min_length=1, description="Search terms; every term must match"),
    limit: Optional[int] = Query(None, ge=1, le=100),
    session: Session = Depends(get_session)
):
    """Search posts"""
    return search(session, Post, q, limit=limit)

@router.get("/{post_id}", response_model=PostResponse, summary="Get a specific post")
def get_post(
    post_id: str,
    session: Session = Depends(get_session)
):
    """Get a specific post"""
    return get_post_or_404(session, post_id)

@router.put("/{post_id}", response_model=PostResponse, summary="Update a post, including title, body and tags")
def update_post(
    post_id: str,
    post_update: PostUpdate,
    session: Session = Depends(get_session),
    current_user: User = Depends(get_current_user)
):
    """Update a post"""
    post = get_post_or_404(session, post_id)

    # Only the author may edit
    if post.user_id != current_user.id:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Not enough permissions"
        )

    if post_update.title is not None:
        post.title = post_update.title
    if post_update.body is not None:
        post.body = post_update.body
    # Replace the whole tag set
    if post_update.tag_ids is not None:
        post.tags = load_tags(session, post_update.tag_ids)

    session.commit()
    session.refresh(post)
    return post

@router.delete("/{post_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Delete a post")
def delete_post(
    post_id: str,
    session: Session = Depends(get_session),
    current_user: User = Depends(get_current_user)
):
    """Delete a post. Its comments are kept; its tag links are removed."""
    post = get_post_or_404(session, post_id)

    if post.user_id != current_user.id:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="You don't have permission to delete this post"
        )

    session.delete(post)
    session.commit()
    return None
