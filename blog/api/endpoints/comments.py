from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from blog.db.database import get_session
from blog.models.comment import Comment
from blog.models.user import User
from blog.schemas.comment import CommentCreate, CommentUpdate, CommentResponse
from blog.core.security import get_current_user
from blog.api.endpoints.posts import get_post_or_404
from typing import List

router = APIRouter()

def get_comment_or_404(session: Session, post_id: str, comment_id: str) -> Comment:
    comment = session.query(Comment).filter(
        Comment.id == comment_id,
        Comment.post_id == post_id
    ).first()
    if not comment:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Comment not found"
        )
    return comment

@router.post("", response_model=CommentResponse, status_code=status.HTTP_201_CREATED, summary="Create a comment on a post")
def create_comment(
    post_id: str,
    comment: CommentCreate,
    current_user: User = Depends(get_current_user),
    session: Session = Depends(get_session)
):
    """Create a comment on a post"""
    post = get_post_or_404(session, post_id)

    db_comment = Comment(
        post_id=post.id,
        user_id=current_user.id,
        body=comment.body
    )
    session.add(db_comment)
    session.commit()
    session.refresh(db_comment)
    return db_comment

@router.get("", response_model=List[CommentResponse], summary="List all comments on a post")
def list_comments(
    post_id: str,
    session: Session = Depends(get_session)
):
    """List all comments on a post, oldest first"""
    return get_post_or_404(session, post_id).comments

@router.get("/{comment_id}", response_model=CommentResponse, summary="Get a specific comment")
def get_comment(
    post_id: str,
    comment_id: str,
    session: Session = Depends(get_session)
):
    """Get a specific comment"""
    get_post_or_404(session, post_id)
    return get_comment_or_404(session, post_id, comment_id)

@router.put("/{comment_id}", response_model=CommentResponse, summary="Update a comment")
def update_comment(
    post_id: str,
    comment_id: str,
    comment_update: CommentUpdate,
    current_user: User = Depends(get_current_user),
    session: Session = Depends(get_session)
):
    """Update a comment"""
    get_post_or_404(session, post_id)
    comment = get_comment_or_404(session, post_id, comment_id)

    if comment.user_id != current_user.id:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Not enough permissions"
        )

    comment.body = comment_update.body
    session.commit()
    session.refresh(comment)
    return comment

@router.delete("/{comment_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Delete a comment")
def delete_comment(
    post_id: str,
    comment_id: str,
    current_user: User = Depends(get_current_user),
    session: Session = Depends(get_session)
):
    """Delete a comment"""
    get_post_or_404(session, post_id)
    comment = get_comment_or_404(session, post_id, comment_id)

    if comment.user_id != current_user.id:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Not enough permissions"
        )

    session.delete(comment)
    session.commit()
    return None
