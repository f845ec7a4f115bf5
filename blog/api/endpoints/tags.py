from typing import List
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from blog.db.database import get_session
from blog.models.tag import Tag
from blog.models.user import User
from blog.schemas.tag import TagCreate, TagUpdate, TagResponse
from blog.schemas.post import PostResponse
from blog.core.security import get_current_user

router = APIRouter()

def get_tag_or_404(session: Session, tag_id: str) -> Tag:
    tag = session.query(Tag).filter(Tag.id == tag_id).first()
    if not tag:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Tag not found"
        )
    return tag

def check_creator(tag: Tag, user: User):
    if tag.user_id != user.id:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Not enough permissions"
        )

@router.post("", response_model=TagResponse, status_code=status.HTTP_201_CREATED, summary="Create a new tag")
def create_tag(
    tag: TagCreate,
    current_user: User = Depends(get_current_user),
    session: Session = Depends(get_session)
):
    """Create a new tag"""
    # Check if tag name already exists
    existing_tag = session.query(Tag).filter(Tag.name == tag.name).first()
    if existing_tag:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Tag name already exists"
        )

    db_tag = Tag(
        name=tag.name,
        description=tag.description,
        user_id=current_user.id
    )
    session.add(db_tag)
    session.commit()
    session.refresh(db_tag)
    return db_tag

@router.get("", response_model=List[TagResponse], summary="List all tags")
def list_tags(
    session: Session = Depends(get_session)
):
    """List all tags"""
    return session.query(Tag).order_by(Tag.name).all()

@router.get("/{tag_id}", response_model=TagResponse, summary="Get a specific tag")
def get_tag(
    tag_id: str,
    session: Session = Depends(get_session)
):
    """Get a specific tag"""
    return get_tag_or_404(session, tag_id)

@router.get("/{tag_id}/posts", response_model=List[PostResponse], summary="List posts carrying a tag")
def list_tag_posts(
    tag_id: str,
    session: Session = Depends(get_session)
):
    """List posts carrying a tag"""
    return get_tag_or_404(session, tag_id).posts

@router.put("/{tag_id}", response_model=TagResponse, summary="Update a tag")
def update_tag(
    tag_id: str,
    tag_update: TagUpdate,
    current_user: User = Depends(get_current_user),
    session: Session = Depends(get_session)
):
    """Update a tag"""
    tag = get_tag_or_404(session, tag_id)
    check_creator(tag, current_user)

    # Check if new name already exists
    if tag_update.name and tag_update.name != tag.name:
        existing_tag = session.query(Tag).filter(Tag.name == tag_update.name).first()
        if existing_tag:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Tag name already exists"
            )
        tag.name = tag_update.name

    if tag_update.description is not None:
        tag.description = tag_update.description

    session.commit()
    session.refresh(tag)
    return tag

@router.delete("/{tag_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Delete a tag")
def delete_tag(
    tag_id: str,
    current_user: User = Depends(get_current_user),
    session: Session = Depends(get_session)
):
    """Delete a tag; posts carrying it lose the link"""
    tag = get_tag_or_404(session, tag_id)
    check_creator(tag, current_user)

    session.delete(tag)
    session.commit()
    return None
