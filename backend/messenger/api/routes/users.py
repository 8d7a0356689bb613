"""
User routes: login/logout, directory management and username search.
"""
import logging
from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from fastapi.responses import PlainTextResponse
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from typing import List, Optional
from messenger.core.config import settings
from messenger.core.security import TokenData
from messenger.core.token_registry import TokenRegistry
from messenger.db.session import get_db
from messenger.repositories.user_repository import UserRepository
from messenger.schemas.page import Page
from messenger.schemas.user import UserCreate, UserLogin, UserResponse
from messenger.services import user_service
from messenger.api.dependencies import (
    get_current_admin, get_current_token, get_token, get_token_registry
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/user", tags=["user"])


def _server_error() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail="Internal server error"
    )


@router.post("/login", response_class=PlainTextResponse)
async def login(
    credentials: UserLogin,
    db: Session = Depends(get_db),
    registry: TokenRegistry = Depends(get_token_registry)
):
    """Login and get the token as plain text."""
    token = user_service.login(db, registry, credentials.username, credentials.password)
    if token is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Incorrect username or password"
        )
    return token


@router.post("/logout")
async def logout(
    token: Optional[str] = Depends(get_token),
    registry: TokenRegistry = Depends(get_token_registry)
):
    """Logout by removing the token from the active set. Always succeeds."""
    if token:
        registry.remove(token)
        logger.info("Token logged out")
    return Response(status_code=status.HTTP_200_OK)


@router.get("/search", response_model=List[str])
async def search_usernames(
    username: str = Query(...),
    current: TokenData = Depends(get_current_token),
    db: Session = Depends(get_db)
):
    """Usernames containing the given fragment. Available to every logged-in user."""
    return UserRepository(db).search_usernames(username)


@router.get("", response_model=Page[UserResponse])
async def list_users(
    page: int = Query(0, ge=0),
    size: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1),
    field: Optional[str] = None,
    value: Optional[str] = None,
    current: TokenData = Depends(get_current_admin),
    db: Session = Depends(get_db)
):
    """List users, optionally filtered by a single field/value pair."""
    repo = UserRepository(db)
    try:
        if field is not None and value is not None:
            users, total = repo.find_page_by_field(field, value, page, size)
        else:
            users, total = repo.find_page(page, size)
    except SQLAlchemyError as e:
        logger.error(f"Failed to list users: {e}", exc_info=True)
        raise _server_error()

    if not users:
        return Response(status_code=status.HTTP_204_NO_CONTENT)

    content = [UserResponse.model_validate(u) for u in users]
    return Page[UserResponse].build(content, page, size, total)


@router.post("", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def create_user(
    user_data: UserCreate,
    current: TokenData = Depends(get_current_admin),
    db: Session = Depends(get_db)
):
    """Create a new user."""
    try:
        return user_service.create_user(db, user_data)
    except SQLAlchemyError as e:
        logger.error(f"Failed to create user '{user_data.username}': {e}", exc_info=True)
        raise _server_error()


@router.put("/{username}", response_model=UserResponse)
async def update_user(
    username: str,
    field: str = Query(...),
    value: str = Query(...),
    current: TokenData = Depends(get_current_admin),
    db: Session = Depends(get_db)
):
    """Update one attribute of a user."""
    user = UserRepository(db).find_by_username(username)
    if not user:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="User not found"
        )

    try:
        return user_service.update_user_field(db, user, field, value)
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e)
        )
    except SQLAlchemyError as e:
        logger.error(f"Failed to update user '{username}': {e}", exc_info=True)
        raise _server_error()


@router.delete("/{username}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_user(
    username: str,
    current: TokenData = Depends(get_current_admin),
    db: Session = Depends(get_db),
    registry: TokenRegistry = Depends(get_token_registry)
):
    """Delete a user, redirecting their messages to the removed-user sentinel."""
    if not UserRepository(db).exists_by_username(username):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="User not found"
        )

    try:
        user_service.delete_user(db, registry, username)
    except SQLAlchemyError as e:
        logger.error(f"Failed to delete user '{username}': {e}", exc_info=True)
        raise _server_error()

    return Response(status_code=status.HTTP_204_NO_CONTENT)
