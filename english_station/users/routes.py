import logging

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from ..config import Settings
from ..shared.database import db_dependency
from ..shared.errors import InvalidInput, NotFound, Unauthorized
from ..shared.security import create_access_token, decode_access_token, new_refresh_token, verify_password
from .crud import (
    create_user, delete_user, get_user_by_email, get_user_by_refresh_token,
    get_user_detail, list_users, set_refresh_token, update_user,
)
from .schemas import (
    LoginIn, LoginOut, RefreshIn, RegisterIn, TokenPairOut,
    UserDetailOut, UserOut, UserUpdateIn, VerifyIn, VerifyOut,
)

logger = logging.getLogger("english_station.users")


def build_router(SessionLocal, settings: Settings) -> APIRouter:
    router = APIRouter()
    get_db = db_dependency(SessionLocal)

    def issue_token(user) -> str:
        return create_access_token(
            user_id=user.id,
            email=user.email,
            secret=settings.jwt_secret,
            ttl_minutes=settings.access_token_ttl_minutes,
        )

    @router.get("", response_model=list[UserOut])
    def get_all(db: Session = Depends(get_db)):
        return list_users(db)

    @router.post("/login", response_model=LoginOut)
    def login(payload: LoginIn, db: Session = Depends(get_db)):
        user = get_user_by_email(db, payload.email)
        if not user or not verify_password(payload.password, user.password):
            raise Unauthorized("Invalid credentials")

        token = issue_token(user)
        user = set_refresh_token(db, user, new_refresh_token())
        logger.info("User %s logged in", user.id)

        return LoginOut(
            id=user.id,
            email=user.email,
            username=user.username,
            is_admin=user.is_admin,
            token=token,
            refresh_token=user.refresh_token,
        )

    @router.post("/refresh-token", response_model=TokenPairOut)
    def refresh(payload: RefreshIn, db: Session = Depends(get_db)):
        if not payload.refresh_token:
            raise Unauthorized("Refresh token required")

        user = get_user_by_refresh_token(db, payload.refresh_token)
        if not user:
            raise Unauthorized("Invalid refresh token")

        # rotate: the presented token stops working
        user = set_refresh_token(db, user, new_refresh_token())
        return TokenPairOut(token=issue_token(user), refresh_token=user.refresh_token)

    @router.post("/verify", response_model=VerifyOut)
    def verify(payload: VerifyIn):
        return VerifyOut(**decode_access_token(payload.token, settings.jwt_secret))

    @router.get("/{user_id}", response_model=UserDetailOut)
    def get_one(user_id: str, db: Session = Depends(get_db)):
        user = get_user_detail(db, user_id)
        if not user:
            raise NotFound("User not found")
        return user

    @router.post("", response_model=UserOut, status_code=status.HTTP_201_CREATED)
    def register(payload: RegisterIn, db: Session = Depends(get_db)):
        user = create_user(db, payload.email, payload.username, payload.password)
        logger.info("Registered user %s", user.id)
        return user

    @router.put("/{user_id}", response_model=UserOut)
    def update(user_id: str, payload: UserUpdateIn, db: Session = Depends(get_db)):
        changes = payload.model_dump(exclude_unset=True, exclude_none=True)
        if not changes:
            raise InvalidInput("No fields to update")
        user = update_user(db, user_id, changes)
        if not user:
            raise NotFound("User not found")
        return user

    @router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
    def remove(user_id: str, db: Session = Depends(get_db)):
        if not delete_user(db, user_id):
            raise NotFound("User not found")
        return Response(status_code=status.HTTP_204_NO_CONTENT)

    return router
