import logging

from fastapi import (
    APIRouter,
    HTTPException,
    status,
    Response,
    Depends,
)
from sqlalchemy import select, or_
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from coursepay.auth import (
    get_password_hash,
    authenticate_user,
    create_access_token,
)
from coursepay.core.settings import ACCESS_TOKEN_EXPIRE_MINUTES
from coursepay.db import User, UserRole, get_async_db_session
from coursepay.dependencies import get_current_user
from coursepay.schemas import SUserRegister, SUserAuth, SUserResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["Auth"])


@router.post("/register/", status_code=status.HTTP_201_CREATED)
async def register_user(
    user_data: SUserRegister,
    db: AsyncSession = Depends(get_async_db_session),
) -> dict:
    try:
        if user_data.role == UserRole.admin:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Admin accounts cannot be self-registered",
            )

        existing = await db.scalar(
            select(User).where(
                or_(
                    User.email == user_data.email,
                    User.username == user_data.username,
                )
            )
        )
        if existing:
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail="User already exists",
            )

        user_dict = user_data.model_dump()
        user_dict["hashed_password"] = get_password_hash(user_dict.pop("password"))
        db.add(User(**user_dict))
        await db.commit()
        return {"success": True, "message": "Account created successfully"}

    except SQLAlchemyError:
        logger.exception("Failed to register %s", user_data.email)
        await db.rollback()
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Database error",
        )


@router.post("/login/")
async def auth_user(
    response: Response,
    user_data: SUserAuth,
    db: AsyncSession = Depends(get_async_db_session),
):
    user = await authenticate_user(
        email=user_data.email, password=user_data.password, db=db
    )
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Incorrect email or password",
        )

    access_token = create_access_token({"sub": str(user.id)})
    response.set_cookie(
        key="users_access_token",
        value=access_token,
        httponly=True,
        samesite="strict",
        max_age=ACCESS_TOKEN_EXPIRE_MINUTES * 60,
    )
    return {"success": True, "access_token": access_token}


@router.get("/me/", response_model=SUserResponse)
async def get_me(user: User = Depends(get_current_user)):
    return user


@router.post("/logout/")
async def logout_user(response: Response):
    response.delete_cookie("users_access_token")
    return {"success": True, "message": "Logged out successfully"}
