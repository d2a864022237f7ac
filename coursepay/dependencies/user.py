from jose import jwt, JWTError
from fastapi import Request, status, HTTPException, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from coursepay.core.settings import get_auth_data
from coursepay.db import User, get_async_db_session


def get_token(request: Request):
    token = request.cookies.get("users_access_token")
    if not token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Token not found"
        )
    return token


async def get_current_user(
    token: str = Depends(get_token),
    db: AsyncSession = Depends(get_async_db_session),
):
    try:
        auth_data = get_auth_data()
        # jose checks "exp" itself and raises ExpiredSignatureError (a JWTError)
        payload = jwt.decode(
            token,
            auth_data["secret_key"],
            algorithms=[auth_data["algorithm"]]
        )
    except JWTError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token"
        )

    user_id = payload.get("sub")
    if not user_id:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User ID not found in token"
        )

    user = await db.get(User, int(user_id))
    if not user or not user.is_active:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User not found"
        )

    return user

