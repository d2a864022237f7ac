from .auth import (
    get_password_hash,
    verify_password,
    create_access_token,
    authenticate_user,
)
