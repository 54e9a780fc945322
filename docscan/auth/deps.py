
from fastapi import Request, Depends
from sqlalchemy.orm import Session
from jose import JWTError
from docscan.credits.ledger import apply_daily_reset, today_utc
from docscan.db.session import SessionLocal
from docscan.errors import AccessDenied, AuthError
from docscan.utils.security import decode_token
from docscan.models.user import User

COOKIE_NAME = "docscan_jwt"


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()

def get_token(request: Request) -> str | None:
    auth = request.headers.get("Authorization")
    if auth and auth.startswith("Bearer "):
        return auth.split(" ", 1)[1]
    return request.cookies.get(COOKIE_NAME)

def get_current_user(request: Request, db: Session = Depends(get_db)) -> User:
    token = get_token(request)
    if not token:
        raise AuthError(headers={"WWW-Authenticate": "Bearer"})

    try:
        payload = decode_token(token)
        user_id = int(payload.get("sub"))
    except (JWTError, TypeError, ValueError):
        raise AuthError("Invalid session")

    user = db.get(User, user_id)
    if user is None:
        raise AuthError("User not found")

    # the daily allotment must be in place before any credit check
    if apply_daily_reset(user, today_utc()):
        db.commit()
        db.refresh(user)

    return user

def require_admin(user: User = Depends(get_current_user)) -> User:
    if not user.is_admin:
        raise AccessDenied()
    return user
