
from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session
from docscan.auth.deps import get_db, COOKIE_NAME
from docscan.config import settings
from docscan.schemas.auth import RegisterIn, LoginIn, LoginOut, MessageOut
from docscan.auth.service import register_user, login_user

router = APIRouter(prefix="/auth", tags=["auth"])

def set_auth_cookie(response: Response, token: str):
    response.set_cookie(
        key=COOKIE_NAME,
        value=token,
        httponly=True,
        samesite="Lax",
        secure=False,
        path="/",
        max_age=settings.access_token_expire_minutes * 60,
    )

@router.post("/register", response_model=MessageOut)
def register(body: RegisterIn, db: Session = Depends(get_db)):
    register_user(db, body.username, body.password)
    return MessageOut(message="Registration Successful")

@router.post("/login", response_model=LoginOut)
def login(body: LoginIn, response: Response, db: Session = Depends(get_db)):
    user, token = login_user(db, body.username, body.password)
    set_auth_cookie(response, token)
    return LoginOut(message="Login Successful", role=user.role)

@router.post("/logout", response_model=MessageOut)
def logout(response: Response):
    response.delete_cookie(COOKIE_NAME, path="/")
    return MessageOut(message="Logged out")
