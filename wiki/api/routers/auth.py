from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy import select
from sqlalchemy.orm import Session

from ..app_logging import get_logger
from ..db import get_db
from ..models import User
from ..routes import API, route
from ..schemas import LoginRequest, MessageResponse, RegisterRequest
from ..security import hash_password, login_session, logout_session, require_user, verify_password


router = APIRouter(tags=["auth"])
log = get_logger(component="auth")


@route(router, API.auth.register)
def register(body: RegisterRequest, request: Request, db: Session = Depends(get_db)):
    username = body.username.strip()
    email = body.email.strip().lower()
    if db.scalar(select(User).where(User.username == username)):
        raise HTTPException(status_code=400, detail={"code": "USERNAME_TAKEN", "message": "Username already taken", "field": "username"})
    if db.scalar(select(User).where(User.email == email)):
        raise HTTPException(status_code=400, detail={"code": "EMAIL_TAKEN", "message": "Email already registered", "field": "email"})
    u = User(username=username, email=email, hashed_password=hash_password(body.password))
    db.add(u)
    db.commit()
    db.refresh(u)
    login_session(request, u)
    log.info("user.registered", user_id=u.id)
    return u


@route(router, API.auth.login)
def login(body: LoginRequest, request: Request, db: Session = Depends(get_db)):
    u = db.scalar(select(User).where(User.username == body.username.strip()))
    if not u or not verify_password(body.password, u.hashed_password):
        log.info("user.login_failed", username=body.username)
        raise HTTPException(status_code=401, detail={"code": "BAD_CREDENTIALS", "message": "Invalid username or password"})
    login_session(request, u)
    return u


@route(router, API.auth.logout)
def logout(request: Request):
    logout_session(request)
    return MessageResponse(message="Logged out")


@route(router, API.auth.me)
def get_me(user: User = Depends(require_user)):
    return user
