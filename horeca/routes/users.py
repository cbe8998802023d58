# HORECA/backend/horeca/routes/users.py

import logging
from fastapi import APIRouter, Depends, HTTPException
from fastapi.security import OAuth2PasswordRequestForm
from sqlalchemy.orm import Session
from horeca import auth
from horeca.config import LOGIN_MAX_ATTEMPTS, LOGIN_WINDOW_SECONDS, LOGIN_MAX_TRACKED
from horeca.models import models as db_models
from horeca.schemas.schemas import LoginRequest, Token, UserOut
from horeca.database import get_db
from horeca.services.validation import RateLimiter

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])

# Failed logins per email
login_limiter = RateLimiter(LOGIN_MAX_ATTEMPTS, LOGIN_WINDOW_SECONDS, LOGIN_MAX_TRACKED)

def _authenticate(identifier: str, password: str, db: Session) -> dict:
    email = auth.normalize_email(identifier)
    if login_limiter.is_limited(email):
        logger.warning(f"⚠️ Login throttled for {email}")
        raise HTTPException(status_code=429, detail="Too many failed login attempts, try again later")

    db_user = db.query(db_models.User).filter(db_models.User.email == email).first()
    if not db_user or not auth.verify_password(password, db_user.password_hash):
        login_limiter.hit(email)
        raise HTTPException(status_code=400, detail="Invalid credentials")

    login_limiter.reset(email)
    token = auth.create_access_token({"sub": db_user.id, "role": db_user.role})
    logger.info(f"🔑 Login successful for {email}")
    return {"access_token": token, "token_type": "bearer", "user": db_user}

@router.post("/login", response_model=Token)
def login(credentials: LoginRequest, db: Session = Depends(get_db)):
    """Email (or bare username) + password login"""
    return _authenticate(credentials.email, credentials.password, db)

@router.post("/token", response_model=Token)
def login_form(form_data: OAuth2PasswordRequestForm = Depends(), db: Session = Depends(get_db)):
    """OAuth2 form login, used by the Swagger UI"""
    return _authenticate(form_data.username, form_data.password, db)

@router.get("/me", response_model=UserOut)
def read_me(current_user: db_models.User = Depends(auth.get_current_user)):
    return current_user
