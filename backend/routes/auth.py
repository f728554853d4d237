# backend/routes/auth.py
import logging

from fastapi import APIRouter, Depends, HTTPException, Request, status
from sqlalchemy.orm import Session

from database import get_db
from models.users import User
from schemas import user as schemas
from services.users import UserService
from utils.tokenJWT import Identity, TokenService, get_current_identity, get_token_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/auth", tags=["Auth"])


def get_user_service(request: Request, db: Session = Depends(get_db)) -> UserService:
    return UserService(db, bcrypt_rounds=request.app.state.settings.BCRYPT_ROUNDS)


def _auth_response(user: User, tokens: TokenService) -> dict:
    token = tokens.issue(Identity(user_id=user.id, email=user.email, role=user.role))
    return {"token": token, "user": schemas.UserResponse.model_validate(user)}


# Register a new user; the role is always "user" on this path
@router.post("/register", response_model=schemas.AuthResponse, status_code=status.HTTP_201_CREATED)
def register(
    payload: schemas.UserCreate,
    users: UserService = Depends(get_user_service),
    tokens: TokenService = Depends(get_token_service),
):
    user = users.register(payload.email, payload.password, name=payload.name, role=payload.role)
    return _auth_response(user, tokens)


# Authenticate user and issue JWT token
@router.post("/login", response_model=schemas.AuthResponse)
def login(
    payload: schemas.UserLogin,
    users: UserService = Depends(get_user_service),
    tokens: TokenService = Depends(get_token_service),
):
    user = users.authenticate(payload.email, payload.password)
    if user is None:
        logger.warning("Failed login for %s", payload.email)
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid email or password")

    logger.info("User %s logged in", user.id)
    return _auth_response(user, tokens)


# Retrieve current authenticated user details
@router.get("/me", response_model=schemas.UserResponse)
def me(
    identity: Identity = Depends(get_current_identity),
    users: UserService = Depends(get_user_service),
):
    user = users.get_by_id(identity.user_id)
    if user is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    return user
