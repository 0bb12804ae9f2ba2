from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from sweetshop.auth.dependencies import get_current_user
from sweetshop.database import get_db
from sweetshop.schemas.user import (
    AuthResponse,
    CurrentUser,
    LoginRequest,
    RegisterRequest,
    UserDetailResponse,
    UserResponse,
)
from sweetshop.services import auth_service

router = APIRouter(tags=['auth'])


@router.post('/register', response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def register(data: RegisterRequest, db: Session = Depends(get_db)):
    token, user = auth_service.register_user(
        db,
        name=data.name,
        email=data.email,
        password=data.password,
        role=data.role,
    )
    return AuthResponse(token=token, user=user)


@router.post('/login', response_model=AuthResponse)
def login(data: LoginRequest, db: Session = Depends(get_db)):
    token, user = auth_service.login_user(db, email=data.email, password=data.password)
    return AuthResponse(token=token, user=user)


@router.get('/me', response_model=UserDetailResponse)
def me(current_user: CurrentUser = Depends(get_current_user)):
    return UserDetailResponse(data=UserResponse.model_validate(current_user.model_dump()))
