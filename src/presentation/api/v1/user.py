"""User registration and login endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends

from src.application.dto import RegisterUserRequest
from src.application.services import AuthService, UserService
from src.core.dependencies import get_auth_service, get_user_service
from src.presentation.schemas import (
    ErrorResponseSchema,
    LoginRequestSchema,
    LoginResponseSchema,
    RegisterUserRequestSchema,
    UserSchema,
)

user_router = APIRouter(prefix="/users")


@user_router.post(
    "/register",
    response_model=UserSchema,
    status_code=201,
    summary="Register User",
    responses={
        400: {"model": ErrorResponseSchema, "description": "Invalid email or password"},
        409: {"model": ErrorResponseSchema, "description": "Email already registered"},
    },
)
async def register_user(
    request: RegisterUserRequestSchema,
    user_service: Annotated[UserService, Depends(get_user_service)],
) -> UserSchema:
    response = await user_service.register(
        RegisterUserRequest(email=request.email, password=request.password)
    )

    return UserSchema(id=response.id, email=response.email)


@user_router.post(
    "/login",
    response_model=LoginResponseSchema,
    summary="Log In",
    description="Exchange email and password for an access token.",
    responses={
        401: {"model": ErrorResponseSchema, "description": "Invalid credentials"},
    },
)
async def login(
    request: LoginRequestSchema,
    auth_service: Annotated[AuthService, Depends(get_auth_service)],
) -> LoginResponseSchema:
    response = await auth_service.login(request.email, request.password)

    return LoginResponseSchema(token=response.token)
