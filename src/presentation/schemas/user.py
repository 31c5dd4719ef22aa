"""User and login Pydantic schemas."""

from pydantic import BaseModel, Field


class RegisterUserRequestSchema(BaseModel):
    """Schema for POST /v1/users/register request body."""

    email: str = Field(
        ...,
        min_length=3,
        max_length=255,
        examples=["test0@example.com"],
    )
    password: str = Field(
        ...,
        min_length=1,
        max_length=72,
        examples=["password"],
    )


class UserSchema(BaseModel):
    id: int
    email: str


class LoginRequestSchema(BaseModel):
    """Schema for POST /v1/users/login request body."""

    email: str = Field(..., max_length=255)
    password: str = Field(..., max_length=72)


class LoginResponseSchema(BaseModel):
    token: str = Field(
        ...,
        description="Access token to send in the Authorization header",
    )
