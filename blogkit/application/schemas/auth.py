"""Pydantic DTOs for login and identity checks."""

from pydantic import BaseModel, Field


class LoginRequestSchema(BaseModel):
    username: str = Field(..., min_length=1, max_length=100, examples=["admin"])
    password: str = Field(..., min_length=1, max_length=256)


class UserInfoResponse(BaseModel):
    username: str
    is_admin: bool = Field(alias="isAdmin")

    model_config = {"from_attributes": True, "populate_by_name": True}


class LoginResponseSchema(BaseModel):
    token: str
    user_info: UserInfoResponse = Field(alias="userInfo")

    model_config = {"from_attributes": True, "populate_by_name": True}
