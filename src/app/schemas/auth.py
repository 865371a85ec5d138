from __future__ import annotations

from typing import Literal, Optional

from pydantic import BaseModel, Field

from src.app.deps import CurrentUser


class LoginRequest(BaseModel):
    email: str = Field(..., min_length=3, max_length=320)
    password: str = Field(..., min_length=1)


class LoginResponse(BaseModel):
    access_token: str
    token_type: Literal["bearer"] = "bearer"
    expires_in: Optional[int] = None
    user: CurrentUser
