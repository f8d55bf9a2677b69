from pydantic import BaseModel, EmailStr, ConfigDict
from datetime import datetime

class AuthorCreate(BaseModel):
    email: EmailStr
    username: str
    password: str

class AuthorResponse(BaseModel):
    id: int
    email: str
    username: str
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)

class LoginRequest(BaseModel):
    email: EmailStr
    password: str

class RefreshRequest(BaseModel):
    refresh_token: str

class TokenResponse(BaseModel):
    access_token: str
    refresh_token: str
    token_type: str = "bearer"
