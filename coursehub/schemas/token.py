from pydantic import BaseModel, EmailStr

from coursehub.schemas.user import User

class Token(BaseModel):
    access_token: str
    token_type: str = "bearer"

class TokenPayload(BaseModel):
    id: int
    email: str
    role: str
    name: str
    exp: int | None = None

class LoginRequest(BaseModel):
    email: EmailStr
    password: str

class LoginResponse(BaseModel):
    """Response for the login endpoint."""
    token: Token
    user: User
