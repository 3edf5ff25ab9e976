from datetime import datetime
from typing import Optional
from pydantic import Field
from propdoc.schemas.base import CamelModel

class SignupInput(CamelModel):
    email: str = Field(..., min_length=3, description="Login e-mail, unique")
    password: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1)

class SigninInput(CamelModel):
    email: str
    password: str

class UserOutput(CamelModel):
    id: int
    email: str
    name: str
    created_at: Optional[datetime] = None

class AuthOutput(CamelModel):
    user: UserOutput
    token: str
