
from pydantic import BaseModel, Field

class RegisterIn(BaseModel):
    username: str = Field(min_length=1, max_length=120)
    password: str = Field(min_length=1, max_length=256)

class LoginIn(BaseModel):
    username: str
    password: str

class MessageOut(BaseModel):
    message: str

class LoginOut(MessageOut):
    role: str
