from pydantic import BaseModel


class UserCreds(BaseModel):
    username: str
    password: str


class NoteData(BaseModel):
    content: str


class NoteOut(BaseModel):
    id: str
    content: str
    userId: str


class MessageResponse(BaseModel):
    message: str


class LoginResponse(BaseModel):
    message: str
    userId: str
