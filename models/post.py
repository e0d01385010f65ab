import html
import uuid
from datetime import datetime, timezone
from typing import List, Optional

import bleach
from pydantic import BaseModel, Field, field_validator
from pydantic_core import PydanticCustomError


def new_id() -> str:
    return uuid.uuid4().hex


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Like(BaseModel):
    id: str = Field(default_factory=new_id)
    user: str


class Comment(BaseModel):
    id: str = Field(default_factory=new_id)
    user: str
    text: str
    name: Optional[str] = None
    avatar: Optional[str] = None
    date: datetime = Field(default_factory=utcnow)


class Post(BaseModel):
    id: Optional[str] = None
    user: str
    text: str
    name: Optional[str] = None
    avatar: Optional[str] = None
    likes: List[Like] = []
    comments: List[Comment] = []
    date: datetime = Field(default_factory=utcnow)

    def to_document(self) -> dict:
        """Firestore representation, the document ID lives outside the body"""
        return self.model_dump(exclude={"id"})


class TextRequest(BaseModel):
    """Body of every endpoint that takes post or comment text"""
    text: str

    @field_validator("text")
    @classmethod
    def sanitize_text(cls, value: str) -> str:
        # strip every tag, then undo the entity escaping bleach applies to plain text
        cleaned = html.unescape(bleach.clean(value, tags=set(), strip=True))
        if not cleaned:
            raise PydanticCustomError("text_required", "Text is required")
        return cleaned


class PostMessage(BaseModel):
    msg: str
    post: Post
