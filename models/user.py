from typing import Optional

from pydantic import BaseModel


class User(BaseModel):
    user_id: str
    email: Optional[str] = None


class UserSnapshot(BaseModel):
    """Display name and avatar copied onto posts and comments at creation time"""
    name: Optional[str] = None
    avatar: Optional[str] = None
