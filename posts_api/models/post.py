import uuid
from datetime import datetime

from pydantic import BaseModel


class Post(BaseModel):
    id: uuid.UUID
    title: str
    content: str
    author: str
    published: bool = False
    created_at: datetime
    updated_at: datetime | None = None
