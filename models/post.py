from datetime import datetime, timezone
from typing import Any, Dict, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from utils.errors import DecodeError


class Post(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: UUID = Field(default_factory=uuid4)
    title: str
    content: str
    authorName: str
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    def contains(self, query: str) -> bool:
        """Case-insensitive match of query against title, content and author"""
        query = query.lower()
        properties = [self.title, self.content, self.authorName]
        return any(query in prop.lower() for prop in properties)

    def to_document(self) -> Dict[str, Any]:
        """Convert the post into the field map stored in Firestore"""
        data = self.model_dump()
        data["id"] = str(self.id)
        return data

    @classmethod
    def from_document(cls, data: Optional[Dict[str, Any]]) -> "Post":
        """
        Build a post from a Firestore document

        Raises:
            DecodeError: If the document is empty or does not match the Post fields
        """
        if data is None:
            raise DecodeError("Post document has no data")
        try:
            return cls.model_validate(data)
        except ValidationError as e:
            raise DecodeError(f"Could not decode post: {e}") from e


class NewPostRequest(BaseModel):
    title: str = ""
    content: str = ""
    authorName: str = ""

    def to_post(self) -> Post:
        return Post(title=self.title, content=self.content, authorName=self.authorName)
