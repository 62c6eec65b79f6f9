from abc import ABC, abstractmethod
from typing import List, Optional

import firebase_admin
from firebase_admin import firestore_async
from google.api_core.exceptions import GoogleAPIError
from google.auth.exceptions import GoogleAuthError
from google.cloud import firestore

from models.post import Post
from utils.errors import StoreError


class PostsRepositoryProtocol(ABC):
    """Interface shared by the Firestore repository and the preview stub"""

    @abstractmethod
    async def fetch_posts(self) -> List[Post]:
        pass

    @abstractmethod
    async def create(self, post: Post) -> None:
        pass

    @abstractmethod
    async def delete(self, post: Post) -> None:
        pass


class PostsRepositoryStub(PostsRepositoryProtocol):
    """For previews and tests only, never touches the store"""

    async def fetch_posts(self) -> List[Post]:
        return []

    async def create(self, post: Post) -> None:
        pass

    async def delete(self, post: Post) -> None:
        pass


class PostsRepository(PostsRepositoryProtocol):
    def __init__(self, app: Optional[firebase_admin.App] = None, db=None):
        self.db = db if db is not None else firestore_async.client(app)
        self.posts_reference = self.db.collection("posts")

    async def fetch_posts(self) -> List[Post]:
        """
        Get all posts sorted by timestamp descending

        Returns:
            The decoded posts, newest first

        Raises:
            StoreError: If the query fails
            DecodeError: If any stored document is not a valid post
        """
        query = self.posts_reference.order_by("timestamp", direction=firestore.Query.DESCENDING)
        try:
            snapshots = [doc async for doc in query.stream()]
        except (GoogleAPIError, GoogleAuthError) as e:
            raise StoreError(f"Could not fetch posts: {e}") from e

        return [Post.from_document(doc.to_dict()) for doc in snapshots]

    async def create(self, post: Post) -> None:
        """Store a post under its id"""
        document = self.posts_reference.document(str(post.id))
        try:
            await document.set(post.to_document())
        except (GoogleAPIError, GoogleAuthError) as e:
            raise StoreError(f"Could not create post {post.id}: {e}") from e

    async def delete(self, post: Post) -> None:
        """Delete a post, failing if its document does not exist"""
        document = self.posts_reference.document(str(post.id))
        try:
            await document.delete(option=self.db.write_option(exists=True))
        except (GoogleAPIError, GoogleAuthError) as e:
            raise StoreError(f"Could not delete post {post.id}: {e}") from e
