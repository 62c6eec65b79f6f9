import asyncio
from typing import Awaitable, Callable, List, Optional, Set

from models.post import Post
from services.posts_repository import PostsRepository, PostsRepositoryProtocol
from utils.loadable import Loadable

CreateAction = Callable[[Post], Awaitable[None]]
DeleteAction = Callable[[], Awaitable[None]]


class PostsViewModel:
    """
    Holds the posts feed state and runs the repository calls behind it.

    Every mutation of `posts` happens on the event loop once the awaited
    repository call has finished, so no locking is needed.
    """

    def __init__(self, posts_repository: Optional[PostsRepositoryProtocol] = None):
        self.posts: Loadable[List[Post]] = Loadable.loading()
        self.posts_repository = posts_repository if posts_repository is not None else PostsRepository()
        self._fetch_generation = 0
        self._fetch_tasks: Set[asyncio.Task] = set()

    def make_create_action(self) -> CreateAction:
        async def create_action(post: Post) -> None:
            await self.posts_repository.create(post)
            posts = self.posts.peek()
            if posts is not None:
                self.posts.assign_if_present([post, *posts])

        return create_action

    def make_delete_action(self, post: Post) -> DeleteAction:
        async def delete_action() -> None:
            await self.posts_repository.delete(post)
            posts = self.posts.peek()
            if posts is not None:
                self.posts.assign_if_present([p for p in posts if p.id != post.id])

        return delete_action

    def fetch_posts(self) -> asyncio.Task:
        """
        Start loading the posts on the running loop.

        Calls are not deduplicated, but only the most recently started fetch
        may write the result; an older one finishing later is dropped.

        Returns:
            The task running the fetch, for callers that want to wait on it
        """
        self._fetch_generation += 1
        task = asyncio.get_running_loop().create_task(self._fetch_posts(self._fetch_generation))
        self._fetch_tasks.add(task)
        task.add_done_callback(self._fetch_tasks.discard)
        return task

    async def _fetch_posts(self, generation: int) -> None:
        try:
            result = Loadable.loaded(await self.posts_repository.fetch_posts())
        except Exception as e:
            print(f"[PostsViewModel]: Could not fetch posts: {e}")
            result = Loadable.error(e)

        if generation != self._fetch_generation:
            print(f"[PostsViewModel]: Dropping stale fetch {generation}, latest is {self._fetch_generation}")
            return
        self.posts = result
