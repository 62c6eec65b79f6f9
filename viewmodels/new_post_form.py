from enum import Enum

from models.post import Post
from viewmodels.posts import CreateAction


class FormState(Enum):
    IDLE = "idle"
    WORKING = "working"
    ERROR = "error"


class NewPostForm:
    """State of the new post form while it hands a post to the create action"""

    def __init__(self, create_action: CreateAction):
        self.create_action = create_action
        self.state = FormState.IDLE

    @property
    def is_error(self) -> bool:
        return self.state is FormState.ERROR

    @is_error.setter
    def is_error(self, value: bool):
        # dismissing the alert is the only way out of the error state
        if value:
            return
        self.state = FormState.IDLE

    async def submit(self, post: Post) -> Post:
        self.state = FormState.WORKING
        try:
            await self.create_action(post)
        except Exception as e:
            print(f"[NewPostForm] Cannot create post: {e}")
            self.state = FormState.ERROR
            raise
        self.state = FormState.IDLE
        return post
