from typing import Annotated

from fastapi import Request, Depends

from viewmodels.posts import PostsViewModel


async def get_posts_view_model(request: Request) -> PostsViewModel:
    """Get the posts view model from app state"""
    return request.app.state.posts_view_model


# Type annotations for dependency injection
PostsVM = Annotated[PostsViewModel, Depends(get_posts_view_model)]
