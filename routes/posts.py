from typing import Any, Dict, Optional
from uuid import UUID

from fastapi import APIRouter, HTTPException

from dependencies import PostsVM
from models.post import NewPostRequest, Post
from viewmodels.new_post_form import NewPostForm
from viewmodels.posts import PostsViewModel

router = APIRouter()


def render_posts(view_model: PostsViewModel, search: Optional[str] = None) -> Dict[str, Any]:
    """Render the posts list for whatever state the feed is in"""
    state = view_model.posts

    if state.is_loading:
        return {"state": "loading"}

    if state.is_error:
        return {
            "state": "error",
            "title": "Cannot Load Posts",
            "message": str(state.cause),
            "retry": True
        }

    posts = state.peek()
    if not posts:
        return {
            "state": "empty",
            "title": "No Posts",
            "message": "There aren't any posts yet"
        }

    if search:
        posts = [post for post in posts if post.contains(search)]
    return {"state": "loaded", "posts": [post.model_dump(mode="json") for post in posts]}


@router.get("")
async def get_posts(view_model: PostsVM, search: Optional[str] = None) -> Dict[str, Any]:
    """Get the current posts list, optionally filtered by a search string"""
    return render_posts(view_model, search)


@router.post("/fetch")
async def fetch_posts(view_model: PostsVM) -> Dict[str, Any]:
    """Reload the posts and return the list once the fetch has finished"""
    await view_model.fetch_posts()
    return render_posts(view_model)


@router.post("", status_code=201)
async def create_post(view_model: PostsVM, post_data: NewPostRequest) -> Post:
    """Create a new post"""
    form = NewPostForm(view_model.make_create_action())
    try:
        return await form.submit(post_data.to_post())
    except Exception:
        raise HTTPException(status_code=500, detail="Cannot Create Post: Sorry, something went wrong")


@router.delete("/{post_id}")
async def delete_post(view_model: PostsVM, post_id: UUID) -> Dict[str, Any]:
    """Delete a post from the loaded list"""
    posts = view_model.posts.peek() or []
    post = next((p for p in posts if p.id == post_id), None)
    if post is None:
        raise HTTPException(status_code=404, detail="Post not found")

    try:
        await view_model.make_delete_action(post)()
    except Exception as e:
        print(f"[PostRow] Cannot delete post: {e}")
        raise HTTPException(status_code=500, detail="Cannot Delete Post: Sorry, something went wrong")

    return {"message": "Post deleted", "id": str(post_id)}
