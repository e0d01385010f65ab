from typing import List

from fastapi import APIRouter

from dependencies import Posts, CurrentUser
from models.post import Post, Like, Comment, TextRequest, PostMessage

router = APIRouter()


@router.post("")
async def create_post(body: TextRequest, current_user: CurrentUser, posts: Posts) -> Post:
    """Create a post"""
    return posts.create_post(current_user.user_id, body.text)


@router.get("")
async def get_posts(current_user: CurrentUser, posts: Posts) -> List[Post]:
    """Get all posts, newest first"""
    return posts.list_posts()


@router.get("/{post_id}")
async def get_post(post_id: str, current_user: CurrentUser, posts: Posts) -> Post:
    return posts.get_post(post_id)


@router.delete("/{post_id}")
async def delete_post(post_id: str, current_user: CurrentUser, posts: Posts) -> PostMessage:
    """Delete a post owned by the caller"""
    post = posts.delete_post(post_id, current_user.user_id)
    return PostMessage(msg="Post removed", post=post)


@router.put("/{post_id}")
async def update_post(post_id: str, body: TextRequest, current_user: CurrentUser, posts: Posts) -> PostMessage:
    """Replace the text of a post owned by the caller"""
    post = posts.update_post(post_id, current_user.user_id, body.text)
    return PostMessage(msg="Post updated", post=post)


@router.put("/{post_id}/like")
async def like_post(post_id: str, current_user: CurrentUser, posts: Posts) -> List[Like]:
    return posts.like_post(post_id, current_user.user_id)


@router.put("/{post_id}/unlike")
async def unlike_post(post_id: str, current_user: CurrentUser, posts: Posts) -> List[Like]:
    return posts.unlike_post(post_id, current_user.user_id)


@router.post("/{post_id}/comments")
async def add_comment(post_id: str, body: TextRequest, current_user: CurrentUser, posts: Posts) -> List[Comment]:
    """Comment on a post"""
    return posts.add_comment(post_id, current_user.user_id, body.text)


@router.put("/{post_id}/comments/{comment_id}")
async def update_comment(
        post_id: str,
        comment_id: str,
        body: TextRequest,
        current_user: CurrentUser,
        posts: Posts
) -> List[Comment]:
    """Edit a comment written by the caller"""
    return posts.update_comment(post_id, comment_id, current_user.user_id, body.text)


@router.delete("/{post_id}/comments/{comment_id}")
async def delete_comment(
        post_id: str,
        comment_id: str,
        current_user: CurrentUser,
        posts: Posts
) -> List[Comment]:
    """Remove a comment written by the caller"""
    return posts.delete_comment(post_id, comment_id, current_user.user_id)
