import logging
from typing import List

from models.post import Post, Like, Comment
from models.user import UserSnapshot
from services.errors import (
    InvalidDocumentId,
    PostNotFound,
    CommentNotFound,
    NotAuthorized,
    AlreadyLiked,
    NotYetLiked,
)
from services.firestore import FirestoreDB

logger = logging.getLogger(__name__)


class PostService:
    def __init__(self, db: FirestoreDB):
        self.db = db

    def _load(self, post_id: str) -> Post:
        try:
            post_data = self.db.get_post(post_id)
        except InvalidDocumentId:
            raise PostNotFound()
        if post_data is None:
            raise PostNotFound()
        return Post.model_validate(post_data)

    def _author_snapshot(self, user_id: str) -> UserSnapshot:
        return UserSnapshot.model_validate(self.db.get_user(user_id))

    @staticmethod
    def _require_owner(owner_id: str, user_id: str):
        if owner_id != user_id:
            logger.warning("User %s is not allowed to modify content owned by %s", user_id, owner_id)
            raise NotAuthorized()

    @staticmethod
    def _comment_index(post: Post, comment_id: str) -> int:
        for index, comment in enumerate(post.comments):
            if comment.id == comment_id:
                return index
        raise CommentNotFound()

    @staticmethod
    def _like_index(post: Post, user_id: str) -> int:
        """Position of the caller's like, -1 if they have not liked the post"""
        for index, like in enumerate(post.likes):
            if like.user == user_id:
                return index
        return -1

    def create_post(self, user_id: str, text: str) -> Post:
        """Create a post stamped with the author's current name and avatar"""
        author = self._author_snapshot(user_id)
        post = Post(user=user_id, text=text, name=author.name, avatar=author.avatar)
        post.id = self.db.create_post(post.to_document())
        logger.info("Post %s created by %s", post.id, user_id)
        return post

    def list_posts(self) -> List[Post]:
        """All posts, newest first"""
        return [Post.model_validate(post_data) for post_data in self.db.get_all_posts()]

    def get_post(self, post_id: str) -> Post:
        return self._load(post_id)

    def delete_post(self, post_id: str, user_id: str) -> Post:
        post = self._load(post_id)
        self._require_owner(post.user, user_id)

        self.db.delete_post(post_id)
        logger.info("Post %s removed by %s", post_id, user_id)
        return post

    def update_post(self, post_id: str, user_id: str, text: str) -> Post:
        post = self._load(post_id)
        self._require_owner(post.user, user_id)

        post.text = text
        self.db.update_post(post_id, {"text": text})
        logger.info("Post %s updated by %s", post_id, user_id)
        return post

    def like_post(self, post_id: str, user_id: str) -> List[Like]:
        post = self._load(post_id)
        if self._like_index(post, user_id) != -1:
            raise AlreadyLiked()

        post.likes.insert(0, Like(user=user_id))
        self._save_likes(post)
        logger.info("Post %s liked by %s", post_id, user_id)
        return post.likes

    def unlike_post(self, post_id: str, user_id: str) -> List[Like]:
        post = self._load(post_id)
        index = self._like_index(post, user_id)
        if index == -1:
            raise NotYetLiked()

        del post.likes[index]
        self._save_likes(post)
        logger.info("Post %s unliked by %s", post_id, user_id)
        return post.likes

    def add_comment(self, post_id: str, user_id: str, text: str) -> List[Comment]:
        post = self._load(post_id)
        author = self._author_snapshot(user_id)

        comment = Comment(user=user_id, text=text, name=author.name, avatar=author.avatar)
        post.comments.insert(0, comment)
        self._save_comments(post)
        logger.info("Comment %s added to post %s by %s", comment.id, post_id, user_id)
        return post.comments

    def update_comment(self, post_id: str, comment_id: str, user_id: str, text: str) -> List[Comment]:
        """
        Replace the text of one comment.

        The ownership check runs before anything is written, so a caller who
        does not own the comment leaves the post exactly as it was.
        """
        post = self._load(post_id)
        index = self._comment_index(post, comment_id)
        self._require_owner(post.comments[index].user, user_id)

        post.comments[index] = post.comments[index].model_copy(update={"text": text})
        self._save_comments(post)
        logger.info("Comment %s on post %s updated by %s", comment_id, post_id, user_id)
        return post.comments

    def delete_comment(self, post_id: str, comment_id: str, user_id: str) -> List[Comment]:
        post = self._load(post_id)
        index = self._comment_index(post, comment_id)
        self._require_owner(post.comments[index].user, user_id)

        del post.comments[index]
        self._save_comments(post)
        logger.info("Comment %s removed from post %s by %s", comment_id, post_id, user_id)
        return post.comments

    def _save_likes(self, post: Post):
        self.db.update_post(post.id, {"likes": [like.model_dump() for like in post.likes]})

    def _save_comments(self, post: Post):
        self.db.update_post(post.id, {"comments": [comment.model_dump() for comment in post.comments]})
