from typing import Optional


class InvalidDocumentId(ValueError):
    """Raised by the store when an ID can never name a Firestore document"""


class UserNotFound(LookupError):
    """Raised when the caller has no entry in the users collection"""


class PostServiceError(Exception):
    status_code = 500
    message = "Server Error"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.message
        super().__init__(self.message)


class PostNotFound(PostServiceError):
    status_code = 404
    message = "Post not found"


class CommentNotFound(PostServiceError):
    status_code = 404
    message = "Comment does not exist"


class NotAuthorized(PostServiceError):
    status_code = 401
    message = "User not authorized"


class AlreadyLiked(PostServiceError):
    status_code = 400
    message = "Post already liked"


class NotYetLiked(PostServiceError):
    status_code = 400
    message = "Post has not yet been liked"
