import re
from typing import List, Dict, Any, Optional

import firebase_admin
from firebase_admin import firestore as fs
from google.cloud import firestore

from services.errors import InvalidDocumentId, UserNotFound

POSTS = "posts"
USERS = "users"

# Firestore reserves IDs wrapped in double underscores
_RESERVED_ID = re.compile(r"^__.*__$")


def validate_document_id(doc_id: str) -> str:
    """
    Reject IDs Firestore could never have assigned to a document.

    Raises:
        InvalidDocumentId: If the ID is empty, too long, contains a path
            separator or is reserved.
    """
    if (
            not isinstance(doc_id, str)
            or not doc_id
            or len(doc_id.encode("utf-8")) > 1500
            or "/" in doc_id
            or doc_id in (".", "..")
            or _RESERVED_ID.match(doc_id)
    ):
        raise InvalidDocumentId(f"Malformed document ID: {doc_id!r}")
    return doc_id


class FirestoreDB:
    def __init__(self, app: firebase_admin.App):
        self.db = fs.client(app)

    def collection(self, name: str):
        return self.db.collection(name)

    def _post_ref(self, post_id: str):
        return self.collection(POSTS).document(validate_document_id(post_id))

    def get_all_posts(self) -> List[Dict[str, Any]]:
        """Get all posts sorted by creation date descending"""
        posts_ref = self.collection(POSTS).order_by("date", direction=firestore.Query.DESCENDING).stream()
        posts = []
        for doc in posts_ref:
            post_data = doc.to_dict()
            post_data["id"] = doc.id
            posts.append(post_data)
        return posts

    def get_post(self, post_id: str) -> Optional[Dict[str, Any]]:
        """Get a post by ID, None if it does not exist"""
        snapshot = self._post_ref(post_id).get()
        if not snapshot.exists:
            return None
        post_data = snapshot.to_dict()
        post_data["id"] = snapshot.id
        return post_data

    def create_post(self, post_data: Dict[str, Any]) -> str:
        """Insert a new post and return its generated ID"""
        new_post_ref = self.collection(POSTS).document()
        new_post_ref.set(post_data)
        return new_post_ref.id

    def update_post(self, post_id: str, fields: Dict[str, Any]):
        """Overwrite the given top-level fields of a post in place"""
        self._post_ref(post_id).update(fields)

    def delete_post(self, post_id: str):
        self._post_ref(post_id).delete()

    def get_user(self, user_id: str) -> Dict[str, Any]:
        """
        Look up the display fields of a user profile

        Returns:
            A dict with the user's ``name`` and ``avatar``

        Raises:
            UserNotFound: If no profile exists for the ID
        """
        snapshot = self.collection(USERS).document(validate_document_id(user_id)).get()
        if not snapshot.exists:
            raise UserNotFound(f"No profile for user {user_id}")

        user_data = snapshot.to_dict()
        return {
            "name": user_data.get("username"),
            "avatar": user_data.get("profileIcon"),
        }
