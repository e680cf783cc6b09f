"""Shared exceptions for service layer operations."""


class NotFoundError(Exception):
    """
    Raised when a row does not exist or is not owned by the requesting user.

    Ownership failures are reported the same way as missing rows so callers
    cannot discover other users' ids.
    """

    entity = "Resource"

    def __init__(self, entity_id: str) -> None:
        self.entity_id = entity_id
        super().__init__(f"{self.entity} '{entity_id}' not found")


class UserNotFoundError(NotFoundError):
    """Raised when a user is not found."""

    entity = "User"


class BookmarkNotFoundError(NotFoundError):
    """Raised when a bookmark is not found."""

    entity = "Bookmark"


class ListNotFoundError(NotFoundError):
    """Raised when a bookmark list is not found."""

    entity = "List"


class FeedNotFoundError(NotFoundError):
    """Raised when an RSS feed is not found."""

    entity = "Feed"


class AssetNotFoundError(NotFoundError):
    """Raised when an asset is not found."""

    entity = "Asset"


class TagNotFoundError(NotFoundError):
    """Raised when a tag is not found."""

    entity = "Tag"


class AlreadyExistsError(Exception):
    """Raised when a uniqueness constraint would be violated."""

    entity = "Resource"

    def __init__(self, value: str) -> None:
        self.value = value
        super().__init__(f"{self.entity} '{value}' already exists")


class UserAlreadyExistsError(AlreadyExistsError):
    """Raised when registering an email that is already taken."""

    entity = "User with email"


class TagAlreadyExistsError(AlreadyExistsError):
    """Raised when trying to rename a tag to a name that already exists."""

    entity = "Tag"


class ApiKeyAlreadyExistsError(AlreadyExistsError):
    """Raised when an API key name is reused by the same user."""

    entity = "API key"


class AssetAlreadyExistsError(AlreadyExistsError):
    """Raised when an asset id is registered twice."""

    entity = "Asset"


class BookmarkAlreadyInListError(Exception):
    """Raised when adding a bookmark to a list that already contains it."""

    def __init__(self, bookmark_id: str, list_id: str) -> None:
        self.bookmark_id = bookmark_id
        self.list_id = list_id
        super().__init__(f"Bookmark '{bookmark_id}' is already in list '{list_id}'")


class InvalidListParentError(Exception):
    """Raised when a list's parent is itself or is not one of the user's lists."""

    def __init__(self, list_id: str | None, parent_id: str) -> None:
        self.list_id = list_id
        self.parent_id = parent_id
        super().__init__(f"List '{parent_id}' cannot be used as a parent here")
