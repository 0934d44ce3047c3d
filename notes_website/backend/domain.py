from typing import Any, Dict


class Note:
    """Represents a single note object."""

    def __init__(self, id: str, content: str, user_id: str):
        self.id = id
        self.content = content
        self.user_id = user_id

    def to_dict(self) -> Dict[str, str]:
        """Convert note to the dictionary shape stored on disk and returned by the API."""
        return {
            "id": self.id,
            "content": self.content,
            "userId": self.user_id,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Note":
        try:
            fields = (data["id"], data["content"], data["userId"])
        except (KeyError, TypeError) as e:
            raise StorageError(f"Malformed note record: {data!r}") from e
        if not all(isinstance(value, str) for value in fields):
            raise StorageError(f"Note record fields must be strings: {data!r}")
        return cls(*fields)


class User:
    """A registered user, kept in memory for the lifetime of the process."""

    def __init__(self, id: str, username: str, password: str):
        self.id = id
        self.username = username
        self.password = password


class NotesError(Exception):
    """Base class for errors raised by the notes services."""
    pass


class AuthError(NotesError):
    """Missing owner id or bad credentials."""
    pass


class ConflictError(NotesError):
    """Username already registered."""
    pass


class NotFoundError(NotesError):
    """Note absent, or present but owned by someone else."""
    pass


class StorageError(NotesError):
    """Notes file could not be read, parsed or written."""
    pass
