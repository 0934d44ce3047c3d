import json
import logging
import uuid
from contextlib import nullcontext, suppress
from os import PathLike
from typing import Dict, List, Union

import anyio

from .domain import AuthError, ConflictError, Note, NotFoundError, StorageError, User
from .utils import make_id, make_note_id

logger = logging.getLogger(__name__)


class IdentityStore:
    """Handles user registration and login.

    Users live in memory only; everything is lost when the process exits.
    Passwords are compared as plain strings.
    """

    def __init__(self):
        self.users: Dict[str, User] = {}

    def register(self, username: str, password: str) -> str:
        if username in self.users:
            raise ConflictError("User already exists")
        uid = make_id("usr")
        self.users[username] = User(uid, username, password)
        logger.info("Registered new user: %s with ID: %s", username, uid)
        return uid

    def authenticate(self, username: str, password: str) -> str:
        user = self.users.get(username)
        if not user or user.password != password:
            raise AuthError("Invalid username or password")
        return user.id


class NoteStore:
    """Stores notes of every user as one JSON array in a single file.

    Each mutation loads the whole array, changes it, and writes the whole
    array back. Without ``serialize_writes`` nothing orders two overlapping
    calls, so the later write drops the earlier one's change. With it, an
    ``anyio.Lock`` runs the read-modify-write sequences one at a time.
    """

    def __init__(self, path: Union[str, PathLike], serialize_writes: bool = False):
        self.path = anyio.Path(path)
        self.serialize_writes = serialize_writes
        self._lock = anyio.Lock() if serialize_writes else None

    def _guard(self):
        return self._lock if self._lock is not None else nullcontext()

    @staticmethod
    def _require_owner(owner_id: str) -> None:
        if not owner_id:
            raise AuthError("Unauthorized")

    async def _load(self, missing_ok: bool = True) -> List[Note]:
        try:
            raw = await self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            if missing_ok:
                return []
            raise NotFoundError("Notes file not found")
        except (OSError, UnicodeDecodeError) as e:
            raise StorageError(f"Failed to read notes file {self.path}: {e}") from e

        try:
            data = json.loads(raw)
        except ValueError as e:
            raise StorageError(f"Notes file {self.path} is not valid JSON: {e}") from e
        if not isinstance(data, list):
            raise StorageError(f"Notes file {self.path} does not hold a JSON array")
        return [Note.from_dict(item) for item in data]

    async def _save(self, notes: List[Note]) -> None:
        payload = json.dumps([n.to_dict() for n in notes], indent=2, ensure_ascii=False)
        # unique per call so overlapping writers never share a temp file
        tmp = self.path.with_name(f".{self.path.name}.{uuid.uuid4().hex}.tmp")
        try:
            await self.path.parent.mkdir(parents=True, exist_ok=True)
            await tmp.write_text(payload, encoding="utf-8")
            await tmp.replace(self.path)
        except OSError as e:
            with suppress(OSError):
                await tmp.unlink(missing_ok=True)
            raise StorageError(f"Failed to write notes file {self.path}: {e}") from e

    async def list_notes(self, owner_id: str) -> List[Note]:
        self._require_owner(owner_id)
        notes = await self._load()
        return [n for n in notes if n.user_id == owner_id]

    async def add_note(self, owner_id: str, content: str) -> Note:
        self._require_owner(owner_id)
        async with self._guard():
            notes = await self._load()
            note = Note(make_note_id(n.id for n in notes), content, owner_id)
            notes.append(note)
            await self._save(notes)
        logger.debug("Saved note %s for %s", note.id, owner_id)
        return note

    async def update_note(self, owner_id: str, note_id: str, content: str) -> Note:
        self._require_owner(owner_id)
        async with self._guard():
            notes = await self._load()
            note = next((n for n in notes if n.id == note_id and n.user_id == owner_id), None)
            if note is None:
                raise NotFoundError("Note not found or you are not the owner")
            note.content = content
            await self._save(notes)
        return note

    async def delete_note(self, owner_id: str, note_id: str) -> None:
        self._require_owner(owner_id)
        async with self._guard():
            notes = await self._load(missing_ok=False)
            kept = [n for n in notes if n.id != note_id or n.user_id != owner_id]
            if len(kept) == len(notes):
                raise NotFoundError("Note not found or you are not the owner")
            await self._save(kept)
        logger.debug("Deleted note %s for %s", note_id, owner_id)
