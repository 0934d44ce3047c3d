import logging
from contextlib import asynccontextmanager
from typing import List, Optional

from fastapi import APIRouter, Depends, FastAPI, Header, HTTPException, Request
from fastapi.responses import FileResponse
from fastapi.staticfiles import StaticFiles

from .config import Settings
from .domain import AuthError, ConflictError, NotFoundError
from .models import LoginResponse, MessageResponse, NoteData, NoteOut, UserCreds
from .services import IdentityStore, NoteStore
from .utils import time_now

logger = logging.getLogger(__name__)

router = APIRouter()


# -------------------------------
# Dependencies
# -------------------------------

def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_identity(request: Request) -> IdentityStore:
    return request.app.state.identity


def get_note_store(request: Request) -> NoteStore:
    return request.app.state.notes


def get_owner_id(x_user_id: Optional[str] = Header(default=None)) -> str:
    """Read the caller's user id from the ``x-user-id`` header.

    The value is trusted as-is: it is never checked against the ids issued
    at registration, so any caller can act as any owner.
    """
    if not x_user_id:
        raise HTTPException(status_code=401, detail="Unauthorized")
    return x_user_id


# -------------------------------
# Routes
# -------------------------------

@router.get("/")
async def read_root(settings: Settings = Depends(get_settings)):
    index_path = settings.website_dir / "index.html"
    return FileResponse(index_path) if index_path.is_file() else {"message": "Notes API is running"}


@router.post("/api/register", status_code=201, response_model=MessageResponse)
async def register(creds: UserCreds, identity: IdentityStore = Depends(get_identity)):
    try:
        identity.register(creds.username, creds.password)
    except ConflictError as e:
        raise HTTPException(status_code=409, detail=str(e))
    return MessageResponse(message="User registered successfully!")


@router.post("/api/login", response_model=LoginResponse)
async def login(creds: UserCreds, identity: IdentityStore = Depends(get_identity)):
    try:
        uid = identity.authenticate(creds.username, creds.password)
    except AuthError as e:
        raise HTTPException(status_code=401, detail=str(e))
    return LoginResponse(message="Login successful!", userId=uid)


@router.get("/api/notes", response_model=List[NoteOut])
async def list_notes(owner_id: str = Depends(get_owner_id), store: NoteStore = Depends(get_note_store)):
    try:
        notes = await store.list_notes(owner_id)
    except AuthError as e:
        raise HTTPException(status_code=401, detail=str(e))
    except Exception:
        logger.exception("Error reading notes file")
        raise HTTPException(status_code=500, detail="Failed to read notes")
    return [n.to_dict() for n in notes]


@router.post("/api/notes", status_code=201, response_model=MessageResponse)
async def add_note(note: NoteData, owner_id: str = Depends(get_owner_id),
                   store: NoteStore = Depends(get_note_store)):
    try:
        await store.add_note(owner_id, note.content)
    except AuthError as e:
        raise HTTPException(status_code=401, detail=str(e))
    except Exception:
        logger.exception("Error saving note")
        raise HTTPException(status_code=500, detail="Failed to save note")
    return MessageResponse(message="Note saved successfully!")


@router.put("/api/notes/{note_id}", response_model=MessageResponse)
async def update_note(note_id: str, note: NoteData, owner_id: str = Depends(get_owner_id),
                      store: NoteStore = Depends(get_note_store)):
    try:
        await store.update_note(owner_id, note_id, note.content)
    except AuthError as e:
        raise HTTPException(status_code=401, detail=str(e))
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except Exception:
        logger.exception("Error updating note %s", note_id)
        raise HTTPException(status_code=500, detail="Failed to update note")
    return MessageResponse(message="Note updated successfully!")


@router.delete("/api/notes/{note_id}", response_model=MessageResponse)
async def delete_note(note_id: str, owner_id: str = Depends(get_owner_id),
                      store: NoteStore = Depends(get_note_store)):
    try:
        await store.delete_note(owner_id, note_id)
    except AuthError as e:
        raise HTTPException(status_code=401, detail=str(e))
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except Exception:
        logger.exception("Error deleting note %s", note_id)
        raise HTTPException(status_code=500, detail="Failed to delete note")
    return MessageResponse(message="Note deleted successfully!")


@router.get("/health")
async def health_check(settings: Settings = Depends(get_settings),
                       identity: IdentityStore = Depends(get_identity)):
    return {
        "status": "healthy",
        "timestamp": time_now(),
        "users_count": len(identity.users),
        "notes_file": str(settings.notes_file),
        "notes_file_exists": settings.notes_file.exists(),
    }


# -------------------------------
# Application factory
# -------------------------------

@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = app.state.settings
    logger.info("Notes API starting up, notes file: %s (serialize writes: %s)",
                settings.notes_file, settings.serialize_writes)
    yield
    logger.info("Notes API shutting down")


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Build the app with fresh stores; users vanish when the process exits."""
    settings = settings or Settings.from_env()
    app = FastAPI(title="Notes API", description="Personal notes with per-user ownership",
                  version="1.0.0", lifespan=lifespan)
    app.state.settings = settings
    app.state.identity = IdentityStore()
    app.state.notes = NoteStore(settings.notes_file, serialize_writes=settings.serialize_writes)

    if settings.website_dir.is_dir():
        app.mount("/static", StaticFiles(directory=settings.website_dir), name="static")
    app.include_router(router)
    return app


app = create_app()


def run() -> None:
    import uvicorn

    settings = app.state.settings
    logging.basicConfig(level=settings.log_level,
                        format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    uvicorn.run(app, host=settings.host, port=settings.port)


if __name__ == "__main__":
    run()
