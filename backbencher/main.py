import logging
import os
import pathlib
from typing import Callable, Optional

from fastapi import FastAPI, Depends, HTTPException, Query, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse, JSONResponse
from fastapi.staticfiles import StaticFiles
from pydantic import BaseModel, Field
from sqlalchemy.orm import Session
from starlette.exceptions import HTTPException as StarletteHTTPException

from backbencher import crud
from backbencher.database import Base, engine, get_db
from backbencher.gateway import ModelGateway, get_gateway
from backbencher.prompts import (
    Complexity,
    Mood,
    build_chat_prompt,
    build_excuse_prompt,
    build_notes_prompt,
)
from backbencher.schemas import (
    ChatMessageOut,
    ChatReply,
    ExcuseOut,
    NoteOut,
    RoomMessageOut,
    RoomOut,
    UserOut,
)

logging.basicConfig(level=os.getenv("LOG_LEVEL", "INFO"))
logger = logging.getLogger(__name__)

app = FastAPI(title="Backbencher")
Base.metadata.create_all(bind=engine)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Serve the frontend (HTML, JS, CSS)
frontend_path = pathlib.Path(__file__).parent.parent / "frontend"
app.mount("/static", StaticFiles(directory=frontend_path), name="static")


@app.get("/")
def serve_index():
    return FileResponse(frontend_path / "index.html")


@app.get("/api/health")
def health_check():
    return {"status": "ok"}


# Errors are always {"message": ..., "errors"?: [...]}
@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(
        status_code=400,
        content={"message": "Invalid input data", "errors": jsonable_encoder(exc.errors())},
    )


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(status_code=exc.status_code, content={"message": exc.detail})


class ExcuseRequest(BaseModel):
    situation: str = Field(min_length=1, max_length=200)
    mood: Mood


class NotesRequest(BaseModel):
    topic: str = Field(min_length=1, max_length=150)
    subject: Optional[str] = None
    complexity: Complexity


class ChatRequest(BaseModel):
    message: str = Field(min_length=1, max_length=500)


class RoomRequest(BaseModel):
    roomName: str = Field(min_length=1, max_length=50)


class RoomMessageRequest(BaseModel):
    message: str = Field(min_length=1, max_length=500)
    username: str = Field(min_length=1, max_length=20)


class ProfileRequest(BaseModel):
    username: str = Field(min_length=1, max_length=50)


# Helper: the caller's identity is its IP address
def client_ip(request: Request) -> str:
    return request.client.host if request.client else "unknown"


# Helper: bump a usage counter without ever failing the request
def track_usage(db: Session, ip_address: str, increment: Callable[[Session, str], None]):
    try:
        increment(db, ip_address)
    except Exception:
        logger.exception("Error tracking usage for %s", ip_address)
        db.rollback()


# ==========================
# Generation
# ==========================
@app.post("/api/excuses/generate", response_model=ExcuseOut)
def generate_excuse(
    body: ExcuseRequest,
    request: Request,
    db: Session = Depends(get_db),
    gateway: ModelGateway = Depends(get_gateway),
):
    try:
        generated_text = gateway.complete(build_excuse_prompt(body.situation, body.mood))
        excuse = crud.create_excuse(
            db,
            situation=body.situation,
            mood=body.mood.value,
            generated_text=generated_text,
        )
        result = ExcuseOut.model_validate(excuse)
    except Exception as e:
        logger.exception("Error generating excuse")
        raise HTTPException(status_code=500, detail=str(e) or "Failed to generate excuse")

    track_usage(db, client_ip(request), crud.increment_user_excuses)
    return result


@app.post("/api/notes/generate", response_model=NoteOut)
def generate_notes(
    body: NotesRequest,
    request: Request,
    db: Session = Depends(get_db),
    gateway: ModelGateway = Depends(get_gateway),
):
    try:
        prompt = build_notes_prompt(body.topic, body.complexity, body.subject)
        generated_text = gateway.complete(prompt)
        note = crud.create_note(
            db,
            topic=body.topic,
            subject=body.subject,
            complexity=body.complexity.value,
            generated_text=generated_text,
        )
        result = NoteOut.model_validate(note)
    except Exception as e:
        logger.exception("Error generating notes")
        raise HTTPException(status_code=500, detail=str(e) or "Failed to generate notes")

    track_usage(db, client_ip(request), crud.increment_user_notes)
    return result


@app.post("/api/chat", response_model=ChatReply)
def chat(
    body: ChatRequest,
    db: Session = Depends(get_db),
    gateway: ModelGateway = Depends(get_gateway),
):
    try:
        reply = gateway.complete(build_chat_prompt(body.message))
        crud.create_chat_message(db, message=body.message, response=reply)
    except Exception as e:
        logger.exception("Error generating chat response")
        raise HTTPException(status_code=500, detail=str(e) or "Failed to generate response")

    return {"response": reply}


# ==========================
# Recent lists
# ==========================
@app.get("/api/excuses/recent", response_model=list[ExcuseOut])
def recent_excuses(limit: int = Query(5, ge=0), db: Session = Depends(get_db)):
    try:
        return crud.get_recent_excuses(db, limit)
    except Exception:
        logger.exception("Error fetching recent excuses")
        raise HTTPException(status_code=500, detail="Failed to fetch recent excuses")


@app.get("/api/notes/recent", response_model=list[NoteOut])
def recent_notes(limit: int = Query(5, ge=0), db: Session = Depends(get_db)):
    try:
        return crud.get_recent_notes(db, limit)
    except Exception:
        logger.exception("Error fetching recent notes")
        raise HTTPException(status_code=500, detail="Failed to fetch recent notes")


@app.get("/api/chat/recent", response_model=list[ChatMessageOut])
def recent_chat(limit: int = Query(10, ge=0), db: Session = Depends(get_db)):
    try:
        return crud.get_recent_chat_messages(db, limit)
    except Exception:
        logger.exception("Error fetching recent chat messages")
        raise HTTPException(status_code=500, detail="Failed to fetch recent chat messages")


# ==========================
# Community chat rooms
# ==========================
@app.get("/api/rooms", response_model=list[RoomOut])
def list_rooms(db: Session = Depends(get_db)):
    try:
        return crud.get_rooms(db)
    except Exception:
        logger.exception("Error fetching rooms")
        raise HTTPException(status_code=500, detail="Failed to fetch rooms")


@app.post("/api/rooms", response_model=RoomOut)
def create_room(body: RoomRequest, db: Session = Depends(get_db)):
    try:
        return crud.create_room(db, body.roomName)
    except Exception:
        logger.exception("Error creating room")
        raise HTTPException(status_code=500, detail="Failed to create room")


@app.get("/api/rooms/{room_id}/messages", response_model=list[RoomMessageOut])
def list_room_messages(room_id: int, db: Session = Depends(get_db)):
    try:
        return crud.get_room_messages(db, room_id)
    except Exception:
        logger.exception("Error fetching room messages")
        raise HTTPException(status_code=500, detail="Failed to fetch room messages")


# No room existence check: posting to an unknown id stores an orphaned message
@app.post("/api/rooms/{room_id}/messages", response_model=RoomMessageOut)
def post_room_message(room_id: int, body: RoomMessageRequest, db: Session = Depends(get_db)):
    try:
        return crud.create_room_message(db, room_id, body.username, body.message)
    except Exception:
        logger.exception("Error creating room message")
        raise HTTPException(status_code=500, detail="Failed to create room message")


# ==========================
# Users & leaderboard
# ==========================
@app.post("/api/users/profile", response_model=UserOut)
def save_profile(body: ProfileRequest, request: Request, db: Session = Depends(get_db)):
    try:
        return crud.create_or_update_user(db, client_ip(request), body.username)
    except Exception:
        logger.exception("Error creating/updating user profile")
        raise HTTPException(status_code=500, detail="Failed to create/update user profile")


@app.get("/api/leaderboard/{kind}", response_model=list[UserOut])
def leaderboard(kind: str, db: Session = Depends(get_db)):
    if kind not in ("excuses", "notes"):
        raise HTTPException(status_code=400, detail="Invalid leaderboard type")

    try:
        return crud.get_leaderboard(db, kind)
    except Exception:
        logger.exception("Error fetching leaderboard")
        raise HTTPException(status_code=500, detail="Failed to fetch leaderboard")
