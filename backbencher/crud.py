from typing import Optional

from sqlalchemy.orm import Session

from backbencher.models import (
    ChatMessage,
    Excuse,
    Note,
    Room,
    RoomMessage,
    User,
    utcnow,
)

ROOM_HISTORY_LIMIT = 50
LEADERBOARD_SIZE = 20


def _save(db: Session, obj):
    db.add(obj)
    db.commit()
    db.refresh(obj)
    return obj


# Excuses

def create_excuse(db: Session, *, situation: str, mood: str, generated_text: str) -> Excuse:
    return _save(db, Excuse(situation=situation, mood=mood, generated_text=generated_text))


def get_recent_excuses(db: Session, limit: int = 5) -> list[Excuse]:
    return (
        db.query(Excuse)
        .order_by(Excuse.created_at.desc(), Excuse.id.desc())
        .limit(limit)
        .all()
    )


# Notes

def create_note(
    db: Session,
    *,
    topic: str,
    complexity: str,
    generated_text: str,
    subject: Optional[str] = None,
) -> Note:
    note = Note(
        topic=topic,
        subject=subject or None,
        complexity=complexity,
        generated_text=generated_text,
    )
    return _save(db, note)


def get_recent_notes(db: Session, limit: int = 5) -> list[Note]:
    return (
        db.query(Note)
        .order_by(Note.created_at.desc(), Note.id.desc())
        .limit(limit)
        .all()
    )


# Single-bot chat

def create_chat_message(db: Session, *, message: str, response: str) -> ChatMessage:
    return _save(db, ChatMessage(message=message, response=response))


def get_recent_chat_messages(db: Session, limit: int = 10) -> list[ChatMessage]:
    return (
        db.query(ChatMessage)
        .order_by(ChatMessage.created_at.desc(), ChatMessage.id.desc())
        .limit(limit)
        .all()
    )


# Users

def get_user_by_ip(db: Session, ip_address: str) -> Optional[User]:
    return db.query(User).filter(User.ip_address == ip_address).first()


def create_or_update_user(db: Session, ip_address: str, username: str) -> User:
    user = get_user_by_ip(db, ip_address)
    if user:
        user.username = username
        user.last_active = utcnow()
        db.commit()
        db.refresh(user)
        return user

    return _save(
        db,
        User(
            username=username,
            ip_address=ip_address,
            excuses_generated=0,
            notes_created=0,
        ),
    )


def _increment(db: Session, ip_address: str, column) -> None:
    # Single UPDATE statement; no row for this IP means nothing changes
    db.query(User).filter(User.ip_address == ip_address).update(
        {column: column + 1, User.last_active: utcnow()},
        synchronize_session=False,
    )
    db.commit()


def increment_user_excuses(db: Session, ip_address: str) -> None:
    _increment(db, ip_address, User.excuses_generated)


def increment_user_notes(db: Session, ip_address: str) -> None:
    _increment(db, ip_address, User.notes_created)


def get_leaderboard(db: Session, kind: str) -> list[User]:
    column = User.excuses_generated if kind == "excuses" else User.notes_created
    return db.query(User).order_by(column.desc()).limit(LEADERBOARD_SIZE).all()


# Rooms

def get_rooms(db: Session) -> list[Room]:
    return db.query(Room).order_by(Room.created_at.desc(), Room.id.desc()).all()


def create_room(db: Session, name: str) -> Room:
    return _save(db, Room(name=name))


def get_room_messages(db: Session, room_id: int) -> list[RoomMessage]:
    return (
        db.query(RoomMessage)
        .filter(RoomMessage.room_id == room_id)
        .order_by(RoomMessage.created_at.desc(), RoomMessage.id.desc())
        .limit(ROOM_HISTORY_LIMIT)
        .all()
    )


def create_room_message(db: Session, room_id: int, username: str, message: str) -> RoomMessage:
    return _save(db, RoomMessage(room_id=room_id, username=username, message=message))
