"""JSON shapes returned by the API.

Rows are read straight off the ORM objects and serialized with camelCase
keys (``generatedText``, ``createdAt``, ...), which is what the browser
client expects. Timestamps always carry an explicit UTC offset.
"""

from datetime import datetime, timezone
from typing import Annotated, Optional

from pydantic import AfterValidator, BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


def as_utc(value: datetime) -> datetime:
    # SQLite hands back naive values; they were written in UTC
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


UtcDatetime = Annotated[datetime, AfterValidator(as_utc)]


class Record(BaseModel):
    model_config = ConfigDict(
        from_attributes=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )


class ExcuseOut(Record):
    id: int
    situation: str
    mood: str
    generated_text: str
    created_at: UtcDatetime


class NoteOut(Record):
    id: int
    topic: str
    subject: Optional[str] = None
    complexity: str
    generated_text: str
    created_at: UtcDatetime


class ChatMessageOut(Record):
    id: int
    message: str
    response: str
    created_at: UtcDatetime


class ChatReply(BaseModel):
    response: str


class UserOut(Record):
    id: int
    username: str
    ip_address: str
    excuses_generated: int
    notes_created: int
    created_at: UtcDatetime
    last_active: UtcDatetime


class RoomOut(Record):
    id: int
    name: str
    user_count: int
    created_at: UtcDatetime


class RoomMessageOut(Record):
    id: int
    room_id: int
    username: str
    message: str
    created_at: UtcDatetime
