from sqlmodel import SQLModel, Field
from typing import Optional
import datetime

PROFILE_FIELDS = (
    "full_name",
    "university",
    "year",
    "major",
    "idea_title",
    "idea_desc",
    "uniqueness",
    "stage",
    "challenge",
    "email",
)

def utcnow():
    return datetime.datetime.now(datetime.timezone.utc)

class ChatSession(SQLModel, table=True):
    id: str = Field(primary_key=True)
    last_active_at: datetime.datetime = Field(default_factory=utcnow)
    message_count: int = Field(default=0)

class Profile(SQLModel):
    full_name: Optional[str] = None
    university: Optional[str] = None
    year: Optional[str] = None
    major: Optional[str] = None
    idea_title: Optional[str] = None
    idea_desc: Optional[str] = None
    uniqueness: Optional[str] = None
    stage: Optional[str] = None
    challenge: Optional[str] = None
    email: Optional[str] = None

class Submission(SQLModel, table=True):
    id: str = Field(primary_key=True)
    session_id: str = Field(index=True)
    created_at: datetime.datetime = Field(default_factory=utcnow, index=True)
    seq: int = Field(default=0, index=True) # insertion order, breaks created_at ties
    status: str = Field(default="new", index=True) # new | reviewed | funded | ...
    full_name: Optional[str] = Field(default=None)
    university: Optional[str] = Field(default=None)
    year: Optional[str] = Field(default=None)
    major: Optional[str] = Field(default=None)
    idea_title: Optional[str] = Field(default=None)
    idea_desc: Optional[str] = Field(default=None)
    uniqueness: Optional[str] = Field(default=None)
    stage: Optional[str] = Field(default=None)
    challenge: Optional[str] = Field(default=None)
    email: Optional[str] = Field(default=None)
    transcript: str = Field(default="[]") # json encoded list of chat messages
    raw_profile: str = Field(default="{}") # json encoded profile as submitted
