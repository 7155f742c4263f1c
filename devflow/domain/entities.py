from datetime import UTC, datetime
from typing import Literal
from uuid import UUID, uuid4

from pydantic import BaseModel, Field

# --- Enums / Literals ---
EntityType = Literal["question", "answer"]
VoteDirection = Literal["up", "down"]
InteractionAction = Literal["view", "ask_question", "answer", "vote"]


def utc_now() -> datetime:
    return datetime.now(UTC)


# --- Users ---

class User(BaseModel):
    id: UUID = Field(default_factory=uuid4)
    clerk_id: str  # External identity provider id
    name: str
    username: str
    email: str
    picture: str = ""
    bio: str | None = None
    location: str | None = None
    portfolio_website: str | None = None
    reputation: int = 0
    joined_at: datetime = Field(default_factory=utc_now)

# --- Questions & Tags ---

class Tag(BaseModel):
    id: UUID = Field(default_factory=uuid4)
    name: str
    description: str = ""
    question_ids: list[UUID] = Field(default_factory=list)
    created_at: datetime = Field(default_factory=utc_now)

class Question(BaseModel):
    id: UUID = Field(default_factory=uuid4)
    title: str
    content: str
    author_id: UUID
    tag_ids: list[UUID] = Field(default_factory=list)
    upvotes: list[UUID] = Field(default_factory=list)
    downvotes: list[UUID] = Field(default_factory=list)
    views: int = 0
    created_at: datetime = Field(default_factory=utc_now)

# Populated read models

class TagRef(BaseModel):
    id: UUID
    name: str

class AuthorRef(BaseModel):
    id: UUID
    name: str
    picture: str
    clerk_id: str

class QuestionWithRelations(Question):
    """Question with tags and author resolved to full records."""
    tags: list[Tag] = Field(default_factory=list)
    author: User | None = None

class QuestionDetail(Question):
    """Question with tags and author resolved to a subset of fields."""
    tags: list[TagRef] = Field(default_factory=list)
    author: AuthorRef | None = None

# --- Answers ---

class Answer(BaseModel):
    id: UUID = Field(default_factory=uuid4)
    question_id: UUID
    author_id: UUID
    content: str
    upvotes: list[UUID] = Field(default_factory=list)
    downvotes: list[UUID] = Field(default_factory=list)
    created_at: datetime = Field(default_factory=utc_now)

# --- Interactions ---

class Interaction(BaseModel):
    id: UUID = Field(default_factory=uuid4)
    user_id: UUID
    action: InteractionAction
    question_id: UUID | None = None
    answer_id: UUID | None = None
    tag_ids: list[UUID] = Field(default_factory=list)
    created_at: datetime = Field(default_factory=utc_now)

# --- Votes ---

class VoteTally(BaseModel):
    entity_type: EntityType
    entity_id: UUID
    upvotes: int = 0
    downvotes: int = 0
