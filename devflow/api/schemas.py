from uuid import UUID

from pydantic import BaseModel, Field

from devflow.domain.entities import Answer, Question, User


# --- Questions ---
class QuestionCreateRequest(BaseModel):
    title: str
    content: str
    tags: list[str] = Field(default_factory=list)
    author_id: UUID
    path: str = "/"


class QuestionUpdateRequest(BaseModel):
    title: str
    content: str
    path: str = "/"


class QuestionViewRequest(BaseModel):
    user_id: UUID | None = None


# --- Votes ---
class VoteRequest(BaseModel):
    user_id: UUID
    has_upvoted: bool = False
    has_downvoted: bool = False
    path: str = "/"


# --- Answers ---
class AnswerCreateRequest(BaseModel):
    author_id: UUID
    content: str
    path: str = "/"


# --- Users ---
class UserCreateRequest(BaseModel):
    clerk_id: str
    name: str
    username: str
    email: str
    picture: str = ""
    bio: str | None = None
    location: str | None = None
    portfolio_website: str | None = None


class UserInfoResponse(BaseModel):
    user: User
    total_questions: int
    total_answers: int


class ProfileResponse(UserInfoResponse):
    questions: list[Question] = []
    answers: list[Answer] = []
    questions_is_next: bool = False
    answers_is_next: bool = False
    can_edit: bool = False
    page: int = 1
