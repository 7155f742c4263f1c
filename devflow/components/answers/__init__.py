"""
Answers component - posting, listing and voting on answers.
"""

from .component import (
    run_create_answer,
    run_downvote_answer,
    run_get_answers,
    run_upvote_answer,
)
from .models import (
    AnswerError,
    AnswerListOutput,
    AnswerOperationOutput,
    AnswerVoteInput,
    CreateAnswerInput,
    GetAnswersInput,
)

__all__ = [
    "run_create_answer",
    "run_downvote_answer",
    "run_get_answers",
    "run_upvote_answer",
    "AnswerError",
    "AnswerListOutput",
    "AnswerOperationOutput",
    "AnswerVoteInput",
    "CreateAnswerInput",
    "GetAnswersInput",
]
