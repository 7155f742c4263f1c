"""
Questions component - question CRUD, tag resolution and question votes.
"""

from .component import (
    run_create_question,
    run_delete_question,
    run_downvote_question,
    run_edit_question,
    run_get_question,
    run_get_questions,
    run_upvote_question,
    run_view_question,
)
from .models import (
    CreateQuestionInput,
    DeleteQuestionInput,
    EditQuestionInput,
    GetQuestionInput,
    QuestionError,
    QuestionListOutput,
    QuestionOperationOutput,
    QuestionOutput,
    QuestionVoteInput,
    ViewQuestionInput,
)
from .ports import RevalidatorPort, TimePort

__all__ = [
    # Entry points
    "run_create_question",
    "run_delete_question",
    "run_downvote_question",
    "run_edit_question",
    "run_get_question",
    "run_get_questions",
    "run_upvote_question",
    "run_view_question",
    # Input models
    "CreateQuestionInput",
    "DeleteQuestionInput",
    "EditQuestionInput",
    "GetQuestionInput",
    "QuestionVoteInput",
    "ViewQuestionInput",
    # Output models
    "QuestionError",
    "QuestionListOutput",
    "QuestionOperationOutput",
    "QuestionOutput",
    # Ports
    "RevalidatorPort",
    "TimePort",
]
