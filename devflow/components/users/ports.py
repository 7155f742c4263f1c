"""
Users component port definitions.
"""

from __future__ import annotations

from devflow.components.questions.ports import TimePort
from devflow.ports.repo import AnswerRepoPort, QuestionRepoPort, UserRepoPort

__all__ = ["AnswerRepoPort", "QuestionRepoPort", "TimePort", "UserRepoPort"]
