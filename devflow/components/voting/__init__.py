"""
Voting component - up/down votes on questions and answers.
"""

from .component import decide_vote_action, run_vote
from .models import VoteError, VoteInput, VoteOutput
from .ports import UnitOfWorkPort, VoteRepoPort

__all__ = [
    # Entry points
    "run_vote",
    "decide_vote_action",
    # Models
    "VoteError",
    "VoteInput",
    "VoteOutput",
    # Ports
    "UnitOfWorkPort",
    "VoteRepoPort",
]
