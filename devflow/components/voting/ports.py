"""
Voting component port definitions.
"""

from __future__ import annotations

from devflow.ports.repo import UnitOfWorkPort, VoteRepoPort

__all__ = ["UnitOfWorkPort", "VoteRepoPort"]
