"""Vote-related Pydantic schemas."""

from pydantic import BaseModel, Field

from threadvote.models.vote import VoteType
from threadvote.services.votes import VoteEffect


class VoteOutcomeResponse(BaseModel):
    """Result of a vote request."""

    effect: VoteEffect = Field(..., description="RECORDED, OVERRIDDEN or RETRACTED")
    my_vote: VoteType | None = Field(None, description="Voter's vote after the request")
    score: int


class MyVoteResponse(BaseModel):
    vote_type: VoteType | None = None
