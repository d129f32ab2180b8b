from typing import Hashable, Literal
from pydantic import BaseModel, ConfigDict, Field

U32_MAX = 2**32 - 1

# opaque account identifier attributed by the host to each call
Identity = Hashable


class ProposalIn(BaseModel):
    title: str = Field(..., examples=["Titulo"])


class VoteIn(BaseModel):
    support: bool = Field(..., examples=[True])


class Proposal(BaseModel):
    """
    Stored proposal. Frozen: a vote produces an updated copy,
    the stored instance is never mutated in place.
    """
    model_config = ConfigDict(frozen=True)

    id: int = Field(..., ge=0, le=U32_MAX)
    title: str
    votes_for: int = Field(0, ge=0, le=U32_MAX)
    votes_against: int = Field(0, ge=0, le=U32_MAX)


class ProposalView(BaseModel):
    title: str
    votes_for: int
    votes_against: int


class ProposalCreated(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["ProposalCreated"] = "ProposalCreated"
    id: int
    title: str


class VoteCast(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["VoteCast"] = "VoteCast"
    proposal_id: int
    voter: Identity
    support: bool
