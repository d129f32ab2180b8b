# ledger state + operations
import logging
from typing import Optional, Tuple

from .errors import AlreadyVoted, MaxProposalsReached, NotOwner, Overflow, ProposalNotFound
from .events import EventSink, RecordingSink
from .models import U32_MAX, Identity, Proposal, ProposalCreated, ProposalView, VoteCast
from .store import KeyValueStore, MemoryStore

log = logging.getLogger(__name__)


def checked_increment(value: int) -> Optional[int]:
    """
    value + 1 within the unsigned 32-bit range, or None if it would wrap.
    """
    if value >= U32_MAX:
        return None
    return value + 1


class Ledger:
    """
    Owner-gated proposal registry with one vote per account and proposal.

    Every operation validates first and writes last: a raised LedgerError
    means neither store, the counter nor the sink were touched.
    The caller identity is always supplied by the invoking boundary.
    """

    def __init__(
        self,
        owner: Identity,
        proposals: Optional[KeyValueStore[int, Proposal]] = None,
        has_voted: Optional[KeyValueStore[Tuple[int, Identity], bool]] = None,
        sink: Optional[EventSink] = None,
    ) -> None:
        self._owner = owner
        self._proposals = proposals if proposals is not None else MemoryStore()
        self._has_voted = has_voted if has_voted is not None else MemoryStore()
        self._sink = sink if sink is not None else RecordingSink()
        self._next_proposal_id = 0

    @property
    def owner(self) -> Identity:
        return self._owner

    @property
    def sink(self) -> EventSink:
        return self._sink

    def create_proposal(self, caller: Identity, title: str) -> int:
        if caller != self._owner:
            log.debug("create_proposal rejected: %r is not the owner", caller)
            raise NotOwner()

        proposal_id = self._next_proposal_id
        next_id = checked_increment(proposal_id)
        if next_id is None:
            log.debug("create_proposal rejected: proposal id counter exhausted")
            raise MaxProposalsReached()

        proposal = Proposal(id=proposal_id, title=title)
        event = ProposalCreated(id=proposal_id, title=title)

        self._next_proposal_id = next_id
        self._proposals.insert(proposal_id, proposal)
        self._sink.emit(event)

        log.info("proposal %d created", proposal_id)
        return proposal_id

    def vote(self, caller: Identity, proposal_id: int, support: bool) -> None:
        proposal = self._proposals.get(proposal_id)
        if proposal is None:
            raise ProposalNotFound()

        key = (proposal_id, caller)
        if self._has_voted.contains(key):
            log.debug("vote rejected: %r already voted on %d", caller, proposal_id)
            raise AlreadyVoted()

        field = "votes_for" if support else "votes_against"
        tally = checked_increment(getattr(proposal, field))
        if tally is None:
            log.warning("vote rejected: %s of proposal %d at maximum", field, proposal_id)
            raise Overflow()

        updated = proposal.model_copy(update={field: tally})
        event = VoteCast(proposal_id=proposal_id, voter=caller, support=support)

        self._proposals.insert(proposal_id, updated)
        self._has_voted.insert(key, True)
        self._sink.emit(event)

        log.info("vote on proposal %d recorded (support=%s)", proposal_id, support)

    def get_proposal(self, proposal_id: int) -> ProposalView:
        proposal = self._proposals.get(proposal_id)
        if proposal is None:
            raise ProposalNotFound()
        return ProposalView(
            title=proposal.title,
            votes_for=proposal.votes_for,
            votes_against=proposal.votes_against,
        )

    def total_proposals(self) -> int:
        return self._next_proposal_id
