# append-only event sink
from typing import List, Protocol, Tuple, Union

from .models import ProposalCreated, VoteCast

LedgerEvent = Union[ProposalCreated, VoteCast]


class EventSink(Protocol):
    def emit(self, event: LedgerEvent) -> None: ...


class RecordingSink:
    """
    Keeps every emitted event in emission order.
    Events are never removed or rewritten; readers get copies of the log.
    """

    def __init__(self) -> None:
        self._log: List[LedgerEvent] = []

    def emit(self, event: LedgerEvent) -> None:
        self._log.append(event)

    def events(self) -> Tuple[LedgerEvent, ...]:
        return tuple(self._log)

    def since(self, seq: int) -> Tuple[LedgerEvent, ...]:
        """
        Events with sequence number >= seq (sequence numbers start at 0).
        """
        return tuple(self._log[max(seq, 0):])

    def __len__(self) -> int:
        return len(self._log)


class NullSink:
    """
    Drops every event; used when no subscriber would ever read the log.
    """

    def emit(self, event: LedgerEvent) -> None:
        pass
