class LedgerError(Exception):
    """
    Base class for every rejected ledger operation.
    A raised LedgerError means the call left the ledger untouched.
    """
    status_code = 400

    @property
    def code(self) -> str:
        return type(self).__name__


class NotOwner(LedgerError):
    status_code = 403


class ProposalNotFound(LedgerError):
    status_code = 404


class AlreadyVoted(LedgerError):
    status_code = 409


class MaxProposalsReached(LedgerError):
    status_code = 409


class Overflow(LedgerError):
    status_code = 409
