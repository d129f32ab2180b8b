from typing import Optional

from fastapi import Depends, FastAPI, Header, HTTPException, Path
from contextlib import asynccontextmanager
import asyncio
import contextlib
import logging

from .config import CALLER_HEADER, EVENT_SUBSCRIBERS, LEDGER_OWNER, LOG_LEVEL, NODE_ID
from .errors import LedgerError
from .events import NullSink, RecordingSink
from .forwarding import event_forward_loop
from .models import U32_MAX, ProposalIn, VoteIn
from .state import Ledger

logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
log = logging.getLogger(__name__)

# The node constructs its ledger once; LEDGER_OWNER plays the constructing caller.
# Events are only kept while someone is subscribed to them.
sink = RecordingSink() if EVENT_SUBSCRIBERS else NullSink()
ledger = Ledger(owner=LEDGER_OWNER, sink=sink)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup: background forwarding of emitted events
    task = asyncio.create_task(event_forward_loop(sink))
    log.info("node %s serving ledger owned by %r", NODE_ID, ledger.owner)
    yield
    task.cancel()
    with contextlib.suppress(asyncio.CancelledError):
        await task


app = FastAPI(
    title=f"Governance Ledger Node ({NODE_ID})",
    lifespan=lifespan
)


def get_ledger() -> Ledger:
    return ledger


def get_caller(
    caller: Optional[str] = Header(default=None, alias=CALLER_HEADER),
) -> str:
    """
    Caller identity attributed by the boundary, never taken from the body.
    """
    if caller is None or not caller.strip():
        raise HTTPException(status_code=401, detail=f"Missing {CALLER_HEADER} header")
    return caller.strip()


def _reject(err: LedgerError) -> HTTPException:
    return HTTPException(status_code=err.status_code, detail=err.code)


# Ledger routes are async without awaits: the event loop runs each call
# to completion, one at a time.

@app.post("/proposals")
async def create_proposal(
    p: ProposalIn,
    caller: str = Depends(get_caller),
    ledger: Ledger = Depends(get_ledger),
):
    try:
        proposal_id = ledger.create_proposal(caller, p.title)
    except LedgerError as err:
        raise _reject(err) from err
    return {"ok": True, "id": proposal_id, "node": NODE_ID}


@app.post("/proposals/{proposal_id}/votes")
async def vote(
    v: VoteIn,
    proposal_id: int = Path(..., ge=0, le=U32_MAX),
    caller: str = Depends(get_caller),
    ledger: Ledger = Depends(get_ledger),
):
    try:
        ledger.vote(caller, proposal_id, v.support)
    except LedgerError as err:
        raise _reject(err) from err
    return {"ok": True, "node": NODE_ID}


@app.get("/proposals/total")
async def total_proposals(ledger: Ledger = Depends(get_ledger)):
    return {"total": ledger.total_proposals(), "node": NODE_ID}


@app.get("/proposals/{proposal_id}")
async def get_proposal(
    proposal_id: int = Path(..., ge=0, le=U32_MAX),
    ledger: Ledger = Depends(get_ledger),
):
    try:
        view = ledger.get_proposal(proposal_id)
    except LedgerError as err:
        raise _reject(err) from err
    return {**view.model_dump(), "node": NODE_ID}
