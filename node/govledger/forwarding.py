# push emitted ledger events to subscribers
import asyncio
import logging
from typing import Dict, List

import httpx

from .config import EVENT_FORWARD_INTERVAL, EVENT_FORWARD_TIMEOUT, EVENT_SUBSCRIBERS, NODE_ID
from .events import RecordingSink

log = logging.getLogger(__name__)


async def push_to_subscriber(
    client: httpx.AsyncClient, subscriber: str, sink: RecordingSink, cursor: int
) -> int:
    """
    Deliver events from `cursor` onwards, in order, to one subscriber.
    Stops at the first failed delivery and returns the new cursor,
    so the next round resumes with the event that failed.
    """
    pending = sink.since(cursor)
    for offset, event in enumerate(pending):
        seq = cursor + offset
        payload = {"node": NODE_ID, "seq": seq, "event": event.model_dump(mode="json")}
        try:
            resp = await client.post(f"{subscriber}/internal/events", json=payload)
            resp.raise_for_status()
        except httpx.HTTPError as exc:
            log.warning("event %d not delivered to %s: %s", seq, subscriber, exc)
            return seq
    return cursor + len(pending)


async def push_round(
    client: httpx.AsyncClient,
    sink: RecordingSink,
    cursors: Dict[str, int],
    subscribers: List[str],
) -> None:
    """
    One forwarding pass over every subscriber; an unreachable subscriber
    does not hold back the others.
    """
    results = await asyncio.gather(
        *(push_to_subscriber(client, s, sink, cursors.get(s, 0)) for s in subscribers)
    )
    for subscriber, cursor in zip(subscribers, results):
        cursors[subscriber] = cursor


async def event_forward_loop(sink: RecordingSink) -> None:
    """
    Background task: periodically forward newly emitted events.
    """
    if not EVENT_SUBSCRIBERS:
        return

    cursors: Dict[str, int] = {}
    async with httpx.AsyncClient(timeout=EVENT_FORWARD_TIMEOUT) as client:
        while True:
            await push_round(client, sink, cursors, EVENT_SUBSCRIBERS)
            await asyncio.sleep(EVENT_FORWARD_INTERVAL)
