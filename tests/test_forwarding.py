import asyncio
import json

import httpx

from govledger.events import RecordingSink
from govledger.forwarding import push_round, push_to_subscriber
from govledger.state import Ledger


def _ledger_with_events():
    sink = RecordingSink()
    ledger = Ledger(owner="alice", sink=sink)
    pid = ledger.create_proposal("alice", "Tema")
    ledger.vote("bob", pid, True)
    return ledger, sink


def _recording_client(received, failing_hosts=()):
    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.host in failing_hosts:
            return httpx.Response(503)
        received.append((request.url.host, json.loads(request.content)))
        return httpx.Response(200, json={"ok": True})

    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


def test_push_delivers_events_in_order():
    _, sink = _ledger_with_events()
    received = []

    async def run():
        async with _recording_client(received) as client:
            return await push_to_subscriber(client, "http://sub1:9000", sink, 0)

    cursor = asyncio.run(run())

    assert cursor == 2
    assert [p["seq"] for _, p in received] == [0, 1]
    assert received[0][1]["event"] == {"kind": "ProposalCreated", "id": 0, "title": "Tema"}
    assert received[1][1]["event"] == {
        "kind": "VoteCast",
        "proposal_id": 0,
        "voter": "bob",
        "support": True,
    }


def test_push_resumes_from_cursor():
    ledger, sink = _ledger_with_events()
    received = []

    async def run():
        async with _recording_client(received) as client:
            cursor = await push_to_subscriber(client, "http://sub1:9000", sink, 0)
            ledger.vote("charlie", 0, False)
            return await push_to_subscriber(client, "http://sub1:9000", sink, cursor)

    assert asyncio.run(run()) == 3
    assert [p["seq"] for _, p in received] == [0, 1, 2]


def test_failing_subscriber_does_not_block_others():
    _, sink = _ledger_with_events()
    received = []
    cursors = {}
    subscribers = ["http://down:9000", "http://up:9000"]

    async def run():
        async with _recording_client(received, failing_hosts={"down"}) as client:
            await push_round(client, sink, cursors, subscribers)

    asyncio.run(run())

    assert cursors == {"http://down:9000": 0, "http://up:9000": 2}
    assert {host for host, _ in received} == {"up"}


def test_lifespan_shutdown_waits_for_forwarder(monkeypatch):
    from govledger import main

    stopped = []

    async def forward_forever(sink):
        try:
            await asyncio.sleep(3600)
        finally:
            stopped.append(True)

    monkeypatch.setattr(main, "event_forward_loop", forward_forever)

    async def run():
        async with main.lifespan(main.app):
            await asyncio.sleep(0)
        # the forwarder has fully unwound by the time shutdown returns
        return list(stopped)

    assert asyncio.run(run()) == [True]
