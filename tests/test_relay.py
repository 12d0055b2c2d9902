import asyncio

import pytest

from conftest import drain
from registry import ConnectionRegistry
from relay import NegotiationRelay
from room_manager import RoomManager


@pytest.fixture
def manager():
    return RoomManager()


@pytest.fixture
def relay(manager):
    return NegotiationRelay(manager)


@pytest.fixture
def pair(manager):
    registry = ConnectionRegistry()
    a, b = registry.register(), registry.register()

    async def join_both():
        await manager.join(a, "r1")
        await manager.join(b, "r1")

    asyncio.run(join_both())
    return a, b


def test_ready_signal_goes_to_other_member(relay, pair):
    a, b = pair
    assert relay.ready_signal(b) is True
    assert drain(a) == [{"event": "peer-ready"}]
    assert drain(b) == []


def test_offer_and_answer_carry_sdp_only(relay, pair):
    a, b = pair
    relay.relay_offer(a, {"sdp": {"type": "offer", "sdp": "v=0"}, "room": "r1"})
    relay.relay_answer(b, {"sdp": "y", "room": "r1"})

    assert drain(b) == [{"event": "offer-received", "data": {"type": "offer", "sdp": "v=0"}}]
    assert drain(a) == [{"event": "answer-received", "data": "y"}]


def test_candidate_is_forwarded_unchanged(relay, pair):
    a, b = pair
    payload = {"label": 0, "id": "audio", "candidate": "candidate:1 1 udp 2122 10.0.0.1 5000 typ host", "room": "r1", "extra": [1]}

    relay.relay_candidate(a, payload)

    assert drain(b) == [{"event": "candidate", "data": payload}]


def test_nothing_delivered_without_peer(manager, relay):
    registry = ConnectionRegistry()
    alone, unaffiliated = registry.register(), registry.register()
    asyncio.run(manager.join(alone, "solo"))

    for sender in (alone, unaffiliated):
        assert relay.ready_signal(sender) is False
        assert relay.relay_offer(sender, {"sdp": "x", "room": "solo"}) is False
        assert relay.relay_answer(sender, {"sdp": "y", "room": "solo"}) is False
        assert relay.relay_candidate(sender, {"candidate": "c", "room": "solo"}) is False

    assert drain(alone) == []
    assert drain(unaffiliated) == []


def test_nothing_delivered_after_peer_left(manager, relay, pair):
    a, b = pair
    asyncio.run(manager.leave(b))

    assert relay.relay_offer(a, {"sdp": "x", "room": "r1"}) is False
    assert drain(b) == []


def test_null_payloads_are_forwarded_as_received(relay, pair):
    a, b = pair
    relay.relay_offer(a, {"sdp": None, "room": "r1"})
    relay.relay_answer(b, {"sdp": None, "room": "r1"})

    assert drain(b) == [{"event": "offer-received", "data": None}]
    assert drain(a) == [{"event": "answer-received", "data": None}]
