import asyncio

import pytest

from exceptions import AlreadyInRoomError
from registry import ConnectionRegistry
from room_manager import Role, RoomCreated, RoomFull, RoomJoined, RoomManager, RoomState


@pytest.fixture
def registry():
    return ConnectionRegistry()


@pytest.fixture
def manager():
    return RoomManager()


def test_join_sequence_assigns_roles_then_rejects(manager, registry):
    a, b, c, d = (registry.register() for _ in range(4))

    async def scenario():
        return [await manager.join(conn, "r1") for conn in (a, b, c, d)]

    results = asyncio.run(scenario())

    assert results[0] == RoomCreated("r1")
    assert results[0].role is Role.FIRST
    assert results[1] == RoomJoined("r1")
    assert results[1].role is Role.SECOND
    assert results[2] == RoomFull("r1")
    assert results[3] == RoomFull("r1")

    snapshot = manager.get_room("r1")
    assert snapshot.state is RoomState.OPEN
    assert snapshot.members == ((a.connection_id, Role.FIRST), (b.connection_id, Role.SECOND))
    assert c.room_id is None and c.role is None
    assert d.room_id is None


@pytest.mark.parametrize("joiners", [3, 5, 20])
def test_concurrent_joins_pair_exactly_two(manager, registry, joiners):
    connections = [registry.register() for _ in range(joiners)]

    async def scenario():
        return await asyncio.gather(*(manager.join(conn, "busy") for conn in connections))

    results = asyncio.run(scenario())

    assert sum(isinstance(r, RoomCreated) for r in results) == 1
    assert sum(isinstance(r, RoomJoined) for r in results) == 1
    assert sum(isinstance(r, RoomFull) for r in results) == joiners - 2
    assert manager.get_room("busy").member_count == 2
    assert sorted(conn.role.value for conn in connections if conn.role) == ["first", "second"]


def test_room_is_recreated_after_it_empties(manager, registry):
    a, c = registry.register(), registry.register()

    async def scenario():
        await manager.join(a, "r1")
        remaining = await manager.leave(a)
        assert remaining is None
        assert manager.state("r1") is RoomState.EMPTY
        assert len(manager) == 0
        return await manager.join(c, "r1")

    assert asyncio.run(scenario()) == RoomCreated("r1")


def test_leave_returns_remaining_member_and_promotes_it(manager, registry):
    a, b, c = registry.register(), registry.register(), registry.register()

    async def scenario():
        await manager.join(a, "r1")
        await manager.join(b, "r1")
        remaining = await manager.leave(a)
        assert remaining is b
        assert manager.state("r1") is RoomState.HALF_OPEN
        return await manager.join(c, "r1")

    assert asyncio.run(scenario()) == RoomJoined("r1")
    assert b.role is Role.FIRST
    assert c.role is Role.SECOND
    assert a.room_id is None and a.role is None


def test_leave_without_room_is_noop(manager, registry):
    a = registry.register()
    assert asyncio.run(manager.leave(a)) is None
    assert len(manager) == 0


def test_other_member(manager, registry):
    a, b, stranger = registry.register(), registry.register(), registry.register()

    async def scenario():
        await manager.join(a, "r1")
        assert manager.other_member(a) is None
        await manager.join(b, "r1")

    asyncio.run(scenario())

    assert manager.other_member(a) is b
    assert manager.other_member(b) is a
    assert manager.other_member(stranger) is None


def test_join_while_in_room_raises(manager, registry):
    a = registry.register()

    async def scenario():
        await manager.join(a, "r1")
        await manager.join(a, "r2")

    with pytest.raises(AlreadyInRoomError) as excinfo:
        asyncio.run(scenario())

    assert "r1" in str(excinfo.value)
    assert manager.state("r2") is RoomState.EMPTY


def test_rooms_lists_existing_rooms_only(manager, registry):
    a, b, c = registry.register(), registry.register(), registry.register()

    async def scenario():
        await manager.join(a, "one")
        await manager.join(b, "one")
        await manager.join(c, "two")
        await manager.leave(c)

    asyncio.run(scenario())

    assert [snapshot.room_id for snapshot in manager.rooms()] == ["one"]
    assert manager.rooms()[0].is_full
