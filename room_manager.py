"""
Room membership for two-party signaling sessions.

A room exists only while it has members. The first connection to join an
empty room is tagged `first` (the caller), the second is tagged `second`
(the callee) and any further joiner is turned away until a member leaves.
"""
import asyncio
import enum
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Union

from constants import ROOM_CAPACITY
from exceptions import AlreadyInRoomError
from logging_config import get_logger
from registry import Connection

logger = get_logger(__name__)


class Role(str, enum.Enum):
    FIRST = "first"
    SECOND = "second"


class RoomState(str, enum.Enum):
    EMPTY = "empty"
    HALF_OPEN = "half_open"
    OPEN = "open"


@dataclass(frozen=True)
class RoomCreated:
    room_id: str
    role: Role = Role.FIRST


@dataclass(frozen=True)
class RoomJoined:
    room_id: str
    role: Role = Role.SECOND


@dataclass(frozen=True)
class RoomFull:
    room_id: str


JoinResult = Union[RoomCreated, RoomJoined, RoomFull]


@dataclass
class Member:
    connection: Connection
    role: Role


@dataclass
class Room:
    room_id: str
    members: List[Member] = field(default_factory=list)

    @property
    def state(self) -> RoomState:
        if not self.members:
            return RoomState.EMPTY
        if len(self.members) < ROOM_CAPACITY:
            return RoomState.HALF_OPEN
        return RoomState.OPEN

    def snapshot(self) -> "RoomSnapshot":
        return RoomSnapshot(
            room_id=self.room_id,
            state=self.state,
            members=tuple((m.connection.connection_id, m.role) for m in self.members),
        )


@dataclass(frozen=True)
class RoomSnapshot:
    """Read-only view of a room handed out to callers outside the lock."""
    room_id: str
    state: RoomState
    members: tuple = ()

    @property
    def member_count(self) -> int:
        return len(self.members)

    @property
    def is_full(self) -> bool:
        return self.member_count >= ROOM_CAPACITY


class RoomManager:
    """Maps room ids to at most two member connections.

    `join` and `leave` read and then write membership, so both run under
    `self._lock`. Lookups used by the relay never await between reading the
    map and returning, which gives them a consistent view without the lock.
    """

    def __init__(self):
        self._rooms: Dict[str, Room] = {}
        self._lock = asyncio.Lock()

    async def join(self, connection: Connection, room_id: str) -> JoinResult:
        async with self._lock:
            if connection.room_id is not None:
                raise AlreadyInRoomError(
                    "Connection already belongs to a room",
                    {"connection_id": connection.connection_id, "room_id": connection.room_id},
                )

            room = self._rooms.get(room_id)
            count = len(room.members) if room else 0
            logger.info(f"Join request from {connection.short_id} for room {room_id} ({count} members)")

            if count >= ROOM_CAPACITY:
                logger.info(f"Room {room_id} is full, rejecting {connection.short_id}")
                return RoomFull(room_id)

            if room is None:
                room = Room(room_id)
                self._rooms[room_id] = room

            role = Role.FIRST if count == 0 else Role.SECOND
            room.members.append(Member(connection, role))
            connection.room_id = room_id
            connection.role = role
            logger.info(f"Connection {connection.short_id} joined room {room_id} as {role.value}")

            if role is Role.FIRST:
                return RoomCreated(room_id)
            return RoomJoined(room_id)

    async def leave(self, connection: Connection) -> Optional[Connection]:
        """Remove `connection` from its room and return the member left behind, if any."""
        async with self._lock:
            room_id = connection.room_id
            if room_id is None:
                return None

            connection.room_id = None
            connection.role = None

            room = self._rooms.get(room_id)
            if room is None:
                return None

            room.members = [m for m in room.members if m.connection is not connection]
            if not room.members:
                del self._rooms[room_id]
                logger.info(f"Connection {connection.short_id} left room {room_id}, room removed")
                return None

            # A single remaining member always holds the caller role
            remaining = room.members[0]
            remaining.role = Role.FIRST
            remaining.connection.role = Role.FIRST
            logger.info(f"Connection {connection.short_id} left room {room_id}, {remaining.connection.short_id} remains")
            return remaining.connection

    def other_member(self, connection: Connection) -> Optional[Connection]:
        if connection.room_id is None:
            return None
        room = self._rooms.get(connection.room_id)
        if room is None or len(room.members) < ROOM_CAPACITY:
            return None
        for member in room.members:
            if member.connection is not connection:
                return member.connection
        return None

    def state(self, room_id: str) -> RoomState:
        room = self._rooms.get(room_id)
        return room.state if room else RoomState.EMPTY

    def get_room(self, room_id: str) -> RoomSnapshot:
        room = self._rooms.get(room_id)
        if room is None:
            return RoomSnapshot(room_id=room_id, state=RoomState.EMPTY)
        return room.snapshot()

    def rooms(self) -> List[RoomSnapshot]:
        return [room.snapshot() for room in self._rooms.values()]

    def __len__(self) -> int:
        return len(self._rooms)
