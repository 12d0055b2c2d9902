import asyncio
import uuid
from dataclasses import dataclass, field
from typing import Dict, Optional, TYPE_CHECKING

from logging_config import get_logger

if TYPE_CHECKING:
    from room_manager import Role

logger = get_logger(__name__)


@dataclass(eq=False)
class Connection:
    """Per-session state for one client channel.

    `room_id` and `role` are written by the RoomManager while it holds its lock;
    the transport only reads them. Outbound messages are queued on `outbox` and
    written to the socket by the transport's writer task.
    """
    connection_id: str
    room_id: Optional[str] = None
    role: Optional["Role"] = None
    outbox: asyncio.Queue = field(default_factory=asyncio.Queue, repr=False)

    def deliver(self, message: dict) -> None:
        """Queue a message for this client without waiting on the socket."""
        self.outbox.put_nowait(message)

    @property
    def short_id(self) -> str:
        return self.connection_id[:8]


class ConnectionRegistry:
    """Tracks live connections by id."""

    def __init__(self):
        self._connections: Dict[str, Connection] = {}

    def register(self, connection_id: str = None) -> Connection:
        connection = Connection(connection_id=connection_id or str(uuid.uuid4()))
        self._connections[connection.connection_id] = connection
        logger.info(f"Connection {connection.short_id} registered ({len(self._connections)} active)")
        return connection

    def unregister(self, connection: Connection) -> None:
        removed = self._connections.pop(connection.connection_id, None)
        if removed is not None:
            logger.info(f"Connection {connection.short_id} unregistered ({len(self._connections)} active)")

    def __contains__(self, connection: Connection) -> bool:
        return self._connections.get(connection.connection_id) is connection

    def __len__(self) -> int:
        return len(self._connections)
