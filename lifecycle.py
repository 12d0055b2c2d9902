import events
from logging_config import get_logger
from registry import Connection, ConnectionRegistry
from room_manager import RoomManager

logger = get_logger(__name__)


class SessionLifecycleHandler:
    """Cleans up room membership when a client goes away."""

    def __init__(self, room_manager: RoomManager, registry: ConnectionRegistry):
        self.room_manager = room_manager
        self.registry = registry

    async def vacate(self, connection: Connection) -> None:
        """Take `connection` out of its room and tell the member left behind."""
        room_id = connection.room_id
        remaining = await self.room_manager.leave(connection)
        if remaining is not None:
            remaining.deliver(events.make_message(events.ROOM_VACATED, {"room": room_id, "role": remaining.role.value}))
            logger.info(f"Notified {remaining.short_id} that room {room_id} was vacated by {connection.short_id}")

    async def on_disconnect(self, connection: Connection) -> None:
        logger.info(f"Connection {connection.short_id} disconnected (room: {connection.room_id})")
        await self.vacate(connection)
        self.registry.unregister(connection)
