"""
Dispatch of inbound signaling frames.

Every frame is a JSON object `{"event": ..., "data": ...}`. The dispatcher
validates the envelope and the event's payload, then hands it to the room
manager, the negotiation relay or the lifecycle handler.
"""
import json
from typing import Any, Tuple

from pydantic import ValidationError

import events
from exceptions import MalformedMessageError
from lifecycle import SessionLifecycleHandler
from logging_config import get_logger
from registry import Connection, ConnectionRegistry
from relay import NegotiationRelay
from room_manager import RoomCreated, RoomJoined, RoomManager
from schemas.signaling import CandidatePayload, SessionDescriptionPayload, SignalMessage

logger = get_logger(__name__)


def decode_frame(text: str) -> Tuple[str, Any]:
    """Parse one text frame into `(event, data)`, resolving legacy event names."""
    try:
        raw = json.loads(text)
    except json.JSONDecodeError as e:
        raise MalformedMessageError("Frame is not valid JSON", {"error": str(e)})

    try:
        message = SignalMessage.model_validate(raw)
    except ValidationError as e:
        raise MalformedMessageError("Frame is not a signaling message", {"errors": e.error_count()})

    event = events.LEGACY_EVENT_ALIASES.get(message.event, message.event)
    if event not in events.INBOUND_EVENTS:
        raise MalformedMessageError("Unknown event", {"event": message.event})
    return event, message.data


def _validate(model, event: str, data: Any):
    try:
        return model.model_validate(data)
    except ValidationError as e:
        raise MalformedMessageError(f"Invalid {event} payload", {"errors": e.error_count()})


class SignalingService:
    """Owns the core components for one server instance."""

    def __init__(self):
        self.registry = ConnectionRegistry()
        self.room_manager = RoomManager()
        self.relay = NegotiationRelay(self.room_manager)
        self.lifecycle = SessionLifecycleHandler(self.room_manager, self.registry)

    def connect(self) -> Connection:
        connection = self.registry.register()
        connection.deliver(events.make_message(events.CONNECTED, {"connection_id": connection.connection_id}))
        return connection

    async def disconnect(self, connection: Connection) -> None:
        await self.lifecycle.on_disconnect(connection)

    async def handle_frame(self, connection: Connection, text: str) -> None:
        event, data = decode_frame(text)
        await self.dispatch(connection, event, data)

    async def dispatch(self, connection: Connection, event: str, data: Any) -> None:
        logger.debug(f"Event {event} from {connection.short_id}")

        if event == events.CREATE_OR_JOIN:
            if not isinstance(data, str):
                raise MalformedMessageError("Room id must be a string", {"event": event})
            await self.create_or_join(connection, data)

        elif event == events.READY:
            if data is not None and data != connection.room_id:
                logger.debug(f"Ready from {connection.short_id} names room {data}, routing by membership ({connection.room_id})")
            self.relay.ready_signal(connection)

        elif event == events.OFFER:
            _validate(SessionDescriptionPayload, event, data)
            self.relay.relay_offer(connection, data)

        elif event == events.ANSWER:
            _validate(SessionDescriptionPayload, event, data)
            self.relay.relay_answer(connection, data)

        elif event == events.CANDIDATE:
            _validate(CandidatePayload, event, data)
            self.relay.relay_candidate(connection, data)

    async def create_or_join(self, connection: Connection, room_id: str) -> None:
        if connection.room_id is not None:
            logger.info(f"Connection {connection.short_id} switching from room {connection.room_id} to {room_id}")
            await self.lifecycle.vacate(connection)

        result = await self.room_manager.join(connection, room_id)
        if isinstance(result, RoomCreated):
            connection.deliver(events.make_message(events.ROOM_CREATED, result.room_id))
        elif isinstance(result, RoomJoined):
            connection.deliver(events.make_message(events.JOINED_ROOM, result.room_id))
        else:
            connection.deliver(events.make_message(events.FULL_ROOM))
