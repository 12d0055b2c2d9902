"""
Forwarding of negotiation messages between the two members of a room.

The relay keeps no state of its own. Each operation looks up the sender's
peer through the RoomManager and queues one message for it; when there is no
peer the message is dropped. Payload contents are never inspected.
"""
from typing import Any, Dict

import events
from logging_config import get_logger
from registry import Connection
from room_manager import RoomManager

logger = get_logger(__name__)


class NegotiationRelay:
    def __init__(self, room_manager: RoomManager):
        self.room_manager = room_manager

    def _forward(self, sender: Connection, message: dict) -> bool:
        addressee = self.room_manager.other_member(sender)
        if addressee is None:
            logger.info(f"Dropped {message['event']} from {sender.short_id} in room {sender.room_id}: no peer present")
            return False
        addressee.deliver(message)
        logger.debug(f"Relayed {message['event']} from {sender.short_id} to {addressee.short_id} in room {sender.room_id}")
        return True

    def ready_signal(self, connection: Connection) -> bool:
        return self._forward(connection, events.make_message(events.PEER_READY))

    def relay_offer(self, connection: Connection, payload: Dict[str, Any]) -> bool:
        return self._forward(connection, events.make_message(events.OFFER_RECEIVED, payload.get("sdp")))

    def relay_answer(self, connection: Connection, payload: Dict[str, Any]) -> bool:
        return self._forward(connection, events.make_message(events.ANSWER_RECEIVED, payload.get("sdp")))

    def relay_candidate(self, connection: Connection, payload: Dict[str, Any]) -> bool:
        return self._forward(connection, events.make_message(events.CANDIDATE, payload))
