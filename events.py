# client -> server
CREATE_OR_JOIN = "create-or-join"
READY = "ready"
OFFER = "offer"
ANSWER = "answer"
CANDIDATE = "candidate"

# server -> client
CONNECTED = "connected"
ROOM_CREATED = "room-created"
JOINED_ROOM = "joined-room"
FULL_ROOM = "full-room"
PEER_READY = "peer-ready"
OFFER_RECEIVED = "offer-received"
ANSWER_RECEIVED = "answer-received"
ROOM_VACATED = "room-vacated"

# Event names used by older browser clients
LEGACY_EVENT_ALIASES = {
    "room-ready-caller-can-send-offer": READY,
}

INBOUND_EVENTS = {CREATE_OR_JOIN, READY, OFFER, ANSWER, CANDIDATE}


_NO_PAYLOAD = object()


def make_message(event: str, data=_NO_PAYLOAD) -> dict:
    """Build an outbound frame. `data` is left out only when no payload is passed."""
    message = {"event": event}
    if data is not _NO_PAYLOAD:
        message["data"] = data
    return message
