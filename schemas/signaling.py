from pydantic import BaseModel, ConfigDict, StrictStr
from typing import Any, Optional


class SignalMessage(BaseModel):
    event: StrictStr
    data: Any = None


class SessionDescriptionPayload(BaseModel):
    """Offer or answer. `sdp` is forwarded as received."""
    model_config = ConfigDict(extra="allow")

    sdp: Any
    room: Optional[str] = None


class CandidatePayload(BaseModel):
    model_config = ConfigDict(extra="allow")

    label: Any = None
    id: Any = None
    candidate: Any
    room: Optional[str] = None
