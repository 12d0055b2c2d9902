from pydantic import BaseModel
from typing import List


class RoomMember(BaseModel):
    connection_id: str
    role: str


class RoomDetailsResponse(BaseModel):
    room_id: str
    state: str
    member_count: int
    is_full: bool
    members: List[RoomMember] = []


class HealthResponse(BaseModel):
    status: str
    connections: int
    rooms: int
