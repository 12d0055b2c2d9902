from fastapi import APIRouter, Request
from typing import List
from schemas.rooms import HealthResponse, RoomDetailsResponse, RoomMember
from room_manager import RoomSnapshot
from logging_config import get_logger

logger = get_logger(__name__)

rooms_router = APIRouter(tags=["rooms"])


def to_details(snapshot: RoomSnapshot) -> RoomDetailsResponse:
    return RoomDetailsResponse(
        room_id=snapshot.room_id,
        state=snapshot.state.value,
        member_count=snapshot.member_count,
        is_full=snapshot.is_full,
        members=[RoomMember(connection_id=connection_id, role=role.value) for connection_id, role in snapshot.members],
    )


@rooms_router.get("/health", response_model=HealthResponse)
async def health(request: Request):
    service = request.app.state.signaling
    return HealthResponse(status="ok", connections=len(service.registry), rooms=len(service.room_manager))


@rooms_router.get("/rooms", response_model=List[RoomDetailsResponse])
async def list_rooms(request: Request):
    snapshots = request.app.state.signaling.room_manager.rooms()
    logger.debug(f"Listing {len(snapshots)} rooms")
    return [to_details(snapshot) for snapshot in snapshots]


@rooms_router.get("/rooms/{room_id}", response_model=RoomDetailsResponse)
async def get_room_details(room_id: str, request: Request):
    """
    Get the occupancy of a room.

    A room without members does not exist; it is reported with state
    `empty` rather than as an error, because any client may create it by
    joining.
    """
    snapshot = request.app.state.signaling.room_manager.get_room(room_id)
    logger.info(f"Room details request for {room_id}: {snapshot.state.value} ({snapshot.member_count} members)")
    return to_details(snapshot)
