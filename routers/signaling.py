from fastapi import APIRouter, WebSocket
import asyncio
import json
from constants import WS_PATH
from exceptions import SignalingError
from registry import Connection
from logging_config import get_logger

logger = get_logger(__name__)

signaling_router = APIRouter(tags=["signaling"])


async def write_outbox(websocket: WebSocket, connection: Connection):
    """Drain the connection's outbound queue to the socket, in order. Returns when a send fails."""
    while True:
        message = await connection.outbox.get()
        try:
            await websocket.send_text(json.dumps(message))
        except Exception as e:
            logger.warning(f"Error sending {message.get('event')} to connection {connection.short_id}: {e}")
            return


async def read_frames(websocket: WebSocket, service, connection: Connection):
    """Feed inbound text frames to the dispatcher until the client disconnects."""
    message_count = 0
    while True:
        message = await websocket.receive()
        if message["type"] == "websocket.disconnect":
            logger.info(f"WebSocket disconnected normally for connection {connection.short_id} (code {message.get('code')})")
            return

        text = message.get("text")
        if text is None:
            logger.warning(f"Ignoring binary frame from connection {connection.short_id}")
            continue

        message_count += 1
        logger.debug(f"Received message #{message_count} from connection {connection.short_id}")
        try:
            await service.handle_frame(connection, text)
        except SignalingError as e:
            logger.warning(f"Ignoring message #{message_count} from connection {connection.short_id}: {e}")


@signaling_router.websocket(WS_PATH)
async def websocket_endpoint(websocket: WebSocket):
    """Signaling channel for one peer. Frames are JSON objects `{"event": ..., "data": ...}`."""
    service = websocket.app.state.signaling

    await websocket.accept()
    connection = service.connect()
    logger.info(f"WebSocket connection accepted: {connection.short_id}")

    reader = asyncio.create_task(read_frames(websocket, service, connection))
    writer = asyncio.create_task(write_outbox(websocket, connection))
    tasks = {reader, writer}

    try:
        # Whichever side stops first ends the session
        done, pending = await asyncio.wait(tasks, return_when=asyncio.FIRST_COMPLETED)
        if writer in done:
            logger.info(f"Outbound channel of connection {connection.short_id} failed, closing session")
        for task in done:
            if not task.cancelled() and task.exception() is not None:
                logger.error(f"WebSocket error for connection {connection.short_id}: {task.exception()}", exc_info=task.exception())
    finally:
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        await service.disconnect(connection)
        try:
            await websocket.close()
        except Exception as e:
            logger.debug(f"Error closing WebSocket: {e}")
