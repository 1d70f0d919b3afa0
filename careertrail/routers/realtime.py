"""
Real-time change feed over WebSocket

    ws://host/ws/changes?token=<jwt>[&tables=jobs,interviews]

Each message is one ChangeEvent as JSON. The client never sends anything
meaningful; the socket is closed with 1008 on a bad token or table list.
"""

import asyncio
import logging
from typing import Optional

from fastapi import APIRouter, HTTPException, WebSocket, WebSocketDisconnect, status

from careertrail.auth import user_from_token
from careertrail.db import database
from careertrail.realtime import change_feed

logger = logging.getLogger(__name__)

router = APIRouter()


def _authenticate(token: str) -> str:
    with database.get_session(database.current_engine()) as db:
        return user_from_token(token, db).id


@router.websocket("/ws/changes")
async def changes(websocket: WebSocket, token: str = "", tables: Optional[str] = None):
    try:
        user_id = _authenticate(token)
    except HTTPException as e:
        await websocket.close(code=status.WS_1008_POLICY_VIOLATION, reason=e.detail)
        return

    wanted = [t.strip() for t in tables.split(",") if t.strip()] if tables else None
    try:
        sub = change_feed.subscribe(user_id, wanted)
    except ValueError as e:
        await websocket.close(code=status.WS_1008_POLICY_VIOLATION, reason=str(e))
        return

    await websocket.accept()
    receiver = asyncio.create_task(_drain_client(websocket))
    try:
        while not receiver.done():
            getter = asyncio.create_task(sub.get())
            done, _ = await asyncio.wait({getter, receiver}, return_when=asyncio.FIRST_COMPLETED)
            if getter not in done:
                getter.cancel()
                break
            change = getter.result()
            await websocket.send_text(change.model_dump_json())
    except WebSocketDisconnect:
        pass
    finally:
        receiver.cancel()
        change_feed.unsubscribe(sub)
        logger.info(f"WebSocket closed for user {user_id}")


async def _drain_client(websocket: WebSocket) -> None:
    """Consume client frames until it disconnects."""
    try:
        while True:
            await websocket.receive_text()
    except WebSocketDisconnect:
        return
