"""Session management endpoints"""

from fastapi import APIRouter, Request
from clima.core.session_manager import session_manager
from typing import Dict, Any

router = APIRouter(prefix="/session", tags=["session"])


@router.get("/info")
async def get_session_info(request: Request) -> Dict[str, Any]:
    """Get current session information"""
    session_id = getattr(request.state, "session_id", None)

    if not session_id:
        return {"error": "No session ID found", "session_id": None}

    session = await session_manager.get_session(session_id)

    if session:
        controller = session.controller
        return {
            "session_id": session_id,
            "created_at": session.created_at.isoformat(),
            "age_minutes": round(session.age_minutes, 2),
            "idle_minutes": round(session.idle_minutes, 2),
            "unit": controller.unit.value,
            "has_reading": controller.reading is not None,
            "location_active": controller.location_active,
        }
    else:
        return {"session_id": session_id, "error": "Session not found in manager"}


@router.delete("/")
async def destroy_session(request: Request) -> Dict[str, Any]:
    """Destroy current session"""
    session_id = getattr(request.state, "session_id", None)

    if session_id and await session_manager.destroy_session(session_id):
        return {"message": "Session destroyed", "session_id": session_id}
    else:
        return {"error": "No session to destroy"}
