"""Session management for per-user weather controllers"""

import asyncio
import uuid
from typing import Callable, Dict, Optional, Any
from datetime import datetime
from clima.config import settings
from clima.core.controller import WeatherController
from clima.core.weather_api import WeatherLookupService
import logging

logger = logging.getLogger(__name__)


def default_controller_factory() -> WeatherController:
    """Builds a controller wired to the configured OpenWeather endpoint."""
    service = WeatherLookupService(settings.lookup_config())
    return WeatherController(service, unit=settings.default_unit)


class UserSession:
    """Represents one client's weather session"""

    def __init__(self, session_id: str, controller: WeatherController):
        self.session_id = session_id
        self.controller = controller
        self.created_at = datetime.now()
        self.last_accessed = datetime.now()

    def touch(self):
        """Update last accessed time"""
        self.last_accessed = datetime.now()

    @property
    def age_minutes(self) -> float:
        """Get session age in minutes"""
        return (datetime.now() - self.created_at).total_seconds() / 60

    @property
    def idle_minutes(self) -> float:
        """Get idle time in minutes"""
        return (datetime.now() - self.last_accessed).total_seconds() / 60


class SessionManager:
    """Keeps one WeatherController per session and expires idle ones"""

    def __init__(
        self,
        controller_factory: Callable[[], WeatherController] = default_controller_factory,
        idle_timeout_minutes: Optional[int] = None,
    ):
        """Initializes the session manager's state."""
        self.controller_factory = controller_factory
        self.idle_timeout_minutes = (
            idle_timeout_minutes
            if idle_timeout_minutes is not None
            else settings.session_idle_timeout_minutes
        )
        self._sessions: Dict[str, UserSession] = {}
        self._lock = asyncio.Lock()
        self._cleanup_task: Optional[asyncio.Task] = None

    async def start(self):
        """Start the cleanup task"""
        if not self._cleanup_task:
            self._cleanup_task = asyncio.create_task(self._cleanup_loop())
            logger.info("Session manager started")

    async def stop(self):
        """Stop the cleanup task and forget all sessions"""
        if self._cleanup_task:
            self._cleanup_task.cancel()
            try:
                await self._cleanup_task
            except asyncio.CancelledError:
                pass
            self._cleanup_task = None

        async with self._lock:
            self._sessions.clear()

        logger.info("Session manager stopped")

    async def get_or_create_session(
        self, session_id: Optional[str] = None
    ) -> UserSession:
        """Get existing session or create new one"""
        async with self._lock:
            if not session_id:
                session_id = str(uuid.uuid4())

            if session_id in self._sessions:
                session = self._sessions[session_id]
                session.touch()
                return session

            logger.info(f"Creating new session {session_id}")
            session = UserSession(session_id, self.controller_factory())
            self._sessions[session_id] = session
            return session

    async def get_session(self, session_id: str) -> Optional[UserSession]:
        """Get existing session by ID"""
        async with self._lock:
            session = self._sessions.get(session_id)
            if session:
                session.touch()
            return session

    async def destroy_session(self, session_id: str) -> bool:
        """Destroy a specific session"""
        async with self._lock:
            if session_id not in self._sessions:
                return False
            del self._sessions[session_id]
            logger.info(f"Destroyed session {session_id}")
            return True

    async def _cleanup_loop(self):
        """Background task to clean up idle sessions"""
        while True:
            try:
                await asyncio.sleep(60)  # Check every minute
                await self.cleanup_expired_sessions()
            except asyncio.CancelledError:
                break

    async def cleanup_expired_sessions(self) -> int:
        """Remove idle sessions, returning how many were dropped"""
        async with self._lock:
            expired_sessions = [
                session_id
                for session_id, session in self._sessions.items()
                if session.idle_minutes > self.idle_timeout_minutes
            ]

            for session_id in expired_sessions:
                logger.info(f"Cleaning up expired session {session_id}")
                del self._sessions[session_id]

            return len(expired_sessions)

    @property
    def active_sessions(self) -> int:
        """Get count of active sessions"""
        return len(self._sessions)

    def get_session_info(self) -> Dict[str, Any]:
        """Get information about all sessions"""
        return {
            "active_sessions": self.active_sessions,
            "sessions": [
                {
                    "session_id": session.session_id,
                    "age_minutes": round(session.age_minutes, 2),
                    "idle_minutes": round(session.idle_minutes, 2),
                    "unit": session.controller.unit.value,
                    "created_at": session.created_at.isoformat(),
                }
                for session in self._sessions.values()
            ],
        }


# Global instance
session_manager = SessionManager()
