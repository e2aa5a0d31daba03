"""Session management for reasoning-structures.

A ReasoningSession owns exactly one engine for its lifetime. The
SessionManager keys sessions by id and serializes access to its registry with
an asyncio.Lock; engines themselves are not locked, so callers should drive a
given session from one task at a time.
"""

from __future__ import annotations

import asyncio
from datetime import datetime, timedelta
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr

from reasoning_structures.config import Settings, get_settings
from reasoning_structures.engines.chain import ChainOfThoughts
from reasoning_structures.engines.graph import GraphOfThoughts
from reasoning_structures.engines.tree import TreeOfThoughts
from reasoning_structures.logging import get_logger
from reasoning_structures.models.core import StructureKind
from reasoning_structures.tools.base import AgentTool
from reasoning_structures.tools.chain import ChainOfThoughtsTool
from reasoning_structures.tools.graph import GraphOfThoughtsTool
from reasoning_structures.tools.tree import TreeOfThoughtsTool

logger = get_logger(__name__)

Engine = ChainOfThoughts | TreeOfThoughts | GraphOfThoughts

_TOOLS: dict[StructureKind, type[AgentTool]] = {
    StructureKind.CHAIN: ChainOfThoughtsTool,
    StructureKind.TREE: TreeOfThoughtsTool,
    StructureKind.GRAPH: GraphOfThoughtsTool,
}


class ReasoningSession(BaseModel):
    """A reasoning session and the engine it owns.

    Examples:
        >>> session = ReasoningSession.open(StructureKind.TREE, problem="Fix login bug")
        >>> session.engine.root.content
        'Fix login bug'
        >>> session.tool.handle({"action": "add_thought", "content": "check expiry"}).status
        <ToolStatus.SUCCESS: 'success'>
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    id: str = Field(
        default_factory=lambda: str(uuid4()),
        description="Unique identifier for this session (UUID)",
    )
    kind: StructureKind = Field(description="Topology of the owned engine")
    created_at: datetime = Field(
        default_factory=datetime.now,
        description="Timestamp when the session was created",
    )
    engine: Engine = Field(description="The engine owned by this session")

    _settings: Settings | None = PrivateAttr(default=None)
    _tool: AgentTool | None = PrivateAttr(default=None)

    @classmethod
    def open(
        cls,
        kind: StructureKind | str,
        problem: str | None = None,
        settings: Settings | None = None,
    ) -> ReasoningSession:
        """Create a session with a fresh engine of the given kind.

        Args:
            kind: chain, tree or graph
            problem: Root problem statement; only used by tree sessions
            settings: Settings for the session's tool (defaults to get_settings())
        """
        kind = StructureKind(kind)
        settings = settings or get_settings()
        engine: Engine
        if kind is StructureKind.CHAIN:
            engine = ChainOfThoughts()
        elif kind is StructureKind.TREE:
            engine = TreeOfThoughts(problem or settings.default_problem)
        else:
            engine = GraphOfThoughts()
        session = cls(kind=kind, engine=engine)
        session._settings = settings
        return session

    @property
    def tool(self) -> AgentTool:
        """The action tool for this session's engine, built on first access."""
        if self._tool is None:
            self._tool = _TOOLS[self.kind](self.engine, self._settings)
        return self._tool


class SessionManager:
    """Async registry of reasoning sessions.

    Examples:
        >>> manager = SessionManager(max_sessions=10)
        >>> session = await manager.create(StructureKind.GRAPH)
        >>> assert await manager.get(session.id) is session
        >>> assert await manager.count() == 1
        >>> assert await manager.delete(session.id) is True
    """

    def __init__(self, max_sessions: int | None = None, settings: Settings | None = None):
        """Initialize the session manager.

        Args:
            max_sessions: Maximum number of sessions to store
                (defaults to settings.max_sessions)
            settings: Settings handed to new sessions (defaults to get_settings())
        """
        self._settings = settings or get_settings()
        self._max_sessions = max_sessions or self._settings.max_sessions
        self._sessions: dict[str, ReasoningSession] = {}
        self._lock = asyncio.Lock()

    async def create(
        self,
        kind: StructureKind | str,
        problem: str | None = None,
    ) -> ReasoningSession:
        """Create and register a new session.

        Raises:
            RuntimeError: If max_sessions limit is reached
            ValueError: If ``kind`` is not a structure kind
        """
        async with self._lock:
            if len(self._sessions) >= self._max_sessions:
                raise RuntimeError(f"Maximum session limit reached ({self._max_sessions})")

            session = ReasoningSession.open(kind, problem, self._settings)
            self._sessions[session.id] = session
            logger.debug("Created %s session %s", session.kind, session.id)
            return session

    async def get(self, session_id: str) -> ReasoningSession | None:
        async with self._lock:
            return self._sessions.get(session_id)

    async def delete(self, session_id: str) -> bool:
        """Remove a session by ID.

        Returns:
            True if the session was deleted, False if not found
        """
        async with self._lock:
            if session_id not in self._sessions:
                return False
            del self._sessions[session_id]
            return True

    async def list_sessions(
        self,
        *,
        kind: StructureKind | None = None,
        limit: int = 100,
    ) -> list[ReasoningSession]:
        """List sessions, most recent first, optionally filtered by kind."""
        async with self._lock:
            sessions = list(self._sessions.values())

            if kind is not None:
                sessions = [s for s in sessions if s.kind == kind]

            sessions.sort(key=lambda s: s.created_at, reverse=True)
            return sessions[:limit]

    async def cleanup_expired(self, max_age_seconds: int | None = None) -> int:
        """Remove sessions older than the specified age.

        Args:
            max_age_seconds: Maximum age in seconds
                (defaults to settings.session_timeout)

        Returns:
            Number of sessions removed
        """
        if max_age_seconds is None:
            max_age_seconds = self._settings.session_timeout
        async with self._lock:
            cutoff = datetime.now() - timedelta(seconds=max_age_seconds)

            to_remove = [
                session_id
                for session_id, session in self._sessions.items()
                if session.created_at < cutoff
            ]

            for session_id in to_remove:
                del self._sessions[session_id]

            if to_remove:
                logger.info("Removed %d expired sessions", len(to_remove))
            return len(to_remove)

    async def count(self) -> int:
        async with self._lock:
            return len(self._sessions)

    async def clear(self) -> None:
        async with self._lock:
            self._sessions.clear()


__all__ = ["Engine", "ReasoningSession", "SessionManager"]
