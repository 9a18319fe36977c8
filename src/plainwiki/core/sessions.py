"""Session storage.

Sessions are JSON-serialized and stored by caller-supplied id. The store is
handed to the application at construction time; any object satisfying
``SessionStore`` can stand in for the Redis backend.
"""

import json
import logging
from dataclasses import dataclass, field
from typing import Any, Protocol

import redis

logger = logging.getLogger(__name__)

CONNECT_TIMEOUT = 5


class SessionStoreError(Exception):
    """Base class for session store failures.

    The underlying cause is always chained as ``__cause__``.
    """


class SessionEncodeError(SessionStoreError):
    """Session could not be serialized."""


class SessionWriteError(SessionStoreError):
    """Backend rejected or failed the write."""


class SessionReadError(SessionStoreError):
    """Backend failed the read."""


class SessionNotFoundError(SessionStoreError):
    """No session is stored under the id."""


class SessionDecodeError(SessionStoreError):
    """Stored data is not a valid session."""


class SessionBackendUnavailableError(SessionStoreError):
    """Backend did not answer the startup ping."""


@dataclass
class Session:
    """Per-client session payload."""

    values: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {"values": self.values}

    @classmethod
    def from_dict(cls, data: object) -> "Session":
        if not isinstance(data, dict) or not isinstance(data.get("values"), dict):
            raise ValueError("session data must be an object with a 'values' object")
        return cls(values=data["values"])


class SessionStore(Protocol):
    """Key-value storage for sessions."""

    def set(self, session_id: str, session: Session) -> None: ...

    def get(self, session_id: str) -> Session: ...


class RedisSessionStore:
    """Session store backed by a Redis server.

    One client is shared by all requests. Values are written with plain
    ``SET`` and never expire.
    """

    def __init__(self, address: str, db: int = 0) -> None:
        """Connect to Redis and verify it answers.

        Args:
            address: Server address in "host:port" form
            db: Redis database number

        Raises:
            SessionBackendUnavailableError: If the server does not answer PING
        """
        host, _, port = address.rpartition(":")
        self._address = address
        self._client = redis.Redis(
            host=host,
            port=int(port),
            db=db,
            socket_connect_timeout=CONNECT_TIMEOUT,
        )

        try:
            self._client.ping()
        except redis.RedisError as e:
            raise SessionBackendUnavailableError(
                f"Failed to ping Redis at {address}: {e}",
            ) from e

        logger.info(f"Redis session store connected: {address} (db {db})")

    @property
    def address(self) -> str:
        return self._address

    def set(self, session_id: str, session: Session) -> None:
        """Store a session under an id.

        Raises:
            SessionEncodeError: If the session cannot be serialized
            SessionWriteError: If the backend write fails
        """
        try:
            data = json.dumps(session.to_dict())
        except (TypeError, ValueError) as e:
            raise SessionEncodeError("failed to save session to redis") from e

        try:
            self._client.set(session_id, data)
        except redis.RedisError as e:
            raise SessionWriteError("failed to save session to redis") from e

    def get(self, session_id: str) -> Session:
        """Fetch the session stored under an id.

        Raises:
            SessionNotFoundError: If nothing is stored under the id
            SessionReadError: If the backend read fails
            SessionDecodeError: If the stored data is not a valid session
        """
        try:
            data = self._client.get(session_id)
        except redis.RedisError as e:
            raise SessionReadError("failed to get session from redis") from e

        if data is None:
            raise SessionNotFoundError(
                "failed to get session from redis",
            ) from KeyError(session_id)

        try:
            return Session.from_dict(json.loads(data))
        except ValueError as e:
            raise SessionDecodeError("failed to unmarshal session data") from e
