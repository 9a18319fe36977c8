"""Tests for session storage."""

import json
from unittest.mock import MagicMock, patch

import pytest
import redis
from plainwiki.core.sessions import (
    RedisSessionStore,
    Session,
    SessionBackendUnavailableError,
    SessionDecodeError,
    SessionEncodeError,
    SessionNotFoundError,
    SessionReadError,
    SessionStore,
    SessionStoreError,
    SessionWriteError,
)


def _dict_backed_client() -> MagicMock:
    """Mock Redis client that keeps SET values in a dict."""
    data: dict[str, bytes] = {}
    client = MagicMock()
    client.ping.return_value = True
    client.set.side_effect = lambda key, value: data.__setitem__(
        key, value.encode() if isinstance(value, str) else value
    )
    client.get.side_effect = data.get
    return client


@pytest.fixture
def client() -> MagicMock:
    return _dict_backed_client()


@pytest.fixture
def store(client: MagicMock) -> RedisSessionStore:
    with patch("plainwiki.core.sessions.redis.Redis", return_value=client):
        return RedisSessionStore("localhost:6379")


class TestRedisSessionStoreInit:
    """Tests for RedisSessionStore construction."""

    def test__reachable_backend__pings_once(self, client: MagicMock) -> None:
        """Ping the backend during construction."""
        with patch(
            "plainwiki.core.sessions.redis.Redis", return_value=client
        ) as redis_cls:
            store = RedisSessionStore("cache.local:6380", db=3)

        client.ping.assert_called_once_with()
        redis_cls.assert_called_once_with(
            host="cache.local",
            port=6380,
            db=3,
            socket_connect_timeout=5,
        )
        assert store.address == "cache.local:6380"

    def test__ping_fails__raises_backend_unavailable(self) -> None:
        """Raise when the backend does not answer the ping."""
        client = MagicMock()
        client.ping.side_effect = redis.ConnectionError("refused")

        with patch("plainwiki.core.sessions.redis.Redis", return_value=client):
            with pytest.raises(SessionBackendUnavailableError) as exc_info:
                RedisSessionStore("localhost:6379")

        assert isinstance(exc_info.value.__cause__, redis.ConnectionError)

    def test__nothing_listening__raises_backend_unavailable(self) -> None:
        """Fail construction against an address with no server."""
        with pytest.raises(SessionBackendUnavailableError):
            RedisSessionStore("127.0.0.1:1")

    def test__store__satisfies_protocol(self, store: RedisSessionStore) -> None:
        """RedisSessionStore can be used where a SessionStore is expected."""
        typed: SessionStore = store

        assert typed is store


class TestRedisSessionStoreSet:
    """Tests for RedisSessionStore.set()."""

    def test__session__is_written_as_json_without_expiry(
        self, store: RedisSessionStore, client: MagicMock
    ) -> None:
        """Send SET with a JSON payload and no TTL argument."""
        store.set("abc", Session(values={"user": "ada"}))

        client.set.assert_called_once_with("abc", json.dumps({"values": {"user": "ada"}}))

    def test__unserializable_session__raises_encode_error(
        self, store: RedisSessionStore, client: MagicMock
    ) -> None:
        """Raise SessionEncodeError when the payload cannot be serialized."""
        with pytest.raises(SessionEncodeError) as exc_info:
            store.set("abc", Session(values={"bad": object()}))

        assert isinstance(exc_info.value.__cause__, TypeError)
        client.set.assert_not_called()

    def test__backend_failure__raises_write_error(
        self, store: RedisSessionStore, client: MagicMock
    ) -> None:
        """Raise SessionWriteError with the backend error attached."""
        client.set.side_effect = redis.ConnectionError("gone")

        with pytest.raises(SessionWriteError) as exc_info:
            store.set("abc", Session())

        assert isinstance(exc_info.value.__cause__, redis.ConnectionError)


class TestRedisSessionStoreGet:
    """Tests for RedisSessionStore.get()."""

    def test__after_set__returns_equal_session(self, store: RedisSessionStore) -> None:
        """Return a session equal to the one stored."""
        session = Session(values={"user": "ada", "visits": 3, "tags": ["a", "b"]})
        store.set("abc", session)

        assert store.get("abc") == session

    def test__unset_id__raises_not_found(self, store: RedisSessionStore) -> None:
        """Raise SessionNotFoundError, a SessionStoreError, for unknown ids."""
        with pytest.raises(SessionStoreError) as exc_info:
            store.get("missing")

        assert isinstance(exc_info.value, SessionNotFoundError)
        assert isinstance(exc_info.value.__cause__, KeyError)

    @pytest.mark.parametrize(
        "raw",
        [b"not json", b"[1, 2]", b'{"values": 1}', b"\xff\xfe"],
    )
    def test__corrupt_data__raises_decode_error(
        self, store: RedisSessionStore, client: MagicMock, raw: bytes
    ) -> None:
        """Raise SessionDecodeError when stored data is not a session."""
        client.get.side_effect = None
        client.get.return_value = raw

        with pytest.raises(SessionDecodeError) as exc_info:
            store.get("abc")

        assert isinstance(exc_info.value.__cause__, ValueError)

    def test__backend_failure__raises_read_error(
        self, store: RedisSessionStore, client: MagicMock
    ) -> None:
        """Raise SessionReadError with the backend error attached."""
        client.get.side_effect = redis.TimeoutError("slow")

        with pytest.raises(SessionReadError) as exc_info:
            store.get("abc")

        assert isinstance(exc_info.value.__cause__, redis.TimeoutError)
