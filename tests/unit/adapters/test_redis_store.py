"""Unit tests for the Redis adapter — no running Redis required."""
from __future__ import annotations

from typing import Any
from unittest.mock import MagicMock, patch

import pytest
from redis import exceptions as redis_exceptions

from ratekeeper.adapters.redis import TOKEN_BUCKET_LUA, RedisAtomicStore
from ratekeeper.application.rate_limit import TOKEN_BUCKET_OP, AtomicStore
from ratekeeper.kernel.errors import (
    ExternalServiceError,
    StoreConnectionError,
    StoreTimeoutError,
    UnknownOperationError,
)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _make_store(**kwargs: Any) -> tuple[RedisAtomicStore, MagicMock, dict[str, MagicMock]]:
    """Return (store, mock_client, scripts_by_source) without a real Redis."""
    scripts: dict[str, MagicMock] = {}

    def register_script(source: str) -> MagicMock:
        script = MagicMock(name=f"script-{len(scripts)}", return_value=1)
        scripts[source] = script
        return script

    client = MagicMock()
    client.register_script = MagicMock(side_effect=register_script)
    return RedisAtomicStore(client=client, **kwargs), client, scripts


# ---------------------------------------------------------------------------
# Construction
# ---------------------------------------------------------------------------


class TestConstruction:
    def test_registers_token_bucket_script(self) -> None:
        _, client, scripts = _make_store()
        client.register_script.assert_called_once_with(TOKEN_BUCKET_LUA)
        assert TOKEN_BUCKET_LUA in scripts

    def test_satisfies_port(self) -> None:
        store, _, _ = _make_store()
        assert isinstance(store, AtomicStore)

    def test_requires_url_or_client(self) -> None:
        with pytest.raises(ValueError):
            RedisAtomicStore()

    def test_builds_client_from_url_with_timeouts(self) -> None:
        import ratekeeper.adapters.redis.store as store_mod

        client = MagicMock()
        with patch.object(store_mod.redis.Redis, "from_url", return_value=client) as from_url:
            RedisAtomicStore("redis://cache:6379/1", socket_timeout=0.25)

        from_url.assert_called_once_with(
            "redis://cache:6379/1",
            socket_timeout=0.25,
            socket_connect_timeout=0.25,
        )
        client.register_script.assert_called_once_with(TOKEN_BUCKET_LUA)


# ---------------------------------------------------------------------------
# run_atomic
# ---------------------------------------------------------------------------


class TestRunAtomic:
    def test_passes_key_args_and_ttl(self) -> None:
        store, _, scripts = _make_store()
        result = store.run_atomic(TOKEN_BUCKET_OP, "rate-limit:u1", [10, 5.0, 1_700_000_000_000])

        assert result == 1
        scripts[TOKEN_BUCKET_LUA].assert_called_once_with(
            keys=["rate-limit:u1"],
            args=["10", "5.0", "1700000000000", "3600"],
        )

    def test_custom_ttl(self) -> None:
        store, _, scripts = _make_store(ttl_seconds=120)
        store.run_atomic(TOKEN_BUCKET_OP, "k", [1, 1.0, 0])
        assert scripts[TOKEN_BUCKET_LUA].call_args.kwargs["args"][-1] == "120"

    def test_returns_script_result_untouched(self) -> None:
        store, _, scripts = _make_store()
        scripts[TOKEN_BUCKET_LUA].return_value = 0
        assert store.run_atomic(TOKEN_BUCKET_OP, "k", [1, 1.0, 0]) == 0

    def test_unknown_operation(self) -> None:
        store, _, _ = _make_store()
        with pytest.raises(UnknownOperationError):
            store.run_atomic("leaky_bucket", "k", [])

    def test_register_additional_script(self) -> None:
        store, _, scripts = _make_store()
        store.register("peek", "return redis.call('HGET', KEYS[1], ARGV[1])", "tokens")
        store.run_atomic("peek", "k", [])
        scripts["return redis.call('HGET', KEYS[1], ARGV[1])"].assert_called_once_with(
            keys=["k"], args=["tokens"]
        )


class TestErrorTranslation:
    @pytest.mark.parametrize(
        "raised,expected",
        [
            (redis_exceptions.TimeoutError("read timed out"), StoreTimeoutError),
            (redis_exceptions.ConnectionError("refused"), StoreConnectionError),
            (redis_exceptions.ResponseError("NOSCRIPT"), ExternalServiceError),
            (redis_exceptions.RedisError("boom"), ExternalServiceError),
        ],
    )
    def test_redis_errors_are_translated(self, raised: Exception, expected: type[Exception]) -> None:
        store, _, scripts = _make_store()
        scripts[TOKEN_BUCKET_LUA].side_effect = raised

        with pytest.raises(expected) as exc_info:
            store.run_atomic(TOKEN_BUCKET_OP, "rate-limit:u1", [1, 1.0, 0])

        assert exc_info.value.__cause__ is raised
        assert exc_info.value.detail == {"key": "rate-limit:u1"}

    def test_connection_error_names_resource(self) -> None:
        store, _, scripts = _make_store()
        scripts[TOKEN_BUCKET_LUA].side_effect = redis_exceptions.ConnectionError("refused")
        with pytest.raises(StoreConnectionError) as exc_info:
            store.run_atomic(TOKEN_BUCKET_OP, "k", [1, 1.0, 0])
        assert exc_info.value.resource == "redis"


# ---------------------------------------------------------------------------
# ping / close
# ---------------------------------------------------------------------------


class TestLifecycle:
    def test_ping_true(self) -> None:
        store, client, _ = _make_store()
        client.ping = MagicMock(return_value=True)
        assert store.ping() is True

    def test_ping_false_on_error(self) -> None:
        store, client, _ = _make_store()
        client.ping = MagicMock(side_effect=redis_exceptions.ConnectionError("down"))
        assert store.ping() is False

    def test_close_closes_client(self) -> None:
        store, client, _ = _make_store()
        store.close()
        client.close.assert_called_once()


# ---------------------------------------------------------------------------
# Lua source
# ---------------------------------------------------------------------------
# Static checks only. The script is executed against a real Redis in
# tests/integration/test_redis_store_integration.py
# (TestTokenBucketScript::test_matches_python_rendition).


class TestTokenBucketLua:
    def test_reads_and_writes_hash_fields(self) -> None:
        assert "HMGET" in TOKEN_BUCKET_LUA
        assert "'tokens'" in TOKEN_BUCKET_LUA
        assert "'last_refill_time'" in TOKEN_BUCKET_LUA

    def test_sets_expiry_with_default(self) -> None:
        assert "EXPIRE" in TOKEN_BUCKET_LUA
        assert "tonumber(ARGV[4]) or 3600" in TOKEN_BUCKET_LUA

    def test_missing_tokens_default_to_zero(self) -> None:
        assert "tonumber(state[1]) or 0" in TOKEN_BUCKET_LUA
