"""Tests for locking, auth and configuration."""

import asyncio
from unittest.mock import patch

import pytest
from fastapi import HTTPException

from parity.api.auth import issue_token, require_user, verify_token
from parity.config import Settings
from parity.curve.presets import CURVE_PRESETS, get_preset
from parity.ledger.database import normalize_database_url
from parity.utils.locks import (
    LaunchLock,
    LockTimeoutError,
    _launch_locks,
    get_launch_lock,
    release_launch_lock,
)


class TestLaunchLock:
    """Tests for per-launch locks."""

    @pytest.mark.asyncio
    async def test_same_lock_per_launch(self):
        assert get_launch_lock("a") is get_launch_lock("a")
        assert get_launch_lock("a") is not get_launch_lock("b")

    @pytest.mark.asyncio
    async def test_timeout_while_held(self):
        async with LaunchLock("launch-1"):
            with pytest.raises(LockTimeoutError):
                async with LaunchLock("launch-1", timeout=0.01):
                    pass

    @pytest.mark.asyncio
    async def test_released_after_error(self):
        with pytest.raises(RuntimeError):
            async with LaunchLock("launch-1"):
                raise RuntimeError("boom")

        assert not get_launch_lock("launch-1").locked()

    @pytest.mark.asyncio
    async def test_serializes_operations(self):
        order = []

        async def worker(name: str):
            async with LaunchLock("launch-1"):
                order.append(f"{name}-start")
                await asyncio.sleep(0.01)
                order.append(f"{name}-end")

        await asyncio.gather(worker("a"), worker("b"))

        assert order in (
            ["a-start", "a-end", "b-start", "b-end"],
            ["b-start", "b-end", "a-start", "a-end"],
        )

    @pytest.mark.asyncio
    async def test_release_launch_lock(self):
        get_launch_lock("gone")
        release_launch_lock("gone")
        assert "gone" not in _launch_locks


class TestAuth:
    """Tests for bearer tokens."""

    def test_token_round_trip(self):
        token = issue_token("user-1", "secret")
        assert verify_token(token, "secret") == "user-1"

    def test_token_rejected(self):
        token = issue_token("user-1", "secret")
        assert verify_token(token, "other-secret") is None
        assert verify_token("user-2." + token.split(".")[1], "secret") is None
        assert verify_token("no-signature", "secret") is None

    @pytest.mark.asyncio
    async def test_require_user_dev_mode(self):
        assert await require_user("Bearer user-1") == "user-1"

    @pytest.mark.asyncio
    async def test_require_user_missing_header(self):
        with pytest.raises(HTTPException) as exc_info:
            await require_user(None)
        assert exc_info.value.status_code == 401

        with pytest.raises(HTTPException):
            await require_user("Basic abc")

    @pytest.mark.asyncio
    async def test_require_user_with_secret(self):
        settings = Settings(auth_secret="secret", environment="test")
        with patch("parity.api.auth.get_settings", return_value=settings):
            assert await require_user(f"Bearer {issue_token('user-1', 'secret')}") == "user-1"

            with pytest.raises(HTTPException) as exc_info:
                await require_user("Bearer user-1")
            assert exc_info.value.detail == "Invalid token"

    @pytest.mark.asyncio
    async def test_production_without_secret_rejects(self):
        settings = Settings(auth_secret="", environment="production")
        with patch("parity.api.auth.get_settings", return_value=settings):
            with pytest.raises(HTTPException):
                await require_user("Bearer user-1")


class TestSettings:
    """Tests for configuration helpers."""

    def test_redact_url(self):
        assert (
            Settings._redact_url("postgresql://parity:hunter2@db:5432/parity")
            == "postgresql://parity:***@db:5432/parity"
        )
        assert (
            Settings._redact_url("https://mainnet.helius-rpc.com/?api-key=abc")
            == "https://mainnet.helius-rpc.com/?api-key=***"
        )

    def test_safe_dict_hides_secret(self):
        settings = Settings(auth_secret="secret")
        assert "secret" not in str(settings.get_safe_dict())

    def test_allowed_origins(self):
        settings = Settings(cors_origins="https://a.app, https://b.app,")
        assert settings.allowed_origins == ["https://a.app", "https://b.app"]

    def test_normalize_database_url(self):
        assert normalize_database_url("sqlite:///./x.db") == "sqlite+aiosqlite:///./x.db"
        assert normalize_database_url("postgres://u@h/db") == "postgresql+asyncpg://u@h/db"
        assert normalize_database_url("postgresql://u@h/db") == "postgresql+asyncpg://u@h/db"


class TestPresets:
    def test_known_presets(self):
        assert set(CURVE_PRESETS) == {"community", "standard", "scarce"}
        assert get_preset("scarce").max_supply == 100_000_000

    def test_unknown_preset(self):
        with pytest.raises(ValueError):
            get_preset("rug")
