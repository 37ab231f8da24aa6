"""Tests for the FastAPI endpoints."""

import json
from unittest.mock import AsyncMock, patch

import httpx
import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from parity.api.app import create_app
from parity.curve.factory import get_curve_client
from parity.ledger.database import close_db, get_engine
from parity.ledger.models import Base
from parity.market.geckoterminal import GeckoTerminalClient
from parity.solana.rpc import SolanaRpcClient

from .conftest import CHARITY_WALLET, new_address

AUTH = {"Authorization": "Bearer user-1"}
OTHER_AUTH = {"Authorization": "Bearer user-2"}
SIGNATURE = "5" * 88


@pytest_asyncio.fixture
async def test_app():
    """Create test application with fresh database."""
    # Create tables in memory database
    engine = get_engine()
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    app = create_app()

    yield app

    # Cleanup
    await close_db()


@pytest_asyncio.fixture
async def client(test_app):
    """Create async test client."""
    transport = ASGITransport(app=test_app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


async def create_launch(client: AsyncClient, headers=AUTH, **overrides) -> str:
    payload = {
        "name": "Parity Token",
        "symbol": "par",
        "description": "Fees fund charity",
        "curve_preset": "standard",
        "charity_wallet": CHARITY_WALLET,
    }
    payload.update(overrides)
    response = await client.post("/api/v1/launches", json=payload, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()["id"]


async def deploy_launch(client: AsyncClient, launch_id: str) -> dict:
    """Prepare and confirm; the dry-run client creates the pool at prepare."""
    response = await client.post(
        f"/api/v1/launches/{launch_id}/prepare-deploy",
        json={"creator_wallet": new_address()},
        headers=AUTH,
    )
    assert response.status_code == 200, response.text
    prepared = response.json()

    response = await client.post(
        f"/api/v1/launches/{launch_id}/confirm-deploy",
        json={
            "pool_address": prepared["pool_address"],
            "token_mint": prepared["base_mint"],
            "signature": SIGNATURE,
        },
        headers=AUTH,
    )
    assert response.status_code == 200, response.text
    return prepared


class TestHealthEndpoints:
    """Tests for health check endpoints."""

    @pytest.mark.asyncio
    async def test_health_check(self, client):
        response = await client.get("/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["service"] == "parity"

    @pytest.mark.asyncio
    async def test_detailed_health(self, client):
        response = await client.get("/health/detailed")

        assert response.status_code == 200
        data = response.json()
        assert data["curve_client"] == "dryrun"
        assert "environment" in data["config"]


class TestLaunchEndpoints:
    """Tests for launch CRUD."""

    @pytest.mark.asyncio
    async def test_requires_auth(self, client):
        response = await client.get("/api/v1/launches")
        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_create_and_list(self, client):
        launch_id = await create_launch(client)

        response = await client.get("/api/v1/launches", headers=AUTH)

        assert response.status_code == 200
        launches = response.json()
        assert len(launches) == 1
        assert launches[0]["id"] == launch_id
        assert launches[0]["symbol"] == "PAR"
        assert launches[0]["status"] == "pending"

    @pytest.mark.asyncio
    async def test_create_validation(self, client):
        response = await client.post(
            "/api/v1/launches",
            json={
                "name": "Bad",
                "symbol": "BAD",
                "curve_preset": "rug",
                "charity_wallet": CHARITY_WALLET,
            },
            headers=AUTH,
        )
        assert response.status_code == 422

        response = await client.post(
            "/api/v1/launches",
            json={
                "name": "Bad",
                "symbol": "BAD",
                "curve_preset": "standard",
                "charity_wallet": "0xdeadbeef",
            },
            headers=AUTH,
        )
        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_other_user_cannot_see_launch(self, client):
        launch_id = await create_launch(client)

        response = await client.get(f"/api/v1/launches/{launch_id}", headers=OTHER_AUTH)
        assert response.status_code == 404

        response = await client.get("/api/v1/launches", headers=OTHER_AUTH)
        assert response.json() == []

    @pytest.mark.asyncio
    async def test_update_and_delete_pending(self, client):
        launch_id = await create_launch(client)

        response = await client.patch(
            f"/api/v1/launches/{launch_id}", json={"name": "Renamed"}, headers=AUTH
        )
        assert response.status_code == 200
        assert response.json()["success"] is True

        response = await client.get(f"/api/v1/launches/{launch_id}", headers=AUTH)
        assert response.json()["name"] == "Renamed"
        assert response.json()["description"] == "Fees fund charity"

        response = await client.patch(
            f"/api/v1/launches/{launch_id}",
            json={"description": None, "name": None},
            headers=AUTH,
        )
        assert response.status_code == 200

        response = await client.get(f"/api/v1/launches/{launch_id}", headers=AUTH)
        assert response.json()["description"] is None
        assert response.json()["name"] == "Renamed"

        response = await client.delete(f"/api/v1/launches/{launch_id}", headers=AUTH)
        assert response.status_code == 200

        response = await client.get(f"/api/v1/launches/{launch_id}", headers=AUTH)
        assert response.status_code == 404


class TestDeployEndpoints:
    """Tests for the deploy lifecycle over HTTP."""

    @pytest.mark.asyncio
    async def test_full_deploy(self, client):
        launch_id = await create_launch(client)

        prepared = await deploy_launch(client, launch_id)

        response = await client.get(f"/api/v1/launches/{launch_id}", headers=AUTH)
        launch = response.json()
        assert launch["status"] == "active"
        assert launch["pool_address"] == prepared["pool_address"]
        assert launch["token_mint"] == prepared["base_mint"]
        assert launch["deploy_signature"] == SIGNATURE

    @pytest.mark.asyncio
    async def test_deployed_launch_is_locked(self, client):
        launch_id = await create_launch(client)
        await deploy_launch(client, launch_id)

        response = await client.patch(
            f"/api/v1/launches/{launch_id}", json={"name": "Renamed"}, headers=AUTH
        )
        assert response.status_code == 409
        assert response.json()["detail"] == "Cannot update deployed launch"

        response = await client.delete(f"/api/v1/launches/{launch_id}", headers=AUTH)
        assert response.status_code == 409

    @pytest.mark.asyncio
    async def test_prepare_after_deploy(self, client):
        launch_id = await create_launch(client)
        prepared = await deploy_launch(client, launch_id)

        response = await client.post(
            f"/api/v1/launches/{launch_id}/prepare-deploy",
            json={"creator_wallet": new_address()},
            headers=AUTH,
        )

        data = response.json()
        assert data["already_deployed"] is True
        assert data["transaction"] is None
        assert data["pool_address"] == prepared["pool_address"]

    @pytest.mark.asyncio
    async def test_confirm_missing_pool(self, client):
        launch_id = await create_launch(client)
        get_curve_client().auto_create = False
        response = await client.post(
            f"/api/v1/launches/{launch_id}/prepare-deploy",
            json={"creator_wallet": new_address()},
            headers=AUTH,
        )
        prepared = response.json()

        response = await client.post(
            f"/api/v1/launches/{launch_id}/confirm-deploy",
            json={
                "pool_address": prepared["pool_address"],
                "token_mint": prepared["base_mint"],
                "signature": SIGNATURE,
            },
            headers=AUTH,
        )

        assert response.status_code == 404
        assert response.json()["detail"] == "Pool not found on-chain"

    @pytest.mark.asyncio
    async def test_confirm_with_foreign_pool(self, client):
        """Another creator's live pool cannot activate this launch."""
        theirs = await create_launch(client, headers=OTHER_AUTH, symbol="THEIRS")
        response = await client.post(
            f"/api/v1/launches/{theirs}/prepare-deploy",
            json={"creator_wallet": new_address()},
            headers=OTHER_AUTH,
        )
        foreign = response.json()
        launch_id = await create_launch(client)
        await client.post(
            f"/api/v1/launches/{launch_id}/prepare-deploy",
            json={"creator_wallet": new_address()},
            headers=AUTH,
        )

        response = await client.post(
            f"/api/v1/launches/{launch_id}/confirm-deploy",
            json={
                "pool_address": foreign["pool_address"],
                "token_mint": foreign["base_mint"],
                "signature": SIGNATURE,
            },
            headers=AUTH,
        )

        assert response.status_code == 409
        response = await client.get(f"/api/v1/launches/{launch_id}", headers=AUTH)
        assert response.json()["status"] == "pending"

    @pytest.mark.asyncio
    async def test_recover_deploy(self, client):
        launch_id = await create_launch(client)
        curve = get_curve_client()
        curve.auto_create = False
        response = await client.post(
            f"/api/v1/launches/{launch_id}/prepare-deploy",
            json={"creator_wallet": new_address()},
            headers=AUTH,
        )
        prepared = response.json()
        body = {"pool_address": prepared["pool_address"], "token_mint": prepared["base_mint"]}

        response = await client.post(
            f"/api/v1/launches/{launch_id}/recover-deploy", json=body, headers=AUTH
        )
        assert response.json()["success"] is False

        curve.create_pool(prepared["pool_address"], prepared["base_mint"], "creator")
        response = await client.post(
            f"/api/v1/launches/{launch_id}/recover-deploy", json=body, headers=AUTH
        )
        assert response.json()["success"] is True
        assert response.json()["status"] == "active"

    @pytest.mark.asyncio
    async def test_sync_migration(self, client):
        launch_id = await create_launch(client)
        prepared = await deploy_launch(client, launch_id)
        get_curve_client().migrate_pool(prepared["pool_address"])

        response = await client.post(f"/api/v1/launches/{launch_id}/sync", headers=AUTH)

        assert response.status_code == 200
        assert response.json() == {"id": launch_id, "status": "migrated", "changed": True}

    @pytest.mark.asyncio
    async def test_explore_lists_deployed(self, client):
        pending_id = await create_launch(client, symbol="PEND")
        live_id = await create_launch(client, symbol="LIVE")
        await deploy_launch(client, live_id)

        response = await client.get("/api/v1/explore")

        ids = [launch["id"] for launch in response.json()]
        assert ids == [live_id]
        assert pending_id not in ids

    @pytest.mark.asyncio
    async def test_explore_by_status(self, client):
        pending_id = await create_launch(client, symbol="PEND")
        live_id = await create_launch(client, symbol="LIVE")
        await deploy_launch(client, live_id)

        response = await client.get("/api/v1/explore?status=pending")
        assert [launch["id"] for launch in response.json()] == [pending_id]

        response = await client.get("/api/v1/explore?status=active")
        assert [launch["id"] for launch in response.json()] == [live_id]

        response = await client.get("/api/v1/explore?status=launched")
        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_explore_ticker(self, client):
        await create_launch(client, symbol="PEND")
        live_id = await create_launch(
            client, symbol="LIVE", image="https://example.com/live.png"
        )
        prepared = await deploy_launch(client, live_id)

        response = await client.get("/api/v1/explore/ticker")

        assert response.status_code == 200
        items = response.json()
        assert [item["id"] for item in items] == [live_id]
        assert items[0]["symbol"] == "LIVE"
        assert items[0]["image"] == "https://example.com/live.png"
        assert items[0]["pool_address"] == prepared["pool_address"]
        assert float(items[0]["spot_price"]) > 0
        assert float(items[0]["pool_liquidity_sol"]) == 0


class TestMetadataEndpoint:
    """Tests for token metadata JSON."""

    @pytest.mark.asyncio
    async def test_metadata(self, client):
        launch_id = await create_launch(client, image="https://example.com/par.png")

        response = await client.get(f"/api/metadata/{launch_id}.json")

        assert response.status_code == 200
        data = response.json()
        assert data["name"] == "Parity Token"
        assert data["symbol"] == "PAR"
        assert data["image"] == "https://example.com/par.png"
        assert {"trait_type": "Charity Wallet", "value": CHARITY_WALLET} in data["attributes"]

    @pytest.mark.asyncio
    async def test_metadata_missing(self, client):
        response = await client.get("/api/metadata/nope.json")
        assert response.status_code == 404


class TestPoolEndpoints:
    """Tests for pool data endpoints."""

    @pytest.mark.asyncio
    async def test_pool_info(self, client):
        launch_id = await create_launch(client)
        prepared = await deploy_launch(client, launch_id)

        response = await client.get(f"/api/v1/pools/{prepared['pool_address']}")

        assert response.status_code == 200
        data = response.json()
        assert data["base_mint"] == prepared["base_mint"]
        assert data["is_migrated"] is False

    @pytest.mark.asyncio
    async def test_pool_not_found(self, client):
        response = await client.get(f"/api/v1/pools/{new_address()}")
        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_invalid_pool_address(self, client):
        response = await client.get("/api/v1/pools/not-an-address")
        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_ohlcv(self, client):
        rows = [[1700000000, 1.0, 1.2, 0.9, 1.1, 50.0]]
        market = GeckoTerminalClient(
            base_url="https://gecko.test/api/v2",
            transport=httpx.MockTransport(
                lambda request: httpx.Response(
                    200, json={"data": {"attributes": {"ohlcv_list": rows}}}
                )
            ),
        )
        pool = new_address()

        with patch("parity.web.controllers.pools.get_market_client", return_value=market):
            response = await client.get(f"/api/v1/pools/{pool}/ohlcv?timeframe=minute&aggregate=5")

        assert response.status_code == 200
        data = response.json()
        assert data["timeframe"] == "minute"
        assert data["candles"][0]["close"] == 1.1

        response = await client.get(f"/api/v1/pools/{pool}/ohlcv?timeframe=week")
        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_ohlcv_rejected_by_market_client(self, client):
        market = AsyncMock()
        market.get_ohlcv.side_effect = ValueError("Unsupported timeframe: hour")

        with patch("parity.web.controllers.pools.get_market_client", return_value=market):
            response = await client.get(f"/api/v1/pools/{new_address()}/ohlcv")

        assert response.status_code == 400
        assert response.json()["detail"] == "Unsupported timeframe: hour"


class TestChainEndpoints:
    """Tests for cluster status endpoints."""

    @pytest.fixture
    def rpc(self):
        results = {
            "getSlot": 1_000,
            "getBlockHeight": 900,
            "getEpochInfo": {"epoch": 7, "slotIndex": 250, "slotsInEpoch": 1_000},
            "getVersion": {"solana-core": "1.18.0"},
            "getSupply": {
                "context": {"slot": 1},
                "value": {
                    "total": 500_000_000_000_000_000,
                    "circulating": 400_000_000_000_000_000,
                    "nonCirculating": 100_000_000_000_000_000,
                    "nonCirculatingAccounts": [],
                },
            },
            "getBalance": {"context": {"slot": 1}, "value": 2_500_000_000},
        }

        def handler(request: httpx.Request) -> httpx.Response:
            body = json.loads(request.content)
            return httpx.Response(
                200, json={"jsonrpc": "2.0", "id": body["id"], "result": results[body["method"]]}
            )

        return SolanaRpcClient("https://rpc.test", transport=httpx.MockTransport(handler))

    @pytest.mark.asyncio
    async def test_status(self, client, rpc):
        with patch("parity.web.controllers.chain.get_rpc_client", return_value=rpc):
            response = await client.get("/api/v1/chain/status")

        assert response.status_code == 200
        data = response.json()
        assert data["epoch"] == 7
        assert data["epoch_progress"] == 25.0
        assert data["solana_version"] == "1.18.0"

    @pytest.mark.asyncio
    async def test_balance(self, client, rpc):
        address = new_address()
        with patch("parity.web.controllers.chain.get_rpc_client", return_value=rpc):
            response = await client.get(f"/api/v1/chain/balance/{address}")
            supply = await client.get("/api/v1/chain/supply")

        assert response.json()["lamports"] == 2_500_000_000
        assert response.json()["sol"] == "2.5"
        assert supply.json()["total"] == "500000000"

    @pytest.mark.asyncio
    async def test_rpc_failure(self, client):
        failing = SolanaRpcClient(
            "https://rpc.test", transport=httpx.MockTransport(lambda r: httpx.Response(500))
        )
        with patch("parity.web.controllers.chain.get_rpc_client", return_value=failing):
            response = await client.get("/api/v1/chain/supply")

        assert response.status_code == 502


class TestConfigEndpoints:
    """Tests for static configuration endpoints."""

    @pytest.mark.asyncio
    async def test_curve_presets(self, client):
        response = await client.get("/api/v1/config/curve-presets")

        ids = [preset["id"] for preset in response.json()]
        assert ids == ["community", "standard", "scarce"]

    @pytest.mark.asyncio
    async def test_fee_distribution(self, client):
        response = await client.get("/api/v1/config/fee-distribution")
        assert response.json()["charity"] == 30

    @pytest.mark.asyncio
    async def test_fee_curve(self, client):
        response = await client.get("/api/v1/config/fee-curve?market_cap=300000")

        data = response.json()
        assert data["fee_bps"] == 50
        assert data["fee_pct"] == "0.5"
        assert len(data["anchors"]) == 3

    @pytest.mark.asyncio
    async def test_fee_split(self, client):
        response = await client.get("/api/v1/config/fee-split?amount=1001")

        assert response.status_code == 200
        assert response.json()["shares"] == {
            "platform": 150,
            "meteora": 300,
            "creator": 250,
            "charity": 301,
        }

    @pytest.mark.asyncio
    async def test_fee_split_negative_amount(self, client):
        response = await client.get("/api/v1/config/fee-split?amount=-5")

        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_charities(self, client):
        response = await client.get("/api/v1/config/charities")
        assert response.json()[0]["address"] == "random"
