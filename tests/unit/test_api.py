"""API tests through the ASGI app with mocked persistence."""

from unittest.mock import AsyncMock

import pytest
from httpx import AsyncClient

from src.fl_bets.api import router as bets_router
from src.fl_bets.application.service import SideBetApplicationService
from src.fl_common.enums import SeasonPeriod
from src.fl_ledger.api import router as ledger_router
from src.fl_ledger.application.service import LedgerApplicationService
from src.fl_social.api import analytics_router
from src.fl_social.api import router as social_router
from src.fl_social.application.analytics_service import AnalyticsApplicationService
from src.fl_social.application.service import SeasonApplicationService
from src.fl_social.domain.models import Season

PREVIEW_BODY = {
    "roster": ["A", "B"],
    "configs": [
        {"type": "greenie", "amount_cents": 500, "enabled": True},
        {"type": "bingo_bango_bongo", "amount_cents": 100, "enabled": True},
    ],
    "holes": [
        {"hole_number": 3, "par": 3, "proximities": {"A": 6.0, "B": 15.0}, "bingo": "B"},
        {"hole_number": 7, "par": 3, "greenie": "B", "bango": "B", "bongo": "B"},
        {"hole_number": 12, "par": 3, "proximities": {"A": 2.0, "B": None}},
    ],
}


class TestHealth:
    async def test_health(self, client: AsyncClient) -> None:
        resp = await client.get("/health")
        assert resp.status_code == 200
        assert resp.json()["status"] == "ok"

    async def test_request_id_header(self, client: AsyncClient) -> None:
        resp = await client.get("/health")
        assert resp.headers["x-request-id"].startswith("req_")


class TestSideBetPreview:
    async def test_preview(self, client: AsyncClient) -> None:
        resp = await client.post("/api/v1/side-bets/preview", json=PREVIEW_BODY)

        assert resp.status_code == 200
        body = resp.json()
        assert body["code"] == 0
        # greenie A 2 - B 1 -> A +500; bbb B 3 - A 0 -> B +300
        balances = {b["user_id"]: b["amount_cents"] for b in body["data"]["balances"]}
        assert balances == {"A": 200, "B": -200}
        assert body["data"]["transfers"] == [
            {"from_user_id": "B", "to_user_id": "A", "amount_cents": 200, "amount_display": "$2.00"}
        ]

    async def test_bad_par_is_typed_error(self, client: AsyncClient) -> None:
        body = {**PREVIEW_BODY, "holes": [{"hole_number": 1, "par": 7}]}
        resp = await client.post("/api/v1/side-bets/preview", json=body)

        assert resp.status_code == 422
        assert resp.json()["code"] == 1003
        assert resp.json()["request_id"] == resp.headers["x-request-id"]

    async def test_unknown_winner(self, client: AsyncClient) -> None:
        body = {**PREVIEW_BODY, "holes": [{"hole_number": 3, "par": 3, "greenie": "Z"}]}
        resp = await client.post("/api/v1/side-bets/preview", json=body)

        assert resp.status_code == 422
        assert resp.json()["code"] == 1005


class TestSettleMatch:
    async def test_duplicate_config_type(self, client: AsyncClient) -> None:
        body = {
            **PREVIEW_BODY,
            "configs": [
                {"type": "greenie", "amount_cents": 500, "enabled": True},
                {"type": "greenie", "amount_cents": 100, "enabled": True},
            ],
        }
        resp = await client.post("/api/v1/matches/m-1/side-bets/settle", json=body)

        assert resp.status_code == 422
        assert resp.json()["code"] == 1008

    async def test_settle_commits(
        self, client: AsyncClient, db_session: AsyncMock, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        repo = AsyncMock()
        repo.list_bet_entries_for_update.return_value = []
        repo.replace_bet_entries.return_value = []
        ledger = LedgerApplicationService(repo=repo)
        monkeypatch.setattr(bets_router, "_service", SideBetApplicationService(ledger=ledger))

        resp = await client.post("/api/v1/matches/m-1/side-bets/settle", json=PREVIEW_BODY)

        assert resp.status_code == 200
        assert resp.json()["data"]["match_id"] == "m-1"
        assert repo.replace_bet_entries.await_count == 3
        db_session.commit.assert_awaited_once()


class TestEstimates:
    async def test_nassau(self, client: AsyncClient) -> None:
        resp = await client.post(
            "/api/v1/bets/estimates",
            json={"bet_type": "nassau", "unit_value_cents": 100, "num_participants": 3},
        )
        assert resp.status_code == 200
        assert resp.json()["data"]["max_payout_cents"] == 600

    async def test_zero_unit(self, client: AsyncClient) -> None:
        resp = await client.post(
            "/api/v1/bets/estimates",
            json={"bet_type": "skins", "unit_value_cents": 0, "num_participants": 3},
        )
        assert resp.status_code == 422
        assert resp.json()["code"] == 1001


class TestLedgerEndpoints:
    async def test_entry_not_found(self, client: AsyncClient, monkeypatch: pytest.MonkeyPatch) -> None:
        repo = AsyncMock()
        repo.get_entry.return_value = None
        monkeypatch.setattr(ledger_router, "_service", LedgerApplicationService(repo=repo))

        resp = await client.post("/api/v1/ledger/entries/5/settle", json={"settled_by": "A"})

        assert resp.status_code == 404
        assert resp.json()["code"] == 2001

    async def test_match_ledger(self, client: AsyncClient, monkeypatch: pytest.MonkeyPatch) -> None:
        repo = AsyncMock()
        repo.list_match_entries.return_value = []
        monkeypatch.setattr(ledger_router, "_service", LedgerApplicationService(repo=repo))

        resp = await client.get("/api/v1/matches/m-1/ledger")

        assert resp.status_code == 200
        assert resp.json()["data"]["match_id"] == "m-1"


class TestSeasonEndpoints:
    async def test_custom_without_bounds(self, client: AsyncClient, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(
            social_router, "_service", SeasonApplicationService(repo=AsyncMock(), ledger_repo=AsyncMock())
        )

        resp = await client.post("/api/v1/groups/g-1/seasons", json={"period": "custom"})

        assert resp.status_code == 422
        assert resp.json()["code"] == 3002

    async def test_create_monthly(self, client: AsyncClient, monkeypatch: pytest.MonkeyPatch) -> None:
        repo = AsyncMock()
        repo.get_active_for_group.return_value = None

        async def _echo(db: object, season: Season) -> Season:
            return season

        repo.create.side_effect = _echo
        monkeypatch.setattr(social_router, "_service", SeasonApplicationService(repo=repo, ledger_repo=AsyncMock()))

        resp = await client.post(
            "/api/v1/groups/g-1/seasons",
            json={"period": "monthly", "reference_date": "2024-02-10T12:00:00Z"},
        )

        assert resp.status_code == 201
        data = resp.json()["data"]
        assert data["name"] == "February 2024"
        assert data["period"] == SeasonPeriod.MONTHLY.value
        assert data["end_date"].startswith("2024-02-29")

    async def test_season_not_found(self, client: AsyncClient, monkeypatch: pytest.MonkeyPatch) -> None:
        repo = AsyncMock()
        repo.get.return_value = None
        monkeypatch.setattr(social_router, "_service", SeasonApplicationService(repo=repo, ledger_repo=AsyncMock()))

        resp = await client.get("/api/v1/seasons/missing")

        assert resp.status_code == 404
        assert resp.json()["code"] == 3001


class TestAnalyticsEndpoints:
    async def test_user_stats(self, client: AsyncClient, monkeypatch: pytest.MonkeyPatch) -> None:
        repo = AsyncMock()
        repo.list_user_match_entries.return_value = []
        monkeypatch.setattr(analytics_router, "_service", AnalyticsApplicationService(ledger_repo=repo))

        resp = await client.post("/api/v1/users/A/stats", json={})

        assert resp.status_code == 200
        data = resp.json()["data"]
        assert data["user_id"] == "A"
        assert data["total_matches"] == 0
        assert data["current_streak"]["label"] == "No streak"

    async def test_inverted_window(self, client: AsyncClient, monkeypatch: pytest.MonkeyPatch) -> None:
        repo = AsyncMock()
        repo.list_user_match_entries.return_value = []
        monkeypatch.setattr(analytics_router, "_service", AnalyticsApplicationService(ledger_repo=repo))

        resp = await client.post(
            "/api/v1/users/A/head-to-head",
            json={"start_date": "2025-06-15T00:00:00Z", "end_date": "2025-06-01T00:00:00Z"},
        )

        assert resp.status_code == 422
        assert resp.json()["code"] == 3002

    async def test_head_to_head_detail(self, client: AsyncClient, monkeypatch: pytest.MonkeyPatch) -> None:
        repo = AsyncMock()
        repo.list_user_match_entries.return_value = []
        monkeypatch.setattr(analytics_router, "_service", AnalyticsApplicationService(ledger_repo=repo))

        resp = await client.post("/api/v1/users/A/head-to-head/B", json={})

        assert resp.status_code == 200
        assert resp.json()["data"]["record"] is None
