"""
Integration Tests for HTTP API
FastAPI TestClient + 업스트림 클라이언트 mock

Run: pytest tests/integration/test_platform_api.py -v
"""

from unittest.mock import AsyncMock, patch

import httpx
import jwt
import pytest

from app.core.config import settings
from app.data_pipeline.domain.models import PlatformType
from app.services.platform import tiktok, youtube
from app.services.platform.accounts import AccountStatus

DEMO = "demo-user"


@pytest.fixture
def tiktok_configured():
    """TikTok OAuth 설정"""
    with patch.object(settings, "TIKTOK_CLIENT_KEY", "client-key-1234"), \
            patch.object(settings, "TIKTOK_CLIENT_SECRET", "secret"), \
            patch.object(settings, "TIKTOK_REDIRECT_URI", "http://localhost:4000/api/auth/tiktok/callback"), \
            patch.object(settings, "FRONTEND_ORIGIN", "http://localhost:5173"):
        yield


@pytest.fixture
def connected_tiktok(reset_account_registry):
    return reset_account_registry.upsert(
        DEMO, PlatformType.TIKTOK, "velvet", AccountStatus.CONNECTED,
        access_token="tok", refresh_token="refresh",
    )


class TestSystem:
    """헬스체크"""

    def test_health(self, client):
        response = client.get("/api/health")

        assert response.status_code == 200
        assert response.json() == {"status": "ok", "app": settings.APP_NAME}
        assert response.headers["X-Content-Type-Options"] == "nosniff"


class TestAccountsApi:
    """계정 API"""

    def test_create_and_list(self, client):
        response = client.post("/api/accounts", json={"platform": "YouTube", "handle": "@velvet"})

        assert response.status_code == 201
        account = response.json()["account"]
        assert account["platform"] == "youtube"
        assert account["status"] == "demo"

        accounts = client.get("/api/accounts").json()["accounts"]
        assert [a["handle"] for a in accounts] == ["@velvet"]

    @pytest.mark.parametrize("payload", [
        {"platform": "youtube"},
        {"handle": "@x"},
        {"platform": "myspace", "handle": "@x"},
    ])
    def test_invalid_payload(self, client, payload):
        assert client.post("/api/accounts", json=payload).status_code == 400

    def test_bearer_token_identifies_user(self, client):
        token = jwt.encode({"sub": "user-42"}, "jwt-secret-for-tests-0123456789abcdef", algorithm="HS256")

        with patch.object(settings, "JWT_SECRET", "jwt-secret-for-tests-0123456789abcdef"):
            response = client.post(
                "/api/accounts",
                json={"platform": "spotify", "handle": "29Hv3V1dVlsGzLZCzNVWNZ"},
                headers={"Authorization": f"Bearer {token}"},
            )

        assert response.json()["account"]["user_id"] == "user-42"


class TestTikTokHashtagIntel:
    """TikTok 해시태그 인텔"""

    def test_ranked_hashtags(self, client, connected_tiktok, tiktok_items):
        with patch.object(tiktok, "fetch_user_info", AsyncMock(return_value={"username": "velvet"})), \
                patch.object(tiktok, "fetch_content_items", AsyncMock(return_value=tiktok_items)):
            response = client.get("/api/platforms/tiktok/hashtags")

        assert response.status_code == 200
        data = response.json()
        assert data["brandTag"] == settings.TIKTOK_BRAND_TAG
        assert data["overallAverageViews"] == 1050
        assert data["hashtags"][0] == {
            "tag": "#kpop", "lift": 1.9, "uses": 2, "totalViews": 4000, "averageViews": 2000,
        }
        assert data["recommendation"]["tags"][0] == settings.TIKTOK_BRAND_TAG
        assert len(data["recommendation"]["tags"]) == 5

    def test_not_connected(self, client):
        data = client.get("/api/platforms/tiktok/hashtags").json()

        assert data["hashtags"] == []
        assert data["overallAverageViews"] == 0
        assert len(data["recommendation"]["tags"]) == 5

    def test_top_n(self, client, connected_tiktok, tiktok_items):
        with patch.object(tiktok, "fetch_user_info", AsyncMock(return_value={"username": "velvet"})), \
                patch.object(tiktok, "fetch_content_items", AsyncMock(return_value=tiktok_items)):
            data = client.get("/api/platforms/tiktok/hashtags", params={"top_n": 2}).json()

        assert [h["tag"] for h in data["hashtags"]] == ["#kpop", "#studio"]

    def test_refreshes_expired_token(self, client, connected_tiktok, tiktok_configured, reset_account_registry):
        user_info = AsyncMock(side_effect=[httpx.ConnectError("401"), {"username": "velvet"}])
        refreshed = AsyncMock(return_value={"access_token": "tok2", "refresh_token": "refresh2", "expires_in": 60})
        items = AsyncMock(return_value=[])

        with patch.object(tiktok, "fetch_user_info", user_info), \
                patch.object(tiktok, "refresh_access_token", refreshed), \
                patch.object(tiktok, "fetch_content_items", items):
            response = client.get("/api/platforms/tiktok/hashtags")

        assert response.status_code == 200
        items.assert_awaited_once_with("tok2")
        account = reset_account_registry.get(DEMO, PlatformType.TIKTOK)
        assert account.access_token == "tok2"
        assert account.refresh_token == "refresh2"


class TestYouTubeKeywordIntel:
    """YouTube 키워드 인텔"""

    @pytest.fixture
    def youtube_account(self, reset_account_registry):
        reset_account_registry.upsert(DEMO, PlatformType.YOUTUBE, "@velvet")
        with patch.object(settings, "YOUTUBE_API_KEY", "yt-key"):
            yield

    def test_ranked_keywords(self, client, youtube_account, youtube_items):
        channel = {"id": "UC1", "title": "Velvet", "subscribers": 120, "views": 9000, "videos": 3}
        with patch.object(youtube, "fetch_channel_stats_by_handle", AsyncMock(return_value=channel)), \
                patch.object(youtube, "fetch_content_items", AsyncMock(return_value=youtube_items)):
            data = client.get("/api/platforms/youtube/keywords").json()

        assert [k["keyword"] for k in data["keywords"]] == ["vlog", "studio", "cover", "kpop"]
        assert data["keywords"][0]["lift"] == 2.5
        assert data["overallAverageViews"] == 2000
        assert data["recommendation"]["tags"][:3] == ["vlog", "studio", "cover"]

    def test_upstream_failure_degrades_to_empty(self, client, youtube_account):
        failing = AsyncMock(side_effect=httpx.ConnectError("down"))
        with patch.object(youtube, "fetch_channel_stats_by_handle", failing):
            response = client.get("/api/platforms/youtube/keywords")

        assert response.status_code == 200
        assert response.json()["keywords"] == []


class TestPlatformSummary:
    """요약 카드 + 마일스톤"""

    def test_no_accounts(self, client):
        data = client.get("/api/platforms/summary").json()

        assert data["platforms"] == []
        assert data["milestones"]["achieved"] == 0
        assert data["milestones"]["total"] == 8

    def test_tiktok_card(self, client, connected_tiktok, tiktok_items):
        user_info = {"username": "velvet", "follower_count": 1500, "likes_count": 100, "video_count": 4}
        with patch.object(tiktok, "fetch_user_info", AsyncMock(return_value=user_info)), \
                patch.object(tiktok, "fetch_content_items", AsyncMock(return_value=tiktok_items)):
            data = client.get("/api/platforms/summary").json()

        assert [card["platform"] for card in data["platforms"]] == ["TikTok"]
        assert data["platforms"][0]["hashtags"][0] == {"tag": "#kpop", "lift": 1.9}
        done = {item["id"] for item in data["milestones"]["items"] if item["done"]}
        assert done == {"tiktok-1k", "tiktok-2x-hashtag"}


class TestAnalyzeApi:
    """콘텐츠 직접 분석"""

    def test_hashtag_mode(self, client):
        items = [
            {"captionText": "Great day #fun #fun", "viewCount": 100},
            {"captionText": "#fun times", "viewCount": 200},
        ]

        data = client.post("/api/platforms/hashtag/analyze", json={"items": items}).json()

        assert data["mode"] == "hashtag"
        assert data["labels"] == [{
            "label": "#fun", "lift": 1.0, "usageCount": 2, "totalViews": 300, "averageViews": 150,
        }]
        assert data["overallAverageViews"] == 150
        assert data["recommendation"]["platform"] == "tiktok"

    def test_keyword_mode_top_n(self, client):
        items = [{"tags": [f"k{i}"], "viewCount": 10 + i} for i in range(5)]

        data = client.post("/api/platforms/keyword/analyze", json={"items": items, "topN": 2}).json()

        assert [label["label"] for label in data["labels"]] == ["k4", "k3"]

    def test_unknown_mode(self, client):
        assert client.post("/api/platforms/mentions/analyze", json={"items": []}).status_code == 422


class TestTikTokAuthApi:
    """TikTok OAuth 흐름"""

    def test_debug_masks_secrets(self, client, tiktok_configured):
        data = client.get("/api/auth/tiktok/debug").json()

        assert data["clientKey"] == "clie...1234"
        assert data["clientSecretSet"] is True
        assert "secret" not in str(data.values())

    def test_url_requires_config(self, client):
        with patch.object(settings, "TIKTOK_CLIENT_KEY", None):
            assert client.get("/api/auth/tiktok/url").status_code == 400

    def test_url(self, client, tiktok_configured):
        url = client.get("/api/auth/tiktok/url").json()["url"]

        assert url.startswith(tiktok.AUTH_URL)
        assert "client_key=client-key-1234" in url

    def test_callback_with_unknown_state(self, client, tiktok_configured):
        response = client.get(
            "/api/auth/tiktok/callback",
            params={"code": "c", "state": "nope"},
            follow_redirects=False,
        )

        assert response.status_code == 307
        assert response.headers["location"] == "http://localhost:5173?tiktok_error=state"

    def test_callback_connects_account(self, client, tiktok_configured, reset_account_registry):
        state = tiktok.get_state_store().issue(DEMO)
        token = {"access_token": "tok", "refresh_token": "r", "expires_in": 86400}

        with patch.object(tiktok, "exchange_code_for_token", AsyncMock(return_value=token)), \
                patch.object(tiktok, "fetch_user_info", AsyncMock(return_value={"username": "velvet"})):
            response = client.get(
                "/api/auth/tiktok/callback",
                params={"code": "c", "state": state},
                follow_redirects=False,
            )

        assert response.headers["location"] == "http://localhost:5173?tiktok=connected"
        account = reset_account_registry.get(DEMO, PlatformType.TIKTOK)
        assert account.status == AccountStatus.CONNECTED
        assert account.handle == "velvet"
        assert account.access_token == "tok"

    def test_callback_provider_error(self, client, tiktok_configured):
        response = client.get(
            "/api/auth/tiktok/callback",
            params={"error": "access_denied", "error_description": "user cancelled"},
            follow_redirects=False,
        )

        assert "tiktok_error=access_denied" in response.headers["location"]


class TestSimulatorApi:
    """광고비 시뮬레이터"""

    def test_simulate(self, client):
        response = client.post(
            "/api/simulator",
            json={"baseRevenue": 1000, "baseAdSpend": 100, "extraSpend": 100},
        )

        assert response.status_code == 200
        assert response.json()["projectedRevenue"] == pytest.approx(1245)

    def test_negative_spend_rejected(self, client):
        response = client.post("/api/simulator", json={"extraSpend": -1})

        assert response.status_code == 422


class TestAnalyzeExtremeValues:
    """float 범위 경계의 조회수 직접 분석"""

    def test_huge_integer_view_count(self, client):
        items = [
            {"captionText": "#a", "viewCount": 10 ** 400},
            {"captionText": "#b", "viewCount": 10},
        ]

        response = client.post("/api/platforms/hashtag/analyze", json={"items": items})

        assert response.status_code == 200
        assert [label["label"] for label in response.json()["labels"]] == ["#b"]

    def test_overflowing_sum(self, client):
        items = [
            {"captionText": "#a", "viewCount": 1e308},
            {"captionText": "#a", "viewCount": 1e308},
        ]

        response = client.post("/api/platforms/hashtag/analyze", json={"items": items})

        assert response.status_code == 200
        assert response.json()["labels"] == []
        assert response.json()["overallAverageViews"] == 0
