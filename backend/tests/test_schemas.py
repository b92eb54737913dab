"""
Tests for Pydantic schemas, plan limits and configuration helpers.
"""
import pytest
from datetime import datetime, timezone, timedelta
from unittest.mock import patch

from app.ai.factory import get_interpreter
from app.ai.placeholder_provider import PlaceholderInterpreter
from app.database import build_store_url
from app.exceptions import StoreConfigurationError, StoreOperationError
from app.models.dream import DreamMode
from app.schemas.dream import DreamSubmissionRequest, DreamSubmissionResponse
from app.services.plans import PLAN_LIMITS, Plan, current_month_key, get_plan_limits


class TestSubmissionSchemas:
    """Tests for submission request coercion."""

    def test_aliases(self):
        schema = DreamSubmissionRequest.model_validate(
            {"dreamText": "x", "mode": "internal", "userId": "u1", "anonKey": "k1"}
        )
        assert schema.dream_text == "x"
        assert schema.mode == "internal"
        assert schema.user_id == "u1"
        assert schema.anon_key == "k1"

    def test_values_are_stringified(self):
        schema = DreamSubmissionRequest.model_validate({"dreamText": 123, "userId": 7, "anonKey": True})
        assert schema.dream_text == "123"
        assert schema.user_id == "7"
        assert schema.anon_key == "true"

    def test_empty_values_become_none(self):
        schema = DreamSubmissionRequest.model_validate({"dreamText": "", "userId": "", "mode": None})
        assert schema.dream_text is None
        assert schema.user_id is None
        assert schema.mode is None

    def test_unknown_fields_ignored(self):
        schema = DreamSubmissionRequest.model_validate({"dreamText": "x", "extra": "y"})
        assert schema.dream_text == "x"

    def test_response_serializes_with_aliases(self):
        created = datetime(2024, 2, 1, tzinfo=timezone.utc)
        schema = DreamSubmissionResponse(
            dream_id="dream-uuid",
            created_at=created,
            mode_selected=DreamMode.TRADITIONAL,
            interpretation="text"
        )
        data = schema.model_dump(by_alias=True, mode="json")
        assert data["ok"] is True
        assert data["dreamId"] == "dream-uuid"
        assert data["modeSelected"] == "traditional"
        assert data["createdAt"].startswith("2024-02-01T00:00:00")


class TestPlanLimits:
    """Tests for the static plan table."""

    def test_table(self):
        assert PLAN_LIMITS[Plan.FREE].dreams == 3
        assert PLAN_LIMITS[Plan.FREE].images == 0
        assert PLAN_LIMITS[Plan.PLUS].dreams == 20
        assert PLAN_LIMITS[Plan.PLUS].images == 10
        assert PLAN_LIMITS[Plan.PREMIUM].dreams == 50
        assert PLAN_LIMITS[Plan.PREMIUM].images == 20

    @pytest.mark.parametrize("plan,expected", [
        ("free", 3),
        ("Plus", 20),
        ("PREMIUM", 50),
        ("gold", 3),
        (" plus ", 3),
        ("", 3),
        (None, 3),
    ])
    def test_lookup_with_fallback(self, plan, expected):
        assert get_plan_limits(plan).dreams == expected

    def test_month_key_format(self):
        assert current_month_key(datetime(2024, 1, 31, 23, 59, tzinfo=timezone.utc)) == "2024-01"
        assert current_month_key(datetime(2024, 12, 1)) == "2024-12"

    def test_month_key_uses_utc(self):
        # 00:30 on March 1st in UTC+2 is still February in UTC
        local = datetime(2024, 3, 1, 0, 30, tzinfo=timezone(timedelta(hours=2)))
        assert current_month_key(local) == "2024-02"


class TestConfiguration:
    """Tests for store and provider configuration."""

    def test_store_url_includes_service_key(self):
        url = build_store_url("postgresql+asyncpg://postgres@db.example.com:5432/postgres", "secret")
        assert url.password == "secret"
        assert url.host == "db.example.com"
        assert url.database == "postgres"

    @pytest.mark.parametrize("store_url,service_key", [
        (None, "secret"),
        ("postgresql+asyncpg://postgres@db.example.com/postgres", None),
        ("", ""),
    ])
    def test_missing_store_settings(self, store_url, service_key):
        with pytest.raises(StoreConfigurationError, match="STORE_URL or STORE_SERVICE_KEY"):
            build_store_url(store_url, service_key)

    def test_default_interpreter(self):
        assert isinstance(get_interpreter(), PlaceholderInterpreter)

    def test_unknown_interpreter(self):
        with patch("app.ai.factory.settings") as mock_settings:
            mock_settings.interpretation_provider = "oracle"
            with pytest.raises(ValueError, match="Invalid interpretation provider"):
                get_interpreter()

    def test_store_error_payload(self):
        error = StoreOperationError("profiles reset", "connection lost")
        assert error.status_code == 500
        assert error.to_payload() == {"error": "profiles reset failed", "detail": "connection lost"}
