"""Tests for the tagged success/failure response envelope."""
import pytest
from pydantic import ValidationError

from cosmic_atlas.schemas.envelope import APIError, APIResponse, ResponseMetadata


class TestAPIResponse:

    def test_ok_carries_data_only(self):
        resp = APIResponse.ok({"title": "M31"}, "NASA")
        assert resp.success is True
        assert resp.data == {"title": "M31"}
        assert resp.error is None
        assert resp.metadata.source == "NASA"
        assert resp.metadata.cached is False

    def test_fail_carries_error_only(self):
        resp = APIResponse.fail("TIMEOUT", "timed out", "NOAA-SWPC")
        assert resp.success is False
        assert resp.data is None
        assert resp.error.code == "TIMEOUT"
        assert resp.metadata.cached is False

    def test_ok_keeps_given_timestamp(self):
        resp = APIResponse.ok([], "NASA", cached=True, timestamp=1234)
        assert resp.metadata.timestamp == 1234
        assert resp.metadata.cached is True

    def test_failure_without_error_rejected(self):
        with pytest.raises(ValidationError):
            APIResponse(success=False, metadata=ResponseMetadata(source="x", timestamp=0))

    def test_failure_with_data_rejected(self):
        with pytest.raises(ValidationError):
            APIResponse(
                success=False,
                data={"a": 1},
                error=APIError(code="X", message="x"),
                metadata=ResponseMetadata(source="x", timestamp=0),
            )

    def test_success_with_error_rejected(self):
        with pytest.raises(ValidationError):
            APIResponse(
                success=True,
                data={"a": 1},
                error=APIError(code="X", message="x"),
                metadata=ResponseMetadata(source="x", timestamp=0),
            )

    def test_dump_shape(self):
        """Serialised form matches the wire envelope."""
        dumped = APIResponse.fail("HTTP_ERROR", "boom", "NASA", status_code=503).model_dump()
        assert set(dumped) == {"success", "data", "error", "metadata"}
        assert dumped["error"]["status_code"] == 503
        assert set(dumped["metadata"]) == {"source", "timestamp", "cached"}
