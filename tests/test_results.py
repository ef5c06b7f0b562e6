"""Tests for remote result types and failure classification."""

import pytest

from listingbridge.clients.base import (
    ErrorClass,
    MissingArgumentError,
    RemoteCallError,
    RemoteFailure,
    RemoteResult,
    classify,
    require,
)


class TestClassify:
    """Test mapping failures onto error classes."""

    def test_unreachable(self):
        """Test classifying an unreachable service."""
        assert classify(RemoteFailure.unreachable(), 500) is ErrorClass.UNREACHABLE

    def test_known_defect(self):
        """Test classifying the known-defect status."""
        assert classify(RemoteFailure.status(500), 500) is ErrorClass.KNOWN_DEFECT

    @pytest.mark.parametrize(
        "failure",
        [
            RemoteFailure.status(503),
            RemoteFailure.status(404),
            RemoteFailure.invalid_response("bad json"),
        ],
    )
    def test_other(self, failure):
        """Test classifying other failures."""
        assert classify(failure, 500) is ErrorClass.OTHER

    def test_zero_disables_known_defect(self):
        """Test that status 0 disables the known-defect class."""
        assert classify(RemoteFailure.status(500), 0) is ErrorClass.OTHER


class TestRemoteResult:
    """Test the tagged result."""

    def test_success(self):
        """Test unwrapping a success."""
        result = RemoteResult.success([1, 2])
        assert result.ok
        assert result.unwrap() == [1, 2]

    def test_failed_unwrap_raises(self):
        """Test that unwrapping a failure raises."""
        failure = RemoteFailure.status(502, "bad gateway")
        result = RemoteResult.failed(failure)

        assert not result.ok
        with pytest.raises(RemoteCallError) as exc_info:
            result.unwrap()
        assert exc_info.value.failure is failure
        assert "status 502: bad gateway" in str(exc_info.value)

    def test_failure_str(self):
        """Test failure messages."""
        assert str(RemoteFailure.unreachable()) == "unreachable"
        assert str(RemoteFailure.invalid_response("eof")) == "invalid_response: eof"


class TestRequire:
    """Test argument guards."""

    def test_passes_value_through(self):
        """Test that a falsy value passes."""
        assert require(0, "count") == 0

    def test_none_raises_value_error(self):
        """Test that None raises."""
        with pytest.raises(ValueError, match="agent_id is required"):
            require(None, "agent_id")
        with pytest.raises(MissingArgumentError):
            require(None, "agent_id")
