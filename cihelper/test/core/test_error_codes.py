"""Tests for cihelper.core.errors module."""

from cihelper.core.errors import ErrorCode, exit_code_for


class TestErrorCodeValues:
    def test_stable_values(self) -> None:
        assert ErrorCode.OK == 0
        assert ErrorCode.USER_ERROR == 1
        assert ErrorCode.ENV_ERROR == 2
        assert ErrorCode.BUILD_ERROR == 3
        assert ErrorCode.NETWORK_ERROR == 4
        assert ErrorCode.IO_ERROR == 5


class TestExitCodeFor:
    def test_positive_code_propagates(self) -> None:
        assert exit_code_for(2) == 2
        assert exit_code_for(128, ErrorCode.ENV_ERROR) == 128

    def test_spawn_failure_uses_fallback(self) -> None:
        assert exit_code_for(-1) == int(ErrorCode.BUILD_ERROR)
        assert exit_code_for(-9, ErrorCode.ENV_ERROR) == int(ErrorCode.ENV_ERROR)

    def test_zero_uses_fallback(self) -> None:
        assert exit_code_for(0) == int(ErrorCode.BUILD_ERROR)
