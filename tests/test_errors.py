"""
Tests for the error model and failure logging.
"""

import logging

import pytest

from desens import (
    AccessFailure,
    AllocationFailure,
    InvocationFailure,
    NullErr,
    ReflectErr,
    ReflectUtil,
    ResolutionFailure,
)


class Empty:
    pass


class TestReflectErr:
    """Test the common error base."""

    @pytest.mark.parametrize("err_type", [
        AccessFailure, ResolutionFailure, InvocationFailure, AllocationFailure, NullErr,
    ])
    def test_taxonomy(self, err_type):
        err = err_type.make("went wrong")
        assert isinstance(err, ReflectErr)
        assert isinstance(err, Exception)
        assert type(err) is err_type

    def test_msg_and_cause(self):
        cause = ValueError("bad")
        err = AccessFailure.make("Failed to get field", cause)
        assert err.msg() == "Failed to get field"
        assert err.cause() is cause
        assert str(err) == "AccessFailure: Failed to get field"

    def test_empty_msg(self):
        err = ReflectErr.make()
        assert err.msg() == ""
        assert err.cause() is None
        assert str(err) == "ReflectErr"

    def test_trace_includes_cause(self):
        try:
            raise InvocationFailure.make("Failed to invoke", ValueError("bad"))
        except InvocationFailure as err:
            trace = err.trace_to_str()
        assert trace.startswith("InvocationFailure: Failed to invoke")
        assert "test_errors.py" in trace
        assert "Caused by: ValueError: bad" in trace

    def test_trace_nests_reflect_causes(self):
        inner = AccessFailure.make("inner")
        outer = InvocationFailure.make("outer", inner)
        assert "Caused by: AccessFailure: inner" in outer.trace_to_str()


class TestFailureLogging:
    """Converted failures are logged at debug level before being raised."""

    def test_resolution_failure_logged(self, caplog):
        caplog.set_level(logging.DEBUG, logger="desens.reflect")
        with pytest.raises(ResolutionFailure):
            ReflectUtil.get_declared_method(Empty, "absentMethod")
        messages = [r.getMessage() for r in caplog.records if r.name == "desens.reflect"]
        assert len(messages) == 1
        assert "ResolutionFailure" in messages[0]
        assert "absentMethod" in messages[0]
        assert "LookupError" in messages[0]

    def test_success_not_logged(self, caplog):
        caplog.set_level(logging.DEBUG, logger="desens.reflect")
        ReflectUtil.new_array(int, 1)
        assert [r for r in caplog.records if r.name == "desens.reflect"] == []
