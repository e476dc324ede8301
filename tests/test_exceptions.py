import pytest

from clientlog.exceptions import (
    ClientLogError,
    LogFileNotFoundError,
    LogReadError,
    ParseError,
)


class TestClientLogError:
    def test_str_without_context(self):
        assert str(ClientLogError("boom")) == "boom"

    def test_str_with_context(self):
        err = ClientLogError("bad line", context={"path": "a.log", "line_number": 4})
        assert str(err) == "bad line (Context: path=a.log, line_number=4)"

    def test_long_context_values_are_truncated(self):
        err = ClientLogError("bad line", context={"line": "x" * 80})
        assert "x" * 47 + "..." in str(err)
        assert "x" * 48 not in str(err)

    def test_add_and_get_context(self):
        err = ParseError("bad line")
        err.add_context("path", "a.log")
        assert err.get_context("path") == "a.log"
        assert err.get_context("missing", "default") == "default"

    def test_repr_includes_context(self):
        err = LogReadError("cannot read", context={"path": "a.log"})
        assert "LogReadError('cannot read')" in repr(err)
        assert "'path': 'a.log'" in repr(err)

    def test_original_exception_kept(self):
        cause = OSError("disk")
        err = LogReadError("cannot read", original_exception=cause)
        assert err.original_exception is cause


@pytest.mark.parametrize(
    "error_cls,builtin",
    [
        (LogFileNotFoundError, FileNotFoundError),
        (LogReadError, OSError),
        (ParseError, ValueError),
    ],
)
def test_errors_match_builtin_hierarchy(error_cls, builtin):
    err = error_cls("message", context={"path": "a.log"})
    assert isinstance(err, ClientLogError)
    assert isinstance(err, builtin)
    with pytest.raises(builtin):
        raise err
    assert str(err) == "message (Context: path=a.log)"
