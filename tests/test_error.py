from __future__ import annotations

import copy
import pickle

import pytest

from errkit import GENERIC_ERROR, Error, ErrorType, are_equal, new, wrap


def _traced() -> Error:
    return new("test").msg("new {} message").trace().make()


def test_message() -> None:
    err = new("test").make().msg("Test message")
    assert str(err) == "Test message"


def test_message_args() -> None:
    err = new("T").msg("A {} B", "mid").make()
    assert str(err) == "A mid B"


def test_empty_message_renders_type() -> None:
    assert str(new("test").make()) == "test"


def test_fill_message() -> None:
    err = new("test").make().msg("Test {} message").fill("foobar")
    assert str(err) == "Test foobar message"


def test_cause() -> None:
    inner = new("suberr").msg("Inner message").make()
    err = new("test").make().msg("Error").cause(inner)
    assert str(err) == "Error: Inner message"
    assert err.cause_error is inner


def test_cause_with_empty_message_falls_back_to_type() -> None:
    err = new("T").make().cause(ValueError("inner"))
    assert str(err) == "T: inner"


def test_cause_none_removes_cause() -> None:
    err = new("T").make().cause(ValueError("inner")).cause(None)
    assert str(err) == "T"
    assert err.cause_error is None


def test_str_cause() -> None:
    err = new("test").make().msg("Error").str_cause("inner message").safe()
    assert str(err) == "Error: inner message"
    assert err.safe_string() == "Error"
    cause = err.cause_error
    assert cause is not None
    assert not cause.is_tracked
    assert cause.get_id() == ""
    assert cause.equals(GENERIC_ERROR)


def test_str_cause_interpolates() -> None:
    err = new("test").make().str_cause("code {}", 7)
    assert str(err) == "test: code 7"


def test_expand() -> None:
    err1 = wrap(ValueError("error one")).safe()
    err2 = err1.expand("other message")
    assert str(err2) == "other message: error one"
    assert err2.safe_string() == ""
    assert err1.get_type() == err2.get_type()
    assert err2.cause_error is err1


def test_expand_safe() -> None:
    err1 = wrap(ValueError("error one")).safe()
    err2 = err1.expand_safe("other message")
    assert err2.safe_string() == "other message: error one"
    assert err1.get_type() == err2.get_type()


def test_expand_safe_with_unsafe_cause() -> None:
    err1 = wrap(ValueError("error one"))
    err2 = err1.expand_safe("other {}", "message")
    assert err2.safe_string() == "other message"
    assert err1.get_type() == err2.get_type()


def test_msg_clears_safe_flag() -> None:
    err = new("test").safe().make()
    assert err.is_safe
    changed = err.msg("X")
    assert not changed.is_safe
    assert changed.safe_string() == ""
    assert "X" in str(changed)
    assert changed.safe().safe_string() == "X"


def test_fill_preserves_safe_flag() -> None:
    err = new("test").msg("Hello {}").safe().make().fill("world")
    assert err.is_safe
    assert err.safe_string() == "Hello world"


def test_safe_node_hides_unsafe_cause() -> None:
    inner = new("inner").msg("secret").make()
    err = new("outer").msg("public").safe().make().cause(inner)
    assert err.safe_string() == "public"
    assert str(err) == "public: secret"


def test_safe_string_falls_back_to_type() -> None:
    err = new("Visible").safe().make()
    assert err.safe_string() == "Visible"


@pytest.mark.parametrize(
    "mutate",
    [
        lambda e: e.msg("other"),
        lambda e: e.fill("value"),
        lambda e: e.cause(ValueError("inner")),
        lambda e: e.str_cause("inner"),
        lambda e: e.expand("context"),
        lambda e: e.expand_safe("context"),
        lambda e: e.safe(),
        lambda e: e.track(),
        lambda e: e.untrack(),
        lambda e: e.no_trace(),
        lambda e: e.tag("k", "v"),
        lambda e: e.http_code(400),
        lambda e: e.err_code(42),
    ],
)
def test_mutators_keep_type_id_and_stack(mutate) -> None:
    err = _traced()
    assert err.get_id() != ""
    assert err.get_stack_trace() != ""
    changed = mutate(err)
    assert changed is not err
    assert changed.get_type() == err.get_type()
    assert changed.get_id() == err.get_id()
    assert changed.get_stack_trace() == err.get_stack_trace()


def test_mutators_leave_receiver_untouched() -> None:
    err = _traced()
    err.msg("other").safe().http_code(400).err_code(1).tag("k", "v").untrack()
    assert str(err) == "new {} message"
    assert not err.is_safe
    assert err.is_tracked
    assert err.get_http_code() == 500
    assert err.get_err_code() == 0
    assert dict(err.tags) == {}


def test_untrack_and_no_trace_flags() -> None:
    err = _traced()
    assert not err.no_trace().is_traced
    assert err.no_trace().is_tracked
    untracked = err.untrack()
    assert not untracked.is_tracked
    assert not untracked.is_traced


def test_equals() -> None:
    err = (
        GENERIC_ERROR.make()
        .msg("test {}")
        .fill("foobar")
        .cause(None)
        .cause(ValueError("inner"))
        .http_code(400)
        .err_code(42)
    )
    assert err.equals(GENERIC_ERROR)
    assert err.equals(GENERIC_ERROR.make())
    assert not err.equals(None)
    assert not err.equals(new("other").make())
    assert are_equal(err, GENERIC_ERROR)
    assert are_equal(GENERIC_ERROR, err)


def test_is_a() -> None:
    err = new("test").make().msg("anything")
    assert err.is_a(new("test"))
    assert not err.is_a(new("other"))


def test_get_type_is_error_type() -> None:
    assert isinstance(new("test").make().get_type(), ErrorType)


def test_error_can_be_raised_and_caught() -> None:
    template = new("Boom").msg("it broke")
    with pytest.raises(Error, match="it broke") as exc_info:
        raise template.make()
    assert exc_info.value.is_a(template)


def test_cause_chain_is_visible_to_python() -> None:
    original = KeyError("missing")
    err = new("Lookup").make().cause(original)
    assert isinstance(err.__cause__, Error)
    assert err.__cause__.__cause__ is original


def test_tags() -> None:
    err = new("test").tag("a", 1).make().tag("b", "two")
    assert dict(err.tags) == {"a": 1, "b": "two"}
    with pytest.raises(TypeError):
        err.tags["c"] = 3  # type: ignore[index]


def test_repr_contains_type_and_id() -> None:
    err = new("test").msg("hello").make()
    text = repr(err)
    assert "test" in text
    assert err.get_id() in text
    assert "hello" in text


PARSE_ERROR = new("ParseError").msg("cannot parse {}").trace()


def test_copy_and_pickle_keep_the_occurrence() -> None:
    err = PARSE_ERROR.make().fill("config.toml").cause(ValueError("bad line")).tag("line", 3)
    for clone in (copy.copy(err), copy.deepcopy(err), pickle.loads(pickle.dumps(err))):
        assert isinstance(clone, Error)
        assert clone.is_a(PARSE_ERROR)
        assert clone.get_id() == err.get_id()
        assert clone.get_stack_trace() == err.get_stack_trace()
        assert str(clone) == "cannot parse config.toml: bad line"
        assert dict(clone.tags) == {"line": 3}


def test_pickle_keeps_wrapped_origin() -> None:
    err = wrap(KeyError("missing"))
    assert err is not None
    clone = pickle.loads(pickle.dumps(err))
    assert isinstance(clone.origin, KeyError)
    assert clone.__cause__ is clone.origin
    assert clone.get_id() == err.get_id()


def test_track_keeps_id_of_wrapped_error() -> None:
    err = wrap(ValueError("boom"))
    assert err is not None
    assert not err.is_tracked
    tracked = err.track()
    assert tracked.is_tracked
    assert tracked.is_traced
    assert tracked.get_id() == err.get_id()
    assert tracked.api().message.endswith(f" [ID {err.get_id()}]")


def test_track_does_not_invent_an_id() -> None:
    err = new("test").untrack().make().track()
    assert err.is_tracked
    assert err.get_id() == ""
    assert "[ID" not in err.api().message


def test_tags_accept_unhashable_values() -> None:
    err = new("test").make().tag("ids", [1, 2])
    assert err.tags["ids"] == [1, 2]
