import sys

from devbits.srcmsg import (
    SrcMsg,
    cmd_exec_on_src,
    cmd_exec_on_src_in,
    ln_relify,
    sort_src_msgs,
    src_msg_from_ln,
    src_msgs_from_lns,
)


def test_full_line_parsed():
    msg = src_msg_from_ln("main.go:12:5: undefined: x")
    assert msg == SrcMsg(ref="main.go", pos1_ln=12, pos1_ch=5, msg="undefined: x")


def test_non_numeric_line_defaults_to_one():
    msg = src_msg_from_ln("a.go:foo:bar")
    assert (msg.pos1_ln, msg.pos1_ch) == (1, 1)
    assert msg.msg == "foo:bar"


def test_non_numeric_column():
    msg = src_msg_from_ln("a.go:3:x y")
    assert (msg.pos1_ln, msg.pos1_ch) == (3, 1)
    assert msg.msg == "x y"


def test_empty_message_allowed():
    msg = src_msg_from_ln("a.go:4:7")
    assert msg.msg == ""
    assert msg.ref == "a.go"


def test_invalid_lines():
    assert src_msg_from_ln("just text") is None
    assert src_msg_from_ln(":1:2: msg") is None
    assert src_msg_from_ln("") is None


def test_continuation_lines():
    msgs = src_msgs_from_lns(["orphan", "a.go:1:2: first", "more detail", "b.go:3:4: second"])
    assert [m.msg for m in msgs] == ["first\nmore detail", "second"]
    assert [m.ref for m in msgs] == ["a.go", "b.go"]


def test_sort_by_message():
    msgs = [SrcMsg(msg="b"), SrcMsg(msg="a"), SrcMsg(msg="c")]
    assert [m.msg for m in sort_src_msgs(msgs)] == ["a", "b", "c"]


def test_ln_relify():
    assert ln_relify("/src/proj/a.go", "/src/proj") == "a.go"
    assert ln_relify("/other/a.go", "/src/proj") == ""


def test_cmd_exec_parses_output():
    msgs = cmd_exec_on_src(False, None, sys.executable, "-c", "print('x.py:3:4: oops')")
    assert msgs == [SrcMsg(ref="x.py", pos1_ln=3, pos1_ch=4, msg="oops")]


def test_cmd_exec_fallback_whole_output():
    msgs = cmd_exec_on_src(True, None, sys.executable, "-c", "print('plain text')")
    assert msgs == [SrcMsg(msg="plain text", pos1_ln=1, pos1_ch=1)]


def test_cmd_exec_reline_filters(tmp_path):
    code = "print('keep.py:1:1: yes'); print('drop.py:2:2: no')"
    msgs = cmd_exec_on_src_in(
        str(tmp_path), False, lambda ln: ln if ln.startswith("keep") else "", sys.executable, "-c", code
    )
    assert [m.ref for m in msgs] == ["keep.py"]


def test_cmd_exec_missing_command():
    assert cmd_exec_on_src(True, None, "no-such-command-for-devbits-tests") == []