import json
import os

import pytest

from devbits.goenv import set_go_paths
from devbits.gopkgs import PackageError, Pkg, PkgIndex

ROOT = os.path.join(os.sep, "gp")
SRC = os.path.join(ROOT, "src")


def d(*parts):
    return os.path.join(SRC, *parts)


def go_list(*objs):
    return "\n".join(json.dumps(o, indent=1) for o in objs)


@pytest.fixture
def gopath():
    set_go_paths([ROOT])
    yield ROOT
    set_go_paths([])


def test_from_go_list_output_indexes():
    out = go_list(
        {"Dir": d("a"), "ImportPath": "a", "Name": "a", "Deps": ["b"], "Imports": ["b"]},
        {"Dir": d("b"), "ImportPath": "b", "Name": "b"},
    )
    idx = PkgIndex.from_go_list_output(out)
    assert set(idx.by_imp) == {"a", "b"}
    assert idx.by_dir[d("b")].import_path == "b"
    assert idx.errs == []


def test_from_go_list_output_invalid_json():
    with pytest.raises(ValueError):
        PkgIndex.from_go_list_output("{not json}")


def test_error_with_message_lines():
    out = go_list(
        {"Dir": d("a"), "ImportPath": "a", "Name": "a", "Error": {"Err": "x.go:3:4: bad thing"}}
    )
    idx = PkgIndex.from_go_list_output(out)
    assert [p.import_path for p in idx.errs] == ["a"]
    msg = idx.by_imp["a"].errs[0]
    assert (msg.ref, msg.pos1_ln, msg.pos1_ch, msg.msg) == ("x.go", 3, 4, "bad thing")


def test_error_from_position_only():
    msgs = PackageError(pos="f.go:5:6").to_src_msgs()
    assert (msgs[0].ref, msgs[0].pos1_ln, msgs[0].pos1_ch) == ("f.go", 4, 5)


def test_dependants_and_importers():
    a = Pkg(dir=d("a"), import_path="a", deps=["b", "c"], imports=["b"])
    b = Pkg(dir=d("b"), import_path="b", deps=["c"], imports=["c"])
    c = Pkg(dir=d("c"), import_path="c")
    idx = PkgIndex([a, b, c])
    assert sorted(idx.dependants(c)) == ["a", "b"]
    assert idx.importers(c) == ["b"]
    assert idx.importers(b) == ["a"]
    assert idx.dependants(a) == []


def test_sort_helpers():
    a = Pkg(import_path="a", deps=["b"])
    b = Pkg(import_path="b")
    assert a.is_sorted_prior_to(b)
    assert not b.is_sorted_prior_to(a)
    assert not a.is_sorted_prior_to_by_deps(b)
    assert b.is_sorted_prior_to_by_deps(a)
    assert str(a) == "a"


def test_go_file_paths():
    pkg = Pkg(dir=d("a"), go_files=["a.go"], test_go_files=["a_test.go"])
    assert pkg.go_file_paths(False) == [os.path.join(d("a"), "a.go")]
    assert pkg.go_file_paths(True) == [
        os.path.join(d("a"), "a.go"),
        os.path.join(d("a"), "a_test.go"),
    ]


def test_count_loc(tmp_path):
    (tmp_path / "a.go").write_text(
        "package a\n\n// comment\n/* start\ninside\nend */\nfunc f() {}\n", encoding="utf-8"
    )
    pkg = Pkg(dir=str(tmp_path), go_files=["a.go", "missing.go"])
    assert pkg.count_loc() == 2
    assert pkg.approx_loc == 2


def test_pkgs_by_name_and_is_command():
    idx = PkgIndex(
        [
            Pkg(dir=d("x"), import_path="x/cmd", name="main"),
            Pkg(dir=d("y"), import_path="y/cmd", name="main"),
            Pkg(dir=d("z"), import_path="z", name="z"),
        ]
    )
    assert sorted(idx.pkgs_by_name("main")) == ["x/cmd", "y/cmd"]
    assert idx.by_imp["x/cmd"].is_command()
    assert not idx.by_imp["z"].is_command()


def test_shorten_imp_paths():
    idx = PkgIndex([Pkg(dir=d("foo"), import_path="github.com/x/foo", name="foo")])
    assert idx.shorten_imp_paths("github.com/x/foo.Bar") == "foo.Bar"
    assert PkgIndex().shorten_imp_paths("github.com/x/foo.Bar") == "github.com/x/foo.Bar"


def test_imp_paths_to_names_in_ln():
    idx = PkgIndex([Pkg(dir=d("foo"), import_path="github.com/x/foo", name="foo")])
    ln = "func(*github.com/x/foo.Bar) error"
    assert idx.imp_paths_to_names_in_ln(ln, d("other")) == "func(*foo.Bar) error"
    assert idx.imp_paths_to_names_in_ln(ln, d("foo")) == "func(*Bar) error"
    assert idx.imp_paths_to_names_in_ln("no slash here", "") == "no slash here"


def test_pkgs_for_files(gopath):
    a = Pkg(dir=d("a"), import_path="a")
    idx = PkgIndex([a])
    pkgs, refresh = idx.pkgs_for_files(os.path.join(d("a"), "x.go"), os.path.join(d("a"), "y.go"))
    assert pkgs == [a]
    assert refresh is False
    pkgs, refresh = idx.pkgs_for_files(os.path.join(d("unknown"), "x.go"))
    assert pkgs == []
    assert refresh is True


def test_guru_minimal_scope_for(gopath):
    idx = PkgIndex(
        [
            Pkg(dir=d("a"), import_path="a", name="a"),
            Pkg(dir=d("a", "cmd"), import_path="a/cmd", name="main"),
            Pkg(dir=d("b"), import_path="b", name="b"),
            Pkg(dir=d("c"), import_path="c", name="c", test_go_files=["c_test.go"]),
            Pkg(dir=d("c", "d"), import_path="c/d", name="d"),
        ]
    )
    assert idx.guru_minimal_scope_for(os.path.join(d("a"), "x.go")) == ("a", False)
    assert idx.guru_minimal_scope_for(os.path.join(d("b"), "x.go")) == ("", False)
    assert idx.guru_minimal_scope_for(os.path.join(d("c", "d"), "x.go")) == ("c", False)


def test_guru_scope_exclusions():
    idx = PkgIndex(
        [
            Pkg(dir=d("bad"), import_path="bad", incomplete=True),
            Pkg(dir=d("user"), import_path="user", deps=["bad"]),
            Pkg(dir=d("ok"), import_path="ok"),
            Pkg(dir=d("vendor", "z"), import_path="vendor/z", invalid_go_files=["z.go"]),
        ]
    )
    excl = {"vendor/...": True}
    result = idx.guru_scope_exclusions(excl)
    assert result is excl
    assert result == {"vendor/...": True, "bad": True, "user": True}