import json

import pytest

from devbits.bower import BowerFile, load_from_file


SAMPLE = {
    "name": "widget",
    "homepage": "https://example.com/widget",
    "repository": {"type": "git", "url": "git://example.com/widget.git"},
    "ignore": ["node_modules"],
    "dependencies": {"lib": "~1.0"},
    "devDependencies": {"tool": "^2.0"},
    "version": "1.2.3",
    "_release": "1.2.3",
}


def test_from_dict_fields():
    bf = BowerFile.from_dict(SAMPLE)
    assert bf.name == "widget"
    assert bf.repository.type == "git"
    assert bf.dependencies == {"lib": "~1.0"}
    assert bf.dev_dependencies == {"tool": "^2.0"}
    assert bf.ignore == ["node_modules"]


def test_repository_url_parsed():
    parsed = BowerFile.from_dict(SAMPLE).repository_url_parsed()
    assert parsed.scheme == "git"
    assert parsed.netloc == "example.com"
    assert parsed.path == "/widget.git"


def test_repository_url_invalid():
    bf = BowerFile.from_dict({"repository": {"url": "relative/path"}})
    assert bf.repository_url_parsed() is None
    assert BowerFile().repository_url_parsed() is None


def test_load_from_file(tmp_path):
    path = tmp_path / "bower.json"
    path.write_text(json.dumps(SAMPLE), encoding="utf-8")
    assert load_from_file(path) == BowerFile.from_dict(SAMPLE)


def test_load_bad_json(tmp_path):
    path = tmp_path / "bower.json"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(json.JSONDecodeError):
        load_from_file(path)


def test_non_object_rejected():
    with pytest.raises(ValueError):
        BowerFile.from_dict([1, 2])