from devbits.mongo import connect_url, sparse


def test_connect_url_direct():
    assert connect_url("localhost", 27017, True) == "localhost:27017?connect=direct"


def test_connect_url_plain():
    assert connect_url("db.example.com", 1234, False) == "db.example.com:1234"


def test_sparse_removes_zero_values():
    doc = {
        "": "x",
        "s": "",
        "i": 0,
        "f": 0.0,
        "b": False,
        "l": [],
        "n": None,
        "keep_s": "v",
        "keep_i": 3,
        "keep_b": True,
        "keep_l": [0],
        "keep_d": {},
    }
    result = sparse(doc)
    assert result is doc
    assert set(result) == {"keep_s", "keep_i", "keep_b", "keep_l", "keep_d"}


def test_sparse_keeps_id():
    assert sparse({"_id": 0, "x": ""}) == {"_id": 0}