import json

from recovery.shamir_core import decode_points, recover_from_document
from recovery.share_loader import load_share_document


def test_end_to_end(tmp_path):
    # p(x) = 7 + 3x + 2x**2 -> (1, 12), (2, 21), (3, 34)
    document = {
        "keys": {"n": 3, "k": 3},
        "1": {"base": 16, "value": "c"},
        "2": {"base": 2, "value": "10101"},
        "3": {"base": 10, "value": "34"},
    }
    path = tmp_path / "testcase.json"
    path.write_text(json.dumps(document), encoding="utf-8")

    loaded = load_share_document(path)
    decoded = decode_points(loaded)
    assert [(p.x, p.y) for p in decoded.points] == [(1, 12), (2, 21), (3, 34)]

    assert recover_from_document(loaded).secret == 7


def test_sample_testcase(sample_path):
    result = recover_from_document(load_share_document(sample_path))

    assert result.secret == 3
    assert result.available == 4
    assert [p.x for p in result.selected] == [1, 2, 3]
