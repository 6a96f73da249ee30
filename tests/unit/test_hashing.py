from pathlib import Path

from utils.hashing import content_issue_id, hash_payload, sha256_bytes, stable_json_dumps


def test_hash_payload_stable_order() -> None:
    payload_a = {"b": 1, "a": 2}
    payload_b = {"a": 2, "b": 1}
    assert hash_payload(payload_a) == hash_payload(payload_b)
    assert stable_json_dumps(payload_a) == '{"a":2,"b":1}'


def test_sha256_bytes_known_value() -> None:
    assert sha256_bytes(b"") == "e3b0c44298fc1c149afbf4c8996fb92427ae41e4649b934ca495991b7852b855"


def test_content_issue_id_is_kind_prefixed_and_deterministic() -> None:
    first = content_issue_id("bluebook_vdot", "Smith v Jones")
    assert first.startswith("bluebook_vdot:")
    assert len(first.split(":", 1)[1]) == 12
    assert first == content_issue_id("bluebook_vdot", "Smith v Jones")
    assert first != content_issue_id("bluebook_pincite", "Smith v Jones")
    assert first != content_issue_id("bluebook_vdot", "Smith v Jonas")


def test_stable_json_dumps_stringifies_unknown_values() -> None:
    assert stable_json_dumps({"path": Path("a/b")}) == '{"path":"a/b"}'
