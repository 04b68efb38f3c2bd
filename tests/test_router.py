import uuid
from typing import Any

import pytest
from fastapi.testclient import TestClient

from shortcode import app
from shortcode.generator import CodeGenerator
from shortcode.generator.alphabet import UNAMBIGUOUS
from shortcode.models import DEFAULT_CODE_LENGTH


@pytest.fixture
def client() -> TestClient:
    return TestClient(app)


def _create_generator(client: TestClient, **body: Any) -> str:
    resp = client.post("/generators", json=body)
    assert resp.status_code == 200, resp.text
    return resp.json()["generator_id"]


def _issue(client: TestClient, generator_id: str, count: int = 1) -> list[str]:
    resp = client.post(f"/generators/{generator_id}/next", params={"count": count})
    assert resp.status_code == 200, resp.text
    return resp.json()["codes"]


def test_create_with_defaults(client: TestClient):
    generator_id = _create_generator(client)

    codes = _issue(client, generator_id, 5)
    assert len(codes) == 5
    assert len(set(codes)) == 5
    for code in codes:
        assert len(code) == DEFAULT_CODE_LENGTH
        assert set(code) <= set(UNAMBIGUOUS)

    resp = client.get(f"/generators/{generator_id}")
    info = resp.json()
    assert info["steps_taken"] == 5
    assert info["alphabet_size"] == len(UNAMBIGUOUS)
    assert info["partition"] is None


def test_codes_match_library(client: TestClient):
    generator_id = _create_generator(client, alphabet="ABC", length=2, seed=7)

    gen = CodeGenerator("ABC", 2, seed=7)
    assert _issue(client, generator_id, 12) == [gen.next_string() for _ in range(12)]


def test_preset(client: TestClient):
    generator_id = _create_generator(client, preset="numeric", length=3)
    (code,) = _issue(client, generator_id)
    assert code.isdigit()
    assert len(code) == 3


def test_preset_and_alphabet_conflict(client: TestClient):
    resp = client.post("/generators", json={"preset": "numeric", "alphabet": "AB"})
    assert resp.status_code == 422


def test_configuration_overflow(client: TestClient):
    resp = client.post("/generators", json={"preset": "alphanumeric", "length": 11})
    assert resp.status_code == 422
    detail = resp.json()["detail"]
    assert detail["type"] == "config:overflow"
    assert detail["extra"] == {"alphabet_size": 62, "length": 11}


def test_exhausted(client: TestClient):
    generator_id = _create_generator(
        client, alphabet="AB", length=2, exhaustion_strategy="panic"
    )
    codes = _issue(client, generator_id, 3)

    # a request that can't be served completely doesn't use up any codes
    resp = client.post(f"/generators/{generator_id}/next", params={"count": 2})
    assert resp.status_code == 409

    codes += _issue(client, generator_id)
    assert sorted(codes) == ["AA", "AB", "BA", "BB"]

    resp = client.post(f"/generators/{generator_id}/next")
    assert resp.status_code == 409
    assert resp.json()["detail"]["type"] == "generator:exhausted"


def test_increase_length(client: TestClient):
    generator_id = _create_generator(client, alphabet="AB", length=2)
    codes = _issue(client, generator_id, 5)
    assert [len(code) for code in codes] == [2, 2, 2, 2, 3]
    assert client.get(f"/generators/{generator_id}").json()["length"] == 3


def test_count_limits(client: TestClient):
    generator_id = _create_generator(client)
    for count in (0, 1001):
        resp = client.post(f"/generators/{generator_id}/next", params={"count": count})
        assert resp.status_code == 422


def test_partition(client: TestClient):
    generator_id = _create_generator(client, alphabet="ABCD", length=2, seed=3)

    resp = client.post(f"/generators/{generator_id}/partition", json={"count": 3})
    assert resp.status_code == 200
    part_ids = resp.json()["generator_ids"]
    assert len(part_ids) == 3

    # the original is consumed
    assert client.get(f"/generators/{generator_id}").status_code == 404

    gen = CodeGenerator("ABCD", 2, seed=3)
    for _ in range(4):
        for part_id in part_ids:
            assert _issue(client, part_id) == [gen.next_string()]

    info = client.get(f"/generators/{part_ids[2]}").json()
    assert info["partition"] == {"offset": 2, "stride": 3}

    resp = client.post(f"/generators/{part_ids[0]}/partition", json={"count": 2})
    assert resp.status_code == 409
    assert resp.json()["detail"]["type"] == "generator:repartition"


def test_partition_count_validated(client: TestClient):
    generator_id = _create_generator(client)
    resp = client.post(f"/generators/{generator_id}/partition", json={"count": 0})
    assert resp.status_code == 422


def test_snapshot_and_restore(client: TestClient):
    generator_id = _create_generator(client, preset="uppercase", length=2)
    _issue(client, generator_id, 3)

    resp = client.get(f"/generators/{generator_id}/state")
    assert resp.status_code == 200
    state = resp.json()
    assert state["steps_taken"] == 3

    resp = client.post("/generators/restore", json=state)
    assert resp.status_code == 200
    restored_id = resp.json()["generator_id"]
    assert restored_id != generator_id

    assert _issue(client, restored_id, 700) == _issue(client, generator_id, 700)


def test_restore_invalid_state(client: TestClient):
    generator_id = _create_generator(client, alphabet="AB", length=2)
    state = client.get(f"/generators/{generator_id}/state").json()

    state["params"]["increment"] = 2
    resp = client.post("/generators/restore", json=state)
    assert resp.status_code == 422
    assert resp.json()["detail"]["type"] == "config:invalid-state"

    state["length"] = 3
    resp = client.post("/generators/restore", json=state)
    assert resp.status_code == 422


def test_delete(client: TestClient):
    generator_id = _create_generator(client)
    assert client.delete(f"/generators/{generator_id}").status_code == 204
    assert client.delete(f"/generators/{generator_id}").status_code == 404
    assert client.post(f"/generators/{generator_id}/next").status_code == 404


def test_unknown_generator(client: TestClient):
    generator_id = uuid.uuid4()
    assert client.get(f"/generators/{generator_id}").status_code == 404
    assert client.get(f"/generators/{generator_id}/state").status_code == 404


def test_dev_tools(client: TestClient):
    generator_id = _create_generator(client)

    resp = client.get("/dev-tools/generators/list")
    assert resp.status_code == 200
    assert generator_id in [info["generator_id"] for info in resp.json()]

    resp = client.get("/dev-tools/state/schema")
    assert resp.status_code == 200
    assert "steps_taken" in resp.json()["properties"]

    resp = client.get(f"/dev-tools/generators/{generator_id}/params")
    assert resp.status_code == 200
    body = resp.json()
    assert body["full_period"] is True
    info = client.get(f"/generators/{generator_id}").json()
    assert body["params"]["modulus"] == info["modulus"]
    assert 0 <= body["offset"] < info["modulus"]

    resp = client.get(f"/dev-tools/generators/{uuid.uuid4()}/params")
    assert resp.status_code == 404


def test_restore_rejects_unhashable_symbols(client: TestClient):
    generator_id = _create_generator(client, alphabet="AB", length=2)
    state = client.get(f"/generators/{generator_id}/state").json()

    state["alphabet"] = [["A"], ["B"]]
    resp = client.post("/generators/restore", json=state)
    assert resp.status_code == 422


def test_growth_past_64_bits_is_a_conflict(client: TestClient):
    modulus = 16**15
    state = {
        "alphabet": list("0123456789abcdef"),
        "length": 15,
        "seed": 0,
        "params": {"multiplier": 5, "increment": 1, "modulus": modulus},
        "offset": 0,
        "x": 0,
        "steps_taken": modulus,
        "exhaustion_strategy": "increase_length",
    }
    resp = client.post("/generators/restore", json=state)
    assert resp.status_code == 200, resp.text
    generator_id = resp.json()["generator_id"]

    resp = client.post(f"/generators/{generator_id}/next")
    assert resp.status_code == 409
    detail = resp.json()["detail"]
    assert detail["type"] == "generator:error"
    assert detail["extra"]["error"] == "ConfigurationOverflowError"
