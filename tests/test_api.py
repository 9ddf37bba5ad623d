from fastapi.testclient import TestClient

from sanma.main import app

client = TestClient(app)

TENPAI = ["m1", "m2", "m3", "p4", "p5", "p6", "s7", "s8", "s9", "z1", "z1", "z1", "m9"]


def score_payload() -> dict:
    return {
        "tiles": ["m2", "m3", "m4", "p4", "p5", "p6", "s6", "s7", "s8", "z5", "z5", "z5", "m9", "m9"],
        "context": {
            "win_type": "ron",
            "seat_wind": "south",
            "round_wind": "east",
            "riichi": False,
            "dora_indicators": [],
            "melds": [],
        },
        "rules": {"kuitan_ari": True, "limit_hands": False},
        "loser": "west",
        "honba": 0,
        "kyotaku": 0,
    }


def test_health():
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_root_lists_docs():
    assert client.get("/").json()["docs"] == "/docs"


def test_shanten_reports_waits():
    response = client.post("/api/v1/shanten", json={"tiles": TENPAI})
    assert response.status_code == 200
    assert response.json() == {"shanten": 0, "tenpai": True, "waits": ["m9"]}


def test_shanten_rejects_unknown_tile():
    response = client.post("/api/v1/shanten", json={"tiles": TENPAI[:-1] + ["x9"]})
    assert response.status_code == 422
    assert response.json()["error"]["code"] == "invalid_input"


def test_calls():
    response = client.post("/api/v1/calls", json={"hand": TENPAI, "discard": "z1"})
    assert response.status_code == 200
    body = response.json()
    assert body["pon"] is True
    assert body["kan"] is True
    assert body["ron"] is False
    assert body["chi"] == []
    assert body["concealed_kans"] == []


def test_riichi():
    response = client.post("/api/v1/riichi", json={"tiles": TENPAI + ["z7"]})
    assert response.json() == {"can_declare": True}


def test_evaluate():
    payload = score_payload()
    response = client.post("/api/v1/evaluate", json={"tiles": payload["tiles"], "context": payload["context"]})
    assert response.status_code == 200
    body = response.json()
    assert body["han"] == 1
    assert body["fu"] == 40
    assert body["base_points"] == 320
    assert body["yaku"] == [{"name": "役牌 白", "han": 1}]


def test_evaluate_rejects_non_winning_shape():
    payload = score_payload()
    payload["tiles"][-1] = "m8"
    response = client.post("/api/v1/evaluate", json={"tiles": payload["tiles"], "context": payload["context"]})
    assert response.status_code == 422
    assert response.json()["detail"] == "Hand is not a valid winning shape"


def test_score():
    response = client.post("/api/v1/score", json=score_payload())
    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "ok"
    assert body["warnings"] == []
    assert body["result"]["points"]["ron"] == 1300
    assert body["result"]["deltas"] == {"east": 0, "south": 1300, "west": -1300}
    assert body["result"]["point_label"] == "1翻40符 ロン 1300"


def test_score_warns_without_named_yaku():
    payload = score_payload()
    payload["tiles"] = ["p4", "p5", "p6", "s7", "s8", "s9", "m7", "m8", "m9", "z4", "z4"]
    payload["context"]["melds"] = [{"type": "chi", "tiles": ["m1", "m2", "m3"], "from_seat": "east"}]
    response = client.post("/api/v1/score", json=payload)
    assert response.status_code == 200
    body = response.json()
    assert body["warnings"] == ["No named yaku; scored as 1 han."]
    assert body["result"]["points"]["ron"] == 700


def test_score_rejects_inconsistent_context():
    payload = score_payload()
    payload["context"]["ippatsu"] = True
    response = client.post("/api/v1/score", json=payload)
    assert response.status_code == 422
    assert "ippatsu" in response.json()["error"]["message"]


def test_score_rejects_negative_honba():
    payload = score_payload()
    payload["honba"] = -1
    assert client.post("/api/v1/score", json=payload).status_code == 422


def test_cpu_discard():
    response = client.post("/api/v1/cpu/discard", json={"hand": TENPAI + ["z7"], "threatening_discards": ["z7"]})
    assert response.json() == {"index": 13, "tile": "z7"}


def test_deal_is_seeded():
    first = client.post("/api/v1/deal", json={"seed": 3}).json()
    second = client.post("/api/v1/deal", json={"seed": 3}).json()
    assert first == second
    assert sorted(first["players"]) == ["east", "south", "west"]
    assert len(first["wall"]) == 97
