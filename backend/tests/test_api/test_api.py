"""Tests for API endpoints."""

from __future__ import annotations

from fastapi.testclient import TestClient

from roibridge import __version__
from roibridge.main import app


client = TestClient(app)

RECTANGLE = {"kind": "Rectangle", "x": 10, "y": 20, "width": 5, "height": 5, "plane": {"c": 1, "z": 0, "t": 0}}


def test_health():
    response = client.get("/api/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "ok"
    assert data["version"] == __version__


def test_encode_rectangle():
    response = client.post("/api/shapes/encode", json={"objects": [{"shape": RECTANGLE}]})
    assert response.status_code == 200
    data = response.json()
    assert data["converted"] == 1
    [shape] = data["rois"][0]["shapes"]
    assert shape["kind"] == "Rectangle"
    assert (shape["x"], shape["y"], shape["width"], shape["height"]) == (10, 20, 5, 5)
    assert (shape["the_c"], shape["the_z"], shape["the_t"]) == (1, 0, 0)


def test_encode_then_decode():
    encoded = client.post("/api/shapes/encode", json={"objects": [{"shape": RECTANGLE, "category": "cell"}]}).json()
    response = client.post("/api/shapes/decode", json={"rois": encoded["rois"], "category": "cell"})
    assert response.status_code == 200
    [obj] = response.json()["objects"]
    assert obj["category"] == "detection"
    assert obj["shape"]["kind"] == "Rectangle"
    assert obj["shape"]["plane"] == {"c": 1, "z": 0, "t": 0}
    assert obj["shape"]["color"] is None


def test_decode_skips_masks():
    rois = [{"shapes": [{"kind": "Mask"}]}, {"shapes": [{"kind": "Point", "x": 1, "y": 2}]}]
    response = client.post("/api/shapes/decode", json={"rois": rois})
    assert response.status_code == 200
    data = response.json()
    assert data["converted"] == 1
    assert data["skipped"][0]["index"] == 0


def test_decode_strict_rejects_masks():
    response = client.post("/api/shapes/decode", json={"rois": [{"shapes": [{"kind": "Mask"}]}], "strict": True})
    assert response.status_code == 422
    assert "Mask" in response.json()["detail"]


def test_decode_self_intersecting_roi():
    bow_tie = {
        "shapes": [
            {"kind": "Polygon", "points": "0,0 10,10 10,0 0,10"},
            {"kind": "Rectangle", "x": 20, "y": 20, "width": 5, "height": 5},
        ]
    }
    response = client.post("/api/shapes/decode", json={"rois": [bow_tie]})
    assert response.status_code == 200
    assert response.json()["converted"] == 1


def test_decode_strict_rejects_degenerate_polygon():
    rois = [{"shapes": [{"kind": "Polygon", "points": "0,0 5,5"}]}]
    response = client.post("/api/shapes/decode", json={"rois": rois, "strict": True})
    assert response.status_code == 422
    assert "at least 3 points" in response.json()["detail"]


def test_decode_owner_filter():
    rois = [
        {"owner": "alice", "shapes": [{"kind": "Point", "x": 1, "y": 2}]},
        {"owner": "bob", "shapes": [{"kind": "Point", "x": 3, "y": 4}]},
    ]
    data = client.post("/api/shapes/decode", json={"rois": rois, "owner": "bob"}).json()
    assert [o["shape"]["x"] for o in data["objects"]] == [3]


def test_encode_unknown_kind_is_rejected():
    response = client.post("/api/shapes/encode", json={"objects": [{"shape": {"kind": "Hexagon"}}]})
    assert response.status_code == 422


def test_reconcile_replace():
    response = client.post(
        "/api/keyvalues/reconcile",
        json={
            "incoming": [{"key": "B", "value": "20"}, {"key": "C", "value": "3"}],
            "existing": {"A": "1", "B": "2"},
            "policy": "replace_and_add",
        },
    )
    assert response.status_code == 200
    data = response.json()
    assert data["entries"] == {"A": "1", "B": "20", "C": "3"}
    assert (data["existing_count"], data["new_count"]) == (1, 1)
    assert data["summary"] == "Update 1 metadata and add 1 new key-value pair"


def test_reconcile_duplicate_keys():
    response = client.post(
        "/api/keyvalues/reconcile",
        json={"incoming": [{"key": "A", "value": "1"}, {"key": "A", "value": "2"}]},
    )
    assert response.status_code == 422
    assert "Duplicate key" in response.json()["detail"]


def test_color_pack():
    response = client.post("/api/colors/convert", json={"alpha": 255, "red": 255})
    assert response.status_code == 200
    data = response.json()
    assert data["argb"] == -65536
    assert data["rgba"] == -16776961


def test_color_unpack_unsigned():
    data = client.post("/api/colors/convert", json={"argb": 0xFF00FF00}).json()
    assert data["argb"] == -16711936
    assert (data["alpha"], data["red"], data["green"], data["blue"]) == (255, 0, 255, 0)


def test_color_out_of_range():
    response = client.post("/api/colors/convert", json={"red": 300})
    assert response.status_code == 422
