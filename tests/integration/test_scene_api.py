"""
Integration test: the HTTP surface a renderer talks to.

Uses a real controller and worker; only the network fetch is faked.
"""

import time

import yaml


def wait_for_poll(worker, timeout=1.0):
    deadline = time.monotonic() + timeout
    while worker.in_flight and time.monotonic() < deadline:
        time.sleep(0.01)


class TestSceneEndpoints:

    def test_empty_scene(self, client):
        data = client.get("/api/scene").get_json()
        assert data["nodes"] == []
        assert data["counts"] == {"posts": 0, "visible": 0}

    def test_scene_after_poll(self, loaded_client):
        data = loaded_client.get("/api/scene").get_json()

        assert [n["id"] for n in data["nodes"]] == ["1", "2", "3"]
        assert data["counts"] == {"posts": 3, "visible": 3}
        # Same category only between 1 and 2; 3 is another category and day
        assert len(data["edges"]) == 1

    def test_scene_carries_spawn_effects(self, loaded_client):
        effects = loaded_client.get("/api/scene").get_json()["effects"]
        assert len(effects) == 3
        assert {"position", "age_ms"} <= set(effects[0])

    def test_frame(self, loaded_client):
        data = loaded_client.get("/api/frame").get_json()
        assert set(data["scales"]) == {"1", "2", "3"}
        assert len(data["effects"]) == 3
        assert data["background"].startswith("#")

    def test_legend(self, client):
        assert client.get("/api/legend").get_json() == {
            "Technology": "#4e79a7",
            "Business": "#f28e2c",
            "Science": "#e15759",
            "Health": "#76b7b2",
        }

    def test_style(self, client):
        data = client.get("/api/style").get_json()
        assert data["camera"] == {"fov": 75.0, "near": 0.1, "far": 1000.0}
        assert data["highlight"] == {"dim": 0.3, "normal": 0.7, "selected": 1.0}
        assert data["edge"] == {"color": "#cccccc", "opacity": 0.3}
        assert data["effect"]["ttl_ms"] == 2000


class TestFilterEndpoints:

    def test_get_defaults(self, client):
        data = client.get("/api/filters").get_json()
        assert data["search_term"] == ""
        assert data["recency_window"] == "all"
        assert all(data["category_visibility"].values())

    def test_hide_category(self, loaded_client):
        response = loaded_client.put("/api/filters", json={"category_visibility": {"Health": False}})

        assert response.status_code == 200
        data = response.get_json()
        assert data["visible"] == 2
        assert data["destroyed"] == ["3"]

        scene = loaded_client.get("/api/scene").get_json()
        assert scene["counts"] == {"posts": 3, "visible": 2}

    def test_search(self, loaded_client):
        data = loaded_client.put("/api/filters", json={"search_term": "flu"}).get_json()
        assert data["visible"] == 1
        assert data["filters"]["search_term"] == "flu"

    def test_invalid_window_rejected(self, loaded_client):
        response = loaded_client.put("/api/filters", json={"recency_window": "fortnight"})
        assert response.status_code == 400
        assert loaded_client.get("/api/filters").get_json()["recency_window"] == "all"

    def test_unknown_category_rejected(self, client):
        response = client.put("/api/filters", json={"category_visibility": {"Sports": True}})
        assert response.status_code == 400

    def test_empty_body_rejected(self, client):
        assert client.put("/api/filters", json={}).status_code == 400

    def test_visibility_list_rejected(self, loaded_client):
        response = loaded_client.put("/api/filters", json={"category_visibility": ["Technology"]})
        assert response.status_code == 400
        assert "error" in response.get_json()

    def test_visibility_string_flag_rejected(self, loaded_client):
        response = loaded_client.put("/api/filters", json={"category_visibility": {"Health": "false"}})
        assert response.status_code == 400
        assert loaded_client.get("/api/scene").get_json()["counts"]["visible"] == 3


class TestPointerEndpoints:

    def test_hover_by_node_id(self, loaded_client):
        data = loaded_client.post("/api/pointer", json={"node_id": "1"}).get_json()

        assert data["hovered"]["id"] == "1"
        assert data["highlights"] == {"1": "selected", "2": "normal", "3": "dim"}

        scene = loaded_client.get("/api/scene").get_json()
        assert scene["interaction"]["target"] == "1"

    def test_leave(self, loaded_client):
        loaded_client.post("/api/pointer", json={"node_id": "1"})
        loaded_client.post("/api/pointer/leave")

        scene = loaded_client.get("/api/scene").get_json()
        assert scene["interaction"]["state"] == "idle"

    def test_pointer_in_empty_space(self, loaded_client):
        data = loaded_client.post("/api/pointer", json={"x": 0.99, "y": -0.99}).get_json()
        assert data["hovered"] is None

    def test_bad_coordinates(self, client):
        response = client.post("/api/pointer", json={"x": "left"})
        assert response.status_code == 400


class TestDragEndpoints:

    def test_drag_suspends_rotation(self, client):
        data = client.post("/api/drag/start").get_json()
        assert data["dragging"] is True

        data = client.post("/api/drag/end").get_json()
        assert data["dragging"] is False
        assert data["auto_rotate"] is True


class TestSettingsEndpoints:

    def test_get_settings(self, client):
        data = client.get("/api/settings").get_json()
        assert len(data["feeds"]) == 2
        assert data["auto_rotate"] is True

    def test_toggle_auto_rotate_persists(self, client, settings_path):
        response = client.put("/api/settings/auto-rotate", json={"enabled": False})

        assert response.status_code == 200
        assert client.get("/api/settings").get_json()["rotating"] is False
        assert yaml.safe_load(settings_path.read_text())["auto_rotate"] is False

    def test_toggle_requires_bool(self, client):
        assert client.put("/api/settings/auto-rotate", json={"enabled": "yes"}).status_code == 400

    def test_add_feed_triggers_poll(self, app, client, fetch, settings_path):
        response = client.post("/api/settings/feeds", json={
            "url": "https://example.com/biz.xml",
            "category": "Business",
        })

        assert response.status_code == 200
        data = response.get_json()
        assert data["feeds"][-1] == {"url": "https://example.com/biz.xml", "category": "Business"}
        assert data["polling"] is True

        saved = yaml.safe_load(settings_path.read_text())
        assert len(saved["feeds"]) == 3

        worker = app.extensions["feedgraph"].worker
        wait_for_poll(worker)
        feeds_seen = fetch.call_args.args[0]
        assert [f.url for f in feeds_seen][-1] == "https://example.com/biz.xml"

    def test_add_feed_rejects_bad_category(self, client):
        response = client.post("/api/settings/feeds", json={"url": "https://x", "category": "Sports"})
        assert response.status_code == 400

    def test_remove_feed(self, client):
        data = client.delete("/api/settings/feeds/0").get_json()
        assert [f["category"] for f in data["feeds"]] == ["Health"]

    def test_remove_missing_feed(self, client):
        assert client.delete("/api/settings/feeds/9").status_code == 404

    def test_refresh_and_worker_stats(self, app, client):
        worker = app.extensions["feedgraph"].worker
        assert client.post("/api/settings/refresh").get_json()["polling"] is True
        wait_for_poll(worker)

        stats = client.get("/api/workers").get_json()["feed_poller"]
        assert stats["name"] == "FEED-POLLER"
        assert stats["runs"] == 1
        assert stats["running"] is False


class TestSceneRefresh:

    def test_refresh_keeps_scene(self, loaded_client):
        data = loaded_client.post("/api/scene/refresh").get_json()
        assert data == {"visible": 3, "destroyed": []}
