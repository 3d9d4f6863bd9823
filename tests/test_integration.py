from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from fieldroute.data.feed_client import FeedUnavailableError
from fieldroute.main import create_app
from fieldroute.services.customers import SnapshotStore

from conftest import NOW, feed_row, feed_text


class StaticFeed:
    def __init__(self, text: str) -> None:
        self.text = text

    def fetch_text(self) -> str:
        return self.text


class BrokenFeed:
    def fetch_text(self) -> str:
        raise FeedUnavailableError("Customer feed returned HTTP 500")


def _install_store(monkeypatch: pytest.MonkeyPatch, store: SnapshotStore, weekday: str = "Monday") -> None:
    from fieldroute.api.routes import customers as customers_routes
    from fieldroute.api.routes import health as health_routes
    from fieldroute.services.customers import snapshot as snapshot_module

    monkeypatch.setattr(snapshot_module, "current_weekday", lambda: weekday)
    monkeypatch.setattr(customers_routes, "get_store", lambda: store)
    monkeypatch.setattr(health_routes, "get_store", lambda: store)


@pytest.fixture
def api_client() -> TestClient:
    return TestClient(create_app())


@pytest.fixture
def monday_store(sample_feed, monkeypatch: pytest.MonkeyPatch) -> SnapshotStore:
    store = SnapshotStore(client_factory=lambda: StaticFeed(sample_feed))
    store.refresh(weekday="Monday", now=NOW)
    _install_store(monkeypatch, store)
    return store


def test_health(api_client: TestClient):
    response = api_client.get("/api/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_health_snapshot_reports_loaded(api_client: TestClient, monday_store: SnapshotStore):
    payload = api_client.get("/api/health/snapshot").json()
    assert payload["loaded"] is True
    assert payload["customers"] == 4


def test_customers_are_ranked(api_client: TestClient, monday_store: SnapshotStore):
    response = api_client.get("/api/customers")

    assert response.status_code == 200
    payload = response.json()
    assert payload["total"] == 4
    assert payload["has_next_page"] is False
    names = [item["name"] for item in payload["items"]]
    assert names == ["Bharat Stores", "Chandan Agencies", "Durga Mart", "Acme Traders"]
    assert payload["items"][0]["urgency"] == "BLOCKED"
    assert payload["items"][1]["urgency"] == "COLLECT_NOW"
    assert payload["items"][2]["urgency"] == "FOLLOW_UP"
    assert payload["items"][2]["distance_from_origin_km"] is None
    assert payload["items"][2]["latitude"] is None


def test_customers_pagination_and_area_filter(api_client: TestClient, monday_store: SnapshotStore):
    page = api_client.get("/api/customers", params={"page": 1, "page_size": 2}).json()
    assert len(page["items"]) == 2
    assert page["has_next_page"] is True

    juria = api_client.get("/api/customers", params={"area": "juria"}).json()
    assert juria["total"] == 3


def test_customer_profile(api_client: TestClient, monday_store: SnapshotStore):
    response = api_client.get("/api/customers/Acme Traders")
    assert response.status_code == 200
    assert response.json()["area"] == "Juria"

    missing = api_client.get("/api/customers/Nobody")
    assert missing.status_code == 404


def test_customer_profile_accepts_raw_feed_name(api_client: TestClient, monkeypatch: pytest.MonkeyPatch):
    text = feed_text([feed_row("A&B Traders", "Juria", lat="21.0", lng="83.05")])
    store = SnapshotStore(client_factory=lambda: StaticFeed(text))
    store.refresh(weekday="Monday", now=NOW)
    _install_store(monkeypatch, store)

    raw = api_client.get("/api/customers/A&B Traders")
    escaped = api_client.get("/api/customers/A&amp;B Traders")

    assert raw.status_code == 200
    assert raw.json()["name"] == "A&amp;B Traders"
    assert escaped.status_code == 200
    assert escaped.json() == raw.json()


def test_customer_stats(api_client: TestClient, monday_store: SnapshotStore):
    payload = api_client.get("/api/customers/stats").json()

    assert payload["totalCustomers"] == 4
    assert payload["blockedCustomers"] == 1
    assert payload["missingLocation"]["count"] == 1
    assert payload["urgency"]["BLOCKED"] == 1


def test_today_route(api_client: TestClient, monday_store: SnapshotStore):
    response = api_client.get("/api/routes/today")

    assert response.status_code == 200
    payload = response.json()
    assert payload["weekday"] == "Monday"
    assert payload["areas"] == ["Juria"]
    assert [stop["customer_name"] for stop in payload["stops"]] == [
        "Acme Traders",
        "Chandan Agencies",
        "Durga Mart",
    ]
    assert payload["summary"]["stop_count"] == 3
    assert payload["summary"]["estimated_travel_hours"] == pytest.approx(
        payload["summary"]["total_distance_km"] / 25
    )


def test_today_tour(api_client: TestClient, monday_store: SnapshotStore):
    response = api_client.get("/api/routes/today/tour")

    assert response.status_code == 200
    payload = response.json()
    assert payload["stops"] == 2
    assert payload["url"].startswith("https://www.google.com/maps/dir/20.9964,83.0526/21.0,83.05/")


def test_tour_conflict_when_nothing_scheduled(api_client: TestClient, sample_feed, monkeypatch: pytest.MonkeyPatch):
    store = SnapshotStore(client_factory=lambda: StaticFeed(sample_feed))
    store.refresh(weekday="Sunday", now=NOW)
    _install_store(monkeypatch, store, weekday="Sunday")

    route = api_client.get("/api/routes/today").json()
    assert route["stops"] == []
    assert route["summary"]["total_distance_km"] == 0

    response = api_client.get("/api/routes/today/tour")
    assert response.status_code == 409


def test_tour_conflict_when_no_locations(api_client: TestClient, monkeypatch: pytest.MonkeyPatch):
    text = feed_text([feed_row("Acme", "Juria")])
    store = SnapshotStore(client_factory=lambda: StaticFeed(text))
    store.refresh(weekday="Monday", now=NOW)
    _install_store(monkeypatch, store)

    response = api_client.get("/api/routes/today/tour")
    assert response.status_code == 409
    assert "location" in response.json()["detail"]


def test_day_schedule(api_client: TestClient):
    assert api_client.get("/api/routes/schedule/saturday").json() == {
        "weekday": "Saturday",
        "areas": ["Paikmal", "Mandosil"],
    }
    assert api_client.get("/api/routes/schedule/Sunday").json()["areas"] == []


def test_feed_failure_returns_bad_gateway(api_client: TestClient, monkeypatch: pytest.MonkeyPatch):
    store = SnapshotStore(client_factory=BrokenFeed)
    _install_store(monkeypatch, store)

    assert api_client.get("/api/customers").status_code == 502
    assert api_client.post("/api/customers/refresh").status_code == 502
    assert api_client.get("/api/health/snapshot").json() == {"loaded": False}


def test_refresh_failure_keeps_previous_data(api_client: TestClient, sample_feed, monkeypatch: pytest.MonkeyPatch):
    clients = iter([StaticFeed(sample_feed), BrokenFeed()])
    store = SnapshotStore(client_factory=lambda: next(clients))
    store.refresh(weekday="Monday", now=NOW)
    _install_store(monkeypatch, store)

    assert api_client.post("/api/customers/refresh").status_code == 502
    assert api_client.get("/api/customers").json()["total"] == 4


def test_refresh_with_export(api_client: TestClient, sample_feed, monkeypatch: pytest.MonkeyPatch, tmp_path: Path):
    from fieldroute.api.routes import customers as customers_routes
    from fieldroute.persistence.filesystem import FileStorage

    store = SnapshotStore(client_factory=lambda: StaticFeed(sample_feed))
    _install_store(monkeypatch, store)
    monkeypatch.setattr(customers_routes, "FileStorage", lambda: FileStorage(root=tmp_path))

    response = api_client.post("/api/customers/refresh", params={"persist": "true"})

    assert response.status_code == 200
    payload = response.json()
    assert payload["customers"] == 4
    export_dir = Path(payload["export_dir"])
    assert export_dir.parent == (tmp_path / "outputs").resolve()
    assert (export_dir / "summary.json").exists()
    assert (export_dir / "route.csv").exists()


def test_today_route_follows_the_clock(api_client: TestClient, monday_store: SnapshotStore, monkeypatch: pytest.MonkeyPatch):
    from fieldroute.services.customers import snapshot as snapshot_module

    assert api_client.get("/api/routes/today").json()["weekday"] == "Monday"

    monkeypatch.setattr(snapshot_module, "current_weekday", lambda: "Tuesday")
    payload = api_client.get("/api/routes/today").json()

    assert payload["weekday"] == "Tuesday"
    assert payload["areas"] == ["Ghess"]
    assert [stop["customer_name"] for stop in payload["stops"]] == ["Bharat Stores"]
