"""Tests for API endpoints."""

import pytest
from fastapi.testclient import TestClient
from httpx import AsyncClient, ASGITransport

from waitlist_manager.api.deps import connection_manager, get_venue
from waitlist_manager.config import Settings, settings
from waitlist_manager.main import app
from waitlist_manager.services import create_venue, initialize_sample_data

API = settings.api_prefix


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
def venue():
    """Fresh seeded venue for each test: 12 tables, 3 waitlist and 2 reservations."""
    venue = create_venue(Settings(database_url=None))
    initialize_sample_data(venue)
    app.dependency_overrides[get_venue] = lambda: venue
    yield venue
    app.dependency_overrides.clear()


def client():
    return AsyncClient(transport=ASGITransport(app=app), base_url="http://test")


@pytest.mark.anyio
async def test_root_endpoint():
    """Test root endpoint returns app info."""
    async with client() as c:
        response = await c.get("/")

    assert response.status_code == 200
    data = response.json()
    assert "name" in data
    assert data["status"] == "running"


@pytest.mark.anyio
async def test_health_check():
    async with client() as c:
        response = await c.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


class TestTablesApi:
    """Tests for the table layout endpoints."""

    @pytest.mark.anyio
    async def test_get_tables(self, venue):
        async with client() as c:
            response = await c.get(f"{API}/tables")

        assert response.status_code == 200
        data = response.json()
        assert [t["id"] for t in data] == list(range(1, 13))
        assert data[0]["capacity"] == 2

    @pytest.mark.anyio
    async def test_unknown_table(self, venue):
        async with client() as c:
            response = await c.get(f"{API}/tables/99")

        assert response.status_code == 404

    @pytest.mark.anyio
    async def test_update_table(self, venue):
        commits = venue.store.commit_count
        async with client() as c:
            response = await c.put(f"{API}/tables/1", json={"name": "Patio", "capacity": 6})

        assert response.status_code == 200
        assert response.json()["name"] == "Patio"
        assert response.json()["capacity"] == 6
        assert venue.store.commit_count == commits + 1

    @pytest.mark.anyio
    async def test_update_unknown_table(self, venue):
        async with client() as c:
            response = await c.put(f"{API}/tables/99", json={"name": "Patio"})

        assert response.status_code == 404

    @pytest.mark.anyio
    @pytest.mark.parametrize("capacity", [0, 21])
    async def test_capacity_out_of_range(self, venue, capacity):
        async with client() as c:
            response = await c.put(f"{API}/tables/1", json={"capacity": capacity})

        assert response.status_code == 422
        assert venue.store.get_tables()[0].capacity == 2

    @pytest.mark.anyio
    async def test_resize_layout(self, venue):
        async with client() as c:
            response = await c.put(f"{API}/tables/layout", json={"count": 6})
            rejected = await c.put(f"{API}/tables/layout", json={"count": 25})

        assert response.status_code == 200
        assert len(response.json()) == 6
        assert rejected.status_code == 422
        assert len(venue.store.get_tables()) == 6

    @pytest.mark.anyio
    async def test_occupy_and_clear(self, venue):
        async with client() as c:
            occupied = await c.post(f"{API}/tables/2/occupy")
            cleared = await c.post(f"{API}/tables/2/clear")

        assert occupied.json()["occupied"] is True
        assert occupied.json()["guest_name"] is None
        assert cleared.json()["occupied"] is False

    @pytest.mark.anyio
    async def test_clear_all(self, venue):
        venue.engine.occupy_manually(1)
        venue.engine.occupy_manually(5)
        async with client() as c:
            response = await c.post(f"{API}/tables/clear")

        assert response.json() == {"cleared": 2}


class TestWaitlistApi:
    """Tests for the guest-facing queue endpoints."""

    @pytest.mark.anyio
    async def test_join(self, venue):
        async with client() as c:
            response = await c.post(
                f"{API}/waitlist",
                json={"name": "Ana", "party_size": 2, "special_requests": "near Sarah"},
            )

        assert response.status_code == 200
        data = response.json()
        assert data["id"] == 6
        assert data["type"] == "waitlist"
        assert data["status"] == "QUEUED"
        assert data["position"] == 4
        assert data["estimated_wait"] == 40

    @pytest.mark.anyio
    async def test_join_rejects_empty_party(self, venue):
        async with client() as c:
            response = await c.post(f"{API}/waitlist", json={"name": "Ana", "party_size": 0})

        assert response.status_code == 422

    @pytest.mark.anyio
    async def test_filter_by_type(self, venue):
        async with client() as c:
            reservations = await c.get(f"{API}/waitlist", params={"type": "reservation"})
            invalid = await c.get(f"{API}/waitlist", params={"type": "walk-in"})

        assert [e["id"] for e in reservations.json()] == [2, 4]
        assert [e["position"] for e in reservations.json()] == [1, 2]
        assert invalid.status_code == 400

    @pytest.mark.anyio
    async def test_cancel(self, venue):
        async with client() as c:
            response = await c.delete(f"{API}/waitlist/2")
            missing = await c.get(f"{API}/waitlist/2")

        assert response.json() == {"message": "Reservation cancelled", "status": "CANCELLED"}
        assert missing.status_code == 404


class TestStaffApi:
    """Tests for staff seating endpoints."""

    @pytest.mark.anyio
    async def test_promote(self, venue):
        async with client() as c:
            response = await c.post(f"{API}/staff/promote/2")

        assert response.status_code == 200
        data = response.json()
        assert data["success"] is True
        assert data["table_id"] == 1
        assert data["outcome"] == "seated-fallback"

    @pytest.mark.anyio
    async def test_promote_unknown_entry(self, venue):
        async with client() as c:
            response = await c.post(f"{API}/staff/promote/99")

        assert response.status_code == 404

    @pytest.mark.anyio
    async def test_promote_without_table(self, venue):
        entry = venue.engine.join("Banquet", 30)
        async with client() as c:
            response = await c.post(f"{API}/staff/promote/{entry.id}")
            notifications = await c.get(f"{API}/staff/notifications")

        assert response.status_code == 409
        assert response.json()["detail"] == "no-table-available"
        assert notifications.json()[-1]["message"] == "No tables available for party of 30"

    @pytest.mark.anyio
    async def test_seat_all_reservations(self, venue):
        async with client() as c:
            response = await c.post(f"{API}/staff/seat-all")
            notifications = await c.get(f"{API}/staff/notifications")

        data = response.json()
        assert data["type"] == "reservation"
        assert data["seated_count"] == 2
        assert data["failed_count"] == 0
        assert data["assignments"] == {"2": 1, "4": 3}
        assert notifications.json()[-1]["message"] == "Seated 2 reservations"

    @pytest.mark.anyio
    async def test_seat_all_waitlist(self, venue):
        async with client() as c:
            response = await c.post(f"{API}/staff/seat-all", json={"type": "waitlist"})

        assert response.json()["seated_entry_ids"] == [1, 3, 5]

    @pytest.mark.anyio
    async def test_no_show(self, venue):
        async with client() as c:
            response = await c.post(f"{API}/staff/no-show/3")
            again = await c.post(f"{API}/staff/no-show/3")

        assert response.json() == {"id": 3, "status": "NO_SHOW"}
        assert again.status_code == 404

    @pytest.mark.anyio
    @pytest.mark.parametrize("limit", [0, -1, 201])
    async def test_notifications_limit_bounds(self, venue, limit):
        venue.notifications.send("hello")
        async with client() as c:
            response = await c.get(f"{API}/staff/notifications", params={"limit": limit})

        assert response.status_code == 422

    @pytest.mark.anyio
    async def test_notifications_limit(self, venue):
        for i in range(5):
            venue.notifications.send(f"message {i}")
        async with client() as c:
            response = await c.get(f"{API}/staff/notifications", params={"limit": 2})

        assert [n["message"] for n in response.json()] == ["message 3", "message 4"]

    @pytest.mark.anyio
    async def test_dashboard(self, venue):
        async with client() as c:
            response = await c.get(f"{API}/staff/dashboard")

        data = response.json()
        assert data["queues"] == {"reservations_queued": 2, "waitlist_queued": 3}
        assert data["tables"]["total"] == 12
        assert data["occupancy"]["current"] == 45

    @pytest.mark.anyio
    async def test_occupancy(self, venue):
        async with client() as c:
            up = await c.post(f"{API}/staff/occupancy/increment")
            down = await c.post(f"{API}/staff/occupancy/decrement")
            invalid = await c.post(f"{API}/staff/occupancy/sideways")

        assert up.json()["current"] == 46
        assert down.json()["current"] == 45
        assert invalid.status_code == 400


class TestWebSocket:
    """Tests for the real-time endpoint."""

    def test_initial_state_and_ping(self, venue):
        with TestClient(app).websocket_connect("/ws") as websocket:
            initial = websocket.receive_json()
            websocket.send_json({"type": "ping"})
            pong = websocket.receive_json()

        assert initial["type"] == "initial_state"
        assert len(initial["data"]["tables"]) == 12
        assert len(initial["data"]["entries"]) == 5
        assert pong == {"type": "pong"}

    def test_unknown_message(self, venue):
        with TestClient(app).websocket_connect("/ws") as websocket:
            websocket.receive_json()
            websocket.send_json({"type": "dance"})
            reply = websocket.receive_json()

        assert reply["type"] == "error"

    @pytest.mark.parametrize("payload", ["[1, 2]", "42", '"ping"', "not json"])
    def test_non_object_message_gets_error(self, venue, payload):
        """Test any non-object payload gets an error reply and the socket stays usable."""
        with TestClient(app).websocket_connect("/ws") as websocket:
            websocket.receive_json()
            websocket.send_text(payload)
            reply = websocket.receive_json()
            websocket.send_json({"type": "ping"})
            pong = websocket.receive_json()

        assert reply["type"] == "error"
        assert pong == {"type": "pong"}

    def test_disconnect_removes_connection(self, venue):
        with TestClient(app).websocket_connect("/ws") as websocket:
            websocket.receive_json()
            assert len(connection_manager.active_connections) == 1

        assert connection_manager.active_connections == []


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
