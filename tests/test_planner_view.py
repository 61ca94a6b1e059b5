from __future__ import annotations

from fastapi.testclient import TestClient


def test_planner_page_renders_seed_day(seeded_client: TestClient) -> None:
    response = seeded_client.get("/planner")

    assert response.status_code == 200
    body = response.text
    assert "ColorPlan Test" in body
    assert "19 - 25 October 2026" in body
    assert "Today&#x27;s agenda" in body or "Today's agenda" in body
    assert "Breakfast" in body
    assert "Project planning (deep focus)" in body
    assert "+12 more" in body
    assert "High priority" in body


def test_planner_page_escapes_titles(client: TestClient) -> None:
    client.post(
        "/tools/appointments",
        json={"title": "<script>alert(1)</script>", "date": "2026-10-19", "time": "08:00"},
    )

    body = client.get("/planner").text

    assert "<script>alert(1)</script>" not in body
    assert "&lt;script&gt;" in body


def test_planner_page_day_view_without_appointments(client: TestClient) -> None:
    client.put("/tools/view/type", json={"view_type": "day"})

    body = client.get("/planner").text

    assert "Monday 19 October 2026" in body
    assert "No appointments for this day" in body
    assert "Nothing planned for today" in body


def test_planner_page_month_view_shows_padded_grid(seeded_client: TestClient) -> None:
    seeded_client.put("/tools/view/type", json={"view_type": "month"})

    body = seeded_client.get("/planner").text

    assert "October 2026" in body
    assert 'data-date="2026-09-28"' in body
    assert 'data-date="2026-11-01"' in body
    assert "+13 more" in body


def test_completed_appointments_are_marked(client: TestClient) -> None:
    created = client.post(
        "/tools/appointments",
        json={"title": "Pay rent", "date": "2026-10-19", "time": "08:00", "priority": "work"},
    ).json()
    client.post(f"/tools/appointments/{created['id']}/toggle")

    body = client.get("/planner").text

    assert 'class="appointment priority-work completed"' in body
    assert "Work / Study" in body


def test_reset_reloads_seed_data(seeded_client: TestClient) -> None:
    seeded_client.delete("/tools/appointments/APT-00001")
    seeded_client.put("/tools/view/type", json={"view_type": "day"})

    response = seeded_client.post("/planner/reset")

    assert response.json() == {"status": "reset", "total": 15}
    snapshot = seeded_client.get("/tools/view").json()
    assert snapshot["view"]["view_type"] == "week"
    assert snapshot["stats"]["total"] == 15
