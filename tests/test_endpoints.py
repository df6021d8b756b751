"""
HTTP tests for the menu planner API routes.
"""

import pytest

from test_fixtures import (
    MONDAY,
    TUESDAY,
    WEDNESDAY,
    THURSDAY,
    FRIDAY,
    SUNDAY,
    log_cook_session,
    make_recipe,
)


@pytest.fixture
def chili_id(db_session):
    return make_recipe(db_session, "Chili", prep_minutes=20, cook_minutes=60).id


@pytest.fixture
def menu(client):
    response = client.post(
        "/menus",
        json={"name": "Week 10", "start_date": MONDAY.isoformat(), "end_date": SUNDAY.isoformat()},
    )
    assert response.status_code == 201
    return response.json()


def _assign(client, menu_id, recipe_id, day, slot="dinner", **extra):
    payload = {"recipe_id": recipe_id, "date": day.isoformat(), "meal_slot": slot}
    payload.update(extra)
    response = client.post(f"/menus/{menu_id}/assignments", json=payload)
    assert response.status_code == 201, response.text
    return response.json()


class TestHealth:
    def test_health_check(self, client):
        response = client.get("/health-check")
        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "ok"
        assert body["service"] == "MenuPlanner"

    def test_database_health(self, client):
        response = client.get("/health-check/database")
        assert response.json() == {"database": "ok"}

    def test_request_id_header(self, client):
        response = client.get("/health-check")
        assert response.headers.get("X-Request-ID")


class TestMenus:
    def test_create_and_get_menu(self, client, menu):
        assert menu["name"] == "Week 10"
        assert menu["start_date"] == "2025-03-03"
        assert menu["end_date"] == "2025-03-09"
        assert menu["assignments"] == []

        response = client.get(f"/menus/{menu['id']}")
        assert response.status_code == 200
        assert response.json()["id"] == menu["id"]

    def test_list_menus(self, client, menu):
        response = client.get("/menus")
        assert [m["id"] for m in response.json()] == [menu["id"]]

    def test_update_menu(self, client, menu):
        response = client.patch(f"/menus/{menu['id']}", json={"name": "Lent week"})
        assert response.status_code == 200
        assert response.json()["name"] == "Lent week"
        assert response.json()["end_date"] == SUNDAY.isoformat()

    def test_delete_menu(self, client, menu):
        response = client.delete(f"/menus/{menu['id']}")
        assert response.status_code == 200
        assert client.get(f"/menus/{menu['id']}").status_code == 404

    def test_current_menu(self, client, menu):
        response = client.get("/menus/current", params={"today": WEDNESDAY.isoformat()})
        assert response.status_code == 200
        assert response.json()["id"] == menu["id"]

    def test_current_menu_without_menus(self, client):
        response = client.get("/menus/current")
        assert response.status_code == 404


class TestAssignments:
    def test_assign_recipe(self, client, menu, chili_id):
        assignment = _assign(client, menu["id"], chili_id, MONDAY)

        assert assignment["cook_date"] == MONDAY.isoformat()
        assert assignment["leftover_expiry_date"] == THURSDAY.isoformat()
        assert assignment["is_leftover"] is False
        assert assignment["servings"] == 4

    def test_menu_includes_ordered_assignments(self, client, menu, chili_id):
        _assign(client, menu["id"], chili_id, TUESDAY, "lunch")
        _assign(client, menu["id"], chili_id, MONDAY, "dinner")
        _assign(client, menu["id"], chili_id, MONDAY, "breakfast")

        body = client.get(f"/menus/{menu['id']}").json()

        assert [(a["date"], a["meal_slot"]) for a in body["assignments"]] == [
            ("2025-03-03", "breakfast"),
            ("2025-03-03", "dinner"),
            ("2025-03-04", "lunch"),
        ]

    def test_list_assignments_window(self, client, menu, chili_id):
        _assign(client, menu["id"], chili_id, MONDAY)
        _assign(client, menu["id"], chili_id, WEDNESDAY)

        response = client.get(
            f"/menus/{menu['id']}/assignments",
            params={"start": TUESDAY.isoformat(), "end": THURSDAY.isoformat()},
        )

        assert [a["date"] for a in response.json()] == [WEDNESDAY.isoformat()]

    def test_assign_leftover(self, client, menu, chili_id):
        source = _assign(client, menu["id"], chili_id, MONDAY)

        response = client.post(
            f"/menus/{menu['id']}/leftovers",
            json={
                "source_assignment_id": source["id"],
                "date": WEDNESDAY.isoformat(),
                "meal_slot": "lunch",
            },
        )

        assert response.status_code == 201
        reuse = response.json()
        assert reuse["is_leftover"] is True
        assert reuse["leftover_from_assignment_id"] == source["id"]
        assert reuse["cook_date"] == MONDAY.isoformat()
        assert reuse["leftover_expiry_date"] == THURSDAY.isoformat()

    def test_move_assignment(self, client, menu, chili_id):
        assignment = _assign(client, menu["id"], chili_id, MONDAY)

        response = client.patch(
            f"/menus/{menu['id']}/assignments/{assignment['id']}/move",
            json={"date": TUESDAY.isoformat(), "meal_slot": "lunch"},
        )

        assert response.status_code == 200
        moved = response.json()
        assert moved["date"] == TUESDAY.isoformat()
        assert moved["meal_slot"] == "lunch"
        assert moved["leftover_expiry_date"] == FRIDAY.isoformat()

    def test_mark_as_leftover(self, client, menu, chili_id):
        source = _assign(client, menu["id"], chili_id, MONDAY)
        target = _assign(client, menu["id"], chili_id, TUESDAY)

        response = client.post(
            f"/menus/{menu['id']}/assignments/{target['id']}/mark-leftover",
            json={"source_assignment_id": source["id"]},
        )

        assert response.status_code == 200
        assert response.json()["is_leftover"] is True
        assert response.json()["cook_date"] == MONDAY.isoformat()

    def test_remove_assignment(self, client, menu, chili_id):
        assignment = _assign(client, menu["id"], chili_id, MONDAY)

        response = client.delete(f"/menus/{menu['id']}/assignments/{assignment['id']}")

        assert response.status_code == 200
        assert client.get(f"/menus/{menu['id']}").json()["assignments"] == []


class TestLeftoversAndEstimates:
    def test_available_leftovers(self, client, menu, chili_id):
        source = _assign(client, menu["id"], chili_id, MONDAY)

        response = client.get(
            f"/menus/{menu['id']}/leftovers/available",
            params={"target_date": WEDNESDAY.isoformat()},
        )

        assert response.status_code == 200
        [leftover] = response.json()
        assert leftover["assignment"]["id"] == source["id"]
        assert leftover["recipe_title"] == "Chili"
        assert leftover["expiry_date"] == THURSDAY.isoformat()
        assert leftover["days_until_expiry"] == 1
        assert leftover["is_expiring_soon"] is True

    def test_available_leftovers_requires_target_date(self, client, menu):
        response = client.get(f"/menus/{menu['id']}/leftovers/available")
        assert response.status_code == 422

    def test_expiring_leftovers_endpoint(self, client, menu):
        response = client.get(f"/menus/{menu['id']}/leftovers/expiring")
        assert response.status_code == 200
        assert response.json() == []

    def test_recipe_time_estimate(self, client, db_session, chili_id):
        log_cook_session(db_session, chili_id, prep_minutes=30)

        response = client.get(f"/recipes/{chili_id}/time-estimate")

        assert response.status_code == 200
        assert response.json() == {
            "recipe_id": chili_id,
            "prep_minutes": 30,
            "cook_minutes": 60,
            "total_minutes": 90,
            "source": "statistical",
        }

    def test_recipe_time_estimate_unknown_recipe(self, client):
        assert client.get("/recipes/missing/time-estimate").status_code == 404

    def test_menu_and_daily_estimates(self, client, menu, chili_id):
        _assign(client, menu["id"], chili_id, MONDAY)
        _assign(client, menu["id"], chili_id, TUESDAY)

        total = client.get(f"/menus/{menu['id']}/time-estimate").json()
        assert total["total_minutes"] == 80
        assert [e["source"] for e in total["recipe_estimates"]] == ["recipe"]

        daily = client.get(f"/menus/{menu['id']}/time-estimate/daily").json()
        assert [(d["date"], d["total_minutes"]) for d in daily] == [
            (MONDAY.isoformat(), 80),
            (TUESDAY.isoformat(), 80),
        ]


class TestPreferences:
    def test_get_defaults(self, client):
        assert client.get("/preferences").json() == {
            "default_leftover_duration_days": 3,
            "default_servings": 4,
        }

    def test_update_and_reset(self, client):
        response = client.put("/preferences", json={"default_leftover_duration_days": 5})
        assert response.json()["default_leftover_duration_days"] == 5

        response = client.delete("/preferences")
        assert response.json()["default_leftover_duration_days"] == 3

    def test_update_applies_to_new_assignments(self, client, menu, chili_id):
        client.put("/preferences", json={"default_leftover_duration_days": 1, "default_servings": 2})

        assignment = _assign(client, menu["id"], chili_id, MONDAY)

        assert assignment["leftover_expiry_date"] == TUESDAY.isoformat()
        assert assignment["servings"] == 2
