import sqlite3
from datetime import date, timedelta

import pytest

from components.core.formatters import get_current_month


def post_expense(client, amount, category="Food & Dining", when="2024-03-05", description="Lunch"):
    response = client.post("/transactions/", json={
        "type": "expense",
        "amount": amount,
        "category": category,
        "description": description,
        "date": when,
    })
    assert response.status_code == 201, response.text
    return response.json()


def post_budget(client, category="Food & Dining", month="2024-03", limit=400):
    response = client.post("/budgets/", json={"category": category, "month": month, "monthly_limit": limit})
    assert response.status_code == 201, response.text
    return response.json()


def test_health_check(client):
    response = client.get("/health_check/")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"
    assert response.json()["api_version"] == "v1"


def test_categories_filtered_by_type(client):
    response = client.get("/categories/", params={"type": "income"})
    assert response.status_code == 200
    assert {item["name"] for item in response.json()} == {"Salary", "Freelance", "Investments", "Other Income"}


def test_duplicate_category_is_rejected(client):
    response = client.post("/categories/", json={"name": "Travel", "type": "expense"})
    assert response.status_code == 400


def test_new_budget_has_nothing_spent(client):
    assert post_budget(client)["spent"] == 0


def test_creating_an_expense_updates_its_budget(client):
    budget = post_budget(client)
    created = post_expense(client, -45.5)

    assert created["amount"] == 45.5
    assert created["signed_amount"] == -45.5
    assert client.get(f"/budgets/{budget['id']}").json()["spent"] == pytest.approx(45.5)


def test_editing_and_deleting_an_expense_resyncs_budgets(client):
    food = post_budget(client)
    travel = post_budget(client, category="Travel")
    created = post_expense(client, 60)

    response = client.put(f"/transactions/{created['id']}", json={"category": "Travel"})
    assert response.status_code == 200
    assert client.get(f"/budgets/{food['id']}").json()["spent"] == 0
    assert client.get(f"/budgets/{travel['id']}").json()["spent"] == pytest.approx(60)

    assert client.delete(f"/transactions/{created['id']}").status_code == 200
    assert client.get(f"/budgets/{travel['id']}").json()["spent"] == 0


def test_transaction_with_unknown_or_mismatched_category(client):
    response = client.post("/transactions/", json={
        "type": "expense", "amount": 10, "category": "Unicorns", "description": "?", "date": "2024-03-01"
    })
    assert response.status_code == 422

    response = client.post("/transactions/", json={
        "type": "income", "amount": 10, "category": "Travel", "description": "?", "date": "2024-03-01"
    })
    assert response.status_code == 422


def test_zero_amount_is_rejected(client):
    response = client.post("/transactions/", json={
        "type": "expense", "amount": 0, "category": "Travel", "description": "Taxi", "date": "2024-03-01"
    })
    assert response.status_code == 422


def test_transaction_filters(client):
    post_expense(client, 10)
    post_expense(client, 20, when="2024-04-01")
    client.post("/transactions/", json={
        "type": "income", "amount": 500, "category": "Salary", "description": "Pay", "date": "2024-03-01"
    })

    assert len(client.get("/transactions/").json()) == 3
    assert len(client.get("/transactions/", params={"type": "expense"}).json()) == 2
    assert len(client.get("/transactions/", params={"month": "2024-03"}).json()) == 2
    assert client.get("/transactions/999").status_code == 404


def test_duplicate_budget_is_rejected(client):
    post_budget(client)
    response = client.post("/budgets/", json={"category": "Food & Dining", "month": "2024-03", "monthly_limit": 10})
    assert response.status_code == 400


def test_budget_for_income_category_is_rejected(client):
    response = client.post("/budgets/", json={"category": "Salary", "month": "2024-03", "monthly_limit": 10})
    assert response.status_code == 422


def test_budget_status_report(client):
    post_budget(client, limit=100)
    post_expense(client, 90)

    report = client.get("/budgets/status", params={"month": "2024-03"}).json()

    assert report["summary"]["total_spent"] == pytest.approx(90)
    assert report["budgets"][0]["level"] == "warning"
    assert report["budgets"][0]["percentage"] == pytest.approx(90)
    assert report["budgets"][0]["percentage_label"] == "90.0%"


def test_budget_csv_upload(client):
    post_expense(client, 75, category="Travel")
    content = b"month,category,monthly_limit\n2024-03,Travel,200\n"

    response = client.post("/budgets/insert", files={"file": ("budgets.csv", content, "text/csv")})

    assert response.json() == {"success": True, "message": "1 budgets uploaded successfully", "errors": None}
    budgets = client.get("/budgets/", params={"month": "2024-03"}).json()
    assert budgets[0]["spent"] == pytest.approx(75)


def test_budget_csv_upload_rejects_other_files(client):
    response = client.post("/budgets/insert", files={"file": ("budgets.xlsx", b"", "application/octet-stream")})
    assert response.json()["success"] is False


def test_goal_lifecycle(client):
    deadline = (date.today() + timedelta(days=60)).isoformat()
    response = client.post("/goals/", json={"name": "Vacation", "target_amount": 100, "deadline": deadline})
    assert response.status_code == 201
    goal = response.json()

    funded = client.post(f"/goals/{goal['id']}/add-money", json={"amount": 40}).json()
    assert funded["goal"]["current_amount"] == pytest.approx(40)
    assert funded["progress"]["percentage"] == pytest.approx(40)

    capped = client.post(f"/goals/{goal['id']}/add-money", json={"amount": 100, "enforce_cap": True})
    assert capped.status_code == 422

    overshoot = client.post(f"/goals/{goal['id']}/add-money", json={"amount": 80}).json()
    assert overshoot["progress"]["is_completed"]
    assert overshoot["progress"]["overshoot"] == pytest.approx(20)

    summary = client.get("/goals/summary").json()
    assert summary["completed_count"] == 1

    assert client.delete(f"/goals/{goal['id']}").status_code == 200
    assert client.get(f"/goals/{goal['id']}").status_code == 404


def test_goal_validation(client):
    yesterday = (date.today() - timedelta(days=1)).isoformat()
    response = client.post("/goals/", json={"name": "Late", "target_amount": 100, "deadline": yesterday})
    assert response.status_code == 422

    tomorrow = (date.today() + timedelta(days=1)).isoformat()
    response = client.post("/goals/", json={"name": "Free", "target_amount": 0, "deadline": tomorrow})
    assert response.status_code == 422

    response = client.post("/goals/999/add-money", json={"amount": 10})
    assert response.status_code == 404


def test_dashboard(client):
    month = get_current_month()
    today = date.today().isoformat()
    client.post("/transactions/", json={
        "type": "income", "amount": 1000, "category": "Salary", "description": "Pay", "date": today
    })
    post_expense(client, 250, when=today)
    post_budget(client, month=month, limit=500)

    dashboard = client.get("/dashboard/").json()

    assert dashboard["rollup"]["savings_rate"] == pytest.approx(75)
    assert len(dashboard["recent_transactions"]) == 2
    assert dashboard["budget_overview"]["total_spent"] == pytest.approx(250)
    assert dashboard["goals"]["goal_count"] == 0


def test_charts(client):
    post_expense(client, 30, category="Travel")
    post_expense(client, 70)

    expenses = client.get("/charts/expenses", params={"month": "2024-03"}).json()
    assert [item["category"] for item in expenses] == ["Food & Dining", "Travel"]
    assert expenses[0]["display_total"] == "$70.00"
    assert len(client.get("/charts/expenses", params={"limit": 1}).json()) == 1

    rollup = client.get("/charts/rollup", params={"month": "2024-03"}).json()
    assert rollup["total_expenses"] == pytest.approx(100)

    trend = client.get("/charts/trend", params={"months": 3}).json()
    assert len(trend["month_keys"]) == 3
    assert trend["month_keys"][-1] == get_current_month()


def test_budget_update_recomputes_spent_for_the_new_partition(client):
    budget = post_budget(client)
    post_expense(client, 60)
    post_expense(client, 25, category="Travel", when="2024-04-10")

    response = client.put(f"/budgets/{budget['id']}", json={"category": "Travel"})
    assert response.status_code == 200
    assert response.json()["spent"] == 0

    response = client.put(f"/budgets/{budget['id']}", json={"month": "2024-04"})
    assert response.status_code == 200
    assert response.json()["category"] == "Travel"
    assert response.json()["spent"] == pytest.approx(25)


def test_budget_update_keeps_category_month_unique(client):
    post_budget(client)
    travel = post_budget(client, category="Travel", limit=100)

    response = client.put(f"/budgets/{travel['id']}", json={"category": "Food & Dining"})
    assert response.status_code == 400

    response = client.put(f"/budgets/{travel['id']}", json={"monthly_limit": 150})
    assert response.status_code == 200
    assert response.json()["monthly_limit"] == pytest.approx(150)


def test_budget_update_rejects_invalid_limit(client):
    budget = post_budget(client)
    assert client.put(f"/budgets/{budget['id']}", json={"monthly_limit": 0}).status_code == 422
    assert client.put("/budgets/999", json={"monthly_limit": 10}).status_code == 404


def test_goal_partial_update(client):
    deadline = (date.today() + timedelta(days=60)).isoformat()
    goal = client.post("/goals/", json={"name": "Bike", "target_amount": 800, "deadline": deadline}).json()

    response = client.put(f"/goals/{goal['id']}", json={"name": "Road bike"})

    assert response.status_code == 200
    assert response.json()["name"] == "Road bike"
    assert response.json()["target_amount"] == pytest.approx(800)
    assert response.json()["deadline"] == deadline
    assert client.put("/goals/999", json={"name": "x"}).status_code == 404


def test_goal_with_passed_deadline_needs_a_new_deadline_to_be_edited(client, settings):
    past = (date.today() - timedelta(days=10)).isoformat()
    with sqlite3.connect(settings.DB_PATH) as connection:
        connection.execute(
            "INSERT INTO goals (id, name, target_amount, current_amount, deadline, created_at) "
            "VALUES (1, 'Old goal', 300, 0, ?, '2024-01-01 00:00:00.000000')",
            (past,),
        )
    connection.close()

    response = client.put("/goals/1", json={"name": "Renamed", "target_amount": 500})
    assert response.status_code == 422
    assert client.get("/goals/1").json()["goal"]["name"] == "Old goal"

    future = (date.today() + timedelta(days=30)).isoformat()
    response = client.put("/goals/1", json={"name": "Renamed", "deadline": future})
    assert response.status_code == 200
    assert response.json()["name"] == "Renamed"


@pytest.mark.parametrize("path", ["/transactions/", "/budgets/", "/budgets/status", "/dashboard/", "/charts/rollup"])
def test_month_filters_reject_malformed_month_keys(client, path):
    assert client.get(path, params={"month": "2024-13"}).status_code == 422
    assert client.get(path, params={"month": "2024-03"}).status_code == 200
