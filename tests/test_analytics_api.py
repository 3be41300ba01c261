"""API tests for the analytics endpoints."""

from fastapi.testclient import TestClient

from main import app

client = TestClient(app)
HTTP_200_OK = 200
HTTP_422_UNPROCESSABLE_ENTITY = 422

TRANSACTIONS = [
    {"amount": 100, "description": "Groceries", "date": "2024-01-10", "category": "Food", "type": "expense"},
    {"amount": 1200, "description": "Salary", "date": "2024-01-15", "category": "Other", "type": "income"},
    {"amount": 60, "description": "Train", "date": "2024-03-02", "category": "Transportation", "type": "expense"},
    {"amount": 40, "description": "Lunch", "date": "2024-03-05", "category": "Food", "type": "expense"},
    {"amount": 10, "description": "Old", "date": "2023-12-31", "category": "Food", "type": "expense"},
]


def seed() -> None:
    """Store the sample transactions and a Food budget for January 2024."""
    for payload in TRANSACTIONS:
        client.post("/transactions", json=payload)
    client.post("/budgets", json={"amount": 100, "category": "Food", "month": "2024-01"})


def test_summary_for_year() -> None:
    """Test the summary covers only the selected year."""
    seed()
    response = client.get("/analytics/summary", params={"year": 2024})
    if response.status_code != HTTP_200_OK:
        msg = f"Expected status {HTTP_200_OK}, got {response.status_code}"
        raise AssertionError(msg)
    expected = {"total_income": 1200.0, "total_expenses": 200.0, "balance": 1000.0, "total_budget": 100.0}
    if response.json() != expected:
        msg = f"Expected {expected}, got {response.json()}"
        raise AssertionError(msg)


def test_summary_for_selected_months() -> None:
    """Test repeated month parameters narrow the summary."""
    seed()
    response = client.get("/analytics/summary", params={"year": 2024, "month": [2]})
    if response.json()["total_expenses"] != 100.0 or response.json()["total_budget"] != 0:
        msg = f"Expected March figures only, got {response.json()}"
        raise AssertionError(msg)


def test_invalid_month_index() -> None:
    """Test month indices outside 0-11 are rejected."""
    response = client.get("/analytics/summary", params={"year": 2024, "month": [12]})
    if response.status_code != HTTP_422_UNPROCESSABLE_ENTITY:
        msg = f"Expected status {HTTP_422_UNPROCESSABLE_ENTITY}, got {response.status_code}"
        raise AssertionError(msg)


def test_metrics() -> None:
    """Test savings rate and average monthly spend."""
    seed()
    metrics = client.get("/analytics/metrics", params={"year": 2024, "month": [0, 2]}).json()
    expected = {"savings_rate": 83.3, "transaction_count": 4, "average_monthly_spend": 100.0}
    if metrics != expected:
        msg = f"Expected {expected}, got {metrics}"
        raise AssertionError(msg)


def test_category_spend() -> None:
    """Test category groups keep first-encounter order and add up to total expenses."""
    seed()
    groups = client.get("/analytics/categories", params={"year": 2024}).json()
    if [(g["label"], g["total"]) for g in groups] != [("Food", 140.0), ("Transportation", 60.0)]:
        msg = f"Unexpected category groups: {groups}"
        raise AssertionError(msg)
    if groups[0]["color"] != "hsl(0, 70%, 50%)" or groups[1]["color"] != "#3B82F6":
        msg = f"Unexpected category colours: {groups}"
        raise AssertionError(msg)


def test_monthly_series_is_dense() -> None:
    """Test every selected month yields a point, including empty ones."""
    seed()
    points = client.get("/analytics/monthly", params={"year": 2024, "month": [2, 0, 1]}).json()
    if [p["month"] for p in points] != ["Jan", "Feb", "Mar"]:
        msg = f"Expected Jan, Feb, Mar, got {[p['month'] for p in points]}"
        raise AssertionError(msg)
    if points[1]["income"] != 0 or points[1]["expenses"] != 0:
        msg = f"Expected an empty February point, got {points[1]}"
        raise AssertionError(msg)


def test_budget_reconciliation() -> None:
    """Test the Food budget is fully used but not over budget within January."""
    seed()
    statuses = client.get("/analytics/budgets", params={"year": 2024, "month": [0]}).json()
    if len(statuses) != 1:
        msg = f"Expected one budget, got {statuses}"
        raise AssertionError(msg)
    status = statuses[0]
    if (status["spent"], status["remaining"], status["over_budget"]) != (100.0, 0.0, False):
        msg = f"Expected spent=100, remaining=0, not over budget, got {status}"
        raise AssertionError(msg)
    if status["percent_used"] != 100.0:
        msg = f"Expected 100% used, got {status['percent_used']}"
        raise AssertionError(msg)


def test_budget_reconciliation_all_time_scope() -> None:
    """Test scope=all counts every Food expense on record."""
    seed()
    statuses = client.get("/analytics/budgets", params={"year": 2024, "month": [0], "scope": "all"}).json()
    if statuses[0]["spent"] != 150.0 or not statuses[0]["over_budget"]:
        msg = f"Expected all-time spend of 150 and over budget, got {statuses[0]}"
        raise AssertionError(msg)


def test_invalid_year() -> None:
    """Year zero is rejected rather than treated as the current year."""
    response = client.get("/analytics/summary", params={"year": 0})
    if response.status_code != HTTP_422_UNPROCESSABLE_ENTITY:
        msg = f"Expected status {HTTP_422_UNPROCESSABLE_ENTITY}, got {response.status_code}"
        raise AssertionError(msg)
