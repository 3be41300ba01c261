"""API integration tests for the Personal Finance Tracker."""

from fastapi.testclient import TestClient

from main import app

client = TestClient(app)
HTTP_200_OK = 200
HTTP_201_CREATED = 201
HTTP_404_NOT_FOUND = 404
HTTP_409_CONFLICT = 409
HTTP_422_UNPROCESSABLE_ENTITY = 422

FOOD_EXPENSE = {
    "amount": 100,
    "description": "Groceries",
    "date": "2024-01-10",
    "category": "Food & Dining",
    "type": "expense",
}
SALARY = {
    "amount": 1200,
    "description": "Salary",
    "date": "2024-01-15",
    "category": "Other",
    "type": "income",
}
FOOD_BUDGET = {"amount": 100, "category": "Food", "month": "2024-01"}


def expect_status(response: object, expected: int) -> None:
    """Raise with the response body when the status code is not the expected one."""
    if response.status_code != expected:
        msg = f"Expected status {expected}, got {response.status_code}: {response.text}"
        raise AssertionError(msg)


def test_health() -> None:
    """Test the /health endpoint returns status ok."""
    response = client.get("/health")
    expect_status(response, HTTP_200_OK)
    if response.json() != {"status": "ok"}:
        msg = f"Expected response {{'status': 'ok'}}, got {response.json()}"
        raise AssertionError(msg)


def test_scalar_docs() -> None:
    """Test the /scalar endpoint returns the interactive OpenAPI reference."""
    response = client.get("/scalar")
    expect_status(response, HTTP_200_OK)
    if "openapi" not in response.text:
        msg = "Expected 'openapi' in response text"
        raise AssertionError(msg)


def test_categories() -> None:
    """Test /categories returns the ten reference categories in order."""
    response = client.get("/categories")
    expect_status(response, HTTP_200_OK)
    names = [c["name"] for c in response.json()]
    if len(names) != 10 or names[0] != "Food & Dining" or names[-1] != "Other":
        msg = f"Unexpected category list: {names}"
        raise AssertionError(msg)


def test_transaction_crud() -> None:
    """Test creating, reading, partially updating and deleting a transaction."""
    response = client.post("/transactions", json=FOOD_EXPENSE)
    expect_status(response, HTTP_201_CREATED)
    created = response.json()
    if created["amount"] != 100 or created["description"] != "Groceries" or "id" not in created:
        msg = f"Unexpected created transaction: {created}"
        raise AssertionError(msg)

    response = client.get(f"/transactions/{created['id']}")
    expect_status(response, HTTP_200_OK)

    response = client.put(f"/transactions/{created['id']}", json={"amount": 42.5})
    expect_status(response, HTTP_200_OK)
    updated = response.json()
    if updated["amount"] != 42.5 or updated["description"] != "Groceries":
        msg = f"Expected only the amount to change, got {updated}"
        raise AssertionError(msg)

    response = client.delete(f"/transactions/{created['id']}")
    expect_status(response, HTTP_200_OK)
    if response.json() != {"message": "Transaction deleted successfully"}:
        msg = f"Unexpected delete response: {response.json()}"
        raise AssertionError(msg)
    expect_status(client.get(f"/transactions/{created['id']}"), HTTP_404_NOT_FOUND)


def test_transaction_not_found() -> None:
    """Test updating or deleting an unknown transaction returns 404."""
    expect_status(client.put("/transactions/999", json={"amount": 1}), HTTP_404_NOT_FOUND)
    response = client.delete("/transactions/999")
    expect_status(response, HTTP_404_NOT_FOUND)
    if response.json()["detail"] != "Transaction not found":
        msg = f"Unexpected detail: {response.json()}"
        raise AssertionError(msg)


def test_transaction_validation() -> None:
    """Test out-of-range fields are rejected with 422."""
    invalid = [
        {**FOOD_EXPENSE, "amount": -1},
        {**FOOD_EXPENSE, "description": "   "},
        {**FOOD_EXPENSE, "description": "x" * 201},
        {**FOOD_EXPENSE, "type": "transfer"},
        {**FOOD_EXPENSE, "category": ""},
        {key: value for key, value in FOOD_EXPENSE.items() if key != "date"},
    ]
    for payload in invalid:
        expect_status(client.post("/transactions", json=payload), HTTP_422_UNPROCESSABLE_ENTITY)
    if client.get("/transactions").json():
        msg = "Expected no transaction to be stored"
        raise AssertionError(msg)


def test_transactions_listing_by_month_and_stats() -> None:
    """Test month listing and the per-category monthly statistics."""
    client.post("/transactions", json=FOOD_EXPENSE)
    client.post("/transactions", json={**FOOD_EXPENSE, "amount": 20, "date": "2024-01-20"})
    client.post("/transactions", json=SALARY)
    client.post("/transactions", json={**FOOD_EXPENSE, "date": "2024-02-01"})

    listing = client.get("/transactions").json()
    if [t["date"] for t in listing] != ["2024-02-01", "2024-01-20", "2024-01-15", "2024-01-10"]:
        msg = f"Expected newest first, got {[t['date'] for t in listing]}"
        raise AssertionError(msg)

    january = client.get("/transactions/month/2024-01")
    expect_status(january, HTTP_200_OK)
    if len(january.json()) != 3:
        msg = f"Expected 3 January transactions, got {len(january.json())}"
        raise AssertionError(msg)

    stats = client.get("/transactions/stats/monthly", params={"month": "2024-01"}).json()
    if stats != [{"category": "Food & Dining", "total": 120.0, "count": 2}]:
        msg = f"Unexpected monthly stats: {stats}"
        raise AssertionError(msg)

    expect_status(client.get("/transactions/month/2024-13"), HTTP_422_UNPROCESSABLE_ENTITY)


def test_budget_crud() -> None:
    """Test creating, updating, listing and deleting a budget."""
    response = client.post("/budgets", json=FOOD_BUDGET)
    expect_status(response, HTTP_201_CREATED)
    budget = response.json()

    response = client.put(f"/budgets/{budget['id']}", json={"amount": 250})
    expect_status(response, HTTP_200_OK)
    if response.json()["amount"] != 250 or response.json()["month"] != "2024-01":
        msg = f"Unexpected updated budget: {response.json()}"
        raise AssertionError(msg)

    by_month = client.get("/budgets/month/2024-01").json()
    if [b["id"] for b in by_month] != [budget["id"]]:
        msg = f"Expected the budget in its month listing, got {by_month}"
        raise AssertionError(msg)

    response = client.delete(f"/budgets/{budget['id']}")
    expect_status(response, HTTP_200_OK)
    if response.json() != {"message": "Budget deleted successfully"}:
        msg = f"Unexpected delete response: {response.json()}"
        raise AssertionError(msg)
    expect_status(client.delete(f"/budgets/{budget['id']}"), HTTP_404_NOT_FOUND)


def test_duplicate_budget_rejected() -> None:
    """Test a second Food budget for 2024-01 is rejected and never stored."""
    expect_status(client.post("/budgets", json=FOOD_BUDGET), HTTP_201_CREATED)
    response = client.post("/budgets", json={**FOOD_BUDGET, "amount": 300})
    expect_status(response, HTTP_409_CONFLICT)
    budgets = client.get("/budgets").json()
    if len(budgets) != 1 or budgets[0]["amount"] != 100:
        msg = f"Expected the original budget only, got {budgets}"
        raise AssertionError(msg)


def test_budget_update_into_duplicate_rejected() -> None:
    """Test moving a budget onto an existing category and month is rejected."""
    client.post("/budgets", json=FOOD_BUDGET)
    other = client.post("/budgets", json={**FOOD_BUDGET, "month": "2024-02"}).json()
    response = client.put(f"/budgets/{other['id']}", json={"month": "2024-01"})
    expect_status(response, HTTP_409_CONFLICT)
    if client.get(f"/budgets/{other['id']}").json()["month"] != "2024-02":
        msg = "Expected the rejected update to leave the budget unchanged"
        raise AssertionError(msg)


def test_budget_validation() -> None:
    """Test malformed budget months and negative amounts are rejected."""
    invalid = [{**FOOD_BUDGET, "month": "2024-1"}, {**FOOD_BUDGET, "month": "2024-00"}, {**FOOD_BUDGET, "amount": -5}]
    for payload in invalid:
        expect_status(client.post("/budgets", json=payload), HTTP_422_UNPROCESSABLE_ENTITY)
