from __future__ import annotations

import datetime
import hashlib

from chore_wallet.data.models import Transaction
from chore_wallet.domain import ledger, services
from conftest import make_chore, make_user


def _create_chore(client, name: str = "Dishes", amount="5.00", **extra) -> dict:
    response = client.post("/api/chores", json={"name": name, "amount": amount, **extra})
    assert response.status_code == 200, response.text
    return response.json()


def _create_goal(client, name: str = "Bike", target="10.00") -> dict:
    response = client.post("/api/goals", json={"name": name, "targetAmount": target})
    assert response.status_code == 200, response.text
    return response.json()


def _claim(client, chore_id: int) -> dict:
    response = client.post(f"/api/chores/{chore_id}/claim")
    assert response.status_code == 200, response.text
    return response.json()


# ============================================
# USER
# ============================================

def test_default_user_is_created_on_first_access(client, session_factory) -> None:
    response = client.get("/api/user")

    assert response.status_code == 200
    body = response.json()
    assert body["username"] == "kid"
    assert body["totalBalance"] == "0.00"
    assert "createdAt" in body
    assert "password" not in body

    session = session_factory()
    try:
        user = services.get_current_user(session)
        assert user.id == body["id"]
        scheme, rounds, salt, digest = user.password.split("$")
        assert scheme == "pbkdf2_sha256"
        expected = hashlib.pbkdf2_hmac("sha256", b"password123", bytes.fromhex(salt), int(rounds))
        assert digest == expected.hex()
    finally:
        session.close()


def test_response_carries_request_id(client) -> None:
    response = client.get("/api/user", headers={"X-Request-Id": "abc-123"})
    assert response.headers["X-Request-Id"] == "abc-123"


# ============================================
# CHORES
# ============================================

def test_create_and_list_chores_newest_first(client) -> None:
    first = _create_chore(client, name="Dishes", amount="2.5")
    second = _create_chore(client, name="Walk dog", amount=3, icon="dog", description="Around the block")

    assert first["amount"] == "2.50"
    assert first["icon"] == "broom"
    assert first["isActive"] is True
    assert second["amount"] == "3.00"
    assert second["description"] == "Around the block"

    listed = client.get("/api/chores").json()
    assert [c["id"] for c in listed] == [second["id"], first["id"]]


def test_create_chore_rejects_invalid_amount(client) -> None:
    for amount in ["0", "-2.00", "lots"]:
        response = client.post("/api/chores", json={"name": "Dishes", "amount": amount})
        assert response.status_code == 400
        body = response.json()
        assert body["message"] == "Invalid chore data"
        assert body["errors"]


def test_create_chore_requires_name(client) -> None:
    response = client.post("/api/chores", json={"amount": "1.00"})
    assert response.status_code == 400
    assert response.json()["message"] == "Invalid chore data"


def test_update_chore_changes_only_given_fields(client) -> None:
    chore = _create_chore(client, name="Dishes", amount="2.00")

    response = client.patch(f"/api/chores/{chore['id']}", json={"amount": "4.25"})

    assert response.status_code == 200
    body = response.json()
    assert body["amount"] == "4.25"
    assert body["name"] == "Dishes"


def test_update_missing_chore_is_not_found(client) -> None:
    response = client.patch("/api/chores/999", json={"name": "Nope"})
    assert response.status_code == 404
    assert response.json()["message"] == "Chore not found"


def test_delete_chore_is_soft(client, session_factory) -> None:
    chore = _create_chore(client)
    claim = _claim(client, chore["id"])

    response = client.delete(f"/api/chores/{chore['id']}")

    assert response.status_code == 200
    assert response.json() == {"message": "Chore deleted successfully"}
    assert client.get("/api/chores").json() == []
    transactions = client.get("/api/transactions").json()
    assert transactions[0]["id"] == claim["transaction"]["id"]
    assert transactions[0]["choreId"] == chore["id"]

    claim_again = client.post(f"/api/chores/{chore['id']}/claim")
    assert claim_again.status_code == 404
    assert claim_again.json()["message"] == "Chore not found"


def test_chore_icons_catalogue(client) -> None:
    icons = client.get("/api/chores/icons").json()
    assert {"value": "broom", "label": "Cleaning"} in icons
    assert len(icons) == 12


def test_claim_chore(client) -> None:
    chore = _create_chore(client, name="Laundry", amount="1.75")

    body = _claim(client, chore["id"])

    assert body["newBalance"] == "1.75"
    transaction = body["transaction"]
    assert transaction["type"] == "chore_completed"
    assert transaction["amount"] == "1.75"
    assert transaction["description"] == "Completed: Laundry"
    assert transaction["choreId"] == chore["id"]
    assert transaction["goalId"] is None
    assert client.get("/api/user").json()["totalBalance"] == "1.75"


def test_claim_past_balance_limit_is_conflict(client) -> None:
    chore = _create_chore(client, amount="99999999.99")
    _claim(client, chore["id"])

    response = client.post(f"/api/chores/{chore['id']}/claim")

    assert response.status_code == 409
    assert response.json() == {"message": "Balance cannot exceed 99999999.99", "code": "BALANCE_LIMIT"}
    assert client.get("/api/user").json()["totalBalance"] == "99999999.99"


def test_claim_missing_chore(client) -> None:
    response = client.post("/api/chores/404/claim")
    assert response.status_code == 404
    assert response.json()["message"] == "Chore not found"


# ============================================
# GOALS
# ============================================

def test_create_goal_starts_empty(client) -> None:
    goal = _create_goal(client, target="12.5")
    assert goal["targetAmount"] == "12.50"
    assert goal["currentAmount"] == "0.00"
    assert goal["isCompleted"] is False


def test_create_goal_rejects_bad_target(client) -> None:
    response = client.post("/api/goals", json={"name": "Bike", "targetAmount": "-3"})
    assert response.status_code == 400
    assert response.json()["message"] == "Invalid goal data"


def test_allocate_and_complete_goal(client) -> None:
    chore = _create_chore(client, amount="10.00")
    goal = _create_goal(client, target="10.00")
    _claim(client, chore["id"])

    response = client.post("/api/goals/allocate", json={"goalId": goal["id"], "amount": "4.00"})
    assert response.status_code == 200
    body = response.json()
    assert body["newBalance"] == "6.00"
    assert body["updatedGoal"]["currentAmount"] == "4.00"
    assert body["updatedGoal"]["isCompleted"] is False
    assert body["transaction"]["type"] == "goal_allocation"
    assert body["transaction"]["amount"] == "-4.00"
    assert body["transaction"]["description"] == "Allocated to: Bike"
    assert body["transaction"]["goalId"] == goal["id"]

    response = client.post("/api/goals/allocate", json={"goalId": goal["id"], "amount": "6.00"})
    assert response.json()["newBalance"] == "0.00"
    assert response.json()["updatedGoal"]["isCompleted"] is True
    assert client.get("/api/goals").json() == []


def test_allocate_insufficient_balance(client) -> None:
    goal = _create_goal(client)

    response = client.post("/api/goals/allocate", json={"goalId": goal["id"], "amount": "1.00"})

    assert response.status_code == 409
    assert response.json()["message"] == "Insufficient balance"
    assert client.get("/api/transactions").json() == []


def test_allocate_validation(client) -> None:
    goal = _create_goal(client)
    for payload in [{"goalId": goal["id"], "amount": "0"}, {"goalId": goal["id"]}, {"amount": "1.00"}]:
        response = client.post("/api/goals/allocate", json=payload)
        assert response.status_code == 400
        assert response.json()["message"] == "Invalid allocation data"


def test_allocate_to_missing_goal(client) -> None:
    response = client.post("/api/goals/allocate", json={"goalId": 321, "amount": "1.00"})
    assert response.status_code == 404
    assert response.json()["message"] == "Goal not found"


def test_update_goal_target_recomputes_completion(client) -> None:
    chore = _create_chore(client, amount="5.00")
    goal = _create_goal(client, target="10.00")
    _claim(client, chore["id"])
    client.post("/api/goals/allocate", json={"goalId": goal["id"], "amount": "5.00"})

    response = client.patch(f"/api/goals/{goal['id']}", json={"targetAmount": "5.00"})
    assert response.status_code == 200
    assert response.json()["isCompleted"] is True

    response = client.patch(f"/api/goals/{goal['id']}", json={"targetAmount": "8.00"})
    assert response.json()["isCompleted"] is False


def test_delete_goal_is_hard(client) -> None:
    goal = _create_goal(client)

    response = client.delete(f"/api/goals/{goal['id']}")

    assert response.status_code == 200
    assert response.json() == {"message": "Goal deleted successfully"}
    assert client.get("/api/goals").json() == []
    assert client.delete(f"/api/goals/{goal['id']}").status_code == 404


# ============================================
# TRANSACTIONS
# ============================================

def test_transactions_are_limited_and_newest_first(client) -> None:
    chore = _create_chore(client, amount="1.00")
    claimed = [_claim(client, chore["id"])["transaction"]["id"] for _ in range(12)]

    listed = client.get("/api/transactions").json()
    assert [t["id"] for t in listed] == list(reversed(claimed))[:10]

    limited = client.get("/api/transactions", params={"limit": 3}).json()
    assert [t["id"] for t in limited] == list(reversed(claimed))[:3]

    assert client.get("/api/transactions", params={"limit": 0}).status_code == 400


def test_undo_transaction(client) -> None:
    chore = _create_chore(client, amount="2.00")
    transaction_id = _claim(client, chore["id"])["transaction"]["id"]

    response = client.delete(f"/api/transactions/{transaction_id}")
    assert response.status_code == 200
    assert response.json() == {"message": "Transaction undone successfully"}
    assert client.get("/api/user").json()["totalBalance"] == "0.00"

    again = client.delete(f"/api/transactions/{transaction_id}")
    assert again.status_code == 404
    assert again.json()["message"] == "Transaction not found or unauthorized"


def test_undo_old_transaction_is_refused(client, session_factory) -> None:
    chore = _create_chore(client, amount="2.00")
    transaction_id = _claim(client, chore["id"])["transaction"]["id"]

    session = session_factory()
    try:
        transaction = session.get(Transaction, transaction_id)
        transaction.created_at = transaction.created_at - datetime.timedelta(hours=25)
        session.commit()
    finally:
        session.close()

    response = client.delete(f"/api/transactions/{transaction_id}")
    assert response.status_code == 409
    assert response.json()["message"] == "Cannot undo transactions older than 24 hours"
    assert client.get("/api/user").json()["totalBalance"] == "2.00"


def test_undo_someone_elses_transaction_is_forbidden(client, session_factory) -> None:
    client.get("/api/user")
    session = session_factory()
    try:
        sibling = make_user(session, "sibling")
        chore = make_chore(session, sibling)
        transaction, _ = ledger.claim_chore(session, sibling.id, chore.id)
        transaction_id = transaction.id
    finally:
        session.close()

    response = client.delete(f"/api/transactions/{transaction_id}")

    assert response.status_code == 403
    assert response.json()["message"] == "Transaction not found or unauthorized"


# ============================================
# RESET
# ============================================

def test_complete_reset(client) -> None:
    chore = _create_chore(client, amount="5.00")
    goal = _create_goal(client)
    _claim(client, chore["id"])
    client.post("/api/goals/allocate", json={"goalId": goal["id"], "amount": "2.00"})

    response = client.post("/api/reset", json={})

    assert response.status_code == 200
    assert response.json() == {"message": "Complete reset successful"}
    assert client.get("/api/chores").json() == []
    assert client.get("/api/goals").json() == []
    assert client.get("/api/transactions").json() == []
    assert client.get("/api/user").json()["totalBalance"] == "0.00"


# ============================================
# FAILURES
# ============================================

def test_unexpected_failure_uses_route_message(client, monkeypatch) -> None:
    def broken(*_args, **_kwargs):
        raise RuntimeError("database went away")

    monkeypatch.setattr(services, "list_chores", broken)

    response = client.get("/api/chores")

    assert response.status_code == 500
    assert response.json()["message"] == "Failed to get chores"
