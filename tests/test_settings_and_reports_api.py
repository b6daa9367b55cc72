from datetime import datetime

import pytest
import pytest_asyncio


async def test_settings_are_created_with_defaults_on_first_access(client, user):
    response = await client.get("/api/v1/settings")

    assert response.status_code == 200
    body = response.json()
    assert body["user_id"] == str(user.id)
    assert body["monthly_budget"] == 50000
    assert body["currency"] == "₹"
    assert body["start_of_week"] == 1
    assert body["notifications_enabled"] is True

    # Second access returns the same row
    assert (await client.get("/api/v1/settings")).json() == body


async def test_settings_update_and_validation(client):
    updated = await client.patch("/api/v1/settings", json={"monthly_budget": 30000, "currency": "$"})
    assert updated.status_code == 200
    assert updated.json()["monthly_budget"] == 30000
    assert updated.json()["currency"] == "$"
    assert updated.json()["start_of_week"] == 1

    assert (await client.patch("/api/v1/settings", json={"start_of_week": 7})).status_code == 422
    assert (await client.patch("/api/v1/settings", json={"monthly_budget": -1})).status_code == 422


async def test_month_rollover_flags_a_month_end_report(client, clock):
    first = await client.post("/api/v1/settings/reconcile")
    assert first.json() == {"period": None, "label": None}

    clock.moment = datetime(2024, 4, 2, 8, 0)
    rolled = await client.post("/api/v1/settings/reconcile")
    assert rolled.json() == {"period": "2024-03", "label": "March 2024"}

    # Reconciling again in the same month keeps the pending flag
    again = await client.post("/api/v1/settings/reconcile")
    assert again.json()["period"] == "2024-03"
    assert (await client.get("/api/v1/settings/month-end-report")).json()["period"] == "2024-03"

    assert (await client.delete("/api/v1/settings/month-end-report")).status_code == 204
    assert (await client.get("/api/v1/settings/month-end-report")).json() == {"period": None, "label": None}
    assert (await client.get("/api/v1/settings")).json()["last_seen_period"] == "2024-04"


async def _add(client, when, category, amount, mode="cash", item="Item"):
    response = await client.post(
        "/api/v1/expenses",
        json={"item": item, "amount": amount, "category": category, "payment_mode": mode, "date": when},
    )
    assert response.status_code == 201


@pytest_asyncio.fixture
async def march_expenses(client):
    # Clock is Sunday 10 March 2024; the week (starting Monday) is 4..10 March
    await _add(client, "2024-03-10T12:00:00", "food", 100, mode="upi")
    await _add(client, "2024-03-04T09:00:00", "transport", 50)
    await _add(client, "2024-03-01T19:00:00", "groceries", 200, mode="card")
    await _add(client, "2024-02-29T20:00:00", "food", 80)


async def test_dashboard_summary(client, march_expenses):
    body = (await client.get("/api/v1/reports/dashboard")).json()

    assert body["currency"] == "₹"
    assert body["today"] == {
        "total": 100,
        "count": 1,
        "category_breakdown": [{"category": "food", "amount": 100, "percentage": 100}],
    }
    assert body["week"]["total"] == 150
    assert body["week"]["daily_average"] == pytest.approx(21.43)
    assert [d["date"] for d in body["week"]["daily_totals"]] == [f"2024-03-{d:02d}" for d in range(4, 11)]
    assert body["week"]["daily_totals"][0]["amount"] == 50
    assert body["week"]["daily_totals"][-1]["amount"] == 100

    month = body["month"]
    assert month["total"] == 350
    assert month["budget"] == 50000
    assert month["remaining"] == 49650
    assert month["percentage"] == pytest.approx(0.7)
    assert [c["category"] for c in month["top_categories"]] == ["groceries", "food", "transport"]
    assert month["top_categories"][0]["percentage"] == pytest.approx(57.14)


async def test_dashboard_week_follows_start_of_week_setting(client, march_expenses):
    await client.patch("/api/v1/settings", json={"start_of_week": 0})

    week = (await client.get("/api/v1/reports/dashboard")).json()["week"]

    # Week starting Sunday 10 March only holds today's expense
    assert week["total"] == 100
    assert week["daily_totals"][0] == {"date": "2024-03-10", "amount": 100}


async def test_monthly_report_when_overspent(client, march_expenses):
    await client.patch("/api/v1/settings", json={"monthly_budget": 300})

    body = (await client.get("/api/v1/reports/monthly", params={"period": "2024-03"})).json()

    assert body["month"] == "2024-03"
    assert body["label"] == "March 2024"
    assert body["total_expenses"] == 350
    assert body["budget"] == 300
    assert body["saved"] == -50
    assert body["overspent"] is True
    assert body["saved_percentage"] == pytest.approx(-16.67)
    assert body["transaction_count"] == 3
    assert [c["category"] for c in body["category_breakdown"]] == ["groceries", "food", "transport"]
    assert [m["mode"] for m in body["payment_mode_breakdown"]] == ["card", "upi", "cash"]
    assert {"kind": "category_change", "text": "Food increased by 25.0% from last month"} in body["insights"]
    assert body["suggestions"][0]["text"] == "You've overspent by ₹50.00 this month. Consider reviewing your expenses."


async def test_monthly_report_defaults_to_current_month_and_handles_no_budget(client, march_expenses):
    await client.patch("/api/v1/settings", json={"monthly_budget": 0})

    body = (await client.get("/api/v1/reports/monthly")).json()

    assert body["month"] == "2024-03"
    assert body["saved_percentage"] == 0
    assert body["overspent"] is True


async def test_monthly_report_rejects_bad_period(client):
    response = await client.get("/api/v1/reports/monthly", params={"period": "2024-3"})

    assert response.status_code == 422


async def test_health_and_root(anon_client, clock):
    assert (await anon_client.get("/")).json()["message"].endswith("is running!")

    health = (await anon_client.get("/health")).json()
    assert health["status"] == "healthy"
    assert health["timestamp"] == clock.now().isoformat()


async def test_profile_read_and_update(client, user):
    me = (await client.get("/api/v1/users/me")).json()
    assert me["email"] == user.email

    updated = await client.patch("/api/v1/users/me", json={"full_name": "Asha Rao"})
    assert updated.status_code == 200
    assert updated.json()["full_name"] == "Asha Rao"

    assert (await client.patch("/api/v1/users/me", json={})).status_code == 400


async def test_logout_works_without_a_token(anon_client):
    response = await anon_client.post("/api/v1/auth/jwt/logout")

    assert response.status_code == 200
    assert response.json() == {"detail": "Successfully logged out"}


async def test_register_then_login_are_the_only_account_flows(anon_client):
    registered = await anon_client.post(
        "/api/v1/auth/register",
        json={"email": "meera@example.com", "password": "s3cret-pass", "full_name": "Meera"},
    )
    assert registered.status_code == 201
    assert registered.json()["full_name"] == "Meera"

    login = await anon_client.post(
        "/api/v1/auth/jwt/login",
        data={"username": "meera@example.com", "password": "s3cret-pass"},
    )
    assert login.status_code == 200
    token = login.json()["access_token"]
    me = await anon_client.get("/api/v1/users/me", headers={"Authorization": f"Bearer {token}"})
    assert me.json()["email"] == "meera@example.com"

    # No password-reset or e-mail flows are mounted
    assert (await anon_client.post("/api/v1/auth/forgot-password", json={"email": "meera@example.com"})).status_code == 404
    assert (await anon_client.post("/api/v1/auth/reset-password", json={"token": "x", "password": "y"})).status_code == 404
