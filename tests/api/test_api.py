from __future__ import annotations

import pytest

from src.worklog_payroll.worklog_payroll.main import create_app


@pytest.fixture
def client(monkeypatch, container):
    monkeypatch.setenv("APP_ENV", "testing")
    app = create_app(container)
    return app.test_client()


def _bearer(container, user):
    token = container.token_service.issue(user_id=user.user_id, email=user.email, role=user.role.value)
    return {"Authorization": f"Bearer {token}"}


def test_requests_without_credentials_get_401(client):
    resp = client.get("/api/work-logs")
    assert resp.status_code == 401
    assert resp.get_json() == {"error": "Authentication required", "reason": "missing"}


def test_login_sets_cookie_that_authenticates_later_requests(client, employee):
    resp = client.post("/api/auth/login", json={"email": employee.email, "password": "kim-pass-1"})
    assert resp.status_code == 200
    assert resp.get_json()["user"]["id"] == employee.user_id
    assert "password_hash" not in resp.get_json()["user"]

    me = client.get("/api/auth/me")
    assert me.status_code == 200
    assert me.get_json()["user"]["email"] == employee.email

    client.post("/api/auth/logout")
    assert client.get("/api/auth/me").status_code == 401


def test_wrong_password_is_401(client, employee):
    resp = client.post("/api/auth/login", json={"email": employee.email, "password": "wrong-pass"})
    assert resp.status_code == 401


def test_record_then_overlap_is_409(client, container, employee):
    headers = _bearer(container, employee)
    body = {"work_date": "2026-03-02", "start_time": "09:00", "end_time": "12:00"}

    created = client.post("/api/work-logs", json=body, headers=headers)
    assert created.status_code == 201
    log = created.get_json()["work_log"]
    assert log["user_id"] == employee.user_id
    assert log["work_hours"] == 3.0
    assert log["payment_amount"] == 30000

    clash = client.post(
        "/api/work-logs", json={**body, "start_time": "11:00", "end_time": "13:00"}, headers=headers
    )
    assert clash.status_code == 409
    assert "error" in clash.get_json()

    touching = client.post(
        "/api/work-logs", json={**body, "start_time": "12:00", "end_time": "13:00"}, headers=headers
    )
    assert touching.status_code == 201


def test_status_mapping_for_domain_errors(client, container, employee, other_employee, admin_user):
    headers = _bearer(container, employee)

    reversed_range = client.post(
        "/api/work-logs",
        json={"work_date": "2026-03-02", "start_time": "12:00", "end_time": "09:00"},
        headers=headers,
    )
    assert reversed_range.status_code == 400

    other = client.post(
        "/api/work-logs",
        json={"user_id": other_employee.user_id, "work_date": "2026-03-02", "start_time": "09:00", "end_time": "10:00"},
        headers=headers,
    )
    assert other.status_code == 403

    assert client.get("/api/work-logs/999", headers=headers).status_code == 404
    assert client.get("/api/users", headers=headers).status_code == 403

    no_rate = client.post(
        "/api/work-logs",
        json={"work_date": "2026-03-02", "start_time": "09:00", "end_time": "10:00"},
        headers=_bearer(container, admin_user),
    )
    assert no_rate.status_code == 400


def test_update_copy_and_list(client, container, employee):
    headers = _bearer(container, employee)
    created = client.post(
        "/api/work-logs",
        json={"work_date": "2026-03-02", "start_time": "09:00", "end_time": "12:00"},
        headers=headers,
    ).get_json()["work_log"]

    updated = client.put(f"/api/work-logs/{created['id']}", json={"hourly_rate": 11000}, headers=headers)
    assert updated.status_code == 200
    assert updated.get_json()["work_log"]["payment_amount"] == 33000

    copied = client.post(f"/api/work-logs/{created['id']}/copy", json={"work_date": "2026-03-05"}, headers=headers)
    assert copied.status_code == 201

    listed = client.get(
        "/api/work-logs?start_date=2026-03-01&end_date=2026-03-31", headers=headers
    ).get_json()["work_logs"]
    assert [w["work_date"] for w in listed] == ["2026-03-05", "2026-03-02"]

    assert client.delete(f"/api/work-logs/{created['id']}", headers=headers).status_code == 200


def test_salary_csv_for_admin(client, container, admin_user, employee):
    client.post(
        "/api/work-logs",
        json={"user_id": employee.user_id, "work_date": "2026-03-02", "start_time": "09:00", "end_time": "12:00"},
        headers=_bearer(container, admin_user),
    )

    resp = client.get("/api/reports/salary.csv?month=2026-03", headers=_bearer(container, admin_user))
    assert resp.status_code == 200
    assert resp.mimetype == "text/csv"
    text = resp.data.decode("utf-8-sig")
    assert text.splitlines()[0] == "user_id,user_name,work_days,total_hours,hourly_rate,total_payment"
    assert "Kim" in text


def test_admin_self_delete_is_403(client, container, admin_user):
    resp = client.delete(f"/api/users/{admin_user.user_id}", headers=_bearer(container, admin_user))
    assert resp.status_code == 403


@pytest.mark.parametrize("rate", [0, -100])
def test_non_positive_override_rate_records_at_default(client, container, employee, rate):
    resp = client.post(
        "/api/work-logs",
        json={"work_date": "2026-03-02", "start_time": "09:00", "end_time": "11:00", "hourly_rate": rate},
        headers=_bearer(container, employee),
    )
    assert resp.status_code == 201
    log = resp.get_json()["work_log"]
    assert log["hourly_rate"] == employee.hourly_rate
    assert log["payment_amount"] == 20000
