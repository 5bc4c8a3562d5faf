"""HTTP surface: status codes, error bodies and camelCase payloads."""

from datetime import date, timedelta

from tests.conftest import TEST_PASSWORD, auth_headers


def _create(client, user, **payload):
    body = {
        "title": "VPN keeps dropping",
        "description": "Disconnects every ten minutes",
        "priority": "HIGH",
        "deadline": (date.today() + timedelta(days=2)).isoformat(),
    }
    body.update(payload)
    return client.post("/tasks/", json=body, headers=auth_headers(user))


def test_health_and_client_config(client):
    assert client.get("/health").json() == {"status": "ok"}
    config = client.get("/config/client").json()
    assert config["pollIntervalSeconds"] == 15
    assert config["heatmapWindowDays"] == 90


def test_register_then_login(client):
    response = client.post(
        "/auth/register",
        json={"name": "New Person", "email": "new@test.com", "password": "secret1", "role": "MANAGER"},
    )
    assert response.status_code == 201

    response = client.post("/auth/login", json={"email": "NEW@test.com", "password": "secret1"})
    assert response.status_code == 200
    body = response.json()
    assert body["tokenType"] == "bearer"
    assert body["role"] == "MANAGER"
    assert body["user"]["email"] == "new@test.com"
    assert "createdAt" in body["user"]
    assert "hashedPassword" not in body["user"]

    me = client.get("/users/me", headers={"Authorization": f"Bearer {body['token']}"})
    assert me.json()["email"] == "new@test.com"


def test_login_failures(client, make_user):
    make_user("blocked@test.com", suspended=True)

    wrong = client.post("/auth/login", json={"email": "blocked@test.com", "password": "nope"})
    assert wrong.status_code == 401

    blocked = client.post("/auth/login", json={"email": "blocked@test.com", "password": TEST_PASSWORD})
    assert blocked.status_code == 403


def test_register_admin_is_refused(client):
    response = client.post(
        "/auth/register",
        json={"name": "Sneaky", "email": "sneaky@test.com", "password": "secret1", "role": "ADMIN"},
    )
    assert response.status_code == 400
    assert response.json()["error"] == "validation_error"


def test_forgot_and_reset_password(client, requester):
    code = client.post("/auth/forgot-password", json={"email": "user@test.com"}).json()["code"]

    response = client.post(
        "/auth/reset-password",
        json={"email": "user@test.com", "otp": code, "password": "brand-new"},
    )
    assert response.status_code == 200
    assert client.post("/auth/login", json={"email": "user@test.com", "password": "brand-new"}).status_code == 200


def test_requests_without_token_are_unauthorized(client):
    assert client.get("/tasks/").status_code == 401


def test_task_payload_uses_camel_case(client, requester):
    response = _create(client, requester)

    assert response.status_code == 201
    body = response.json()
    assert body["status"] == "PENDING"
    assert body["assignedTo"] is None
    assert body["createdBy"] == requester.id
    assert body["creator"]["email"] == "user@test.com"
    assert "qualityScore" in body


def test_missing_title_is_a_validation_error(client, requester):
    response = _create(client, requester, title="")
    assert response.status_code == 400
    assert response.json() == {"error": "validation_error", "detail": "Title is required"}


def test_lifecycle_over_http(client, requester, manager, other_manager):
    task_id = _create(client, requester).json()["id"]

    claim = client.put(f"/tasks/{task_id}/claim", json={"toDoPlan": "check router"}, headers=auth_headers(manager))
    assert claim.status_code == 200
    assert claim.json()["toDoPlan"] == "check router"

    taken = client.put(f"/tasks/{task_id}/claim", headers=auth_headers(other_manager))
    assert taken.status_code == 409
    assert taken.json()["error"] == "conflict"

    board = client.get("/tasks/board", headers=auth_headers(manager)).json()
    assert [t["id"] for t in board["TODO"]] == [task_id]

    assert client.put(f"/tasks/{task_id}/start", headers=auth_headers(manager)).status_code == 200

    reject = client.put(f"/tasks/{task_id}/reject", json={"reason": "nope"}, headers=auth_headers(manager))
    assert reject.status_code == 409
    assert reject.json()["error"] == "invalid_transition"
    assert reject.json()["transition"] == "reject"

    done = client.put(f"/tasks/{task_id}/complete", json={"feedback": "replaced cable"}, headers=auth_headers(manager))
    assert done.json()["status"] == "COMPLETED"

    forbidden = client.put(f"/tasks/{task_id}/quality-score", json={"score": 4}, headers=auth_headers(manager))
    assert forbidden.status_code == 403

    scored = client.put(f"/tasks/{task_id}/quality-score", json={"score": 4}, headers=auth_headers(requester))
    assert scored.json()["qualityScore"] == 4

    stats = client.get("/tasks/finance-stats", headers=auth_headers(manager)).json()
    assert stats["totalEarnings"] == 50.0
    assert stats["completedCount"] == 1


def test_other_users_tasks_are_not_found(client, requester, make_user):
    stranger = make_user("stranger@test.com")
    task_id = _create(client, requester).json()["id"]

    assert client.get(f"/tasks/{task_id}", headers=auth_headers(stranger)).status_code == 404
    assert client.get(f"/tasks/{task_id}", headers=auth_headers(requester)).status_code == 200


def test_disputes_and_resolution(client, requester, manager, admin):
    task_id = _create(client, requester).json()["id"]
    client.put(f"/tasks/{task_id}/reject", json={"reason": "not IT"}, headers=auth_headers(manager))

    assert client.get("/tasks/disputes", headers=auth_headers(manager)).status_code == 403
    disputes = client.get("/tasks/disputes", headers=auth_headers(admin)).json()
    assert [t["rejectionReason"] for t in disputes] == ["not IT"]

    assert client.put(f"/tasks/{task_id}/resolve", headers=auth_headers(admin)).status_code == 200
    again = client.put(f"/tasks/{task_id}/resolve", headers=auth_headers(admin))
    assert again.status_code == 409


def test_notification_endpoints(client, requester, manager):
    _create(client, requester)
    _create(client, requester)

    headers = auth_headers(requester)
    assert client.get("/notifications/unread-count", headers=headers).json() == {"unreadCount": 2}

    first = client.get("/notifications/", headers=headers).json()[0]
    assert client.put(f"/notifications/{first['id']}/read", headers=auth_headers(manager)).status_code == 404
    assert client.put(f"/notifications/{first['id']}/read", headers=headers).json()["read"] is True

    assert client.put("/notifications/read-all", headers=headers).json()["updatedCount"] == 1
    assert client.get("/notifications/unread-count", headers=headers).json() == {"unreadCount": 0}


def test_settings_endpoints(client, admin, manager):
    public = client.get("/admin/public/settings").json()
    assert public == {"platformName": "TaskBridge", "maintenanceMode": False}

    updated = client.post(
        "/admin/settings",
        json={"settingKey": "requireMFA", "settingValue": "true"},
        headers=auth_headers(admin),
    )
    assert updated.json() == {"settingKey": "requireMFA", "settingValue": True, "visibility": "PRIVATE"}

    full = client.get("/admin/settings", headers=auth_headers(admin)).json()
    assert full["requireMFA"] is True
    assert "requireMFA" not in client.get("/admin/public/settings").json()

    as_manager = client.get("/admin/settings", headers=auth_headers(manager))
    assert as_manager.status_code == 200
    assert set(as_manager.json()) == {"platformName", "maintenanceMode", "defaultPriority", "requireMFA", "autoArchive"}
    assert client.get("/admin/settings").status_code == 401
    refused = client.post(
        "/admin/settings",
        json={"settingKey": "platformName", "settingValue": "Mine"},
        headers=auth_headers(manager),
    )
    assert refused.status_code == 403
    bad = client.post(
        "/admin/settings",
        json={"settingKey": "maintenanceMode", "settingValue": "sometimes"},
        headers=auth_headers(admin),
    )
    assert bad.status_code == 400


def test_audit_log_endpoint(client, admin, requester):
    _create(client, requester)
    logs = client.get("/admin/logs", headers=auth_headers(admin)).json()
    assert logs[0]["action"] == "TASK_CREATED"
    assert logs[0]["performedBy"] == "user@test.com"
    assert client.get("/admin/logs", headers=auth_headers(requester)).status_code == 403


def test_user_admin_endpoints(client, admin, manager, requester):
    listing = client.get("/users/", headers=auth_headers(manager))
    assert {u["email"] for u in listing.json()} == {"admin@test.com", "manager@test.com", "user@test.com"}

    role = client.put(f"/users/{requester.id}/role", json={"role": "MANAGER"}, headers=auth_headers(admin))
    assert role.json()["role"] == "MANAGER"

    toggled = client.put(f"/users/{requester.id}/status", headers=auth_headers(admin))
    assert toggled.json()["suspended"] is True
    assert client.get("/tasks/", headers=auth_headers(requester)).status_code == 403

    availability = client.put(
        "/users/me/availability", json={"available": False, "status": "Out today"}, headers=auth_headers(manager)
    )
    assert availability.json()["availabilityStatus"] == "Out today"


def test_dashboards(client, admin, requester, manager):
    _create(client, requester)

    summary = client.get("/dashboard/summary", headers=auth_headers(requester)).json()
    assert summary["total"] == 1
    assert summary["inProgress"] == 0

    overview = client.get("/dashboard/admin", headers=auth_headers(admin)).json()
    assert overview["backlog"] == 1
    assert overview["roleDistribution"]["MANAGER"] == 1

    heatmap = client.get("/dashboard/heatmap", headers=auth_headers(manager)).json()
    assert set(heatmap) == {"MON", "TUE", "WED", "THU", "FRI", "SAT", "SUN"}


def test_support_chat(client, requester):
    sent = client.post("/messages/", json={"content": "hello"}, headers=auth_headers(requester))
    assert sent.status_code == 201
    assert sent.json()["type"] == "sent"

    conversation = client.get("/messages/", headers=auth_headers(requester)).json()
    assert [m["type"] for m in conversation] == ["sent", "received"]


def test_employee_listing_and_role_self_guard(client, admin, manager, requester):
    employees = client.get("/users/employees", headers=auth_headers(admin)).json()
    assert [u["email"] for u in employees] == ["user@test.com"]

    own = client.put(f"/users/{admin.id}/role", json={"role": "USER"}, headers=auth_headers(admin))
    assert own.status_code == 400
    assert own.json()["error"] == "validation_error"
