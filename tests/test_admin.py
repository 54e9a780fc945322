from conftest import fresh_user, login, login_admin, signup_and_login, upload


def test_admin_routes_require_admin(client):
    assert client.get("/admin/analytics").status_code == 401

    signup_and_login(client)
    assert client.get("/admin/analytics").status_code == 403
    assert client.post("/admin/credits/approve", json={"requestId": 1, "additionalCredits": 5}).status_code == 403
    assert client.post("/admin/credits/deny", json={"requestId": 1}).status_code == 403


def test_approval_end_to_end(client, db):
    signup_and_login(client, "alice", "pw1")
    request_id = client.post("/credits/request", json={"requestedCredits": 50}).json()["requestId"]

    login_admin(client)
    pending = client.get("/admin/analytics").json()["analytics"]["credit_requests"]
    assert [(r["request_id"], r["username"], r["status"]) for r in pending] == [(request_id, "alice", "pending")]

    response = client.post("/admin/credits/approve", json={"requestId": request_id, "additionalCredits": 50})
    assert response.status_code == 200
    assert response.json() == {
        "message": "Credit request approved. 50 credits added.",
        "approvedCredits": 50,
    }

    row = client.get("/admin/analytics").json()["analytics"]["credit_requests"][0]
    assert (row["status"], row["requested_credits"], row["approved_credits"]) == ("approved", 50, 50)
    assert fresh_user(db, "alice").credits == 70


def test_deny_end_to_end(client, db):
    signup_and_login(client, "alice", "pw1")
    request_id = client.post("/credits/request", json={"requestedCredits": 5}).json()["requestId"]

    login_admin(client)
    response = client.post("/admin/credits/deny", json={"requestId": request_id})
    assert response.status_code == 200
    assert response.json() == {"message": "Credit request denied"}

    row = client.get("/admin/analytics").json()["analytics"]["credit_requests"][0]
    assert (row["status"], row["approved_credits"]) == ("denied", 0)
    assert fresh_user(db, "alice").credits == 20


def test_approve_and_deny_validation(client):
    login_admin(client)
    approve = "/admin/credits/approve"
    assert client.post(approve, json={"requestId": 1}).status_code == 400
    assert client.post(approve, json={"additionalCredits": 5}).status_code == 400
    assert client.post(approve, json={"requestId": 1, "additionalCredits": 0}).status_code == 400
    assert client.post(approve, json={"requestId": 999, "additionalCredits": 5}).status_code == 404
    assert client.post("/admin/credits/deny", json={}).status_code == 400
    assert client.post("/admin/credits/deny", json={"requestId": 999}).status_code == 400


def test_analytics_usage_and_ordering(client):
    signup_and_login(client, "bob", "pw")
    upload(client, "b1.txt", "one")
    upload(client, "b2.txt", "two")
    first = client.post("/credits/request", json={"requestedCredits": 3}).json()["requestId"]
    signup_and_login(client, "carol", "pw")
    second = client.post("/credits/request", json={"requestedCredits": 7}).json()["requestId"]

    login_admin(client)
    analytics = client.get("/admin/analytics").json()["analytics"]

    users = {u["username"]: u for u in analytics["users"]}
    assert users["admin"]["total_scans"] == 0
    assert (users["bob"]["credits"], users["bob"]["total_scans"]) == (18, 2)
    assert (users["carol"]["credits"], users["carol"]["total_scans"]) == (20, 0)

    requests = analytics["credit_requests"]
    assert [(r["request_id"], r["username"], r["requested_credits"]) for r in requests] == [
        (first, "bob", 3),
        (second, "carol", 7),
    ]
    assert all(r["request_date"] for r in requests)


def test_admin_role_checked_from_store(client):
    assert login(client, "admin", "admin").json()["role"] == "admin"
    assert client.get("/admin/analytics").status_code == 200
