import pytest


@pytest.fixture
def stored_admin(key_tree_store, run):
    run(key_tree_store.set("Adminlogin", {"userid": "admin", "password": "s3cret"}))


def test_login_success_trims_input(client, stored_admin):
    response = client.get("/api/admin/login", params={"userid": " admin ", "password": "s3cret  "})
    assert response.status_code == 200
    assert response.json() == {"message": "Login successful!"}


@pytest.mark.parametrize("userid,password", [("admin", "wrong"), ("root", "s3cret"), ("ADMIN", "s3cret")])
def test_login_rejects_bad_credentials(client, stored_admin, userid, password):
    response = client.get("/api/admin/login", params={"userid": userid, "password": password})
    assert response.status_code == 401
    assert response.json() == {"error": "Invalid User ID or Password."}


@pytest.mark.parametrize("params", [{}, {"userid": "admin"}, {"password": "s3cret"}])
def test_login_requires_both_fields(client, stored_admin, params):
    response = client.get("/api/admin/login", params=params)
    assert response.status_code == 400


def test_login_without_stored_record(client):
    response = client.get("/api/admin/login", params={"userid": "admin", "password": "s3cret"})
    assert response.status_code == 401
