import todo_api.main
from fastapi.testclient import TestClient
from todo_api.main import create_app


def test_importing_main_builds_no_app():
    # the ASGI server calls create_app itself; see todo_api.__main__
    assert not hasattr(todo_api.main, "app")


def test_startup_creates_unique_email_index(db):
    with TestClient(create_app(db=db)):
        pass
    indexes = db.users.index_information()
    email_index = next(i for i in indexes.values() if i["key"] == [("email", 1)])
    assert email_index.get("unique") is True


def test_injected_database_is_used(db):
    app = create_app(db=db)
    assert app.state.db is db


def test_unexpected_error_is_500_json(db):
    app = create_app(db=db)

    @app.get("/boom")
    def boom():
        raise RuntimeError("boom")

    with TestClient(app, raise_server_exceptions=False) as c:
        r = c.get("/boom")
    assert r.status_code == 500
    assert r.json() == {"detail": "Internal server error"}


def test_http_errors_keep_their_status(client: TestClient):
    r = client.get("/users/me")
    assert r.status_code == 401
    assert r.json() == {"detail": "Authentication required"}
