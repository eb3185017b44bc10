from fastapi import Depends
from fastapi.testclient import TestClient

from supervision_api.core.security import DevUserMiddleware, current_user, request_attr
from supervision_api.main import app
from tests.helpers import make_app


def test_me_requires_header():
    client = TestClient(app)
    r = client.get("/me")
    assert r.status_code == 401
    body = r.json()
    assert body["success"] is False
    assert body["error"]["code"] == "UNAUTHORIZED"


def test_me_returns_user_and_route_throttle():
    client = TestClient(app)
    r = client.get("/me", headers={"X-User-Email": "admin@local.test"})
    assert r.status_code == 200
    body = r.json()
    assert body["email"] == "admin@local.test"
    assert body["throttle"] == {"limit": 30, "ttl": 60, "skip": False}


def test_current_user_is_none_without_middleware_data():
    test_app = make_app()

    @test_app.get("/who")
    def who(user=Depends(current_user)):
        return {"user": user}

    client = TestClient(test_app)
    assert client.get("/who", headers={"X-User-Email": "x@example.com"}).json() == {"user": None}


def test_current_user_extracted_from_request_state():
    test_app = make_app()
    test_app.add_middleware(DevUserMiddleware)

    @test_app.get("/who")
    def who(user=Depends(current_user)):
        return {"user": user.email}

    client = TestClient(test_app)
    assert client.get("/who", headers={"X-User-Email": "x@example.com"}).json() == {"user": "x@example.com"}


def test_request_attr_reads_any_state_field():
    test_app = make_app()
    tenant = request_attr("tenant")

    @test_app.middleware("http")
    async def set_tenant(request, call_next):
        request.state.tenant = "north-campus"
        return await call_next(request)

    @test_app.get("/tenant")
    def get_tenant(value=Depends(tenant)):
        return {"tenant": value}

    client = TestClient(test_app)
    assert client.get("/tenant").json() == {"tenant": "north-campus"}
