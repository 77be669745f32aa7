from fastapi.testclient import TestClient

from factories import listing
from proftafla.api import create_app
from proftafla.schools import SCHOOLS


def client_for(service):
    return TestClient(create_app(service))


def test_list_schools(service):
    with client_for(service) as client:
        response = client.get("/")

    assert response.status_code == 200
    assert [s["slug"] for s in response.json()] == [s.slug for s in SCHOOLS]


def test_get_division(service, upstream):
    upstream.pages[5] = listing(("Rafmagns- og tölvuverkfræðideild", [
        ("TÖL101G", "Tölvunarfræði 1", "Skriflegt", "250", "11. des."),
    ]))

    with client_for(service) as client:
        response = client.get("/verkfraedi-og-natturuvisindasvid")

    body = response.json()
    assert response.status_code == 200
    assert body["heading"] == "Verkfræði- og náttúruvísindasvið"
    assert body["departments"][0]["tests"][0]["students"] == 250


def test_unknown_division_is_404(service):
    with client_for(service) as client:
        response = client.get("/engin-slod")

    assert response.status_code == 404


def test_upstream_failure_is_502(service, upstream):
    upstream.status_code = 500

    with client_for(service) as client:
        assert client.get("/hugvisindasvid").status_code == 502
        assert client.get("/stats").status_code == 502


def test_stats(service, upstream):
    upstream.pages[1] = listing(("A", [("A", "A", "S", "3", ""), ("B", "B", "S", "10", "")]))
    upstream.pages[2] = listing(("B", [("C", "C", "S", "1", "")]))

    with client_for(service) as client:
        response = client.get("/stats")

    assert response.json() == {
        "min": 1,
        "max": 10,
        "numTests": 3,
        "numStudents": 14,
        "averageStudents": "4.67",
    }


def test_clear_cache(service, store):
    with client_for(service) as client:
        client.get("/felagsvisindasvid")
        response = client.post("/clear-cache")

    assert response.json() == {"cleared": True}
    assert store.data == {}


def test_module_level_app_builds_its_own_service(monkeypatch):
    from proftafla.api import app

    monkeypatch.setenv("REDIS_URL", "redis://localhost:6379/15")

    with TestClient(app) as client:
        response = client.get("/")

    assert response.status_code == 200
    assert len(response.json()) == len(SCHOOLS)
