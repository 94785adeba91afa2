from app.data.airlines import format_airline_display, get_airline_by_code, search_airlines
from app.data.airports import format_airport_display, get_airport_by_code, search_airports


def test_airline_exact_code_ranks_first():
    results = search_airlines("ac")
    assert results[0]["code"] == "AC"


def test_airline_name_prefix():
    codes = [a["code"] for a in search_airlines("air canada")]
    assert codes[:2] == ["AC", "RV"]


def test_airline_lookup_and_display():
    airline = get_airline_by_code(" ws ")
    assert airline["name"] == "WestJet"
    assert format_airline_display(airline) == "WS - WestJet"
    assert get_airline_by_code("ZZ") is None


def test_airport_search_and_display():
    assert search_airports("yyz")[0]["code"] == "YYZ"
    assert search_airports("toronto")[0]["city"] == "Toronto"
    assert len(search_airports("", limit=5)) == 5


def test_airport_display_fallbacks():
    assert format_airport_display("lhr") == "LHR - London"
    assert format_airport_display("QQQ") == "QQQ"
    assert format_airport_display(None) == "???"
    assert get_airport_by_code("yyz")["code"] == "YYZ"


def test_reference_endpoints(client):
    resp = client.get("/api/reference/airlines", params={"q": "westjet"})
    assert resp.status_code == 200
    assert resp.json()["airlines"][0]["display"] == "WS - WestJet"

    assert client.get("/api/reference/airlines/zz").status_code == 404

    resp = client.get("/api/reference/airports", params={"q": "YYZ", "limit": 1})
    assert resp.json()["airports"][0]["display"] == "YYZ - Toronto"


def test_reference_requires_auth(anon_client):
    assert anon_client.get("/api/reference/airlines").status_code == 401
