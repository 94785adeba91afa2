def test_contact_crud(client, make_contact):
    contact = make_contact(preferred_name="Mae", prefix="Dr.")
    assert contact["display_name"] == "Mae"
    assert contact["legal_full_name"] == "Dr. Maya Okafor"
    assert contact["contact_type"] == "client"

    resp = client.patch(f"/api/contacts/{contact['id']}", json={"legal_last_name": "Okafor-Reid"})
    assert resp.json()["legal_full_name"] == "Dr. Maya Okafor-Reid"

    assert client.delete(f"/api/contacts/{contact['id']}").status_code == 204
    assert client.get(f"/api/contacts/{contact['id']}").status_code == 404


def test_contact_search(client, make_contact):
    make_contact()
    make_contact(first_name="Luca", last_name="Moretti", email="luca@example.com")

    found = client.get("/api/contacts", params={"q": "moret"}).json()
    assert found["total"] == 1
    assert found["contacts"][0]["first_name"] == "Luca"


def test_invalid_email_is_rejected(client):
    resp = client.post("/api/contacts", json={"first_name": "Bad", "email": "not-an-email"})
    assert resp.status_code == 422


def test_contacts_are_scoped_to_agency(client, other_client, make_contact):
    contact = make_contact()
    assert other_client.get(f"/api/contacts/{contact['id']}").status_code == 404
    assert other_client.get("/api/contacts").json()["total"] == 0


def test_deleting_contact_keeps_traveler_snapshot(client, make_trip, make_contact):
    trip = make_trip()
    contact = make_contact()
    traveler = client.post(f"/api/trips/{trip['id']}/travelers", json={"contact_id": contact["id"]}).json()

    client.delete(f"/api/contacts/{contact['id']}")
    kept = client.get(f"/api/trips/{trip['id']}/travelers/{traveler['id']}").json()
    assert kept["contact_id"] is None
    assert kept["display_name"] == "Maya"
