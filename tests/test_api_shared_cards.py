from fastapi import status


def test_root_and_health(client):
    assert client.get("/").json()["message"] == "Learnflow API"
    assert client.get("/health").json() == {"status": "healthy"}


def test_create_and_list_cards(client):
    response = client.post("/api/v1/shared-cards", json={
        "front": " la maison ",
        "back": "the house",
        "example": "La maison est grande.",
    })

    assert response.status_code == status.HTTP_201_CREATED
    created = response.json()
    assert created["front"] == "la maison"
    assert created["unit"] == "General"
    assert created["translation"] == ""
    assert isinstance(created["id"], int)

    listed = client.get("/api/v1/shared-cards").json()
    assert [c["id"] for c in listed] == [created["id"]]


def test_list_is_newest_first(client):
    ids = [
        client.post("/api/v1/shared-cards", json={"front": f"f{i}", "back": f"b{i}"}).json()["id"]
        for i in range(3)
    ]

    listed = client.get("/api/v1/shared-cards").json()

    assert [c["id"] for c in listed] == list(reversed(ids))


def test_empty_front_is_rejected(client):
    response = client.post("/api/v1/shared-cards", json={"front": "  ", "back": "x"})

    assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY


def test_bulk_insert(client):
    response = client.post("/api/v1/shared-cards/bulk", json=[
        {"front": "un", "back": "one", "unit": "Numbers"},
        {"front": "deux", "back": "two", "unit": ""},
    ])

    assert response.status_code == status.HTTP_201_CREATED
    body = response.json()
    assert [c["front"] for c in body] == ["un", "deux"]
    assert [c["unit"] for c in body] == ["Numbers", "General"]
    assert len(client.get("/api/v1/shared-cards").json()) == 2


def test_bulk_insert_is_all_or_nothing(client):
    response = client.post("/api/v1/shared-cards/bulk", json=[
        {"front": "un", "back": "one"},
        {"front": "", "back": "two"},
    ])

    assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
    assert client.get("/api/v1/shared-cards").json() == []


def test_partial_update(client):
    card_id = client.post("/api/v1/shared-cards", json={"front": "a", "back": "b", "unit": "U"}).json()["id"]

    response = client.patch(f"/api/v1/shared-cards/{card_id}", json={"back": "c", "example": "ex"})

    assert response.status_code == status.HTTP_200_OK
    body = response.json()
    assert (body["front"], body["back"], body["example"], body["unit"]) == ("a", "c", "ex", "U")


def test_update_missing_card(client):
    response = client.patch("/api/v1/shared-cards/999", json={"back": "c"})

    assert response.status_code == status.HTTP_404_NOT_FOUND
    assert response.json()["type"] == "NotFoundError"


def test_delete_card(client):
    card_id = client.post("/api/v1/shared-cards", json={"front": "a", "back": "b"}).json()["id"]

    assert client.delete(f"/api/v1/shared-cards/{card_id}").status_code == status.HTTP_204_NO_CONTENT
    assert client.get("/api/v1/shared-cards").json() == []
    assert client.delete(f"/api/v1/shared-cards/{card_id}").status_code == status.HTTP_404_NOT_FOUND
