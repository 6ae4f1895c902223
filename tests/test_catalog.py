import uuid

DRILL = {
    "name": "Cordless Drill",
    "description": "18V brushless",
    "price": 89.5,
    "minimumQuantity": 10,
    "availableQuantity": 500,
}


def add_tool(client, headers):
    response = client.post("/tools", json=DRILL, headers=headers)
    assert response.status_code == 201
    return response.json()


def test_root(client):
    assert client.get("/").status_code == 200


def test_admin_adds_and_lists_tools(client, auth_headers, admin_email):
    tool = add_tool(client, auth_headers(admin_email))

    response = client.get("/tools")

    assert response.status_code == 200
    assert response.json() == [tool]
    assert tool["price"] == 89.5
    assert client.get(f"/tools/{tool['_id']}").json()["name"] == "Cordless Drill"


def test_adding_tool_requires_admin(client, auth_headers):
    response = client.post("/tools", json=DRILL, headers=auth_headers("alice@example.com"))

    assert response.status_code == 403
    assert client.get("/tools").json() == []


def test_update_available_quantity(client, auth_headers, admin_email):
    tool = add_tool(client, auth_headers(admin_email))

    response = client.put(f"/tools/{tool['_id']}", json={"availableQuantity": 480})

    assert response.status_code == 200
    assert response.json()["availableQuantity"] == 480
    assert response.json()["minimumQuantity"] == 10


def test_update_rejects_negative_stock(client, auth_headers, admin_email):
    tool = add_tool(client, auth_headers(admin_email))

    response = client.put(f"/tools/{tool['_id']}", json={"availableQuantity": -1})

    assert response.status_code == 422


def test_unknown_tool_is_404(client):
    assert client.get(f"/tools/{uuid.uuid4().hex}").status_code == 404
    assert client.put("/tools/nope", json={"availableQuantity": 1}).status_code == 404


def test_delete_tool(client, auth_headers, admin_email):
    headers = auth_headers(admin_email)
    tool = add_tool(client, headers)

    assert client.delete(f"/tools/{tool['_id']}", headers=auth_headers("alice@example.com")).status_code == 403
    assert client.delete(f"/tools/{tool['_id']}", headers=headers).json() == {"deleted": True}
    assert client.delete(f"/tools/{tool['_id']}", headers=headers).json() == {"deleted": False}


def test_reviews(client):
    response = client.post(
        "/reviews",
        json={"name": "Alice", "email": "alice@example.com", "rating": 5, "comment": "Great drill"}
    )
    assert response.status_code == 201

    reviews = client.get("/reviews").json()

    assert len(reviews) == 1
    assert reviews[0]["rating"] == 5


def test_review_rating_out_of_range(client):
    response = client.post("/reviews", json={"name": "Alice", "rating": 6})

    assert response.status_code == 422


def test_profile_upsert(client):
    assert client.get("/profiles/alice@example.com").status_code == 404

    client.put("/profiles/alice@example.com", json={"location": "Dhaka", "phone": "123"})
    response = client.put("/profiles/alice@example.com", json={"phone": "456"})

    assert response.status_code == 200
    profile = client.get("/profiles/alice@example.com").json()
    assert profile["location"] == "Dhaka"
    assert profile["phone"] == "456"
    assert profile["email"] == "alice@example.com"
