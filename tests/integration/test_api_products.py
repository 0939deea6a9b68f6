from fastapi.testclient import TestClient

BASE = "/api/v1/products/"


def _names(response_json: list[dict]) -> list[str]:
    return [p["name"] for p in response_json]


def test_list_returns_seed_in_canonical_order(client: TestClient) -> None:
    response = client.get(BASE)

    assert response.status_code == 200
    data = response.json()
    assert _names(data) == ["Laptop", "Desk Chair", "Wireless Mouse", "Coffee Maker", "Bookshelf"]
    assert data[0] == {
        "id": 1,
        "name": "Laptop",
        "category": "Electronics",
        "quantity": 10,
        "price": "999.99",
    }


def test_list_applies_search_filter_and_sort(client: TestClient) -> None:
    response = client.get(
        BASE, params={"category": "Furniture", "min_price": "100", "sort": "price-low-high"}
    )

    assert response.status_code == 200
    assert _names(response.json()) == ["Bookshelf", "Desk Chair"]

    response = client.get(BASE, params={"q": "o"})
    assert _names(response.json()) == ["Laptop", "Wireless Mouse", "Coffee Maker", "Bookshelf"]


def test_list_blank_filters_are_ignored(client: TestClient) -> None:
    response = client.get(BASE, params={"q": "", "category": "", "sort": ""})

    assert response.status_code == 200
    assert len(response.json()) == 5


def test_list_invalid_sort(client: TestClient) -> None:
    response = client.get(BASE, params={"sort": "by-colour"})

    assert response.status_code == 400


def test_list_inverted_price_range(client: TestClient) -> None:
    response = client.get(BASE, params={"min_price": "200", "max_price": "100"})

    assert response.status_code == 400
    assert "max_price" in response.json()["detail"]


def test_list_negative_price_bound(client: TestClient) -> None:
    response = client.get(BASE, params={"min_price": "-1"})

    assert response.status_code == 422


def test_product_lifecycle(client: TestClient) -> None:
    # 1. Create
    payload = {"name": "Desk Lamp", "category": "Furniture", "quantity": "4", "price": "34.90"}
    response = client.post(BASE, json=payload)
    assert response.status_code == 201
    created = response.json()
    assert created == {
        "id": 6,
        "name": "Desk Lamp",
        "category": "Furniture",
        "quantity": 4,
        "price": "34.90",
    }

    # 2. Read
    response = client.get(f"{BASE}6")
    assert response.status_code == 200
    assert response.json() == created

    # 3. Update
    payload = {"name": "LED Desk Lamp", "category": "Furniture", "quantity": 6, "price": "39.90"}
    response = client.put(f"{BASE}6", json=payload)
    assert response.status_code == 200
    assert response.json()["name"] == "LED Desk Lamp"
    assert response.json()["quantity"] == 6

    # 4. Delete returns the removed record
    response = client.delete(f"{BASE}6")
    assert response.status_code == 200
    assert response.json()["name"] == "LED Desk Lamp"

    # 5. Gone
    assert client.get(f"{BASE}6").status_code == 404
    assert client.delete(f"{BASE}6").status_code == 404
    assert len(client.get(BASE).json()) == 5


def test_create_invalid_product(client: TestClient) -> None:
    response = client.post(
        BASE, json={"name": "Freebie", "category": "Other", "quantity": 1, "price": "0"}
    )

    assert response.status_code == 422
    assert "price" in response.json()["detail"]
    assert len(client.get(BASE).json()) == 5


def test_update_unknown_product(client: TestClient) -> None:
    response = client.put(
        f"{BASE}99", json={"name": "Ghost", "category": "Other", "quantity": 1, "price": "1"}
    )

    assert response.status_code == 404


def test_update_invalid_product(client: TestClient) -> None:
    response = client.put(
        f"{BASE}1", json={"name": "", "category": "Electronics", "quantity": 1, "price": "1"}
    )

    assert response.status_code == 422
    assert client.get(f"{BASE}1").json()["name"] == "Laptop"


def test_export_csv_uses_view(client: TestClient) -> None:
    response = client.get(f"{BASE}export/csv", params={"category": "Electronics"})

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/csv")
    assert "products.csv" in response.headers["content-disposition"]
    lines = response.text.splitlines()
    assert lines == [
        "id,name,category,quantity,price",
        "1,Laptop,Electronics,10,999.99",
        "3,Wireless Mouse,Electronics,30,29.99",
    ]
