from __future__ import annotations

from storefront.core.config import settings
from storefront.core.errors import InfrastructureError
from storefront.core.security import ViewerRole, get_viewer_role
from storefront.main import app
from storefront.services.category_page import build_category_page
from storefront.services.row_store import RowStore
from tests.test_utils import create_category, create_row


def _url(category_id: int) -> str:
    return f"/api/v1/categories/{category_id}/products"


def _seed(db_session):
    shoes = create_category(db_session, "Shoes")
    create_category(db_session, "Sandals", sub="Shoes")
    create_category(db_session, "Boots", sub="Shoes", image=None)
    create_category(db_session, "Bags")

    create_row(db_session, "SNK", color="Black", item_name="Runner", group_name="Shoes", kind_name="Sneakers")
    create_row(db_session, "SNK", color="Red", item_name="Runner", group_name="Shoes", kind_name="Sneakers")
    create_row(db_session, "SND", color="Brown", item_name="Slide", group_name="Shoes", kind_name="Sandals")
    create_row(db_session, "TOTE", color="Red", item_name="Tote", group_name="Bags")
    return shoes


def test_category_page_lists_matching_models(client, db_session):
    shoes = _seed(db_session)

    resp = client.get(_url(shoes.id))
    assert resp.status_code == 200, resp.text
    body = resp.json()

    assert body["success"] is True
    assert body["category"]["name"] == "Shoes"
    assert [p["modelId"] for p in body["products"]] == ["SNK", "SND"]
    assert body["pagination"]["limit"] == settings.category_page_limit
    assert body["limit_options"] == [12, 24, 36, 48, 100]
    assert body["display_range"] == {"first": 1, "last": 2}


def test_only_sub_categories_with_images_are_offered(client, db_session):
    shoes = _seed(db_session)

    body = client.get(_url(shoes.id)).json()

    assert [s["name"] for s in body["sub_categories"]] == ["Sandals"]


def test_sub_category_is_anded_with_category(client, db_session):
    shoes = _seed(db_session)

    body = client.get(_url(shoes.id), params={"sub": "Sandals"}).json()

    assert [p["modelId"] for p in body["products"]] == ["SND"]


def test_search_is_anded_with_category(client, db_session):
    shoes = _seed(db_session)

    body = client.get(_url(shoes.id), params={"search": "red"}).json()

    # The red tote is outside the category, only the red sneaker colorway matches.
    assert [p["modelId"] for p in body["products"]] == ["SNK"]


def test_unknown_category_gives_empty_page(client, db_session):
    _seed(db_session)

    body = client.get(_url(424242)).json()

    assert body["success"] is True
    assert body["category"] is None
    assert body["products"] == []
    assert body["sub_categories"] == []
    assert body["pagination"]["totalPages"] == 1
    assert body["display_range"] == {"first": 0, "last": 0}


def test_page_size_and_display_range(client, db_session):
    shoes = create_category(db_session, "Shoes")
    for i in range(30):
        create_row(db_session, f"S{i:02d}", item_name=f"Shoe {i:02d}", group_name="Shoes")

    body = client.get(_url(shoes.id), params={"page": 3, "limit": 12}).json()

    assert len(body["products"]) == 6
    assert body["products"][0]["modelId"] == "S24"
    assert body["display_range"] == {"first": 25, "last": 30}
    assert body["pagination"]["totalPages"] == 3
    assert body["pagination"]["hasNextPage"] is False


def test_employee_view_via_dependency_override(client, db_session):
    shoes = _seed(db_session)
    app.dependency_overrides[get_viewer_role] = lambda: ViewerRole.EMPLOYEE

    body = client.get(_url(shoes.id)).json()

    assert body["products"][0]["variants"][0]["cur_qty"] == 5


def test_service_matches_endpoint(db_session):
    shoes = _seed(db_session)

    page = build_category_page(RowStore(db_session), shoes.id, sub="Sneakers", limit=1)

    assert [p.model_id for p in page.products] == ["SNK"]
    assert page.products[0].cur_qty is None
    assert page.pagination.total_products == 1


def test_store_failure_returns_degraded_page(client, db_session, monkeypatch):
    shoes = _seed(db_session)

    def _boom(self, predicate):
        raise InfrastructureError("Failed to fetch product rows")

    monkeypatch.setattr(RowStore, "fetch_rows", _boom)

    resp = client.get(_url(shoes.id), params={"sub": "Sandals", "search": "red"})
    assert resp.status_code == 200
    body = resp.json()

    assert body["success"] is False
    assert body["products"] == []
    assert body["sub_categories"] == []
    assert body["category"] is None
    assert body["pagination"]["totalPages"] == 1
    assert body["pagination"]["limit"] == settings.category_page_limit
    assert body["display_range"] == {"first": 0, "last": 0}
    assert body["filters"] == {"sub": "Sandals", "search": "red"}
    assert body["error"]
    assert "Failed to fetch product rows" not in body["error"]


def test_category_lookup_failure_returns_degraded_page(client, db_session, monkeypatch):
    def _boom(self):
        raise RuntimeError("connection reset")

    monkeypatch.setattr(RowStore, "fetch_categories", _boom)

    resp = client.get(_url(1))
    assert resp.status_code == 200
    body = resp.json()

    assert body["success"] is False
    assert body["products"] == []
    assert "connection reset" not in body["error"]


def test_malformed_page_and_limit_are_read_by_leading_integer(client, db_session):
    shoes = create_category(db_session, "Shoes")
    for i in range(30):
        create_row(db_session, f"S{i:02d}", item_name=f"Shoe {i:02d}", group_name="Shoes")

    resp = client.get(_url(shoes.id), params={"page": "2nd", "limit": "24abc"})
    assert resp.status_code == 200, resp.text
    body = resp.json()

    assert body["pagination"]["currentPage"] == 2
    assert body["pagination"]["limit"] == 24
    assert body["display_range"] == {"first": 25, "last": 30}


def test_non_integer_category_id_keeps_default_validation(client, db_session):
    resp = client.get("/api/v1/categories/shoes/products")

    assert resp.status_code == 422
