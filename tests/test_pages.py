"""CMS page API tests."""

from unittest.mock import patch

from sqlalchemy import text

from src.models.page import Page
from src.services.page_service import PageService


def create_page(client, headers, **overrides):
    payload = {"title": "About Us", "slug": "about-us", **overrides}
    response = client.post("/api/v1/pages", headers=headers, json=payload)
    assert response.status_code == 201, response.text
    return response.json()["page"]


def test_create_page(client, admin_headers):
    """Test creating a page with defaults."""
    page = create_page(client, admin_headers, content={"blocks": [{"type": "hero"}]})
    assert page["slug"] == "about-us"
    assert page["status"] == "draft"
    assert page["page_template"] == "default"
    assert page["content"] == {"blocks": [{"type": "hero"}]}
    assert page["parent_id"] is None


def test_create_page_requires_admin(client, auth_headers):
    response = client.post(
        "/api/v1/pages", headers=auth_headers, json={"title": "About", "slug": "about"}
    )
    assert response.status_code == 403
    assert response.json()["message"] == "Insufficient permissions"


def test_create_page_requires_session(client):
    response = client.post("/api/v1/pages", json={"title": "About", "slug": "about"})
    assert response.status_code == 401


def test_create_page_duplicate_slug(client, admin_headers):
    create_page(client, admin_headers)
    response = client.post(
        "/api/v1/pages", headers=admin_headers, json={"title": "Other", "slug": "about-us"}
    )
    assert response.status_code == 409


def test_create_page_slug_taken_concurrently(client, admin_headers):
    create_page(client, admin_headers)
    # Another request inserts the slug after the availability check
    with patch.object(PageService, "_ensure_slug_available"):
        response = client.post(
            "/api/v1/pages", headers=admin_headers, json={"title": "Other", "slug": "about-us"}
        )
    assert response.status_code == 409
    assert response.json()["message"] == "A page with slug 'about-us' already exists"


def test_create_page_without_content_stores_null(client, db, admin_headers):
    page = create_page(client, admin_headers)
    assert page["content"] is None
    stored = db.execute(text("SELECT content FROM pages WHERE id = :id"), {"id": page["id"]})
    assert stored.scalar_one() is None


def test_create_page_invalid_slug(client, admin_headers):
    response = client.post(
        "/api/v1/pages", headers=admin_headers, json={"title": "About", "slug": "About Us!"}
    )
    assert response.status_code == 422
    assert "slug" in response.json()["errors"]


def test_create_page_missing_parent(client, admin_headers):
    response = client.post(
        "/api/v1/pages",
        headers=admin_headers,
        json={"title": "Team", "slug": "team", "parent_id": 9999},
    )
    assert response.status_code == 422
    assert "parent_id" in response.json()["errors"]


def test_list_pages_in_menu_order(client, admin_headers):
    create_page(client, admin_headers, title="Zeta", slug="zeta", menu_order=1)
    create_page(client, admin_headers, title="Beta", slug="beta", menu_order=2)
    create_page(client, admin_headers, title="Alpha", slug="alpha", menu_order=1)

    response = client.get("/api/v1/pages", headers=admin_headers)
    assert response.status_code == 200
    data = response.json()
    assert data["count"] == 3
    assert [p["title"] for p in data["pages"]] == ["Alpha", "Zeta", "Beta"]


def test_get_page_not_found(client, admin_headers):
    response = client.get("/api/v1/pages/9999", headers=admin_headers)
    assert response.status_code == 404
    assert response.json()["code"] == "NOT_FOUND"


def test_page_id_out_of_range(client, admin_headers):
    huge = "/api/v1/pages/100000000000000000000"
    assert client.get(huge, headers=admin_headers).status_code == 404
    assert client.patch(huge, headers=admin_headers, json={"title": "X"}).status_code == 404
    assert client.delete(huge, headers=admin_headers).status_code == 404


def test_create_page_parent_out_of_range(client, admin_headers):
    response = client.post(
        "/api/v1/pages",
        headers=admin_headers,
        json={"title": "Team", "slug": "team", "parent_id": 100000000000000000000},
    )
    assert response.status_code == 422
    assert "parent_id" in response.json()["errors"]


def test_update_page(client, admin_headers):
    page = create_page(client, admin_headers)
    response = client.patch(
        f"/api/v1/pages/{page['id']}",
        headers=admin_headers,
        json={"status": "published", "meta_title": "About"},
    )
    assert response.status_code == 200
    updated = response.json()["page"]
    assert updated["status"] == "published"
    assert updated["meta_title"] == "About"
    assert updated["title"] == "About Us"


def test_update_page_ignores_null_required_fields(client, admin_headers):
    page = create_page(client, admin_headers)
    response = client.put(
        f"/api/v1/pages/{page['id']}", headers=admin_headers, json={"title": None}
    )
    assert response.status_code == 200
    assert response.json()["page"]["title"] == "About Us"


def test_update_page_slug_conflict(client, admin_headers):
    create_page(client, admin_headers)
    other = create_page(client, admin_headers, title="Menu", slug="menu")
    response = client.patch(
        f"/api/v1/pages/{other['id']}", headers=admin_headers, json={"slug": "about-us"}
    )
    assert response.status_code == 409


def test_update_page_slug_taken_concurrently(client, admin_headers):
    create_page(client, admin_headers)
    other = create_page(client, admin_headers, title="Menu", slug="menu")
    with patch.object(PageService, "_ensure_slug_available"):
        response = client.patch(
            f"/api/v1/pages/{other['id']}", headers=admin_headers, json={"slug": "about-us"}
        )
    assert response.status_code == 409


def test_update_page_rejects_cycle(client, admin_headers):
    root = create_page(client, admin_headers, title="Root", slug="root")
    child = create_page(client, admin_headers, title="Child", slug="child", parent_id=root["id"])
    grandchild = create_page(
        client, admin_headers, title="Grandchild", slug="grandchild", parent_id=child["id"]
    )

    response = client.patch(
        f"/api/v1/pages/{root['id']}", headers=admin_headers, json={"parent_id": grandchild["id"]}
    )
    assert response.status_code == 422
    assert "parent_id" in response.json()["errors"]

    response = client.patch(
        f"/api/v1/pages/{root['id']}", headers=admin_headers, json={"parent_id": root["id"]}
    )
    assert response.status_code == 422


def test_update_page_clears_parent(client, admin_headers):
    root = create_page(client, admin_headers, title="Root", slug="root")
    child = create_page(client, admin_headers, title="Child", slug="child", parent_id=root["id"])
    response = client.patch(
        f"/api/v1/pages/{child['id']}", headers=admin_headers, json={"parent_id": None}
    )
    assert response.status_code == 200
    assert response.json()["page"]["parent_id"] is None


def test_delete_page_detaches_children(client, db, admin_headers):
    parent = create_page(client, admin_headers, title="Parent", slug="parent")
    child = create_page(client, admin_headers, title="Child", slug="child", parent_id=parent["id"])

    response = client.delete(f"/api/v1/pages/{parent['id']}", headers=admin_headers)
    assert response.status_code == 200
    assert response.json() == {"success": True}

    assert db.query(Page).filter(Page.id == parent["id"]).first() is None
    assert db.query(Page).filter(Page.id == child["id"]).one().parent_id is None


def test_delete_page_not_found(client, admin_headers):
    response = client.delete("/api/v1/pages/9999", headers=admin_headers)
    assert response.status_code == 404


def test_public_page_by_slug(client, admin_headers):
    create_page(client, admin_headers, title="Draft", slug="draft")
    create_page(client, admin_headers, title="Live", slug="live", status="published")

    assert client.get("/api/v1/pages/by-slug/live").status_code == 200
    assert client.get("/api/v1/pages/by-slug/draft").status_code == 404


def test_menu_pages(client, admin_headers):
    create_page(client, admin_headers, title="Menu", slug="menu", status="published", show_in_menu=True)
    create_page(
        client, admin_headers, title="Privacy", slug="privacy", status="published", show_in_footer=True
    )
    create_page(client, admin_headers, title="Hidden", slug="hidden", show_in_menu=True)

    header = client.get("/api/v1/pages/menu").json()["pages"]
    footer = client.get("/api/v1/pages/menu?location=footer").json()["pages"]
    assert [p["slug"] for p in header] == ["menu"]
    assert [p["slug"] for p in footer] == ["privacy"]
