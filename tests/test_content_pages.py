import pytest

from cms.models import ContentPage


def _page_body(**overrides):
    body = {
        "slug": "about",
        "published": True,
        "translations": [
            {"languageCode": "nl", "title": "Over ons", "content": "Wij maken meubels."},
            {
                "languageCode": "fr",
                "title": "À propos",
                "content": {
                    "type": "doc",
                    "content": [{"type": "paragraph", "content": [{"type": "text", "text": "Nous fabriquons."}]}],
                },
            },
        ],
    }
    body.update(overrides)
    return body


@pytest.mark.django_db
class TestContentPagesApi:
    def test_create_and_read(self, staff_client, anon_client, languages):
        res = staff_client.post("/api/admin/content/pages", _page_body(), content_type="application/json")
        assert res.status_code == 201
        assert {t["languageCode"] for t in res.json()["translations"]} == {"nl", "fr"}

        page = anon_client.get("/api/content/pages/about?language_code=fr").json()
        assert page["title"] == "À propos"
        assert page["html"] == "<p>Nous fabriquons.</p>"

        page = anon_client.get("/api/content/pages/about?language_code=en").json()
        assert page["language_code"] == "nl"
        assert page["content"]["content"][0]["content"][0]["text"] == "Wij maken meubels."

    def test_unpublished_page_is_hidden(self, staff_client, anon_client, languages):
        staff_client.post("/api/admin/content/pages", _page_body(published=False), content_type="application/json")
        assert anon_client.get("/api/content/pages/about").status_code == 404

    def test_duplicate_slug(self, staff_client, languages):
        staff_client.post("/api/admin/content/pages", _page_body(), content_type="application/json")
        res = staff_client.post("/api/admin/content/pages", _page_body(), content_type="application/json")
        assert res.status_code == 409
        assert res.json() == {"detail": "Slug is already in use"}

    def test_bad_slug(self, staff_client, languages):
        res = staff_client.post("/api/admin/content/pages", _page_body(slug="Over Ons"), content_type="application/json")
        assert res.status_code == 400

    def test_update_keeps_own_slug(self, staff_client, languages):
        page_id = staff_client.post("/api/admin/content/pages", _page_body(), content_type="application/json").json()["id"]
        res = staff_client.put(
            f"/api/admin/content/pages/{page_id}",
            _page_body(translations=[{"languageCode": "nl", "title": "Over ons (nieuw)"}]),
            content_type="application/json",
        )
        assert res.status_code == 200
        assert [t["title"] for t in res.json()["translations"]] == ["Over ons (nieuw)"]

    def test_unknown_language(self, staff_client, languages):
        res = staff_client.post(
            "/api/admin/content/pages",
            _page_body(translations=[{"languageCode": "de", "title": "Über uns"}]),
            content_type="application/json",
        )
        assert res.status_code == 400
        assert not ContentPage.objects.exists()

    def test_toggle_and_delete(self, staff_client, languages):
        page_id = staff_client.post("/api/admin/content/pages", _page_body(), content_type="application/json").json()["id"]
        assert staff_client.post(f"/api/admin/content/pages/{page_id}/toggle-publish").json()["published"] is False
        assert staff_client.delete(f"/api/admin/content/pages/{page_id}").status_code == 204
        assert staff_client.get(f"/api/admin/content/pages/{page_id}").status_code == 404
