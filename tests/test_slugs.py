import pytest

from cms.models import ContentPage
from cms.slugs import generate_slug, slug_format_error, suggest_slugs, validate_slug


# =============================================================================
# Format
# =============================================================================


class TestSlugFormat:
    @pytest.mark.parametrize("slug", ["ab", "about-us", "2024-review", "a" * 200])
    def test_valid(self, slug):
        assert slug_format_error(slug) is None

    @pytest.mark.parametrize(
        "slug,fragment",
        [
            ("a", "at least 2"),
            ("a" * 201, "at most 200"),
            ("About", "lowercase"),
            ("about us", "lowercase"),
            ("-about", "hyphen"),
            ("about-", "hyphen"),
        ],
    )
    def test_invalid(self, slug, fragment):
        assert fragment in slug_format_error(slug)

    def test_generate_from_title(self):
        assert generate_slug("Over Ons: Ons Verhaal!") == "over-ons-ons-verhaal"
        assert generate_slug("") == ""


# =============================================================================
# Availability
# =============================================================================


@pytest.mark.django_db
class TestSlugAvailability:
    def test_free_slug(self):
        result = validate_slug("about")
        assert result.is_valid and result.is_available
        assert result.error is None
        assert result.suggestions == []

    def test_taken_slug_gets_suggestions(self):
        ContentPage.objects.create(slug="about")
        ContentPage.objects.create(slug="about-2")

        result = validate_slug("about")

        assert result.is_valid
        assert not result.is_available
        assert result.error == "Slug is already in use"
        assert result.suggestions == ["about-3", "about-4", "about-5"]

    def test_record_does_not_collide_with_itself_by_id(self):
        page = ContentPage.objects.create(slug="about")
        assert validate_slug("about", exclude_id=page.id).is_available
        assert validate_slug("about", exclude_id=str(page.id)).is_available

    def test_numeric_exclude_id_does_not_hide_a_page_with_that_slug(self):
        editing = ContentPage.objects.create(slug="team")
        ContentPage.objects.create(slug=str(editing.id))

        result = validate_slug(str(editing.id), exclude_id=str(editing.id))

        assert result.is_valid
        assert not result.is_available

    def test_non_numeric_exclude_id_excludes_nothing(self):
        ContentPage.objects.create(slug="about")
        assert not validate_slug("about", exclude_id="about").is_available

    def test_exclusion_only_covers_that_record(self):
        ContentPage.objects.create(slug="about")
        other = ContentPage.objects.create(slug="contact")
        assert not validate_slug("about", exclude_id=other.id).is_available

    def test_invalid_format_skips_lookup(self):
        result = validate_slug(" ")
        assert not result.is_valid
        assert not result.is_available
        assert result.suggestions == []

    def test_suggestions_are_bounded(self):
        ContentPage.objects.bulk_create([ContentPage(slug=f"news-{n}") for n in range(2, 10)])
        assert suggest_slugs("news") == ["news-10", "news-11", "news-12"]


# =============================================================================
# HTTP
# =============================================================================


@pytest.mark.django_db
class TestSlugApi:
    def test_validate_available(self, anon_client):
        res = anon_client.post("/api/content/validate-slug", {"slug": "about"}, content_type="application/json")
        assert res.status_code == 200
        assert res.json() == {"isValid": True, "isAvailable": True}

    def test_validate_taken(self, anon_client):
        ContentPage.objects.create(slug="about")
        res = anon_client.post("/api/content/validate-slug", {"slug": "about"}, content_type="application/json")
        assert res.json() == {
            "isValid": True,
            "isAvailable": False,
            "error": "Slug is already in use",
            "suggestions": ["about-2", "about-3", "about-4"],
        }

    def test_validate_with_exclude_id(self, anon_client):
        page = ContentPage.objects.create(slug="about")
        res = anon_client.post(
            "/api/content/validate-slug",
            {"slug": "about", "excludeId": page.id},
            content_type="application/json",
        )
        assert res.json()["isAvailable"] is True

    def test_validate_bad_format(self, anon_client):
        res = anon_client.post("/api/content/validate-slug", {"slug": "Bad Slug"}, content_type="application/json")
        body = res.json()
        assert body["isValid"] is False
        assert "lowercase" in body["error"]

    def test_generate(self, anon_client):
        ContentPage.objects.create(slug="our-story")
        res = anon_client.post("/api/content/generate-slug", {"title": "Our Story"}, content_type="application/json")
        assert res.json() == {"slug": "our-story", "isValid": True, "isAvailable": False}
