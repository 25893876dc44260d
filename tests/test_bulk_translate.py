"""Bulk translation of project content into every non-default language."""

from io import StringIO

import pytest
from django.core.management import CommandError, call_command

from cms.richtext import extract_plain_text
from languages.services import update_language
from projects.bulk_translate import BulkTranslationError, bulk_translate_projects, split_materials
from projects.models import ContentType, Project, ProjectTranslation
from projects.services import create_project


@pytest.fixture
def furniture(db):
    return ContentType.objects.create(name="furniture", display_name="Furniture")


@pytest.fixture
def make_project(furniture, languages):
    def _make(title="Eiken tafel", description="Massief eiken.", materials=("Massief eik",), extra=None):
        translations = [
            {"language_code": "nl", "title": title, "description": description, "materials": list(materials)}
        ]
        translations.extend(extra or [])
        return create_project(content_type_id=furniture.id, translations=translations)

    return _make


def _row(project, code):
    return ProjectTranslation.objects.get(project=project, language__code=code)


# =============================================================================
# Batch preconditions
# =============================================================================


@pytest.mark.django_db
class TestPreconditions:
    @pytest.mark.parametrize("ids", [[], None, "1,2", 7])
    def test_invalid_ids(self, languages, provider_factory, ids):
        provider = provider_factory()
        with pytest.raises(BulkTranslationError, match="Invalid project IDs"):
            bulk_translate_projects(ids, provider=provider, pacing=0)
        assert provider.calls == []

    def test_no_default_language(self, provider_factory):
        with pytest.raises(BulkTranslationError, match="No default language found"):
            bulk_translate_projects([1], provider=provider_factory(), pacing=0)

    def test_no_target_languages(self, languages, provider_factory):
        update_language(languages["fr"], is_active=False)
        update_language(languages["en"], is_active=False)
        with pytest.raises(BulkTranslationError, match="No target languages available"):
            bulk_translate_projects([1], provider=provider_factory(), pacing=0)

    def test_unconfigured_provider(self, languages, provider_factory):
        with pytest.raises(BulkTranslationError, match="not configured"):
            bulk_translate_projects([1], provider=provider_factory(configured=False), pacing=0)


# =============================================================================
# Per-project behaviour
# =============================================================================


@pytest.mark.django_db
class TestBulkTranslate:
    def test_fills_every_target_language(self, make_project, provider_factory):
        project = make_project()
        provider = provider_factory()

        result = bulk_translate_projects([project.id], provider=provider, pacing=0)

        assert result.as_dict() == {"success": 1, "failed": 0, "errors": []}
        fr = _row(project, "fr")
        assert fr.title == "[fr] Eiken tafel"
        assert extract_plain_text(fr.description) == "[fr] Massief eiken."
        assert fr.materials == ["[fr] Massief eik"]
        assert _row(project, "en").title == "[en] Eiken tafel"
        # One call per field, every target language at once.
        assert [c[0] for c in provider.calls] == ["Eiken tafel", "Massief eiken.", "Massief eik"]
        assert all(c[1] == "nl" and sorted(c[2]) == ["en", "fr"] for c in provider.calls)

    def test_default_translation_is_untouched(self, make_project, provider_factory):
        project = make_project()
        bulk_translate_projects([project.id], provider=provider_factory(), pacing=0)
        assert _row(project, "nl").title == "Eiken tafel"

    def test_partial_failure_is_reported(self, make_project, furniture, provider_factory):
        a = make_project(title="Een")
        b = make_project(title="Twee")
        orphan = Project.objects.create(content_type=furniture)

        result = bulk_translate_projects([a.id, orphan.id, b.id], provider=provider_factory(), pacing=0)

        assert result.success == 2
        assert result.failed == 1
        assert result.errors == [f"Project {orphan.id} has no default language translation"]

    def test_unknown_project(self, make_project, provider_factory):
        result = bulk_translate_projects([999999], provider=provider_factory(), pacing=0)
        assert result.errors == ["Project 999999 not found"]

    def test_materials_are_split_after_translation(self, make_project, provider_factory):
        project = make_project(materials=["Solid Oak", "Natural Oil Finish"])
        provider = provider_factory(
            responses={("Solid Oak, Natural Oil Finish", "fr"): "Eik massief, Natuurlijke olie-afwerking"}
        )

        bulk_translate_projects([project.id], provider=provider, pacing=0)

        assert ("Solid Oak, Natural Oil Finish", "nl", ["fr", "en"]) in [
            (t, s, sorted(c, reverse=True)) for t, s, c in provider.calls
        ]
        assert _row(project, "fr").materials == ["Eik massief", "Natuurlijke olie-afwerking"]

    def test_failed_field_degrades_to_existing_or_source(self, make_project, provider_factory):
        project = make_project(
            extra=[{"language_code": "fr", "title": "Table en chêne", "description": "Chêne massif."}]
        )
        provider = provider_factory(fail_on={"Eiken tafel"})

        result = bulk_translate_projects([project.id], provider=provider, pacing=0)

        assert result.success == 1
        assert _row(project, "fr").title == "Table en chêne"
        assert _row(project, "en").title == "Eiken tafel"
        assert extract_plain_text(_row(project, "fr").description) == "[fr] Massief eiken."

    def test_empty_fields_are_not_sent(self, make_project, provider_factory):
        project = make_project(description="", materials=())
        provider = provider_factory()
        bulk_translate_projects([project.id], provider=provider, pacing=0)
        assert [c[0] for c in provider.calls] == ["Eiken tafel"]

    def test_pacing_between_calls(self, make_project, provider_factory, monkeypatch):
        sleeps = []
        monkeypatch.setattr("projects.bulk_translate.time.sleep", sleeps.append)
        a = make_project()
        b = make_project()

        bulk_translate_projects([a.id, b.id], provider=provider_factory(), pacing=0.25)

        assert sleeps == [0.25] * 5


def test_split_materials():
    assert split_materials(" Eik massief ,, Natuurlijke olie-afwerking ") == ["Eik massief", "Natuurlijke olie-afwerking"]
    assert split_materials("") == []


# =============================================================================
# HTTP
# =============================================================================


@pytest.mark.django_db
class TestTranslateAllApi:
    url = "/api/admin/projects/translate-all"

    def test_requires_admin(self, user_client):
        res = user_client.post(self.url, {"projectIds": [1]}, content_type="application/json")
        assert res.status_code == 403

    def test_empty_ids(self, staff_client, languages, provider_factory, use_provider):
        provider = use_provider(provider_factory())
        res = staff_client.post(self.url, {"projectIds": []}, content_type="application/json")
        assert res.status_code == 400
        assert res.json() == {"detail": "Invalid project IDs"}
        assert provider.calls == []

    def test_not_configured(self, staff_client, languages):
        res = staff_client.post(self.url, {"projectIds": [1]}, content_type="application/json")
        assert res.status_code == 400

    def test_summary(self, staff_client, make_project, furniture, provider_factory, use_provider):
        use_provider(provider_factory())
        a = make_project()
        b = make_project()
        orphan = Project.objects.create(content_type=furniture)

        res = staff_client.post(self.url, {"projectIds": [a.id, b.id, orphan.id]}, content_type="application/json")

        assert res.status_code == 200
        assert res.json() == {
            "success": True,
            "results": {
                "total": 3,
                "success": 2,
                "failed": 1,
                "errors": [f"Project {orphan.id} has no default language translation"],
            },
        }


# =============================================================================
# Management command
# =============================================================================


@pytest.mark.django_db
class TestTranslateProjectsCommand:
    def test_translates_published_projects(self, make_project, provider_factory, use_provider):
        use_provider(provider_factory())
        live = make_project(title="Live")
        draft = make_project(title="Draft")
        Project.objects.filter(id=live.id).update(published=True)
        out = StringIO()

        call_command("translate_projects", "--published-only", stdout=out)

        assert "1 ok, 0 failed of 1" in out.getvalue()
        assert _row(live, "fr").title == "[fr] Live"
        assert not ProjectTranslation.objects.filter(project=draft, language__code="fr").exists()

    def test_setup_errors_abort(self, languages):
        with pytest.raises(CommandError, match="not configured"):
            call_command("translate_projects", "1")
