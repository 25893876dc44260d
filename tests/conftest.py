"""Shared fixtures: staff/anonymous clients, a three-language registry, fake providers."""

from __future__ import annotations

import pytest
from django.core.cache import cache
from django.test import Client

from accounts.jwt_utils import issue_access_token
from languages.provider import TranslationProviderError
from languages.services import create_language


# =============================================================================
# Environment
# =============================================================================


@pytest.fixture(autouse=True)
def _clean_cache():
    # The language registry lives in the cache; test transactions roll back
    # without firing delete signals.
    cache.clear()
    yield
    cache.clear()


# =============================================================================
# Users and clients
# =============================================================================


@pytest.fixture
def staff_user(db, django_user_model):
    return django_user_model.objects.create_user(email="admin@example.com", password="secret123", is_staff=True)


@pytest.fixture
def regular_user(db, django_user_model):
    return django_user_model.objects.create_user(email="visitor@example.com", password="secret123")


def _bearer_client(user) -> Client:
    return Client(HTTP_AUTHORIZATION=f"Bearer {issue_access_token(user_id=user.id)}")


@pytest.fixture
def staff_client(staff_user):
    return _bearer_client(staff_user)


@pytest.fixture
def user_client(regular_user):
    return _bearer_client(regular_user)


@pytest.fixture
def anon_client(db):
    return Client()


# =============================================================================
# Languages
# =============================================================================


@pytest.fixture
def languages(db):
    """nl (default), fr and en, all active."""
    return {
        "nl": create_language(code="nl", name="Nederlands"),
        "fr": create_language(code="fr", name="Français"),
        "en": create_language(code="en", name="English"),
    }


# =============================================================================
# Translation providers
# =============================================================================


class FakeProvider:
    """Records calls; answers `[code] text` unless a canned response is given."""

    def __init__(self, responses: dict | None = None, fail_on: set[str] | None = None, configured: bool = True):
        self.responses = responses or {}
        self.fail_on = fail_on or set()
        self.configured = configured
        self.calls: list[tuple[str, str, list[str]]] = []

    def is_configured(self) -> bool:
        return self.configured

    def translate_text(self, text: str, source_lang: str, target_langs: list[str]) -> dict[str, str]:
        self.calls.append((text, source_lang, list(target_langs)))
        if text in self.fail_on:
            raise TranslationProviderError(f"cannot translate {text!r}")
        return {code: self.responses.get((text, code), f"[{code}] {text}") for code in target_langs}


@pytest.fixture
def fake_provider():
    return FakeProvider()


@pytest.fixture
def use_provider(monkeypatch):
    """Route every provider lookup to the given fake."""

    def _use(provider):
        monkeypatch.setattr("languages.services.get_translation_provider", lambda: provider)
        monkeypatch.setattr("projects.bulk_translate.get_translation_provider", lambda: provider)
        return provider

    return _use


@pytest.fixture
def provider_factory():
    return FakeProvider
