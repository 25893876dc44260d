from __future__ import annotations

import logging
from dataclasses import dataclass

import requests
from django.conf import settings

logger = logging.getLogger(__name__)


class TranslationProviderError(RuntimeError):
    pass


@dataclass(frozen=True)
class DeepLConfig:
    api_key: str
    base_url: str
    timeout: int = 20


# DeepL rejects bare "EN"/"PT" as target languages.
_DEEPL_TARGET_ALIASES = {
    "en": "EN-GB",
    "pt": "PT-PT",
}


def _deepl_target(code: str) -> str:
    c = (code or "").strip().lower()
    return _DEEPL_TARGET_ALIASES.get(c, c.upper())


def _get_cfg() -> DeepLConfig:
    return DeepLConfig(
        api_key=str(getattr(settings, "DEEPL_API_KEY", "") or "").strip(),
        base_url=str(getattr(settings, "DEEPL_API_URL", "https://api-free.deepl.com") or "").rstrip("/"),
        timeout=int(getattr(settings, "TRANSLATION_TIMEOUT_SECONDS", 20) or 20),
    )


class DeepLTranslator:
    def __init__(self, cfg: DeepLConfig | None = None) -> None:
        self.cfg = cfg or _get_cfg()

    def is_configured(self) -> bool:
        return bool(self.cfg.api_key and self.cfg.base_url)

    def _headers(self) -> dict[str, str]:
        return {
            "Accept": "application/json",
            "Authorization": f"DeepL-Auth-Key {self.cfg.api_key}",
        }

    def _translate_one(self, *, text: str, source_lang: str, target_lang: str) -> str:
        url = f"{self.cfg.base_url}/v2/translate"
        data = {
            "text": text,
            "source_lang": (source_lang or "").strip().upper(),
            "target_lang": _deepl_target(target_lang),
            "preserve_formatting": "1",
        }
        try:
            r = requests.post(url, data=data, headers=self._headers(), timeout=self.cfg.timeout)
        except requests.RequestException as exc:
            raise TranslationProviderError(f"DeepL request failed: {exc}") from exc

        if r.status_code == 456:
            raise TranslationProviderError("DeepL quota exceeded")
        if r.status_code >= 400:
            raise TranslationProviderError(f"DeepL translate failed: {r.status_code} {r.text[:300]}")

        try:
            payload = r.json()
            return str(payload["translations"][0]["text"])
        except (ValueError, KeyError, IndexError, TypeError) as exc:
            raise TranslationProviderError("DeepL translate: unexpected response") from exc

    def translate_text(self, text: str, source_lang: str, target_langs: list[str]) -> dict[str, str]:
        """Translate `text` into every target language; returns `{code: text}`.

        Raises `TranslationProviderError` on network/quota/response failures.
        """
        if not self.is_configured():
            raise TranslationProviderError("Translation provider is not configured")

        out: dict[str, str] = {}
        for target in target_langs:
            code = (target or "").strip().lower()
            if not code or code == (source_lang or "").strip().lower():
                continue
            out[code] = self._translate_one(text=text, source_lang=source_lang, target_lang=code)
        return out


class DisabledTranslator:
    def is_configured(self) -> bool:
        return False

    def translate_text(self, text: str, source_lang: str, target_langs: list[str]) -> dict[str, str]:
        raise TranslationProviderError("Translation provider is not configured")


def get_translation_provider():
    name = (getattr(settings, "TRANSLATION_PROVIDER", "deepl") or "").strip().lower()
    if name == "deepl":
        return DeepLTranslator()
    if name not in {"", "none"}:
        logger.warning("Unknown TRANSLATION_PROVIDER %r, translations disabled", name)
    return DisabledTranslator()


def pacing_seconds() -> float:
    """Delay between consecutive provider calls, from TRANSLATION_PACING_MS."""
    return max(0, int(getattr(settings, "TRANSLATION_PACING_MS", 250) or 0)) / 1000.0
