from __future__ import annotations

from django.conf import settings
from django.utils import translation

from languages.registry import get_default_language_code, get_registry


def get_supported_language_codes() -> list[str]:
    codes = get_registry().active_codes
    if codes:
        return codes

    # Empty registry (fresh install): fall back to settings.
    out: list[str] = []
    for c in getattr(settings, "SUPPORTED_LANGUAGE_CODES", None) or []:
        c = normalize_language_code(c)
        if c and c not in out:
            out.append(c)
    if not out:
        default = normalize_language_code(getattr(settings, "LANGUAGE_CODE", ""))
        if default:
            out = [default]
    return out


def normalize_language_code(language_code: str | None) -> str:
    if not language_code:
        return ""
    return (language_code or "").split("-")[0].strip().lower()


def get_request_language_code(
    request,
    *,
    query_param: str | None = None,
) -> str:
    query_param = query_param or getattr(settings, "LANGUAGE_QUERY_PARAM", "lang")
    supported = get_supported_language_codes()

    if len(supported) > 1 and query_param:
        qp = normalize_language_code(request.GET.get(query_param))
        if qp and qp in supported:
            return qp

    if len(supported) > 1:
        hdr = normalize_language_code(translation.get_language_from_request(request, check_path=False))
        if hdr and hdr in supported:
            return hdr

    return get_default_language_code() or (supported[0] if supported else "")


def translation_fallback_chain(language_code: str | None) -> list[str]:
    """Requested language, then the registry default, then every other active language."""
    requested = normalize_language_code(language_code)
    default = get_default_language_code()
    supported = get_supported_language_codes()

    chain: list[str] = []
    if requested:
        chain.append(requested)
    if default:
        chain.append(default)
    chain.extend(supported)

    seen: set[str] = set()
    out: list[str] = []
    for c in chain:
        c = normalize_language_code(c)
        if not c or c in seen:
            continue
        out.append(c)
        seen.add(c)
    return out


def pick_best_translation(translations, language_code: str | None, *, code_of=None):
    """Pick the row whose language ranks first in the fallback chain.

    `code_of(row)` returns the row's language code; rows outside the chain
    rank last, so any translation beats none.
    """
    code_of = code_of or (lambda t: t.language.code)
    order_index = {lang: i for i, lang in enumerate(translation_fallback_chain(language_code))}
    best = None
    best_idx = 10_000
    for t in translations:
        idx = order_index.get(normalize_language_code(code_of(t)), 9_999)
        if idx < best_idx:
            best = t
            best_idx = idx
    return best
