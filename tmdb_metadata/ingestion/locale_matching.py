"""Locale comparison between a requested metadata language and an image's language tag."""

from __future__ import annotations

from enum import IntEnum


class LocaleMatch(IntEnum):
    """Match quality; higher sorts first."""

    OTHER = 0
    NEUTRAL = 1
    EXACT = 2


def normalize_language(language: str | None) -> str:
    """
    Canonicalize a locale tag: `pt-br` -> `pt-BR`, ` FR ` -> `fr`.

    Anything that is not a plain `ll` or `ll-RR` tag is returned trimmed but otherwise untouched.
    """

    text = (language or "").strip()
    if not text:
        return ""
    parts = text.replace("_", "-").split("-")
    if len(parts) == 1 and len(parts[0]) == 2:
        return parts[0].lower()
    if len(parts) == 2 and len(parts[0]) == 2 and len(parts[1]) == 2:
        return f"{parts[0].lower()}-{parts[1].upper()}"
    return text


def adjust_image_language(image_language: str | None, requested_language: str | None) -> str | None:
    """
    Promote a bare two-letter image tag to the requested regional locale.

    TMDb tags images with ISO 639-1 codes only, so `fr` must count as a match for a
    `fr-FR` request. Empty tags stay None.
    """

    image_tag = (image_language or "").strip()
    if not image_tag:
        return None
    requested = normalize_language(requested_language)
    if len(requested) > 2 and len(image_tag) == 2 and requested.lower().startswith(image_tag.lower()):
        return requested
    return image_tag


def classify_locale(locale_tag: str | None, preferred_locale: str | None) -> LocaleMatch:
    tag = (locale_tag or "").strip()
    if not tag:
        return LocaleMatch.NEUTRAL
    preferred = (preferred_locale or "").strip()
    if preferred and tag.casefold() == preferred.casefold():
        return LocaleMatch.EXACT
    return LocaleMatch.OTHER


def image_languages_param(preferred_locale: str | None) -> str:
    """
    Build TMDb's `include_image_language` value: requested locale, its language
    prefix, textless images, then English as a fallback.
    """

    languages: list[str] = []
    preferred = normalize_language(preferred_locale)
    if preferred:
        languages.append(preferred)
        if len(preferred) == 5:
            languages.append(preferred[:2])
    languages.append("null")
    if "en" not in languages:
        languages.append("en")
    return ",".join(dict.fromkeys(languages))
