"""
Profile Completeness pillar.

Checklist (``ScoringConfig.profile``, points sum to 100)::

    name              15
    bio               10
    objectives        15
    motivations       15
    qualifications    10
    payment_address   10
    social_reference  25   at least one valid reference URI

A text field is present when it is a non-blank string.  A reference URI is
valid when it is a well-formed http(s) URL (pydantic ``HttpUrl``), is not a
placeholder (``example.com``, ``localhost``, ``"n/a"`` ...) and is not in the
caller's ``broken_uris`` set.  Duplicate URIs count once.
"""

from __future__ import annotations

from typing import AbstractSet, Optional

from pydantic import HttpUrl, TypeAdapter, ValidationError

from drep_scoring.config import DEFAULT_SCORING_CONFIG, ScoringConfig
from drep_scoring.models.profile import ProfileMetadata
from drep_scoring.models.score import ProfileBreakdown

SOCIAL_REFERENCE_FIELD = "social_reference"

FIELD_LABELS: dict[str, str] = {
    "name":             "display name",
    "bio":              "bio",
    "objectives":       "objectives",
    "motivations":      "motivations",
    "qualifications":   "qualifications",
    "payment_address":  "payment address",
    SOCIAL_REFERENCE_FIELD: "social or website link",
}

_PLACEHOLDER_VALUES = frozenset({"n/a", "na", "none", "null", "-", "tbd", "todo"})

_HTTP_URL = TypeAdapter(HttpUrl)


def _normalize_uri(uri: str) -> str:
    return uri.strip().rstrip("/")


def is_valid_reference(
    uri: str,
    config: ScoringConfig = DEFAULT_SCORING_CONFIG,
    broken_uris: AbstractSet[str] = frozenset(),
) -> bool:
    """Return ``True`` if ``uri`` is a usable, non-placeholder http(s) link."""
    candidate = uri.strip()
    if not candidate or candidate.lower() in _PLACEHOLDER_VALUES:
        return False
    if candidate in broken_uris or _normalize_uri(candidate) in broken_uris:
        return False
    try:
        url = _HTTP_URL.validate_python(candidate)
    except ValidationError:
        return False
    host = (url.host or "").lower()
    for domain in config.profile.placeholder_domains:
        if host == domain or host.endswith("." + domain):
            return False
    return True


def compute_profile(
    profile: Optional[ProfileMetadata],
    broken_uris: AbstractSet[str] = frozenset(),
    config: ScoringConfig = DEFAULT_SCORING_CONFIG,
) -> ProfileBreakdown:
    """Compute the Profile Completeness pillar.

    Args:
        profile:     Declared metadata, or ``None`` (scores 0).
        broken_uris: Reference URIs a link checker found dead.
        config:      Scoring configuration.

    Returns:
        ProfileBreakdown with the pillar value in ``score``.
    """
    points = config.profile.points()
    profile = profile or ProfileMetadata()
    normalized_broken = {_normalize_uri(u) for u in broken_uris}

    valid: list[str] = []
    invalid: list[str] = []
    seen: set[str] = set()
    for ref in profile.references:
        key = _normalize_uri(ref.uri)
        if key in seen:
            continue
        seen.add(key)
        if is_valid_reference(ref.uri, config, normalized_broken):
            valid.append(ref.uri.strip())
        elif key:
            invalid.append(ref.uri.strip())

    present: list[str] = []
    missing: list[str] = []
    for field in points:
        if field == SOCIAL_REFERENCE_FIELD:
            ok = bool(valid)
        else:
            value = getattr(profile, field)
            ok = isinstance(value, str) and bool(value.strip())
        (present if ok else missing).append(field)

    score = min(100, sum(points[field] for field in present))

    return ProfileBreakdown(
        present_fields=tuple(present),
        missing_fields=tuple(missing),
        valid_references=tuple(valid),
        invalid_references=tuple(invalid),
        score=score,
    )
