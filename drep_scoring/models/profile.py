"""
DRep profile metadata — the declared identity and intent fields.

On chain, DRep metadata is a CIP-119 JSON-LD document whose shape varies
between wallets and tooling.  ``ProfileMetadata`` is the typed, optional-field
form the scorer works on: every field may be ``None`` and absence is a
normal state, not an error.

``ProfileMetadata.from_raw()`` converts the raw document:
  - ``givenName`` or ``name``               → ``name``
  - ``bio`` or ``description``              → ``bio``
  - ``paymentAddress``                      → ``payment_address``
  - ``references`` (list of {uri, label})   → ``references``
  - JSON-LD ``{"@value": "..."}`` wrappers are unwrapped
  - an enclosing ``body`` object is looked through
"""

from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict


class SocialReference(BaseModel):
    """A link declared in the profile (social account, website, ...)."""

    model_config = ConfigDict(frozen=True)

    uri: str = ""
    label: Optional[str] = None


class ProfileMetadata(BaseModel):
    """Typed DRep profile; every field optional.

    Attributes:
        name: Display name (``givenName`` in CIP-119).
        bio: Short biography / description.
        objectives: What the DRep intends to achieve.
        motivations: Why the DRep is standing.
        qualifications: Relevant experience.
        payment_address: Address for DRep compensation.
        references: Declared links, in declaration order.
        email: Contact address (declared, not scored).
    """

    model_config = ConfigDict(frozen=True)

    name: Optional[str] = None
    bio: Optional[str] = None
    objectives: Optional[str] = None
    motivations: Optional[str] = None
    qualifications: Optional[str] = None
    payment_address: Optional[str] = None
    references: tuple[SocialReference, ...] = ()
    email: Optional[str] = None

    @classmethod
    def from_raw(cls, raw: Optional[dict[str, Any]]) -> "ProfileMetadata":
        """Build a profile from a raw CIP-119 metadata dict (or ``None``)."""
        if not raw:
            return cls()
        body = raw.get("body") if isinstance(raw.get("body"), dict) else raw

        def text(*keys: str) -> Optional[str]:
            for key in keys:
                value = _unwrap(body.get(key))
                if isinstance(value, str) and value.strip():
                    return value.strip()
            return None

        references: list[SocialReference] = []
        raw_refs = _unwrap(body.get("references"))
        if isinstance(raw_refs, list):
            for ref in raw_refs:
                if isinstance(ref, dict):
                    uri = _unwrap(ref.get("uri"))
                    label = _unwrap(ref.get("label"))
                    references.append(
                        SocialReference(
                            uri=uri.strip() if isinstance(uri, str) else "",
                            label=label if isinstance(label, str) else None,
                        )
                    )
                elif isinstance(ref, str):
                    references.append(SocialReference(uri=ref.strip()))

        return cls(
            name=text("givenName", "name"),
            bio=text("bio", "description"),
            objectives=text("objectives"),
            motivations=text("motivations"),
            qualifications=text("qualifications"),
            payment_address=text("paymentAddress", "payment_address"),
            references=tuple(references),
            email=text("email"),
        )


def _unwrap(value: Any) -> Any:
    """Strip a JSON-LD ``{"@value": ...}`` wrapper if present."""
    if isinstance(value, dict) and "@value" in value:
        return value["@value"]
    return value
