"""
Tests for drep_scoring/models/profile.py.

What we test
------------
ProfileMetadata:
  - Every field is optional; an empty profile is valid.
from_raw():
  - None / empty dict give an empty profile.
  - CIP-119 ``givenName`` maps to ``name``; ``description`` falls back for ``bio``.
  - JSON-LD ``{"@value": ...}`` wrappers are unwrapped.
  - A ``body`` envelope is looked through.
  - References accept dicts and bare strings; blank text fields become None.
"""

from __future__ import annotations

from drep_scoring.models.profile import ProfileMetadata, SocialReference


class TestProfileMetadata:
    def test_empty_profile_is_valid(self):
        p = ProfileMetadata()
        assert p.name is None
        assert p.references == ()

    def test_references_are_tuple(self):
        p = ProfileMetadata(references=[SocialReference(uri="https://x.com/a")])
        assert isinstance(p.references, tuple)


class TestFromRaw:
    def test_none_gives_empty_profile(self):
        assert ProfileMetadata.from_raw(None) == ProfileMetadata()

    def test_empty_dict_gives_empty_profile(self):
        assert ProfileMetadata.from_raw({}) == ProfileMetadata()

    def test_cip119_field_names(self):
        p = ProfileMetadata.from_raw({
            "givenName": "Alice",
            "objectives": "Transparency",
            "paymentAddress": "addr1xyz",
        })
        assert p.name == "Alice"
        assert p.objectives == "Transparency"
        assert p.payment_address == "addr1xyz"

    def test_description_falls_back_for_bio(self):
        assert ProfileMetadata.from_raw({"description": "About me"}).bio == "About me"

    def test_bio_wins_over_description(self):
        p = ProfileMetadata.from_raw({"bio": "Bio", "description": "Desc"})
        assert p.bio == "Bio"

    def test_jsonld_value_unwrapped(self):
        p = ProfileMetadata.from_raw({"givenName": {"@value": "Alice"}})
        assert p.name == "Alice"

    def test_body_envelope(self):
        raw = {"@context": {}, "body": {"givenName": "Bob", "motivations": "Care"}}
        p = ProfileMetadata.from_raw(raw)
        assert p.name == "Bob"
        assert p.motivations == "Care"

    def test_blank_text_is_none(self):
        assert ProfileMetadata.from_raw({"givenName": "   "}).name is None

    def test_text_is_stripped(self):
        assert ProfileMetadata.from_raw({"givenName": "  Carol "}).name == "Carol"

    def test_references_dicts_and_strings(self):
        p = ProfileMetadata.from_raw({
            "references": [
                {"@type": "Link", "label": {"@value": "X"}, "uri": {"@value": "https://x.com/a"}},
                "https://example.io",
                42,
            ]
        })
        assert p.references == (
            SocialReference(uri="https://x.com/a", label="X"),
            SocialReference(uri="https://example.io"),
        )

    def test_non_string_field_ignored(self):
        assert ProfileMetadata.from_raw({"givenName": 123}).name is None
