"""
Unit tests for the website content document model.
"""
from simplebiz.content.document import (
    DEFAULT_CONTENT,
    LEAD_FORM_FIELDS,
    default_content,
    materialize,
    validate_content,
)


class TestDefaultContent:
    """Test the default document shape."""

    def test_default_values(self):
        content = default_content()

        assert content["businessName"] == ""
        assert content["services"] == [""]
        assert content["leadForm"]["enabled"] is True
        assert all(content["leadForm"]["fields"][f] for f in LEAD_FORM_FIELDS)
        assert content["theme"]["primaryColor"] == "#2563eb"
        assert content["theme"]["overlayOpacity"] == 80

    def test_default_copies_are_independent(self):
        first = default_content()
        first["theme"]["primaryColor"] = "#000000"
        first["services"].append("Extra")

        assert default_content()["theme"]["primaryColor"] == "#2563eb"
        assert DEFAULT_CONTENT["services"] == [""]


class TestMaterialize:
    """Test read-repair of stored documents."""

    def test_empty_document_gets_defaults(self):
        assert materialize({}) == DEFAULT_CONTENT

    def test_non_mapping_gets_defaults(self):
        assert materialize(None) == DEFAULT_CONTENT
        assert materialize([1, 2]) == DEFAULT_CONTENT
        assert materialize("legacy") == DEFAULT_CONTENT

    def test_stored_values_win(self, acme_document):
        content = materialize(acme_document)

        assert content["businessName"] == "Acme"
        assert content["services"] == ["Plumbing"]
        assert content["theme"]["primaryColor"] == "#111111"
        assert content["theme"]["overlayOpacity"] == 0

    def test_missing_nested_keys_filled(self, acme_document):
        content = materialize(acme_document)

        assert content["theme"]["secondaryColor"] == "#1e40af"
        assert content["theme"]["fontFamily"] == "Inter"
        assert content["contactInfo"] == {"phone": "", "email": "", "address": ""}
        assert set(content["leadForm"]["fields"]) == set(LEAD_FORM_FIELDS)

    def test_every_default_key_present(self, acme_document):
        content = materialize(acme_document)

        for key, value in DEFAULT_CONTENT.items():
            assert key in content
            if isinstance(value, dict):
                assert set(value) <= set(content[key])

    def test_wrong_types_pass_through(self):
        content = materialize({"theme": "dark", "services": "Plumbing", "leadForm": {"enabled": "yes"}})

        assert content["theme"] == "dark"
        assert content["services"] == "Plumbing"
        assert content["leadForm"]["enabled"] == "yes"
        assert content["leadForm"]["fields"]["email"] is True

    def test_unknown_keys_kept(self):
        content = materialize({"gallery": ["a.png"], "theme": {"accent": "#fff"}})

        assert content["gallery"] == ["a.png"]
        assert content["theme"]["accent"] == "#fff"
        assert content["theme"]["primaryColor"] == "#2563eb"

    def test_input_not_mutated(self, acme_document):
        snapshot = {"theme": dict(acme_document["theme"]), "services": list(acme_document["services"])}
        content = materialize(acme_document)
        content["services"].append("Gas")
        content["theme"]["fontFamily"] = "Lato"

        assert acme_document["services"] == snapshot["services"]
        assert acme_document["theme"] == snapshot["theme"]


class TestValidateContent:
    """Test advisory content checks."""

    def test_defaults_are_valid(self):
        assert validate_content(default_content()) == []

    def test_bad_colour(self):
        content = materialize({"theme": {"primaryColor": "blue"}})

        warnings = validate_content(content)

        assert len(warnings) == 1
        assert "primaryColor" in warnings[0]

    def test_short_hex_is_valid(self):
        content = materialize({"theme": {"secondaryColor": "#abc"}})

        assert validate_content(content) == []

    def test_opacity_out_of_range(self):
        assert validate_content(materialize({"theme": {"overlayOpacity": 101}}))
        assert validate_content(materialize({"theme": {"overlayOpacity": -1}}))
        assert validate_content(materialize({"theme": {"overlayOpacity": 100}})) == []

    def test_opacity_not_integer(self):
        assert validate_content(materialize({"theme": {"overlayOpacity": "80"}}))
        assert validate_content(materialize({"theme": {"overlayOpacity": True}}))

    def test_non_mapping_theme_ignored(self):
        assert validate_content({"theme": "dark"}) == []
