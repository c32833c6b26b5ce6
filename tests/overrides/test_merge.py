"""Tests for the node-level merge of override documents."""

import logging as _logging
import textwrap as _textwrap

import pytest as _pytest
import yaml as _yaml

import magic_ansible.overrides as overrides


def _doc(text: str) -> overrides.Document:
    return overrides.compose(_textwrap.dedent(text))


def _merged(base: str, override: str) -> object:
    """Merge two YAML texts and load the result as plain data."""
    document = _doc(base)
    overrides.merge_nodes(document, _doc(override))
    return _yaml.safe_load(overrides.serialize(document))


class TestScalarMerge:
    """Scalars in the override replace whatever the base holds."""

    def test_override_scalar_wins(self) -> None:
        """A scalar override replaces the base scalar value."""
        assert _merged("a: 1\n", "a: 2\n") == {"a": 2}

    def test_override_scalar_replaces_mapping(self) -> None:
        """A scalar override replaces a base mapping in its slot."""
        assert _merged("a:\n  b: 1\n", "a: gone\n") == {"a": "gone"}

    def test_override_scalar_keeps_its_type(self) -> None:
        """The override tag travels with the value."""
        assert _merged("a: text\n", "a: 5\n") == {"a": 5}

    def test_merge_returns_replacement_node(self) -> None:
        """merge_nodes hands back the override node on a shape change."""
        base = _yaml.compose("{b: 1}")
        override = _yaml.compose("x")
        assert overrides.merge_nodes(base, override) is override

    def test_mapping_onto_scalar_is_ignored(self) -> None:
        """A mapping cannot be merged into a scalar; the base stays."""
        assert _merged("a: 1\n", "a:\n  b: 2\n") == {"a": 1}

    def test_none_inputs_are_noops(self) -> None:
        """Missing nodes leave the base untouched."""
        base = _yaml.compose("a: 1")
        assert overrides.merge_nodes(base, None) is base
        assert overrides.merge_nodes(None, base) is None


class TestMappingMerge:
    """Key-wise merge of mappings."""

    def test_empty_override_is_idempotent(self) -> None:
        """Merging an empty mapping changes nothing."""
        base = "name: Instance\nproperties:\n  - name: a\n    type: String\n"
        assert _merged(base, "{}\n") == _yaml.safe_load(base)

    def test_new_keys_are_appended_in_order(self) -> None:
        """Unknown keys are added after existing ones, in override order."""
        document = _doc("a: 1\nb: 2\n")
        overrides.merge_nodes(document, _doc("z: 3\nc: 4\n"))
        assert list(_yaml.safe_load(overrides.serialize(document))) == ["a", "b", "z", "c"]

    def test_existing_keys_keep_their_position(self) -> None:
        """Overriding a key does not move it."""
        document = _doc("a: 1\nb: 2\nc: 3\n")
        overrides.merge_nodes(document, _doc("b: 20\n"))
        assert overrides.serialize(document) == "a: 1\nb: 20\nc: 3\n"

    def test_keys_are_never_removed(self) -> None:
        """Keys absent from the override survive."""
        assert _merged("a: 1\nb: 2\n", "a: 10\n") == {"a": 10, "b": 2}

    def test_nested_mappings_merge_recursively(self) -> None:
        """Merges descend into nested mappings."""
        base = """
            timeouts:
              insert_minutes: 20
              delete_minutes: 20
        """
        override = """
            timeouts:
              insert_minutes: 40
        """
        assert _merged(base, override) == {"timeouts": {"insert_minutes": 40, "delete_minutes": 20}}

    def test_empty_base_document_is_not_replaced(self) -> None:
        """A document without a root stays empty."""
        document = overrides.Document()
        overrides.merge_nodes(document, _doc("a: 1\n"))
        assert document.root is None


class TestSequenceMerge:
    """Scalar lists are replaced, lists of mappings are merged by identity."""

    def test_scalar_list_is_replaced(self) -> None:
        """A scalar override list replaces the base list wholesale."""
        assert _merged("a: [1, 2, 3]\n", "a: [4]\n") == {"a": [4]}

    def test_empty_override_list_clears_base(self) -> None:
        """An empty override list empties the base list."""
        assert _merged("a: [1, 2]\n", "a: []\n") == {"a": []}

    def test_keyed_item_is_merged(self) -> None:
        """An override item with a matching name is merged into the base item."""
        base = """
            properties:
              - name: a
                type: String
                required: true
              - name: b
                type: Integer
        """
        override = """
            properties:
              - name: a
                description: Patched.
        """
        assert _merged(base, override) == {
            "properties": [
                {"name": "a", "type": "String", "required": True, "description": "Patched."},
                {"name": "b", "type": "Integer"},
            ]
        }

    def test_unmatched_item_is_appended(self) -> None:
        """An override item whose identity matches nothing is appended."""
        result = _merged("items:\n  - name: a\n", "items:\n  - name: b\n    x: 1\n")
        assert result == {"items": [{"name": "a"}, {"name": "b", "x": 1}]}

    def test_item_without_identity_is_appended(self) -> None:
        """Override mappings with neither name nor id are appended."""
        result = _merged("items:\n  - name: a\n", "items:\n  - x: 1\n")
        assert result == {"items": [{"name": "a"}, {"x": 1}]}

    def test_id_is_used_when_name_is_missing(self) -> None:
        """Items can be matched on id."""
        result = _merged(
            "items:\n  - id: one\n    v: 1\n  - id: two\n    v: 2\n",
            "items:\n  - id: two\n    v: 20\n",
        )
        assert result == {"items": [{"id": "one", "v": 1}, {"id": "two", "v": 20}]}

    def test_name_takes_priority_over_id(self) -> None:
        """Identity uses name before id, whatever the key order."""
        result = _merged(
            "items:\n  - id: x\n    name: a\n",
            "items:\n  - id: y\n    name: a\n    v: 1\n",
        )
        assert result == {"items": [{"id": "y", "name": "a", "v": 1}]}

    def test_non_mapping_override_items_are_skipped(self) -> None:
        """Scalars mixed into a keyed override list are ignored."""
        result = _merged("items:\n  - name: a\n", "items:\n  - stray\n  - name: b\n")
        assert result == {"items": [{"name": "a"}, {"name": "b"}]}

    def test_only_first_base_match_is_merged(self) -> None:
        """Duplicate identities in the base: the first one wins."""
        result = _merged(
            "items:\n  - name: a\n    v: 1\n  - name: a\n    v: 2\n",
            "items:\n  - name: a\n    v: 9\n",
        )
        assert result == {"items": [{"name": "a", "v": 9}, {"name": "a", "v": 2}]}

    def test_nested_lists_merge_recursively(self) -> None:
        """Keyed merges apply inside merged items too."""
        base = """
            properties:
              - name: config
                properties:
                  - name: inner
                    type: String
        """
        override = """
            properties:
              - name: config
                properties:
                  - name: inner
                    required: true
        """
        assert _merged(base, override) == {
            "properties": [
                {
                    "name": "config",
                    "properties": [{"name": "inner", "type": "String", "required": True}],
                }
            ]
        }


class TestDropMarker:
    """Override items with _drop remove their base counterpart."""

    def test_drop_removes_matching_item(self) -> None:
        """_drop: true removes the matched base item."""
        result = _merged(
            "items:\n  - name: a\n  - name: b\n",
            "items:\n  - name: a\n    _drop: true\n",
        )
        assert result == {"items": [{"name": "b"}]}

    def test_drop_accepts_quoted_true(self) -> None:
        """The marker compares scalar text, so a quoted "true" also drops."""
        result = _merged(
            "items:\n  - name: a\n  - name: b\n",
            "items:\n  - name: b\n    _drop: 'true'\n",
        )
        assert result == {"items": [{"name": "a"}]}

    def test_drop_false_merges_instead(self) -> None:
        """_drop: false is merged like any other field."""
        result = _merged("items:\n  - name: a\n", "items:\n  - name: a\n    _drop: false\n")
        assert result == {"items": [{"name": "a", "_drop": False}]}

    def test_drop_is_case_sensitive(self) -> None:
        """Only the exact text "true" activates the marker."""
        result = _merged("items:\n  - name: a\n", "items:\n  - name: a\n    _drop: 'True'\n")
        assert result == {"items": [{"name": "a", "_drop": "True"}]}

    def test_drop_without_match_is_appended(self) -> None:
        """A drop marker that matches nothing is appended as-is."""
        result = _merged("items:\n  - name: a\n", "items:\n  - name: z\n    _drop: true\n")
        assert result == {"items": [{"name": "a"}, {"name": "z", "_drop": True}]}

    def test_drop_without_match_is_logged(self, caplog: _pytest.LogCaptureFixture) -> None:
        """An unmatched drop marker is reported with its identity."""
        caplog.set_level(_logging.WARNING, logger="magic_ansible")
        _merged("items:\n  - name: a\n", "items:\n  - name: z\n    _drop: true\n")
        assert "nothing to drop for name=z" in caplog.text

    def test_unmatched_item_without_drop_is_not_logged(
        self, caplog: _pytest.LogCaptureFixture
    ) -> None:
        caplog.set_level(_logging.WARNING, logger="magic_ansible")
        _merged("items:\n  - name: a\n", "items:\n  - name: z\n")
        assert caplog.text == ""


class TestIdentityHelpers:
    """Tests for find_identity and should_drop."""

    def test_find_identity_prefers_name(self) -> None:
        """name is returned when both keys are present."""
        node = _yaml.compose("{id: 1, name: a}")
        assert overrides.find_identity(node) == overrides.IdentityKey("name", "a")

    def test_find_identity_skips_non_scalar_values(self) -> None:
        """A non-scalar name does not identify the item."""
        node = _yaml.compose("{name: [a], id: b}")
        assert overrides.find_identity(node) == overrides.IdentityKey("id", "b")

    def test_find_identity_none_for_scalars(self) -> None:
        """Only mappings have identities."""
        assert overrides.find_identity(_yaml.compose("a")) is None

    def test_should_drop(self) -> None:
        """should_drop only fires on the exact marker."""
        assert overrides.should_drop(_yaml.compose("{name: a, _drop: true}"))
        assert not overrides.should_drop(_yaml.compose("{name: a, _drop: yes}"))
        assert not overrides.should_drop(_yaml.compose("{name: a}"))
