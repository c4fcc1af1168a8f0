"""
Unit tests for the import resolver.

Tests alias assignment, collision handling, literal import merging and
the final import block.
"""

import logging

import pytest

from idlgen.codegen.importer import BLANK_ALIAS, ImportOrigin, Importer


class TestRequest:
    """Test programmatic import requests."""

    def test_default_alias(self, importer):
        assert importer.request("fmt") == "fmt"
        assert importer.request("encoding/json") == "json"

    def test_request_is_idempotent(self, importer):
        """Requesting the same path again returns the same alias."""
        first = importer.request("example.com/a/util")
        importer.request("example.com/b/util")
        assert importer.request("example.com/a/util") == first
        assert len(importer) == 2

    def test_colliding_paths_get_suffixes(self, importer):
        """Paths sharing a last segment are suffixed in request order."""
        assert importer.request("a/util") == "util"
        assert importer.request("b/util") == "util2"
        assert importer.request("c/util") == "util3"

    def test_request_order_decides_suffix(self, importer):
        assert importer.request("b/util") == "util"
        assert importer.request("a/util") == "util2"

    def test_aliases_are_unique(self, importer):
        paths = [
            "a/util", "b/util", "c/util", "util", "x/util2", "fmt", "other/fmt",
            "github.com/x/util/v2", "gopkg.in/util.v3",
        ]
        aliases = [importer.request(path) for path in paths]
        assert len(set(aliases)) == len(paths)

    def test_keyword_segment_is_suffixed(self, importer):
        assert importer.request("example.com/type") == "type2"

    def test_versioned_paths(self, importer):
        assert importer.request("github.com/x/foo/v2") == "foo"
        assert importer.request("gopkg.in/yaml.v2") == "yaml"

    @pytest.mark.parametrize("path", ["", "has space", 'quo"te', "back\\slash"])
    def test_invalid_path_rejected(self, importer, path):
        with pytest.raises(ValueError):
            importer.request(path)
        assert len(importer) == 0

    def test_non_string_path_rejected(self, importer):
        with pytest.raises(TypeError):
            importer.request(None)

    def test_collision_is_logged(self, importer, log_records):
        importer.request("a/util")
        importer.request("b/util")

        messages = log_records.messages(logging.DEBUG)
        assert any("'util'" in message and "'util2'" in message for message in messages)


class TestMergeLiteral:
    """Test merging of imports written literally in rendered code."""

    def test_new_path_claims_default_name(self, importer):
        assert importer.merge_literal("fmt") == "fmt"
        assert importer.bindings["fmt"].origin is ImportOrigin.LITERAL

    def test_existing_path_keeps_alias(self, importer):
        importer.request("a/util")
        importer.request("b/util")
        assert importer.merge_literal("b/util") == "util2"
        assert importer.merge_literal("b/util", "other") == "util2"

    def test_explicit_alias_is_kept(self, importer):
        assert importer.merge_literal("example.com/thrift/protocol", "proto") == "proto"
        assert importer.alias_for("example.com/thrift/protocol") == "proto"

    def test_taken_alias_is_suffixed(self, importer):
        importer.request("a/util")
        assert importer.merge_literal("b/util") == "util2"
        assert importer.merge_literal("c/helpers", "util") == "util3"

    def test_blank_import_claims_no_name(self, importer):
        assert importer.merge_literal("a/util", BLANK_ALIAS) == BLANK_ALIAS
        assert "util" not in importer.aliases
        assert importer.request("b/util") == "util"

    def test_request_upgrades_blank_import(self, importer):
        importer.merge_literal("a/util", BLANK_ALIAS)
        assert importer.request("a/util") == "util"
        assert importer.alias_for("a/util") == "util"
        assert len(importer) == 1

    def test_blank_import_of_bound_path_is_noop(self, importer):
        importer.request("a/util")
        assert importer.merge_literal("a/util", BLANK_ALIAS) == "util"


class TestImporterState:
    """Test copies, lookups and the final import block."""

    def test_copy_is_independent(self, importer):
        importer.request("fmt")
        staged = importer.copy()
        staged.request("strings")

        assert "strings" in staged
        assert "strings" not in importer
        assert staged.alias_for("fmt") == "fmt"

    def test_accessors_return_copies(self, importer):
        importer.request("fmt")
        importer.bindings.clear()
        importer.aliases.clear()
        assert importer.alias_for("fmt") == "fmt"
        assert importer.aliases == {"fmt": "fmt"}

    def test_alias_for_unknown_path(self, importer):
        assert importer.alias_for("fmt") is None

    def test_empty_final_block(self, importer):
        assert importer.final_block() is None

    def test_final_block_sorted_by_path(self, importer):
        importer.request("b/util")
        importer.request("a/util")
        importer.request("fmt")

        block = importer.final_block()
        assert [spec.path for spec in block.specs] == ["a/util", "b/util", "fmt"]
        assert [spec.alias for spec in block.specs] == ["util2", "util", "fmt"]
