"""
Tests for flag files and flag arguments.

Validates that:
1. Mapping-form files load as FlagMap, list-form files as FlagList
2. Scalar values are turned into their cfg spelling
3. Malformed files fail with FlagSourceError naming the file
4. NAME / NAME=VALUE arguments parse and merge with file flags
"""

import pytest

from runtime_cfg.flags import (
    FlagSourceError,
    flags_from_data,
    load_flags_file,
    merge_flags,
    parse_flag_args,
)
from runtime_cfg.matching import FlagList, FlagMap
from runtime_cfg.parsing import parse_cfg, parse_predicate


@pytest.fixture
def write_yaml(tmp_path):
    """Write YAML text to a file in tmp_path and return its path."""
    def _write(text, name="flags.yml"):
        path = tmp_path / name
        path.write_text(text, encoding="utf-8")
        return path
    return _write


class TestFlagsFromData:
    """Test building flag sources from parsed YAML."""

    def test_mapping_form(self):
        """A mapping becomes a FlagMap."""
        flags = flags_from_data({"flags": {"unix": None, "target_os": "macos", "feature": ["std", "alloc"]}})
        assert isinstance(flags, FlagMap)
        assert flags.matches("unix", None)
        assert not flags.matches("unix", "x")
        assert flags.matches("target_os", "macos")
        assert flags.matches("feature", "alloc")

    def test_list_form(self):
        """A list becomes a FlagList with duplicates kept."""
        flags = flags_from_data({"flags": ["unix", {"feature": "std"}, {"feature": "alloc"}]})
        assert isinstance(flags, FlagList)
        assert len(flags) == 3
        assert flags.matches("feature", "std")
        assert flags.matches("feature", "alloc")

    def test_scalar_values(self):
        """Numbers and booleans are converted to their cfg spelling."""
        flags = flags_from_data({"flags": {"target_pointer_width": 32, "debug_assertions": True, "ratio": 0.5}})
        assert flags.matches("target_pointer_width", "32")
        assert flags.matches("debug_assertions", "true")
        assert flags.matches("ratio", "0.5")

    @pytest.mark.parametrize("value, spelling", [
        (1.0, "1"),
        (2.50, "2.5"),
        (1e3, "1000"),
        (1.5e-7, "0.00000015"),
    ])
    def test_floats_use_literal_spelling(self, value, spelling):
        """Floats are spelled the way float literals canonicalize."""
        flags = flags_from_data({"flags": {"version": value}})
        assert flags.matches("version", spelling)

    def test_float_flag_matches_float_literal(self):
        """version = 1.0 matches a file declaring version: 1.0."""
        flags = flags_from_data({"flags": {"version": 1.0}})
        assert parse_cfg("#[cfg(version = 1.0)]").matches(flags)
        assert parse_predicate("version = 1.0").matches(flags)

    def test_float_flag_from_yaml(self, write_yaml):
        """The same holds for floats read from YAML text."""
        flags = load_flags_file(write_yaml("flags:\n  version: 1.0\n  ratios: [0.5, 2.0]\n"))
        assert parse_predicate("all(version = 1.0, ratios = 2.0)").matches(flags)

    def test_empty_flags(self):
        """flags: with no value is an empty source."""
        flags = flags_from_data({"flags": None})
        assert not flags.matches("unix", None)

    @pytest.mark.parametrize("data, message", [
        ([], "with a 'flags' key"),
        ({"other": 1}, "with a 'flags' key"),
        ({"flags": {}, "extra": 1}, "Unknown top-level keys"),
        ({"flags": "unix"}, "must be a mapping or a list"),
        ({"flags": [{"a": 1, "b": 2}]}, "single-key mapping"),
        ({"flags": [42]}, "single-key mapping"),
        ({"flags": {"a": {"nested": 1}}}, "values must be strings"),
        ({"flags": [""]}, "non-empty strings"),
    ])
    def test_schema_errors(self, data, message):
        """Data that does not follow the schema raises FlagSourceError."""
        with pytest.raises(FlagSourceError, match=message):
            flags_from_data(data)


class TestLoadFlagsFile:
    """Test YAML flag files."""

    def test_load_mapping_file(self, write_yaml):
        """A mapping-form file evaluates like the equivalent dict."""
        path = write_yaml(
            "flags:\n"
            "  unix: null\n"
            "  target_pointer_width: 32\n"
        )
        flags = load_flags_file(path)
        assert parse_predicate('all(unix, target_pointer_width = "32")').matches(flags)

    def test_load_list_file(self, write_yaml):
        """A list-form file loads as a FlagList."""
        path = write_yaml(
            "flags:\n"
            "  - unix\n"
            "  - feature: [std, alloc]\n"
        )
        flags = load_flags_file(str(path))
        assert isinstance(flags, FlagList)
        assert parse_predicate('feature = "alloc"').matches(flags)

    def test_missing_file(self, tmp_path):
        """A missing file raises FileNotFoundError."""
        with pytest.raises(FileNotFoundError, match="Flag file not found"):
            load_flags_file(tmp_path / "nope.yml")

    def test_invalid_yaml(self, write_yaml):
        """Unparseable YAML raises FlagSourceError."""
        path = write_yaml("flags: [unix\n")
        with pytest.raises(FlagSourceError, match="Invalid YAML"):
            load_flags_file(path)

    def test_empty_file(self, write_yaml):
        """An empty file raises FlagSourceError."""
        path = write_yaml("")
        with pytest.raises(FlagSourceError, match="Empty or invalid YAML"):
            load_flags_file(path)

    def test_schema_error_names_file(self, write_yaml):
        """Schema errors are prefixed with the file path."""
        path = write_yaml("flags: 3\n")
        with pytest.raises(FlagSourceError) as exc_info:
            load_flags_file(path)
        assert str(exc_info.value).startswith(str(path))


class TestFlagArgs:
    """Test NAME / NAME=VALUE arguments."""

    def test_names_and_values(self):
        """Bare names are presence-only; NAME=VALUE declares a value."""
        flags = parse_flag_args(["unix", "target_os=macos", 'feature="std"'])
        assert flags.matches("unix", None)
        assert not flags.matches("unix", "")
        assert flags.matches("target_os", "macos")
        assert flags.matches("feature", "std")

    def test_empty_value(self):
        """NAME= declares the empty string as value."""
        flags = parse_flag_args(["vendor="])
        assert flags.matches("vendor", "")
        assert flags.matches("vendor", None)

    def test_repeated_names(self):
        """Repeating a name declares several values."""
        flags = parse_flag_args(["feature=std", "feature=alloc"])
        assert flags.matches("feature", "std")
        assert flags.matches("feature", "alloc")

    def test_missing_name(self):
        """=VALUE is rejected."""
        with pytest.raises(FlagSourceError, match="missing name"):
            parse_flag_args(["=macos"])


class TestMergeFlags:
    """Test combining flag sources."""

    def test_merge_map_and_list(self):
        """Entries from every source are kept."""
        merged = merge_flags(
            FlagMap.from_mapping({"unix": None}),
            parse_flag_args(["feature=std"]),
        )
        assert isinstance(merged, FlagList)
        assert merged.matches("unix", None)
        assert merged.matches("feature", "std")

    def test_later_sources_add(self):
        """A later value for the same name adds to earlier ones."""
        merged = merge_flags(
            FlagMap.from_mapping({"target_os": "linux"}),
            parse_flag_args(["target_os=macos"]),
        )
        assert merged.matches("target_os", "linux")
        assert merged.matches("target_os", "macos")

    def test_merge_rejects_plain_data(self):
        """Only flag sources can be merged."""
        with pytest.raises(TypeError, match="Cannot merge"):
            merge_flags({"unix": None})
