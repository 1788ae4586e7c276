"""
Tests for ConstructLocator and the capability table.
"""

import pytest

from scout.exceptions import UnsupportedCapabilityError
from scout.mutation import ConstructLocator, get_capability, supported_part_types


@pytest.fixture
def locator():
    return ConstructLocator()


class TestCapabilities:
    """Tests for the (language, part_type) capability table."""

    def test_go_part_types(self):
        assert supported_part_types("go") == ["func", "type", "const", "var", "import", "package"]

    def test_unknown_part_type_message(self):
        with pytest.raises(UnsupportedCapabilityError) as exc_info:
            get_capability("go", "class")
        message = str(exc_info.value)
        assert message.startswith("part_type 'class' not supported for language 'go'. Valid types: [")
        assert "func" in message
        assert exc_info.value.valid == supported_part_types("go")

    def test_unknown_language(self):
        with pytest.raises(UnsupportedCapabilityError) as exc_info:
            get_capability("rust", "func")
        assert exc_info.value.language == "rust"

    def test_unsupported_before_parsing(self, locator):
        # Garbage source is never parsed when the part type is rejected
        with pytest.raises(UnsupportedCapabilityError):
            locator.locate("go", "class", "X", b"not go at all {{{")


class TestLocate:
    """Tests for locating parts by kind and name."""

    def test_function(self, locator, sample_source):
        info = locator.locate("go", "func", "NewConfig", sample_source)
        assert info.found
        assert info.content.startswith("func NewConfig(")
        assert (info.start_line, info.end_line) == (29, 31)
        assert sample_source[info.start_offset:info.end_offset].decode() == info.content

    def test_bare_name_selects_function_not_method(self, locator, sample_source):
        info = locator.locate("go", "func", "Validate", sample_source)
        assert info.found
        assert info.content.startswith("func Validate() bool")
        assert info.start_line == 46

    def test_pointer_method(self, locator, sample_source):
        info = locator.locate("go", "func", "*Config.Validate", sample_source)
        assert info.found
        assert info.content.startswith("func (c *Config) Validate() error")

    def test_value_method(self, locator, sample_source):
        info = locator.locate("go", "func", "Config.String", sample_source)
        assert info.found
        assert info.content.startswith("func (c Config) String()")

    def test_receiver_pointer_must_match(self, locator, sample_source):
        info = locator.locate("go", "func", "Config.Validate", sample_source)
        assert not info.found

    def test_group_member_selects_whole_group(self, locator, sample_source):
        info = locator.locate("go", "const", "Port", sample_source)
        assert info.found
        assert info.content.startswith("const (")
        assert info.content.endswith(")")
        assert "Host" in info.content

    def test_var_group(self, locator, sample_source):
        info = locator.locate("go", "var", "debug", sample_source)
        assert info.found
        assert (info.start_line, info.end_line) == (18, 21)

    def test_type(self, locator, sample_source):
        info = locator.locate("go", "type", "Config", sample_source)
        assert info.found
        assert info.content.startswith("type Config struct")

    def test_import_with_and_without_quotes(self, locator, sample_source):
        bare = locator.locate("go", "import", "fmt", sample_source)
        quoted = locator.locate("go", "import", '"fmt"', sample_source)
        assert bare.found and quoted.found
        assert bare.content == '"fmt"'
        assert bare.start_offset == quoted.start_offset

    def test_package_spans_clause(self, locator, sample_source):
        info = locator.locate("go", "package", "sample", sample_source)
        assert info.found
        assert info.content == "package sample"

    def test_case_sensitive(self, locator, sample_source):
        assert not locator.locate("go", "func", "newconfig", sample_source).found

    def test_not_found(self, locator, sample_source):
        info = locator.locate("go", "type", "Missing", sample_source)
        assert not info.found
        assert info.content == ""

    def test_first_match_wins(self, locator):
        source = b"package p\n\nconst A = 1\n\nconst (\n    A = 2 // again\n)\n"
        info = locator.locate("go", "const", "A", source)
        assert info.content == "const A = 1"
