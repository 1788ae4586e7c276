"""
Tests for the Go declaration indexer.
"""

import pytest

from scout.exceptions import SourceSyntaxError, UnsupportedCapabilityError
from scout.parser import GoIndexer, get_indexer, get_languages, language_for_extension
from scout.schemas import DeclarationKind


@pytest.fixture
def indexer():
    return get_indexer("go")


class TestRegistry:
    """Tests for the language registry."""

    def test_go_is_registered(self):
        assert "go" in get_languages()
        assert isinstance(get_indexer("go"), GoIndexer)

    def test_unknown_language(self):
        with pytest.raises(UnsupportedCapabilityError) as exc_info:
            get_indexer("cobol")
        assert "cobol" in str(exc_info.value)

    def test_extension_lookup(self):
        assert language_for_extension(".go") == "go"
        assert language_for_extension(".GO") == "go"
        assert language_for_extension(".py") is None


class TestDeclarations:
    """Tests for declaration extraction."""

    def test_kinds_in_source_order(self, indexer, sample_source):
        decls = indexer.parse(sample_source)
        kinds = [d.kind for d in decls]
        assert kinds == [
            DeclarationKind.PACKAGE,
            DeclarationKind.IMPORT,
            DeclarationKind.CONST,
            DeclarationKind.CONST,
            DeclarationKind.VAR,
            DeclarationKind.TYPE,
            DeclarationKind.FUNCTION,
            DeclarationKind.METHOD,
            DeclarationKind.METHOD,
            DeclarationKind.FUNCTION,
        ]

    def test_package(self, indexer, sample_source):
        package = indexer.parse(sample_source)[0]
        assert package.name == "sample"
        assert package.span.start_line == 2
        assert package.has_leading_comment
        assert package.doc.startswith("Package sample")

    def test_method_receivers(self, indexer, sample_source):
        decls = indexer.parse(sample_source)
        methods = [d for d in decls if d.kind == DeclarationKind.METHOD]
        assert [m.qualified_name for m in methods] == ["*Config.Validate", "Config.String"]
        assert methods[0].receiver_type == "*Config"
        assert methods[0].name == "Validate"

    def test_function_has_no_receiver(self, indexer, sample_source):
        decls = indexer.parse(sample_source)
        func = decls[-1]
        assert func.kind == DeclarationKind.FUNCTION
        assert func.qualified_name == "Validate"
        assert func.receiver_type is None
        assert not func.has_leading_comment

    def test_spans_match_source(self, indexer, sample_source):
        for decl in indexer.parse(sample_source):
            text = sample_source[decl.span.start_offset:decl.span.end_offset].decode()
            lines = sample_source.decode().splitlines()
            assert text.splitlines()[0] == lines[decl.span.start_line - 1].lstrip()
            assert decl.span.end_line >= decl.span.start_line

    def test_function_span(self, indexer, sample_source):
        decl = [d for d in indexer.parse(sample_source) if d.name == "NewConfig"][0]
        text = sample_source[decl.span.start_offset:decl.span.end_offset].decode()
        assert text.startswith("func NewConfig(name string) *Config {")
        assert text.endswith("}")
        assert (decl.span.start_line, decl.span.end_line) == (29, 31)
        assert decl.doc == "NewConfig builds a Config."

    def test_grouped_const(self, indexer, sample_source):
        group = indexer.parse(sample_source)[3]
        assert group.grouped
        assert [m.name for m in group.members] == ["Host", "Port"]
        assert all(m.has_trailing_comment for m in group.members)
        assert (group.span.start_line, group.span.end_line) == (13, 16)

    def test_ungrouped_const(self, indexer, sample_source):
        const = indexer.parse(sample_source)[2]
        assert not const.grouped
        assert const.name == "MaxItems"
        assert const.name_line == 10
        assert const.doc == "MaxItems limits the list size."

    def test_var_group_trailing_comments(self, indexer, sample_source):
        group = indexer.parse(sample_source)[4]
        assert group.grouped
        assert not group.has_leading_comment
        trailing = {m.name: m.has_trailing_comment for m in group.members}
        assert trailing == {"debug": False, "verbose": True}

    def test_imports(self, indexer, sample_source):
        imports = indexer.parse(sample_source)[1]
        assert imports.grouped
        assert [m.name for m in imports.members] == ['"fmt"', '"strings"']

    def test_multi_name_spec(self, indexer):
        source = b"package p\n\nvar a, b = 1, 2\n"
        decl = indexer.parse(source)[1]
        assert [m.name for m in decl.members] == ["a", "b"]
        assert all(m.multi_name for m in decl.members)
        assert all(m.spec_name == "a" for m in decl.members)

    def test_generic_receiver(self, indexer):
        source = (
            b"package p\n\n"
            b"type List[T any] struct {\n    items []T\n}\n\n"
            b"func (l *List[T]) Len() int {\n    return len(l.items)\n}\n"
        )
        method = indexer.parse(source)[-1]
        assert method.receiver_type == "*List"
        assert method.qualified_name == "*List.Len"

    def test_unicode_offsets_are_bytes(self, indexer):
        source = "package p\n\n// Grüße sagt hallo.\nfunc Grüße() {}\n".encode("utf-8")
        func = indexer.parse(source)[-1]
        assert func.name == "Grüße"
        assert source[func.span.start_offset:func.span.end_offset] == "func Grüße() {}".encode("utf-8")


class TestDocComments:
    """Tests for leading/trailing comment attachment."""

    def test_blank_line_breaks_doc(self, indexer):
        source = b"package p\n\n// stray\n\nfunc A() {}\n"
        func = indexer.parse(source)[-1]
        assert not func.has_leading_comment
        assert func.doc is None

    def test_trailing_comment_of_previous_code_is_not_doc(self, indexer):
        source = b"package p\n\nvar a = 1 // about a\nfunc B() {}\n"
        func = indexer.parse(source)[-1]
        assert not func.has_leading_comment

    def test_multi_line_doc(self, indexer):
        source = b"package p\n\n// A does things.\n// More detail.\nfunc A() {}\n"
        func = indexer.parse(source)[-1]
        assert func.doc == "A does things.\nMore detail."

    def test_block_comment_doc(self, indexer):
        source = b"package p\n\n/* A does things. */\nfunc A() {}\n"
        func = indexer.parse(source)[-1]
        assert func.doc == "A does things."

    def test_directive_lines_dropped(self, indexer):
        source = b"package p\n\n// A does things.\n//go:noinline\nfunc A() {}\n"
        func = indexer.parse(source)[-1]
        assert func.doc == "A does things."

    def test_member_doc_in_group(self, indexer):
        source = b"package p\n\ntype (\n    // A is a.\n    A int\n    B int\n)\n"
        decl = indexer.parse(source)[-1]
        docs = {m.name: m.doc for m in decl.members}
        assert docs == {"A": "A is a.", "B": None}


class TestSyntaxErrors:
    """Parse failures must raise; no partial index is returned."""

    def test_broken_function(self, indexer):
        with pytest.raises(SourceSyntaxError) as exc_info:
            indexer.parse(b"package p\n\nfunc Broken( {\n")
        assert exc_info.value.line >= 3

    def test_missing_package_clause(self, indexer):
        with pytest.raises(SourceSyntaxError) as exc_info:
            indexer.parse(b"func main() {}\n")
        assert "expected 'package'" in str(exc_info.value)

    def test_empty_source(self, indexer):
        with pytest.raises(SourceSyntaxError):
            indexer.parse(b"")

    def test_import_after_declarations(self, indexer):
        source = b"package p\n\nconst A = 1\n\nimport \"os\"\n"
        with pytest.raises(SourceSyntaxError) as exc_info:
            indexer.parse(source)
        assert exc_info.value.line == 5
        assert "imports must appear before other declarations" in str(exc_info.value)

    def test_multiple_import_blocks_before_declarations(self, indexer):
        source = b"package p\n\nimport \"fmt\"\nimport \"os\"\n\nvar _ = fmt.Sprint\nvar _ = os.Args\n"
        kinds = [d.kind for d in indexer.parse(source)]
        assert kinds.count(DeclarationKind.IMPORT) == 2

    def test_statement_at_top_level(self, indexer):
        with pytest.raises(SourceSyntaxError):
            indexer.parse(b"package p\n\nx := 1\n")

    def test_validate_syntax(self, indexer, sample_source):
        assert indexer.validate_syntax(sample_source) is None
        error = indexer.validate_syntax(b"package p\nfunc (\n")
        assert isinstance(error, SourceSyntaxError)
