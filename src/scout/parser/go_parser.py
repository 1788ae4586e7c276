from typing import List, Optional, Sequence, Tuple

import tree_sitter_go as tsgo
from tree_sitter import Language, Node, Parser

from scout.exceptions import SourceSyntaxError
from scout.logging_config import logger
from scout.parser.base import DeclarationIndexer, register_indexer
from scout.parser.config import DIRECTIVE_PREFIXES
from scout.schemas import Declaration, DeclarationKind, DeclarationMember, Span

GO_LANGUAGE = Language(tsgo.language())

# Top-level node types that are declarations
_DECLARATION_NODES = {
    "package_clause": DeclarationKind.PACKAGE,
    "import_declaration": DeclarationKind.IMPORT,
    "const_declaration": DeclarationKind.CONST,
    "var_declaration": DeclarationKind.VAR,
    "type_declaration": DeclarationKind.TYPE,
    "function_declaration": DeclarationKind.FUNCTION,
    "method_declaration": DeclarationKind.METHOD,
}

_SPEC_NODES = {
    DeclarationKind.IMPORT: ("import_spec",),
    DeclarationKind.CONST: ("const_spec",),
    DeclarationKind.VAR: ("var_spec",),
    DeclarationKind.TYPE: ("type_spec", "type_alias"),
}


class GoIndexer(DeclarationIndexer):
    """
    Go declaration indexer built on tree-sitter-go.

    One parse, one walk over the children of `source_file`. Offsets are byte
    offsets into the given source, so they stay exact for non-ASCII text.
    """

    language = "go"
    extensions = (".go",)

    def _new_parser(self) -> Parser:
        # Parser instances are not shared between threads
        parser = Parser()
        parser.language = GO_LANGUAGE
        return parser

    def parse(self, source: bytes) -> List[Declaration]:
        tree = self._new_parser().parse(source)
        root = tree.root_node

        if root.has_error:
            raise self._syntax_error(root, source)

        comments = _collect_comments(root)
        declarations: List[Declaration] = []
        package_seen = False
        body_seen = False
        prev_end_row = -1

        for node in root.named_children:
            if node.type == "comment":
                continue

            kind = _DECLARATION_NODES.get(node.type)
            if kind is None:
                raise SourceSyntaxError(
                    node.start_point[0] + 1,
                    node.start_point[1] + 1,
                    "non-declaration statement outside function body",
                )
            if kind == DeclarationKind.PACKAGE:
                if package_seen:
                    raise SourceSyntaxError(
                        node.start_point[0] + 1,
                        node.start_point[1] + 1,
                        "unexpected package clause",
                    )
                package_seen = True
            elif not package_seen:
                raise SourceSyntaxError(
                    node.start_point[0] + 1,
                    node.start_point[1] + 1,
                    f"expected 'package', found '{_first_word(node, source)}'",
                )
            elif kind == DeclarationKind.IMPORT:
                if body_seen:
                    raise SourceSyntaxError(
                        node.start_point[0] + 1,
                        node.start_point[1] + 1,
                        "imports must appear before other declarations",
                    )
            else:
                body_seen = True

            doc_nodes = _doc_group(comments, node.start_point[0], prev_end_row)
            declarations.append(self._build(kind, node, source, comments, doc_nodes))
            prev_end_row = node.end_point[0]

        if not package_seen:
            raise SourceSyntaxError(1, 1, "expected 'package', found 'EOF'")

        logger.debug(f"Indexed Go source: {len(declarations)} declarations")
        return declarations

    def _syntax_error(self, root: Node, source: bytes) -> SourceSyntaxError:
        """Build an error for the first ERROR or MISSING node in document order."""
        stack = [root]
        while stack:
            node = stack.pop()
            if node.is_missing:
                return SourceSyntaxError(
                    node.start_point[0] + 1,
                    node.start_point[1] + 1,
                    f"missing '{node.type}'",
                )
            if node.type == "ERROR":
                snippet = _text(node, source).strip().splitlines()
                near = snippet[0][:20] if snippet else ""
                return SourceSyntaxError(
                    node.start_point[0] + 1,
                    node.start_point[1] + 1,
                    f"syntax error near '{near}'" if near else "syntax error",
                )
            stack.extend(reversed(node.children))
        return SourceSyntaxError(1, 1, "syntax error")

    def _build(self, kind: DeclarationKind, node: Node, source: bytes,
               comments: List[Node], doc_nodes: List[Node]) -> Declaration:
        doc = _comment_text(doc_nodes, source) if doc_nodes else None

        if kind == DeclarationKind.PACKAGE:
            ident = node.named_children[0]
            return Declaration(
                kind=kind,
                name=_text(ident, source),
                span=_span(node),
                name_line=ident.start_point[0] + 1,
                has_leading_comment=bool(doc_nodes),
                doc=doc,
            )

        if kind in (DeclarationKind.FUNCTION, DeclarationKind.METHOD):
            name_node = node.child_by_field_name("name")
            receiver_type = None
            if kind == DeclarationKind.METHOD:
                receiver_type = _receiver_type(node, source)
            return Declaration(
                kind=kind,
                name=_text(name_node, source),
                span=_span(node),
                name_line=name_node.start_point[0] + 1,
                receiver_type=receiver_type,
                has_leading_comment=bool(doc_nodes),
                doc=doc,
            )

        specs, grouped, open_row = _specs(node, _SPEC_NODES[kind])
        members = self._members(kind, specs, grouped, open_row, source, comments)
        name_line = node.start_point[0] + 1
        if members and not grouped:
            name_line = members[0].name_line
        return Declaration(
            kind=kind,
            name=members[0].name if members else "",
            span=_span(node),
            name_line=name_line,
            grouped=grouped,
            has_leading_comment=bool(doc_nodes),
            doc=doc,
            members=members,
        )

    def _members(self, kind: DeclarationKind, specs: List[Node], grouped: bool,
                 open_row: int, source: bytes, comments: List[Node]) -> List[DeclarationMember]:
        members: List[DeclarationMember] = []
        floor_row = open_row

        for spec in specs:
            member_doc = None
            if grouped:
                group = _doc_group(comments, spec.start_point[0], floor_row)
                member_doc = _comment_text(group, source) if group else None
            floor_row = spec.end_point[0]

            if kind == DeclarationKind.IMPORT:
                names = [spec.child_by_field_name("path")]
            else:
                names = spec.children_by_field_name("name")
            names = [n for n in names if n is not None and n.is_named]
            if not names:
                continue

            spec_name = _text(names[0], source)
            for name_node in names:
                members.append(DeclarationMember(
                    name=_text(name_node, source),
                    span=_span(spec),
                    name_line=name_node.start_point[0] + 1,
                    doc=member_doc,
                    has_trailing_comment=_has_trailing_comment(comments, name_node),
                    multi_name=len(names) > 1,
                    spec_name=spec_name,
                ))
        return members


def _text(node: Node, source: bytes) -> str:
    return source[node.start_byte:node.end_byte].decode("utf-8", errors="replace")


def _span(node: Node) -> Span:
    end_row = node.end_point[0]
    # A node that ends exactly at a line break reports the next row at column 0
    if node.end_point[1] == 0 and end_row > node.start_point[0]:
        end_row -= 1
    return Span(
        start_line=node.start_point[0] + 1,
        end_line=end_row + 1,
        start_offset=node.start_byte,
        end_offset=node.end_byte,
    )


def _first_word(node: Node, source: bytes) -> str:
    words = _text(node, source).split()
    return words[0] if words else node.type


def _collect_comments(root: Node) -> List[Node]:
    """All comment nodes of the tree in document order."""
    comments = []
    stack = [root]
    while stack:
        node = stack.pop()
        if node.type == "comment":
            comments.append(node)
            continue
        stack.extend(reversed(node.children))
    return comments


def _doc_group(comments: Sequence[Node], row: int, floor_row: int) -> List[Node]:
    """
    Comment group that documents a construct starting on `row`.

    The group must end on the line directly above and may not start on a line
    that still belongs to preceding code (`floor_row`).
    """
    group: List[Node] = []
    for comment in reversed(comments):
        start_row = comment.start_point[0]
        end_row = comment.end_point[0]
        if start_row >= row:
            continue
        if start_row <= floor_row:
            break
        if not group:
            if end_row != row - 1:
                break
        elif end_row < group[0].start_point[0] - 1:
            break
        group.insert(0, comment)
    return group


def _comment_text(nodes: Sequence[Node], source: bytes) -> str:
    """Comment text with markers removed and directive lines dropped."""
    lines = []
    for node in nodes:
        raw = _text(node, source)
        if raw.startswith("//"):
            if raw.startswith(DIRECTIVE_PREFIXES):
                continue
            body = raw[2:].rstrip()
            lines.append(body[1:] if body.startswith(" ") else body)
        else:
            body = raw[2:-2] if raw.endswith("*/") else raw[2:]
            lines.extend(line.strip() for line in body.splitlines())
    return "\n".join(lines).strip()


def _has_trailing_comment(comments: Sequence[Node], name_node: Node) -> bool:
    row = name_node.start_point[0]
    for comment in comments:
        if comment.start_point[0] > row:
            break
        if comment.start_point[0] == row and comment.start_byte >= name_node.end_byte:
            return True
    return False


def _specs(node: Node, spec_types: Tuple[str, ...]) -> Tuple[List[Node], bool, int]:
    """
    Specs of a const/var/type/import declaration.

    Returns (specs, grouped, row of the opening parenthesis or declaration).
    """
    specs: List[Node] = []
    grouped = False
    open_row = node.start_point[0]
    for child in node.children:
        if child.type == "(":
            grouped = True
            open_row = child.start_point[0]
        elif child.type in spec_types:
            specs.append(child)
        elif child.type.endswith("_spec_list"):
            grouped = True
            open_row = child.start_point[0]
            specs.extend(c for c in child.named_children if c.type in spec_types)
    return specs, grouped, open_row


def _receiver_type(node: Node, source: bytes) -> Optional[str]:
    receiver = node.child_by_field_name("receiver")
    if receiver is None:
        return None
    for param in receiver.named_children:
        if param.type == "parameter_declaration":
            type_node = param.child_by_field_name("type")
            if type_node is not None:
                return _type_name(type_node, source)
    return None


def _type_name(node: Node, source: bytes) -> str:
    """Receiver type as written, without type arguments: `*List[T]` -> `*List`."""
    if node.type == "pointer_type":
        return "*" + _type_name(node.named_children[0], source)
    if node.type == "generic_type":
        return _type_name(node.child_by_field_name("type"), source)
    if node.type == "parenthesized_type":
        return _type_name(node.named_children[0], source)
    return _text(node, source)


register_indexer(GoIndexer())
