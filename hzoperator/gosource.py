"""A small reader for Go source files: type and constant declarations with their doc comments."""

from __future__ import annotations

import re
from collections import Counter
from dataclasses import dataclass, field
from pathlib import Path

_KEYWORDS = frozenset(
    "break case chan const continue default defer else fallthrough for func go goto if "
    "import interface map package range return select struct switch type var".split()
)
_SEMICOLON_KEYWORDS = frozenset({"break", "continue", "fallthrough", "return"})
_LITERAL_KINDS = frozenset({"number", "char", "string"})
_OPEN = {"(": ")", "[": "]", "{": "}"}
_CONST_THRESHOLD = 0.75

_TOKEN_RE = re.compile(
    r"""
     (?P<newline>\n)
    |(?P<space>[ \t\r\f]+)
    |(?P<line_comment>//[^\n]*)
    |(?P<block_comment>/\*.*?\*/)
    |(?P<raw_string>`[^`]*`)
    |(?P<string>"(?:\\.|[^"\\\n])*")
    |(?P<char>'(?:\\.|[^'\\\n])*')
    |(?P<number>(?:0[xX][0-9a-fA-F_]+|\d[\d_]*(?:\.\d*)?(?:[eE][+-]?\d+)?|\.\d+(?:[eE][+-]?\d+)?)i?)
    |(?P<ident>[^\W\d]\w*)
    |(?P<op><<=|>>=|&\^=|\.\.\.|&&|\|\||<-|\+\+|--|==|!=|<=|>=|:=|<<|>>|&\^|[-+*/%&|^]=|[-+*/%&|^<>=!(){}\[\],;.:~])
    """,
    re.VERBOSE | re.DOTALL,
)
_DIRECTIVE_RE = re.compile(r"^[a-z0-9]+:[a-z0-9]")
_TAG_PAIR_RE = re.compile(r' *([^\s:"\x7f]+):"((?:\\.|[^"\\])*)"')


class GoSyntaxError(ValueError):
    """Raised when a Go source file cannot be read."""


@dataclass
class _Token:
    kind: str
    text: str
    line: int


@dataclass
class _Comment:
    text: str
    start: int
    end: int
    trailing: bool


@dataclass
class TypeExpr:
    """A Go type expression: ident, selector, star, array, map, struct or other."""

    kind: str
    name: str = ""
    elem: TypeExpr | None = None
    key: TypeExpr | None = None
    fields: list[FieldDecl] = field(default_factory=list)

    def base_name(self) -> str:
        """Name of the named type underneath pointers, or the empty string."""
        if self.kind == "star" and self.elem is not None:
            return self.elem.base_name()
        if self.kind in ("ident", "selector"):
            return self.name
        return ""


@dataclass
class FieldDecl:
    """A struct field; ``names`` is empty for an embedded field."""

    names: list[str]
    type: TypeExpr
    tag: str | None = None
    doc: str = ""

    def json_tag(self) -> str:
        """The ``json`` key of the struct tag, or the empty string."""
        if self.tag is None:
            return ""
        return _struct_tag_get(self.tag[1:-1], "json")


@dataclass
class ConstDecl:
    """A constant; ``value`` is the literal text, or None if not a plain literal."""

    name: str
    doc: str = ""
    type: str | None = None
    value: str | None = None


@dataclass
class TypeDecl:
    """A type declaration with the constants that belong to it."""

    name: str
    doc: str
    type: TypeExpr
    consts: list[ConstDecl] = field(default_factory=list)


@dataclass
class GoPackage:
    """Exported types of one file, sorted by name, plus every declared type."""

    name: str
    types: list[TypeDecl] = field(default_factory=list)
    declared: dict[str, TypeDecl] = field(default_factory=dict)


def _struct_tag_get(tag: str, key: str) -> str:
    pos = 0
    while pos < len(tag):
        match = _TAG_PAIR_RE.match(tag, pos)
        if match is None:
            break
        if match.group(1) == key:
            return re.sub(r"\\(.)", r"\1", match.group(2))
        pos = match.end()
    return ""


def _is_exported(name: str) -> bool:
    return bool(name) and name[0].isupper()


def _comment_text(raw_comments: list[str]) -> str:
    lines: list[str] = []
    for raw in raw_comments:
        if raw.startswith("//"):
            body = raw[2:]
            if body.startswith(" "):
                body = body[1:]
            elif body.startswith(("line ", "extern ", "export ")) or _DIRECTIVE_RE.match(body):
                continue
        else:
            body = raw[2:-2]
        lines.extend(line.rstrip() for line in body.split("\n"))
    result: list[str] = []
    for line in lines:
        if line == "" and (not result or result[-1] == ""):
            continue
        result.append(line)
    while result and result[-1] == "":
        result.pop()
    return "\n".join(result) + "\n" if result else ""


def _tokenize(text: str) -> tuple[list[_Token], list[_Comment]]:
    tokens: list[_Token] = []
    comments: list[_Comment] = []
    line = 1
    last_line = 0
    pos = 0

    def needs_semicolon() -> bool:
        if not tokens:
            return False
        last = tokens[-1]
        if last.kind in _LITERAL_KINDS:
            return True
        if last.kind == "ident":
            return last.text not in _KEYWORDS or last.text in _SEMICOLON_KEYWORDS
        return last.text in ("++", "--", ")", "]", "}")

    def end_line() -> None:
        if needs_semicolon():
            tokens.append(_Token("op", ";", tokens[-1].line))

    while pos < len(text):
        match = _TOKEN_RE.match(text, pos)
        if match is None:
            raise GoSyntaxError(f"line {line}: unexpected character {text[pos]!r}")
        kind = match.lastgroup
        value = match.group()
        pos = match.end()
        if kind == "newline":
            end_line()
            line += 1
        elif kind == "space":
            continue
        elif kind in ("line_comment", "block_comment"):
            span = value.count("\n")
            comments.append(_Comment(value, line, line + span, last_line == line))
            if span:
                end_line()
                line += span
        else:
            token_kind = "string" if kind == "raw_string" else kind
            tokens.append(_Token(token_kind, value, line))
            last_line = line + value.count("\n")
            line = last_line
    end_line()
    return tokens, comments


def _doc_comments(comments: list[_Comment]) -> dict[int, str]:
    groups: list[list[_Comment]] = []
    for comment in comments:
        if comment.trailing:
            groups.append([comment])
            continue
        previous = groups[-1] if groups else None
        if previous and not previous[0].trailing and comment.start == previous[-1].end + 1:
            previous.append(comment)
        else:
            groups.append([comment])
    return {
        group[-1].end: _comment_text([c.text for c in group])
        for group in groups
        if not group[0].trailing
    }


@dataclass
class _ConstSpec:
    names: list[str]
    type: TypeExpr | None
    value: str | None
    has_values: bool
    doc: str


class _Parser:
    def __init__(self, tokens: list[_Token], docs: dict[int, str]) -> None:
        self.tokens = tokens
        self.docs = docs
        self.pos = 0

    def peek(self, offset: int = 0) -> _Token | None:
        index = self.pos + offset
        return self.tokens[index] if index < len(self.tokens) else None

    def at(self, text: str) -> bool:
        token = self.peek()
        return token is not None and token.kind in ("op", "ident") and token.text == text

    def next(self) -> _Token:
        token = self.peek()
        if token is None:
            raise GoSyntaxError("unexpected end of file")
        self.pos += 1
        return token

    def expect(self, text: str) -> _Token:
        token = self.next()
        if token.text != text:
            raise GoSyntaxError(f"line {token.line}: expected {text!r}, found {token.text!r}")
        return token

    def ident(self) -> _Token:
        token = self.next()
        if token.kind != "ident":
            raise GoSyntaxError(f"line {token.line}: expected identifier, found {token.text!r}")
        return token

    def doc_before(self, line: int) -> str:
        return self.docs.get(line - 1, "")

    def skip_balanced(self, opening: str) -> None:
        closing = _OPEN[opening]
        self.expect(opening)
        depth = 1
        while depth:
            token = self.next()
            if token.kind == "op" and token.text == opening:
                depth += 1
            elif token.kind == "op" and token.text == closing:
                depth -= 1

    def skip_statement(self) -> None:
        depth = 0
        while self.peek() is not None:
            token = self.next()
            if token.kind != "op":
                continue
            if token.text in _OPEN:
                depth += 1
            elif token.text in (")", "]", "}"):
                depth -= 1
            elif token.text == ";" and depth == 0:
                return

    def parse_file(self) -> GoPackage:
        self.expect("package")
        package = GoPackage(self.ident().text)
        self.expect(";")
        types: list[TypeDecl] = []
        const_groups: list[list[_ConstSpec]] = []
        while self.peek() is not None:
            token = self.peek()
            if token.text == ";":
                self.next()
            elif token.text in ("import", "var", "func"):
                self.skip_statement()
            elif token.text == "type":
                types.extend(self.type_decl())
            elif token.text == "const":
                const_groups.append(self.const_decl())
            else:
                raise GoSyntaxError(f"line {token.line}: unexpected {token.text!r}")
        package.declared = {t.name: t for t in types}
        exported = [t for t in types if _is_exported(t.name)]
        for decl in exported:
            if decl.type.kind == "struct":
                decl.type.fields = [f for f in map(_export_field, decl.type.fields) if f]
        by_name = {t.name: t for t in exported}
        for group in const_groups:
            _attach_consts(group, by_name)
        package.types = sorted(exported, key=lambda t: t.name)
        return package

    def type_decl(self) -> list[TypeDecl]:
        keyword = self.expect("type")
        decl_doc = self.doc_before(keyword.line)
        if not self.at("("):
            name = self.ident().text
            return [TypeDecl(name, decl_doc, self.type_spec_body())]
        self.next()
        specs: list[TypeDecl] = []
        while not self.at(")"):
            if self.at(";"):
                self.next()
                continue
            name_token = self.ident()
            doc = self.doc_before(name_token.line)
            specs.append(TypeDecl(name_token.text, doc, self.type_spec_body()))
        self.next()
        if len(specs) == 1 and not specs[0].doc:
            specs[0].doc = decl_doc
        return specs

    def type_spec_body(self) -> TypeExpr:
        if self.at("="):
            self.next()
        return self.parse_type()

    def parse_type(self) -> TypeExpr:
        token = self.next()
        if token.kind == "ident":
            if token.text == "struct":
                return TypeExpr("struct", fields=self.struct_fields())
            if token.text == "interface":
                self.skip_balanced("{")
                return TypeExpr("other")
            if token.text == "map":
                self.expect("[")
                key = self.parse_type()
                self.expect("]")
                return TypeExpr("map", key=key, elem=self.parse_type())
            if token.text == "chan":
                if self.at("<-"):
                    self.next()
                self.parse_type()
                return TypeExpr("other")
            if token.text == "func":
                self.skip_signature()
                return TypeExpr("other")
            if self.at("."):
                self.next()
                return TypeExpr("selector", name=f"{token.text}.{self.ident().text}")
            return TypeExpr("ident", name=token.text)
        if token.text == "*":
            return TypeExpr("star", elem=self.parse_type())
        if token.text == "[":
            self.pos -= 1
            if self.peek(1) is not None and self.peek(1).text == "]":
                self.pos += 2
            else:
                self.skip_balanced("[")
            return TypeExpr("array", elem=self.parse_type())
        if token.text == "(":
            inner = self.parse_type()
            self.expect(")")
            return inner
        if token.text == "<-":
            self.expect("chan")
            self.parse_type()
            return TypeExpr("other")
        raise GoSyntaxError(f"line {token.line}: expected type, found {token.text!r}")

    def skip_signature(self) -> None:
        self.skip_balanced("(")
        token = self.peek()
        if token is None:
            return
        if token.text == "(":
            self.skip_balanced("(")
        elif token.kind == "ident" or token.text in ("*", "[", "<-"):
            self.parse_type()

    def struct_fields(self) -> list[FieldDecl]:
        self.expect("{")
        fields: list[FieldDecl] = []
        while True:
            if self.at(";"):
                self.next()
                continue
            if self.at("}"):
                self.next()
                return fields
            fields.append(self.struct_field())
            if not self.at("}"):
                self.expect(";")

    def struct_field(self) -> FieldDecl:
        first = self.peek()
        doc = self.doc_before(first.line)
        following = self.peek(1)
        embedded = first.text == "*" or (
            following is not None
            and (following.text in (".", ";", "}") or following.kind == "string")
        )
        names: list[str] = []
        if not embedded:
            names.append(self.ident().text)
            while self.at(","):
                self.next()
                names.append(self.ident().text)
        type_expr = self.parse_type()
        tag = None
        token = self.peek()
        if token is not None and token.kind == "string":
            tag = self.next().text
        return FieldDecl(names, type_expr, tag, doc)

    def const_decl(self) -> list[_ConstSpec]:
        self.expect("const")
        if not self.at("("):
            return [self.const_spec("")]
        self.next()
        specs: list[_ConstSpec] = []
        while not self.at(")"):
            if self.at(";"):
                self.next()
                continue
            specs.append(self.const_spec(self.doc_before(self.peek().line)))
        self.next()
        return specs

    def const_spec(self, doc: str) -> _ConstSpec:
        names = [self.ident().text]
        while self.at(","):
            self.next()
            names.append(self.ident().text)
        type_expr = None
        if not (self.at("=") or self.at(";") or self.at(")")):
            type_expr = self.parse_type()
        value = None
        has_values = False
        if self.at("="):
            self.next()
            has_values = True
            first_expr = self.expression_tokens()
            if len(first_expr) == 1 and first_expr[0].kind in _LITERAL_KINDS:
                value = first_expr[0].text
            while self.at(","):
                self.next()
                self.expression_tokens()
        return _ConstSpec(names, type_expr, value, has_values, doc)

    def expression_tokens(self) -> list[_Token]:
        collected: list[_Token] = []
        depth = 0
        while self.peek() is not None:
            token = self.peek()
            if token.kind == "op":
                if depth == 0 and token.text in (",", ";", ")"):
                    break
                if token.text in _OPEN:
                    depth += 1
                elif token.text in (")", "]", "}"):
                    depth -= 1
            collected.append(self.next())
        return collected


def _export_field(decl: FieldDecl) -> FieldDecl | None:
    if decl.names:
        names = [n for n in decl.names if _is_exported(n)]
        return FieldDecl(names, decl.type, decl.tag, decl.doc) if names else None
    base = decl.type.base_name().rpartition(".")[2]
    return decl if _is_exported(base) else None


def _attach_consts(specs: list[_ConstSpec], types: dict[str, TypeDecl]) -> None:
    exported = []
    for spec in specs:
        names = [n for n in spec.names if _is_exported(n)]
        if names:
            exported.append((spec, names))
    if not exported:
        return
    counts: Counter[str] = Counter()
    dominant = ""
    previous = ""
    for spec, _ in exported:
        name = ""
        if spec.type is not None:
            base = spec.type.base_name()
            name = "" if "." in base else base
        elif not spec.has_values:
            name = previous
        if name:
            if dominant and dominant != name:
                return
            dominant = name
            counts[name] += 1
        previous = name
    if not dominant or counts[dominant] < int(len(exported) * _CONST_THRESHOLD):
        return
    owner = types.get(dominant)
    if owner is None:
        return
    for spec, names in exported:
        type_name = None
        if spec.type is not None:
            type_name = spec.type.name if spec.type.kind in ("ident", "selector") else ""
        owner.consts.append(ConstDecl(names[0], spec.doc, type_name, spec.value))


def parse_go_source(text: str) -> GoPackage:
    """Read the declarations of one Go source file."""
    tokens, comments = _tokenize(text)
    return _Parser(tokens, _doc_comments(comments)).parse_file()


def parse_go_file(path: str | Path) -> GoPackage:
    """Read the declarations of the Go source file at ``path``."""
    try:
        text = Path(path).read_text(encoding="utf-8")
    except OSError as exc:
        raise GoSyntaxError(f"{path}: {exc.strerror or exc}") from exc
    try:
        return parse_go_source(text)
    except GoSyntaxError as exc:
        raise GoSyntaxError(f"{path}: {exc}") from exc