"""Generate AsciiDoc API reference documentation from Go type declarations."""

from __future__ import annotations

import dataclasses
import sys
from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from hzoperator.gosource import (
    FieldDecl,
    GoPackage,
    GoSyntaxError,
    TypeExpr,
    parse_go_file,
)

FIRST_PARAGRAPH = """
= Hazelcast Platform Operator API Docs

A reference guide to the Hazelcast Platform Operator CRD types.

== Hazelcast Platform Operator API Docs

This is a reference for the Hazelcast Platform Operator API types.
These are all the types and fields that are used in the Hazelcast Platform Operator CRDs. 

TIP: This document was generated from comments in the Go code in the api/ directory."""

K8S_LINK = "https://kubernetes.io/docs/reference/generated/kubernetes-api/v1.22/#"


@dataclass
class Field:
    name: str
    doc: str
    type: str
    default: str
    mandatory: bool


@dataclass
class StructType:
    name: str
    doc: str
    fields: list[Field] = dataclasses.field(default_factory=list)


@dataclass
class Const:
    name: str
    doc: str
    type: str
    value: str


@dataclass
class StringType:
    name: str
    doc: str
    consts: list[Const] = dataclasses.field(default_factory=list)


def fmt_raw_doc(raw_doc: str) -> str:
    """Turn a Go doc comment into AsciiDoc table text."""
    buffer = ""
    for line in raw_doc.split("---")[0].split("\n"):
        line = line.strip(" ")
        if not line:
            buffer = buffer[:-1] + "\n\n"
        elif line.startswith(("TODO", "+")):
            continue
        elif line.startswith("\t"):
            buffer = buffer[:-1] + "\n" + line + " +\n"
        else:
            buffer += line + " "
    doc = buffer.rstrip("\n")
    doc = doc.replace('\\"', '"')
    doc = doc.replace("\n", " +\n")
    doc = doc.replace("\t", "&#160;&#160;&#160;&#160;")
    return doc.replace("|", "\\|")


def escape_type_name(type_name: str) -> str:
    if type_name.startswith("*"):
        return "&#42;" + type_name[1:]
    return type_name


def field_required(field: FieldDecl) -> bool:
    """A field is optional if its json tag has omitempty or its doc says +optional."""
    if field.tag is not None and "omitempty" in field.json_tag():
        return False
    return all(line.strip(" ") != "+optional" for line in field.doc.split("\n"))


def field_default(field: FieldDecl) -> str:
    """The kubebuilder default of a field, or ``-``."""
    for line in field.doc.split("\n"):
        line = line.strip(" ")
        if line.startswith("+kubebuilder:default:="):
            return line.split(":=")[1]
    return "-"


def field_name(field: FieldDecl) -> str:
    """The field's JSON name; ``-`` if it is not part of the JSON form."""
    json_tag = field.json_tag()
    if field.tag is not None and "inline" in json_tag:
        return "-"
    json_tag = json_tag.split(",")[0]
    if json_tag:
        return json_tag
    if field.names:
        return field.names[0]
    if field.type.kind != "ident":
        raise ValueError("embedded field without a json name must be a plain identifier")
    return field.type.name


class DocGenerator:
    """Builds the API reference for a sequence of parsed files."""

    def __init__(self, packages: Iterable[GoPackage]) -> None:
        self.packages = list(packages)
        self.self_links = {
            t.name: f"<<{t.name},{t.name}>>" for p in self.packages for t in p.types
        }

    def to_link(self, type_name: str) -> str:
        if type_name in self.self_links:
            return self.self_links[type_name]
        for prefix, suffix in (("corev1.", "v1-core"), ("metav1.", "v1-meta")):
            if type_name.startswith(prefix):
                anchor = type_name[len(prefix):].lower()
                return f"{K8S_LINK}{anchor}-{suffix}[{escape_type_name(type_name)}]"
        return type_name

    def field_type(self, type_expr: TypeExpr) -> str:
        kind = type_expr.kind
        if kind in ("ident", "selector"):
            return self.to_link(type_expr.name)
        if kind == "star":
            return "&#42;" + self.to_link(self.field_type(type_expr.elem))
        if kind == "array":
            return "[]" + self.to_link(self.field_type(type_expr.elem))
        if kind == "map":
            key = self.to_link(self.field_type(type_expr.key))
            return f"map[{key}]" + self.to_link(self.field_type(type_expr.elem))
        return ""

    def _process_fields(self, decls: list[FieldDecl], package: GoPackage) -> list[Field]:
        result: list[Field] = []
        for decl in decls:
            type_string = self.field_type(decl.type)
            mandatory = field_required(decl)
            default = field_default(decl)
            name = field_name(decl)
            if name != "-":
                result.append(Field(name, fmt_raw_doc(decl.doc), type_string, default, mandatory))
            elif decl.tag is not None and 'json:",inline' in decl.tag and decl.type.kind == "ident":
                target = package.declared.get(decl.type.name)
                if target is not None and target.type.kind == "struct":
                    result.extend(self._process_fields(target.type.fields, package))
        return result

    def struct_types(self) -> list[StructType]:
        return [
            StructType(t.name, fmt_raw_doc(t.doc), self._process_fields(t.type.fields, package))
            for package in self.packages
            for t in package.types
            if t.type.kind == "struct"
        ]

    def string_types(self) -> list[StringType]:
        result: list[StringType] = []
        for package in self.packages:
            for t in package.types:
                if t.type.kind != "ident" or t.type.name != "string":
                    continue
                consts: list[Const] = []
                for const in t.consts:
                    if const.value is None:
                        continue
                    if const.type != t.name:
                        raise ValueError("Const type must be equal to its generated one.")
                    consts.append(Const(const.name, fmt_raw_doc(const.doc), const.type, const.value))
                result.append(StringType(t.name, fmt_raw_doc(t.doc), consts))
        return result

    def render(self) -> str:
        """The whole document as text."""
        out = [FIRST_PARAGRAPH + "\n", "\n=== Table of Contents\n"]
        out.extend(f"* <<{t.name},{t.name}>>\n" for p in self.packages for t in p.types)
        for struct in self.struct_types():
            if not struct.fields:
                continue
            out.append(f"\n=== {struct.name}\n\n{struct.doc}\n\n")
            out.append('[cols="4,8,4,2,4"options="header"]\n|===\n')
            out.append("| Field | Description | Type | Required | Default\n")
            for f in struct.fields:
                doc = f.doc.replace("\\n", " +\n") if f.doc else "&#160;"
                mandatory = "true" if f.mandatory else "false"
                out.append(f"m| {f.name} | {doc} m| {f.type} | {mandatory} | {f.default}\n")
            out.append("|===\n\n<<Table of Contents,Back to TOC>>\n")
        for string_type in self.string_types():
            out.append(f"\n=== {string_type.name}\n\n{string_type.doc}\n\n")
            out.append('[cols="5,10"options="header"]\n|===\n| Value | Description\n')
            for c in string_type.consts:
                doc = c.doc.replace("\\n", " +\n") if c.doc else "&#160;"
                out.append(f"m| {c.value} | {doc}\n")
            out.append("|===\n\n<<Table of Contents,Back to TOC>>\n")
        return "".join(out)


def render_api_docs(paths: Sequence[str]) -> str:
    """Parse the Go files at ``paths`` and render their API reference."""
    return DocGenerator(parse_go_file(p) for p in paths).render()


def main(argv: Sequence[str] | None = None) -> int:
    paths = list(sys.argv[1:] if argv is None else argv)
    try:
        sys.stdout.write(render_api_docs(paths))
    except (GoSyntaxError, ValueError) as exc:
        print(exc, file=sys.stderr)
        return 1
    return 0