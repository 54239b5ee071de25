"""Declaration tree consumed by the docs guard.

The tree is produced outside docsrails (SourceKit ``structure`` output or an
equivalent). Nodes carry a kind, UTF-8 byte offsets into the file contents,
an optional name and their substructure. Any field may be missing; the guard
treats a node with missing fields as "not enough evidence" and only walks
its children.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Mapping


class DeclarationKind(str, Enum):
    """SourceKit declaration kinds (``key.kind`` values)."""

    ASSOCIATEDTYPE = "source.lang.swift.decl.associatedtype"
    CLASS = "source.lang.swift.decl.class"
    ENUM = "source.lang.swift.decl.enum"
    ENUMCASE = "source.lang.swift.decl.enumcase"
    ENUMELEMENT = "source.lang.swift.decl.enumelement"
    EXTENSION = "source.lang.swift.decl.extension"
    EXTENSION_CLASS = "source.lang.swift.decl.extension.class"
    EXTENSION_ENUM = "source.lang.swift.decl.extension.enum"
    EXTENSION_PROTOCOL = "source.lang.swift.decl.extension.protocol"
    EXTENSION_STRUCT = "source.lang.swift.decl.extension.struct"
    FUNCTION_ACCESSOR_ADDRESS = "source.lang.swift.decl.function.accessor.address"
    FUNCTION_ACCESSOR_DIDSET = "source.lang.swift.decl.function.accessor.didset"
    FUNCTION_ACCESSOR_GETTER = "source.lang.swift.decl.function.accessor.getter"
    FUNCTION_ACCESSOR_MUTABLEADDRESS = (
        "source.lang.swift.decl.function.accessor.mutableaddress"
    )
    FUNCTION_ACCESSOR_SETTER = "source.lang.swift.decl.function.accessor.setter"
    FUNCTION_ACCESSOR_WILLSET = "source.lang.swift.decl.function.accessor.willset"
    FUNCTION_CONSTRUCTOR = "source.lang.swift.decl.function.constructor"
    FUNCTION_DESTRUCTOR = "source.lang.swift.decl.function.destructor"
    FUNCTION_FREE = "source.lang.swift.decl.function.free"
    FUNCTION_METHOD_CLASS = "source.lang.swift.decl.function.method.class"
    FUNCTION_METHOD_INSTANCE = "source.lang.swift.decl.function.method.instance"
    FUNCTION_METHOD_STATIC = "source.lang.swift.decl.function.method.static"
    FUNCTION_OPERATOR = "source.lang.swift.decl.function.operator"
    FUNCTION_SUBSCRIPT = "source.lang.swift.decl.function.subscript"
    GENERIC_TYPE_PARAM = "source.lang.swift.decl.generic_type_param"
    MODULE = "source.lang.swift.decl.module"
    PROTOCOL = "source.lang.swift.decl.protocol"
    STRUCT = "source.lang.swift.decl.struct"
    TYPEALIAS = "source.lang.swift.decl.typealias"
    VAR_CLASS = "source.lang.swift.decl.var.class"
    VAR_GLOBAL = "source.lang.swift.decl.var.global"
    VAR_INSTANCE = "source.lang.swift.decl.var.instance"
    VAR_LOCAL = "source.lang.swift.decl.var.local"
    VAR_PARAMETER = "source.lang.swift.decl.var.parameter"
    VAR_STATIC = "source.lang.swift.decl.var.static"

    @classmethod
    def parse(cls, value: object) -> DeclarationKind | None:
        """Map a raw ``key.kind`` value to a kind, or None if unknown."""
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            return None
        try:
            return cls(value)
        except ValueError:
            return None


# Kinds that produce a value without arrow syntax (properties).
VARIABLE_KINDS = frozenset({
    DeclarationKind.VAR_CLASS,
    DeclarationKind.VAR_GLOBAL,
    DeclarationKind.VAR_INSTANCE,
    DeclarationKind.VAR_LOCAL,
    DeclarationKind.VAR_PARAMETER,
    DeclarationKind.VAR_STATIC,
})


@dataclass
class DeclarationNode:
    """One node of the structural tree."""

    kind: DeclarationKind | None = None
    offset: int | None = None
    body_offset: int | None = None
    name: str | None = None
    substructure: list[DeclarationNode] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> DeclarationNode:
        """Build a tree from SourceKit-style ``key.*`` dictionaries.

        Malformed fields degrade to None; malformed children are dropped.
        """
        children = data.get("key.substructure")
        substructure = [
            cls.from_dict(child)
            for child in (children if isinstance(children, list) else [])
            if isinstance(child, Mapping)
        ]
        name = data.get("key.name")
        return cls(
            kind=DeclarationKind.parse(data.get("key.kind")),
            offset=_as_offset(data.get("key.offset")),
            body_offset=_as_offset(data.get("key.bodyoffset")),
            name=name if isinstance(name, str) else None,
            substructure=substructure,
        )


@dataclass(frozen=True)
class ParameterDescriptor:
    """A parameter declared by the immediate declaration."""

    name: str
    offset: int


def _as_offset(value: object) -> int | None:
    # bool is an int subclass but never a valid offset
    if isinstance(value, bool) or not isinstance(value, int):
        return None
    if value < 0:
        return None
    return value


def parameter_descriptors(node: DeclarationNode) -> list[ParameterDescriptor]:
    """Named parameter children declared before *node*'s body starts."""
    if node.body_offset is None:
        return []
    return [
        ParameterDescriptor(name=child.name, offset=child.offset)
        for child in node.substructure
        if child.kind is DeclarationKind.VAR_PARAMETER
        and child.offset is not None
        and child.offset < node.body_offset
        and child.name is not None
    ]


def signature_region(contents: bytes, node: DeclarationNode) -> str | None:
    """Text of ``[offset, body_offset)`` or None when the range is unusable."""
    start, end = node.offset, node.body_offset
    if start is None or end is None:
        return None
    if end < start or end > len(contents):
        return None
    return contents[start:end].decode("utf-8", errors="replace")


def as_bytes(contents: str | bytes) -> bytes:
    """Offsets are UTF-8 byte offsets; normalize contents once per file."""
    if isinstance(contents, bytes):
        return contents
    return contents.encode("utf-8")


def location_for_offset(contents: str | bytes, offset: int) -> tuple[int, int]:
    """1-based ``(line, column)`` of a byte offset.

    The column counts characters, not bytes. Offsets past the end clamp to
    the end of the contents.
    """
    data = as_bytes(contents)
    offset = max(0, min(offset, len(data)))
    prefix = data[:offset]
    line = prefix.count(b"\n") + 1
    line_start = prefix.rfind(b"\n") + 1
    column = len(prefix[line_start:].decode("utf-8", errors="replace")) + 1
    return line, column


CommentProvider = Callable[[DeclarationNode], str | None]


def comments_by_offset(comments: Mapping[int, str]) -> CommentProvider:
    """Adapt a precomputed ``{offset: comment}`` mapping to a comment provider."""

    def _comment_for(node: DeclarationNode) -> str | None:
        if node.offset is None:
            return None
        return comments.get(node.offset)

    return _comment_for
