"""Namespace-aware document model for AndroidManifest.xml files.

ElementTree drops ``xmlns`` declarations on parse and invents ``ns0``-style
prefixes on write, so manifests are read into a small tree of ``Element``
dataclasses that keeps the declarations, the attribute namespaces and
comments (including Unity's "GENERATED BY UNITY" marker ahead of the root).
Text content is not preserved.
"""

from __future__ import annotations

import io
from dataclasses import dataclass, field
from pathlib import Path
from typing import NamedTuple, Union
from xml.etree import ElementTree as ET

ANDROID_NS = "http://schemas.android.com/apk/res/android"
ANDROID_PREFIX = "android"

# Permanently bound to the "xml" prefix; never declared.
XML_NS = "http://www.w3.org/XML/1998/namespace"
XML_PREFIX = "xml"

XML_DECLARATION = '<?xml version="1.0" encoding="utf-8"?>'


class ManifestParseError(Exception):
    """Raised when a manifest cannot be parsed as XML."""


class QName(NamedTuple):
    """Attribute key: namespace URI plus local name ("" for no namespace)."""

    namespace: str
    local: str

    @classmethod
    def from_clark(cls, name: str) -> QName:
        """Build from ElementTree's ``{uri}local`` notation."""
        if name[:1] == "{":
            uri, _, local = name[1:].partition("}")
            return cls(uri, local)
        return cls("", name)


def android(local: str) -> QName:
    """Attribute key in the Android resource namespace."""
    return QName(ANDROID_NS, local)


@dataclass
class Comment:
    text: str


@dataclass
class Element:
    tag: str
    attributes: dict[QName, str] = field(default_factory=lambda: dict[QName, str]())
    children: list[Node] = field(default_factory=lambda: list[Node]())
    namespaces: dict[str, str] = field(default_factory=lambda: dict[str, str]())

    def get(self, name: QName) -> str | None:
        return self.attributes.get(name)

    def set(self, name: QName, value: str) -> None:
        self.attributes[name] = value

    def remove_attribute(self, name: QName) -> None:
        self.attributes.pop(name, None)

    def clear_attributes(self) -> None:
        self.attributes.clear()

    def clear(self) -> None:
        """Remove all children, comments and attributes (namespace declarations stay)."""
        self.attributes.clear()
        self.children.clear()

    def append(self, child: Element) -> Element:
        self.children.append(child)
        return child

    def remove(self, child: Element) -> None:
        # Identity, not equality: two identical siblings are distinct nodes.
        self.children[:] = [c for c in self.children if c is not child]

    def find_all(self, tag: str) -> list[Element]:
        return [c for c in self.children if isinstance(c, Element) and c.tag == tag]


Node = Union[Element, Comment]


@dataclass
class ManifestDocument:
    """Top-level container. A parsed file always holds exactly one element.

    Comments outside the root element are kept in ``comments_before`` and
    ``comments_after``.
    """

    elements: list[Element] = field(default_factory=lambda: list[Element]())
    comments_before: list[Comment] = field(default_factory=lambda: list[Comment]())
    comments_after: list[Comment] = field(default_factory=lambda: list[Comment]())

    @property
    def root(self) -> Element | None:
        return self.elements[0] if len(self.elements) == 1 else None

    def manifests(self) -> list[Element]:
        return [e for e in self.elements if e.tag == "manifest"]


# ── Parsing ───────────────────────────────────────────────────────


def parse_manifest(source: str | bytes) -> ManifestDocument:
    """Parse manifest XML text into a ManifestDocument.

    Raises:
        ManifestParseError: If the text is not well-formed XML.
    """
    data = source.encode("utf-8") if isinstance(source, str) else source

    doc = ManifestDocument()
    stack: list[Element] = []
    pending: dict[str, str] = {}
    events = ("start-ns", "start", "end", "comment")
    try:
        for event, item in ET.iterparse(io.BytesIO(data), events=events):
            if event == "start-ns":
                prefix, uri = item
                pending[prefix] = uri
            elif event == "start":
                element = Element(
                    tag=item.tag,
                    attributes={QName.from_clark(k): v for k, v in item.attrib.items()},
                    namespaces=pending,
                )
                pending = {}
                if stack:
                    stack[-1].children.append(element)
                else:
                    doc.elements.append(element)
                stack.append(element)
            elif event == "end":
                stack.pop()
            else:
                comment = Comment(item.text or "")
                if stack:
                    stack[-1].children.append(comment)
                elif doc.elements:
                    doc.comments_after.append(comment)
                else:
                    doc.comments_before.append(comment)
    except ET.ParseError as e:
        raise ManifestParseError(f"Invalid manifest XML: {e}") from e

    if not doc.elements:
        raise ManifestParseError("Invalid manifest XML: no root element")
    return doc


def load_manifest(path: Path) -> ManifestDocument:
    """Read and parse a manifest file."""
    return parse_manifest(Path(path).read_bytes())


# ── Serialization ─────────────────────────────────────────────────


def serialize_manifest(doc: ManifestDocument) -> str:
    """Render a document as indented XML with a leading XML declaration.

    Raises:
        ValueError: If the document does not have exactly one top-level element.
    """
    if doc.root is None:
        raise ValueError(
            f"Cannot serialize a manifest with {len(doc.elements)} top-level elements"
        )
    node = _Writer(doc.root).build()
    ET.indent(node, space="  ")

    parts = [XML_DECLARATION]
    parts += [_comment_text(c) for c in doc.comments_before]
    parts.append(ET.tostring(node, encoding="unicode"))
    parts += [_comment_text(c) for c in doc.comments_after]
    return "\n".join(parts) + "\n"


def save_manifest(doc: ManifestDocument, path: Path) -> None:
    """Serialize a document to a file (UTF-8)."""
    Path(path).write_text(serialize_manifest(doc), encoding="utf-8")


def _comment_text(comment: Comment) -> str:
    return ET.tostring(ET.Comment(comment.text), encoding="unicode")


class _Writer:
    """Converts an Element tree to ElementTree nodes with literal prefixes.

    Attribute keys are emitted as plain ``prefix:local`` strings so that
    ElementTree writes them verbatim instead of generating its own prefixes.
    Namespaces used but never declared get a declaration on the root.
    """

    def __init__(self, root: Element) -> None:
        self._root = root
        self._root_node = ET.Element(root.tag)
        self._taken = _declared_prefixes(root) | {XML_PREFIX}
        self._extra: dict[str, str] = {}  # uri -> prefix declared on root

    def build(self) -> ET.Element:
        return self._convert(self._root, {XML_NS: XML_PREFIX}, self._root_node)

    def _convert(
        self, element: Element, scope: dict[str, str], node: ET.Element | None = None
    ) -> ET.Element:
        scope = {**scope, **{uri: prefix for prefix, uri in element.namespaces.items()}}
        if node is None:
            node = ET.Element(element.tag)
        # The root node exists before its name is resolved, so declarations
        # made while naming it have somewhere to go.
        node.tag = self._tag_name(element.tag, scope)
        for prefix, uri in element.namespaces.items():
            node.set(f"xmlns:{prefix}" if prefix else "xmlns", uri)
        for name, value in element.attributes.items():
            node.set(self._attribute_name(name, scope), value)
        for child in element.children:
            if isinstance(child, Comment):
                node.append(ET.Comment(child.text))
            else:
                node.append(self._convert(child, scope))
        return node

    def _tag_name(self, tag: str, scope: dict[str, str]) -> str:
        name = QName.from_clark(tag)
        if not name.namespace:
            return name.local
        prefix = scope.get(name.namespace)
        if prefix is None:
            prefix = self._declare(name.namespace)
        return f"{prefix}:{name.local}" if prefix else name.local

    def _attribute_name(self, name: QName, scope: dict[str, str]) -> str:
        if not name.namespace:
            return name.local
        # Unprefixed attributes never take the default namespace.
        prefix = scope.get(name.namespace) or self._declare(name.namespace)
        return f"{prefix}:{name.local}"

    def _declare(self, uri: str) -> str:
        if uri in self._extra:
            return self._extra[uri]
        if uri == ANDROID_NS and ANDROID_PREFIX not in self._taken:
            prefix = ANDROID_PREFIX
        else:
            n = 0
            while f"ns{n}" in self._taken:
                n += 1
            prefix = f"ns{n}"
        self._taken.add(prefix)
        self._extra[uri] = prefix
        self._root_node.set(f"xmlns:{prefix}", uri)
        return prefix


def _declared_prefixes(element: Element) -> set[str]:
    prefixes = set(element.namespaces)
    for child in element.children:
        if isinstance(child, Element):
            prefixes |= _declared_prefixes(child)
    return prefixes
