"""
Editing session - the single writer of a Document

Every edit goes through one of a handful of operations:

    update(path, value)                  replace a scalar field
    update_item(list_name, key, field, value)
    insert(list_name, entity=None)       append with a fresh identifier
    remove_at(list_name, index)          positional removal
    remove(list_name, entity_id)         identifier-keyed removal
    set_logo(payload, mime_type)         store the invoice logo reference

Each operation builds a complete new snapshot and publishes it under a lock,
so readers of ``session.snapshot`` never observe a half-applied edit.
Operations never trigger derivations; callers pull chart/finance/page data
from the snapshot when they need it.

Usage:
    from report_studio.domain.session import EditingSession

    session = EditingSession()
    session.update("meta.month", "06")
    session.update("assets[NAS-01].status", "Warning")
    session.insert("invoice.items")
    session.remove_at("news", 0)

    document = session.snapshot
"""

import base64
import itertools
import re
import threading
from collections.abc import Callable, Iterator
from dataclasses import dataclass, fields, is_dataclass, replace
from enum import Enum
from typing import Any

from ..core.logging_config import get_logger
from .defaults import default_document
from .document import Asset, AssetStatus, ChangeLogEntry, Document, EvidenceItem, LineItem, NewsItem, ResourceStat, ThreatStat
from .errors import IndexOutOfRangeError, InvalidPathError, UnsupportedOperationError

logger = get_logger(__name__)

_PATH_PATTERN = re.compile(r"[A-Za-z_]\w*(\[[^\]]+\])?(\.[A-Za-z_]\w*(\[[^\]]+\])?)*")
_SEGMENT_PATTERN = re.compile(r"([A-Za-z_]\w*)(?:\[([^\]]+)\])?")

# Axis labels are fixed by the template
_READ_ONLY_FIELDS: dict[type, frozenset[str]] = {ResourceStat: frozenset({"month"})}


@dataclass(frozen=True)
class ListSpec:
    """
    How a list inside the Document may be edited.

    Attributes:
        path: Attribute path from the Document to the tuple
        entity_type: Class of the list members
        mutable: Whether insert/remove are allowed (False = fixed-size list)
        id_prefix: Prefix for generated identifiers
        id_width: Zero padding of the numeric part (0 = none)
        template: Builds a blank member for insert() without an entity
    """

    path: tuple[str, ...]
    entity_type: type
    mutable: bool = True
    id_prefix: str = ""
    id_width: int = 0
    template: Callable[[Document, str], Any] | None = None

    @property
    def identified(self) -> bool:
        return any(f.name == "id" for f in fields(self.entity_type))

    def format_id(self, number: int) -> str:
        return f"{self.id_prefix}{number:0{self.id_width}d}"


def _new_asset(document: Document, entity_id: str) -> Asset:
    return Asset(
        id=entity_id,
        host_name="Re:Veil-New",
        role="セキュアスマホ (Re:Veil)",
        os="GrapheneOS",
        status=AssetStatus.HEALTHY,
        detail="Initial Setup",
    )


def _new_change(document: Document, entity_id: str) -> ChangeLogEntry:
    return ChangeLogEntry(
        id=entity_id,
        date=f"{document.meta.month}/XX",
        type="定期メンテ",
        content="作業内容を入力",
        result="完了",
        owner="担当者",
    )


def _new_news(document: Document, entity_id: str) -> NewsItem:
    return NewsItem(id=entity_id, title="New Article", date="")


def _new_line_item(document: Document, entity_id: str) -> LineItem:
    return LineItem(id=entity_id, description="", quantity=1, unit_price=0)


LISTS: dict[str, ListSpec] = {
    "assets": ListSpec(("assets",), Asset, id_prefix="MOB-", id_width=3, template=_new_asset),
    "changes": ListSpec(("changes",), ChangeLogEntry, id_prefix="c", template=_new_change),
    "news": ListSpec(("news",), NewsItem, id_prefix="n", template=_new_news),
    "invoice.items": ListSpec(("invoice", "items"), LineItem, id_prefix="i", template=_new_line_item),
    "evidence": ListSpec(("evidence",), EvidenceItem, mutable=False),
    "threat_stats": ListSpec(("threat_stats",), ThreatStat, mutable=False),
    "resource_stats.storage": ListSpec(("resource_stats", "storage"), ResourceStat, mutable=False),
    "resource_stats.cpu": ListSpec(("resource_stats", "cpu"), ResourceStat, mutable=False),
}


# ── Pure snapshot transformations ───────────────────────────────────────


def _get_path(node: Any, path: tuple[str, ...]) -> Any:
    for name in path:
        node = getattr(node, name)
    return node


def _set_path(node: Any, path: tuple[str, ...], value: Any) -> Any:
    """Return a copy of ``node`` with the attribute at ``path`` replaced, sharing everything else."""
    name = path[0]
    if len(path) == 1:
        return replace(node, **{name: value})
    return replace(node, **{name: _set_path(getattr(node, name), path[1:], value)})


def _coerce(node: Any, name: str, value: Any) -> Any:
    field_type = next(f.type for f in fields(node) if f.name == name)
    if isinstance(field_type, type) and issubclass(field_type, Enum) and not isinstance(value, field_type):
        return field_type(value)
    return value


def _resolve_key(members: tuple, key: int | str, list_name: str) -> int:
    """
    Turn an identifier or index into a position in ``members``.

    Identity-bearing lists are addressed by identifier (a string); lists
    without identifiers by integer index. Negative indices are rejected.
    """
    if members and hasattr(members[0], "id") and isinstance(key, str):
        for position, member in enumerate(members):
            if member.id == key:
                return position
        raise IndexOutOfRangeError(list_name, key, len(members))

    try:
        index = int(key)
    except (TypeError, ValueError):
        raise IndexOutOfRangeError(list_name, key, len(members)) from None
    if not 0 <= index < len(members):
        raise IndexOutOfRangeError(list_name, index, len(members))
    return index


def _first_free_number(spec: ListSpec, members: tuple) -> int:
    """First counter value past the list length and every numbered identifier carrying the list's prefix."""
    highest = len(members)
    for member in members:
        if member.id.startswith(spec.id_prefix):
            suffix = member.id[len(spec.id_prefix) :]
            if suffix.isdigit():
                highest = max(highest, int(suffix))
    return highest + 1


def _parse_path(path: str) -> list[tuple[str, str | None]]:
    if not _PATH_PATTERN.fullmatch(path):
        raise InvalidPathError(path, "malformed path")
    # findall yields "" for an absent bracket group
    return [(name, key or None) for name, key in _SEGMENT_PATTERN.findall(path)]


def _replace_field(node: Any, segments: list[tuple[str, str | None]], value: Any, path: str, trail: str = "") -> Any:
    name, key = segments[0]
    if not is_dataclass(node) or name not in {f.name for f in fields(node)}:
        raise InvalidPathError(path, f"unknown field {name!r}")

    current = getattr(node, name)
    trail = f"{trail}.{name}" if trail else name

    if key is not None:
        if not isinstance(current, tuple):
            raise InvalidPathError(path, f"{trail} is not a list")
        if len(segments) == 1:
            raise InvalidPathError(path, "list entries are edited field by field")
        position = _resolve_key(current, key, trail)
        member = _replace_field(current[position], segments[1:], value, path)
        new_value = current[:position] + (member,) + current[position + 1 :]
    elif len(segments) > 1:
        new_value = _replace_field(current, segments[1:], value, path, trail)
    elif isinstance(current, tuple):
        raise InvalidPathError(path, "lists change only through insert/remove")
    elif is_dataclass(current):
        raise InvalidPathError(path, f"{trail} is a section, not a field")
    elif name == "id":
        raise InvalidPathError(path, "identifiers cannot be edited")
    elif name in _READ_ONLY_FIELDS.get(type(node), ()):
        raise InvalidPathError(path, f"{name} is read-only")
    else:
        new_value = _coerce(node, name, value)

    return replace(node, **{name: new_value})


def update_field(document: Document, path: str, value: Any) -> Document:
    """
    Return a new Document with the scalar field at ``path`` replaced.

    Args:
        document: Current snapshot (left untouched)
        path: Dotted field path, with ``[id]`` or ``[index]`` to address
            list members, e.g. ``"invoice.bank.swift"``,
            ``"assets[NAS-01].status"``, ``"threat_stats[0].count"``
        value: New value; enum fields also accept the enum's value string

    Returns:
        New Document snapshot

    Raises:
        InvalidPathError: If the path does not name an editable scalar field
        IndexOutOfRangeError: If a bracketed identifier/index does not resolve
    """
    return _replace_field(document, _parse_path(path), value, path)


def read_field(document: Document, path: str) -> Any:
    """
    Return the value at ``path`` (same syntax as update_field).

    Raises:
        InvalidPathError: If the path does not resolve to a field
        IndexOutOfRangeError: If a bracketed identifier/index does not resolve
    """
    node: Any = document
    for name, key in _parse_path(path):
        if not is_dataclass(node) or name not in {f.name for f in fields(node)}:
            raise InvalidPathError(path, f"unknown field {name!r}")
        node = getattr(node, name)
        if key is not None:
            if not isinstance(node, tuple):
                raise InvalidPathError(path, f"{name} is not a list")
            node = node[_resolve_key(node, key, name)]
    return node


def remove_entity_at(document: Document, list_name: str, index: int) -> Document:
    """Return a new Document without the member at ``index`` of ``list_name``."""
    spec = list_spec(list_name, mutating=True)
    members = _get_path(document, spec.path)
    if not isinstance(index, int) or not 0 <= index < len(members):
        raise IndexOutOfRangeError(list_name, index, len(members))
    return _set_path(document, spec.path, members[:index] + members[index + 1 :])


def list_spec(list_name: str, mutating: bool = False) -> ListSpec:
    """
    Look up the editing rules for a list.

    Raises:
        InvalidPathError: If ``list_name`` is not an editable list
        UnsupportedOperationError: If ``mutating`` and the list is fixed-size
    """
    spec = LISTS.get(list_name)
    if spec is None:
        raise InvalidPathError(list_name, f"unknown list (expected one of {', '.join(LISTS)})")
    if mutating and not spec.mutable:
        raise UnsupportedOperationError(f"{list_name} is a fixed-size list; entries can only be edited")
    return spec


# ── Session ─────────────────────────────────────────────────────────────


class EditingSession:
    """
    Owns the current Document and serialises every mutation.

    Identifiers for inserted entities come from a per-list counter that
    only moves forward. Each counter starts past both the list length and
    the highest numbered identifier of the starting document, so an
    identifier released by a removal is never handed out again within the
    session. Candidates that collide with an existing identifier are skipped.
    """

    def __init__(self, document: Document | None = None):
        self._document = document if document is not None else default_document()
        self._lock = threading.Lock()
        self._counters: dict[str, Iterator[int]] = {
            name: itertools.count(_first_free_number(spec, _get_path(self._document, spec.path)))
            for name, spec in LISTS.items()
            if spec.mutable
        }

    @property
    def snapshot(self) -> Document:
        """The latest committed Document."""
        return self._document

    def _publish(self, document: Document) -> Document:
        self._document = document
        return document

    def update(self, path: str, value: Any) -> Document:
        """Replace the scalar field at ``path``; see update_field() for the path syntax."""
        with self._lock:
            document = self._publish(update_field(self._document, path, value))
        logger.debug("Field updated", extra={"path": path})
        return document

    def update_item(self, list_name: str, key: int | str, field_name: str, value: Any) -> Document:
        """
        Replace one field of a list member.

        Args:
            list_name: Name from LISTS (e.g. "invoice.items")
            key: Identifier (str) for identity-bearing lists, index (int) otherwise
            field_name: Field of the member to replace
            value: New value

        Returns:
            New Document snapshot

        Raises:
            IndexOutOfRangeError: If ``key`` does not resolve
            InvalidPathError: If ``field_name`` is not an editable field
        """
        spec = list_spec(list_name)
        with self._lock:
            members = _get_path(self._document, spec.path)
            position = _resolve_key(members, key, list_name)
            path = f"{list_name}[{key}].{field_name}"
            member = _replace_field(members[position], [(field_name, None)], value, path)
            updated = members[:position] + (member,) + members[position + 1 :]
            document = self._publish(_set_path(self._document, spec.path, updated))
        logger.debug("List entry updated", extra={"list_name": list_name, "key": key, "field": field_name})
        return document

    def insert(self, list_name: str, entity: Any = None) -> Document:
        """
        Append an entity with a fresh, collision-free identifier.

        Args:
            list_name: One of "assets", "changes", "news", "invoice.items"
            entity: Entity to append; a blank template is used when omitted.
                A supplied entity is stored with a fresh identifier in place
                of its own.

        Returns:
            New Document snapshot

        Raises:
            UnsupportedOperationError: If the list is fixed-size
            TypeError: If ``entity`` is not of the list's entity type
        """
        spec = list_spec(list_name, mutating=True)
        if entity is not None and not isinstance(entity, spec.entity_type):
            raise TypeError(f"{list_name} holds {spec.entity_type.__name__}, got {type(entity).__name__}")

        with self._lock:
            members = _get_path(self._document, spec.path)
            taken = {member.id for member in members}
            if entity is None:
                entity = spec.template(self._document, self._next_id(list_name, spec, taken))
            else:
                entity = replace(entity, id=self._next_id(list_name, spec, taken))
            document = self._publish(_set_path(self._document, spec.path, members + (entity,)))

        logger.debug("List entry inserted", extra={"list_name": list_name, "entity_id": entity.id})
        return document

    def remove_at(self, list_name: str, index: int) -> Document:
        """
        Remove the member at ``index``; the remaining members keep their order and identifiers.

        Raises:
            IndexOutOfRangeError: If ``index`` is negative or >= the list length
            UnsupportedOperationError: If the list is fixed-size
        """
        with self._lock:
            document = self._publish(remove_entity_at(self._document, list_name, index))
        logger.debug("List entry removed", extra={"list_name": list_name, "index": index})
        return document

    def remove(self, list_name: str, entity_id: str) -> Document:
        """Remove the member whose identifier is ``entity_id``."""
        spec = list_spec(list_name, mutating=True)
        with self._lock:
            members = _get_path(self._document, spec.path)
            position = _resolve_key(members, str(entity_id), list_name)
            document = self._publish(remove_entity_at(self._document, list_name, position))
        logger.debug("List entry removed", extra={"list_name": list_name, "entity_id": entity_id})
        return document

    def set_logo(self, payload: bytes | str | None, mime_type: str = "image/png") -> Document:
        """
        Store the invoice logo reference.

        Args:
            payload: Raw image bytes (wrapped into a base64 data URI), a
                ready-made reference string (stored verbatim) or None to clear
            mime_type: Media type used when wrapping bytes

        Returns:
            New Document snapshot
        """
        if isinstance(payload, (bytes, bytearray)):
            encoded = base64.b64encode(bytes(payload)).decode("ascii")
            payload = f"data:{mime_type};base64,{encoded}"
        return self.update("invoice.logo_src", payload)

    def _next_id(self, list_name: str, spec: ListSpec, taken: set[str]) -> str:
        counter = self._counters[list_name]
        while True:
            candidate = spec.format_id(next(counter))
            if candidate not in taken:
                return candidate
