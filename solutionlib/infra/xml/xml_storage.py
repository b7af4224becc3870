"""Module: xml_storage.py.

Author: Michael Economou
Date: 2026-03-07

Tree-native solution format (.solxml).

The whole document is written at once:

    <Solution formatVersion="1">
      <ItemTypes>
        <ItemType code="0" name="SOLUTION_ROOT"/>
      </ItemTypes>
      <Item name="..." type="2" expanded="true">
        <Metadata><Entry key="..." value="..."/></Metadata>
        <Item .../>
      </Item>
    </Solution>

The embedded ItemTypes snapshot is checked exactly like the snapshot of a
SQLite solution file before any Item is trusted.
"""

import os
import re
import xml.etree.ElementTree as ET
from collections import deque
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import BinaryIO
from xml.sax.saxutils import XMLGenerator

from solutionlib.config import STAGING_SUFFIX, XML_FORMAT_VERSION
from solutionlib.domain.errors import (
    IncompatibleSchemaError,
    StorageIOError,
    UnknownItemTypeError,
)
from solutionlib.domain.item_types import (
    ITEM_TYPE_NAMES,
    ITEM_TYPE_TABLE,
    ITEM_TYPE_VALUES,
    item_type_from_code,
    validate_item_type_snapshot,
)
from solutionlib.domain.results import StoreRecordCounts
from solutionlib.domain.solution_model import SolutionItemModel, SolutionModel
from solutionlib.utils.logging.logger_factory import get_cached_logger

logger = get_cached_logger(__name__)

ROOT_TAG = "Solution"
ITEM_TYPES_TAG = "ItemTypes"
ITEM_TYPE_TAG = "ItemType"
ITEM_TAG = "Item"
METADATA_TAG = "Metadata"
ENTRY_TAG = "Entry"

# Anything outside the XML 1.0 Char production
_INVALID_XML_CHAR = re.compile("[^\t\n\r\x20-\uD7FF\uE000-\uFFFD\U00010000-\U0010FFFF]")


def write_xml_to_file(
    path: str | os.PathLike[str],
    model: SolutionModel,
    item_type_names: Sequence[str] = ITEM_TYPE_NAMES,
    item_type_values: Sequence[int] = ITEM_TYPE_VALUES,
) -> StoreRecordCounts:
    """Serialize ``model`` to ``path``.

    The document goes to ``<path>.tmp`` first and replaces ``path`` only
    once it is completely written. Nothing is written when a name or a
    metadata entry holds characters XML 1.0 cannot represent.

    Raises:
        StorageIOError: if the file cannot be written or the model holds
            text that cannot be stored in XML

    """
    target = Path(path)
    staging = target.with_name(target.name + STAGING_SUFFIX)
    logger.info("[XmlStorage] Writing data into XML file: '%s'", target)

    item_count = _check_document_text(model, item_type_names, item_type_values)

    try:
        with open(staging, "wb") as out:
            _write_document(out, model, item_type_names, item_type_values)
        os.replace(staging, target)
    except OSError as e:
        _remove_staging(staging)
        raise StorageIOError(f"Failed to write solution file '{target}': {e}") from e

    counts = StoreRecordCounts(len(item_type_names), item_count)
    logger.info("[XmlStorage] %s written to '%s'", counts, target)
    return counts


def read_xml_from_file(
    path: str | os.PathLike[str], registry: Mapping[int, str] = ITEM_TYPE_TABLE
) -> tuple[SolutionModel, StoreRecordCounts]:
    """Parse a .solxml document into a SolutionModel.

    Raises:
        StorageIOError: if the file cannot be read or is not well-formed
        IncompatibleSchemaError: if the format version or item-type snapshot
            does not match this version

    """
    target = Path(path)
    try:
        document = ET.parse(target).getroot()
    except ET.ParseError as e:
        raise StorageIOError(f"Solution file '{target}' is not well-formed XML: {e}") from e
    except OSError as e:
        raise StorageIOError(f"Cannot read solution file '{target}': {e}") from e

    if document.tag != ROOT_TAG:
        raise IncompatibleSchemaError(
            f"'{target.name}' is not a solution document (root element <{document.tag}>)"
        )

    version = document.get("formatVersion")
    if version != str(XML_FORMAT_VERSION):
        raise IncompatibleSchemaError(
            f"Solution document format {version!r} is not supported "
            f"(expected {XML_FORMAT_VERSION})"
        )

    snapshot = _read_snapshot(document)
    validate_item_type_snapshot(snapshot, registry)

    model, item_count = _read_items(document)
    counts = StoreRecordCounts(len(snapshot), item_count)
    logger.info("[XmlStorage] %s read from '%s'", counts, target)
    return model, counts


def _check_document_text(
    model: SolutionModel, names: Sequence[str], values: Sequence[int]
) -> int:
    """Validate every text that ends up in an attribute; returns the item count."""
    if len(names) != len(values):
        raise ValueError(
            f"Item type names and values differ in length ({len(names)} != {len(values)})"
        )

    for name in names:
        _check_xml_text(str(name), f"Item type name {str(name)!r}")

    count = 0
    for item in model.iter_items():
        _check_xml_text(item.display_name, f"Name of item {item.display_name!r}")
        for key, value in item.metadata.items():
            _check_xml_text(key, f"Metadata key {key!r} of item {item.display_name!r}")
            _check_xml_text(value, f"Metadata value of '{key}' on item {item.display_name!r}")
        count += 1
    return count


def _check_xml_text(text: str, what: str) -> None:
    match = _INVALID_XML_CHAR.search(text)
    if match is not None:
        raise StorageIOError(
            f"{what} contains character U+{ord(match.group()):04X}, "
            "which cannot be stored in an XML solution file"
        )


def _write_document(
    out: BinaryIO, model: SolutionModel, names: Sequence[str], values: Sequence[int]
) -> None:
    """Stream the document through XMLGenerator, depth-first with an explicit stack."""
    writer = XMLGenerator(out, encoding="utf-8", short_empty_elements=True)
    writer.startDocument()
    writer.startElement(ROOT_TAG, {"formatVersion": str(XML_FORMAT_VERSION)})

    _indent(writer, 1)
    writer.startElement(ITEM_TYPES_TAG, {})
    for name, value in zip(names, values, strict=True):
        _indent(writer, 2)
        writer.startElement(ITEM_TYPE_TAG, {"code": str(int(value)), "name": str(name)})
        writer.endElement(ITEM_TYPE_TAG)
    if names:
        _indent(writer, 1)
    writer.endElement(ITEM_TYPES_TAG)

    # (item, depth, closing): closing entries end an element whose children are written
    stack: list[tuple[SolutionItemModel, int, bool]] = []
    if model.root is not None:
        stack.append((model.root, 1, False))
    while stack:
        item, depth, closing = stack.pop()
        _indent(writer, depth)
        if closing:
            writer.endElement(ITEM_TAG)
            continue

        writer.startElement(
            ITEM_TAG,
            {
                "name": item.display_name,
                "type": str(int(item.item_type)),
                "expanded": "true" if item.is_expanded else "false",
            },
        )
        if not item.metadata and not item.children:
            writer.endElement(ITEM_TAG)
            continue

        if item.metadata:
            _indent(writer, depth + 1)
            writer.startElement(METADATA_TAG, {})
            for key, value in sorted(item.metadata.items()):
                _indent(writer, depth + 2)
                writer.startElement(ENTRY_TAG, {"key": key, "value": value})
                writer.endElement(ENTRY_TAG)
            _indent(writer, depth + 1)
            writer.endElement(METADATA_TAG)

        stack.append((item, depth, True))
        stack.extend((child, depth + 1, False) for child in reversed(item.children))

    _indent(writer, 0)
    writer.endElement(ROOT_TAG)
    writer.ignorableWhitespace("\n")
    writer.endDocument()


def _indent(writer: XMLGenerator, depth: int) -> None:
    writer.ignorableWhitespace("\n" + "  " * depth)



def _read_snapshot(document: ET.Element) -> dict[int, str]:
    types_element = document.find(ITEM_TYPES_TAG)
    if types_element is None:
        raise IncompatibleSchemaError("Solution document has no item type table")

    snapshot: dict[int, str] = {}
    for element in types_element.findall(ITEM_TYPE_TAG):
        code, name = element.get("code"), element.get("name")
        try:
            snapshot[int(code)] = name if name is not None else ""
        except (TypeError, ValueError):
            raise StorageIOError(f"Invalid item type code in solution document: {code!r}") from None
    return snapshot


def _read_items(document: ET.Element) -> tuple[SolutionModel, int]:
    model = SolutionModel()
    roots = document.findall(ITEM_TAG)
    if not roots:
        return model, 0
    if len(roots) > 1:
        raise StorageIOError(f"Solution document must contain one root item, found {len(roots)}")

    root = model.set_root(_element_to_item(model, roots[0]))
    count = 1
    queue: deque[tuple[ET.Element, SolutionItemModel]] = deque([(roots[0], root)])
    while queue:
        element, item = queue.popleft()
        for child_element in element.findall(ITEM_TAG):
            child = item.add_child(_element_to_item(model, child_element))
            queue.append((child_element, child))
            count += 1
    return model, count


def _element_to_item(model: SolutionModel, element: ET.Element) -> SolutionItemModel:
    name = element.get("name")
    if name is None:
        raise StorageIOError("Solution document contains an item without a name")

    raw_type = element.get("type")
    try:
        item_type = item_type_from_code(int(raw_type))
    except (TypeError, ValueError):
        raise StorageIOError(f"Item '{name}' has an invalid type {raw_type!r}") from None
    except UnknownItemTypeError:
        raise IncompatibleSchemaError(
            f"Item '{name}' uses item type code {raw_type} unknown to this version"
        ) from None

    metadata: dict[str, str] = {}
    metadata_element = element.find(METADATA_TAG)
    if metadata_element is not None:
        for entry in metadata_element.findall(ENTRY_TAG):
            key = entry.get("key")
            if key is not None:
                metadata[key] = entry.get("value", "")

    return model.create_item(
        item_type,
        name,
        is_expanded=element.get("expanded", "false").lower() == "true",
        metadata=metadata,
    )


def _remove_staging(staging: Path) -> None:
    try:
        staging.unlink(missing_ok=True)
    except OSError as e:
        logger.warning("[XmlStorage] Could not remove %s: %s", staging, e)
