"""Extract path descriptions from SVG documents.

Only the ``d`` attribute of ``<path>`` elements is read, in document
order.  Transforms, styles and other shape elements are ignored; the
plotter core receives one description string per path and knows nothing
about the document around it.
"""

from __future__ import annotations

import io
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import IO, Union
from xml.etree import ElementTree as ET

logger = logging.getLogger(__name__)

SvgSource = Union[str, Path, bytes, IO[bytes], IO[str]]


class SvgDocumentError(Exception):
    """Raised when the document is not well-formed XML."""

    pass


@dataclass(frozen=True)
class PathElement:
    """One ``<path>`` element.

    Parameters
    ----------
    index : int
        Position among the document's ``<path>`` elements.
    element_id : str | None
        The element's ``id`` attribute, if any.
    d : str
        Raw path description.
    """

    index: int
    element_id: str | None
    d: str

    @property
    def label(self) -> str:
        """Identity for log messages: the id, or ``#<index>``."""
        return self.element_id or f"#{self.index}"


def _local_name(tag: str) -> str:
    # "{http://www.w3.org/2000/svg}path" -> "path"
    return tag.rsplit("}", 1)[-1]


def _parse_tree(source: SvgSource) -> ET.Element:
    if isinstance(source, bytes):
        source = io.BytesIO(source)
    elif isinstance(source, str) and source.lstrip().startswith("<"):
        source = io.StringIO(source)
    try:
        return ET.parse(source).getroot()
    except ET.ParseError as e:
        raise SvgDocumentError(f"Failed to parse SVG document: {e}") from e


def extract_path_elements(source: SvgSource) -> list[PathElement]:
    """Return every ``<path>`` element that carries a ``d`` attribute.

    Parameters
    ----------
    source : str | Path | bytes | file object
        A file path, an open file, raw bytes, or SVG markup as a string.

    Raises
    ------
    SvgDocumentError
        If the document is not well-formed.
    FileNotFoundError
        If a path is given and does not exist.
    """
    root = _parse_tree(source)
    elements: list[PathElement] = []
    index = 0
    for node in root.iter():
        if not isinstance(node.tag, str) or _local_name(node.tag) != "path":
            continue
        d = node.get("d")
        if d is None or not d.strip():
            logger.warning(
                "Skipping <path> %s without path data",
                node.get("id") or f"#{index}",
            )
        else:
            elements.append(PathElement(index, node.get("id"), d))
        index += 1

    logger.debug("Found %d path elements", len(elements))
    return elements


def extract_path_descriptions(source: SvgSource) -> list[str]:
    """``d`` strings of every ``<path>`` element, in document order."""
    return [el.d for el in extract_path_elements(source)]
