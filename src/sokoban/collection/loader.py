from __future__ import annotations

import logging
import os
import xml.etree.ElementTree as ET
from importlib.resources import files as resource_files
from typing import IO, List, Union

from sokoban.exceptions import CollectionLoadError, InvalidCharError, LoadErrorKind
from sokoban.game.grammar import parse_level
from sokoban.game.level import Level

logger = logging.getLogger(__name__)

Source = Union[str, "os.PathLike[str]", IO[bytes], IO[str]]

LEVEL_TAG = "Level"
ROW_TAG = "L"
TITLE_ATTR = "Id"


def _local_name(tag: str) -> str:
    # ElementTree reports namespaced tags as "{uri}local".
    return tag.rsplit("}", 1)[-1]


def _describe(source: Source) -> str:
    if isinstance(source, (str, os.PathLike)):
        return os.fspath(source)
    name = getattr(source, "name", None)
    return str(name) if name else "<stream>"


def _read_levels(stream: Union[IO[bytes], IO[str]]) -> List[Level]:
    levels: List[Level] = []
    buffer: List[str] = []
    title = ""
    collecting = False
    # Open elements, outermost first; finished levels are detached from their parent.
    open_elems: List[ET.Element] = []

    for event, elem in ET.iterparse(stream, events=("start", "end")):
        name = _local_name(elem.tag)
        if event == "start":
            open_elems.append(elem)
            if name == ROW_TAG:
                collecting = True
            elif name == LEVEL_TAG:
                # A level without an Id is untitled; titles never carry over.
                title = elem.attrib.get(TITLE_ATTR, "")
            continue

        open_elems.pop()
        if name == ROW_TAG:
            if collecting:
                buffer.append((elem.text or "") + "\n")
            collecting = False
        elif name == LEVEL_TAG:
            level = parse_level("".join(buffer))
            level.set_title(title)
            levels.append(level)
            logger.debug("Loaded level #%d %r", len(levels), title)
            buffer.clear()
            elem.clear()
            if open_elems:
                open_elems[-1].remove(elem)

    return levels


def load_collection(source: Source) -> List[Level]:
    """Load every level of an SLC collection, in document order.

    ``source`` may be a path or an open (binary or text) stream. Streams are
    left open. Any failure aborts the whole load with a CollectionLoadError:
    no partial collection is returned.
    """
    where = _describe(source)
    try:
        if isinstance(source, (str, os.PathLike)):
            with open(source, "rb") as fh:
                levels = _read_levels(fh)
        else:
            levels = _read_levels(source)
    except OSError as exc:
        logger.error("Cannot read level collection %s: %s", where, exc)
        raise CollectionLoadError(
            f"Cannot read level collection {where}: {exc}", LoadErrorKind.IO, where
        ) from exc
    except ET.ParseError as exc:
        logger.error("Malformed level collection %s: %s", where, exc)
        raise CollectionLoadError(
            f"Malformed level collection {where}: {exc}", LoadErrorKind.SYNTAX, where
        ) from exc
    except UnicodeDecodeError as exc:
        logger.error("Cannot decode level collection %s: %s", where, exc)
        raise CollectionLoadError(
            f"Cannot decode level collection {where}: {exc}", LoadErrorKind.IO, where
        ) from exc
    except InvalidCharError as exc:
        logger.error("Invalid level in collection %s: %s", where, exc)
        raise CollectionLoadError(
            f"Invalid level in collection {where}: {exc}", LoadErrorKind.PARSE, where
        ) from exc

    logger.info("Loaded %d levels from %s", len(levels), where)
    return levels


def load_bundled_collection(name: str = "tutorial.slc") -> List[Level]:
    """Load a collection shipped inside the ``sokoban.data`` package."""
    resource = resource_files("sokoban.data").joinpath(name)
    try:
        with resource.open("rb") as fh:
            return load_collection(fh)
    except OSError as exc:
        raise CollectionLoadError(
            f"Bundled collection not found: {name}", LoadErrorKind.IO, name
        ) from exc


__all__ = ["load_collection", "load_bundled_collection"]
