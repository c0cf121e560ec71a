# hexprobe/services/probe/parsers/isobmff.py
"""ISO base media file format box walking shared by the MP4 and HEIF parsers."""
from __future__ import annotations

from dataclasses import dataclass
from typing import AbstractSet, Iterator, List, Optional, Tuple

from hexprobe.domain.errors import MalformedInputError, TruncatedDataError
from hexprobe.services.probe.parsers.byte_cursor import ByteCursor

BOX_HEADER_SIZE = 8
LARGE_BOX_HEADER_SIZE = 16


@dataclass(frozen=True)
class Box:
    type: str
    start: int
    header_size: int
    end: int

    @property
    def payload_start(self) -> int:
        return self.start + self.header_size

    @property
    def payload_size(self) -> int:
        return self.end - self.payload_start


def read_box(data: bytes, offset: int, limit: Optional[int] = None) -> Box:
    """
    Decode the box header at ``offset``. Size 0 extends to ``limit``; size 1
    means a 64-bit size follows the type. Raises on sizes that cannot hold a
    header or that overrun ``limit``.
    """
    limit = len(data) if limit is None else limit
    if offset + BOX_HEADER_SIZE > limit:
        raise TruncatedDataError(f"box header at {offset} runs past {limit}")
    cur = ByteCursor(data, offset)
    size = cur.u32be()
    box_type = cur.ascii(4)
    header = BOX_HEADER_SIZE
    if size == 1:
        if offset + LARGE_BOX_HEADER_SIZE > limit:
            raise TruncatedDataError(f"64-bit size of '{box_type}' at {offset} runs past {limit}")
        size = cur.u64be()
        header = LARGE_BOX_HEADER_SIZE
    elif size == 0:
        size = limit - offset
    if size < header:
        raise MalformedInputError(f"box '{box_type}' at {offset} has invalid size {size}")
    if offset + size > limit:
        raise TruncatedDataError(f"box '{box_type}' at {offset} ({size} bytes) runs past {limit}")
    return Box(type=box_type, start=offset, header_size=header, end=offset + size)


def iter_boxes(data: bytes, start: int = 0, end: Optional[int] = None, *, strict: bool = True) -> Iterator[Box]:
    """Sibling boxes in ``[start, end)``. With ``strict=False`` a bad header ends the walk quietly."""
    end = len(data) if end is None else end
    offset = start
    while offset + BOX_HEADER_SIZE <= end:
        try:
            box = read_box(data, offset, end)
        except (MalformedInputError, TruncatedDataError):
            if strict:
                raise
            return
        yield box
        offset = box.end


def children_start(data: bytes, box: Box) -> int:
    """Offset of the first child; full-box containers carry version/flags (and counts) first."""
    skip = 0
    if box.type == "meta":
        skip = 4
    elif box.type == "stsd":
        skip = 8  # version/flags + entry_count
    elif box.type == "iinf":
        if box.payload_size < 1:
            return box.end
        skip = 4 + (2 if full_box_version(data, box) == 0 else 4)
    if box.payload_size < skip:
        return box.end
    return box.payload_start + skip


def walk(
    data: bytes,
    containers: AbstractSet[str],
    start: int = 0,
    end: Optional[int] = None,
    *,
    strict: bool = True,
    max_depth: int = 32,
    max_boxes: int = 10_000,
) -> Iterator[Tuple[Box, Optional[Box]]]:
    """
    Depth-first, document-order walk yielding ``(box, parent)``. Only boxes
    whose type is in ``containers`` are descended into. Uses an explicit
    stack; nesting deeper than ``max_depth`` or more than ``max_boxes``
    boxes raises ``MalformedInputError``. ``strict`` applies to the top
    level only, nested runs stop quietly at the first bad header.
    """
    stack: List[Tuple[Iterator[Box], Optional[Box], int]] = [
        (iter_boxes(data, start, end, strict=strict), None, 0)
    ]
    visited = 0
    while stack:
        boxes, parent, depth = stack[-1]
        box = next(boxes, None)
        if box is None:
            stack.pop()
            continue
        visited += 1
        if visited > max_boxes:
            raise MalformedInputError(f"more than {max_boxes} boxes")
        yield box, parent
        if box.type in containers:
            if depth + 1 > max_depth:
                raise MalformedInputError(f"boxes nested deeper than {max_depth} levels at {box.start}")
            first = children_start(data, box)
            stack.append((iter_boxes(data, first, box.end, strict=False), box, depth + 1))


def major_brand(data: bytes) -> Optional[str]:
    """Major brand of a leading ``ftyp`` box, unstripped; None when there is no ftyp."""
    if len(data) < 12 or data[4:8] != b"ftyp":
        return None
    return data[8:12].decode("ascii", errors="replace")


def full_box_version(data: bytes, box: Box) -> int:
    return ByteCursor(data, box.payload_start).u8()
