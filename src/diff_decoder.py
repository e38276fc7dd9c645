"""
Turns the diff sets that the backend sends into `FileDiff`s.
"""

from dataclasses import dataclass, field
import logging
from typing import Any, Optional

from injector import inject

from file_diff import (DiffChunk, DiffLine, FileDiff, FileStatus, Origin, OtherOrigin,
                       classify_origin, classify_status)

OTHER_ORIGIN_KEY = 'Other'


class MalformedEntryError(ValueError):
    """
    Raised for one entry in a diff set that cannot be decoded.
    """


@dataclass
class DecodeResult:
    diffs: list[FileDiff] = field(default_factory=list)
    num_skipped: int = 0
    """
    The number of entries that were dropped because they were malformed.
    """


def decode_origin(raw: Any) -> Origin:
    """
    The backend sends the known origins as strings and anything else as `{"Other": "<label>"}`.
    Never fails.
    """
    if isinstance(raw, str):
        return classify_origin(raw)
    if isinstance(raw, dict) and len(raw) == 1 and OTHER_ORIGIN_KEY in raw:
        label = raw[OTHER_ORIGIN_KEY]
        return OtherOrigin(label if isinstance(label, str) else str(label))
    return OtherOrigin(str(raw))


def _optional_str(entry: dict, key: str) -> Optional[str]:
    value = entry.get(key)
    if value is not None and not isinstance(value, str):
        raise MalformedEntryError(f"`{key}` must be a string. Got: {value!r} with type: {type(value)}")
    return value


def _optional_lineno(entry: dict, key: str) -> Optional[int]:
    value = entry.get(key)
    # `bool` is a subclass of `int`.
    if value is not None and (not isinstance(value, int) or isinstance(value, bool)):
        raise MalformedEntryError(f"`{key}` must be an integer. Got: {value!r} with type: {type(value)}")
    return value


def _list(entry: dict, key: str) -> list:
    value = entry.get(key)
    if value is None:
        return []
    if not isinstance(value, list):
        raise MalformedEntryError(f"`{key}` must be a list. Got: {value!r} with type: {type(value)}")
    return value


def decode_line(entry: Any) -> DiffLine:
    if not isinstance(entry, dict):
        raise MalformedEntryError(f"A line must be an object. Got: {entry!r}")
    return DiffLine(
        origin=decode_origin(entry.get('origin')),
        content=_optional_str(entry, 'content') or '',
        old_lineno=_optional_lineno(entry, 'old_lineno'),
        new_lineno=_optional_lineno(entry, 'new_lineno'),
    )


def decode_chunk(entry: Any) -> DiffChunk:
    if not isinstance(entry, dict):
        raise MalformedEntryError(f"A chunk must be an object. Got: {entry!r}")
    return DiffChunk(
        header=_optional_str(entry, 'header') or '',
        lines=[decode_line(line) for line in _list(entry, 'lines')],
    )


def decode_file_diff(entry: Any) -> FileDiff:
    if not isinstance(entry, dict):
        raise MalformedEntryError(f"A file diff must be an object. Got: {entry!r}")
    old_path = _optional_str(entry, 'old_path')
    new_path = _optional_str(entry, 'new_path')
    if old_path is None and new_path is None:
        raise MalformedEntryError("A file diff must have at least one of `old_path` or `new_path`.")
    raw_status = entry.get('status')
    if raw_status is None:
        status = FileStatus.UNKNOWN
    else:
        raw_status = raw_status if isinstance(raw_status, str) else str(raw_status)
        status = classify_status(raw_status)
    return FileDiff(
        status=status,
        old_path=old_path,
        new_path=new_path,
        chunks=[decode_chunk(chunk) for chunk in _list(entry, 'chunks')],
        raw_status=raw_status if status is FileStatus.UNKNOWN else None,
    )


@inject
@dataclass
class DiffDecoder:
    logger: logging.Logger

    def decode(self, entries: list) -> DecodeResult:
        """
        Decodes every entry that can be decoded.
        A malformed entry is skipped so that it does not hide the rest of the diff set.
        """
        result = DecodeResult()
        for index, entry in enumerate(entries):
            try:
                file_diff = decode_file_diff(entry)
            except MalformedEntryError as e:
                result.num_skipped += 1
                self.logger.warning("Skipping malformed diff entry at index %d: %s", index, e)
                continue
            if file_diff.status is FileStatus.UNKNOWN:
                self.logger.debug("Unknown status '%s' for \"%s\".", file_diff.raw_status, file_diff.display_path)
            result.diffs.append(file_diff)

        if result.num_skipped > 0:
            self.logger.warning("Skipped %d of %d diff entries.", result.num_skipped, len(entries))
        return result
