from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


class LineOrigin(Enum):
	"""
	The origins of a line that are handled explicitly.
	The values are the tokens that the backend sends.
	"""

	ADDITION = 'Addition'
	DELETION = 'Deletion'
	CONTEXT = 'Context'


@dataclass(frozen=True)
class OtherOrigin:
	"""
	Any origin that the backend sends that is not a `LineOrigin`.
	For example: "no newline at end of file" or "binary".
	"""

	raw_label: str
	"""
	The label exactly as the backend sent it.
	"""


Origin = LineOrigin | OtherOrigin


class FileStatus(Enum):
	ADDED = 'Added'
	DELETED = 'Deleted'
	MODIFIED = 'Modified'
	RENAMED = 'Renamed'

	UNKNOWN = 'Unknown'
	"""
	Display-only status for anything the backend sends that is not one of the other statuses.
	"""


_KNOWN_ORIGINS = {o.value: o for o in LineOrigin}
_KNOWN_STATUSES = {s.value: s for s in FileStatus if s is not FileStatus.UNKNOWN}


def classify_origin(raw: str) -> Origin:
	return _KNOWN_ORIGINS.get(raw) or OtherOrigin(raw)


def classify_status(raw: str) -> FileStatus:
	return _KNOWN_STATUSES.get(raw, FileStatus.UNKNOWN)


@dataclass
class DiffLine:
	origin: Origin
	content: str
	"""
	The text of the line without the leading `+`, `-`, or ` `.
	"""

	old_lineno: Optional[int] = None
	"""
	`None` when the line does not exist in the old version of the file.
	"""
	new_lineno: Optional[int] = None
	"""
	`None` when the line does not exist in the new version of the file.
	"""


@dataclass
class DiffChunk:
	header: str
	"""
	For example: "@@ -10,6 +10,12 @@".
	Only used for display.
	"""
	lines: list[DiffLine] = field(default_factory=list)


@dataclass
class FileDiff:
	status: FileStatus
	old_path: Optional[str] = None
	new_path: Optional[str] = None
	chunks: list[DiffChunk] = field(default_factory=list)
	"""
	In the order that they appear in the file.
	Empty for binary files.
	"""
	raw_status: Optional[str] = None
	"""
	The status that the backend sent when `status` is `FileStatus.UNKNOWN`.
	"""

	def __post_init__(self) -> None:
		if self.old_path is None and self.new_path is None:
			raise ValueError("A file diff needs at least one of `old_path` or `new_path`.")

	@property
	def display_path(self) -> str:
		result = self.new_path if self.new_path is not None else self.old_path
		assert result is not None
		return result

	@property
	def has_content(self) -> bool:
		return len(self.chunks) > 0
