import threading
from dataclasses import dataclass, field
from typing import Iterable, Optional

from file_diff import FileDiff

NO_SELECTION = -1


@dataclass
class DiffViewerState:
	"""
	The list of file diffs being viewed and which one is selected.
	Either empty with no selection or loaded with exactly one selected file diff.
	`diffs` and `selected_index` only change together through `reload` and the `select` methods.
	"""

	_diffs: tuple[FileDiff, ...] = field(default=(), init=False)
	_selected_index: int = field(default=NO_SELECTION, init=False)
	_lock: threading.Lock = field(default_factory=threading.Lock, init=False, repr=False, compare=False)

	@property
	def diffs(self) -> tuple[FileDiff, ...]:
		return self._diffs

	@property
	def selected_index(self) -> int:
		"""
		`NO_SELECTION` (-1) when there are no diffs.
		"""
		return self._selected_index

	@property
	def is_empty(self) -> bool:
		return len(self._diffs) == 0

	def reload(self, new_diffs: Iterable[FileDiff]) -> None:
		"""
		Replaces all of the diffs.
		The previous selection is always discarded because the files may have changed.
		"""
		diffs = tuple(new_diffs)
		with self._lock:
			self._diffs = diffs
			self._selected_index = 0 if len(diffs) > 0 else NO_SELECTION

	def select(self, index: int) -> bool:
		"""
		Out of range indices are ignored.
		:returns: `True` if `index` is now selected.
		"""
		with self._lock:
			if not 0 <= index < len(self._diffs):
				return False
			self._selected_index = index
			return True

	def select_next(self) -> bool:
		with self._lock:
			if self._selected_index + 1 >= len(self._diffs):
				return False
			self._selected_index += 1
			return True

	def select_previous(self) -> bool:
		with self._lock:
			if self._selected_index <= 0:
				return False
			self._selected_index -= 1
			return True

	def selected_diff(self) -> Optional[FileDiff]:
		with self._lock:
			if self._selected_index == NO_SELECTION:
				return None
			return self._diffs[self._selected_index]

	def snapshot(self) -> tuple[tuple[FileDiff, ...], int]:
		"""
		:returns: The diffs and the selected index as they were at the same moment.
		"""
		with self._lock:
			return self._diffs, self._selected_index
