"""
Renders the viewer state as text: a list of the changed files and the diff of the selected file.
"""

from dataclasses import dataclass
from typing import Optional

from injector import inject

from config import Config
from file_diff import DiffChunk, DiffLine, FileDiff, FileStatus
from labels import (ANSI_BOLD, ANSI_CYAN, ANSI_DIM, ANSI_RESET, ansi_color_for,
                    format_lineno, label_for, prefix_for)
from viewer_state import NO_SELECTION, DiffViewerState

NO_DIFFS_LOADED = "No changes loaded."
NO_FILE_SELECTED = "Select a file to view its diff."
NO_DIFF_CONTENT = "No diff content (likely binary)."
CHUNK_SEPARATOR = "..."
SELECTED_MARKER = "▶ "
UNSELECTED_MARKER = "  "


@inject
@dataclass
class DiffRenderer:
	config: Config

	def _paint(self, text: str, color: Optional[str]) -> str:
		if color is None or not self.config.get('use_color', True):
			return text
		return f'{color}{text}{ANSI_RESET}'

	def render_file_entry(self, file_diff: FileDiff, is_selected: bool = False) -> str:
		marker = SELECTED_MARKER if is_selected else UNSELECTED_MARKER
		badge = self._paint(f'[{label_for(file_diff.status)}]', ansi_color_for(file_diff.status))
		name = file_diff.display_path
		if is_selected:
			name = self._paint(name, ANSI_BOLD)
		return f'{marker}{badge} {name}'

	def render_file_list(self, state: DiffViewerState, error: Optional[str] = None) -> list[str]:
		diffs, selected_index = state.snapshot()
		return self._render_file_list(diffs, selected_index, error)

	def _render_file_list(self, diffs: tuple[FileDiff, ...], selected_index: int, error: Optional[str]) -> list[str]:
		result = []
		if error is not None:
			result.append(f"Error: {error}")
		elif len(diffs) == 0:
			result.append(NO_DIFFS_LOADED)
		for index, file_diff in enumerate(diffs):
			result.append(self.render_file_entry(file_diff, is_selected=index == selected_index))
		return result

	def render_line(self, line: DiffLine) -> str:
		width = self.config.get('lineno_width', 4)
		numbers = f'{format_lineno(line.old_lineno, width)} {format_lineno(line.new_lineno, width)} '
		text = prefix_for(line.origin) + line.content.rstrip('\r\n')
		return self._paint(numbers, ANSI_DIM) + self._paint(text, ansi_color_for(line.origin))

	def render_chunk(self, chunk: DiffChunk) -> list[str]:
		return [self._paint(chunk.header, ANSI_CYAN)] + [self.render_line(line) for line in chunk.lines]

	def render_header(self, file_diff: FileDiff) -> str:
		result = f'{file_diff.status.value}: {file_diff.display_path}'
		if file_diff.status is FileStatus.RENAMED and file_diff.old_path is not None and file_diff.old_path != file_diff.new_path:
			result += f' ← {file_diff.old_path}'
		elif file_diff.status is FileStatus.UNKNOWN and file_diff.raw_status is not None:
			result += f' ({file_diff.raw_status})'
		return self._paint(result, ANSI_BOLD)

	def render_file_diff(self, file_diff: Optional[FileDiff]) -> list[str]:
		if file_diff is None:
			return [NO_FILE_SELECTED]
		result = [self.render_header(file_diff)]
		if not file_diff.has_content:
			result.append(NO_DIFF_CONTENT)
			return result
		for chunk_num, chunk in enumerate(file_diff.chunks):
			if chunk_num > 0:
				result.append(self._paint(CHUNK_SEPARATOR, ANSI_DIM))
			result.extend(self.render_chunk(chunk))
		return result

	def render(self, state: DiffViewerState, error: Optional[str] = None) -> str:
		# The list and the selected diff must come from the same reload.
		diffs, selected_index = state.snapshot()
		lines = self._render_file_list(diffs, selected_index, error)
		lines.append('')
		selected = diffs[selected_index] if selected_index != NO_SELECTION else None
		lines.extend(self.render_file_diff(selected))
		return '\n'.join(lines)
