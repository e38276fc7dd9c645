from typing import Optional

from file_diff import FileStatus, LineOrigin, Origin, OtherOrigin

ANSI_GREEN = "\x1b[32m"
ANSI_RED = "\x1b[31m"
ANSI_YELLOW = "\x1b[33m"
ANSI_CYAN = "\x1b[36m"
ANSI_DIM = "\x1b[2m"
ANSI_BOLD = "\x1b[1m"
ANSI_RESET = "\x1b[0m"


def label_for(status: FileStatus) -> str:
    match status:
        case FileStatus.ADDED:
            return 'A'
        case FileStatus.DELETED:
            return 'D'
        case FileStatus.MODIFIED:
            return 'M'
        case FileStatus.RENAMED:
            return 'R'
    return '?'


def prefix_for(origin: Origin) -> str:
    """
    Unknown origins use the same prefix as context lines
    so that they are never shown as changed lines.
    """
    match origin:
        case LineOrigin.ADDITION:
            return '+'
        case LineOrigin.DELETION:
            return '-'
    return ' '


def color_class_for(value: FileStatus | Origin) -> str:
    """
    :returns: The badge variant for a status or the CSS class for a line.
    """
    match value:
        case FileStatus.ADDED:
            return 'success'
        case FileStatus.DELETED:
            return 'danger'
        case FileStatus.MODIFIED:
            return 'warning'
        case FileStatus.RENAMED:
            return 'info'
        case FileStatus.UNKNOWN:
            return 'default'
        case LineOrigin.ADDITION:
            return 'diff-line-addition'
        case LineOrigin.DELETION:
            return 'diff-line-deletion'
    return ''


def ansi_color_for(value: FileStatus | Origin) -> Optional[str]:
    match value:
        case FileStatus.ADDED | LineOrigin.ADDITION:
            return ANSI_GREEN
        case FileStatus.DELETED | LineOrigin.DELETION:
            return ANSI_RED
        case FileStatus.MODIFIED:
            return ANSI_YELLOW
        case FileStatus.RENAMED:
            return ANSI_CYAN
        case FileStatus.UNKNOWN | OtherOrigin():
            return ANSI_DIM
    return None


def format_lineno(lineno: Optional[int], width: int = 4) -> str:
    """
    :returns: The line number right-aligned to `width` or blanks when there is no line number.
    """
    if lineno is None:
        return ' ' * width
    return f'{lineno:>{width}}'
