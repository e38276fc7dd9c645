from unittest import mock

from file_diff import DiffChunk, DiffLine, FileDiff, FileStatus, LineOrigin, OtherOrigin
from labels import ANSI_GREEN, ANSI_RESET
from render import NO_DIFF_CONTENT, NO_DIFFS_LOADED, NO_FILE_SELECTED, DiffRenderer
from viewer_state import DiffViewerState


def test_render_empty(make_injector):
    inj = make_injector()
    renderer = inj.get(DiffRenderer)
    state = inj.get(DiffViewerState)
    assert renderer.render(state) == f"{NO_DIFFS_LOADED}\n\n{NO_FILE_SELECTED}"
    assert renderer.render(state, error="Failed to open repository") == f"Error: Failed to open repository\n\n{NO_FILE_SELECTED}"


def test_render_file_list(make_injector):
    inj = make_injector()
    renderer = inj.get(DiffRenderer)
    state = inj.get(DiffViewerState)
    state.reload([
        FileDiff(FileStatus.MODIFIED, 'a.txt', 'a.txt'),
        FileDiff(FileStatus.ADDED, new_path='b.txt'),
        FileDiff(FileStatus.UNKNOWN, 'c.txt', 'c.txt', raw_status='Copied'),
    ])
    state.select(1)
    assert renderer.render_file_list(state) == [
        '  [M] a.txt',
        '▶ [A] b.txt',
        '  [?] c.txt',
    ]


def test_render_lines(make_injector):
    renderer = make_injector().get(DiffRenderer)
    diff = FileDiff(FileStatus.MODIFIED, 'a.txt', 'a.txt', chunks=[
        DiffChunk('@@ -1,2 +1,2 @@', [
            DiffLine(LineOrigin.CONTEXT, 'same\n', 1, 1),
            DiffLine(LineOrigin.DELETION, 'old\n', old_lineno=2),
            DiffLine(LineOrigin.ADDITION, 'new\r\n', new_lineno=2),
        ]),
        DiffChunk('@@ -10 +10 @@', [
            DiffLine(OtherOrigin('no newline at end of file'), 'end', 10, 10),
        ]),
    ])
    assert renderer.render_file_diff(diff) == [
        'Modified: a.txt',
        '@@ -1,2 +1,2 @@',
        '   1    1  same',
        '   2      -old',
        '        2 +new',
        '...',
        '@@ -10 +10 @@',
        '  10   10  end',
    ]


def test_render_no_line_number_text(make_injector):
    renderer = make_injector(lineno_width=3).get(DiffRenderer)
    line = renderer.render_line(DiffLine(LineOrigin.ADDITION, 'x', old_lineno=None, new_lineno=42))
    assert line == '     42 +x'
    assert 'None' not in line
    assert '0' not in line.replace('42', '')


def test_render_binary(make_injector):
    renderer = make_injector().get(DiffRenderer)
    assert renderer.render_file_diff(FileDiff(FileStatus.MODIFIED, 'logo.png', 'logo.png')) == [
        'Modified: logo.png',
        NO_DIFF_CONTENT,
    ]


def test_render_rename(make_injector):
    renderer = make_injector().get(DiffRenderer)
    diff = FileDiff(FileStatus.RENAMED, 'old.txt', 'new.txt', chunks=[
        DiffChunk('@@ -1 +1 @@', [DiffLine(LineOrigin.CONTEXT, 'moved', 1, 1)]),
    ])
    assert renderer.render_header(diff) == 'Renamed: new.txt ← old.txt'
    assert renderer.render_file_entry(diff) == '  [R] new.txt'


def test_render_unknown_status(make_injector):
    renderer = make_injector().get(DiffRenderer)
    diff = FileDiff(FileStatus.UNKNOWN, 'a.txt', 'a.txt', raw_status='Typechange')
    assert renderer.render_header(diff) == 'Unknown: a.txt (Typechange)'

    missing_status = FileDiff(FileStatus.UNKNOWN, 'a.txt', 'a.txt')
    assert renderer.render_header(missing_status) == 'Unknown: a.txt'


def test_render_color(make_injector):
    renderer = make_injector(use_color=True).get(DiffRenderer)
    line = renderer.render_line(DiffLine(LineOrigin.ADDITION, 'x', new_lineno=1))
    assert line.endswith(f'{ANSI_GREEN}+x{ANSI_RESET}')


def test_render_uses_one_reload(make_injector):
    inj = make_injector()
    renderer = inj.get(DiffRenderer)
    state = inj.get(DiffViewerState)
    state.reload([
        FileDiff(FileStatus.MODIFIED, 'a.txt', 'a.txt'),
        FileDiff(FileStatus.MODIFIED, 'c.txt', 'c.txt'),
    ])

    # A reload between reading the list and reading the selected diff must not mix the two.
    with mock.patch.object(state, 'selected_diff', return_value=FileDiff(FileStatus.ADDED, new_path='z')):
        output = renderer.render(state)

    assert '▶ [M] a.txt' in output
    assert 'Modified: a.txt' in output
    assert 'Added: z' not in output
