"""Index tests."""

import pytest
from kit.core.errors import IndexNotFound
from kit.core.index import Index, IndexEntry, list_files, load


def test_index_entry_line_format():
    """Test entry renders as a four-field line."""
    entry = IndexEntry('100644', 'blob', 'a' * 40, 'dir/file.txt')
    assert entry.to_line() == f"100644 blob {'a' * 40} dir/file.txt"


def test_index_entry_path_with_spaces():
    """Test path keeps everything after the third field."""
    entry = IndexEntry.from_line(f"100644 blob {'a' * 40} my notes.txt")
    assert entry.path == 'my notes.txt'


def test_index_entry_too_few_fields():
    """Test short lines do not parse."""
    assert IndexEntry.from_line('100644 blob abc') is None


def test_load_missing_index(repo):
    """Test loading without an index file fails."""
    with pytest.raises(IndexNotFound):
        load(repo.index_file)


def test_load_empty_index(repo):
    """Test empty index file loads as no entries."""
    repo.index_file.write_text('')
    assert Index.load(repo) == []


def test_load_skips_malformed_lines(repo):
    """Test blank and short lines are skipped."""
    repo.index_file.write_text(
        f"100644 blob {'a' * 40} a.txt\n"
        "\n"
        "garbage line\n"
        f"100644 blob {'b' * 40} b.txt\n"
    )
    entries = Index.load(repo)
    assert [e.path for e in entries] == ['a.txt', 'b.txt']


def test_stage_single_file(repo):
    """Test staging stores a blob and records the entry."""
    path = repo.work_tree / 'a.txt'
    path.write_text('hi\n')

    result = Index(repo).stage([path])

    assert result.staged == ['a.txt']
    assert result.ok
    entry = Index(repo).read().get_entry('a.txt')
    assert entry.mode == '100644'
    assert entry.kind == 'blob'
    assert repo.objects.retrieve(entry.hash).body == b'hi\n'


def test_stage_same_path_twice_keeps_latest(repo):
    """Test re-staging replaces the existing entry."""
    path = repo.work_tree / 'a.txt'
    path.write_text('one')
    Index(repo).stage([path])
    path.write_text('two')
    Index(repo).stage([path])

    entries = Index.load(repo)
    assert len(entries) == 1
    assert repo.objects.retrieve(entries[0].hash).body == b'two'


def test_stage_merges_with_existing_entries(repo):
    """Test staging keeps entries for paths not mentioned."""
    (repo.work_tree / 'a.txt').write_text('a')
    (repo.work_tree / 'b.txt').write_text('b')
    Index(repo).stage([repo.work_tree / 'b.txt'])
    Index(repo).stage([repo.work_tree / 'a.txt'])

    assert [e.path for e in Index.load(repo)] == ['a.txt', 'b.txt']


def test_persisted_index_is_sorted(repo):
    """Test index lines are strictly ascending by path."""
    for name in ['zeta.txt', 'Alpha.txt', 'mid/b.txt', 'mid/a.txt', 'a b.txt']:
        path = repo.work_tree / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(name)

    Index(repo).stage([repo.work_tree])

    paths = [IndexEntry.from_line(line).path
             for line in repo.index_file.read_text().splitlines()]
    assert paths == sorted(paths)
    assert len(set(paths)) == len(paths)
    assert 'a b.txt' in paths


def test_stage_directory_excludes_metadata(repo):
    """Test directory staging skips .kit and recurses."""
    (repo.work_tree / 'src' / 'pkg').mkdir(parents=True)
    (repo.work_tree / 'src' / 'pkg' / 'mod.py').write_text('x = 1\n')
    (repo.work_tree / 'top.txt').write_text('top')

    result = Index(repo).stage([repo.work_tree])

    assert sorted(result.staged) == ['src/pkg/mod.py', 'top.txt']
    assert not any(p.startswith('.kit') for p in result.staged)


def test_stage_partial_failure(repo):
    """Test a missing path does not stop the others."""
    (repo.work_tree / 'a.txt').write_text('a')

    result = Index(repo).stage([repo.work_tree / 'missing.txt', repo.work_tree / 'a.txt'])

    assert result.staged == ['a.txt']
    assert result.failed == [(str(repo.work_tree / 'missing.txt'), 'File not found')]
    assert not result.ok
    assert [e.path for e in Index.load(repo)] == ['a.txt']


def test_stage_nothing_writes_empty_index(repo):
    """Test an all-failing stage still persists an empty index."""
    result = Index(repo).stage([repo.work_tree / 'missing.txt'])
    assert result.staged == []
    assert repo.index_file.read_text() == ''


def test_stage_rejects_metadata_files(repo):
    """Test files under .kit cannot be staged."""
    result = Index(repo).stage([repo.head_file])
    assert result.staged == []
    assert result.failed[0][1] == 'Inside repository metadata'


def test_stage_rejects_files_outside_repo(repo, tmp_path):
    """Test files outside the work tree are reported."""
    outside = tmp_path / 'outside.txt'
    outside.write_text('x')
    result = Index(repo).stage([outside])
    assert result.failed[0][1] == 'Outside repository'


def test_stage_uses_injected_lister(repo):
    """Test directory enumeration can be replaced."""
    (repo.work_tree / 'keep.txt').write_text('k')
    (repo.work_tree / 'skip.txt').write_text('s')

    def only_keep(directory):
        return [directory / 'keep.txt']

    result = Index(repo).stage([repo.work_tree], list_files=only_keep)
    assert result.staged == ['keep.txt']


def test_stage_lister_error_keeps_other_paths(repo):
    """Test a directory that cannot be listed does not stop the others."""
    (repo.work_tree / 'locked').mkdir()
    (repo.work_tree / 'a.txt').write_text('a')

    def denied(directory):
        raise PermissionError(13, 'Permission denied', str(directory))

    result = Index(repo).stage([repo.work_tree / 'locked', repo.work_tree / 'a.txt'],
                               list_files=denied)

    assert result.staged == ['a.txt']
    assert result.failed[0][0] == str(repo.work_tree / 'locked')
    assert 'Permission denied' in result.failed[0][1]
    assert [e.path for e in Index.load(repo)] == ['a.txt']


def test_stage_lister_error_midway_keeps_listed_files(repo):
    """Test files yielded before a listing error are still staged."""
    (repo.work_tree / 'src').mkdir()
    (repo.work_tree / 'src' / 'one.txt').write_text('1')

    def partial(directory):
        yield directory / 'one.txt'
        raise PermissionError(13, 'Permission denied', str(directory / 'sub'))

    result = Index(repo).stage([repo.work_tree / 'src'], list_files=partial)

    assert result.staged == ['src/one.txt']
    assert len(result.failed) == 1
    assert [e.path for e in Index.load(repo)] == ['src/one.txt']


def test_stage_rejects_non_utf8_name(repo):
    """Test a name that is not valid UTF-8 fails alone."""
    (repo.work_tree / 'good.txt').write_text('good')
    bad = repo.work_tree / 'bad\udcff.txt'
    try:
        bad.write_bytes(b'bad')
    except (OSError, UnicodeEncodeError):
        pytest.skip('filesystem does not accept undecodable names')

    result = Index(repo).stage([repo.work_tree / 'good.txt', bad])

    assert result.staged == ['good.txt']
    assert result.failed == [('bad\\udcff.txt', 'Unsupported file name')]
    assert [e.path for e in Index.load(repo)] == ['good.txt']


def test_stage_rejects_newline_in_name(repo):
    """Test a name spanning lines is not written to the index."""
    (repo.work_tree / 'good.txt').write_text('good')
    odd = repo.work_tree / 'a\nb.txt'
    try:
        odd.write_text('odd')
    except OSError:
        pytest.skip('filesystem does not accept newlines in names')

    result = Index(repo).stage([repo.work_tree])

    assert result.staged == ['good.txt']
    assert result.failed == [('a\nb.txt', 'Unsupported file name')]
    assert [e.path for e in Index.load(repo)] == ['good.txt']


def test_stage_rejects_leading_whitespace_name(repo):
    """Test a name that would not survive reloading is rejected."""
    (repo.work_tree / ' x.txt').write_text('x')
    (repo.work_tree / 'x.txt').write_text('y')

    result = Index(repo).stage([repo.work_tree / ' x.txt', repo.work_tree / 'x.txt'])

    assert result.staged == ['x.txt']
    assert result.failed == [(' x.txt', 'Unsupported file name')]
    entries = Index.load(repo)
    assert [e.path for e in entries] == ['x.txt']
    assert repo.objects.retrieve(entries[0].hash).body == b'y'


def test_stage_keeps_previous_entries_when_name_rejected(repo):
    """Test earlier entries survive a call with a rejected name."""
    (repo.work_tree / 'old.txt').write_text('old')
    Index(repo).stage([repo.work_tree / 'old.txt'])
    (repo.work_tree / 'a\rb.txt').write_text('odd')

    result = Index(repo).stage([repo.work_tree / 'a\rb.txt'])

    assert result.staged == []
    assert [e.path for e in Index.load(repo)] == ['old.txt']


def test_list_files_deep_tree(tmp_path):
    """Test iterative walk handles deep nesting."""
    current = tmp_path
    for i in range(200):
        current = current / f"d{i}"
    current.mkdir(parents=True)
    (current / 'leaf.txt').write_text('leaf')

    files = list(list_files(tmp_path))
    assert files == [current / 'leaf.txt']
