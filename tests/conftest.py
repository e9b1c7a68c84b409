"""Shared pytest fixtures for Kit tests."""

import pytest
import tempfile
import shutil
from pathlib import Path
from kit.core.config import Config
from kit.core.index import Index
from kit.core.repository import Repository
from kit.operations.commit import CommitEngine


@pytest.fixture(autouse=True)
def isolated_config(tmp_path_factory, monkeypatch):
    """Keep tests away from the user's global config and environment."""
    home = tmp_path_factory.mktemp('home')
    monkeypatch.setattr(Config, 'GLOBAL_CONFIG_PATH', home / '.kitconfig')
    monkeypatch.delenv('KIT_USER_NAME', raising=False)
    monkeypatch.delenv('KIT_USER_EMAIL', raising=False)


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    tmpdir = tempfile.mkdtemp()
    yield Path(tmpdir).resolve()
    shutil.rmtree(tmpdir, ignore_errors=True)


@pytest.fixture
def repo(temp_dir):
    """Create an initialized repository."""
    return Repository(str(temp_dir)).init()


@pytest.fixture
def repo_with_config(repo):
    """Create a repository with a user identity configured."""
    repo.config_file.write_text("""[user]
\tname = Test User
\temail = test@example.com
""")
    return repo


def stage_file(repo, name, content):
    """Write a file into the working tree and stage it."""
    path = repo.work_tree / name
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content)
    result = Index(repo).stage([path])
    assert result.ok
    return path


@pytest.fixture
def make_commit():
    """Factory fixture: stage one file and commit it."""
    def _make_commit(repo, message, name='file.txt', content=None, timestamp=None):
        stage_file(repo, name, content if content is not None else message + '\n')
        return CommitEngine(repo).commit(message, timestamp=timestamp)
    return _make_commit


@pytest.fixture
def repo_with_commits(repo_with_config, make_commit):
    """Repository with two commits on main."""
    repo = repo_with_config
    repo.first_commit = make_commit(repo, 'first', name='file1.txt', timestamp=1700000000)
    repo.second_commit = make_commit(repo, 'second', name='file2.txt', timestamp=1700000100)
    return repo
