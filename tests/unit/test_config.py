"""Configuration tests."""

from kit.core.config import Config, get_config


def test_default_identity(repo):
    """Test fallback identity."""
    assert get_config(repo).get_user_identity() == ('Kit', 'kit@localhost')


def test_repo_config_identity(repo_with_config):
    """Test identity from repository config."""
    assert repo_with_config.config.author() == 'Test User <test@example.com>'


def test_global_config_identity(repo):
    """Test global config used when repo has no user section."""
    Config.GLOBAL_CONFIG_PATH.write_text("[user]\nname = Global\nemail = g@example.com\n")
    assert get_config(repo).get_user_identity() == ('Global', 'g@example.com')


def test_environment_overrides(repo_with_config, monkeypatch):
    """Test environment variables take precedence."""
    monkeypatch.setenv('KIT_USER_NAME', 'Env User')
    assert get_config(repo_with_config).get('user', 'name') == 'Env User'
