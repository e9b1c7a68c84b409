"""Configuration management for Kit.

Reads the commit identity from repository-local and global INI files,
with environment variables taking precedence.
"""

import os
import configparser
from pathlib import Path
from typing import Optional, Tuple

DEFAULT_NAME = 'Kit'
DEFAULT_EMAIL = 'kit@localhost'


class Config:
    """
    Manages Kit configuration files.

    Configuration is stored in INI format:
    - Global config: ~/.kitconfig
    - Repository config: .kit/config

    Repository config takes precedence over global config.
    Environment variables take highest precedence.
    """

    GLOBAL_CONFIG_PATH = Path.home() / '.kitconfig'

    def __init__(self, repo_config_path: Optional[Path] = None):
        """
        Initialize Config manager.

        Args:
            repo_config_path: Path to repository config file, if in a repo
        """
        self.repo_config_path = repo_config_path
        self._global_config = None
        self._repo_config = None

    @property
    def global_config(self) -> configparser.ConfigParser:
        """Load and return global configuration."""
        if self._global_config is None:
            self._global_config = configparser.ConfigParser()
            if self.GLOBAL_CONFIG_PATH.exists():
                self._global_config.read(self.GLOBAL_CONFIG_PATH)
        return self._global_config

    @property
    def repo_config(self) -> Optional[configparser.ConfigParser]:
        """Load and return repository configuration."""
        if self._repo_config is None and self.repo_config_path:
            self._repo_config = configparser.ConfigParser()
            if self.repo_config_path.exists():
                self._repo_config.read(self.repo_config_path)
        return self._repo_config

    def get(self, section: str, key: str, fallback: Optional[str] = None) -> Optional[str]:
        """
        Get a configuration value.

        Priority order (highest to lowest):
        1. Environment variables (KIT_<SECTION>_<KEY>)
        2. Repository config
        3. Global config
        4. Fallback value

        Args:
            section: Config section (e.g., 'user', 'core')
            key: Config key (e.g., 'name', 'email')
            fallback: Default value if not found

        Returns:
            Configuration value or fallback
        """
        env_value = os.environ.get(f"KIT_{section.upper()}_{key.upper()}")
        if env_value:
            return env_value

        if self.repo_config and self.repo_config.has_option(section, key):
            return self.repo_config.get(section, key)

        if self.global_config.has_option(section, key):
            return self.global_config.get(section, key)

        return fallback

    def get_user_identity(self) -> Tuple[str, str]:
        """
        Get user name and email for commits.

        Returns:
            Tuple of (name, email), falling back to a fixed identity
        """
        name = self.get('user', 'name', DEFAULT_NAME)
        email = self.get('user', 'email', DEFAULT_EMAIL)
        return name, email

    def author(self) -> str:
        """Identity formatted as 'Name <email>'."""
        name, email = self.get_user_identity()
        return f"{name} <{email}>"


def get_config(repo=None) -> Config:
    """
    Get a Config instance.

    Args:
        repo: Repository instance, or None for global-only config
    """
    if repo:
        return Config(repo.config_file)
    return Config()
