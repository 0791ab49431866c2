"""Configuration loading.

Two sources of configuration exist:

- GitHub credentials, an INI file in the user's home directory
  (``~/.snitch/github.ini`` by default)::

      [github]
      personal_token = ghp_xxx

- Project settings, an optional ``.snitch.yaml`` at the project root::

      title:
        transforms:
          - match: "^(.*)\\.$"
            replace: "$1"
      body: "Found at {filename}:{line}"

Both are loaded once and passed explicitly to the objects that need them.
"""
from __future__ import annotations

import configparser
import logging
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from snitch.core.errors import ConfigError

logger = logging.getLogger(__name__)

DEFAULT_CREDENTIALS_PATH = Path("~/.snitch/github.ini")
PROJECT_CONFIG_NAME = ".snitch.yaml"

# $1 / ${1} style group references, as written in the YAML file
_DOLLAR_GROUP = re.compile(r"\$(?:\{(\d+)\}|(\d+))")


@dataclass(frozen=True)
class GithubCredentials:
    """Personal access token used to authenticate against GitHub."""

    personal_token: str

    @classmethod
    def from_file(cls, path: str | Path = DEFAULT_CREDENTIALS_PATH) -> GithubCredentials:
        """Load credentials from an INI file.

        Parameters
        ----------
        path : str | Path
            Path to the INI file. ``~`` is expanded.

        Returns
        -------
        GithubCredentials
            The loaded credentials.

        Raises
        ------
        ConfigError
            If the file is missing, unparsable, or has no token.
        """
        path = Path(path).expanduser()
        if not path.is_file():
            raise ConfigError(f"Credentials file not found: {path}")

        parser = configparser.ConfigParser()
        try:
            parser.read(path, encoding="utf-8")
        except configparser.Error as e:
            raise ConfigError(f"Failed to parse {path}: {e}") from e

        token = parser.get("github", "personal_token", fallback="").strip()
        if not token:
            raise ConfigError(f"{path} has no [github] personal_token")

        logger.debug("Loaded GitHub credentials from %s", path)
        return cls(personal_token=token)

    def __repr__(self) -> str:
        return "GithubCredentials(personal_token='***')"


@dataclass(frozen=True)
class TitleTransform:
    """A single regex substitution applied to a TODO suffix."""

    match: re.Pattern[str]
    replace: str

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> TitleTransform:
        if not isinstance(data, dict) or "match" not in data:
            raise ConfigError(f"Title transform needs a 'match' key: {data!r}")
        try:
            pattern = re.compile(str(data["match"]))
        except re.error as e:
            raise ConfigError(f"Invalid title transform pattern {data['match']!r}: {e}") from e
        # backslashes are literal in the YAML file, only $N is expanded
        literal = str(data.get("replace", "")).replace("\\", "\\\\")
        replace = _DOLLAR_GROUP.sub(lambda m: rf"\g<{m.group(1) or m.group(2)}>", literal)
        return cls(match=pattern, replace=replace)

    def apply(self, text: str) -> str:
        return self.match.sub(self.replace, text)


@dataclass(frozen=True)
class TitleConfig:
    """Rules turning a TODO suffix into an issue title."""

    transforms: tuple[TitleTransform, ...] = ()

    def transform(self, suffix: str) -> str:
        """Apply every transform in order to ``suffix``."""
        title = suffix
        for rule in self.transforms:
            title = rule.apply(title)
        return title


@dataclass(frozen=True)
class ProjectConfig:
    """Per-project settings read from ``.snitch.yaml``.

    Attributes
    ----------
    title : TitleConfig
        Transforms used to derive issue titles.
    body : str
        Issue body template. ``{filename}`` and ``{line}`` are substituted.
    """

    title: TitleConfig = field(default_factory=TitleConfig)
    body: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> ProjectConfig:
        if not data:
            return cls()
        if not isinstance(data, dict):
            raise ConfigError(f"Project config must be a mapping, got {type(data).__name__}")

        title_data = data.get("title") or {}
        raw_transforms = title_data.get("transforms") or []
        if not isinstance(raw_transforms, list):
            raise ConfigError("title.transforms must be a list")
        transforms = tuple(TitleTransform.from_dict(t) for t in raw_transforms)

        return cls(title=TitleConfig(transforms=transforms), body=str(data.get("body") or ""))

    @classmethod
    def load(cls, root: str | Path = ".") -> ProjectConfig:
        """Load ``.snitch.yaml`` from ``root``, or defaults if it does not exist."""
        path = Path(root) / PROJECT_CONFIG_NAME
        if not path.is_file():
            return cls()

        try:
            with open(path, encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigError(f"Failed to parse {path}: {e}") from e

        logger.debug("Loaded project config from %s", path)
        return cls.from_dict(data)
