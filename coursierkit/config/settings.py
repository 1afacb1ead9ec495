"""
Settings for coursierkit runs.

Settings are layered: built-in defaults, then the ``coursier:`` mapping of
an optional ``coursierkit.yaml`` file, then GitHub Actions inputs.

Example coursierkit.yaml:

    coursier:
      cli_url: https://github.com/coursier/launchers/raw/master/cs-x86_64-pc-linux.gz
      jvm: adoptium:17
      apps: [scalafmt, scalafix]
      repository: sonatype:snapshots
"""

import logging
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Tuple

import yaml

from coursierkit.actions.core import get_input
from coursierkit.core.exceptions import ConfigError

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_FILE = "coursierkit.yaml"

DEFAULT_JVM = "adoptium:17"
DEFAULT_APPS = ("scalafmt", "scalafix")
DEFAULT_REPOSITORY = "sonatype:snapshots"

# action input name -> settings field
ACTION_INPUTS = {
    "coursier-cli-url": "cli_url",
    "coursier-cli-sha256": "cli_sha256",
    "jvm": "jvm",
    "apps": "apps",
    "repository": "repository",
}

_STRING_FIELDS = ("cli_url", "cli_sha256", "jvm", "repository")
_PATH_FIELDS = ("bin_dir", "cache_dir", "cache_store_dir")


def default_bin_dir() -> Path:
    """Directory receiving ``cs`` and the apps it installs."""
    return Path.home() / "bin"


def default_cache_dir() -> Path:
    """Coursier's download cache."""
    return Path.home() / ".cache" / "coursier" / "v1"


def default_cache_store_dir() -> Path:
    """Directory holding saved cache entries of the local cache store."""
    return Path.home() / ".cache" / "coursierkit" / "store"


@dataclass(frozen=True)
class CoursierSettings:
    """Resolved settings for installing and running Coursier."""

    cli_url: str = ""
    cli_sha256: Optional[str] = None
    jvm: str = DEFAULT_JVM
    apps: Tuple[str, ...] = DEFAULT_APPS
    repository: str = DEFAULT_REPOSITORY
    bin_dir: Path = field(default_factory=default_bin_dir)
    cache_dir: Path = field(default_factory=default_cache_dir)
    cache_store_dir: Path = field(default_factory=default_cache_store_dir)

    @property
    def coursier_path(self) -> Path:
        """Location of the ``cs`` executable once installed."""
        return self.bin_dir / "cs"

    @property
    def installed_binaries(self) -> List[Path]:
        """Every executable the installer places in ``bin_dir``."""
        return [self.coursier_path] + [self.bin_dir / app for app in self.apps]


def parse_apps(value: Any) -> Tuple[str, ...]:
    """
    Normalize an app list given as ``"a,b"`` or ``["a", "b"]``.

    Raises:
        ConfigError: If the value has the wrong type or names no app
    """
    if isinstance(value, str):
        items = value.split(",")
    elif isinstance(value, (list, tuple)):
        items = value
    else:
        raise ConfigError(f"apps must be a string or a list, got {type(value).__name__}")

    apps = []
    for item in items:
        if not isinstance(item, str):
            raise ConfigError(f"apps entries must be strings, got {item!r}")
        if item.strip():
            apps.append(item.strip())

    if not apps:
        raise ConfigError("apps must name at least one application")

    return tuple(apps)


def _coerce(values: Dict[str, Any]) -> Dict[str, Any]:
    """Validate raw values and convert them to settings field types."""
    result: Dict[str, Any] = {}

    for key, value in values.items():
        if key == "apps":
            result[key] = parse_apps(value)
        elif key in _STRING_FIELDS:
            if value is None:
                continue
            if not isinstance(value, str):
                raise ConfigError(f"{key} must be a string, got {value!r}")
            result[key] = value.strip()
        elif key in _PATH_FIELDS:
            if not isinstance(value, str):
                raise ConfigError(f"{key} must be a path string, got {value!r}")
            result[key] = Path(value).expanduser()
        else:
            raise ConfigError(f"Unknown setting: {key}")

    return result


def load_config_file(config_path: Path) -> Dict[str, Any]:
    """
    Read the ``coursier:`` section of a YAML configuration file.

    Returns:
        Raw setting values (empty dict if the file has no coursier section)

    Raises:
        ConfigError: If the file is missing or malformed
    """
    if not config_path.exists():
        raise ConfigError(f"Configuration file not found: {config_path}")

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML syntax: {e}")

    if data is None:
        return {}

    if not isinstance(data, dict):
        raise ConfigError("Configuration file must contain a mapping")

    section = data.get("coursier") or {}
    if not isinstance(section, dict):
        raise ConfigError("coursier section must be a mapping")

    return section


def load_settings(
    config_file: Optional[Path] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> CoursierSettings:
    """
    Resolve settings from defaults, configuration file and action inputs.

    Args:
        config_file: YAML file to read (default: ./coursierkit.yaml if present)
        environ: Environment holding ``INPUT_*`` variables (default: os.environ)

    Returns:
        Resolved settings

    Raises:
        ConfigError: If any source holds an invalid value
    """
    settings = CoursierSettings()

    if config_file is None:
        candidate = Path.cwd() / DEFAULT_CONFIG_FILE
        if candidate.exists():
            config_file = candidate

    if config_file is not None:
        logger.debug(f"Loading settings from {config_file}")
        settings = replace(settings, **_coerce(load_config_file(Path(config_file))))

    inputs = {}
    for input_name, field_name in ACTION_INPUTS.items():
        value = get_input(input_name, environ=environ)
        if value:
            inputs[field_name] = value

    if inputs:
        logger.debug(f"Action inputs: {sorted(inputs)}")
        settings = replace(settings, **_coerce(inputs))

    if settings.cli_sha256 == "":
        settings = replace(settings, cli_sha256=None)

    return settings
