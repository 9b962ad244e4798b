import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Dict

from dotenv import load_dotenv, dotenv_values

from .api.client import ReaderClient, DEFAULT_BASE_URL, DEFAULT_TIMEOUT
from .exceptions import ConfigError

ENV_PREFIX = "READERCTL_"
DEFAULT_CONFIG_PATH = Path.home() / ".config" / "readerctl" / "config"

FALSE_VALUES = {"", "0", "false", "no", "off"}


@dataclass(frozen=True)
class Config:
    api_token: str
    debug: bool = False
    base_url: str = DEFAULT_BASE_URL
    timeout: float = DEFAULT_TIMEOUT

    def client(self) -> ReaderClient:
        return ReaderClient(self.api_token, base_url=self.base_url, timeout=self.timeout, debug=self.debug)


def read_config_file(path: Path) -> Dict[str, Optional[str]]:
    """Read KEY=VALUE pairs from the config file, or nothing if it does not exist"""
    if not path.is_file():
        return {}
    return dotenv_values(path)


def _is_true(value: Optional[str]) -> bool:
    return value is not None and value.strip().lower() not in FALSE_VALUES


def _lookup(key: str, file_values: Dict[str, Optional[str]]) -> Optional[str]:
    """Find a setting in the environment first, then the config file"""
    env_value = os.getenv(ENV_PREFIX + key.upper().replace("-", "_"))
    if env_value:
        return env_value
    return file_values.get(key) or None


def load_config(
    api_token: Optional[str] = None,
    config_path: Optional[Path] = None,
    debug: Optional[bool] = None,
) -> Config:
    """Resolve settings from flags, environment and config file, in that order"""
    load_dotenv()
    file_values = read_config_file(Path(config_path or DEFAULT_CONFIG_PATH).expanduser())

    token = api_token or _lookup("api-token", file_values)
    if not token:
        raise ConfigError("api token is required")

    if debug is None:
        debug = _is_true(_lookup("debug", file_values))

    timeout = _lookup("timeout", file_values)
    try:
        timeout = float(timeout) if timeout else DEFAULT_TIMEOUT
    except ValueError:
        raise ConfigError(f"invalid timeout: {timeout!r}")

    return Config(
        api_token=token,
        debug=debug,
        base_url=_lookup("base-url", file_values) or DEFAULT_BASE_URL,
        timeout=timeout,
    )
