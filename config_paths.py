import json
import os

from dotenv import find_dotenv, load_dotenv

from errors import ConfigError


HOME = os.path.expanduser("~")
XDG_CONFIG_HOME = os.environ.get("XDG_CONFIG_HOME")
CONFIG_HOME = XDG_CONFIG_HOME if XDG_CONFIG_HOME else os.path.join(HOME, ".config")
CONFIG_DIR = os.path.join(CONFIG_HOME, "ghcal")
CONFIG_JSON = os.path.join(CONFIG_DIR, "config.json")
CONFIG_ENV = os.path.join(CONFIG_DIR, ".env")
LOG_PATH = os.path.join(CONFIG_DIR, "ghcal.log")

TOKEN_ENV_VAR = "GITHUB_TOKEN"

# default settings
API_URL_DEFAULT = "https://api.github.com/graphql"
TIMEOUT_SECONDS_DEFAULT = None
LOG_LEVEL_DEFAULT = "INFO"
LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


def ensure_config_dirs():
    os.makedirs(CONFIG_DIR, exist_ok=True)


def load_config():
    cfg = {
        "API_URL": API_URL_DEFAULT,
        "TIMEOUT_SECONDS": TIMEOUT_SECONDS_DEFAULT,
        "LOG_LEVEL": LOG_LEVEL_DEFAULT,
    }

    if not os.path.exists(CONFIG_JSON):
        return cfg

    try:
        with open(CONFIG_JSON, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise ConfigError(f"Could not read {CONFIG_JSON}: {e}") from e

    if not isinstance(data, dict):
        return cfg

    api_url = data.get("api_url")
    if isinstance(api_url, str) and api_url.strip():
        cfg["API_URL"] = api_url.strip()

    timeout = data.get("timeout_seconds")
    if isinstance(timeout, (int, float)) and not isinstance(timeout, bool) and timeout > 0:
        cfg["TIMEOUT_SECONDS"] = float(timeout)

    level = data.get("log_level")
    if isinstance(level, str) and level.upper() in LOG_LEVELS:
        cfg["LOG_LEVEL"] = level.upper()

    return cfg


def load_token():
    """
    Read the GitHub token from the environment after loading .env files.
    Variables already set in the environment win over .env values.
    """
    local_env = find_dotenv(usecwd=True)
    if local_env:
        load_dotenv(local_env, override=False)
    if os.path.exists(CONFIG_ENV):
        load_dotenv(CONFIG_ENV, override=False)

    token = (os.environ.get(TOKEN_ENV_VAR) or "").strip()
    if not token:
        raise ConfigError(
            f"No GitHub token provided. Set {TOKEN_ENV_VAR} in the environment or a .env file."
        )
    return token
