import tomllib
import shutil
from pathlib import Path
from typing import Any, Dict, Optional
from dotenv import load_dotenv
import os

CONFIG_DIR = Path.home() / ".langstep"
CONFIG_PATH = CONFIG_DIR / "config.toml"
PROJECT_CONFIG_EXAMPLE = Path(__file__).parent / "config.toml"
PROJECT_DIR = Path(__file__).parent


def _resolve_dir(value: str) -> Path:
    path = Path(value).expanduser()
    if not path.is_absolute():
        path = PROJECT_DIR / path
    return path


def load_config() -> Dict[str, Any]:
    """Load config from ~/.langstep/config.toml, copy example if missing, load .env overrides."""
    load_dotenv()  # .env may set LANGSTEP_* overrides
    if not CONFIG_PATH.exists():
        CONFIG_DIR.mkdir(parents=True, exist_ok=True)
        shutil.copy(PROJECT_CONFIG_EXAMPLE, CONFIG_PATH)
    with open(CONFIG_PATH, "rb") as f:
        config = tomllib.load(f)

    paths_cfg = config.get("paths", {})
    config["paths"] = {
        "data_dir": _resolve_dir(os.getenv("LANGSTEP_DATA_DIR", paths_cfg.get("data_dir", "data"))),
        "content_dir": _resolve_dir(os.getenv(
            "LANGSTEP_CONTENT_DIR", paths_cfg.get("content_dir", "data/content")
        )),
        "public_dir": _resolve_dir(os.getenv("LANGSTEP_PUBLIC_DIR", paths_cfg.get("public_dir", "public"))),
    }
    server_cfg = config.get("server", {})
    config["server"] = {
        "host": server_cfg.get("host", "127.0.0.1"),
        "port": int(os.getenv("LANGSTEP_PORT", server_cfg.get("port", 3000))),
        "env": os.getenv("LANGSTEP_ENV", server_cfg.get("env", "production")),
    }
    logging_cfg = config.get("logging", {})
    config["logging"] = {
        "level": os.getenv("LANGSTEP_LOG_LEVEL", logging_cfg.get("level", "info")).lower(),
    }
    rewards_cfg = config.get("rewards", {})
    config["rewards"] = {
        "correct_xp": int(rewards_cfg.get("correct_xp", 10)),
        "consolation_xp": int(rewards_cfg.get("consolation_xp", 2)),
    }
    return config


def get_config_value(section: str, key: str, default: Optional[Any] = None) -> Any:
    """Get nested config value, e.g., get_config_value('server', 'port')."""
    config = load_config()
    value = config.get(section, {}).get(key, default)
    return value
