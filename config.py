from __future__ import annotations

import os
from dataclasses import dataclass


def _load_dotenv() -> None:
    env_path = os.getenv("DEPGRAPH_ENV_FILE")
    if not env_path:
        env_path = os.path.join(os.getcwd(), ".env")
    if not os.path.exists(env_path):
        return
    with open(env_path, "r", encoding="utf-8") as handle:
        for line in handle:
            if not line.strip() or line.lstrip().startswith("#"):
                continue
            if "=" not in line:
                continue
            key, value = line.split("=", 1)
            key = key.strip().lstrip("\ufeff")
            value = value.strip().strip("\"").strip("'")
            if key and key not in os.environ:
                os.environ[key] = value


def _env(name: str, default: str) -> str:
    value = os.getenv(name)
    return value if value is not None and value != "" else default


@dataclass
class Settings:
    data_dir: str = ""
    log_file: str = ""
    log_level: str = "INFO"
    data_url: str = ""
    flags_url: str = ""
    http_timeout: float = 30.0


def get_settings() -> Settings:
    _load_dotenv()
    data_dir = _env("DEPGRAPH_DATA_DIR", os.path.join(os.getcwd(), "data"))
    server = _env("DEPGRAPH_SERVER_URL", "http://127.0.0.1:1337").rstrip("/")
    return Settings(
        data_dir=data_dir,
        log_file=_env("DEPGRAPH_LOG_FILE", os.path.join(data_dir, "depgraph.log")),
        log_level=_env("DEPGRAPH_LOG_LEVEL", "INFO").upper(),
        data_url=_env("DEPGRAPH_DATA_URL", f"{server}/data"),
        flags_url=_env("DEPGRAPH_FLAGS_URL", f"{server}/flags"),
        http_timeout=float(_env("DEPGRAPH_HTTP_TIMEOUT", "30")),
    )
