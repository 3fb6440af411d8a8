"""Configuration management for the desktop shell."""

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import AnyHttpUrl, Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from .exceptions import ConfigurationError

_REPO_ROOT = Path(__file__).resolve().parents[2]
# 仓库根目录的 .env 优先，其次是运行时当前目录；后端自己的 .env.hyper 不在此列
_ENV_FILE_CANDIDATES: tuple[str, ...] = (
    str(_REPO_ROOT / ".env"),
    ".env",
)


class DesktopSettings(BaseSettings):
    """Centralised configuration derived from environment variables."""

    runtime_mode: Literal["development", "packaged"] | None = Field(
        None,
        description="强制运行模式；留空时根据解释器是否被打包(sys.frozen)自动判断",
    )
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    log_file: str | None = Field(
        None,
        description="日志文件路径，设为 None 或空字符串禁用文件输出",
    )

    server_base_url: AnyHttpUrl = Field(
        "http://localhost:7095", description="Hyper backend base URL"
    )
    binary_name: str = Field("hyper", description="Backend binary name without suffix")
    env_file_name: str = Field(".env.hyper", description="Backend config file name")
    server_mode_flag: str = Field("--mode=http", description="Flag selecting HTTP mode")
    resource_dir: str | None = Field(
        None, description="Packaged resource directory override"
    )

    startup_timeout_seconds: float = Field(5.0, ge=0)
    health_poll_interval: float = Field(0.25, gt=0)
    stop_timeout_seconds: float = Field(10.0, gt=0)

    desktop_host: str = Field("127.0.0.1", description="Command bridge bind host")
    desktop_port: int = Field(7096, description="Command bridge bind port")

    model_config = SettingsConfigDict(
        env_file=_ENV_FILE_CANDIDATES,
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @property
    def server_url(self) -> str:
        """Backend base URL without a trailing slash."""

        return str(self.server_base_url).rstrip("/")


@lru_cache
def get_settings() -> DesktopSettings:
    """Return a cached DesktopSettings instance."""

    try:
        return DesktopSettings()
    except ValidationError as exc:
        fields = ", ".join(str(error["loc"][0]).upper() for error in exc.errors() if error["loc"])
        raise ConfigurationError(f"Invalid desktop settings ({fields}): {exc}") from exc


def resolved_env_file() -> str | None:
    """Return the first readable .env file from the candidate list."""

    for candidate in _ENV_FILE_CANDIDATES:
        path = Path(candidate).expanduser()
        if path.is_file():
            return str(path)
    return None


def env_file_candidates() -> tuple[str, ...]:
    """Expose configured env file search order for diagnostics."""

    return _ENV_FILE_CANDIDATES
