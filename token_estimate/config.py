"""Runtime settings read from the environment (and a .env file via python-dotenv)."""

import os
from dataclasses import dataclass
from typing import Mapping, Optional

ENV_PREFIX = "TOKEN_ESTIMATE_"


@dataclass(frozen=True)
class Settings:
    """Defaults for the CLI; command-line flags override them."""

    preset: str = "default"
    sampling_threshold: int = 0  # 0 disables sampling
    sampling_size: int = 0
    reference_model: str = "gpt-4.1"  # tiktoken model for --compare
    log_level: str = "WARNING"

    @property
    def sampling_enabled(self) -> bool:
        return self.sampling_threshold > 0 and self.sampling_size > 0


def _get_int(env: Mapping[str, str], key: str, default: int) -> int:
    raw = env.get(ENV_PREFIX + key)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{ENV_PREFIX}{key} must be an integer, got {raw!r}") from None


def load_settings(env: Optional[Mapping[str, str]] = None) -> Settings:
    """Build Settings from ``env`` (defaults to os.environ).

    Call ``dotenv.load_dotenv()`` first to pick up a .env file.
    """
    if env is None:
        env = os.environ
    defaults = Settings()
    return Settings(
        preset=env.get(ENV_PREFIX + "PRESET") or defaults.preset,
        sampling_threshold=_get_int(env, "SAMPLING_THRESHOLD", defaults.sampling_threshold),
        sampling_size=_get_int(env, "SAMPLING_SIZE", defaults.sampling_size),
        reference_model=env.get(ENV_PREFIX + "REFERENCE_MODEL") or defaults.reference_model,
        log_level=(env.get(ENV_PREFIX + "LOG_LEVEL") or defaults.log_level).upper(),
    )
