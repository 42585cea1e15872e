from __future__ import annotations

from dataclasses import dataclass
import os

DEFAULT_MAX_INPUT_SIZE = 1024


def _env_flag(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    normalized = raw.strip().casefold()
    return normalized not in {"0", "false", "off", ""}


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw.strip(), 0)
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from exc
    if value < 0:
        raise ValueError(f"{name} must be non-negative, got {value}")
    return value


@dataclass(frozen=True)
class DecoderConfig:
    listing_header: bool
    log_level: str
    max_input_size: int  # 0 disables the cap


def load_decoder_config() -> DecoderConfig:
    return DecoderConfig(
        listing_header=_env_flag("I8086_LISTING_HEADER", default=True),
        log_level=(os.getenv("I8086_LOG_LEVEL") or "WARNING").strip().upper(),
        max_input_size=_env_int("I8086_MAX_INPUT_SIZE", DEFAULT_MAX_INPUT_SIZE),
    )


__all__ = ["DEFAULT_MAX_INPUT_SIZE", "DecoderConfig", "load_decoder_config"]
