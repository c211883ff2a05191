from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Optional

import dotenv

_TRUTHY = {"1", "true", "yes", "on"}
_EFFECT_POLICIES = ("isolate", "raise")


@dataclass(frozen=True)
class Settings:
    effect_errors: str = "isolate"
    trace: bool = False
    log_level: str = "WARNING"
    host: str = "127.0.0.1"
    port: int = 8000

    @classmethod
    def from_env(cls, *, load_dotenv: bool = True, env: Optional[dict] = None) -> "Settings":
        """Read ``TINYREACT_*`` variables (after loading a ``.env`` file, if any)."""
        if load_dotenv:
            dotenv.load_dotenv(dotenv.find_dotenv(usecwd=True))
        env = os.environ if env is None else env

        effect_errors = env.get("TINYREACT_EFFECT_ERRORS", cls.effect_errors).strip().lower()
        if effect_errors not in _EFFECT_POLICIES:
            raise ValueError(
                f"TINYREACT_EFFECT_ERRORS must be one of {_EFFECT_POLICIES}, got {effect_errors!r}"
            )

        return cls(
            effect_errors=effect_errors,
            trace=env.get("TINYREACT_TRACE", "").strip().lower() in _TRUTHY,
            log_level=env.get("TINYREACT_LOG_LEVEL", cls.log_level).strip().upper(),
            host=env.get("TINYREACT_HOST", cls.host),
            port=int(env.get("TINYREACT_PORT", cls.port)),
        )


def configure_logging(settings: Settings) -> None:
    logger = logging.getLogger("tinyreact")
    logger.setLevel(settings.log_level)
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter("%(levelname)s %(name)s: %(message)s"))
        logger.addHandler(handler)
