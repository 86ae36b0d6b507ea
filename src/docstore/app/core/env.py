from __future__ import annotations

import os
import warnings
from enum import StrEnum
from functools import cache


class Env(StrEnum):
    LOCAL = "local"
    DEV = "dev"
    TEST = "test"
    PROD = "prod"


ALIASES: dict[str, Env] = {
    "development": Env.DEV,
    "testing": Env.TEST,
    "ci": Env.TEST,
    "production": Env.PROD,
}


def _normalize(raw: str | None) -> Env | None:
    if not raw:
        return None
    val = raw.strip().lower()
    if val in (e.value for e in Env):
        return Env(val)
    return ALIASES.get(val)


@cache
def get_env() -> Env:
    """
    Resolve the running environment from APP_ENV once per process.

    Unknown values fall back to LOCAL with a warning.
    """
    raw = os.getenv("APP_ENV")
    env = _normalize(raw)
    if env is None:
        if raw:
            warnings.warn(
                f"Unrecognized APP_ENV '{raw}', defaulting to 'local'.",
                RuntimeWarning,
                stacklevel=2,
            )
        env = Env.LOCAL
    return env


def pick(*, prod, nonprod, dev=None, test=None, local=None):
    """
    Choose a value for the active environment.

    Example:
        level = pick(prod="INFO", nonprod="DEBUG")
    """
    e = get_env()
    if e is Env.PROD:
        return prod
    overrides = {Env.DEV: dev, Env.TEST: test, Env.LOCAL: local}
    chosen = overrides.get(e)
    return nonprod if chosen is None else chosen
