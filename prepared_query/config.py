"""Executor settings, optionally read from the environment or a `.env` file."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from dotenv import dotenv_values

ENV_PREFIX = "PREPARED_QUERY_"

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off", ""}


def _parse_bool(name: str, raw: Optional[str], default: bool) -> bool:
    if raw is None:
        return default
    value = raw.strip().lower()
    if value in _TRUE:
        return True
    if value in _FALSE:
        return False
    raise ValueError(f"{name} must be a boolean flag, got {raw!r}")


@dataclass(frozen=True)
class ExecutorConfig:
    """Behavior switches shared by every executor call.

    Attributes:
        debug: Log SQL text, bind-type codes, and parameters before execution.
        lint_keywords: Warn when the SQL lacks the operation's keyword.
        default_fetch_all: `select` fetch mode when the caller passes none.
    """

    debug: bool = False
    lint_keywords: bool = True
    default_fetch_all: bool = True

    @classmethod
    def from_env(
        cls,
        env_file: Optional[str] = None,
        environ: Optional[Mapping[str, Optional[str]]] = None,
    ) -> ExecutorConfig:
        """Build config from `PREPARED_QUERY_*` variables.

        Args:
            env_file: Optional `.env` path; its values override the environment.
            environ: Environment mapping; defaults to `os.environ`.
        """

        values = dict(os.environ if environ is None else environ)
        if env_file is not None:
            values.update(dotenv_values(env_file))

        def flag(key: str, default: bool) -> bool:
            name = ENV_PREFIX + key
            return _parse_bool(name, values.get(name), default)

        return cls(
            debug=flag("DEBUG", cls.debug),
            lint_keywords=flag("LINT_KEYWORDS", cls.lint_keywords),
            default_fetch_all=flag("FETCH_ALL", cls.default_fetch_all),
        )


DEFAULT_CONFIG = ExecutorConfig()
