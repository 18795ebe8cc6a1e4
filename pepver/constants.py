"""
Centralized constants for pepver.

This module defines immutable values used across pepver, including the
PEP 440 spelling tables, specifier operator tokens, configuration
defaults, and logging formats. All values are intended to be treated as
read-only.
"""

from typing import Final, Mapping, Tuple

# ---------------------------------------------------------------------------
# PEP 440 spellings
# ---------------------------------------------------------------------------

#: Alternate pre-release spellings mapped onto their canonical letter.
PRE_RELEASE_SPELLINGS: Final[Mapping[str, str]] = {
    "a": "a",
    "alpha": "a",
    "b": "b",
    "beta": "b",
    "c": "rc",
    "rc": "rc",
    "pre": "rc",
    "preview": "rc",
}

# ---------------------------------------------------------------------------
# Specifier grammar
# ---------------------------------------------------------------------------

#: Operator tokens, longest first so prefix matching is unambiguous.
OPERATOR_TOKENS: Final[Tuple[str, ...]] = (
    "===",
    "==",
    "!=",
    "~=",
    "<=",
    ">=",
    "<",
    ">",
)

#: Suffix marking a prefix-matching (wildcard) operand.
WILDCARD_SUFFIX: Final[str] = ".*"

#: Separator between clauses of a specifier set.
CLAUSE_SEPARATOR: Final[str] = ","

# ---------------------------------------------------------------------------
# Configuration defaults
# ---------------------------------------------------------------------------

#: Default for the ``allow_prereleases`` option (``None`` = automatic).
DEFAULT_ALLOW_PRERELEASES: Final = None

#: Default for the ``strict`` option (reject legacy versions).
DEFAULT_STRICT: Final[bool] = False

#: Standalone configuration file name.
CONFIG_FILE_NAME: Final[str] = "pepver.toml"

#: Environment variable holding an explicit configuration path.
CONFIG_ENV_VAR: Final[str] = "PEPVER_CONFIG"

# ---------------------------------------------------------------------------
# Logging configuration
# ---------------------------------------------------------------------------

#: Timestamp format for verbose logging.
LOG_DATE_FORMAT: Final[str] = "%Y-%m-%d %H:%M:%S"

#: Default log format (non-verbose).
LOG_DEFAULT_FORMAT: Final[str] = "%(levelname)s: %(message)s"

#: Verbose log format including timestamp and logger name.
LOG_VERBOSE_FORMAT: Final[str] = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
