"""Built-in catalog of sensitive-data patterns.

Patterns are searched case-insensitively and never cross a line boundary,
matching how ``grep -iE`` treats the staged blob.
"""

from __future__ import annotations

from typing import Tuple

from . import Exclusion, PatternRegistry, Rule

RULES: Tuple[Rule, ...] = (
    Rule.compile("google-api-key", r"AIza[0-9A-Za-z_-]{35}", "Google API key"),
    Rule.compile("openai-api-key", r"sk-[0-9A-Za-z]{48}", "OpenAI API key"),
    Rule.compile("slack-bot-token", r"xoxb-[0-9]{11}-[0-9]{11}-[0-9A-Za-z]{24}", "Slack bot token"),
    Rule.compile("slack-user-token", r"xoxp-[0-9]{11}-[0-9]{11}-[0-9A-Za-z]{24}", "Slack user token"),
    Rule.compile(
        "slack-webhook",
        r"https://hooks\.slack\.com/services/[A-Z0-9]+/[A-Z0-9]+/[A-Za-z0-9]+",
        "Slack incoming webhook",
    ),
    Rule.compile("private-key", r"-----BEGIN (RSA |DSA |EC |OPENSSH )?PRIVATE KEY-----", "Private key block"),
    Rule.compile("aws-access-key", r"AKIA[0-9A-Z]{16}", "AWS access key ID"),
    Rule.compile("google-oauth-token", r"ya29\.[0-9A-Za-z_-]+", "Google OAuth access token"),
    Rule.compile("google-refresh-token", r"1/[0-9A-Za-z_-]{43}", "Google OAuth refresh token"),
    Rule.compile("firebase-api-key", r"AIzaSy[0-9A-Za-z_-]{33}", "Firebase API key"),
    Rule.compile("firebase-config", r"firebase.*api.*key", "Firebase configuration"),
    Rule.compile("mongodb-connection-string", r"mongodb://.*:.*@", "MongoDB URL with credentials"),
    Rule.compile("postgres-connection-string", r"postgres://.*:.*@", "PostgreSQL URL with credentials"),
    Rule.compile("mysql-connection-string", r"mysql://.*:.*@", "MySQL URL with credentials"),
    Rule.compile("redis-connection-string", r"redis://.*:.*@", "Redis URL with credentials"),
    Rule.compile("nextjs-public-env", r"""NEXT_PUBLIC_.*=\s*['"][^'"]*['"]""", "Next.js public env var with a value"),
    Rule.compile("react-app-env", r"""REACT_APP_.*=\s*['"][^'"]*['"]""", "React app env var with a value"),
    Rule.compile("vite-env", r"""VITE_.*=\s*['"][^'"]*['"]""", "Vite env var with a value"),
    Rule.compile("password-assignment", r"""password\s*=\s*['"][^'"]*['"]""", "Password assignment"),
    Rule.compile("secret-assignment", r"""secret\s*=\s*['"][^'"]*['"]""", "Secret assignment"),
    Rule.compile("token-assignment", r"""token\s*=\s*['"][^'"]*['"]""", "Token assignment"),
    Rule.compile("api-key-assignment", r"""api.*key\s*=\s*['"][^'"]*['"]""", "API key assignment"),
)

# Lock files carry integrity hashes shaped like refresh tokens.
LOCK_FILES: Tuple[str, ...] = ("package-lock.json", "yarn.lock", "pnpm-lock.yaml")

EXCLUSIONS: Tuple[Exclusion, ...] = (
    Exclusion(rule_name="google-refresh-token", path_substrings=LOCK_FILES),
)

DEFAULT_REGISTRY = PatternRegistry(RULES, EXCLUSIONS)


def rules() -> Tuple[Rule, ...]:
    """Return the built-in rules in declaration order."""

    return DEFAULT_REGISTRY.rules()


def is_excluded(rule: Rule, file_path: str) -> bool:
    return DEFAULT_REGISTRY.is_excluded(rule, file_path)
