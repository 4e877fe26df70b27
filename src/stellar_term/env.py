"""Environment variables — terminal configuration via key-value pairs.

Every session carries an environment: a set of ``KEY=VALUE`` string
pairs that commands read and write.  A handful of keys always exist:

    - ``USER`` / ``HOST`` — shown in the prompt.
    - ``SHELL`` — the (fictional) shell binary.
    - ``PWD`` — mirrors the session's working directory.
    - ``THEME`` — the active colour theme name.

Anything else (``OLDPWD`` written by ``cd``, values from ``set``) is
added on demand.

Key design properties:
    - **Strings only** — both keys and values are strings (no types).
    - **Listing is sorted** — ``env`` output is stable across runs.
"""


class Environment:
    """A key-value store for environment variables.

    Each instance is an independent copy — modifying one does not
    affect any other, so two sessions never share variables.
    """

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        """Create an environment, optionally pre-populated.

        Args:
            initial: Starting variables (copied, not referenced).

        """
        self._vars: dict[str, str] = dict(initial) if initial else {}

    def get(self, key: str, default: str | None = None) -> str | None:
        """Return the value for *key*, or *default* if not set."""
        return self._vars.get(key, default)

    def set(self, key: str, value: str) -> None:
        """Set *key* to *value* (creates or overwrites)."""
        self._vars[key] = value

    def items(self) -> list[tuple[str, str]]:
        """Return all (key, value) pairs sorted by key."""
        return sorted(self._vars.items())

