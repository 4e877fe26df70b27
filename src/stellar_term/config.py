"""Session defaults.

Everything a session needs to start — identity shown in the prompt,
the home directory, the starting theme, and the ``ping`` cadence —
lives in one frozen dataclass.  Callers override fields with
``dataclasses.replace`` or by passing keyword arguments.
"""

from dataclasses import dataclass

from stellar_term.theme import ThemeName

DEFAULT_PING_COUNT = 4
DEFAULT_PING_TIMEOUT = 5.0
DEFAULT_PING_INTERVAL = 0.4


@dataclass(frozen=True)
class TerminalConfig:
    """Startup settings for a terminal session.

    Attributes:
        user: Value of ``USER`` (prompt user name).
        host: Value of ``HOST`` (prompt host name).
        shell: Value of ``SHELL``.
        home: Starting directory; also the target of ``cd ~``.
        theme: Starting theme name.
        ping_count: Probes sent by ``ping`` when ``-c`` is absent.
        ping_timeout: Seconds before a single probe counts as lost.
        ping_interval: Seconds to wait between probes.

    """

    user: str = "guest"
    host: str = "stellar"
    shell: str = "/bin/websh"
    home: str = "/home/guest"
    theme: ThemeName = ThemeName.CLASSIC
    ping_count: int = DEFAULT_PING_COUNT
    ping_timeout: float = DEFAULT_PING_TIMEOUT
    ping_interval: float = DEFAULT_PING_INTERVAL

    def initial_env(self) -> dict[str, str]:
        """Return the environment a new session starts with."""
        return {
            "USER": self.user,
            "HOST": self.host,
            "SHELL": self.shell,
            "PWD": self.home,
            "THEME": str(self.theme),
        }
