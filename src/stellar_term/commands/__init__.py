"""Built-in commands.

``build_registry()`` assembles a fresh, frozen ``CommandRegistry`` from
the command modules::

    from stellar_term.commands import build_registry

    registry = build_registry()
    registry.names()  # ['about', 'alias', 'cat', 'cd', ...]
"""

from stellar_term.commands import files, info, network
from stellar_term.registry import CommandRegistry


def build_registry() -> CommandRegistry:
    """Return a new registry holding every built-in command and alias."""
    registry = CommandRegistry()
    info.register(registry)
    files.register(registry)
    network.register(registry)
    return registry.freeze()


__all__ = ["build_registry"]
