"""Commands understood by the dispatcher."""

STANDARD_COMMANDS = [
    "ping",
    "schema",
    "plugins",
    "plugin",
    "play",
    "start",
    "view",
    "close",
]
