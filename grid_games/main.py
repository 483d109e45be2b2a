
"""CLI entrypoint for grid-games."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Optional, TextIO

from grid_games.config import load_settings
from grid_games.protocol.errors import PluginIndexError
from grid_games.registry import load_plugins
from grid_games.runtime.dispatcher import Dispatcher
from grid_games.runtime.rendering import render_text
from grid_games.runtime.session import GameSession


PLAY_HELP = "Commands: 'x y' plays a square, 'plugin N' starts game N, 'view', 'quit'."


def _play(session: GameSession, stdin: TextIO, stdout: TextIO) -> None:
    print(PLAY_HELP, file=stdout)
    print(render_text(session.render_snapshot()), file=stdout)
    for line in stdin:
        words = line.split()
        if not words:
            continue
        if words[0] == "quit":
            break
        if words[0] == "plugin" and len(words) == 2 and words[1].isdigit():
            try:
                session.select_plugin(int(words[1]))
            except PluginIndexError as exc:
                print(exc, file=stdout)
                continue
        elif len(words) == 2 and all(word.lstrip("-").isdigit() for word in words):
            session.play_move(int(words[0]), int(words[1]))
        elif words[0] != "view":
            print(PLAY_HELP, file=stdout)
            continue
        print(render_text(session.render_snapshot()), file=stdout)
    session.close()


def main(argv: Optional[list[str]] = None) -> int:
    parser = argparse.ArgumentParser(prog="grid-games")
    parser.add_argument("--config", default=None, help="Path to a config.toml file")
    parser.add_argument("--seed", type=int, default=None, help="Seed for plugin randomness")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("list-plugins")
    dispatch_parser = subparsers.add_parser("dispatch")
    dispatch_parser.add_argument(
        "--request",
        required=True,
        help="JSON request object, or a list of requests run in order",
    )
    play_parser = subparsers.add_parser("play")
    play_parser.add_argument("--plugin", type=int, default=None, help="Index of the game to start")

    args = parser.parse_args(argv)

    settings = load_settings(Path(args.config) if args.config else None, seed=args.seed)
    logging.basicConfig(level=settings.log_level)

    registry = load_plugins(settings.plugins, seed=settings.seed)
    session = GameSession(registry)

    if args.command == "list-plugins":
        names = [descriptor.name for descriptor in registry.descriptors()]
        print(json.dumps(names, indent=2))
        return 0

    if args.command == "play":
        if args.plugin is not None:
            try:
                session.select_plugin(args.plugin)
            except PluginIndexError as exc:
                print(exc, file=sys.stderr)
                return 1
        _play(session, sys.stdin, sys.stdout)
        return 0

    requests = json.loads(args.request)
    if isinstance(requests, dict):
        requests = [requests]
    dispatcher = Dispatcher(session)
    response = {}
    for request in requests:
        response = dispatcher.dispatch(request)
    print(json.dumps(response, indent=2, sort_keys=True))
    return 0 if response.get("ok", True) else 1


if __name__ == "__main__":
    raise SystemExit(main())
