"""
Dotdash CLI Entry Point
=======================

Usage:
    dotdash encode "SOS"                 # ... --- ...
    dotdash decode "... --- ..."         # SOS
    dotdash validate --morse ".- -..."
    dotdash chars                        # Table of supported characters
    dotdash config --init                # Write ~/.dotdash/config.yaml
    dotdash serve --port 3007            # Run the HTTP service
"""

import argparse
import logging
import sys
from typing import Any, Dict, Optional

import yaml
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from dotdash.core.codec import MORSE_CODE_MAP
from dotdash.skills.morse_code_translator import morse_tool


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="dotdash",
        description="Dotdash - Text to International Morse Code translator",
    )

    parser.add_argument(
        "-v", "--version",
        action="store_true",
        help="Show version and exit"
    )

    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging"
    )

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    encode_parser = subparsers.add_parser("encode", help="Translate text to Morse code")
    encode_parser.add_argument("text", nargs="+", help="Text to encode")

    decode_parser = subparsers.add_parser("decode", help="Translate Morse code to text")
    decode_parser.add_argument("morse", nargs="+", help="Morse code to decode")

    validate_parser = subparsers.add_parser("validate", help="Validate Morse code or text")
    group = validate_parser.add_mutually_exclusive_group(required=True)
    group.add_argument("--morse", "-m", help="Morse code to check")
    group.add_argument("--text", "-t", help="Text to check")

    subparsers.add_parser("chars", help="List supported characters")

    config_parser = subparsers.add_parser("config", help="Show or initialise configuration")
    config_parser.add_argument("--init", action="store_true", help="Write the default config file")
    config_parser.add_argument("--force", action="store_true", help="Overwrite an existing config file")
    config_parser.add_argument("--path", "-c", default=None, help="Config file to read")

    serve_parser = subparsers.add_parser("serve", help="Run the HTTP/WebSocket service")
    serve_parser.add_argument("--host", default=None, help="Host to bind to")
    serve_parser.add_argument("--port", "-p", type=int, default=None, help="Port to bind to")
    serve_parser.add_argument("--reload", action="store_true", help="Enable auto-reload")
    serve_parser.add_argument("--config", "-c", default=None, help="Path to config file")

    return parser


def _fail(result: Dict[str, Any]) -> int:
    Console(stderr=True).print(f"[red]Error:[/red] {escape(result.get('error', 'unknown error'))}")
    return 1


def _print_characters(console: Console, characters: list):
    table = Table(title=f"Supported characters ({len(characters)})")
    table.add_column("Character", justify="center")
    table.add_column("Morse", style="cyan")
    for char in characters:
        table.add_row(escape(char), MORSE_CODE_MAP[char])
    console.print(table)


def main(argv: Optional[list] = None) -> int:
    """Main entry point for the dotdash CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.version:
        from dotdash import __version__
        print(f"dotdash v{__version__}")
        return 0

    if args.debug:
        logging.basicConfig(level=logging.DEBUG)

    if args.command == "encode":
        result = morse_tool({"action": "encode", "text": " ".join(args.text)})
        if not result["success"]:
            return _fail(result)
        print(result["morse"])
        return 0

    elif args.command == "decode":
        result = morse_tool({"action": "decode", "morse": " ".join(args.morse)})
        if not result["success"]:
            return _fail(result)
        print(result["text"])
        return 0

    elif args.command == "validate":
        params = {"action": "validate"}
        if args.morse is not None:
            params["morse"] = args.morse
        else:
            params["text"] = args.text
        result = morse_tool(params)
        if not result["success"]:
            return _fail(result)
        print("valid" if result["is_valid"] else "invalid")
        return 0 if result["is_valid"] else 1

    elif args.command == "chars":
        result = morse_tool({"action": "characters"})
        _print_characters(Console(), result["characters"])
        return 0

    elif args.command == "config":
        from dotdash.config import ConfigLoader
        loader = ConfigLoader(args.path)
        if args.init:
            print(loader.create_default_config(force=args.force))
            return 0
        config = loader.load()
        print(yaml.safe_dump(config.to_dict(), default_flow_style=False, sort_keys=False), end="")
        return 0

    elif args.command == "serve":
        from dotdash.web.__main__ import serve
        return serve(
            host=args.host,
            port=args.port,
            debug=args.debug,
            reload=args.reload,
            config_path=args.config,
        )

    parser.print_help()
    return 0


if __name__ == "__main__":
    sys.exit(main())
