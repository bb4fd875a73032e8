"""
Command-line access to the TMDb client.

Examples:
    themoviedb search "Fight Club" --language en-US
    themoviedb browse rating desc --param page=2 --param genres=18
    themoviedb person 287
"""

import argparse
import json
import logging
import sys
from typing import Dict, List, Optional, Sequence

from dotenv import load_dotenv

from .client import LookupResult, LookupStatus, TheMovieDbClient
from .config import load_config
from .errors import ConfigurationError
from .logging_utils import setup_logging
from .urls import encode_search_term

logger = logging.getLogger(__name__)

EXIT_FOUND = 0
EXIT_NOT_FOUND = 1
EXIT_CONFIG_ERROR = 2

# Sub-command -> (client method, argument help)
COMMANDS = {
    "search": ("search_movies_result", "movie title"),
    "imdb": ("imdb_lookup_result", "IMDb id, e.g. tt0137523"),
    "info": ("get_movie_info_result", "TMDb movie id"),
    "images": ("get_movie_images_result", "TMDb or IMDb movie id"),
    "person-search": ("search_person_result", "person name"),
    "person": ("get_person_info_result", "TMDb person id"),
    "person-version": ("get_person_version_result", "TMDb person id"),
}


def _parse_params(values: Optional[List[str]]) -> Dict[str, str]:
    params = {}
    for value in values or []:
        key, sep, param_value = value.partition("=")
        if not sep:
            raise argparse.ArgumentTypeError(f"Expected key=value, got {value!r}")
        params[key.strip()] = encode_search_term(param_value.strip())
    return params


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="themoviedb", description="Query the TheMovieDb.org XML API.")
    parser.add_argument("--config", help="YAML configuration file")
    parser.add_argument("--api-key", help="TMDb API key (overrides TMDB_API_KEY)")
    parser.add_argument("--language", help="Language code, e.g. en-US")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")

    subparsers = parser.add_subparsers(dest="command", required=True)
    for name, (_, help_text) in COMMANDS.items():
        sub = subparsers.add_parser(name, help=f"Look up by {help_text}")
        sub.add_argument("argument", help=help_text)

    browse = subparsers.add_parser("browse", help="Browse movies with filters")
    browse.add_argument("order_by", choices=["rating", "release", "title"])
    browse.add_argument("order", choices=["asc", "desc"])
    browse.add_argument("--param", action="append", metavar="KEY=VALUE", help="Browse filter, may be repeated")
    return parser


def _dump(result: LookupResult) -> str:
    value = result.value
    if isinstance(value, list):
        return json.dumps([item.model_dump() for item in value], indent=2)
    return value.model_dump_json(indent=2) if value is not None else "null"


def main(argv: Optional[Sequence[str]] = None) -> int:
    load_dotenv()

    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        config = load_config(args.config, api_key=args.api_key)
    except ConfigurationError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return EXIT_CONFIG_ERROR

    setup_logging(config.logging, api_key=config.api_key)
    if args.verbose:
        logging.getLogger("themoviedb").setLevel(logging.DEBUG)

    with TheMovieDbClient(config=config) as client:
        if args.command == "browse":
            try:
                params = _parse_params(args.param)
            except argparse.ArgumentTypeError as e:
                parser.error(str(e))
            result = client.browse_movies_result(args.order_by, args.order, params, args.language)
        else:
            method_name, _ = COMMANDS[args.command]
            result = getattr(client, method_name)(args.argument, args.language)

    if result.status == LookupStatus.TRANSPORT_ERROR:
        print(f"Request failed: {result.error}", file=sys.stderr)
        return EXIT_NOT_FOUND

    print(_dump(result))
    return EXIT_FOUND if result.found else EXIT_NOT_FOUND


if __name__ == "__main__":
    sys.exit(main())
