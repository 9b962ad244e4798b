import argparse
import contextlib
import signal
import sys
import threading
from datetime import datetime
from typing import List, Optional, TextIO

from .api.client import ReaderClient
from .config import DEFAULT_CONFIG_PATH, load_config
from .exceptions import ConfigError, ReaderError
from .models.document import Category, Location
from .models.page import ListFilter, SaveParams
from .utils.logger import logger


class UsageError(ReaderError):
    """Command line arguments are invalid."""
    pass


class ArgumentParser(argparse.ArgumentParser):
    def error(self, message):
        raise UsageError(message)


def build_parser() -> ArgumentParser:
    parser = ArgumentParser(prog="readerctl", description="Command line client for Readwise Reader.")
    parser.add_argument("-t", "--api-token", help="API token")
    parser.add_argument("-c", "--config", default=str(DEFAULT_CONFIG_PATH), help="config file")
    parser.add_argument("--debug", action="store_true", default=None, help="dump HTTP requests and responses to stderr")

    subparsers = parser.add_subparsers(dest="command")

    list_parser = subparsers.add_parser("list", help="List documents")
    list_parser.add_argument("-p", "--paginate", action="store_true", help="paginate results")
    list_parser.add_argument("--id", default="", help="only the document with this ID")
    list_parser.add_argument("--location", choices=[location.value for location in Location], help="filter by location")
    list_parser.add_argument("--category", choices=[category.value for category in Category], help="filter by category")
    list_parser.add_argument("--updated-after", type=datetime.fromisoformat, help="ISO 8601 timestamp")
    list_parser.add_argument("--with-html", action="store_true", help="include HTML content")

    save_parser = subparsers.add_parser("save", help="Save a document by URL")
    save_parser.add_argument("url")
    save_parser.add_argument("--title")
    save_parser.add_argument("--location", choices=[location.value for location in Location])
    save_parser.add_argument("--tag", dest="tags", action="append", default=[], help="may be repeated")

    delete_parser = subparsers.add_parser(
        "delete",
        help="Delete an article from Readwise Reader",
        description="Delete an article from Readwise Reader using the article ID.",
    )
    delete_parser.add_argument("article_id", metavar="article-id")
    delete_parser.add_argument("--missing-ok", action="store_true", help="succeed if the article does not exist")

    return parser


def list_documents(client: ReaderClient, args, stdout: TextIO, cancel: threading.Event) -> None:
    params = ListFilter(
        id=args.id,
        updated_after=args.updated_after,
        location=args.location,
        category=args.category,
        with_html_content=args.with_html,
    )
    pages = client.list_paginate(params, cancel=cancel)
    try:
        for page in pages:
            for document in page.results:
                stdout.write(f"Article {document.id}:\n{document.title or ''}\n\n")
            stdout.flush()

            if not args.paginate:
                break
    finally:
        pages.close()


def save_document(client: ReaderClient, args, stdout: TextIO, cancel: threading.Event) -> None:
    document = client.save(SaveParams(url=args.url, title=args.title, location=args.location, tags=args.tags))
    stdout.write(f"Saved document {document.id}: {document.url}\n")


def delete_document(client: ReaderClient, args, stdout: TextIO, cancel: threading.Event) -> None:
    client.delete(args.article_id, missing_ok=args.missing_ok)
    stdout.write(f"Deleted article {args.article_id}\n")


COMMANDS = {
    "list": list_documents,
    "save": save_document,
    "delete": delete_document,
}


def run(
    argv: Optional[List[str]] = None,
    stdout: TextIO = sys.stdout,
    stderr: TextIO = sys.stderr,
    cancel: Optional[threading.Event] = None,
) -> int:
    """Run a readerctl command and return the process exit code"""
    parser = build_parser()
    cancel = cancel or threading.Event()

    try:
        # Help always goes to stderr, with or without -h
        with contextlib.redirect_stdout(stderr):
            args = parser.parse_args(argv)
        if args.command is None:
            stderr.write(parser.format_help())
            return 0

        config = load_config(api_token=args.api_token, config_path=args.config, debug=args.debug)
        COMMANDS[args.command](config.client(), args, stdout, cancel)
    except SystemExit as e:
        # argparse exits after printing -h/--help
        return e.code if isinstance(e.code, int) else 0
    except (UsageError, ConfigError) as e:
        stderr.write(parser.format_help())
        stderr.write(f"error: {e}\n")
        return 1
    except Exception as e:
        logger.debug("Command failed", exc_info=True)
        stderr.write(f"error: {e}\n")
        return 1

    return 0


def main():
    """Entry point for the readerctl console script"""
    cancel = threading.Event()

    def handle_interrupt(signum, frame):
        # A second Ctrl+C aborts immediately
        if cancel.is_set():
            raise KeyboardInterrupt
        cancel.set()

    signal.signal(signal.SIGINT, handle_interrupt)
    try:
        code = run(sys.argv[1:], cancel=cancel)
    except KeyboardInterrupt:
        sys.stderr.write("error: interrupted\n")
        code = 1
    sys.exit(code)


if __name__ == "__main__":
    main()
