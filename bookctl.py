#!/usr/bin/env python3
"""Book Manager CLI - CRUD over the book REST API."""
import argparse
import asyncio
import cmd
import sys
from bookmanager.client import BookApiClient
from bookmanager.async_client import AsyncBookApiClient
from bookmanager.manager import (
    BookFormManager,
    DELETE_BY_ID_FAILED,
    DELETE_FAILED,
    FETCH_FAILED,
    NOT_FOUND,
    SAVE_FAILED,
)
from bookmanager.models import FIELD_NAMES
from bookmanager.view import render_books, render_book, render_state
from bookmanager.config import Config
import logging

logger = logging.getLogger(__name__)

# Messages that mean the last operation did not go through
FAILURE_MESSAGES = {FETCH_FAILED, SAVE_FAILED, DELETE_FAILED, DELETE_BY_ID_FAILED, NOT_FOUND}


def ask_confirmation(prompt: str) -> bool:
    """Yes/no question on the terminal, defaulting to no."""
    try:
        answer = input(f"{prompt} [y/N] ")
    except EOFError:
        return False
    return answer.strip().lower() in ("y", "yes")


def build_manager(args, config: Config, confirm=ask_confirmation) -> BookFormManager:
    """Create a manager bound to a fresh client."""
    client = BookApiClient(args.base_url or config.BOOK_API_URL, timeout=config.TIMEOUT)
    return BookFormManager(client, confirm)


def report(manager: BookFormManager) -> int:
    """Print the last message and turn it into an exit code."""
    if manager.message:
        print(manager.message)
    if manager.message in FAILURE_MESSAGES or manager.message.startswith("Please "):
        return 1
    return 0


def apply_fields(manager: BookFormManager, args):
    """Copy the field options that were given into the draft."""
    for name in manager.editable_fields():
        value = getattr(args, name, None)
        if value is not None:
            manager.set_field(name, value)


async def list_books_async(args, config: Config) -> int:
    """List books using the async client."""
    async with AsyncBookApiClient(
        args.base_url or config.BOOK_API_URL,
        timeout=config.TIMEOUT
    ) as client:
        books = await client.list_books()

    if books is None:
        print(FETCH_FAILED)
        return 1

    print(render_books(books, args.format))
    return 0


def list_books(args, config: Config) -> int:
    """List books."""
    if args.use_async:
        return asyncio.run(list_books_async(args, config))

    manager = build_manager(args, config)
    with manager.client:
        manager.mount()
        if manager.message:
            return report(manager)
        print(render_books(manager.books, args.format))
    return 0


def view_book(args, config: Config) -> int:
    """Show one book by id."""
    manager = build_manager(args, config)
    with manager.client:
        if manager.view_by_id(args.book_id):
            print(render_book(manager.view_book))
        return report(manager)


def add_book(args, config: Config) -> int:
    """Create a book from the field options."""
    manager = build_manager(args, config)
    with manager.client:
        apply_fields(manager, args)
        manager.create()
        return report(manager)


def update_book(args, config: Config) -> int:
    """Load a book, overwrite the given fields and save it."""
    manager = build_manager(args, config)
    with manager.client:
        if not manager.view_by_id(args.book_id):
            return report(manager)

        manager.edit(manager.view_book)
        apply_fields(manager, args)
        manager.update()
        return report(manager)


def delete_book(args, config: Config) -> int:
    """Delete a book by id."""
    confirm = (lambda prompt: True) if args.yes else ask_confirmation
    manager = build_manager(args, config, confirm)
    with manager.client:
        manager.delete_by_id(args.book_id)
        return report(manager)


class BookShell(cmd.Cmd):
    """Interactive form session over one manager."""

    intro = "Book Manager. Type help or ? to list commands."
    prompt = "(books) "

    def __init__(self, manager: BookFormManager):
        super().__init__()
        self.manager = manager

    def preloop(self):
        self.manager.mount()
        self.do_show("")

    def emptyline(self):
        pass

    def _echo(self):
        if self.manager.message:
            print(self.manager.message)

    def do_list(self, arg):
        """list: refresh and print the book list"""
        self.manager.fetch_books()
        self._echo()
        print(render_books(self.manager.books))

    def do_show(self, arg):
        """show: print the whole form state"""
        print(render_state(self.manager))

    def do_new(self, arg):
        """new: start a fresh draft"""
        self.manager.cancel_edit()
        self.do_show("")

    def do_set(self, arg):
        """set FIELD VALUE: change a draft field"""
        # Value is taken literally, apostrophes and all
        parts = arg.split(None, 1)
        if len(parts) < 2:
            print(f"usage: set FIELD VALUE  (fields: {', '.join(self.manager.editable_fields())})")
            return
        try:
            self.manager.set_field(parts[0], parts[1].strip())
        except ValueError as e:
            print(e)

    def do_edit(self, arg):
        """edit ID: load a listed book into the form"""
        book_id = arg.strip()
        for book in self.manager.books:
            if book.id == book_id:
                self.manager.edit(book)
                self.do_show("")
                return
        print(f"No listed book with ID {book_id}")

    def do_cancel(self, arg):
        """cancel: leave edit mode and clear the draft"""
        self.manager.cancel_edit()

    def do_save(self, arg):
        """save: add or update the draft"""
        self.manager.submit()
        self._echo()

    def do_view(self, arg):
        """view ID: look up a book by id"""
        if self.manager.view_by_id(arg):
            print(render_book(self.manager.view_book))
        self._echo()

    def do_delete(self, arg):
        """delete ID: delete a book by id"""
        self.manager.delete_by_id(arg)
        self._echo()

    def do_remove(self, arg):
        """remove ID: delete a book from the list"""
        book_id = arg.strip()
        if book_id not in [book.id for book in self.manager.books]:
            print(f"No listed book with ID {book_id}")
            return
        self.manager.delete(book_id)
        self._echo()

    def do_quit(self, arg):
        """quit: leave the shell"""
        return True

    do_EOF = do_quit


def run_shell(args, config: Config) -> int:
    """Interactive session."""
    manager = build_manager(args, config)
    with manager.client:
        BookShell(manager).cmdloop()
    return 0


def add_field_options(parser: argparse.ArgumentParser, with_id: bool):
    """One option per book field."""
    for name in FIELD_NAMES:
        if name == "id" and not with_id:
            continue
        parser.add_argument(f"--{name}", help=f"Book {name}")


def main(argv=None) -> int:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Book Manager - CRUD client for the book REST API",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # List books as a table
  %(prog)s list

  # Add a book
  %(prog)s add --id 7 --title Dune --author Herbert --publisher Chilton \\
      --category SciFi --isbn 123 --year 1965 --copies 3

  # Change one field of an existing book
  %(prog)s update 7 --copies 4

  # Delete without prompting
  %(prog)s delete 7 --yes

  # Interactive form
  %(prog)s shell
        """
    )
    parser.add_argument("--base-url", help="API base URL (default: $BOOK_API_URL)")

    subparsers = parser.add_subparsers(dest="command", help="Command to execute")

    # List command
    list_parser = subparsers.add_parser("list", help="List all books")
    list_parser.add_argument("--format", choices=["table", "json", "compact"], default="table", help="Output format")
    list_parser.add_argument("--async", dest="use_async", action="store_true", help="Use async client")

    # View command
    view_parser = subparsers.add_parser("view", help="Show a book by ID")
    view_parser.add_argument("book_id", help="Book ID")

    # Add command
    add_parser = subparsers.add_parser("add", help="Add a book")
    add_field_options(add_parser, with_id=True)

    # Update command
    update_parser = subparsers.add_parser("update", help="Update a book")
    update_parser.add_argument("book_id", help="Book ID")
    add_field_options(update_parser, with_id=False)

    # Delete command
    delete_parser = subparsers.add_parser("delete", help="Delete a book by ID")
    delete_parser.add_argument("book_id", help="Book ID")
    delete_parser.add_argument("--yes", action="store_true", help="Skip confirmation")

    # Shell command
    subparsers.add_parser("shell", help="Interactive form session")

    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    config = Config()

    level = logging.getLevelName(config.LOG_LEVEL.upper())
    if not isinstance(level, int):
        print(f"Invalid LOG_LEVEL: {config.LOG_LEVEL}", file=sys.stderr)
        return 1

    # Configure logging
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(levelname)s - %(message)s'
    )

    commands = {
        "list": list_books,
        "view": view_book,
        "add": add_book,
        "update": update_book,
        "delete": delete_book,
        "shell": run_shell,
    }

    try:
        return commands[args.command](args, config)

    except KeyboardInterrupt:
        logger.info("\n⚠️  Interrupted by user")
        return 0
    except Exception as e:
        logger.error(f"❌ Error: {e}", exc_info=True)
        return 1


if __name__ == "__main__":
    sys.exit(main())
