#!/usr/bin/env python3
"""
Library Lending CLI Tool

Loads catalogue and member CSV files into a fresh in-memory library, then
lists or searches them, or opens an interactive session for loans, returns
and reservations. Nothing is written back to disk.
"""

import argparse
import shlex
import sys
from datetime import date
from pathlib import Path
import logging

# Add the parent directory to the path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from config import Config
from lending import create_library
from lending.domain.exceptions import LibraryValidationError
from lending.infrastructure.csv_importer import import_catalogue, import_members
from lending.utils.clock import FixedClock

CATALOGUE_FILES = {
    'book': 'books.csv',
    'dvd': 'dvds.csv',
    'magazine': 'magazines.csv',
}
MEMBERS_FILE = 'members.csv'


def setup_logging(verbose: bool = False):
    """Setup logging configuration."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )


def build_library(args):
    """Create a library and load every CSV found in the data directory."""
    clock = FixedClock(date.fromisoformat(args.today)) if args.today else None
    library = create_library(Config, clock=clock)
    # create_library applies LOG_LEVEL; --verbose wins over it
    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    data_dir = Path(args.data_dir)
    for kind, filename in CATALOGUE_FILES.items():
        path = data_dir / filename
        if path.exists():
            import_catalogue(library, path, kind)
    members_path = data_dir / MEMBERS_FILE
    if members_path.exists():
        import_members(library, members_path)
    return library


def _print_item(item):
    author = getattr(item, 'author', None)
    by = f" by {author}" if author else ""
    print(f"[{item.media_type}] {item.title}{by} ({item.status.value})")
    print(f"   ID: {item.media_id}")


def _print_member(member):
    state = "active" if member.active else "inactive"
    print(f"{member.name} <{member.email}> ({state})")
    print(f"   ID: {member.member_id}")


def list_items(library, args):
    """List all catalogue items."""
    items = library.search_media(None)
    if not items:
        print("No items found.")
        return True
    print(f"Found {len(items)} items:")
    for item in items:
        _print_item(item)
    return True


def list_members(library, args):
    """List all members."""
    members = library.search_members(None)
    if not members:
        print("No members found.")
        return True
    print(f"Found {len(members)} members:")
    for member in members:
        _print_member(member)
    return True


def search_media(library, args):
    results = library.search_media(args.keyword)
    print(f"{len(results)} items match {args.keyword!r}")
    for item in results:
        _print_item(item)
    return True


def search_members(library, args):
    results = library.search_members(args.keyword)
    print(f"{len(results)} members match {args.keyword!r}")
    for member in results:
        _print_member(member)
    return True


SHELL_HELP = """Commands:
  loan MEMBER_ID MEDIA_ID     lend an item
  return MEDIA_ID             return an item
  reserve MEMBER_ID MEDIA_ID  join the queue for an item
  fulfil MEDIA_ID             fulfil the oldest reservation
  cancel RESERVATION_ID       cancel a reservation
  release MEDIA_ID            release an uncollected hold
  remove-item MEDIA_ID        remove an item
  remove-member MEMBER_ID     remove a member
  items | members             list everything
  overdue                     list overdue loans
  quit"""


def run_shell_command(library, words):
    """Run one interactive command. Returns False when the session should end."""
    command, params = words[0], words[1:]
    if command in ('quit', 'exit'):
        return False
    if command == 'help':
        print(SHELL_HELP)
    elif command == 'loan':
        loan = library.loan_item(params[0], params[1])
        print(f"✅ Loan {loan.loan_id} due {loan.due_date.isoformat()}")
    elif command == 'return':
        loan = library.return_item(params[0])
        print(f"✅ Returned. Fine: {loan.fine_accrued}p")
    elif command == 'reserve':
        reservation = library.place_reservation(params[0], params[1])
        print(f"✅ Reservation {reservation.reservation_id} placed")
    elif command == 'fulfil':
        if library.fulfil_reservation(params[0]):
            print("✅ Reservation fulfilled")
        else:
            print("ℹ️  No active reservations for this item")
    elif command == 'cancel':
        library.cancel_reservation(params[0])
        print("✅ Reservation cancelled")
    elif command == 'release':
        if library.release_hold(params[0]):
            print("✅ Hold released")
        else:
            print("ℹ️  No hold on this item")
    elif command == 'remove-item':
        library.remove_item(params[0])
        print("✅ Item removed")
    elif command == 'remove-member':
        library.remove_member(params[0])
        print("✅ Member removed")
    elif command == 'items':
        for item in library.list_items():
            _print_item(item)
    elif command == 'members':
        for member in library.list_members():
            _print_member(member)
    elif command == 'overdue':
        for loan in library.overdue_loans():
            print(f"{loan.loan_id}: item {loan.media_id}, member {loan.member_id}, due {loan.due_date.isoformat()}")
    else:
        print(f"Unknown command: {command}. Type 'help'.")
    return True


def shell(library, args):
    """Interactive session against the loaded library."""
    print(SHELL_HELP)
    while True:
        try:
            line = input("library> ")
        except EOFError:
            print()
            return True
        try:
            words = shlex.split(line)
            if not words:
                continue
            if not run_shell_command(library, words):
                return True
        except LibraryValidationError as e:
            print(f"❌ {e.message}")
        except IndexError:
            print("❌ Missing arguments. Type 'help'.")
        except ValueError as e:
            print(f"❌ Could not parse command: {e}")


def main():
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Library Lending CLI Tool",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s list-items
  %(prog)s search-media tolkien
  %(prog)s --data-dir ./sample --today 2024-01-01 shell
        """
    )

    parser.add_argument('--data-dir', default=Config.DATA_DIR,
                       help='Directory holding books.csv, dvds.csv, magazines.csv and members.csv')
    parser.add_argument('--today', help='Freeze the current date (YYYY-MM-DD)')
    parser.add_argument('--verbose', '-v', action='store_true',
                       help='Enable verbose logging')

    subparsers = parser.add_subparsers(dest='command', help='Available commands')

    subparsers.add_parser('list-items', help='List all items by title')
    subparsers.add_parser('list-members', help='List all members by name')

    search_media_parser = subparsers.add_parser('search-media', help='Search items by title or author')
    search_media_parser.add_argument('keyword', help='Case-insensitive text to look for')

    search_members_parser = subparsers.add_parser('search-members', help='Search members by name')
    search_members_parser.add_argument('keyword', help='Case-insensitive text to look for')

    subparsers.add_parser('shell', help='Interactive loans, returns and reservations')

    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        return 1

    setup_logging(args.verbose)

    commands = {
        'list-items': list_items,
        'list-members': list_members,
        'search-media': search_media,
        'search-members': search_members,
        'shell': shell,
    }

    try:
        library = build_library(args)
        success = commands[args.command](library, args)
        return 0 if success else 1
    except KeyboardInterrupt:
        print("\n❌ Operation cancelled by user")
        return 1
    except (OSError, ValueError) as e:
        print(f"❌ Error: {e}")
        return 1


if __name__ == '__main__':
    sys.exit(main())
