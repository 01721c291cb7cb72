"""CLI entrypoint for onetimesecret."""
import sys
import argparse
import logging

from .. import __version__
from ..secrets.domains.config_loader import load_config
from ..secrets.domains.models import format_time
from ..secrets.domains.ots_client import Client
from ..secrets.workflows.secret_operations import create_secret, inspect_secrets, share_url
from .validators import validate_email, validate_metadata_key, validate_secret_value

VERSION = __version__

# Configure logging to stderr
logging.basicConfig(
    level=logging.WARNING,
    format="%(message)s",
    stream=sys.stderr
)
logger = logging.getLogger(__name__)


def get_client(args) -> Client:
    """Build a client from --cfg/--username/--apitoken, env vars and the config file."""
    config = load_config(
        config_path=args.cfg,
        username=args.username,
        apitoken=args.apitoken,
    )
    return Client(config["username"], config["apitoken"])


def cmd_version(args):
    """Show version information."""
    print(f"onetimesecret {VERSION}")


def cmd_create(args):
    """Create or generate a secret and print how to share it."""
    if args.value is not None:
        validate_secret_value(args.value)
    if args.email is not None:
        validate_email(args.email)

    client = get_client(args)
    result = create_secret(client, value=args.value, email=args.email)
    metadata = result.metadata

    if result.generated:
        print(f"Secret value: {result.value}")

    if args.email:
        recipients = ", ".join(metadata.recipient) or args.email
        print(f"Email with link has been sent to {recipients}")
    else:
        print(f"Secret path: {share_url(metadata.secret_key)}")
    print(f"Metadata key (do not share): {metadata.metadata_key}")


def cmd_inspect(args):
    """Print metadata about one or more secrets."""
    for key in args.metadata_keys:
        validate_metadata_key(key)

    client = get_client(args)
    for i, metadata in enumerate(inspect_secrets(client, args.metadata_keys)):
        if i > 0:
            print()
        print(f"Password set: {str(metadata.passphrase_required).lower()}")
        print(f"Status      : {metadata.status}")
        if metadata.status == "read":
            print(f"Received at : {metadata.received}")
        print(f"Expires     : {format_time(metadata.deadline)}")
        print(f"Created on  : {metadata.created}")
        print(f"Created by  : {metadata.customer_id}")
        if metadata.recipient:
            print(f"Sent to     : {metadata.recipient[0]}")
        if metadata.secret_key:
            print(f"Secret URL  : {share_url(metadata.secret_key)}")


def main(argv=None):
    """Main CLI entrypoint.

    Exit codes:
        0 - Success
        1 - Runtime errors (configuration, network, service rejected the request, etc.)
        2 - Usage errors (invalid arguments, invalid key format, etc.)
    """
    parser = argparse.ArgumentParser(
        prog="onetimesecret",
        description="Create and send secrets to friends through onetimesecret.com",
        epilog="""
Exit codes:
  0 - Success
  1 - Runtime error (configuration, network, service rejected the request, etc.)
  2 - Usage error (invalid arguments, invalid key format, etc.)

Environment variables:
  OTS_USERNAME - Username for onetimesecret (overrides config file)
  OTS_APITOKEN - API token for onetimesecret (overrides config file)

Configuration:
  Default location: ~/.onetimesecret.yaml
  Schema:
    username: <username>
    apitoken: <apitoken>

To get an API token simply sign up at https://onetimesecret.com/
        """,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--cfg",
        help="Configuration file (default: ~/.onetimesecret.yaml)"
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="More verbose output"
    )
    parser.add_argument(
        "--username",
        help="Username for onetimesecret"
    )
    parser.add_argument(
        "--apitoken",
        help="API token for onetimesecret"
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # version command
    _version_parser = subparsers.add_parser(
        "version",
        help="Show version information",
        description="Display the current version of onetimesecret"
    )

    # create command
    create_parser = subparsers.add_parser(
        "create",
        help="Create a secret",
        description="""
Create a secret and print the link to share it.

Without --value, onetimesecret.com generates a random secret and the
generated value is printed. With --email, a link to the secret (never
the secret itself) is emailed instead; this requires credentials.

The printed metadata key lets you inspect the secret later. Do not share it.
        """,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    create_parser.add_argument(
        "--value",
        help="Send a secret with this value"
    )
    create_parser.add_argument(
        "--email",
        help="Send a link to this email"
    )

    # inspect command
    inspect_parser = subparsers.add_parser(
        "inspect",
        help="View metadata about a secret",
        description="Show status, expiry and ownership of secrets, given their metadata keys"
    )
    inspect_parser.add_argument(
        "metadata_keys",
        nargs="+",
        metavar="METADATA_KEY",
        help="Metadata key printed by 'create'"
    )

    args = parser.parse_args(argv)

    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    # If no command provided, show help and exit with usage error code
    if not args.command:
        parser.print_help()
        sys.exit(2)

    # Route to command handlers
    try:
        if args.command == "version":
            cmd_version(args)
        elif args.command == "create":
            cmd_create(args)
        elif args.command == "inspect":
            cmd_inspect(args)
        else:
            parser.print_help()
            sys.exit(2)
    except KeyboardInterrupt:
        print("\nInterrupted", file=sys.stderr)
        sys.exit(1)
    except Exception as e:
        logger.debug("Command failed", exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
