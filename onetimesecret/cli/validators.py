"""Input validation for CLI arguments."""
import re
import sys

# Keys issued by the service are base36 strings
KEY_PATTERN = r'^[a-zA-Z0-9]+$'

EMAIL_PATTERN = r'^[^@\s]+@[^@\s]+\.[^@\s]+$'


def validate_metadata_key(key: str) -> None:
    """
    Validate a metadata key before it is put into a request path.

    Args:
        key: Metadata key to validate

    Raises:
        SystemExit with code 2 if validation fails
    """
    if not key:
        print("Error: Metadata key cannot be empty", file=sys.stderr)
        sys.exit(2)

    if not re.match(KEY_PATTERN, key):
        print(f"Error: Invalid metadata key '{key}'", file=sys.stderr)
        print("\nMetadata keys contain only letters and numbers.", file=sys.stderr)
        print("Use the key printed as 'Metadata key (do not share)' by 'onetimesecret create'.", file=sys.stderr)
        sys.exit(2)


def validate_secret_value(value: str) -> None:
    """
    Validate secret value is not empty.

    The service rejects empty secrets. Leave out --value to have one generated.

    Raises:
        SystemExit with code 2 if validation fails
    """
    if value == "":
        print("Error: Secret value cannot be empty", file=sys.stderr)
        print("\nOmit --value to let onetimesecret.com generate a secret for you.", file=sys.stderr)
        sys.exit(2)


def validate_email(email: str) -> None:
    """
    Validate recipient email looks like an address.

    Raises:
        SystemExit with code 2 if validation fails
    """
    if not re.match(EMAIL_PATTERN, email):
        print(f"Error: Invalid email address '{email}'", file=sys.stderr)
        sys.exit(2)
