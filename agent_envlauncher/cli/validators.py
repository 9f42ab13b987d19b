"""Input validation for CLI arguments."""
import re
import sys
from typing import Optional

# GCP Secret Manager allows only: [a-zA-Z0-9_-]
GCP_NAME_PATTERN = r'^[a-zA-Z0-9_-]+$'
GCP_RESOURCE_PATTERN = r'^projects/[^/]+/secrets/[a-zA-Z0-9_-]+(/versions/[^/]+)?$'
# AWS Secrets Manager names: letters, numbers and /_+=.@- (ARNs add ':')
AWS_NAME_PATTERN = r'^[a-zA-Z0-9/_+=.@:-]+$'


def validate_secret_name(name: str, backend: Optional[str] = None) -> None:
    """
    Validate secret name matches the backend's naming rules.

    Args:
        name: Secret name to validate
        backend: "gcp" (default) or "aws"

    Raises:
        SystemExit with code 2 if validation fails
    """
    if not name:
        print("Error: Secret name cannot be empty", file=sys.stderr)
        sys.exit(2)

    if backend == "aws":
        if not re.match(AWS_NAME_PATTERN, name):
            print(f"Error: Invalid secret name '{name}'", file=sys.stderr)
            print("\nAllowed characters: letters, numbers and / _ + = . @ -", file=sys.stderr)
            sys.exit(2)
        return

    if re.match(GCP_NAME_PATTERN, name) or re.match(GCP_RESOURCE_PATTERN, name):
        return

    print(f"Error: Invalid secret name '{name}'", file=sys.stderr)
    print("\nAllowed characters: letters, numbers, underscores (_), hyphens (-)", file=sys.stderr)
    print("Not allowed: dots (.), spaces, special characters (@, $, !, etc.)", file=sys.stderr)
    print("\nExamples of valid names:", file=sys.stderr)
    print("  ✓ MY_SECRET", file=sys.stderr)
    print("  ✓ api-key-prod", file=sys.stderr)
    print("  ✓ projects/my-project/secrets/db-creds", file=sys.stderr)
    sys.exit(2)
