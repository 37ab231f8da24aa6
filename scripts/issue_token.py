#!/usr/bin/env python3
"""Issue a bearer token for a user id.

Usage:
    python scripts/issue_token.py <user_id>

Signs with AUTH_SECRET from the environment (or .env). Without a secret the
API runs in dev mode and the user id itself is the bearer value.
"""

import argparse
import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT / "src"))

from dotenv import load_dotenv  # noqa: E402

from parity.api.auth import issue_token  # noqa: E402
from parity.config import get_settings  # noqa: E402


def main() -> int:
    parser = argparse.ArgumentParser(description="Issue a Parity API bearer token")
    parser.add_argument("user_id", help="User id the token authenticates")
    args = parser.parse_args()

    load_dotenv(PROJECT_ROOT / ".env")
    secret = get_settings().auth_secret
    if not secret:
        print("AUTH_SECRET is not set; use the user id as the bearer value", file=sys.stderr)
        return 1

    print(issue_token(args.user_id, secret))
    return 0


if __name__ == "__main__":
    sys.exit(main())
