#!/usr/bin/env python3
"""CLI tool for the token auth service."""
import json
import sys
from dataclasses import asdict
from typing import Optional

from tokenauth.config import ConfigError, config
from tokenauth.auth.credentials import calculate_pass_hash, new_salt
from tokenauth.auth.jwt_handler import TokenIssuer


def serve() -> None:
    """Run the HTTP server."""
    import uvicorn
    uvicorn.run(
        "tokenauth.main:create_app",
        factory=True,
        host=config.host,
        port=config.port,
    )


def issue(username: str, subject: str) -> None:
    """Print a fresh token pair as JSON."""
    try:
        issuer = TokenIssuer(config.validate())
    except ConfigError as e:
        print(f"Error: {e}")
        sys.exit(1)
    print(json.dumps(asdict(issuer.generate_token(username, subject)), indent=2))


def hash_password(password: str, salt: Optional[str] = None) -> None:
    """Print a salt and the salted hash of a password."""
    salt = salt or new_salt()
    print(f"Salt: {salt}")
    print(f"Hash: {calculate_pass_hash(password, salt)}")


def print_usage():
    """Print usage information."""
    print("""
Token Auth CLI

Usage:
  tokenauth <command> [args]

Commands:
  serve                          Run the HTTP server
  issue <username> <subject>     Print an access/refresh token pair
  hash <password> [salt]         Print a salt and salted password hash

Examples:
  tokenauth serve
  tokenauth issue alice 6f1c2d
  tokenauth hash secret123
""")


def main(argv: Optional[list[str]] = None):
    """Main CLI entry point."""
    args = sys.argv[1:] if argv is None else argv
    if not args:
        print_usage()
        sys.exit(1)
    
    command = args[0].lower()
    
    if command == "serve":
        serve()
    
    elif command == "issue":
        if len(args) < 3:
            print("Error: Username and subject required.")
            print("Usage: tokenauth issue <username> <subject>")
            sys.exit(1)
        issue(args[1], args[2])
    
    elif command == "hash":
        if len(args) < 2:
            print("Error: Password required.")
            print("Usage: tokenauth hash <password> [salt]")
            sys.exit(1)
        hash_password(args[1], args[2] if len(args) > 2 else None)
    
    elif command in ("help", "-h", "--help"):
        print_usage()
    
    else:
        print(f"Unknown command: {command}")
        print_usage()
        sys.exit(1)


if __name__ == "__main__":
    main()
