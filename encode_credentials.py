#!/usr/bin/env python3
"""
Print a Firebase service account file as base64.

The output is the value to set as ``GOOGLE_CREDENTIALS_BASE64`` on hosts
where the JSON key file cannot be deployed.  The file is checked to be a
JSON object before encoding.

Usage:
    python encode_credentials.py --file ./serviceAccountKey.json
"""

import argparse
import json
import sys
from pathlib import Path

from maternity_records_api.app.core.credentials import encode_credentials


def main(argv=None) -> int:
    ap = argparse.ArgumentParser(description="Base64-encode a service account key for GOOGLE_CREDENTIALS_BASE64.")
    ap.add_argument("--file", default="serviceAccountKey.json", help="Path to the service account JSON file")
    args = ap.parse_args(argv)

    path = Path(args.file)
    if not path.exists():
        print(f"[!] Service account key file not found: {path}", file=sys.stderr)
        return 1
    try:
        with open(path, "r", encoding="utf-8") as f:
            content = json.load(f)
    except json.JSONDecodeError as exc:
        print(f"[!] {path} is not valid JSON: {exc}", file=sys.stderr)
        return 1
    if not isinstance(content, dict):
        print(f"[!] {path} must contain a JSON object", file=sys.stderr)
        return 1

    print("Base64-encoded service account key:", file=sys.stderr)
    print(encode_credentials(path))
    return 0


if __name__ == "__main__":
    sys.exit(main())
