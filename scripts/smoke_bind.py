#!/usr/bin/env python3
"""
Form binding smoke script

Usage:
  python scripts/smoke_bind.py --api-base-url <url> --form-id <id> [--method POST] [--field k=v ...] [--file k=path ...]

Examples:
  python scripts/smoke_bind.py --api-base-url http://localhost:8000 --form-id author \
      --field "author[name]=Bernhard" --file "author[image]=./upload.png"
  python scripts/smoke_bind.py --api-base-url http://localhost:8000 --form-id search --method GET --field q=python
"""
from __future__ import annotations

import argparse
import json
import mimetypes
import sys
from pathlib import Path
from typing import List, Tuple

import requests

DEFAULT_API_TIMEOUT_SEC = 30


def _parse_pairs(raw: List[str], option: str) -> List[Tuple[str, str]]:
    pairs: List[Tuple[str, str]] = []
    for item in raw:
        if "=" not in item:
            raise SystemExit(f"{option} must be key=value, got: {item}")
        key, value = item.split("=", 1)
        pairs.append((key, value))
    return pairs


def main() -> int:
    parser = argparse.ArgumentParser(description="Submit a request to the FormBind API")
    parser.add_argument("--api-base-url", required=True)
    parser.add_argument("--form-id", required=True)
    parser.add_argument("--method", default="POST")
    parser.add_argument("--field", action="append", default=[])
    parser.add_argument("--file", action="append", default=[])
    parser.add_argument("--timeout-sec", type=int, default=DEFAULT_API_TIMEOUT_SEC)
    args = parser.parse_args()

    url = f"{args.api_base_url.rstrip('/')}/forms/{args.form_id}"
    method = args.method.upper()
    fields = _parse_pairs(args.field, "--field")
    uploads = _parse_pairs(args.file, "--file")

    if method in ("GET", "HEAD"):
        response = requests.request(method, url, params=fields, timeout=args.timeout_sec)
    else:
        files = []
        handles = []
        try:
            for key, path in uploads:
                handle = Path(path).open("rb")
                handles.append(handle)
                mime = mimetypes.guess_type(path)[0] or "application/octet-stream"
                files.append((key, (Path(path).name, handle, mime)))
            response = requests.request(
                method, url, data=fields, files=files or None, timeout=args.timeout_sec
            )
        finally:
            for handle in handles:
                handle.close()

    print(f"HTTP {response.status_code}")
    try:
        print(json.dumps(response.json(), ensure_ascii=False, indent=2))
    except ValueError:
        print(response.text)
    return 0 if response.ok else 1


if __name__ == "__main__":
    sys.exit(main())
