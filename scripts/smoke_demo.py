from __future__ import annotations

import argparse
import json
import time
import urllib.error
import urllib.request
from typing import Any


def request(url: str, payload: dict[str, Any] | None = None) -> tuple[int, Any]:
    data = json.dumps(payload).encode("utf-8") if payload is not None else None
    req = urllib.request.Request(url, data=data, headers={"Content-Type": "application/json"})
    try:
        with urllib.request.urlopen(req, timeout=10) as resp:
            return resp.status, json.loads(resp.read() or b"null")
    except urllib.error.HTTPError as exc:
        return exc.code, json.loads(exc.read() or b"null")


def wait_for(url: str, timeout: int) -> None:
    deadline = time.time() + timeout
    last_error: Exception | None = None
    while time.time() < deadline:
        try:
            status, _ = request(url)
            if status == 200:
                return
        except Exception as exc:
            last_error = exc
        time.sleep(1)
    raise RuntimeError(f"Timed out waiting for {url}: {last_error}")


def main() -> None:
    parser = argparse.ArgumentParser(description="Smoke test for a running paper service.")
    parser.add_argument("--base", default="http://localhost:8080")
    parser.add_argument("--owner", type=int, default=990001)
    parser.add_argument("--timeout", type=int, default=60)
    args = parser.parse_args()

    base = args.base.rstrip("/")
    wait_for(f"{base}/api/health", args.timeout)

    body = {"x": 0, "y": 0, "content": "smoke", "anonymousNickname": "smoke", "decoType": "POTATO"}
    status, first = request(f"{base}/api/paper/{args.owner}", body)
    if status not in {201, 409}:
        raise RuntimeError(f"Unexpected placement response {status}: {first}")

    status, second = request(f"{base}/api/paper/{args.owner}", body)
    if status != 409 or second.get("status") != "conflict":
        raise RuntimeError(f"Expected conflict, got {status}: {second}")

    status, board = request(f"{base}/api/paper/{args.owner}")
    if status != 200 or not any(item["x"] == 0 and item["y"] == 0 for item in board):
        raise RuntimeError("Placed message missing from visit view")
    if any("content" in item for item in board):
        raise RuntimeError("Visit view leaked message content")

    print("Smoke test passed.")


if __name__ == "__main__":
    main()
