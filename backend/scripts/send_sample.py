#!/usr/bin/env python3
"""
Post a sample provider webhook to a running receiver.

Usage:
    python scripts/send_sample.py [url] [payload_json]
"""
import json
import sys

import httpx

SAMPLE_PAYLOAD = {
    "event_type": "purchase.approved",
    "customer": {"name": "Maria Silva", "email": "maria@example.com"},
    "product": {"id": 1024, "name": "Plano Anual"},
    "amount": 497.0,
}


def send(url: str, payload) -> httpx.Response:
    return httpx.post(url, json=payload, timeout=10)


if __name__ == "__main__":
    if len(sys.argv) > 3:
        print("Usage: send_sample.py [url] [payload_json]")
        sys.exit(1)

    url = sys.argv[1] if len(sys.argv) > 1 else "http://localhost:8000/"
    payload = SAMPLE_PAYLOAD
    if len(sys.argv) == 3:
        try:
            payload = json.loads(sys.argv[2])
        except json.JSONDecodeError:
            print("Error: Payload must be valid JSON", file=sys.stderr)
            sys.exit(1)

    r = send(url, payload)
    print(r.status_code)
    print(r.text)
