"""
Basic Requests
==============

Demonstrates the top-level functions: get, post, put and delete, with the
three kinds of request body (text, form fields and a byte stream).
"""

import io

import httpq


def main() -> None:
    # ── GET ──────────────────────────────────────────────────────────────
    with httpq.get("https://httpbin.org/get") as response:
        print(f"GET  → {response.status_code} {response.reason_phrase}")
        print(f"  URL:          {response.url}")
        print(f"  Content-Type: {response.get_header('content-type')}")
    print()

    # ── POST form fields ─────────────────────────────────────────────────
    response = httpq.post(
        "https://httpbin.org/post",
        {"name": "httpq", "tags": "http client"},
    )
    print(f"POST → {response.status_code}")
    for line in response.body_lines:
        print(f"  {line}")
    print()

    # ── PUT a byte stream ────────────────────────────────────────────────
    response = httpq.put("https://httpbin.org/put", io.BytesIO(b"updated payload"))
    print(f"PUT  → {response.status_code}")
    response.close()
    print()

    # ── DELETE ───────────────────────────────────────────────────────────
    response = httpq.delete("https://httpbin.org/delete")
    print(f"DELETE → {response.status_code}")
    response.close()


if __name__ == "__main__":
    main()
