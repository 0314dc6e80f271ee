"""
URLs, Headers, and Cookies
==========================

Building URLs with encoded queries and fragments, sending custom headers and
cookies, and reading the cookies a server sets.
"""

import httpq


def main() -> None:
    # ── Building URLs ────────────────────────────────────────────────────
    print(httpq.build_url("https://www.example.com/search", {"q": "python http"}))
    print(httpq.build_url("https://www.example.com/search", {"q": "python"}, "nav"))
    print(httpq.build_url("https://daringfireball.net", fragment="Footer"))
    print()

    # ── Custom headers and cookies ───────────────────────────────────────
    with httpq.get(
        "https://httpbin.org/headers",
        headers={"X-Token": "secret-123", "Accept-Language": "en-US"},
        cookies={"session": "abc123"},
    ) as response:
        print("Headers echoed back:")
        for line in response.body_lines:
            print(f"  {line}")
    print()

    # ── Cookies set by the server ────────────────────────────────────────
    url = httpq.build_url("https://httpbin.org/cookies/set", {"flavour": "oatmeal"})
    with httpq.get(url) as response:
        print(f"{response.status_code} {response.reason_phrase}")
        print(f"  cookies: {response.cookies}")
        print(f"  headers: {response.headers}")


if __name__ == "__main__":
    main()
