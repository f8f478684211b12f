"""
demo_client.py: walk through the URL shortener API against a running server

Usage:
  python main.py                    # in one terminal
  python demo_client.py --base http://localhost:8080

Steps: health check, create a few short URLs (one without a scheme),
hit each redirect without following it, print stats, then re-submit a
duplicate and show that the same code comes back.
"""
import argparse
import sys
import time

import requests


class DemoClient:
    def __init__(self, base_url: str, timeout: float = 10.0):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = requests.Session()

    def health_check(self) -> dict:
        r = self.session.get(f"{self.base_url}/api/health", timeout=self.timeout)
        r.raise_for_status()
        return r.json()

    def create_short_url(self, url: str) -> dict:
        r = self.session.post(f"{self.base_url}/api/shorten", json={"url": url}, timeout=self.timeout)
        r.raise_for_status()
        return r.json()

    def access_short_url(self, short_code: str) -> str:
        """Return the redirect target; the redirect itself is not followed."""
        r = self.session.get(f"{self.base_url}/{short_code}", allow_redirects=False, timeout=self.timeout)
        if r.status_code != 301:
            raise RuntimeError(f"expected 301 redirect, got {r.status_code}")
        return r.headers["location"]

    def get_stats(self, short_code: str) -> dict:
        r = self.session.get(f"{self.base_url}/api/stats/{short_code}", timeout=self.timeout)
        r.raise_for_status()
        return r.json()


def main() -> int:
    parser = argparse.ArgumentParser()
    parser.add_argument("--base", default="http://localhost:8080")
    args = parser.parse_args()

    client = DemoClient(args.base)

    print("1. Health check")
    try:
        health = client.health_check()
    except requests.RequestException as e:
        print(f"   health check failed: {e}")
        print("   make sure the server is running: python main.py")
        return 1
    print(f"   {health['status']} at {health['time']}")

    print("\n2. Creating short URLs")
    test_urls = [
        "https://www.google.com",
        "https://www.github.com",
        "https://www.stackoverflow.com",
        "youtube.com",  # scheme gets defaulted to http://
    ]
    created = []
    for url in test_urls:
        try:
            resp = client.create_short_url(url)
        except requests.RequestException as e:
            print(f"   failed to create short URL for {url}: {e}")
            continue
        print(f"   {resp['short_url']} -> {resp['original_url']}")
        created.append(resp["short_code"])

    if not created:
        print("   no short URLs were created")
        return 1

    print("\n3. Following redirects")
    for code in created:
        try:
            target = client.access_short_url(code)
        except (requests.RequestException, RuntimeError) as e:
            print(f"   /{code} failed: {e}")
            continue
        print(f"   /{code} -> {target}")
        time.sleep(0.1)

    print("\n4. Statistics")
    for code in created:
        stats = client.get_stats(code)
        print(f"   {code}: {stats['original_url']} created {stats['created_at']}, {stats['access_count']} visit(s)")

    print("\n5. Duplicate handling")
    dup = client.create_short_url(test_urls[0])
    same = "same" if dup["short_code"] == created[0] else "DIFFERENT"
    print(f"   {test_urls[0]} -> {dup['short_code']} ({same} code as before)")

    print(f"\nAll URLs: curl {client.base_url}/api/urls")
    return 0


if __name__ == "__main__":
    sys.exit(main())
