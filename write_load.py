"""
write_load.py: simple async load script to create short URLs

Usage:
  python write_load.py --base http://127.0.0.1:8080 --count 2000 --concurrency 100 --out codes_created.jsonl

Every created code is written as a JSON line {"code": ..., "url": ...} for read_load.py.
--dup-ratio sends that share of requests for an already-used URL, which exercises dedup.
"""
import argparse
import asyncio
import json
import random
import string
import time
from datetime import datetime, timezone

import httpx


def _now_iso():
    return datetime.now(timezone.utc).isoformat()


def _rand_host():
    tlds = ["com", "net", "org", "io", "ai"]
    names = ["example", "sample", "demo", "test", "alpha", "beta", "gamma"]
    return f"{random.choice(names)}.{random.choice(tlds)}"


def _rand_path(n=6):
    alphabet = string.ascii_letters + string.digits
    return "".join(random.choice(alphabet) for _ in range(n))


async def _create_one(client: httpx.AsyncClient, base: str, url: str):
    try:
        r = await client.post(f"{base}/api/shorten", json={"url": url}, timeout=10)
        r.raise_for_status()
    except httpx.HTTPError as e:
        print(f"create failed for {url}: {e}")
        return None
    return r.json().get("short_code")


async def main():
    parser = argparse.ArgumentParser()
    parser.add_argument("--base", default="http://127.0.0.1:8080")
    parser.add_argument("--count", type=int, default=2000)
    parser.add_argument("--concurrency", type=int, default=100)
    parser.add_argument("--dup-ratio", type=float, default=0.0)
    parser.add_argument("--out", default="codes_created.jsonl")
    args = parser.parse_args()

    start_iso = _now_iso()
    t0 = time.perf_counter()
    success = 0
    used_urls = []
    codes_by_url = {}

    limit = httpx.Limits(max_connections=args.concurrency, max_keepalive_connections=args.concurrency)
    # file uses normal "with"; client uses "async with" separately
    with open(args.out, "w", encoding="utf-8") as out_f:
        async with httpx.AsyncClient(limits=limit) as client:
            sem = asyncio.Semaphore(args.concurrency)

            async def _task(i):
                nonlocal success
                if used_urls and random.random() < args.dup_ratio:
                    url = random.choice(used_urls)
                else:
                    url = f"https://{_rand_host()}/{_rand_path(8)}?q={i}"
                    used_urls.append(url)
                async with sem:
                    code = await _create_one(client, args.base, url)
                if code is None:
                    return
                success += 1
                if url not in codes_by_url:
                    codes_by_url[url] = code
                    out_f.write(json.dumps({"code": code, "url": url}) + "\n")
                elif codes_by_url[url] != code:
                    print(f"DEDUP VIOLATION: {url} -> {codes_by_url[url]} and {code}")

            await asyncio.gather(*(_task(i) for i in range(args.count)))

    dt = time.perf_counter() - t0
    end_iso = _now_iso()
    print(f"START: {start_iso}")
    print(f"END:   {end_iso}")
    print(f"TOTAL: {dt:.3f} s")
    print(f"OPS:   writes={args.count}, ok={success}, fail={args.count - success}, distinct={len(codes_by_url)}")
    if dt > 0:
        print(f"TPS:   {success/dt:.1f} req/s")


if __name__ == "__main__":
    asyncio.run(main())
