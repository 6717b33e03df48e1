import time

import requests


def probe_gateway(url: str, timeout: float = 5):
    """Check that a gateway answers over HTTP. Errors are reported, not raised."""
    headers = {"User-Agent": "Mozilla/5.0"}
    start = time.monotonic()
    try:
        res = requests.get(url, headers=headers, timeout=timeout)
    except requests.exceptions.RequestException as e:
        return {"url": url, "ok": False, "status": None, "latency_ms": None, "error": str(e)}
    latency = int((time.monotonic() - start) * 1000)
    # Gateways expect POSTed calldata, so any non-5xx answer means it is up
    return {
        "url": url,
        "ok": res.status_code < 500,
        "status": res.status_code,
        "latency_ms": latency,
        "error": None,
    }


def probe_gateways(urls, timeout: float = 5):
    return [probe_gateway(url, timeout) for url in urls]
