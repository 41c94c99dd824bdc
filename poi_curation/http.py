"""HTTP client with retry/backoff for the search and model collaborators."""
from __future__ import annotations

import json
import logging
import random
import time
from dataclasses import dataclass
from typing import Any, Dict, Optional

import requests

logger = logging.getLogger(__name__)

RETRYABLE_STATUSES = (429, 500, 502, 503, 504)


@dataclass
class RequestMetrics:
    network_calls: int = 0
    retries: int = 0
    failures: int = 0

    def inc(self, kind: str) -> None:
        if kind == "network":
            self.network_calls += 1
        elif kind == "retry":
            self.retries += 1
        elif kind == "failure":
            self.failures += 1
        else:
            raise ValueError(f"Unknown metric kind: {kind}")


class HttpClient:
    def __init__(
        self,
        api_key: str,
        timeout: int = 20,
        retry_max: int = 3,
        backoff_base: float = 0.5,
        backoff_max: float = 8.0,
        metrics: Optional[RequestMetrics] = None,
    ) -> None:
        self.api_key = api_key
        self.timeout = timeout
        self.retry_max = max(1, int(retry_max))
        self.backoff_base = backoff_base
        self.backoff_max = backoff_max
        self.metrics = metrics or RequestMetrics()
        self.session = requests.Session()

    def post_json(
        self,
        url: str,
        body: Dict[str, Any],
        headers: Optional[Dict[str, str]] = None,
    ) -> Dict[str, Any]:
        all_headers = {"Content-Type": "application/json"}
        if headers:
            all_headers.update(headers)

        payload = json.dumps(body)
        for attempt in range(1, self.retry_max + 1):
            self.metrics.inc("network")
            try:
                resp = self.session.post(url, data=payload, headers=all_headers, timeout=self.timeout)
            except requests.RequestException as exc:
                if attempt >= self.retry_max:
                    self.metrics.inc("failure")
                    raise
                logger.warning("Request error for %s (attempt %s): %s", url, attempt, exc)
                self.metrics.inc("retry")
                self._sleep_backoff(attempt)
                continue

            status = resp.status_code
            if status == 200:
                try:
                    return resp.json()
                except ValueError:
                    logger.error("Non-JSON response from %s", url)
                    self.metrics.inc("failure")
                    raise

            if status in RETRYABLE_STATUSES:
                logger.warning("HTTP %s from %s (attempt %s)", status, url, attempt)
                if attempt >= self.retry_max:
                    self.metrics.inc("failure")
                    resp.raise_for_status()
                self.metrics.inc("retry")
                if not self._sleep_retry_after(resp):
                    self._sleep_backoff(attempt)
                continue

            # Non-retryable
            logger.error("HTTP %s from %s", status, url)
            self.metrics.inc("failure")
            resp.raise_for_status()
            # Other 2xx/3xx statuses carry no usable body.
            raise requests.HTTPError(f"Unexpected HTTP {status} from {url}", response=resp)

        raise RuntimeError("Unexpected HTTP retry loop exit")

    def _sleep_backoff(self, attempt: int) -> None:
        base = min(self.backoff_base * (2 ** (attempt - 1)), self.backoff_max)
        jitter = random.uniform(0, self.backoff_base)
        time.sleep(base + jitter)

    def _sleep_retry_after(self, resp: requests.Response) -> bool:
        retry_after = resp.headers.get("Retry-After")
        if not retry_after:
            return False
        try:
            delay = float(retry_after)
        except ValueError:
            return False
        delay = max(0.0, min(delay, self.backoff_max))
        time.sleep(delay)
        return True
