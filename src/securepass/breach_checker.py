"""
Breach lookup against a k-anonymity password range API.

Only the first 5 hex characters of the SHA-1 hash leave the process; the
provider answers with every known suffix in that range and the match is done
locally.
"""

import logging
import math
import threading
import time
from collections import OrderedDict
from typing import Callable, Optional, Tuple

import requests

from .config import Config
from .digests import sha1_hex
from .errors import BreachLookupError
from .logger import security_logger
from .models import NOT_BREACHED, BreachStatus

log = logging.getLogger(__name__)

PREFIX_LENGTH = 5


class BreachCache:
    """Process-wide TTL cache of breach results, keyed by plaintext password.

    Entries are (status, inserted_at) tuples replaced wholesale, never mutated.
    When max_entries is set the oldest insertion is evicted first.
    """

    def __init__(self, ttl: float = 3600, max_entries: Optional[int] = None,
                 clock: Callable[[], float] = time.monotonic):
        self.ttl = ttl
        self.max_entries = max_entries
        self._clock = clock
        self._entries: "OrderedDict[str, Tuple[BreachStatus, float]]" = OrderedDict()
        self._lock = threading.Lock()

    def get(self, password: str) -> Optional[BreachStatus]:
        """Cached status, or None when missing or expired."""
        with self._lock:
            entry = self._entries.get(password)
            if entry is None:
                return None
            status, inserted_at = entry
            if self._clock() - inserted_at >= self.ttl:
                del self._entries[password]
                return None
            return status

    def put(self, password: str, status: BreachStatus) -> None:
        with self._lock:
            self._entries.pop(password, None)
            self._entries[password] = (status, self._clock())
            if self.max_entries is not None:
                while len(self._entries) > self.max_entries:
                    self._entries.popitem(last=False)

    def clear(self) -> None:
        """Remove all cached entries."""
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)


class BreachChecker:
    """Check passwords against the breach corpus without sending the plaintext."""

    def __init__(self, api_url: str = Config.BREACH_API_URL,
                 timeout: float = Config.BREACH_TIMEOUT,
                 cache: Optional[BreachCache] = None,
                 session: Optional[requests.Session] = None):
        if timeout is None or not math.isfinite(timeout) or timeout <= 0:
            raise ValueError("Breach lookup timeout must be a finite, positive number of seconds")
        self.api_url = api_url.rstrip("/")
        self.timeout = timeout
        self.cache = cache if cache is not None else BreachCache(
            ttl=Config.BREACH_CACHE_TTL, max_entries=Config.BREACH_CACHE_MAX_ENTRIES
        )
        self.session = session if session is not None else requests.Session()

    @staticmethod
    def split_hash(password: str) -> Tuple[str, str]:
        """Return the (prefix, suffix) halves of the uppercase SHA-1 hex."""
        digest = sha1_hex(password)
        return digest[:PREFIX_LENGTH], digest[PREFIX_LENGTH:]

    def check(self, password: str) -> BreachStatus:
        """Breach status for a password. Never raises; failures count as not breached."""
        cached = self.cache.get(password)
        if cached is not None:
            return cached

        prefix, suffix = self.split_hash(password)
        try:
            status = self._lookup(prefix, suffix)
        except BreachLookupError as e:
            security_logger.log_security_event("Breach lookup failed", f"range {prefix}: {e}")
            return NOT_BREACHED
        except Exception as e:
            log.exception("Unexpected error during breach lookup")
            security_logger.log_security_event("Breach lookup failed", f"range {prefix}: {e.__class__.__name__}")
            return NOT_BREACHED

        self.cache.put(password, status)
        security_logger.log_breach_lookup(prefix, "match" if status.is_breached else "no match")
        return status

    def _lookup(self, prefix: str, suffix: str) -> BreachStatus:
        url = f"{self.api_url}/{prefix}"
        try:
            response = self.session.get(url, timeout=self.timeout)
        except requests.RequestException as e:
            raise BreachLookupError(f"request error: {e.__class__.__name__}") from e

        if not response.ok:
            raise BreachLookupError(f"HTTP {response.status_code}")

        return self.parse_range(response.text, suffix)

    @staticmethod
    def parse_range(body: str, suffix: str) -> BreachStatus:
        """Scan a SUFFIX:COUNT listing for the given suffix."""
        for line in body.splitlines():
            hash_suffix, sep, count = line.strip().partition(":")
            if hash_suffix.upper() != suffix:
                continue
            try:
                occurrences = int(count.strip()) if sep else -1
            except ValueError:
                occurrences = -1
            if occurrences < 0:
                raise BreachLookupError("malformed range line")
            log.debug("Suffix found in range with %d occurrences", occurrences)
            return BreachStatus(occurrences > 0, occurrences)
        return NOT_BREACHED
