"""
Tests for the k-anonymity breach checker and its cache.
"""

from concurrent.futures import ThreadPoolExecutor
from unittest.mock import MagicMock

import pytest
import requests

from securepass.analyzer import PasswordAnalyzer
from securepass.breach_checker import BreachCache, BreachChecker
from securepass.models import NOT_BREACHED, AnalysisRequest, BreachStatus

API_URL = "https://range.example.test/range"
PASSWORD_PREFIX = "5BAA6"
PASSWORD_SUFFIX = "1E4C9B93F3F0682250B6CF8331B7EE68FD8"

RANGE_BODY = "\r\n".join([
    "003D68EB55068C33ACE09247EE4C639306B:3",
    "1E4C9B93F3F0682250B6CF8331B7EE68FD8:9545824",
    "1E4D1B7A5B6E44E5A9B6C6F0C8E5A1C0B5D:0",
])


def make_response(text="", ok=True, status_code=200):
    response = MagicMock()
    response.ok = ok
    response.status_code = status_code
    response.text = text
    return response


class FakeClock:
    def __init__(self):
        self.now = 1000.0

    def __call__(self):
        return self.now


class TestBreachChecker:
    """Test the range protocol and failure fallback."""

    def setup_method(self):
        self.session = MagicMock()
        self.session.get.return_value = make_response(RANGE_BODY)
        self.cache = BreachCache(ttl=3600)
        self.checker = BreachChecker(api_url=API_URL, timeout=2.5, cache=self.cache, session=self.session)

    def test_split_hash(self):
        prefix, suffix = BreachChecker.split_hash("password")
        assert prefix == PASSWORD_PREFIX
        assert suffix == PASSWORD_SUFFIX
        assert len(prefix) == 5
        assert len(suffix) == 35

    def test_breached_password(self):
        status = self.checker.check("password")
        assert status == BreachStatus(True, 9545824)
        self.session.get.assert_called_once_with(f"{API_URL}/{PASSWORD_PREFIX}", timeout=2.5)

    def test_only_prefix_is_sent(self):
        self.checker.check("password")
        url = self.session.get.call_args[0][0]
        assert "password" not in url
        assert PASSWORD_SUFFIX not in url
        assert url.endswith("/5BAA6")

    def test_unknown_password(self):
        status = self.checker.check("Kq7#mWz!pR2$vLx9")
        assert status == NOT_BREACHED

    def test_zero_count_padding_is_not_a_breach(self):
        assert BreachChecker.parse_range("ABC:0\nDEF:4", "ABC") == BreachStatus(False, 0)

    def test_parse_accepts_lf_and_lowercase(self):
        body = "aaa:1\n" + PASSWORD_SUFFIX.lower() + ": 12 \n"
        assert BreachChecker.parse_range(body, PASSWORD_SUFFIX) == BreachStatus(True, 12)

    def test_cache_hit_skips_network(self):
        first = self.checker.check("password")
        second = self.checker.check("password")
        assert first == second
        assert self.session.get.call_count == 1

    def test_negative_results_are_cached(self):
        self.checker.check("not-in-range")
        self.checker.check("not-in-range")
        assert self.session.get.call_count == 1
        assert len(self.cache) == 1

    @pytest.mark.parametrize("error", [
        requests.ConnectionError("unreachable"),
        requests.Timeout("slow"),
        RuntimeError("unexpected"),
    ])
    def test_network_failure_falls_back(self, error):
        self.session.get.side_effect = error
        assert self.checker.check("password") == NOT_BREACHED
        assert len(self.cache) == 0

    def test_http_error_falls_back(self):
        self.session.get.return_value = make_response("", ok=False, status_code=503)
        assert self.checker.check("password") == NOT_BREACHED
        assert len(self.cache) == 0

    def test_malformed_line_falls_back(self):
        self.session.get.return_value = make_response(PASSWORD_SUFFIX + ":lots")
        assert self.checker.check("password") == NOT_BREACHED
        self.session.get.return_value = make_response(PASSWORD_SUFFIX)
        assert self.checker.check("password") == NOT_BREACHED

    def test_failure_is_retried_on_next_request(self):
        self.session.get.side_effect = [requests.ConnectionError("down"), make_response(RANGE_BODY)]
        assert self.checker.check("password") == NOT_BREACHED
        assert self.checker.check("password") == BreachStatus(True, 9545824)
        assert self.session.get.call_count == 2

    @pytest.mark.parametrize("timeout", [0, -1.0, None, float("inf"), float("nan")])
    def test_timeout_must_be_finite_and_positive(self, timeout):
        with pytest.raises(ValueError):
            BreachChecker(api_url=API_URL, timeout=timeout, session=self.session)

    def test_concurrent_checks_share_cache(self):
        with ThreadPoolExecutor(max_workers=8) as pool:
            results = list(pool.map(self.checker.check, ["password"] * 32))
        assert all(r == BreachStatus(True, 9545824) for r in results)
        assert len(self.cache) == 1

    def test_provider_failure_does_not_fail_analysis(self):
        """The request path continues when the provider is unreachable."""
        self.session.get.side_effect = requests.ConnectionError("unreachable")
        result = PasswordAnalyzer(breach_checker=self.checker).analyze(AnalysisRequest("password"))
        data = result.to_dict()
        assert data["isBreached"] is False
        assert data["breachCount"] == 0
        assert data["score"] == 0
        assert set(data) >= {"score", "strength", "color", "suggestions", "entropy",
                             "crackTime", "timeToCrack", "checks"}

    def test_repeat_analysis_is_idempotent(self):
        analyzer = PasswordAnalyzer(breach_checker=self.checker)
        first = analyzer.analyze(AnalysisRequest("password")).to_dict()
        second = analyzer.analyze(AnalysisRequest("password")).to_dict()
        assert first == second
        assert first["isBreached"] is True
        assert self.session.get.call_count == 1


class TestBreachCache:
    """Test TTL expiry and bounded size."""

    def setup_method(self):
        self.clock = FakeClock()
        self.cache = BreachCache(ttl=3600, clock=self.clock)

    def test_entry_expires_after_ttl(self):
        self.cache.put("pw", BreachStatus(True, 2))
        self.clock.now += 3599
        assert self.cache.get("pw") == BreachStatus(True, 2)
        self.clock.now += 1
        assert self.cache.get("pw") is None
        assert len(self.cache) == 0

    def test_ttl_measured_from_insertion(self):
        self.cache.put("pw", NOT_BREACHED)
        self.clock.now += 1800
        self.cache.get("pw")
        self.clock.now += 1800
        assert self.cache.get("pw") is None

    def test_overwrite_resets_timestamp(self):
        self.cache.put("pw", NOT_BREACHED)
        self.clock.now += 3000
        self.cache.put("pw", BreachStatus(True, 1))
        self.clock.now += 3000
        assert self.cache.get("pw") == BreachStatus(True, 1)

    def test_expired_entry_triggers_new_lookup(self):
        session = MagicMock()
        session.get.return_value = make_response(RANGE_BODY)
        checker = BreachChecker(api_url=API_URL, cache=self.cache, session=session)
        checker.check("password")
        self.clock.now += 3600
        checker.check("password")
        assert session.get.call_count == 2

    def test_max_entries_evicts_oldest(self):
        cache = BreachCache(ttl=3600, max_entries=2, clock=self.clock)
        cache.put("a", NOT_BREACHED)
        cache.put("b", NOT_BREACHED)
        cache.put("c", NOT_BREACHED)
        assert len(cache) == 2
        assert cache.get("a") is None
        assert cache.get("c") == NOT_BREACHED

    def test_clear(self):
        self.cache.put("pw", NOT_BREACHED)
        self.cache.clear()
        assert self.cache.get("pw") is None
