"""
tests/test_holiday_client.py

Covers:
  - CN source: key padding, off days vs make-up workdays, non-zero code
  - Public source: request path, localName preference
  - Failure modes (HTTP 500, bad JSON, connect error, timeout) all yield []
"""

import asyncio

import httpx

from service.holiday.client import HolidayClient


def _client(handler) -> HolidayClient:
    return HolidayClient(
        cn_base_url="https://cn.test",
        public_base_url="https://pub.test/",
        timeout=2,
        transport=httpx.MockTransport(handler),
    )


def _fetch(handler, country: str, year: int):
    async def _run():
        client = _client(handler)
        try:
            return await client.fetch(country, year)
        finally:
            await client.aclose()
    return asyncio.run(_run())


# ── CN source ─────────────────────────────────────────────────────────────────

class TestChinaSource:

    def test_normalizes_keys_and_kinds(self):
        seen = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json={
                "code": 0,
                "holiday": {
                    "02-10": {"holiday": True, "name": "春节", "date": "2024-02-10"},
                    "2-4": {"holiday": False, "name": "春节前补班", "date": "2024-02-04"},
                    "2024-10-01": {"holiday": True, "name": "国庆节"},
                },
            })

        records = _fetch(handler, "cn", 2024)

        assert str(seen[0].url) == "https://cn.test/api/holiday/year/2024"
        assert seen[0].headers["User-Agent"]
        by_date = {r.date: r for r in records}
        assert set(by_date) == {"2024-02-10", "2024-02-04", "2024-10-01"}
        assert by_date["2024-02-10"].isOffDay is True
        assert by_date["2024-02-10"].kind == "public_holiday"
        assert by_date["2024-02-04"].isOffDay is False
        assert by_date["2024-02-04"].kind == "makeup_workday"
        assert by_date["2024-10-01"].name == "国庆节"

    def test_non_zero_code_is_empty(self):
        def handler(request):
            return httpx.Response(200, json={"code": 1, "msg": "rate limited"})

        assert _fetch(handler, "CN", 2024) == []

    def test_missing_holiday_map_is_empty(self):
        def handler(request):
            return httpx.Response(200, json={"code": 0, "holiday": None})

        assert _fetch(handler, "CN", 2024) == []


# ── Public source ─────────────────────────────────────────────────────────────

class TestPublicSource:

    def test_parses_nager_payload(self):
        seen = []

        def handler(request):
            seen.append(request)
            return httpx.Response(200, json=[
                {"date": "2024-07-04", "localName": "Independence Day", "name": "Independence Day"},
                {"date": "2024-12-25", "localName": "", "name": "Christmas Day"},
            ])

        records = _fetch(handler, "us", 2024)

        assert seen[0].url.path == "/api/v3/publicholidays/2024/US"
        assert [r.date for r in records] == ["2024-07-04", "2024-12-25"]
        assert records[1].name == "Christmas Day"
        assert all(r.isOffDay and r.kind == "public_holiday" for r in records)

    def test_non_list_payload_is_empty(self):
        def handler(request):
            return httpx.Response(200, json={"error": "unknown country"})

        assert _fetch(handler, "ZZ", 2024) == []


# ── Failures ──────────────────────────────────────────────────────────────────

class TestFailures:

    def test_http_error_status(self):
        assert _fetch(lambda r: httpx.Response(500, text="boom"), "CN", 2024) == []
        assert _fetch(lambda r: httpx.Response(404), "DE", 2024) == []

    def test_invalid_json(self):
        assert _fetch(lambda r: httpx.Response(200, text="<html>"), "US", 2024) == []

    def test_connect_error(self):
        def handler(request):
            raise httpx.ConnectError("refused", request=request)

        assert _fetch(handler, "CN", 2024) == []

    def test_timeout(self):
        def handler(request):
            raise httpx.ReadTimeout("slow", request=request)

        assert _fetch(handler, "US", 2024) == []

    def test_bad_date_in_payload(self):
        def handler(request):
            return httpx.Response(200, json=[{"date": "2024-13-40", "name": "nope"}])

        assert _fetch(handler, "US", 2024) == []


class TestModule:

    def test_module_documents_both_sources(self):
        import service.holiday.client as client_module

        assert "timor.tech" in client_module.__doc__
        assert "date.nager.at" in client_module.__doc__
