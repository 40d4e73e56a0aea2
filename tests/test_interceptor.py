"""Tests for response capture and the eligibility predicate."""

import asyncio

import pytest
from conftest import FakeResponse, FakeSession

from site_clone.interceptor import ResourceInterceptor, is_capturable
from site_clone.models import ResourceKind


def _capture(config, responses):
    async def run():
        session = FakeSession(config, responses=responses)
        interceptor = ResourceInterceptor()
        interceptor.attach(session)
        await session.navigate("https://example.com/", 1.0)
        return await interceptor.drain()

    return asyncio.run(run())


class TestIsCapturable:
    @pytest.mark.parametrize("kind", ["stylesheet", "script", "image", "font", "media"])
    def test_asset_kinds(self, kind: str) -> None:
        assert is_capturable(ResourceKind(kind), "")

    def test_document_is_skipped(self) -> None:
        assert not is_capturable(ResourceKind.OTHER, "text/html; charset=utf-8")

    def test_mislabelled_kind_with_script_content_type(self) -> None:
        assert is_capturable(ResourceKind.OTHER, "application/javascript")
        assert is_capturable(ResourceKind.OTHER, "text/CSS")


class TestResourceInterceptor:
    def test_last_write_wins(self, clone_config) -> None:
        # Given: the same URL observed twice with different payloads
        url = "https://example.com/app.js"
        responses = [
            FakeResponse(url, "script", body=b"first", content_type="text/javascript"),
            FakeResponse(url, "script", body=b"second", content_type="text/javascript"),
        ]

        # When
        records, failed = _capture(clone_config, responses)

        # Then: the second observation is kept
        assert list(records) == [url]
        assert records[url].content == b"second"
        assert failed == set()

    def test_unreadable_body_is_recorded_as_failed(self, clone_config) -> None:
        responses = [
            FakeResponse("https://example.com/a.png", "image", body=b"\x89PNG"),
            FakeResponse("https://example.com/b.png", "image", error=RuntimeError("gone")),
        ]

        records, failed = _capture(clone_config, responses)

        assert list(records) == ["https://example.com/a.png"]
        assert failed == {"https://example.com/b.png"}

    def test_ineligible_responses_are_ignored(self, clone_config) -> None:
        responses = [
            FakeResponse("https://example.com/", "document", body=b"<html>", content_type="text/html"),
            FakeResponse("https://example.com/api", "fetch", body=b"{}", content_type="application/json"),
            FakeResponse(
                "https://example.com/bundle",
                "fetch",
                body=b"console.log(1)",
                content_type="application/javascript",
            ),
        ]

        records, failed = _capture(clone_config, responses)

        assert list(records) == ["https://example.com/bundle"]
        record = records["https://example.com/bundle"]
        assert record.kind is ResourceKind.OTHER
        assert record.extension == ".js"

    def test_records_keep_metadata(self, clone_config) -> None:
        responses = [
            FakeResponse(
                "https://example.com/fonts/inter",
                "font",
                body=b"wOF2",
                content_type="font/woff2",
            )
        ]

        records, _ = _capture(clone_config, responses)

        record = records["https://example.com/fonts/inter"]
        assert record.kind is ResourceKind.FONT
        assert record.content_type == "font/woff2"
        assert record.extension == ".woff2"

    def test_drain_without_responses(self) -> None:
        records, failed = asyncio.run(ResourceInterceptor().drain())
        assert records == {}
        assert failed == set()


class TestDrainWithLateResponses:
    def test_response_arriving_during_drain_is_folded_in(self) -> None:
        # Given: a body read that delivers another response before finishing
        interceptor = ResourceInterceptor()
        late = FakeResponse("https://e.com/b.css", "stylesheet", body=b"b", content_type="text/css")

        class SlowResponse(FakeResponse):
            async def body(self) -> bytes:
                await asyncio.sleep(0)
                interceptor.handle_response(late)
                await asyncio.sleep(0)
                return b"a"

        async def run():
            interceptor.handle_response(
                SlowResponse("https://e.com/a.css", "stylesheet", content_type="text/css")
            )
            return await interceptor.drain()

        # When
        records, failed = asyncio.run(run())

        # Then: both responses are captured and nothing is left pending
        assert list(records) == ["https://e.com/a.css", "https://e.com/b.css"]
        assert records["https://e.com/b.css"].content == b"b"
        assert failed == set()
        assert interceptor.pending_count == 0

    def test_late_failure_is_recorded(self) -> None:
        interceptor = ResourceInterceptor()
        late = FakeResponse("https://e.com/c.js", "script", error=RuntimeError("closed"))

        class SlowResponse(FakeResponse):
            async def body(self) -> bytes:
                interceptor.handle_response(late)
                return b"a"

        async def run():
            interceptor.handle_response(SlowResponse("https://e.com/a.js", "script"))
            return await interceptor.drain()

        records, failed = asyncio.run(run())

        assert list(records) == ["https://e.com/a.js"]
        assert failed == {"https://e.com/c.js"}
