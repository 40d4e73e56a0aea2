"""Tests for asset persistence and id assignment."""

from pathlib import Path

import pytest

from site_clone.errors import DirectoryCreationFailure
from site_clone.models import AssetCategory, ResourceKind, ResourceRecord
from site_clone.writer import OutputWriter


def _record(url: str, content: bytes = b"data") -> ResourceRecord:
    return ResourceRecord(url=url, kind=ResourceKind.OTHER, content=content, content_type="", extension="")


class TestOutputWriter:
    def test_prepare_creates_layout(self, tmp_path: Path) -> None:
        writer = OutputWriter(tmp_path / "cloned_example_com_1")

        writer.prepare()

        for name in ("css", "js", "images", "fonts", "media"):
            assert (writer.output_dir / name).is_dir()

    def test_prepare_failure_is_fatal(self, tmp_path: Path) -> None:
        blocker = tmp_path / "blocker"
        blocker.write_text("x")

        with pytest.raises(DirectoryCreationFailure):
            OutputWriter(blocker / "out").prepare()

    def test_ids_skip_nothing_after_write_failure(self, tmp_path: Path) -> None:
        # Given: the js directory replaced by a plain file
        writer = OutputWriter(tmp_path / "out")
        writer.prepare()
        (writer.output_dir / "js").rmdir()
        (writer.output_dir / "js").write_text("blocked")

        # When: writing css, js (fails), image, font
        first = writer.write(_record("https://e.com/a.css", b"a"), AssetCategory.CSS, ".css")
        failed = writer.write(_record("https://e.com/b.js"), AssetCategory.JS, ".js")
        second = writer.write(_record("https://e.com/c.png"), AssetCategory.IMAGES, ".png")
        third = writer.write(_record("https://e.com/d.woff"), AssetCategory.FONTS, ".woff")

        # Then: committed ids are 0, 1, 2 and the failed URL is omitted
        assert failed is None
        assert [a.asset_id for a in writer.assets] == [0, 1, 2]
        assert first.relative_path == "./css/asset_0.css"
        assert second.relative_path == "./images/asset_1.png"
        assert third.relative_path == "./fonts/asset_2.woff"
        assert writer.omitted == ["https://e.com/b.js"]
        assert first.path.read_bytes() == b"a"
        assert writer.next_id == 3

    def test_other_category_is_written_at_root(self, tmp_path: Path) -> None:
        writer = OutputWriter(tmp_path / "out")
        writer.prepare()

        asset = writer.write(_record("https://e.com/blob"), AssetCategory.OTHER, ".bin")

        assert asset.relative_path == "./asset_0.bin"
        assert (writer.output_dir / "asset_0.bin").read_bytes() == b"data"

    def test_write_text(self, tmp_path: Path) -> None:
        writer = OutputWriter(tmp_path / "out")
        writer.prepare()

        path = writer.write_text("index.html", "<p>ü</p>")

        assert path.read_text(encoding="utf-8") == "<p>ü</p>"
