"""
Tests for the avatar command line.
"""

import logging
from pathlib import Path
import tempfile
from unittest import mock

import pytest
import requests
from PIL import Image

from AV_Libs.cli import build_parser, main


@pytest.fixture
def photo(tmp_path):
    path = tmp_path / "photo.jpg"
    Image.new("RGB", (120, 90), (255, 0, 0)).save(path, format="JPEG", quality=100)
    return path


class TestMain:
    """Tests for main()."""

    def test_local_file(self, tmp_path, photo, monkeypatch):
        monkeypatch.chdir(tmp_path)

        assert main([str(photo), "--size", "64", "--radius", "8"]) == 0

        with Image.open(tmp_path / "photo.png") as avatar:
            assert avatar.size == (64, 64)
            assert avatar.mode == "RGBA"
            assert avatar.getpixel((0, 0)) == (0, 0, 0, 0)
            assert avatar.getpixel((32, 32))[3] == 255

    def test_explicit_output(self, tmp_path, photo):
        target = tmp_path / "out" / "me.jpg"

        assert main([str(photo), "-o", str(target)]) == 0

        assert (tmp_path / "out" / "me.png").is_file()
        assert not target.exists()

    def test_existing_output_kept_without_overwrite(self, tmp_path, photo):
        target = tmp_path / "me.png"
        target.write_bytes(b"keep me")

        assert main([str(photo), "-o", str(target)]) == 1
        assert target.read_bytes() == b"keep me"

        assert main([str(photo), "-o", str(target), "--overwrite"]) == 0
        assert target.read_bytes() != b"keep me"

    def test_url_downloads_and_cleans_up(self, tmp_path, photo, monkeypatch):
        monkeypatch.chdir(tmp_path)
        written = []

        def fake_download(url, dest_dir=None):
            path = Path(dest_dir) / "face.jpg"
            path.write_bytes(photo.read_bytes())
            written.append(path)
            return path

        with mock.patch("AV_Libs.cli.download_image", side_effect=fake_download) as download:
            code = main(["https://example.com/people/face.jpg?size=big", "--size", "32"])

        assert code == 0
        assert download.call_args.args == ("https://example.com/people/face.jpg?size=big",)
        assert not written[0].parent.exists()
        assert (tmp_path / "face.png").is_file()

    def test_url_leaves_same_named_temp_file_alone(self, tmp_path, photo, monkeypatch):
        temp_root = tmp_path / "tmp"
        temp_root.mkdir()
        monkeypatch.setattr(tempfile, "tempdir", str(temp_root))
        monkeypatch.chdir(tmp_path)
        unrelated = temp_root / "face.jpg"
        unrelated.write_bytes(b"someone else's file")
        response = mock.Mock(content=photo.read_bytes())

        with mock.patch("AV_Libs.NodesLib.image_import_node.requests.get", return_value=response):
            assert main(["https://example.com/face.jpg", "--size", "16"]) == 0

        assert unrelated.read_bytes() == b"someone else's file"
        assert list(temp_root.iterdir()) == [unrelated]
        assert (tmp_path / "face.png").is_file()

    def test_saving_logged_after_conversion(self, tmp_path, photo, monkeypatch, caplog):
        monkeypatch.chdir(tmp_path)
        caplog.set_level(logging.INFO)

        def fake_download(url, dest_dir=None):
            path = Path(dest_dir) / "face.jpg"
            path.write_bytes(photo.read_bytes())
            return path

        with mock.patch("AV_Libs.cli.download_image", side_effect=fake_download):
            assert main(["https://example.com/face.jpg", "--size", "16"]) == 0

        messages = [record.getMessage() for record in caplog.records]
        assert messages.index('> downloading "https://example.com/face.jpg"') < messages.index(
            '> saving "face.png"'
        )

    def test_download_failure(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)

        with mock.patch(
            "AV_Libs.cli.download_image", side_effect=requests.ConnectionError("offline")
        ):
            assert main(["https://example.com/face.jpg"]) == 1

        assert not (tmp_path / "face.png").exists()

    def test_negative_radius(self, tmp_path, photo, monkeypatch):
        monkeypatch.chdir(tmp_path)

        assert main([str(photo), "--radius", "-1"]) == 1
        assert not (tmp_path / "photo.png").exists()

    def test_missing_source(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        assert main([str(tmp_path / "nope.jpg")]) == 1

    def test_undecodable_source(self, tmp_path, monkeypatch, caplog):
        monkeypatch.chdir(tmp_path)
        caplog.set_level(logging.INFO)
        bad = tmp_path / "bad.jpg"
        bad.write_text("not a jpeg")

        assert main([str(bad), "-o", str(tmp_path / "result.png")]) == 1
        assert not (tmp_path / "result.png").exists()
        assert not any("saving" in record.getMessage() for record in caplog.records)


class TestBuildParser:
    """Tests for argument parsing."""

    def test_defaults(self):
        args = build_parser().parse_args(["face.jpg"])

        assert args.size == 300
        assert args.radius == 25.0
        assert args.supersample == 4
        assert args.alpha_rule == "clamp"
        assert args.output is None
        assert not args.overwrite

    def test_unknown_alpha_rule(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args(["face.jpg", "--alpha-rule", "multiply"])
