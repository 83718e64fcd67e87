"""Tests for the bmp-codec command line."""

from pathlib import Path

import pytest
from PIL import Image
from typer.testing import CliRunner

from bmp_codec import decode
from bmp_codec.cli import app
from bmp_codec.parsing import parse_size

runner = CliRunner()


@pytest.fixture
def bmp_file(tmp_path, make_bmp, sample_rows) -> Path:
    path = tmp_path / "sample.bmp"
    path.write_bytes(make_bmp(sample_rows, bpp=32, top_down=True))
    return path


class TestParseSize:
    """Test WxH size parsing."""

    def test_valid(self):
        assert parse_size("128x64") == (128, 64)
        assert parse_size("3X2") == (3, 2)

    @pytest.mark.parametrize("value", ["", "128", "axb", "1x2x3", "0x4", "-1x2"])
    def test_invalid(self, value):
        with pytest.raises(ValueError):
            parse_size(value)


class TestInfo:

    def test_info(self, bmp_file):
        result = runner.invoke(app, ["info", str(bmp_file)])

        assert result.exit_code == 0
        assert "top-down" in result.output
        assert "Row size" in result.output

    def test_info_bad_magic(self, tmp_path):
        path = tmp_path / "bad.bmp"
        path.write_bytes(b"XX" + bytes(60))

        result = runner.invoke(app, ["info", str(path)])

        assert result.exit_code == 1
        assert "BadMagic" in result.output

    def test_info_missing_file(self, tmp_path):
        result = runner.invoke(app, ["info", str(tmp_path / "nope.bmp")])
        assert result.exit_code == 1


class TestDecodeCommand:

    def test_decode_to_raw(self, bmp_file, tmp_path):
        out = tmp_path / "out.rgba"

        result = runner.invoke(app, ["decode", str(bmp_file), str(out)])

        assert result.exit_code == 0
        assert out.read_bytes() == decode(bmp_file.read_bytes()).data

    def test_decode_to_png(self, bmp_file, tmp_path):
        out = tmp_path / "out.png"

        result = runner.invoke(app, ["decode", str(bmp_file), str(out)])

        assert result.exit_code == 0
        with Image.open(out) as img:
            assert img.size == (3, 2)
            assert img.getpixel((2, 1)) == (128, 64, 32, 60)

    def test_decode_truncated(self, bmp_file, tmp_path):
        bmp_file.write_bytes(bmp_file.read_bytes()[:-4])

        result = runner.invoke(app, ["decode", str(bmp_file), str(tmp_path / "x.rgba")])

        assert result.exit_code == 1
        assert "TruncatedPixelData" in result.output
        assert not (tmp_path / "x.rgba").exists()


class TestEncodeCommand:

    def test_encode_from_png(self, tmp_path):
        src = tmp_path / "in.png"
        Image.new("RGB", (5, 3), (10, 20, 30)).save(src)
        out = tmp_path / "out.bmp"

        result = runner.invoke(app, ["encode", str(src), str(out)])

        assert result.exit_code == 0
        image = decode(out.read_bytes())
        assert image.size == (5, 3)
        assert image.pixel(4, 2) == (10, 20, 30, 255)

    def test_encode_raw_with_size(self, tmp_path):
        src = tmp_path / "in.rgba"
        src.write_bytes(bytes([10, 20, 30, 255]))
        out = tmp_path / "out.bmp"

        result = runner.invoke(app, ["encode", str(src), str(out), "--size", "1x1"])

        assert result.exit_code == 0
        assert out.read_bytes()[54:] == bytes([30, 20, 10, 0])

    def test_encode_raw_requires_size(self, tmp_path):
        src = tmp_path / "in.rgba"
        src.write_bytes(bytes(4))

        result = runner.invoke(app, ["encode", str(src), str(tmp_path / "out.bmp")])

        assert result.exit_code == 1

    def test_encode_raw_too_small(self, tmp_path):
        src = tmp_path / "in.rgba"
        src.write_bytes(bytes(4))
        out = tmp_path / "out.bmp"

        result = runner.invoke(app, ["encode", str(src), str(out), "--size", "2x2"])

        assert result.exit_code == 1
        assert "BufferTooSmall" in result.output
        assert not out.exists()

    def test_verbose_flag(self, tmp_path):
        src = tmp_path / "in.rgba"
        src.write_bytes(bytes(4))

        result = runner.invoke(
            app, ["--verbose", "encode", str(src), str(tmp_path / "o.bmp"), "-s", "1x1"]
        )

        assert result.exit_code == 0

    def test_encode_unwritable_output(self, tmp_path):
        src = tmp_path / "in.rgba"
        src.write_bytes(bytes(4))
        out = tmp_path / "missing" / "out.bmp"

        result = runner.invoke(app, ["encode", str(src), str(out), "--size", "1x1"])

        assert result.exit_code == 1
        assert "Could not write" in result.output
        assert not out.exists()
