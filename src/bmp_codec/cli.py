"""
bmp-codec CLI

Inspect BMP headers and convert between BMP, raw RGBA and other image
formats.
"""

import sys
import logging
from pathlib import Path
from typing import Optional

import typer
from PIL import Image
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from bmp_codec.decoder import decode
from bmp_codec.encoder import DEFAULT_PIXELS_PER_METER, EncodeOptions, encode
from bmp_codec.errors import BmpError
from bmp_codec.header import parse_headers
from bmp_codec.image import RawImage
from bmp_codec.parsing import parse_size

# Setup logging
logging.basicConfig(
    level=logging.INFO,
    format="%(message)s",
    handlers=[RichHandler(rich_tracebacks=True)],
)
logger = logging.getLogger("bmp_codec")

# Setup Rich console
console = Console()

app = typer.Typer(help="BMP <-> RGBA codec")

RAW_SUFFIX = ".rgba"
NO_ALPHA_SUFFIXES = {".jpg", ".jpeg"}


def print_header(text: str) -> None:
    """Print fancy header."""
    console.print(Panel(text, expand=False, style="bold blue"))


def print_success(text: str) -> None:
    """Print success message."""
    console.print(f"✓ {escape(text)}", style="green")


def print_error(text: str) -> None:
    """Print error message."""
    console.print(f"❌ {escape(text)}", style="red")


def print_codec_error(exc: BmpError) -> None:
    print_error(f"[{exc.kind.value}] {exc.message}")


def read_input(path: str) -> bytes:
    """Read a whole input file, exiting with an error if it is missing."""
    src = Path(path)
    if not src.exists():
        print_error(f"File not found: {path}")
        sys.exit(1)
    return src.read_bytes()


@app.callback()
def main_options(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    """BMP <-> RGBA codec."""
    if verbose:
        logger.setLevel(logging.DEBUG)


@app.command()
def info(path: str = typer.Argument(..., help="Path to BMP file")) -> None:
    """Show BMP header fields and pixel layout."""
    print_header(f"BMP Info: {path}")

    data = read_input(path)
    try:
        layout = parse_headers(data)
    except BmpError as exc:
        print_codec_error(exc)
        sys.exit(1)

    fh = layout.file_header
    dib = layout.dib_header

    table = Table(title="Headers")
    table.add_column("Field", style="cyan")
    table.add_column("Value", style="green")

    table.add_row("File size", f"{fh.file_size} (actual {len(data)})")
    table.add_row("Data offset", str(fh.data_offset))
    table.add_row("DIB header size", str(dib.header_size))
    table.add_row("Width", str(layout.width))
    table.add_row("Height", str(layout.height))
    table.add_row("Orientation", "top-down" if layout.top_down else "bottom-up")
    table.add_row("Bits per pixel", str(dib.bpp))
    table.add_row("Compression", str(dib.compression))
    table.add_row("Image size", str(dib.image_size))
    table.add_row("Resolution (px/m)", f"{dib.x_pixels_per_m} x {dib.y_pixels_per_m}")
    table.add_row("Row size", f"{layout.row_size} ({layout.padding} padding)")
    table.add_row("Pixel data size", str(layout.pixel_data_size))

    console.print(table)


@app.command("decode")
def decode_cmd(
    input_path: str = typer.Argument(..., help="Path to BMP file"),
    output_path: str = typer.Argument(..., help="Output path (.rgba for raw pixels, or any Pillow format)"),
) -> None:
    """Decode a BMP file to raw RGBA or another image format."""
    data = read_input(input_path)
    try:
        image = decode(data)
    except BmpError as exc:
        print_codec_error(exc)
        sys.exit(1)

    out = Path(output_path)
    suffix = out.suffix.lower()
    try:
        if suffix == RAW_SUFFIX:
            out.write_bytes(image.data)
        else:
            img = image.to_pil()
            if suffix in NO_ALPHA_SUFFIXES:
                img = img.convert("RGB")
            img.save(out)
    except (OSError, ValueError) as exc:
        print_error(f"Could not write {output_path}: {exc}")
        sys.exit(1)

    print_success(f"Decoded {image.width}x{image.height} -> {output_path}")


@app.command("encode")
def encode_cmd(
    input_path: str = typer.Argument(..., help="Path to input image (.rgba needs --size)"),
    output_path: str = typer.Argument(..., help="Output BMP path"),
    size: Optional[str] = typer.Option(None, "--size", "-s", help="Raw RGBA dimensions as WxH"),
    ppm: int = typer.Option(DEFAULT_PIXELS_PER_METER, "--ppm", help="Resolution in pixels per meter"),
) -> None:
    """Encode an image or raw RGBA buffer as a 24-bit BMP."""
    if Path(input_path).suffix.lower() == RAW_SUFFIX:
        if size is None:
            print_error("--size is required for raw .rgba input")
            sys.exit(1)
        try:
            width, height = parse_size(size)
        except ValueError as exc:
            print_error(str(exc))
            sys.exit(1)
        raw = read_input(input_path)
        try:
            image = RawImage(width=width, height=height, data=raw)
        except BmpError as exc:
            print_codec_error(exc)
            sys.exit(1)
    else:
        if not Path(input_path).exists():
            print_error(f"File not found: {input_path}")
            sys.exit(1)
        try:
            with Image.open(input_path) as img:
                image = RawImage.from_pil(img)
        except OSError as exc:
            print_error(f"Could not read {input_path}: {exc}")
            sys.exit(1)

    try:
        data = encode(image, EncodeOptions(pixels_per_meter=ppm))
    except BmpError as exc:
        print_codec_error(exc)
        sys.exit(1)

    try:
        Path(output_path).write_bytes(data)
    except OSError as exc:
        print_error(f"Could not write {output_path}: {exc}")
        sys.exit(1)

    print_success(f"Encoded {image.width}x{image.height} -> {output_path} ({len(data)} bytes)")


def main() -> None:
    """Main entry point."""
    try:
        app()
    except KeyboardInterrupt:
        console.print("\n[yellow]Operation cancelled by user[/yellow]")
        sys.exit(0)


if __name__ == "__main__":
    main()
