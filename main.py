#!/usr/bin/env python3
"""
Image Transcoder
================
Command line front end for converting images into text art, vectors and
other representations.

Formats:
- ascii, emoji, braille   Text art
- vector                  Traced black/white SVG
- svg                     SVG wrapper around the original image
- ocr                     Extracted text
- palette                 Six most frequent colors
- filter                  Filtered PNG (see --filter)
- thumbnail, base64, pdf  Packaged copies of the image
"""

import argparse
import os
import sys

from PIL import Image, ImageDraw

from image_transcoder import (
    ConversionError,
    ConversionKind,
    ImageConverter,
    ImageFilter,
    Presets,
    SourceImage,
    TranscoderConfig,
    load_file,
)
from image_transcoder.logging_setup import configure_logging
from image_transcoder.pixels import PixelBuffer
from image_transcoder.source import format_bytes

TEXT_WIDTH_KINDS = ('ascii', 'emoji', 'braille')


# =============================================================================
# DEMO
# =============================================================================

def demo():
    """Render a generated test image in every text format."""
    test_image = Image.new('RGB', (100, 100), color='white')
    draw = ImageDraw.Draw(test_image)
    draw.ellipse([10, 10, 90, 90], fill='red', outline='black')
    draw.rectangle([30, 30, 70, 70], fill='blue')

    source = SourceImage(
        name='demo',
        data=b'',
        mime_type='image/png',
        pixels=PixelBuffer.from_image(test_image),
    )
    converter = ImageConverter(TranscoderConfig(ascii_width=40, emoji_width=16, braille_width=40))

    for kind in TEXT_WIDTH_KINDS:
        print(f"\n{kind.upper()}:")
        print("-" * 40)
        print(converter.convert(source, kind).text, end='')

    print("\nPALETTE:")
    print("-" * 40)
    for color in converter.extract_palette(source):
        print(f"  {color}")


# =============================================================================
# COMMAND LINE INTERFACE
# =============================================================================

def create_argument_parser():
    """Create command line argument parser."""
    parser = argparse.ArgumentParser(
        description='Convert images to text art, vectors and more',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s photo.png                          # ASCII art to stdout
  %(prog)s photo.png -f braille -w 80         # 80 cell wide Braille
  %(prog)s logo.png -f vector -o out/         # Traced SVG saved to out/
  %(prog)s photo.png -f filter --filter sepia -o out/
  %(prog)s photo.png -f palette               # Dominant colors
        """
    )

    parser.add_argument('input', nargs='?', help='Input image file')
    parser.add_argument('-f', '--format', default='ascii',
                        choices=[kind.value for kind in ConversionKind],
                        help='Conversion format')
    parser.add_argument('--filter', choices=[f.value for f in ImageFilter],
                        help='Filter name for the filter format')
    parser.add_argument('-o', '--output-dir', help='Directory to save the artifact into')
    parser.add_argument('-w', '--width', type=int,
                        help='Output width in cells (ascii, emoji, braille)')
    parser.add_argument('--preset', choices=['default', 'compact', 'detailed'],
                        default='default', help='Output size preset')
    parser.add_argument('--info', action='store_true', help='Print image information')
    parser.add_argument('--demo', action='store_true', help='Run demo')
    parser.add_argument('-v', '--verbose', action='store_true', help='Verbose output')

    return parser


def build_config(args) -> TranscoderConfig:
    config = getattr(Presets, args.preset)()
    if args.width is not None:
        if args.format not in TEXT_WIDTH_KINDS:
            raise ValueError(f"--width applies only to {', '.join(TEXT_WIDTH_KINDS)}")
        config = config.with_width(args.format, args.width)
    return config


def main(argv=None) -> int:
    """Main entry point for command line usage."""
    parser = create_argument_parser()
    args = parser.parse_args(argv)
    configure_logging(args.verbose)

    if args.demo:
        demo()
        return 0

    if not args.input:
        parser.print_help()
        return 0

    if args.format == 'filter' and not args.filter:
        parser.error('--filter is required with -f filter')

    try:
        config = build_config(args)
    except ValueError as e:
        parser.error(str(e))

    try:
        source = load_file(args.input, max_bytes=config.max_upload_bytes)
        if args.info:
            print(source.describe())

        converter = ImageConverter(config)
        artifact = converter.convert(source, args.format, filter_name=args.filter)
    except ConversionError as e:
        print(f"Error: {e.message}", file=sys.stderr)
        return 1

    if args.output_dir:
        os.makedirs(args.output_dir, exist_ok=True)
        if artifact.filename is None:
            path = os.path.join(args.output_dir, f"{source.name}-{args.format}.txt")
            with open(path, 'wb') as f:
                f.write(artifact.payload)
        else:
            path = artifact.save(args.output_dir)
        print(f"Saved to {path}")
    elif artifact.colors is not None:
        for color in artifact.colors:
            print(color)
    elif artifact.is_text:
        print(artifact.text, end='' if artifact.text.endswith('\n') else '\n')
    else:
        print(f"{artifact.filename} ({format_bytes(len(artifact.payload))}); "
              f"use -o to save it")

    return 0


if __name__ == '__main__':
    sys.exit(main())
