"""Command line entry — combine a reference drawing into DXF files for given sizes."""

from __future__ import annotations

import argparse
import json
import logging
import os
import sys
from concurrent.futures import ThreadPoolExecutor

from dotenv import load_dotenv

from framestitch.config import settings
from framestitch.diagnostics import Diagnostics
from framestitch.export.dxf import dxf_filename, save_dxf
from framestitch.export.svg_preview import render_model_svg
from framestitch.frame.combiner import CombineResult, DebugStep, combine_model
from framestitch.frame.extractor import make_model_parts
from framestitch.kernel.config import KernelConfig
from framestitch.models.sizes import SizeParameters

load_dotenv()

logger = logging.getLogger(__name__)


def _size(text: str) -> SizeParameters:
    try:
        return SizeParameters.parse_triplet(text)
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e)) from e


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Combine eyewear frame parts into a full frame outline")
    parser.add_argument("drawing", help="Reference drawing (SVG converted from DXF)")
    parser.add_argument("-c", "--colors", required=True, help="JSON file mapping part names to stroke colors")
    parser.add_argument("-r", "--reference", required=True, type=_size, help="Drawn size as bridge-width-height")
    parser.add_argument(
        "-s", "--size", action="append", type=_size, dest="sizes",
        help="Ordered size as bridge-width-height, repeatable (default: the reference size)",
    )
    parser.add_argument("-o", "--out", default=".", help="Output directory")
    parser.add_argument("-n", "--name", help="Base name of the output files (default: drawing name)")
    parser.add_argument("--no-merge-hinge", action="store_true", help="Keep hinges as separate parts")
    parser.add_argument("--step", choices=[s.value for s in DebugStep], help="Stop at an intermediate step")
    parser.add_argument("--preview", action="store_true", help="Also write an SVG preview per size")
    return parser


def main(argv: list[str] | None = None) -> int:
    logging.basicConfig(
        level=getattr(logging, settings.framestitch_log_level.upper(), logging.INFO),
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )
    args = build_parser().parse_args(argv)

    if not os.path.exists(args.drawing):
        print(f"File not found: {args.drawing}")
        return 1
    with open(args.drawing, encoding="utf-8") as f:
        svg_text = f.read()
    with open(args.colors, encoding="utf-8") as f:
        part2color = json.load(f)

    config = KernelConfig.from_settings(settings)
    diagnostics = Diagnostics()
    parts = make_model_parts(part2color, svg_text, diagnostics, config)
    _print_warnings("extract", diagnostics.warnings)
    if not parts:
        print("No usable frame parts found in drawing.")
        return 1

    sizes = args.sizes or [args.reference]
    name = args.name or os.path.splitext(os.path.basename(args.drawing))[0]

    def run(size: SizeParameters) -> CombineResult:
        return combine_model(
            parts,
            size.bridge_size,
            size.glas_width,
            size.glas_height,
            args.reference,
            merge_hinge=not args.no_merge_hinge,
            step=args.step,
            config=config,
        )

    # Extracted parts are only read by combine_model, so sizes can run side by side
    with ThreadPoolExecutor(max_workers=settings.framestitch_max_workers) as pool:
        results = list(pool.map(run, sizes))

    failed = 0
    for size, result in zip(sizes, results):
        label = f"{size.bridge_size:g}-{size.glas_width:g}-{size.glas_height:g}"
        _print_warnings(label, result.warnings)
        if result.model.is_empty():
            print(f"[{label}] no geometry produced")
            failed += 1
            continue
        filepath = os.path.join(args.out, dxf_filename(name, size.glas_width, size.bridge_size, size.glas_height))
        save_dxf(result.model, filepath)
        print(f"[{label}] → {filepath}")
        if args.preview:
            preview_path = os.path.splitext(filepath)[0] + ".svg"
            with open(preview_path, "w", encoding="utf-8") as f:
                f.write(render_model_svg(result.model))

    return 1 if failed else 0


def _print_warnings(label: str, warnings) -> None:
    for w in warnings:
        data = ", ".join(f"{k}={v}" for k, v in w.data.items())
        print(f"[{label}] {w.severity}: {w.term}" + (f" ({data})" if data else ""))


if __name__ == "__main__":
    sys.exit(main())
