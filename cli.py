"""Command-line interface for album page composition.

Usage:
    # Full pipeline
    python cli.py pipeline photos/ summer_2025 --analysis=analysis.json

    # Step-by-step
    python cli.py scan photos/ --output=workset.json --analysis=analysis.json
    python cli.py pages workset.json --output=layout.json
    python cli.py crop workset.json IMG_0001.jpg --edge=left --value=120
    python cli.py overlay workset.json IMG_0001.jpg --box-width=800 --box-height=600
"""

import json
import logging
import sys
from datetime import datetime
from pathlib import Path

import click
from PIL import Image, UnidentifiedImageError
from pydantic import ValidationError

from album.config import IMAGE_EXTENSIONS
from album.coordinates import effective_crop, map_overlay
from album.layout import create_layout
from album.resolution import assess_resolution
from album.validation import CropEvent, CropRect, Photo, WorkingSet
from album.workset import apply_crop_event, find_photo, load_working_set, save_working_set

# Configure root logger
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)],
)

logger = logging.getLogger(__name__)


def _load_analysis(analysis_path: str | None) -> dict[str, dict | str]:
    """Load per-file analysis results keyed by image file name.

    Each value is either a bare layout label such as "twoRows", or an object
    with optional "layout" (label) and "crop" (left/right/top/bottom insets).
    """
    if analysis_path is None:
        return {}
    try:
        data = json.loads(Path(analysis_path).read_text())
    except json.JSONDecodeError as e:
        raise click.ClickException(f"Invalid analysis JSON {analysis_path}: {e}") from e
    if not isinstance(data, dict):
        raise click.ClickException(f"Analysis JSON must map file names to results: {analysis_path}")
    return data


def _load_or_fail(workset_path: str) -> WorkingSet:
    try:
        return load_working_set(workset_path)
    except (FileNotFoundError, ValidationError) as e:
        raise click.ClickException(str(e)) from e


@click.group()
def cli() -> None:
    """Album Composer - Page Layout and Crop Review Tool."""
    pass


@cli.command()
@click.argument("image_dir", type=click.Path(exists=True, file_okay=False))
@click.option("--output", default="workset.json", help="Where to write the working set JSON")
@click.option("--album-id", default="album", help="Identifier for this album")
@click.option("--analysis", type=click.Path(exists=True), help="JSON of layout/crop suggestions per file")
def scan(image_dir: str, output: str, album_id: str, analysis: str | None) -> None:
    """Build a working set from the images in a directory.

    Args:
        image_dir: Directory containing photos
        output: Working set JSON path
        album_id: Album identifier stored in the working set
        analysis: Optional analysis results keyed by file name

    Output:
        - Working set JSON at OUTPUT
    """
    click.echo(f"🔍 Scanning {image_dir}...")

    suggestions = _load_analysis(analysis)
    image_files = sorted(
        p for p in Path(image_dir).iterdir() if p.suffix.lower() in IMAGE_EXTENSIONS
    )
    if not image_files:
        raise click.ClickException(f"No images found in {image_dir}")

    photos: list[Photo] = []
    for image_file in image_files:
        try:
            with Image.open(image_file) as img:
                width, height = img.size
        except (UnidentifiedImageError, OSError) as e:
            click.echo(f"  ⚠ {image_file.name}: failed to load image ({e}), skipped", err=True)
            continue

        result = suggestions.get(image_file.name, {})
        if not isinstance(result, dict):
            result = {"layout": result}  # bare label shorthand
        crop = result.get("crop")
        try:
            photo = Photo(
                id=image_file.name,
                width=width,
                height=height,
                layout_label=result.get("layout"),
                suggested_crop=CropRect(**crop) if crop else None,
                source_image=str(image_file),
            )
        except (ValidationError, TypeError) as e:
            click.echo(f"  ⚠ {image_file.name}: invalid analysis ({e}), ignored", err=True)
            photo = Photo(id=image_file.name, width=width, height=height, source_image=str(image_file))

        resolution = assess_resolution(width, height)
        badge = "A4 ready" if resolution.full_page_print_ok else "might be soft"
        click.echo(f"  ✓ {image_file.name}: {width}x{height} ({resolution.megapixels:.2f} MP, {badge})")
        photos.append(photo)

    if not photos:
        raise click.ClickException(f"No readable images in {image_dir}")

    save_working_set(WorkingSet(album_id=album_id, photos=photos), output)
    click.echo(f"✓ Scanned {len(photos)} photos")
    click.echo(f"📁 Working set saved to: {output}")


@cli.command()
@click.argument("workset_path", type=click.Path(exists=True))
@click.option("--output", default=None, help="Layout JSON path (default: layouts/{album_id}.json)")
def pages(workset_path: str, output: str | None) -> None:
    """Assign photos to album pages and write layout JSON.

    Args:
        workset_path: Working set JSON
        output: Where to save the layout JSON

    Output:
        - Layout JSON: layouts/{album_id}.json unless --output is given
    """
    click.echo(f"📐 Composing pages from {workset_path}...")

    try:
        layout_data = create_layout(workset_path)
    except (FileNotFoundError, ValidationError) as e:
        raise click.ClickException(str(e)) from e

    layout_path = Path(output or f"layouts/{layout_data['album_id']}.json")
    layout_path.parent.mkdir(parents=True, exist_ok=True)
    layout_path.write_text(json.dumps(layout_data, indent=2))

    for entry in layout_data["pages"]:
        click.echo(f"  ✓ page {entry['page']:>3}: {entry['layout']:<10} {', '.join(entry['photo_ids'])}")
    for photo_id in layout_data["unplaced_photo_ids"]:
        click.echo(f"  ⚠ {photo_id}: not placed on any page", err=True)

    click.echo(f"✓ Composed {layout_data['page_count']} pages")
    click.echo(f"📁 Layout JSON saved to: {layout_path}")


@cli.command()
@click.argument("workset_path", type=click.Path(exists=True))
@click.argument("photo_id")
@click.option("--edge", type=click.Choice(["left", "right", "top", "bottom"]), help="Edge to adjust")
@click.option("--value", type=float, help="New inset in source pixels")
@click.option("--reset", "action", flag_value="reset", help="Reset override to the suggested crop")
@click.option("--clear", "action", flag_value="clear", help="Remove the user override")
def crop(
    workset_path: str,
    photo_id: str,
    edge: str | None,
    value: float | None,
    action: str | None,
) -> None:
    """Edit one photo's crop and save the working set.

    Args:
        workset_path: Working set JSON (rewritten in place)
        photo_id: Photo to edit
        edge: Edge to set (with --value)
        value: Inset in pixels, clamped to keep a visible region
        action: "reset" or "clear" instead of setting an edge
    """
    working_set = _load_or_fail(workset_path)

    try:
        event = CropEvent(photo_id=photo_id, action=action or "set", edge=edge, value=value)
        working_set = apply_crop_event(working_set, event)
    except ValidationError as e:
        raise click.ClickException("Provide either --edge and --value, or --reset / --clear") from e
    except KeyError as e:
        raise click.ClickException(str(e.args[0])) from e

    save_working_set(working_set, workset_path)
    crop_rect = effective_crop(find_photo(working_set, photo_id))
    click.echo(f"✓ {photo_id}: {json.dumps(crop_rect.model_dump())}")


@cli.command()
@click.argument("workset_path", type=click.Path(exists=True))
@click.argument("photo_id")
@click.option("--box-width", type=float, required=True, help="Display box width")
@click.option("--box-height", type=float, required=True, help="Display box height")
def overlay(workset_path: str, photo_id: str, box_width: float, box_height: float) -> None:
    """Print crop-mask geometry for a photo shown in a display box."""
    working_set = _load_or_fail(workset_path)
    try:
        photo = find_photo(working_set, photo_id)
    except KeyError as e:
        raise click.ClickException(str(e.args[0])) from e

    geometry = map_overlay(photo.width, photo.height, effective_crop(photo), box_width, box_height)
    click.echo(geometry.model_dump_json(indent=2))


@cli.command()
@click.argument("image_dir", type=click.Path(exists=True, file_okay=False))
@click.argument("album_id")
@click.option("--analysis", type=click.Path(exists=True), help="JSON of layout/crop suggestions per file")
@click.pass_context
def pipeline(ctx: click.Context, image_dir: str, album_id: str, analysis: str | None) -> None:
    """Run full pipeline: scan → pages.

    Args:
        image_dir: Directory containing photos
        album_id: Unique album identifier
        analysis: Optional analysis results keyed by file name

    Output:
        - Working set JSON: worksets/{album_id}.json
        - Layout JSON: layouts/{album_id}.json
        - Log file: logs/{album_id}/pipeline_{timestamp}.log
    """
    # Setup file logging
    log_dir = Path(f"logs/{album_id}")
    log_dir.mkdir(parents=True, exist_ok=True)

    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    log_file = log_dir / f"pipeline_{timestamp}.log"

    file_handler = logging.FileHandler(log_file)
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(
        logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
    )
    logging.getLogger().addHandler(file_handler)

    workset_path = f"worksets/{album_id}.json"

    logger.info(f"Starting pipeline for album_id: {album_id}")
    logger.info(f"Image directory: {image_dir}")
    logger.info(f"Analysis: {analysis}")

    click.echo("=" * 60)
    click.echo("🎨 Album Composer - Full Pipeline")
    click.echo("=" * 60)

    try:
        click.echo("\n📍 Phase 1: Scanning photos...")
        ctx.invoke(scan, image_dir=image_dir, output=workset_path, album_id=album_id, analysis=analysis)

        click.echo("\n📍 Phase 2: Composing pages...")
        ctx.invoke(pages, workset_path=workset_path, output=f"layouts/{album_id}.json")

        click.echo("\n" + "=" * 60)
        click.echo(f"✅ Pipeline complete! Check layouts/{album_id}.json")
        click.echo("=" * 60)
        click.echo(f"📄 Log file: {log_file}")

        logger.info("Pipeline completed successfully")

    except Exception as e:
        click.echo(f"\n❌ Pipeline failed: {e}", err=True)
        logger.error(f"Pipeline failed: {e}", exc_info=True)
        sys.exit(1)
    finally:
        logging.getLogger().removeHandler(file_handler)
        file_handler.close()


if __name__ == "__main__":
    cli()
