"""Champion tile catalog."""

import logging
from pathlib import Path

import yaml

from .models import Tile

logger = logging.getLogger(__name__)

IMAGE_SUFFIXES = {".png", ".jpg", ".jpeg", ".webp", ".gif"}


class CatalogError(Exception):
    """Catalog could not be loaded."""
    pass


def load_catalog(path: str | Path) -> list[Tile]:
    """Load champion tiles from an image directory or a YAML manifest.

    A directory yields one tile per image file, named after the file stem.
    A manifest is a YAML list of ``{name, image}`` mappings (or plain names).
    Duplicate names keep the first entry.

    Args:
        path: Directory or manifest path

    Returns:
        Tiles ordered by name

    Raises:
        CatalogError: If the path is missing or the manifest is malformed
    """
    path = Path(path)
    if not path.exists():
        raise CatalogError(f"Catalog not found: {path}")

    if path.is_dir():
        tiles = [
            Tile(name=entry.stem, image=str(entry))
            for entry in path.iterdir()
            if entry.is_file() and entry.suffix.lower() in IMAGE_SUFFIXES
        ]
    else:
        tiles = _load_manifest(path)

    seen = set()
    unique = []
    for tile in sorted(tiles, key=lambda t: t.name.casefold()):
        if tile.name in seen:
            logger.warning(f"Duplicate champion in catalog: {tile.name}")
            continue
        seen.add(tile.name)
        unique.append(tile)

    logger.debug(f"Loaded {len(unique)} champions from {path}")
    return unique


def _load_manifest(path: Path) -> list[Tile]:
    try:
        with open(path) as f:
            data = yaml.safe_load(f) or []
    except yaml.YAMLError as e:
        raise CatalogError(f"Invalid YAML in catalog: {e}")

    if isinstance(data, dict):
        data = data.get("champions", [])
    if not isinstance(data, list):
        raise CatalogError("Catalog manifest must be a list of champions")

    tiles = []
    for entry in data:
        if isinstance(entry, str):
            tiles.append(Tile(name=entry))
        elif isinstance(entry, dict) and entry.get("name"):
            image = entry.get("image")
            if image and not Path(image).is_absolute() and "://" not in image:
                image = str(path.parent / image)
            tiles.append(Tile(name=str(entry["name"]), image=image))
        else:
            raise CatalogError(f"Invalid catalog entry: {entry!r}")
    return tiles


BUILD_SITES = {
    "u.gg": "https://u.gg/lol/champions/arena/{lower}-arena-build",
    "blitz": "https://blitz.gg/lol/champions/{name}/arena",
    "metasrc": "https://www.metasrc.com/lol/arena/build/{lower}",
}


def build_links(champion: str) -> dict[str, str]:
    """Arena build guide URLs for a champion, keyed by site.

    u.gg and metasrc take the lower-cased name, blitz the name as-is.
    """
    return {
        site: template.format(name=champion, lower=champion.lower())
        for site, template in BUILD_SITES.items()
    }
