from __future__ import annotations

import pytest

from arenatrack.catalog import CatalogError, build_links, load_catalog


def test_directory_catalog_uses_image_stems(tmp_path) -> None:
    for name in ["Zed.png", "ahri.jpg", "Lux.webp", "notes.txt"]:
        (tmp_path / name).write_bytes(b"")

    tiles = load_catalog(tmp_path)

    assert [t.name for t in tiles] == ["ahri", "Lux", "Zed"]
    assert tiles[0].image == str(tmp_path / "ahri.jpg")


def test_manifest_resolves_relative_images(tmp_path) -> None:
    manifest = tmp_path / "champions.yaml"
    manifest.write_text(
        "champions:\n"
        "  - name: Zed\n"
        "    image: img/zed.png\n"
        "  - Ahri\n"
        "  - name: Lux\n"
        "    image: https://cdn.example.com/lux.png\n"
    )

    tiles = {t.name: t for t in load_catalog(manifest)}

    assert tiles["Zed"].image == str(tmp_path / "img" / "zed.png")
    assert tiles["Ahri"].image is None
    assert tiles["Lux"].image == "https://cdn.example.com/lux.png"


def test_duplicate_names_keep_first(tmp_path) -> None:
    manifest = tmp_path / "champions.yaml"
    manifest.write_text("- Zed\n- Ahri\n- Zed\n")

    assert [t.name for t in load_catalog(manifest)] == ["Ahri", "Zed"]


def test_missing_catalog_raises(tmp_path) -> None:
    with pytest.raises(CatalogError, match="not found"):
        load_catalog(tmp_path / "nope.yaml")


@pytest.mark.parametrize("content", ["champions: 3\n", "- [1, 2]\n", "key: [unclosed\n"])
def test_malformed_manifest_raises(tmp_path, content) -> None:
    manifest = tmp_path / "champions.yaml"
    manifest.write_text(content)
    with pytest.raises(CatalogError):
        load_catalog(manifest)


def test_build_links_follow_each_site_naming() -> None:
    links = build_links("MissFortune")

    assert list(links) == ["u.gg", "blitz", "metasrc"]
    assert links["u.gg"] == "https://u.gg/lol/champions/arena/missfortune-arena-build"
    assert links["blitz"] == "https://blitz.gg/lol/champions/MissFortune/arena"
    assert links["metasrc"] == "https://www.metasrc.com/lol/arena/build/missfortune"
