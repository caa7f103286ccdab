from __future__ import annotations

import json
from pathlib import Path
from types import SimpleNamespace

import pytest

import glossgen.content.manifest as manifest_module
from glossgen.content.manifest import (
    ManifestError,
    SelectionError,
    load_manifest,
    output_name_for,
    parse_selection,
    read_source_text,
    select_items,
)
from glossgen.content.models import ManifestItem


def _write_manifest(tmp_path: Path, data: object) -> Path:
    path = tmp_path / "manifest.json"
    path.write_text(json.dumps(data, ensure_ascii=False), encoding="utf-8")
    return path


def test_load_manifest_keeps_valid_entries(tmp_path: Path) -> None:
    path = _write_manifest(
        tmp_path,
        [
            {"file": "wangliulang.txt", "title": "王六郎"},
            {"file": " toutao.txt ", "title": "  "},
            {"title": "no file"},
            "loose string",
        ],
    )

    items = load_manifest(path)

    assert items == [
        ManifestItem(file="wangliulang.txt", title="王六郎"),
        ManifestItem(file="toutao.txt", title=None),
    ]


def test_load_manifest_rejects_non_array(tmp_path: Path) -> None:
    path = _write_manifest(tmp_path, {"file": "a.txt"})

    with pytest.raises(ManifestError, match="JSON array"):
        load_manifest(path)

    with pytest.raises(ManifestError, match="Failed to read manifest"):
        load_manifest(tmp_path / "missing.json")


def test_selection_matches_file_or_title() -> None:
    items = [
        ManifestItem(file="wangliulang.txt", title="王六郎"),
        ManifestItem(file="toutao.txt", title="偷桃"),
        ManifestItem(file="zhongli.txt", title="种梨"),
    ]

    selected = select_items(items, parse_selection("toutao.txt, 种梨 ,,"))

    assert [item.file for item in selected] == ["toutao.txt", "zhongli.txt"]
    assert select_items(items, parse_selection(None)) == items


def test_empty_selection_is_an_error() -> None:
    items = [ManifestItem(file="toutao.txt", title="偷桃")]

    with pytest.raises(SelectionError, match="画皮"):
        select_items(items, ("画皮",))

    with pytest.raises(SelectionError):
        select_items([], ())


def test_output_name_replaces_txt_suffix() -> None:
    assert output_name_for(ManifestItem(file="toutao.TXT")) == "toutao.html"
    assert output_name_for(ManifestItem(file="vol1/huapi.txt")) == "vol1/huapi.html"
    assert output_name_for(ManifestItem(file="../secret/a.txt")) == "secret/a.html"
    assert output_name_for(ManifestItem(file="vol2\\huapi.txt")) == "vol2/huapi.html"
    assert output_name_for(ManifestItem(file="notes.md")) == "notes.md.html"


def test_read_source_text_strips_utf8_bom(tmp_path: Path) -> None:
    path = tmp_path / "utf8.txt"
    path.write_bytes("\ufeff关关雎鸠".encode("utf-8"))

    assert read_source_text(path) == "关关雎鸠"


def test_read_source_text_falls_back_to_gb18030(monkeypatch, tmp_path: Path) -> None:
    path = tmp_path / "legacy.txt"
    path.write_bytes("王六郎，许姓，家淄之北郭，素业渔。".encode("gb18030"))
    monkeypatch.setattr(manifest_module, "from_bytes", lambda raw: SimpleNamespace(best=lambda: None))

    assert read_source_text(path) == "王六郎，许姓，家淄之北郭，素业渔。"


def test_read_source_text_uses_detected_encoding(monkeypatch, tmp_path: Path) -> None:
    path = tmp_path / "big5.txt"
    path.write_bytes("聊齋誌異".encode("big5"))
    detected = SimpleNamespace(encoding="big5")
    monkeypatch.setattr(manifest_module, "from_bytes", lambda raw: SimpleNamespace(best=lambda: detected))

    assert read_source_text(path) == "聊齋誌異"


def test_read_source_text_missing_file(tmp_path: Path) -> None:
    with pytest.raises(ManifestError, match="Failed to read source file"):
        read_source_text(tmp_path / "absent.txt")
