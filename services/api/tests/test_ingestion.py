import io

import pytest

from recipe_parser.parsing import ParseError
from recipe_parser.services.ingestion import ScannerError, load_recipes, scan_recipe_files


@pytest.fixture
def recipe_dir(tmp_path, pancakes_text):
    (tmp_path / "breakfast").mkdir()
    (tmp_path / "breakfast" / "pancakes.md").write_text(pancakes_text, encoding="utf-8")
    (tmp_path / "soup.txt").write_text("# Soup\n## Directions\n1. Simmer.\n", encoding="utf-8")
    (tmp_path / "photo.jpg").write_bytes(b"\xff\xd8")
    return tmp_path


def test_scan_directory(recipe_dir):
    files = scan_recipe_files(recipe_dir)
    assert [f.name for f in files] == ["pancakes.md", "soup.txt"]


def test_scan_single_file(recipe_dir):
    target = recipe_dir / "photo.jpg"
    assert scan_recipe_files(target) == [target]


def test_scan_missing(tmp_path):
    with pytest.raises(ScannerError):
        scan_recipe_files(tmp_path / "nope")


def test_load_recipes(recipe_dir):
    loaded = load_recipes([recipe_dir])
    assert [len(item.result.recipes) for item in loaded] == [1, 1]
    assert loaded[0].source.endswith("pancakes.md")
    assert loaded[1].result.recipes[0].title == "Soup"


def test_load_recipes_from_stdin(monkeypatch):
    monkeypatch.setattr("sys.stdin", io.StringIO("# Toast\n"))
    loaded = load_recipes(["-"])
    assert loaded[0].source == "-"
    assert loaded[0].result.recipes[0].title == "Toast"


def test_load_recipes_names_failing_file(tmp_path):
    bad = tmp_path / "bad.md"
    bad.write_text("# A\n## Ingredients\nflour\n", encoding="utf-8")
    with pytest.raises(ParseError) as exc:
        load_recipes([bad], strict=True)
    assert exc.value.source == str(bad)
    assert exc.value.line == 3


def test_load_recipes_rejects_non_utf8(tmp_path):
    path = tmp_path / "latin1.md"
    path.write_bytes(b"# Caf\xe9\n")
    with pytest.raises(ScannerError) as exc:
        load_recipes([path])
    assert str(exc.value).startswith(f"{path}: not valid UTF-8")
