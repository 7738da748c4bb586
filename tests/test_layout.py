"""Tests for keyheat.core.layout – YAML-based keyboard layouts."""

from __future__ import annotations

from pathlib import Path

import pytest
import yaml

from keyheat.core.layout import (
    DEFAULT_KEY_WIDTH,
    KeyboardLayout,
    LayoutRepository,
    parse_layout,
)


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture()
def layouts_dir(tmp_path: Path) -> Path:
    d = tmp_path / "data" / "layouts"
    d.mkdir(parents=True)
    return d


@pytest.fixture(scope="module")
def shipped() -> LayoutRepository:
    return LayoutRepository()


def _write_yaml(path: Path, data: dict) -> None:
    path.write_text(yaml.dump(data, allow_unicode=True, default_flow_style=False), encoding="utf-8")


# ---------------------------------------------------------------------------
# KeyboardLayout dataclass
# ---------------------------------------------------------------------------

class TestKeyboardLayout:
    @pytest.fixture()
    def layout(self) -> KeyboardLayout:
        return KeyboardLayout(
            key="tiny",
            name="Tiny",
            rows=(("a", "b"), ("Space",)),
            display_names={"Space": "Space"},
            widths={"Space": 48},
        )

    def test_labels_in_row_order(self, layout: KeyboardLayout):
        assert list(layout.labels()) == ["a", "b", "Space"]

    def test_display_name_from_table(self, layout: KeyboardLayout):
        assert layout.display_name("Space") == "Space"

    def test_display_name_defaults_to_upper(self, layout: KeyboardLayout):
        assert layout.display_name("a") == "A"

    def test_width_from_table(self, layout: KeyboardLayout):
        assert layout.width("Space") == 48

    def test_width_default(self, layout: KeyboardLayout):
        assert layout.width("a") == DEFAULT_KEY_WIDTH

    def test_relative_width(self, layout: KeyboardLayout):
        assert layout.relative_width("Space") == 4.0
        assert layout.relative_width("a") == 1.0

    def test_frozen(self, layout: KeyboardLayout):
        with pytest.raises(AttributeError):
            layout.key = "other"  # type: ignore[misc]


# ---------------------------------------------------------------------------
# Shipped layouts
# ---------------------------------------------------------------------------

class TestShippedQwerty:
    def test_default_is_qwerty(self, shipped: LayoutRepository):
        assert shipped.default().key == "qwerty"

    def test_five_rows(self, shipped: LayoutRepository):
        assert len(shipped.get("qwerty").rows) == 5

    def test_rows_verbatim(self, shipped: LayoutRepository):
        rows = shipped.get("qwerty").rows
        assert rows[0] == ("`", "1", "2", "3", "4", "5", "6", "7", "8", "9", "0", "-", "=", "Backspace")
        assert rows[1] == ("Tab", "q", "w", "e", "r", "t", "y", "u", "i", "o", "p", "[", "]", "\\")
        assert rows[2] == ("CapsLock", "a", "s", "d", "f", "g", "h", "j", "k", "l", ";", "'", "Return")
        assert rows[3] == ("ShiftLeft", "z", "x", "c", "v", "b", "n", "m", ",", ".", "/", "ShiftRight")
        assert rows[4] == ("ControlLeft", "MetaLeft", "Alt", "Space", "AltGr", "MetaRight", "ControlRight")

    def test_display_glyphs(self, shipped: LayoutRepository):
        layout = shipped.get("qwerty")
        assert layout.display_name("Backspace") == "⌫"
        assert layout.display_name("Return") == "⏎"
        assert layout.display_name("ShiftLeft") == "⇧"
        assert layout.display_name("MetaRight") == "⌘"
        assert layout.display_name("CapsLock") == "Caps"
        assert layout.display_name("AltGr") == "Alt"
        assert layout.display_name("q") == "Q"

    def test_widths(self, shipped: LayoutRepository):
        layout = shipped.get("qwerty")
        assert layout.width("Space") == 64
        assert layout.width("ShiftRight") == 28
        assert layout.width("ShiftLeft") == 24
        assert layout.width("CapsLock") == 18
        assert layout.width("MetaLeft") == 14
        assert layout.width("z") == 12


class TestShippedFull:
    def test_function_row_first(self, shipped: LayoutRepository):
        rows = shipped.get("qwerty_full").rows
        assert rows[0][0] == "Escape"
        assert rows[0][-1] == "F12"

    def test_escape_glyph(self, shipped: LayoutRepository):
        assert shipped.get("qwerty_full").display_name("Escape") == "ESC"

    def test_arrow_glyphs(self, shipped: LayoutRepository):
        layout = shipped.get("qwerty_full")
        assert layout.display_name("UpArrow") == "↑"
        assert layout.display_name("LeftArrow") == "←"

    def test_contains_every_qwerty_label(self, shipped: LayoutRepository):
        full = set(shipped.get("qwerty_full").labels())
        assert set(shipped.get("qwerty").labels()) <= full


# ---------------------------------------------------------------------------
# LayoutRepository – loading
# ---------------------------------------------------------------------------

class TestLayoutRepository:
    def test_loads_from_directory(self, layouts_dir: Path):
        _write_yaml(layouts_dir / "layout_mini.yaml", {"name": "Mini", "rows": [["a", "b"]]})
        repo = LayoutRepository(layouts_dir)
        assert [layout.key for layout in repo.all()] == ["mini"]
        assert repo.get("mini").name == "Mini"

    def test_default_falls_back_to_first(self, layouts_dir: Path):
        _write_yaml(layouts_dir / "layout_mini.yaml", {"rows": [["a"]]})
        assert LayoutRepository(layouts_dir).default().key == "mini"

    def test_name_defaults_to_key(self, layouts_dir: Path):
        _write_yaml(layouts_dir / "layout_mini.yaml", {"rows": [["a"]]})
        assert LayoutRepository(layouts_dir).get("mini").name == "mini"

    def test_ignores_other_files(self, layouts_dir: Path):
        _write_yaml(layouts_dir / "layout_mini.yaml", {"rows": [["a"]]})
        _write_yaml(layouts_dir / "notes.yaml", {"rows": [["b"]]})
        assert len(LayoutRepository(layouts_dir).all()) == 1

    def test_unknown_key(self, layouts_dir: Path):
        _write_yaml(layouts_dir / "layout_mini.yaml", {"rows": [["a"]]})
        with pytest.raises(KeyError):
            LayoutRepository(layouts_dir).get("dvorak")

    def test_missing_directory(self, tmp_path: Path):
        with pytest.raises(FileNotFoundError):
            LayoutRepository(tmp_path / "nope")

    def test_empty_directory(self, layouts_dir: Path):
        with pytest.raises(ValueError, match="No layout files"):
            LayoutRepository(layouts_dir)

    def test_unquoted_digits_become_labels(self, layouts_dir: Path):
        (layouts_dir / "layout_num.yaml").write_text("rows:\n  - [1, 2, 3]\n", encoding="utf-8")
        assert LayoutRepository(layouts_dir).get("num").rows == (("1", "2", "3"),)


# ---------------------------------------------------------------------------
# parse_layout – validation
# ---------------------------------------------------------------------------

class TestParseLayoutInvalid:
    def test_not_a_mapping(self):
        with pytest.raises(ValueError, match="expected YAML mapping"):
            parse_layout("x", ["a"])

    def test_empty_document(self):
        with pytest.raises(ValueError):
            parse_layout("x", None)

    def test_missing_rows(self):
        with pytest.raises(ValueError, match="missing 'rows'"):
            parse_layout("x", {"name": "X"})

    def test_empty_row(self):
        with pytest.raises(ValueError, match="row 1"):
            parse_layout("x", {"rows": [["a"], []]})

    def test_invalid_label(self):
        with pytest.raises(ValueError, match="invalid label"):
            parse_layout("x", {"rows": [["a", None]]})

    def test_boolean_label(self):
        with pytest.raises(ValueError, match="invalid label"):
            parse_layout("x", {"rows": [[True]]})

    def test_empty_label(self):
        with pytest.raises(ValueError, match="empty label"):
            parse_layout("x", {"rows": [["a", ""]]})

    def test_duplicate_label(self):
        with pytest.raises(ValueError, match="duplicate"):
            parse_layout("x", {"rows": [["a"], ["a"]]})

    def test_bad_width(self):
        with pytest.raises(ValueError, match="invalid width"):
            parse_layout("x", {"rows": [["a"]], "widths": {"a": "wide"}})

    def test_zero_width(self):
        with pytest.raises(ValueError, match="invalid width"):
            parse_layout("x", {"rows": [["a"]], "widths": {"a": 0}})

    def test_bad_default_width(self):
        with pytest.raises(ValueError, match="default_width"):
            parse_layout("x", {"rows": [["a"]], "default_width": -1})

    def test_display_names_not_mapping(self):
        with pytest.raises(ValueError, match="display_names"):
            parse_layout("x", {"rows": [["a"]], "display_names": ["A"]})

    def test_source_in_message(self):
        with pytest.raises(ValueError, match="layout_bad.yaml"):
            parse_layout("bad", {"name": "Bad"}, source="layout_bad.yaml")
