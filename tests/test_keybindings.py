from dataclasses import fields

import pytest

from hishtory.keybindings import (
    DEFAULT_KEY_MAP,
    Binding,
    KeyMap,
    SerializableKeyMap,
    prettify_key_binding,
)


@pytest.mark.parametrize(
    "raw, pretty",
    [
        ("up", "↑ "),
        ("down", "↓ "),
        ("left", "←"),
        ("right", "→"),
        ("shift+left", "shift+← "),
        ("shift+right", "shift+→ "),
        ("pgdown", "pgdn"),
        ("enter", "enter"),
    ],
)
def test_prettify_key_binding(raw, pretty):
    assert prettify_key_binding(raw) == pretty


def test_binding_matches():
    assert DEFAULT_KEY_MAP.quit.matches("ctrl+c")
    assert DEFAULT_KEY_MAP.quit.matches("esc")
    assert not DEFAULT_KEY_MAP.quit.matches("q")


def test_default_round_trip_keys():
    serial = DEFAULT_KEY_MAP.to_serializable()
    rebuilt = serial.to_key_map()
    assert rebuilt.to_serializable() == serial


def test_to_serializable_default_values():
    serial = DEFAULT_KEY_MAP.to_serializable()
    assert serial.up == ["up", "alt+OA", "ctrl+p"]
    assert serial.quit == ["esc", "ctrl+c", "ctrl+d"]


def test_to_key_map_labels_from_first_key():
    km = SerializableKeyMap(up=["ctrl+up", "k"]).with_defaults().to_key_map()
    assert km.up.keys == ("ctrl+up", "k")
    assert km.up.help_key == prettify_key_binding("ctrl+up")
    assert km.up.help_desc == DEFAULT_KEY_MAP.up.help_desc
    assert km.quit == DEFAULT_KEY_MAP.quit


def test_to_key_map_empty_raises():
    with pytest.raises(ValueError):
        SerializableKeyMap().to_key_map()


def test_with_defaults_fills_everything():
    assert SerializableKeyMap().with_defaults() == DEFAULT_KEY_MAP.to_serializable()


def test_with_defaults_keeps_overrides_and_copies():
    original = SerializableKeyMap(quit=["ctrl+q"])
    filled = original.with_defaults()
    assert filled.quit == ["ctrl+q"]
    assert filled.down == list(DEFAULT_KEY_MAP.down.keys)
    assert original.down == []
    for f in fields(SerializableKeyMap):
        assert getattr(filled, f.name)


def test_short_help():
    helps = DEFAULT_KEY_MAP.short_help()
    assert len(helps) == 2
    assert helps[0].help_key == "hiSHtory: Search your shell history"
    assert helps[1] is DEFAULT_KEY_MAP.help


def test_full_help_layout():
    columns = DEFAULT_KEY_MAP.full_help()
    assert [len(c) for c in columns] == [5, 4, 4, 4]
    assert columns[0][0].help_key == "hiSHtory: Search your shell history"
    assert all(c[0].help_key == "" for c in columns[1:])
    flat = [b for c in columns for b in c[1:]]
    assert DEFAULT_KEY_MAP.select_entry_and_change_dir in flat
    assert DEFAULT_KEY_MAP.help in flat


def test_keymap_is_built_from_bindings():
    km = SerializableKeyMap(delete_entry=["ctrl+k"]).with_defaults().to_key_map()
    assert isinstance(km, KeyMap)
    assert km.delete_entry == Binding(("ctrl+k",), "ctrl+k", "delete the highlighted entry ")