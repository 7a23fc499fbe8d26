"""Key bindings for the interactive search view and their serialisable form."""

from __future__ import annotations

from dataclasses import dataclass, field, fields, replace


@dataclass(frozen=True)
class Binding:
    """A set of keys bound to one action, with the text shown in the help bar."""

    keys: tuple[str, ...] = ()
    help_key: str = ""
    help_desc: str = ""

    def matches(self, key: str) -> bool:
        """Whether the named key press (e.g. ``"ctrl+c"``) triggers this binding."""
        return key in self.keys


_TITLE_BINDING = Binding(keys=("",), help_key="hiSHtory: Search your shell history")
_EMPTY_BINDING = Binding(keys=("",))

_HELP_DESCRIPTIONS: dict[str, str] = {
    "up": "scroll up ",
    "down": "scroll down ",
    "page_up": "page up ",
    "page_down": "page down ",
    "select_entry": "select an entry ",
    "select_entry_and_change_dir": "select an entry and cd into that directory",
    "left": "move left ",
    "right": "move right ",
    "table_left": "scroll the table left ",
    "table_right": "scroll the table right ",
    "delete_entry": "delete the highlighted entry ",
    "help": "help ",
    "quit": "exit hiSHtory ",
    "jump_start_of_input": "jump to the start of the input ",
    "jump_end_of_input": "jump to the end of the input ",
    "word_left": "jump left one word ",
    "word_right": "jump right one word ",
}

_PRETTY_SUBSTITUTIONS = (
    ("+left", "+← "),
    ("+right", "+→ "),
    ("+down", "+↓ "),
    ("+up", "+↑ "),
    ("pgdown", "pgdn"),
)

_PRETTY_EXACT = {"up": "↑ ", "down": "↓ ", "left": "←", "right": "→"}


def prettify_key_binding(kb: str) -> str:
    """Render a key name the way it is shown in the help bar."""
    if kb in _PRETTY_EXACT:
        return _PRETTY_EXACT[kb]
    for old, new in _PRETTY_SUBSTITUTIONS:
        kb = kb.replace(old, new)
    return kb


@dataclass(frozen=True)
class KeyMap:
    """Every action of the search view mapped to its binding."""

    up: Binding
    down: Binding
    page_up: Binding
    page_down: Binding
    select_entry: Binding
    select_entry_and_change_dir: Binding
    left: Binding
    right: Binding
    table_left: Binding
    table_right: Binding
    delete_entry: Binding
    help: Binding
    quit: Binding
    jump_start_of_input: Binding
    jump_end_of_input: Binding
    word_left: Binding
    word_right: Binding

    def to_serializable(self) -> SerializableKeyMap:
        """Keep only the key names of each binding."""
        return SerializableKeyMap(
            **{f.name: list(getattr(self, f.name).keys) for f in fields(self)}
        )

    def short_help(self) -> list[Binding]:
        return [_TITLE_BINDING, self.help]

    def full_help(self) -> list[list[Binding]]:
        return [
            [_TITLE_BINDING, self.up, self.left, self.select_entry, self.select_entry_and_change_dir],
            [_EMPTY_BINDING, self.down, self.right, self.delete_entry],
            [_EMPTY_BINDING, self.page_up, self.table_left, self.quit],
            [_EMPTY_BINDING, self.page_down, self.table_right, self.help],
        ]


@dataclass
class SerializableKeyMap:
    """Key names for each action, as stored in the user's configuration."""

    up: list[str] = field(default_factory=list)
    down: list[str] = field(default_factory=list)
    page_up: list[str] = field(default_factory=list)
    page_down: list[str] = field(default_factory=list)
    select_entry: list[str] = field(default_factory=list)
    select_entry_and_change_dir: list[str] = field(default_factory=list)
    left: list[str] = field(default_factory=list)
    right: list[str] = field(default_factory=list)
    table_left: list[str] = field(default_factory=list)
    table_right: list[str] = field(default_factory=list)
    delete_entry: list[str] = field(default_factory=list)
    help: list[str] = field(default_factory=list)
    quit: list[str] = field(default_factory=list)
    jump_start_of_input: list[str] = field(default_factory=list)
    jump_end_of_input: list[str] = field(default_factory=list)
    word_left: list[str] = field(default_factory=list)
    word_right: list[str] = field(default_factory=list)

    def to_key_map(self) -> KeyMap:
        """Build bindings, labelling each with its first key.

        Raises ValueError if any action has no keys.
        """
        bindings: dict[str, Binding] = {}
        for f in fields(self):
            keys = getattr(self, f.name)
            if not keys:
                raise ValueError(f"no keys are bound to {f.name!r} in {self!r}")
            bindings[f.name] = Binding(
                keys=tuple(keys),
                help_key=prettify_key_binding(keys[0]),
                help_desc=_HELP_DESCRIPTIONS[f.name],
            )
        return KeyMap(**bindings)

    def with_defaults(self) -> SerializableKeyMap:
        """Return a copy where every empty action takes the default keys."""
        defaults = DEFAULT_KEY_MAP.to_serializable()
        return replace(
            self,
            **{
                f.name: list(getattr(defaults, f.name))
                for f in fields(self)
                if not getattr(self, f.name)
            },
        )


DEFAULT_KEY_MAP = KeyMap(
    up=Binding(("up", "alt+OA", "ctrl+p"), "↑ ", "scroll up "),
    down=Binding(("down", "alt+OB", "ctrl+n"), "↓ ", "scroll down "),
    page_up=Binding(("pgup",), "pgup", "page up "),
    page_down=Binding(("pgdown",), "pgdn", "page down "),
    select_entry=Binding(("enter",), "enter", "select an entry "),
    select_entry_and_change_dir=Binding(
        ("ctrl+x",), "ctrl+x", "select an entry and cd into that directory"
    ),
    left=Binding(("left",), "← ", "move left "),
    right=Binding(("right",), "→ ", "move right "),
    table_left=Binding(("shift+left",), "shift+← ", "scroll the table left "),
    table_right=Binding(("shift+right",), "shift+→ ", "scroll the table right "),
    delete_entry=Binding(("ctrl+k",), "ctrl+k", "delete the highlighted entry "),
    help=Binding(("ctrl+h",), "ctrl+h", "help "),
    quit=Binding(("esc", "ctrl+c", "ctrl+d"), "esc", "exit hiSHtory "),
    jump_start_of_input=Binding(("ctrl+a",), "ctrl+a", "jump to the start of the input "),
    jump_end_of_input=Binding(("ctrl+e",), "ctrl+e", "jump to the end of the input "),
    word_left=Binding(("ctrl+left",), "ctrl+left", "jump left one word "),
    word_right=Binding(("ctrl+right",), "ctrl+right", "jump right one word "),
)