# hishtory

Building blocks for a synced, searchable shell history: the records
exchanged with a sync backend, release version parsing, key bindings for an
interactive search view, text helpers for the search box, table sizing,
match highlighting, and a small client for AI command suggestions.

The package uses only the standard library.

## Installation

```
pip install .
```

## Modules

### `hishtory.data`

Dataclasses for the records sent to and from the backend, each with
`to_dict()` and the class method `from_dict(data)`:
`EncHistoryEntry`, `DumpRequest`, `UpdateInfo`, `MessageIdentifier`,
`MessageIdentifiers`, `DeletionRequest`, `Feedback` and `SubmitResponse`.
Bytes fields are base64 encoded and timestamps are RFC 3339 strings
(`format_time`, `parse_time`); a missing timestamp becomes `ZERO_TIME`.
`MessageIdentifiers` also offers `to_json_bytes()` and
`from_json_bytes(value)` for storing it in a database column;
`from_json_bytes` raises `TypeError` when not given bytes.

`chunks(items, chunk_size)` splits a sequence into lists of at most
`chunk_size` items and raises `ValueError` for a size below one.

### `hishtory.version`

`parse_version_string(text)` finds exactly one `vMAJOR.MINOR` in the text and
returns a `ParsedVersion`, raising `ValueError` otherwise. `ParsedVersion`
has `less_than`, `greater_than` (also `<` and `>`), `decrement()` (which
raises `ValueError` when the minor version is 1 or less) and prints as
`v0.216`.

### `hishtory.keybindings`

`Binding` holds keys plus help text, with `matches(key)`. `KeyMap` maps every
action of the search view to a binding and provides `short_help()`,
`full_help()` and `to_serializable()`. `SerializableKeyMap` holds only key
names, as kept in a configuration file; `with_defaults()` fills empty actions
from `DEFAULT_KEY_MAP` and `to_key_map()` builds bindings labelled via
`prettify_key_binding`, raising `ValueError` when an action has no keys.

### `hishtory.ai`

`create_open_ai_request(...)` builds a chat completions request body, taking
the model, number of completions and system prompt from
`OPENAI_API_MODEL`, `OPENAI_API_NUMBER_COMPLETIONS` and
`OPENAI_API_SYSTEM_PROMPT` when set. `get_ai_suggestions_via_open_ai_api(...)`
posts it and returns the distinct suggestions and an `OpenAiUsage`; it reads
the key from `OPENAI_API_KEY` and raises `AiError` on any failure. Entries in
`SUGGESTION_OVERRIDES` are returned without a request.
`AiSuggestionRequest` and `AiSuggestionResponse` are the records for a
backend proxy.

### `hishtory.query_text`

`calculate_word_boundaries`, `sanitize_escape_codes`, `command_escaper`,
`split_query_array`, `build_initial_query_with_search_escaping` (quotes words
that start with a dash) and `build_selected_command` (optionally prefixes a
`cd` into the entry's directory, expanding `~/`).

### `hishtory.layout`

`calculate_column_widths`, `fit_column_widths` (grows columns toward the
widest reference cells and shrinks the widest column until the table fits
the terminal), and the height rules `table_height`, `num_entries_needed`,
`is_compact_height`, `is_extra_compact_height` and `visible_table_height`.

### `hishtory.highlight`

`split_highlight_chunks(value, pattern)` cuts a cell into `Chunk`s marking
the matched parts; `color_profile_from_env` chooses a `ColorProfile`;
`dedupe_commands` drops repeated commands; `QueryTracker` hands out query ids
and rejects stale results with `accept`, while `is_pending` reports a query
that has run for over a second.

## Example

```python
from hishtory.version import parse_version_string
from hishtory.query_text import calculate_word_boundaries

v = parse_version_string("v0.216")
print(v.less_than(parse_version_string("v1.0")))  # True
print(calculate_word_boundaries("foo-bar baz"))   # [0, 3, 7, 11]
```

## What this package does not do

There is no command-line program, no interactive search screen, no local
history database, no shell integration and no sync server. The modules here
provide the records, rules and helpers such pieces would be built on; drawing
the terminal view, recording commands and talking to the backend are left to
the caller.

## Tests

```
pip install .[test]
pytest
```