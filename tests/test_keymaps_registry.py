import pytest

from editor_extras.keymaps import (
    ActionRef,
    Binding,
    KeySequence,
    KeyStroke,
    KeymapConflictError,
    KeymapRegistry,
    WhenClause,
)
from editor_extras.keymaps.defaults import DEFAULT_BINDINGS, load_default_keymaps


def make_action(action_id: str = "core.test") -> ActionRef:
    return ActionRef(id=action_id, handler=lambda *args, **kwargs: None)


def make_binding(
    *,
    binding_id: str,
    mode: str = "global",
    keys: str = "C-x n d",
    action_id: str = "core.test",
    when: tuple[WhenClause, ...] = (),
) -> Binding:
    return Binding(
        id=binding_id,
        mode=mode,
        sequence=KeySequence.parse(keys),
        action_id=action_id,
        when=when,
    )


def test_keystroke_parse_emacs_notation() -> None:
    assert KeyStroke.parse("C-M-f").token == "alt+ctrl+f"
    assert KeyStroke.parse("M--").token == "alt+-"
    assert KeyStroke.parse("RET").token == "ENTER"
    assert KeyStroke.parse("-").token == "-"


def test_keysequence_parse_multiple_strokes() -> None:
    sequence = KeySequence.parse("C-x n d")

    assert sequence.tokens == ("ctrl+x", "n", "d")


def test_register_binding_success() -> None:
    registry = KeymapRegistry()
    registry.register_action(make_action())
    binding = make_binding(binding_id="global.narrow")

    registry.register_binding(binding)

    assert registry.stats().binding_count == 1
    assert list(registry.iter_bindings(mode="global")) == [binding]


def test_register_binding_requires_known_action() -> None:
    registry = KeymapRegistry()

    with pytest.raises(KeyError):
        registry.register_binding(make_binding(binding_id="orphan"))


def test_register_binding_conflict_detection() -> None:
    registry = KeymapRegistry()
    registry.register_action(make_action())
    registry.register_binding(make_binding(binding_id="global.narrow"))

    with pytest.raises(KeymapConflictError):
        registry.register_binding(make_binding(binding_id="global.narrow.duplicate"))


def test_register_binding_non_overlapping_when() -> None:
    registry = KeymapRegistry()
    registry.register_action(make_action())

    registry.register_binding(make_binding(binding_id="default"))
    registry.register_binding(
        make_binding(binding_id="prefix", when=(WhenClause("prefix_active"),))
    )
    registry.register_binding(
        make_binding(binding_id="no_prefix", when=(WhenClause.parse("!prefix_active"),))
    )

    assert registry.stats().binding_count == 3


def test_register_binding_with_replace() -> None:
    registry = KeymapRegistry()
    registry.register_action(make_action())
    first = make_binding(binding_id="binding")
    second = make_binding(binding_id="binding")

    registry.register_binding(first)
    registry.register_binding(second, replace=True)

    assert list(registry.iter_bindings()) == [second]


def test_rebind_changes_sequence_and_bumps_revision() -> None:
    registry = KeymapRegistry()
    registry.register_action(make_action())
    registry.register_binding(make_binding(binding_id="binding"))
    before = registry.revision()

    updated = registry.rebind(
        "binding", sequence=KeySequence.parse("C-c n"), description="narrow"
    )

    assert updated.sequence.tokens == ("ctrl+c", "n")
    assert updated.description == "narrow"
    assert registry.revision() == before + 1


def test_rebind_conflict_keeps_original() -> None:
    registry = KeymapRegistry()
    registry.register_action(make_action())
    registry.register_binding(make_binding(binding_id="first", keys="C-x n d"))
    registry.register_binding(make_binding(binding_id="second", keys="C-x n w"))

    with pytest.raises(KeymapConflictError):
        registry.rebind("second", sequence=KeySequence.parse("C-x n d"))

    assert registry.get_binding("second").sequence.tokens == ("ctrl+x", "n", "w")


def test_unregister_binding() -> None:
    registry = KeymapRegistry()
    registry.register_action(make_action())
    binding = make_binding(binding_id="binding")
    registry.register_binding(binding)

    removed = registry.unregister_binding("binding")

    assert removed == binding
    assert registry.stats().binding_count == 0


def test_load_default_keymaps_registers_everything() -> None:
    registry = KeymapRegistry()

    load_default_keymaps(registry)

    assert registry.stats().binding_count == len(DEFAULT_BINDINGS)
    assert registry.stats().modes == ("global", "minibuffer")
    assert registry.get_binding("global.narrow_to_defun").sequence.tokens == (
        "ctrl+x",
        "n",
        "d",
    )


def test_load_default_keymaps_include_filters() -> None:
    registry = KeymapRegistry()

    load_default_keymaps(
        registry,
        include_actions=("narrow.widen",),
        include_bindings=("global.widen",),
    )

    assert registry.stats().binding_count == 1
    assert registry.get_binding("global.widen").action_id == "narrow.widen"


def test_load_default_keymaps_skips_bindings_of_excluded_actions() -> None:
    registry = KeymapRegistry()

    load_default_keymaps(registry, exclude_actions=("core.digit_argument",))

    ids = {binding.id for binding in registry.iter_bindings()}
    assert "global.meta_digit_5" not in ids
    assert "global.universal_argument" in ids


def test_load_default_keymaps_per_mode_override() -> None:
    registry = KeymapRegistry()
    custom_binding = Binding(
        id="global.goto_longest_line",
        mode="global",
        sequence=KeySequence.parse("C-c l"),
        action_id="motion.goto_longest_line",
    )

    load_default_keymaps(registry, per_mode_overrides={"global": (custom_binding,)})

    binding = registry.get_binding("global.goto_longest_line")
    assert binding.sequence.tokens == ("ctrl+c", "l")


def test_per_mode_override_must_match_mode() -> None:
    registry = KeymapRegistry()
    stray = Binding(
        id="stray",
        mode="minibuffer",
        sequence=KeySequence.parse("C-c l"),
        action_id="motion.goto_longest_line",
    )

    with pytest.raises(ValueError):
        load_default_keymaps(registry, per_mode_overrides={"global": (stray,)})
