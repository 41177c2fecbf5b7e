from __future__ import annotations

from editor_extras.keymaps import (
    ActionRef,
    Binding,
    KeySequence,
    KeymapRegistry,
    KeymapResolver,
    WhenClause,
)


def make_action(action_id: str) -> ActionRef:
    return ActionRef(id=action_id, handler=lambda *args, **kwargs: None)


def make_binding(
    binding_id: str,
    *,
    mode: str = "global",
    keys: str = "C-x o",
    action_id: str = "core.test",
    when: tuple[WhenClause, ...] = (),
    priority: int = 0,
) -> Binding:
    return Binding(
        id=binding_id,
        mode=mode,
        sequence=KeySequence.parse(keys),
        action_id=action_id,
        when=when,
        priority=priority,
    )


def build_registry(bindings: list[Binding]) -> KeymapRegistry:
    registry = KeymapRegistry()
    action_ids = {binding.action_id for binding in bindings}
    for action_id in action_ids:
        registry.register_action(make_action(action_id))
    for binding in bindings:
        registry.register_binding(binding)
    return registry


def test_resolver_matches_exact_sequence() -> None:
    binding = make_binding("global.other_window")
    resolver = KeymapResolver(build_registry([binding]))

    result = resolver.resolve("global", ("ctrl+x", "o"))

    assert result.status == "match"
    assert result.match is not None
    assert result.match.binding.id == binding.id
    assert result.consumed == 2


def test_resolver_reports_pending_for_prefix() -> None:
    resolver = KeymapResolver(
        build_registry(
            [
                make_binding("global.other_window"),
                make_binding("global.split", keys="C-x 2", action_id="window.split"),
            ]
        )
    )

    result = resolver.resolve("global", ("ctrl+x",))

    assert result.status == "pending"
    assert result.next_expected == ("2", "o")


def test_resolver_misses_unknown_continuation() -> None:
    resolver = KeymapResolver(build_registry([make_binding("global.other_window")]))

    result = resolver.resolve("global", ("ctrl+x", "z"))

    assert result.status == "miss"
    assert result.consumed == 1


def test_resolver_honors_when_clauses() -> None:
    gating = make_binding(
        "global.prefix_digit_5",
        keys="5",
        when=(WhenClause("prefix_active"),),
        action_id="core.digit_argument",
    )
    resolver = KeymapResolver(build_registry([gating]))

    miss = resolver.resolve("global", ("5",), context={})
    assert miss.status == "miss"

    hit = resolver.resolve("global", ("5",), context={"prefix_active": True})
    assert hit.status == "match"
    assert hit.match is not None
    assert hit.match.binding.id == gating.id


def test_resolver_prefix_is_not_pending_when_all_continuations_are_gated() -> None:
    gated = make_binding(
        "global.gated",
        keys="C-c x",
        when=(WhenClause("minibuffer_active"),),
    )
    resolver = KeymapResolver(build_registry([gated]))

    assert resolver.resolve("global", ("ctrl+c",)).status == "miss"
    assert (
        resolver.resolve("global", ("ctrl+c",), context={"minibuffer_active": True}).status
        == "pending"
    )


def test_resolver_prefers_higher_priority() -> None:
    low = make_binding("low", action_id="core.low")
    high = make_binding(
        "high", action_id="core.high", when=(WhenClause("prefix_active"),), priority=5
    )
    resolver = KeymapResolver(build_registry([low, high]))

    result = resolver.resolve("global", ("ctrl+x", "o"), context={"prefix_active": True})

    assert result.match is not None
    assert result.match.binding.id == "high"


def test_resolver_cache_refreshes_on_revision() -> None:
    registry = build_registry([])
    resolver = KeymapResolver(registry)

    miss = resolver.resolve("global", ("alt+g",))
    assert miss.status == "miss"

    new_binding = make_binding("global.longest", keys="M-g l", action_id="core.x")
    registry.register_action(make_action("core.x"))
    registry.register_binding(new_binding)

    pending = resolver.resolve("global", ("alt+g",))
    assert pending.status == "pending"
    match = resolver.resolve("global", ("alt+g", "l"))
    assert match.match is not None
    assert match.match.binding.id == new_binding.id
