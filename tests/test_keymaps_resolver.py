from __future__ import annotations

from modal_edit.keymaps import ActionRef, Binding, KeySequence, KeymapRegistry, KeymapResolver


def make_action(action_id: str) -> ActionRef:
    return ActionRef(id=action_id, handler=lambda *args, **kwargs: None)


def make_binding(
    binding_id: str,
    *,
    mode: str = "normal",
    keys: tuple[str, ...] = ("g", "g"),
    action_id: str = "core.test",
    timeout_ms: int = 1000,
) -> Binding:
    return Binding(
        id=binding_id,
        mode=mode,
        sequence=KeySequence.from_strings(*keys, timeout_ms=timeout_ms),
        action_id=action_id,
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
    binding = make_binding("normal.gg")
    resolver = KeymapResolver(build_registry([binding]))

    result = resolver.resolve("normal", ("g", "g"))

    assert result.status == "match"
    assert result.match is not None
    assert result.match.binding.id == binding.id
    assert result.consumed == 2


def test_resolver_reports_pending_for_prefix() -> None:
    resolver = KeymapResolver(
        build_registry(
            [
                make_binding("normal.gg"),
                make_binding("normal.gu", keys=("g", "u"), action_id="core.lower"),
            ]
        )
    )

    result = resolver.resolve("normal", ("g",))

    assert result.status == "pending"
    assert result.next_expected == ("g", "u")


def test_resolver_misses_unknown_continuation() -> None:
    resolver = KeymapResolver(build_registry([make_binding("normal.gg")]))

    result = resolver.resolve("normal", ("g", "x"))

    assert result.status == "miss"
    assert result.consumed == 1


def test_resolver_empty_sequence_is_not_pending() -> None:
    resolver = KeymapResolver(build_registry([make_binding("normal.gg")]))

    assert resolver.resolve("normal", ()).status == "miss"


def test_resolver_is_mode_scoped() -> None:
    resolver = KeymapResolver(build_registry([make_binding("insert.gg", mode="insert")]))

    assert resolver.resolve("normal", ("g", "g")).status == "miss"
    assert resolver.resolve("insert", ("g", "g")).status == "match"


def test_resolver_pending_returns_timeout_hint() -> None:
    resolver = KeymapResolver(
        build_registry(
            [
                make_binding("normal.gg", timeout_ms=1500),
                make_binding("normal.gu", keys=("g", "u"), timeout_ms=800),
            ]
        )
    )

    result = resolver.resolve("normal", ("g",))

    assert result.status == "pending"
    assert result.timeout_ms == 800


def test_resolver_cache_refreshes_on_revision() -> None:
    registry = build_registry([])
    resolver = KeymapResolver(registry)

    assert resolver.resolve("normal", ("x",)).status == "miss"

    new_binding = make_binding("normal.x", keys=("x",), action_id="core.x")
    registry.register_action(make_action("core.x"))
    registry.register_binding(new_binding)

    match = resolver.resolve("normal", ("x",))
    assert match.status == "match"
    assert match.match is not None
    assert match.match.binding.id == new_binding.id
