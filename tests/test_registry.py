"""Tests for footmark.registry module."""

import pytest

from footmark.errors import RegistryScopeError
from footmark.registry import (
    FootnoteRegistry,
    RegisteredFootnote,
    definition_anchor,
    reference_anchor,
)


class TestRegister:
    def test_numbers_assigned_in_registration_order(self):
        with FootnoteRegistry() as registry:
            assert registry.register("7", "seven") == 1
            assert registry.register("3", "three") == 2
            assert registry.register("5", "five") == 3

    def test_register_is_idempotent(self):
        with FootnoteRegistry() as registry:
            first = registry.register("1", "content")
            second = registry.register("1", "content")
            assert first == second == 1
            assert len(registry) == 1

    def test_repeat_registration_keeps_original_content(self):
        with FootnoteRegistry() as registry:
            registry.register("1", "original")
            registry.register("1", "replacement")
            assert registry.entries == (RegisteredFootnote("1", 1, "original"),)

    def test_entries_in_number_order(self):
        with FootnoteRegistry() as registry:
            registry.register("b", "B")
            registry.register("a", "A")
            assert [e.number for e in registry] == [1, 2]
            assert [e.id for e in registry.entries] == ["b", "a"]


class TestLookup:
    def test_lookup_before_register_is_none(self):
        with FootnoteRegistry() as registry:
            assert registry.lookup("1") is None

    def test_lookup_has_no_side_effects(self):
        with FootnoteRegistry() as registry:
            registry.lookup("1")
            assert len(registry) == 0
            assert "1" not in registry

    def test_lookup_after_register(self):
        with FootnoteRegistry() as registry:
            registry.register("x", "X")
            registry.register("y", "Y")
            assert registry.lookup("y") == 2
            assert "y" in registry


class TestScope:
    def test_register_outside_scope_raises(self):
        registry = FootnoteRegistry()
        with pytest.raises(RegistryScopeError):
            registry.register("1", "content")

    def test_lookup_outside_scope_raises(self):
        registry = FootnoteRegistry()
        with pytest.raises(RegistryScopeError):
            registry.lookup("1")

    def test_use_after_close_raises(self):
        with FootnoteRegistry() as registry:
            registry.register("1", "content")
        with pytest.raises(RegistryScopeError):
            registry.lookup("1")

    def test_close_discards_entries(self):
        with FootnoteRegistry() as registry:
            registry.register("1", "content")
        assert len(registry) == 0
        assert not registry.active

    def test_abandoned_render_discards_entries(self):
        registry = FootnoteRegistry()
        with pytest.raises(RuntimeError):
            with registry:
                registry.register("1", "content")
                raise RuntimeError("render abandoned")
        assert registry.entries == ()

    def test_reopen_starts_fresh(self):
        registry = FootnoteRegistry()
        with registry:
            registry.register("1", "content")
        with registry:
            assert registry.lookup("1") is None
            assert registry.register("2", "other") == 1

    def test_double_open_raises(self):
        with FootnoteRegistry() as registry:
            with pytest.raises(RegistryScopeError):
                registry.open()


class TestAnchors:
    def test_anchor_format(self):
        assert reference_anchor("1") == "fn-ref-1"
        assert definition_anchor("1") == "fn-1"

    def test_entry_anchors(self):
        entry = RegisteredFootnote("4", 1, "c")
        assert entry.reference_anchor == "fn-ref-4"
        assert entry.definition_anchor == "fn-4"
