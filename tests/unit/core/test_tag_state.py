"""Tests for TagState."""

from tagcache.core.entities import TagState


class TestTagState:
    """Tests for TagState."""

    def test_record_marks_pending(self) -> None:
        """Test a local invalidation is known and pending."""
        state = TagState()

        assert state.record("users", 100) == 100

        assert state.get("users") == 100
        assert state.pending == {"users": 100}
        assert "users" in state
        assert len(state) == 1

    def test_record_without_publish(self) -> None:
        """Test an invalidation that is never published."""
        state = TagState()
        state.record("users", 100, publish=False)

        assert state.get("users") == 100
        assert state.pending == {}

    def test_record_never_regresses(self) -> None:
        """Test an older instant does not replace a newer one."""
        state = TagState()
        state.record("users", 200)

        assert state.record("users", 100) == 200
        assert state.get("users") == 200
        assert state.pending == {"users": 200}

    def test_take_pending_clears(self) -> None:
        state = TagState()
        state.record("a", 1)
        state.record("b", 2)

        assert state.take_pending() == {"a": 1, "b": 2}
        assert state.pending == {}
        # Known instants are kept
        assert state.get("a") == 1

    def test_restore_pending_when_absent(self) -> None:
        state = TagState()
        state.restore_pending("a", 5)
        assert state.pending == {"a": 5}

    def test_restore_pending_does_not_clobber_newer(self) -> None:
        """Test a failed older publish does not replace a newer pending update."""
        state = TagState()
        state.take_pending()
        state.record("a", 20)

        state.restore_pending("a", 10)

        assert state.pending == {"a": 20}

    def test_restore_pending_replaces_older(self) -> None:
        state = TagState()
        state.restore_pending("a", 10)
        state.restore_pending("a", 20)
        assert state.pending == {"a": 20}

    def test_confirm_exact_instant_only(self) -> None:
        """Test confirmation only clears the instant that was written."""
        state = TagState()
        state.record("a", 10)
        state.record("a", 20)

        state.confirm("a", 10)
        assert state.pending == {"a": 20}

        state.confirm("a", 20)
        assert state.pending == {}

    def test_confirm_missing_tag(self) -> None:
        state = TagState()
        state.confirm("a", 10)
        assert state.pending == {}

    def test_merge_keeps_max(self) -> None:
        """Test merging a keeper snapshot keeps the larger instant per tag."""
        state = TagState()
        state.record("a", 50)
        state.record("b", 10)

        newest = state.merge({"a": 40, "b": 30, "c": 20})

        assert newest == 40
        assert state.tags == {"a": 50, "b": 30, "c": 20}

    def test_merge_does_not_touch_pending(self) -> None:
        state = TagState()
        state.record("a", 50)
        state.merge({"a": 60})

        assert state.get("a") == 60
        assert state.pending == {"a": 50}

    def test_merge_empty(self) -> None:
        state = TagState()
        assert state.merge({}) is None
        assert len(state) == 0

    def test_copies_are_detached(self) -> None:
        state = TagState()
        state.record("a", 1)

        state.tags["a"] = 99
        state.pending["a"] = 99

        assert state.get("a") == 1
        assert state.pending == {"a": 1}
