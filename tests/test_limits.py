# SPDX-License-Identifier: Apache-2.0
"""Tests for the Ulimit/Ulimits model and merge."""

import pytest

from ulimitflags.limits import ULIMIT_NAMES, Ulimit, Ulimits, merge_ulimits


# ---------------------------------------------------------------
# Ulimit dataclass
# ---------------------------------------------------------------

class TestUlimit:
    def test_hard_defaults_to_soft(self):
        u = Ulimit(1024)
        assert u.soft == 1024
        assert u.hard == 1024

    def test_both_values(self):
        u = Ulimit(100, 200)
        assert (u.soft, u.hard) == (100, 200)

    def test_soft_above_hard_is_kept(self):
        u = Ulimit(200, 100)
        assert (u.soft, u.hard) == (200, 100)

    def test_frozen(self):
        u = Ulimit(1)
        with pytest.raises(AttributeError):
            u.soft = 2  # type: ignore[misc]

    def test_equality(self):
        assert Ulimit(5) == Ulimit(5, 5)
        assert Ulimit(5) != Ulimit(5, 6)


# ---------------------------------------------------------------
# merge
# ---------------------------------------------------------------

class TestMerge:
    def test_overlay_wins(self):
        a = Ulimits({"nofile": Ulimit(1024, 1024)})
        b = Ulimits({"nofile": Ulimit(2048, 4096), "nproc": Ulimit(100, 100)})
        merged = merge_ulimits(a, b)
        assert merged == {"nofile": Ulimit(2048, 4096), "nproc": Ulimit(100, 100)}
        assert isinstance(merged, Ulimits)

    def test_base_entries_kept(self):
        a = Ulimits({"core": Ulimit(0)})
        merged = merge_ulimits(a, Ulimits({"nproc": Ulimit(10)}))
        assert merged["core"] == Ulimit(0)
        assert merged["nproc"] == Ulimit(10)

    def test_none_base(self):
        merged = merge_ulimits(None, {"nproc": Ulimit(10)})
        assert merged == {"nproc": Ulimit(10)}

    def test_none_overlay(self):
        assert merge_ulimits(Ulimits({"nproc": Ulimit(10)}), None) == {"nproc": Ulimit(10)}

    def test_both_none(self):
        merged = merge_ulimits(None, None)
        assert merged == {}
        assert isinstance(merged, Ulimits)

    def test_arguments_not_mutated(self):
        a = Ulimits({"nofile": Ulimit(1)})
        b = Ulimits({"nofile": Ulimit(2), "nproc": Ulimit(3)})
        merged = merge_ulimits(a, b)
        assert a == {"nofile": Ulimit(1)}
        assert b == {"nofile": Ulimit(2), "nproc": Ulimit(3)}
        assert merged is not a
        assert merged is not b

    def test_method_form(self):
        a = Ulimits({"nofile": Ulimit(1)})
        assert a.merge({"nofile": Ulimit(2)}) == {"nofile": Ulimit(2)}
        assert a["nofile"] == Ulimit(1)


class TestUlimitsDisplay:
    def test_str_renders_sorted(self):
        u = Ulimits({"nproc": Ulimit(100), "nofile": Ulimit(1024, 2048)})
        assert str(u) == "[nofile=1024:2048 nproc=100:100]"

    def test_repr(self):
        assert repr(Ulimits({"core": Ulimit(0)})) == "Ulimits({'core': Ulimit(soft=0, hard=0)})"


def test_known_names():
    assert "nofile" in ULIMIT_NAMES
    assert "nproc" in ULIMIT_NAMES
    assert "bogus" not in ULIMIT_NAMES
