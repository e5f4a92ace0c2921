"""
Tests for Atom parsing and name derivation.
"""

import pytest

from osdeps.core.models.atom import Atom, derive_name


class TestAtomParse:
    def test_bare_name(self):
        atom = Atom.parse("foo")
        assert atom.name == "foo"
        assert atom.category is None
        assert atom.package == "foo"
        assert atom.is_bare

    def test_category_and_name(self):
        atom = Atom.parse("sys-apps/foo")
        assert atom.name == "sys-apps/foo"
        assert atom.category == "sys-apps"
        assert atom.package == "foo"
        assert atom.version is None
        assert atom.is_bare

    def test_fully_decorated(self):
        atom = Atom.parse("=sys-apps/foo-1.2-r1:2[x,-y]")
        assert atom.name == "sys-apps/foo"
        assert atom.comparator == "="
        assert atom.version == "1.2"
        assert atom.revision == "1"
        assert atom.slot == "2"
        assert atom.subslot is None
        assert atom.useflags == frozenset({"x", "-y"})
        assert not atom.is_bare

    @pytest.mark.parametrize("raw, comparator", [
        (">=dev-libs/bar-1.0", ">="),
        ("<=dev-libs/bar-1.0", "<="),
        ("<dev-libs/bar-1.0", "<"),
        (">dev-libs/bar-1.0", ">"),
        ("~dev-libs/bar-1.0", "~"),
    ])
    def test_comparators(self, raw, comparator):
        atom = Atom.parse(raw)
        assert atom.comparator == comparator
        assert atom.name == "dev-libs/bar"
        assert atom.version == "1.0"

    def test_slot_and_subslot(self):
        atom = Atom.parse("dev-libs/foo:0/1.2")
        assert atom.name == "dev-libs/foo"
        assert atom.slot == "0"
        assert atom.subslot == "1.2"

    def test_repository_suffix(self):
        atom = Atom.parse("sys-apps/foo-1.2::gentoo")
        assert atom.name == "sys-apps/foo"
        assert atom.version == "1.2"

    def test_version_glob(self):
        atom = Atom.parse("=dev-lang/python-3.11*")
        assert atom.name == "dev-lang/python"
        assert atom.version == "3.11"

    def test_complex_version(self):
        atom = Atom.parse("sys-devel/gcc-12.2.1_p20230121-r1")
        assert atom.name == "sys-devel/gcc"
        assert atom.version == "12.2.1_p20230121"
        assert atom.revision == "1"

    def test_hyphenated_names_keep_their_parts(self):
        assert Atom.parse("dev-qt/qt5-base").name == "dev-qt/qt5-base"
        assert Atom.parse("x11-libs/libX11-1.8").name == "x11-libs/libX11"
        assert Atom.parse("app-misc/foo-bar").name == "app-misc/foo-bar"

    def test_revision_without_version_is_part_of_name(self):
        assert Atom.parse("app-misc/foo-r1").name == "app-misc/foo-r1"

    def test_empty_raises(self):
        with pytest.raises(ValueError):
            Atom.parse("   ")

    def test_str_is_raw(self):
        assert str(Atom.parse(">=dev-libs/bar-1.0")) == ">=dev-libs/bar-1.0"

    def test_frozen(self):
        atom = Atom.parse("sys-apps/foo")
        with pytest.raises(Exception):
            atom.name = "other"


class TestSamePackage:
    def test_decorations_do_not_matter(self):
        a = Atom.parse(">=sys-apps/foo-1.0")
        b = Atom.parse("sys-apps/foo:0")
        assert a.same_package(b)
        assert a != b

    def test_against_output_identifier(self):
        assert Atom.parse("sys-apps/foo").same_package("sys-apps/foo-1.2-r1")

    def test_different_category(self):
        assert not Atom.parse("sys-apps/foo").same_package("dev-libs/foo")

    def test_prefix_is_not_same(self):
        assert not Atom.parse("sys-apps/foo").same_package("sys-apps/foobar-1.0")


class TestDeriveName:
    @pytest.mark.parametrize("identifier, name", [
        ("sys-apps/foo-1.2-r1", "sys-apps/foo"),
        ("sys-apps/foo-1.2-r1::gentoo", "sys-apps/foo"),
        ("media-libs/libsdl2-2.28.5", "media-libs/libsdl2"),
        ("foo", "foo"),
    ])
    def test_derive(self, identifier, name):
        assert derive_name(identifier) == name
