"""
Tests for ClasspathResolverImpl: path conversion, order, and directory filtering.
"""
import pytest
from pathlib import Path
from classprune.core.classpath import ClasspathResolverImpl
from classprune.core.errors import ConfigurationError
from classprune.core.models import ClasspathRoot
from conftest import write_jar


class TestResolveEntries:

    def test_entries_are_absolute_and_ordered(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        entries = ClasspathResolverImpl().resolve_entries(["b", "a", str(tmp_path / "c")])
        assert entries == [tmp_path / "b", tmp_path / "a", tmp_path / "c"]
        assert all(e.is_absolute() for e in entries)

    def test_accepts_path_objects(self, tmp_path):
        assert ClasspathResolverImpl().resolve_entries([tmp_path]) == [tmp_path]

    @pytest.mark.parametrize("entry", ["", "   ", None, 42, "bad\x00path", b"bytes/path"])
    def test_unusable_entry_raises_configuration_error(self, entry):
        with pytest.raises(ConfigurationError):
            ClasspathResolverImpl().resolve_entries(["ok", entry])


class TestResolveRoots:

    def test_only_directories_become_roots(self, tmp_path):
        classes = tmp_path / "classes"
        classes.mkdir()
        jar = write_jar(tmp_path / "lib" / "dep.jar", {"com.dep.Foo": b"foo"})
        other = tmp_path / "classes-test"
        other.mkdir()

        roots = ClasspathResolverImpl().resolve_roots(
            [str(jar), str(classes), str(tmp_path / "missing"), str(other)])

        assert roots == [ClasspathRoot(path=classes, index=1), ClasspathRoot(path=other, index=3)]

    def test_surrounding_spaces_are_part_of_the_path(self, tmp_path):
        spaced = tmp_path / " spaced "
        spaced.mkdir()
        roots = ClasspathResolverImpl().resolve_roots([str(spaced)])
        assert roots == [ClasspathRoot(path=spaced, index=0)]

    def test_no_directories_gives_no_roots(self, tmp_path):
        jar = write_jar(tmp_path / "dep.jar", {"a.B": b"x"})
        assert ClasspathResolverImpl().resolve_roots([str(jar)]) == []

    def test_bad_entry_fails_even_if_others_are_fine(self, tmp_path):
        with pytest.raises(ConfigurationError):
            ClasspathResolverImpl().resolve_roots([str(tmp_path), ""])
