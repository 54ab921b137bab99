"""Unit tests for the saved-form library."""

import pytest

from clinic_assist.features.library import FormLibrary
from clinic_assist.models.forms import GeneratedFormSchema


def _schema(title: str) -> GeneratedFormSchema:
    return GeneratedFormSchema(form_title=title, fields=())


class TestFormLibrary:
    def test_add_appends_in_order(self) -> None:
        library = FormLibrary()

        positions = [library.add(_schema(t)) for t in ("A", "B", "C")]

        assert positions == [0, 1, 2]
        assert [s.form_title for s in library] == ["A", "B", "C"]

    def test_same_schema_can_be_saved_twice(self) -> None:
        library = FormLibrary()
        schema = _schema("A")

        library.add(schema)
        library.add(schema)

        assert len(library) == 2
        assert library[0] is library[1]

    def test_remove_takes_only_that_entry(self) -> None:
        library = FormLibrary()
        a, b, c = _schema("A"), _schema("B"), _schema("C")
        for schema in (a, b, c):
            library.add(schema)

        removed = library.remove(1)

        assert removed is b
        assert list(library) == [a, c]
        assert library[0] is a
        assert library[1] is c

    @pytest.mark.parametrize("index", [-1, 3])
    def test_invalid_position_raises(self, index: int) -> None:
        library = FormLibrary()
        for title in ("A", "B", "C"):
            library.add(_schema(title))

        with pytest.raises(IndexError):
            library.remove(index)
        with pytest.raises(IndexError):
            library[index]

        assert len(library) == 3
