"""In-memory library of saved form schemas."""

from collections.abc import Iterator

from clinic_assist.models.forms import GeneratedFormSchema


class FormLibrary:
    """Insertion-ordered list of saved schemas, lost when the page closes.

    Saving never deduplicates or overwrites; removal is by position.
    """

    def __init__(self) -> None:
        self._entries: list[GeneratedFormSchema] = []

    def add(self, schema: GeneratedFormSchema) -> int:
        """Append a schema and return its position."""
        self._entries.append(schema)
        return len(self._entries) - 1

    def remove(self, index: int) -> GeneratedFormSchema:
        """Remove and return the schema at ``index``.

        Raises:
            IndexError: If ``index`` is not a current position.
        """
        if not 0 <= index < len(self._entries):
            raise IndexError(f"No saved form at position {index}")
        return self._entries.pop(index)

    def __getitem__(self, index: int) -> GeneratedFormSchema:
        if not 0 <= index < len(self._entries):
            raise IndexError(f"No saved form at position {index}")
        return self._entries[index]

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[GeneratedFormSchema]:
        return iter(tuple(self._entries))
