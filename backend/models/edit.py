"""Edit-related data models"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class Position(BaseModel):
    """A zero-based line/character position in a text document"""

    line: int = Field(ge=0)
    character: int = Field(ge=0)


class Range(BaseModel):
    """A range between two positions, end exclusive"""

    start: Position
    end: Position


class TextEdit(BaseModel):
    """Replacement of a range of text"""

    model_config = ConfigDict(populate_by_name=True)

    range: Range
    new_text: str = Field(alias="newText")


class WorkspaceEditEntry(BaseModel):
    """A text edit addressed to a single file"""

    uri: str
    edit: TextEdit


class WorkspaceEdit(BaseModel):
    """A batch of text edits addressed to one or more files"""

    model_config = ConfigDict(frozen=True)

    edits: list[WorkspaceEditEntry] = []

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> WorkspaceEdit:
        """Deserialize an edit descriptor returned by the extension host"""
        return cls.model_validate(data)

    def to_json(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True)

    def text_edits(self) -> list[tuple[str, list[TextEdit]]]:
        """Text edits grouped per uri, in first-appearance order"""
        grouped: dict[str, list[TextEdit]] = {}
        for entry in self.edits:
            grouped.setdefault(entry.uri, []).append(entry.edit)
        return list(grouped.items())

    def replace(self, uri: str, range: Range, new_text: str) -> WorkspaceEdit:
        entry = WorkspaceEditEntry(uri=uri, edit=TextEdit(range=range, new_text=new_text))
        return WorkspaceEdit(edits=[*self.edits, entry])

    def insert(self, uri: str, position: Position, new_text: str) -> WorkspaceEdit:
        return self.replace(uri, Range(start=position, end=position), new_text)

    def delete(self, uri: str, range: Range) -> WorkspaceEdit:
        return self.replace(uri, range, "")


class Diagnostic(BaseModel):
    """Diagnostic an edit command was triggered for"""

    range: Range
    message: str
    severity: int | None = None
    source: str | None = None
    code: str | int | None = None


class EditCommand(BaseModel):
    """Command the extension host executes to produce a workspace edit"""

    command: str
    title: str | None = None
    arguments: list[Any] = []


class ActionInvocation(BaseModel):
    """An edit command paired with the diagnostic it applies to"""

    action_edit_command: EditCommand
    diagnostic: Diagnostic | None = None
