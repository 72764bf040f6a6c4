"""Alfred Script Filter items and the list document written to stdout."""

from __future__ import annotations

import json
import sys
from dataclasses import dataclass, field
from typing import Any, TextIO


@dataclass(slots=True)
class ItemText:
    """Text Alfred copies (cmd+c) or shows in large type (cmd+l)."""

    copy: str | None = None
    largetype: str | None = None


@dataclass(slots=True)
class Item:
    """One selectable Script Filter row."""

    title: str
    subtitle: str = ""
    arg: str | None = None
    valid: bool = True
    text: ItemText | None = None
    quicklookurl: str | None = None

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "title": self.title,
            "subtitle": self.subtitle,
            "valid": self.valid,
        }
        if self.arg is not None:
            payload["arg"] = self.arg
        if self.text is not None:
            text = {
                key: value
                for key, value in (("copy", self.text.copy), ("largetype", self.text.largetype))
                if value is not None
            }
            if text:
                payload["text"] = text
        if self.quicklookurl is not None:
            payload["quicklookurl"] = self.quicklookurl
        return payload


@dataclass(slots=True)
class ScriptFilterList:
    """Items of the current invocation, written as one JSON document."""

    stream: TextIO | None = None
    items: list[Item] = field(default_factory=list)

    def clear(self) -> ScriptFilterList:
        self.items.clear()
        return self

    def add_item(self, item: Item) -> ScriptFilterList:
        self.items.append(item)
        return self

    def to_dict(self) -> dict[str, Any]:
        return {"items": [item.to_dict() for item in self.items]}

    def write(self) -> None:
        """Write the document and flush, so output survives an imminent exit."""

        stream = self.stream if self.stream is not None else sys.stdout
        stream.write(json.dumps(self.to_dict()))
        stream.write("\n")
        stream.flush()
