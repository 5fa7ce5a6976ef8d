"""Label value type and its JSON conversions."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional


def normalize_color(color: str) -> str:
    """Return ``color`` without a leading ``#`` (``#ff0000`` -> ``ff0000``)."""
    if color.startswith('#'):
        return color[1:]
    return color


@dataclass
class Label:
    name: Optional[str] = None
    color: Optional[str] = None
    current_name: Optional[str] = None
    extra: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> 'Label':
        extra = {k: v for k, v in raw.items() if k not in ('name', 'color', 'currentName')}
        return cls(
            name=raw.get('name'),
            color=raw.get('color'),
            current_name=raw.get('currentName'),
            extra=extra,
        )

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {}
        if self.current_name is not None:
            data['currentName'] = self.current_name
        if self.name is not None:
            data['name'] = self.name
        if self.color is not None:
            data['color'] = self.color
        data.update(self.extra)
        return data

    def create_payload(self) -> Dict[str, Any]:
        """Body for ``POST /labels``: name and color only."""
        if not self.name:
            raise ValueError("Label.name is required to create a label")
        if not self.color:
            raise ValueError(f"Label.color is required to create label {self.name!r}")
        return {'name': self.name, 'color': normalize_color(self.color)}

    def update_payload(self) -> Dict[str, Any]:
        """Body for ``PATCH /labels/{currentName}``.

        Every field present on the label except ``currentName`` is sent,
        extra fields such as ``description`` included, with ``color``
        normalized.
        """
        payload: Dict[str, Any] = {}
        if self.name is not None:
            payload['name'] = self.name
        if self.color is not None:
            payload['color'] = normalize_color(self.color)
        payload.update(self.extra)
        return payload


__all__ = [
    'Label',
    'normalize_color',
]
