"""Run configuration: label files, repository list, token and API URL."""
from __future__ import annotations

import json
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Mapping, Optional

from gitlabel.models import Label

TOKEN_ENV = 'GITHUB_TOKEN'
API_URL_ENV = 'GITHUB_API_URL'
DEFAULT_API_URL = 'https://api.github.com'

CREATE_FILE = 'labels-to-create.json'
UPDATE_FILE = 'labels-to-update.json'
REMOVE_FILE = 'labels-to-remove.json'
REPOSITORIES_FILE = 'repositories.json'

_REQUIRED_KEYS = {
    'create': ('name', 'color'),
    'update': ('currentName',),
    'remove': ('name',),
}
_STRING_KEYS = ('currentName', 'name', 'color')


class LabelFileError(ValueError):
    """Raised when a label or repository file cannot be used."""


@dataclass(frozen=True)
class LabelPlan:
    """Label lists applied to every repository of one invocation."""

    to_update: List[Label] = field(default_factory=list)
    to_create: List[Label] = field(default_factory=list)
    to_remove: List[Label] = field(default_factory=list)

    def is_empty(self) -> bool:
        return not (self.to_update or self.to_create or self.to_remove)


def _read_json_list(path: Path) -> list:
    try:
        data = json.loads(Path(path).read_text(encoding='utf-8'))
    except json.JSONDecodeError as exc:
        raise LabelFileError(f"{path}: invalid JSON ({exc})") from exc
    if not isinstance(data, list):
        raise LabelFileError(f"{path}: expected a JSON list")
    return data


def load_label_file(path: Path, kind: str) -> List[Label]:
    """Load one label file. A missing file is an empty list."""
    if kind not in _REQUIRED_KEYS:
        raise ValueError(f"unknown label file kind: {kind}")
    path = Path(path)
    if not path.exists():
        return []
    labels: List[Label] = []
    for position, raw in enumerate(_read_json_list(path)):
        if not isinstance(raw, dict):
            raise LabelFileError(f"{path}[{position}]: expected an object")
        missing = [key for key in _REQUIRED_KEYS[kind] if not raw.get(key)]
        if missing:
            raise LabelFileError(f"{path}[{position}]: missing {', '.join(missing)}")
        checked = ('name',) if kind == 'remove' else _STRING_KEYS
        wrong = [key for key in checked if key in raw and not isinstance(raw[key], str)]
        if wrong:
            raise LabelFileError(f"{path}[{position}]: {', '.join(wrong)} must be a string")
        label = Label.from_dict(raw)
        if kind == 'remove':
            # only the name matters for deletion
            label.color = None
        labels.append(label)
    return labels


def load_label_plan(directory: Path) -> LabelPlan:
    directory = Path(directory)
    return LabelPlan(
        to_update=load_label_file(directory / UPDATE_FILE, 'update'),
        to_create=load_label_file(directory / CREATE_FILE, 'create'),
        to_remove=load_label_file(directory / REMOVE_FILE, 'remove'),
    )


def load_repositories(path: Path) -> List[str]:
    repositories: List[str] = []
    for position, item in enumerate(_read_json_list(Path(path))):
        if not isinstance(item, str) or '/' not in item:
            raise LabelFileError(f"{path}[{position}]: expected 'owner/name', got {item!r}")
        repositories.append(item)
    return repositories


def read_token(environ: Optional[Mapping[str, str]] = None) -> Optional[str]:
    env = os.environ if environ is None else environ
    return env.get(TOKEN_ENV) or None


def api_url(environ: Optional[Mapping[str, str]] = None) -> str:
    env = os.environ if environ is None else environ
    return (env.get(API_URL_ENV) or DEFAULT_API_URL).rstrip('/')


__all__ = [
    'API_URL_ENV',
    'CREATE_FILE',
    'DEFAULT_API_URL',
    'LabelFileError',
    'LabelPlan',
    'REMOVE_FILE',
    'REPOSITORIES_FILE',
    'TOKEN_ENV',
    'UPDATE_FILE',
    'api_url',
    'load_label_file',
    'load_label_plan',
    'load_repositories',
    'read_token',
]
