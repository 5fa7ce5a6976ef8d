"""Usage snapshot of labels attached to open issues, and its backup file."""
from __future__ import annotations

import json
import re
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Dict, List, Optional

from gitlabel.client import LabelClient
from gitlabel.console import info
from gitlabel.models import Label

BACKUP_PREFIX = 'used-labels-'
BACKUP_SUFFIX = '.json.bak'


@dataclass
class UsageRecord:
    repository: str
    issue: int
    labels: List[Label] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            'repository': self.repository,
            'issue': self.issue,
            'labels': [label.to_dict() for label in self.labels],
        }


@dataclass
class UsageSnapshot:
    repository: str
    taken_at: datetime
    records: List[UsageRecord] = field(default_factory=list)


def build_usage_snapshot(client: LabelClient, repository: str) -> UsageSnapshot:
    """Fetch the labels of every open issue of ``repository``.

    Per-issue fetches run concurrently and records are kept in completion
    order. A failed issue listing yields an empty snapshot and a failed
    per-issue fetch drops that issue's record.
    """
    snapshot = UsageSnapshot(repository=repository, taken_at=datetime.now(tz=timezone.utc))
    issues = client.list_issues(repository) or []
    numbers = [issue['number'] for issue in issues if isinstance(issue, dict) and 'number' in issue]
    if not numbers:
        return snapshot

    with ThreadPoolExecutor(max_workers=len(numbers)) as pool:
        futures = {pool.submit(client.list_issue_labels, repository, number): number for number in numbers}
        for future in as_completed(futures):
            labels = future.result()
            if labels is None:
                continue
            snapshot.records.append(UsageRecord(repository=repository, issue=futures[future], labels=labels))
    return snapshot


def used_labels(snapshot: UsageSnapshot) -> List[Label]:
    """Flatten the snapshot into one label per distinct name."""
    seen: Dict[str, Label] = {}
    for record in snapshot.records:
        for label in record.labels:
            if label.name and label.name not in seen:
                seen[label.name] = label
    return list(seen.values())


def backup_path(snapshot: UsageSnapshot, backup_dir: Path) -> Path:
    slug = re.sub(r'[^A-Za-z0-9._-]+', '_', snapshot.repository)
    stamp = snapshot.taken_at.strftime('%Y%m%dT%H%M%S%fZ')
    return Path(backup_dir) / f"{BACKUP_PREFIX}{slug}-{stamp}{BACKUP_SUFFIX}"


def write_backup(snapshot: UsageSnapshot, backup_dir: Optional[Path] = None) -> Path:
    backup_dir = Path(backup_dir) if backup_dir is not None else Path.cwd()
    backup_dir.mkdir(parents=True, exist_ok=True)
    path = backup_path(snapshot, backup_dir)
    payload = [record.to_dict() for record in snapshot.records]
    path.write_text(json.dumps(payload, ensure_ascii=False, indent=2), encoding='utf-8')
    info(f"Labels used by {len(snapshot.records)} open issues of {snapshot.repository} saved to '{path}'")
    return path


__all__ = [
    'BACKUP_PREFIX',
    'BACKUP_SUFFIX',
    'UsageRecord',
    'UsageSnapshot',
    'backup_path',
    'build_usage_snapshot',
    'used_labels',
    'write_backup',
]
