"""Per-repository label sync: backup, then update, create and delete phases."""
from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, List, Optional

from gitlabel.backup import build_usage_snapshot, used_labels, write_backup
from gitlabel.client import LabelClient
from gitlabel.config import LabelPlan
from gitlabel.console import info
from gitlabel.models import Label
from gitlabel.policy import Confirm, DeleteDecision, decide_delete, prompt_confirm


@dataclass
class SyncOptions:
    backup_dir: Optional[Path] = None
    confirm: Confirm = prompt_confirm


@dataclass
class PhaseResult:
    name: str
    attempted: int = 0
    acknowledged: int = 0


@dataclass
class RepositoryReport:
    repository: str
    backup_path: Optional[Path] = None
    phases: List[PhaseResult] = field(default_factory=list)
    delete_decision: Optional[DeleteDecision] = None


def run_phase(name: str, labels: List[Label], call: Callable[[Label], Any]) -> PhaseResult:
    """Issue one call per label concurrently and wait for every one of them."""
    result = PhaseResult(name=name, attempted=len(labels))
    if not labels:
        return result
    with ThreadPoolExecutor(max_workers=len(labels)) as pool:
        futures = [pool.submit(call, label) for label in labels]
        result.acknowledged = sum(1 for future in futures if future.result() is not None)
    return result


def sync_repository(client: LabelClient, repository: str, plan: LabelPlan, options: SyncOptions) -> RepositoryReport:
    report = RepositoryReport(repository=repository)

    snapshot = build_usage_snapshot(client, repository)
    report.backup_path = write_backup(snapshot, options.backup_dir)

    updated = run_phase('update', plan.to_update, lambda label: client.update_label(repository, label))
    info(f"Updated {updated.attempted} labels")
    report.phases.append(updated)

    created = run_phase('create', plan.to_create, lambda label: client.create_label(repository, label))
    info(f"Created {created.attempted} labels")
    report.phases.append(created)

    decision = decide_delete(plan.to_remove, used_labels(snapshot), options.confirm)
    report.delete_decision = decision
    if decision.proceed:
        removed = run_phase('delete', decision.to_delete, lambda label: client.delete_label(repository, label.name))
        info(f"Removed {removed.attempted} labels")
    else:
        removed = PhaseResult(name='delete')
        info(f"Skipped removal of {len(plan.to_remove)} labels in {repository}")
    report.phases.append(removed)
    return report


def sync_repositories(client: LabelClient, repositories: List[str], plan: LabelPlan, options: Optional[SyncOptions] = None) -> List[RepositoryReport]:
    options = options or SyncOptions()
    reports: List[RepositoryReport] = []
    for repository in repositories:
        info(f"Syncing labels of {repository}")
        reports.append(sync_repository(client, repository, plan, options))
    return reports


__all__ = [
    'PhaseResult',
    'RepositoryReport',
    'SyncOptions',
    'run_phase',
    'sync_repositories',
    'sync_repository',
]
