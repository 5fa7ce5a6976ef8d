"""Safe-delete gate for labels that may still be attached to open issues.

A label scheduled for removal is flagged when its name is a substring of a
label currently used by an open issue (``bug`` matches ``bug: confirmed``).
Without flags the whole removal list is deleted. With flags the caller is
asked once; a yes deletes the whole removal list, anything else deletes
nothing.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Iterable, List

from gitlabel.console import danger, warn
from gitlabel.models import Label

Confirm = Callable[[str], bool]

YES_ANSWERS = {'y', 'yes'}


class DeleteState(str, Enum):
    NO_CONFLICT = "no-conflict"
    AWAITING_CONFIRMATION = "await-confirmation"
    DELETE_ALL = "delete-all"
    ABORTED = "abort"


@dataclass
class DeleteDecision:
    state: DeleteState
    flagged: List[Label] = field(default_factory=list)
    to_delete: List[Label] = field(default_factory=list)

    @property
    def proceed(self) -> bool:
        return self.state in (DeleteState.NO_CONFLICT, DeleteState.DELETE_ALL)


def find_conflicts(to_remove: Iterable[Label], used: Iterable[Label]) -> List[Label]:
    used_names = [label.name for label in used if label.name]
    flagged: List[Label] = []
    for label in to_remove:
        if label.name and any(label.name in name for name in used_names):
            flagged.append(label)
    return flagged


def prompt_confirm(question: str) -> bool:
    try:
        answer = input(f"{question} [y/N] ")
    except EOFError:
        return False
    return answer.strip().lower() in YES_ANSWERS


def decide_delete(to_remove: List[Label], used: Iterable[Label], confirm: Confirm = prompt_confirm) -> DeleteDecision:
    flagged = find_conflicts(to_remove, used)
    if not flagged:
        return DeleteDecision(state=DeleteState.NO_CONFLICT, to_delete=list(to_remove))

    decision = DeleteDecision(state=DeleteState.AWAITING_CONFIRMATION, flagged=flagged)
    for label in flagged:
        danger(f"Label '{label.name}' looks like it is used by open issues")
    warn("Deleting these labels detaches them from their issues; consider renaming them via labels-to-update.json instead")

    if confirm(f"Delete all {len(to_remove)} labels anyway?"):
        # the whole removal list, not only the unflagged labels
        decision.state = DeleteState.DELETE_ALL
        decision.to_delete = list(to_remove)
    else:
        decision.state = DeleteState.ABORTED
    return decision


__all__ = [
    'Confirm',
    'DeleteDecision',
    'DeleteState',
    'decide_delete',
    'find_conflicts',
    'prompt_confirm',
]
