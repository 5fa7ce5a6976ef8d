from gitlabel.models import Label
from gitlabel.policy import DeleteState, decide_delete, find_conflicts, prompt_confirm


class ScriptedConfirm:
    def __init__(self, answer: bool):
        self.answer = answer
        self.questions = []

    def __call__(self, question: str) -> bool:
        self.questions.append(question)
        return self.answer


def test_find_conflicts_uses_substring_match():
    flagged = find_conflicts([Label(name='bug'), Label(name='docs')], [Label(name='bug: confirmed')])
    assert [label.name for label in flagged] == ['bug']


def test_no_conflict_deletes_without_prompt():
    confirm = ScriptedConfirm(answer=False)
    to_remove = [Label(name='wontfix')]
    decision = decide_delete(to_remove, [Label(name='bug')], confirm)
    assert decision.state is DeleteState.NO_CONFLICT
    assert decision.to_delete == to_remove
    assert confirm.questions == []


def test_conflict_declined_deletes_nothing(capsys):
    confirm = ScriptedConfirm(answer=False)
    decision = decide_delete([Label(name='bug')], [Label(name='bug: confirmed')], confirm)
    assert decision.state is DeleteState.ABORTED
    assert decision.to_delete == []
    assert not decision.proceed
    assert len(confirm.questions) == 1
    assert "'bug'" in capsys.readouterr().err


def test_conflict_confirmed_deletes_whole_list():
    confirm = ScriptedConfirm(answer=True)
    to_remove = [Label(name='bug'), Label(name='wontfix')]
    decision = decide_delete(to_remove, [Label(name='bug: confirmed')], confirm)
    assert decision.state is DeleteState.DELETE_ALL
    assert [label.name for label in decision.flagged] == ['bug']
    assert [label.name for label in decision.to_delete] == ['bug', 'wontfix']
    assert len(confirm.questions) == 1


def test_prompt_confirm_reads_answer(monkeypatch):
    monkeypatch.setattr('builtins.input', lambda prompt: ' Y ')
    assert prompt_confirm('Delete?') is True
    monkeypatch.setattr('builtins.input', lambda prompt: 'n')
    assert prompt_confirm('Delete?') is False


def test_prompt_confirm_treats_eof_as_no(monkeypatch):
    def _eof(prompt):
        raise EOFError

    monkeypatch.setattr('builtins.input', _eof)
    assert prompt_confirm('Delete?') is False
