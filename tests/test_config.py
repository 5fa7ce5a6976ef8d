import json
from pathlib import Path

import pytest

from gitlabel.config import (
    LabelFileError,
    api_url,
    load_label_file,
    load_label_plan,
    load_repositories,
    read_token,
)


def _write(path: Path, data) -> Path:
    path.write_text(json.dumps(data), encoding='utf-8')
    return path


def test_missing_label_files_are_empty(tmp_path: Path):
    plan = load_label_plan(tmp_path)
    assert plan.to_create == [] and plan.to_update == [] and plan.to_remove == []
    assert plan.is_empty()


def test_load_label_plan_reads_all_three_files(tmp_path: Path):
    _write(tmp_path / 'labels-to-create.json', [{'name': 'urgent', 'color': '#ff0000'}])
    _write(tmp_path / 'labels-to-update.json', [{'currentName': 'bug', 'name': 'type: bug', 'color': '#ee0701'}])
    _write(tmp_path / 'labels-to-remove.json', [{'name': 'wontfix', 'color': '#ffffff'}])

    plan = load_label_plan(tmp_path)

    assert plan.to_create[0].name == 'urgent'
    assert plan.to_update[0].current_name == 'bug'
    assert plan.to_remove[0].name == 'wontfix'
    assert plan.to_remove[0].color is None


def test_load_label_file_rejects_missing_required_key(tmp_path: Path):
    path = _write(tmp_path / 'labels-to-create.json', [{'name': 'no-color'}])
    with pytest.raises(LabelFileError):
        load_label_file(path, 'create')


def test_load_label_file_rejects_non_list(tmp_path: Path):
    path = _write(tmp_path / 'labels-to-remove.json', {'name': 'bug'})
    with pytest.raises(LabelFileError):
        load_label_file(path, 'remove')


def test_load_label_file_rejects_invalid_json(tmp_path: Path):
    path = tmp_path / 'labels-to-remove.json'
    path.write_text('[{"name": ', encoding='utf-8')
    with pytest.raises(LabelFileError):
        load_label_file(path, 'remove')


def test_load_repositories(tmp_path: Path):
    path = _write(tmp_path / 'repositories.json', ['acme/one', 'acme/two'])
    assert load_repositories(path) == ['acme/one', 'acme/two']


def test_load_repositories_rejects_bad_entry(tmp_path: Path):
    path = _write(tmp_path / 'repositories.json', ['acme'])
    with pytest.raises(LabelFileError):
        load_repositories(path)


def test_environment_helpers():
    assert read_token({}) is None
    assert read_token({'GITHUB_TOKEN': 'abc'}) == 'abc'
    assert api_url({}) == 'https://api.github.com'
    assert api_url({'GITHUB_API_URL': 'https://ghe.example.test/api/v3/'}) == 'https://ghe.example.test/api/v3'


def test_load_label_file_rejects_non_string_color(tmp_path: Path):
    path = _write(tmp_path / 'labels-to-create.json', [{'name': 'a', 'color': 123}])
    with pytest.raises(LabelFileError, match='color must be a string'):
        load_label_file(path, 'create')


def test_load_label_file_rejects_non_string_name(tmp_path: Path):
    path = _write(tmp_path / 'labels-to-update.json', [{'currentName': 'bug', 'name': ['x'], 'color': 'fff'}])
    with pytest.raises(LabelFileError, match='name must be a string'):
        load_label_file(path, 'update')


def test_load_label_file_ignores_remove_color_type(tmp_path: Path):
    path = _write(tmp_path / 'labels-to-remove.json', [{'name': 'wontfix', 'color': 0}])
    assert load_label_file(path, 'remove')[0].name == 'wontfix'
