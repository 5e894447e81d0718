"""
Tests for the command line build scorer.
"""

import json
import pytest
from score_build import load_products, score_file
from tests import TEST_RULES_PATH, cpu_record


def test_load_plain_list(tmp_path):
    path = tmp_path / 'build.json'
    path.write_text(json.dumps([cpu_record(cores=8)]))

    assert load_products(str(path)) == [cpu_record(cores=8)]


def test_load_components_document(tmp_path):
    path = tmp_path / 'build.json'
    path.write_text(json.dumps({'components': {'cpu': cpu_record(cores=8), 'gpu': None}}))

    assert load_products(str(path)) == [cpu_record(cores=8)]


def test_score_file(tmp_path):
    path = tmp_path / 'build.json'
    path.write_text(json.dumps({'products': [cpu_record(cores=8)]}))

    result = score_file(str(path), rules_path=TEST_RULES_PATH)

    assert result['totalScore'] == 500
    assert result['notes'] == []


def test_score_file_rejects_empty_build(tmp_path):
    path = tmp_path / 'build.json'
    path.write_text('[]')

    with pytest.raises(ValueError):
        score_file(str(path))


def test_load_rejects_scalar(tmp_path):
    path = tmp_path / 'build.json'
    path.write_text('42')

    with pytest.raises(ValueError):
        load_products(str(path))


def test_load_rejects_components_list(tmp_path):
    path = tmp_path / 'build.json'
    path.write_text(json.dumps({'components': [cpu_record(cores=8)]}))

    with pytest.raises(ValueError):
        load_products(str(path))
