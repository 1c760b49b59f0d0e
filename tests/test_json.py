import pytest

from hl7kit import json


def test_library():

    assert json.library in ('msgspec', 'orjson', 'json')


def test_loads_bytes():

    assert json.loads(b'{"version": "2.5"}') == {'version': '2.5'}


def test_load(tmp_path):

    path = tmp_path / 'good.json'
    path.write_bytes(b'{"a": [1, 2], "b": "c"}')

    assert json.load(str(path)) == {'a': [1, 2], 'b': 'c'}


def test_load_invalid(tmp_path):

    path = tmp_path / 'bad.json'
    path.write_bytes(b'{"a": ')

    with pytest.raises(ValueError):
        json.load(str(path))


def test_load_missing(tmp_path):

    with pytest.raises(OSError):
        json.load(str(tmp_path / 'missing.json'))


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
