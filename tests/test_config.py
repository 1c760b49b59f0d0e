import logging
import os

import hl7kit
import pytest

from hl7kit import config


def test_builtin_defaults():

    defaults = config.get()

    assert defaults == config.builtin
    assert defaults.processing_id == 'P'
    assert defaults.version == '2.5'
    assert defaults.encoding == 'utf-8'
    assert defaults.trim_scope == 'all'


def test_cached():

    assert config.get() is config.get()


def test_directory(isolated_config):

    assert config.directory() == str(isolated_config)


def test_home_fallback(monkeypatch, tmp_path):

    monkeypatch.delenv('HL7KIT_HOME')
    monkeypatch.setenv('HOME', str(tmp_path))
    config.clear()

    assert config.directory() == os.path.join(str(tmp_path), '.hl7kit')


def test_no_home(monkeypatch):

    monkeypatch.delenv('HL7KIT_HOME')
    monkeypatch.delenv('HOME', raising=False)
    config.clear()

    assert config.directory() is None
    assert config.get() == config.builtin


def test_relative_directory():

    with pytest.raises(ValueError):
        config.directory('relative/path')


def test_explicit_directory(tmp_path):

    other = tmp_path / 'other'
    other.mkdir()
    (other / 'defaults.json').write_text('{"version": "2.6"}')

    assert config.directory(str(other)) == str(other)
    assert config.get().version == '2.6'


def test_overrides(isolated_config):

    path = isolated_config / config.filename
    path.write_text('{"version": 2.8, "encoding": "latin-1"}')
    config.clear()

    defaults = config.get()

    assert defaults.version == '2.8'
    assert defaults.encoding == 'latin-1'
    assert defaults.processing_id == 'P'


def test_unknown_key(isolated_config, caplog):

    path = isolated_config / config.filename
    path.write_text('{"colour": "blue"}')
    config.clear()

    with caplog.at_level(logging.WARNING, logger='hl7kit.config'):
        defaults = config.get()

    assert defaults == config.builtin
    assert 'colour' in caplog.text


def test_invalid_files(isolated_config, caplog):

    path = isolated_config / config.filename

    for contents in ('{not json', '[1, 2, 3]'):
        path.write_text(contents)
        config.clear()

        with caplog.at_level(logging.WARNING, logger='hl7kit.config'):
            assert config.get() == config.builtin

        assert 'ignoring configuration file' in caplog.text
        caplog.clear()


def test_defaults_reach_serializer(isolated_config, adt):

    path = isolated_config / config.filename
    path.write_text('{"encoding": "latin-1", "trim_scope": "fields"}')
    config.clear()

    adt['PID.5.1'].set('Müller')
    adt['PID.3.6'].put('')

    serializer = adt.serialize()
    assert serializer.encoding == 'latin-1'
    assert b'M\xfcller' in serializer.to_bytes()

    # Only trailing fields are trimmed; the trailing components remain.

    adt['PID.20'].put('')
    text = serializer.without_trailing_delimiters().to_text()
    assert 'PID|1||123456^^^MRN^^||Müller^John^M||19800101|M\r' in text


def test_override():

    defaults = config.builtin.override({'processing_id': 'T'})

    assert defaults.processing_id == 'T'
    assert defaults.version == config.builtin.version
    assert config.builtin.processing_id == 'P'


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
