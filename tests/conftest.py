import hl7kit
import pytest


ADT = 'MSH|^~\\&|SENDING|FACILITY|RECEIVING|FACILITY|20200101120000||ADT^A01|12345|P|2.5\r' \
      'PID|1||123456^^^MRN||Doe^John^M||19800101|M\r' \
      'PV1|1|I|ICU^101^A\r'


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """ Every test gets its own, empty configuration directory, so that
        a defaults.json in the user's home directory cannot leak in.
    """

    monkeypatch.setenv('HL7KIT_HOME', str(tmp_path))
    hl7kit.config.clear()

    yield tmp_path

    hl7kit.config.clear()


@pytest.fixture
def adt_text():
    return ADT


@pytest.fixture
def adt():
    return hl7kit.parse(ADT)


@pytest.fixture
def empty():
    return hl7kit.create()


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
