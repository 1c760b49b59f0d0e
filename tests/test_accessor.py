import hl7kit
import pytest


absent_paths = ('PID', 'PID.5', 'PID.5.1', 'PID.5.1.1', 'OBX[3].5[2].1.1', 'MSH.9')


def test_absent_on_fresh_store(empty):

    for path in absent_paths:
        accessor = empty[path]

        assert accessor.exists() == False
        assert accessor.has_value() == False
        assert accessor.is_null() == False
        assert accessor.value() == ''


def test_put_then_query(empty):

    values = (('PID.5.1', 'Smith'), ('PID.3[2].1', '999'), ('OBX[2].5.1.2', 'x'), ('ZZ1.1', 'anything'))

    for path, value in values:
        accessor = empty[path]
        result = accessor.put(value)

        assert result is empty
        assert accessor.value() == value
        assert accessor.exists() == True
        assert accessor.has_value() == True
        assert accessor.is_null() == False


def test_put_null(empty):

    null = empty.encoding.null
    assert null == '""'

    empty['PID.8'].put(null)

    assert empty['PID.8'].is_null() == True
    assert empty['PID.8'].value() == null
    assert empty['PID.8'].has_value() == False
    assert empty['PID.8'].exists() == True


def test_put_null_shortcut(adt):

    adt['PID.7'].put_null()
    assert adt['PID.7'].is_null()

    adt['PID.5.2'].set_null()
    assert adt['PID.5.2'].is_null()
    assert adt['PID.5'].value() == 'Doe^""^M'
    assert adt['PID.5'].is_null() == False


def test_empty_is_not_null(adt):

    accessor = adt['PID.2']

    assert accessor.exists() == True
    assert accessor.value() == ''
    assert accessor.has_value() == False
    assert accessor.is_null() == False


def test_set_missing_fails_put_succeeds(empty):

    with pytest.raises(hl7kit.NotFound):
        empty['PID.5.1'].set('Smith')

    assert empty['PID.5.1'].exists() == False

    empty['PID.5.1'].put('Smith')
    assert empty['PID.5.1'].value() == 'Smith'

    empty['PID.5.1'].set('Jones')
    assert empty['PID.5.1'].value() == 'Jones'


def test_set_null_missing_fails(empty):

    with pytest.raises(hl7kit.NotFound):
        empty['PID.8'].set_null()


def test_conditional(adt):

    result = adt['PID.5.1'].set_if('Roe', False)
    assert result is adt
    assert adt['PID.5.1'].value() == 'Doe'

    adt['PID.5.1'].set_if('Roe', True)
    assert adt['PID.5.1'].value() == 'Roe'

    adt['PID.18'].put_if('ACCT', False)
    assert adt['PID.18'].exists() == False

    adt['PID.18'].put_if('ACCT', True)
    assert adt['PID.18'].value() == 'ACCT'

    # A false condition never fails, even for a missing path.

    adt['OBX.5'].set_if('x', False)


def test_chaining(empty):

    empty['PID.5.1'].put('Smith')['PID.5.2'].put('John')['PID.7'].put('19800101')

    assert empty['PID.5'].value() == 'Smith^John'
    assert empty['PID.7'].value() == '19800101'


def test_invalid_path_reads_are_total(adt):

    for path in ('', 'pid.5', 'PID.0', 'PID.1.2.3.4', 'not a path'):
        accessor = adt.path(path)

        assert accessor.exists() == False
        assert accessor.has_value() == False
        assert accessor.is_null() == False
        assert accessor.value() == ''
        assert accessor.formatted == ''


def test_invalid_path_writes_raise(adt):

    with pytest.raises(hl7kit.InvalidPath):
        adt['pid.5'].put('x')

    with pytest.raises(hl7kit.InvalidPath):
        adt['pid.5'].set('x')


def test_resolution(adt):

    adt['PID.8'].put_null()

    resolution = adt['PID.8'].resolve()
    assert resolution.state == hl7kit.accessor.NULL
    assert resolution.exists

    resolution = adt['PID.5.1'].resolve()
    assert resolution.state == hl7kit.accessor.PRESENT
    assert resolution.value == 'Doe'

    resolution = adt['PID.30'].resolve()
    assert resolution.state == hl7kit.accessor.ABSENT
    assert resolution.value == ''
    assert resolution.exists == False


def test_formatted(adt):

    assert adt['PID.5'].formatted == 'Doe John M'
    assert adt['PID.3'].formatted == '123456 MRN'
    assert str(adt['PID.5.1']) == 'Doe'

    adt['PID.8'].put_null()
    assert adt['PID.8'].formatted == '<null>'


def test_without_document(adt_text):

    message = hl7kit.Message(adt_text)
    accessor = hl7kit.accessor.PathValue(message, 'PID.5.1')

    assert accessor.put('Roe') is message
    assert message.get('PID.5.1') == 'Roe'


def test_required_arguments():

    with pytest.raises(hl7kit.ArgumentError):
        hl7kit.accessor.PathValue(None, 'PID.5')

    with pytest.raises(hl7kit.ArgumentError):
        hl7kit.accessor.PathValue(hl7kit.Message(), None)


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
