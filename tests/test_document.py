import hl7kit
import pytest

from hl7kit import errors


def test_create():

    document = hl7kit.create()

    assert len(document) == 0
    assert str(document) == ''
    assert document.encoding.field == '|'
    assert document.encoding.characters == '^~\\&'


def test_parse(adt, adt_text):

    assert len(adt) == 3
    assert str(adt) == adt_text
    assert [segment.name for segment in adt.segments()] == ['MSH', 'PID', 'PV1']
    assert len(adt.segments('PID')) == 1


def test_parse_invalid():

    with pytest.raises(hl7kit.ValidationError):
        hl7kit.parse('')

    with pytest.raises(hl7kit.ValidationError):
        hl7kit.parse('PID|1\r')

    document = hl7kit.parse('PID|1\r', validate=False)
    assert document['PID.1'].value() == '1'


def test_try_parse(adt_text):

    result = hl7kit.try_parse(adt_text)

    assert result
    assert result.error is None
    assert result.document['MSH.10'].value() == '12345'


def test_try_parse_failures():

    result = hl7kit.try_parse('')
    assert not result
    assert result.document is None
    assert result.code == errors.BAD_MESSAGE

    result = hl7kit.try_parse('MSH|^~\\&|A\rpid|1\r')
    assert not result
    assert result.code == errors.PARSING_ERROR

    result = hl7kit.try_parse('MSH|^~\\&|A|B|C|D|20200101||ADT^A01||P|2.5\r')
    assert not result
    assert result.code == errors.REQUIRED_FIELD_MISSING
    assert 'control id' in result.error


def test_ack(adt):

    ack = adt.ack()

    assert isinstance(ack, hl7kit.Document)
    assert ack['MSH.3'].value() == 'RECEIVING'
    assert ack['MSH.5'].value() == 'SENDING'
    assert ack['MSH.9'].value() == 'ACK'
    assert ack['MSH.10'].value() == '12345'
    assert ack['MSA.1'].value() == 'AA'
    assert ack['MSA.2'].value() == '12345'
    assert ack['MSA.3'].exists() == False

    nack = adt.nack('AE', 'unknown patient')

    assert nack['MSA.1'].value() == 'AE'
    assert nack['MSA.3'].value() == 'unknown patient'


def test_ack_invalid(empty):

    with pytest.raises(hl7kit.ValidationError):
        empty.ack()


def test_copy(adt, adt_text):

    duplicate = adt.copy()
    duplicate['PID.5.1'].set('Smith')

    assert adt['PID.5.1'].value() == 'Doe'
    assert duplicate['PID.5.1'].value() == 'Smith'
    assert str(adt) == adt_text


def test_workflow():

    document = hl7kit.create()

    document.header().sender('APP', 'FAC').receiver('EHR', 'HOSP') \
            .message_type('ADT^A01').auto_control_id().commit()

    document['PID.3'].put('123456')
    document['PID.5.1'].put('Doe').path('PID.5.2').put('Jane')
    document['PID.8'].put_null()

    text = document.serialize().with_validation().without_trailing_delimiters().to_text()
    parsed = hl7kit.parse(text)

    assert parsed['PID.5'].value() == 'Doe^Jane'
    assert parsed['PID.8'].is_null()
    assert parsed['MSH.10'].value() == document['MSH.10'].value()


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
