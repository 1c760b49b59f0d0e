""" The :class:`Message` is the mutable store behind every higher-level
    operation in :mod:`hl7kit`: it parses and serializes message text, and
    resolves path expressions to individual elements for reading and
    writing.
"""

import datetime
import logging
import re

from . import errors
from . import path as pathmodule
from .element import Segment, TrimScope
from .encoding import Encoding


logger = logging.getLogger(__name__)

segment_name = re.compile(r'^[A-Z][A-Z][A-Z0-9]$')


class Message:
    """ A message is an ordered list of :class:`hl7kit.element.Segment`
        instances sharing a single :class:`hl7kit.encoding.Encoding`. If
        *text* is provided it is parsed immediately; see :func:`parse`.
    """

    def __init__(self, text=None, validate=True):

        self.encoding = Encoding()
        self._segments = list()

        if text is not None:
            self.parse(text, validate)


    def __len__(self):
        return len(self._segments)


    def __repr__(self):
        return 'message.Message: ' + repr(self.serialize())


    def __str__(self):
        return self.serialize()


    def parse(self, text, validate=True):
        """ Replace the contents of this message with the parsed *text*. The
            delimiters are taken from the MSH segment, if there is one. If
            *validate* is True the parsed result must also pass
            :func:`validate`. A :class:`hl7kit.errors.ValidationError` is
            raised if the text cannot be parsed.
        """

        if text is None or text.strip() == '':
            raise errors.ValidationError('no message found')

        delimiter = Encoding.detect_segment_delimiter(text)
        lines = list()

        for line in text.split(delimiter):
            if line.strip() == '':
                continue
            lines.append(line)

        if lines[0].startswith(Segment.header):
            encoding = Encoding.from_header(lines[0], delimiter)
        elif validate:
            raise errors.ValidationError('MSH segment not found at the beginning of the message')
        else:
            encoding = Encoding(segment=delimiter)

        segments = list()

        for line in lines:
            name = line[:3]
            if segment_name.match(name) is None:
                raise errors.ValidationError('invalid segment name found: ' + repr(line), errors.PARSING_ERROR)

            segments.append(Segment.from_text(line, encoding))

        # Only replace the existing contents once the whole message has been
        # parsed successfully.

        self.encoding = encoding
        self._segments = segments

        logger.debug('parsed %d segments', len(segments))

        if validate:
            self.validate()

        return self


    def validate(self):
        """ Check the structural validity of this message, raising a
            :class:`hl7kit.errors.ValidationError` on the first problem
            found. The message must begin with an MSH segment that carries
            a message type, control id, processing id, and version.
        """

        if len(self._segments) == 0:
            raise errors.ValidationError('no segments in message')

        header = self._segments[0]

        if header.name != Segment.header:
            raise errors.ValidationError('MSH segment not found at the beginning of the message')

        for segment in self._segments:
            if segment_name.match(segment.name) is None:
                raise errors.ValidationError('invalid segment name found: ' + repr(segment.name))

        if len(header.fields) < 12:
            raise errors.ValidationError("MSH segment doesn't contain all the required fields")

        required = (
            (9, 'MSH.9 - message type'),
            (10, 'MSH.10 - message control id'),
            (11, 'MSH.11 - processing id'),
            (12, 'MSH.12 - version'))

        for field, description in required:
            if header.field(field).value == '':
                raise errors.ValidationError(description + ' not found', errors.REQUIRED_FIELD_MISSING)

        return True


    def serialize(self, validate=False):
        """ Return the text of this message. Each segment is terminated by
            the segment delimiter. If *validate* is True the message is
            checked with :func:`validate` before it is serialized.
        """

        if validate:
            self.validate()

        delimiter = self.encoding.segment
        text = list()

        for segment in self._segments:
            text.append(segment.value)
            text.append(delimiter)

        return ''.join(text)


    def remove_trailing_delimiters(self, scope=None):
        """ Remove trailing empty elements from every segment, according to
            *scope*; see :func:`hl7kit.element.TrimScope.coerce` for the
            accepted values. The message is modified in place.
        """

        scope = TrimScope.coerce(scope)

        for segment in self._segments:
            segment.trim(scope)

        logger.debug('removed trailing delimiters, scope %s', scope)


    def segments(self, name=None):
        """ Return a list of segments in this message, optionally restricted
            to those with the given *name*.
        """

        if name is None:
            return list(self._segments)

        matches = list()
        for segment in self._segments:
            if segment.name == name:
                matches.append(segment)

        return matches


    def add_segment(self, name):
        """ Append a new, empty segment called *name* and return it. A new
            MSH segment is always placed at the start of the message.
        """

        if name is None or segment_name.match(name) is None:
            raise errors.ArgumentError('invalid segment name: ' + repr(name))

        segment = Segment(name, self.encoding)

        if name == Segment.header:
            self._segments.insert(0, segment)
        else:
            self._segments.append(segment)

        return segment


    def remove_segment(self, name, index=1):
        """ Remove the *index*-th segment called *name*. Returns True if a
            segment was removed, False if there was no such segment.
        """

        matches = self.segments(name)

        if index < 1 or index > len(matches):
            return False

        self._segments.remove(matches[index - 1])
        return True


    def _find(self, location):
        """ Return the segment identified by *location*, or None.
        """

        matches = self.segments(location.segment)

        if location.segment_repetition > len(matches):
            return None

        return matches[location.segment_repetition - 1]


    def lookup(self, path):
        """ Return the value at *path*, or None if the path does not
            resolve. A malformed *path* raises
            :class:`hl7kit.errors.InvalidPath`.
        """

        location = pathmodule.parse(path)
        segment = self._find(location)

        if segment is None:
            return None

        depth = location.depth

        if depth == 'segment':
            return segment.value

        if segment.contains(location.field):
            field = segment.field(location.field)
        else:
            return None

        if depth == 'field' and location.field_repetition is None:
            return field.value

        repetition = location.repetition
        component = location.component
        subcomponent = location.subcomponent

        if field.contains(repetition, component, subcomponent):
            pass
        else:
            return None

        if depth == 'field':
            return field.repetition_value(repetition)

        if depth == 'component':
            return field.component_value(repetition, component)

        return field.subcomponent_value(repetition, component, subcomponent)


    def get(self, path):
        """ Return the value at *path*. A :class:`hl7kit.errors.NotFound`
            exception is raised if the path does not resolve.
        """

        value = self.lookup(path)

        if value is None:
            raise errors.NotFound(path)

        return value


    def value_exists(self, path):
        """ Return True if *path* resolves to an element, regardless of its
            value.
        """

        return self.lookup(path) is not None


    def set(self, path, value):
        """ Overwrite the existing element at *path* with *value*. A
            :class:`hl7kit.errors.NotFound` exception is raised if the
            element does not already exist.
        """

        location = pathmodule.parse(path)
        self._check(location, value)

        if self.lookup(path) is None:
            raise errors.NotFound(path, 'cannot set a value for a path that does not exist: ' + path)

        self._assign(location, value, create=False)


    def put(self, path, value):
        """ Assign *value* to the element at *path*, creating the element
            and any missing structure above it as needed.
        """

        location = pathmodule.parse(path)
        self._check(location, value)
        self._assign(location, value, create=True)


    def _check(self, location, value):

        if isinstance(value, str):
            pass
        else:
            raise errors.ArgumentError('value must be a string, not ' + type(value).__name__)

        depth = location.depth

        if depth == 'segment':
            raise errors.ArgumentError('cannot assign a value to a whole segment: ' + str(location))

        if location.segment == Segment.header and location.field <= 2:
            raise errors.ArgumentError('the delimiters in MSH.1 and MSH.2 cannot be assigned')

        encoding = self.encoding
        forbidden = ['\r', '\n', encoding.field]

        if depth != 'field' or location.field_repetition is not None:
            forbidden.append(encoding.repetition)

        if depth in ('component', 'subcomponent'):
            forbidden.append(encoding.component)

        if depth == 'subcomponent':
            forbidden.append(encoding.subcomponent)

        for character in forbidden:
            if character in value:
                raise errors.ArgumentError('value for %s cannot contain %r' % (location, character))


    def _assign(self, location, value, create):

        segment = self._find(location)

        if segment is None:
            # Only reachable when creating; set() has already confirmed the
            # path exists.
            matches = self.segments(location.segment)
            while len(matches) < location.segment_repetition:
                matches.append(self.add_segment(location.segment))

            segment = matches[-1]

        field = segment.ensure(location.field)
        depth = location.depth

        if depth == 'field' and location.field_repetition is None:
            field.value = value
            return

        repetition = location.repetition
        component = location.component
        subcomponent = location.subcomponent

        if create:
            field.ensure(repetition, component, subcomponent)

        if depth == 'field':
            field.set_repetition(repetition, value)
        elif depth == 'component':
            field.set_component(repetition, component, value)
        else:
            field.set_subcomponent(repetition, component, subcomponent, value)


    def insert_header(self, sending_application, sending_facility, receiving_application, receiving_facility, security, message_type, control_id, processing_id, version):
        """ Build a complete MSH segment from the provided values and make
            it the first segment of this message, replacing any MSH segment
            already present. MSH-7 is set to the current local time. The
            new segment is returned.
        """

        if security is None:
            security = ''

        encoding = self.encoding

        values = (
            'MSH' + encoding.field + encoding.characters,
            sending_application,
            sending_facility,
            receiving_application,
            receiving_facility,
            timestamp(),
            security,
            message_type,
            control_id,
            processing_id,
            version)

        for value in values[1:]:
            for character in ('\r', '\n', encoding.field):
                if character in value:
                    raise errors.ArgumentError('header value cannot contain %r: %r' % (character, value))

        header = Segment.from_text(encoding.field.join(values), encoding)

        segments = [header]
        for segment in self._segments:
            if segment.name != Segment.header:
                segments.append(segment)

        self._segments = segments

        logger.debug('inserted header %s', control_id)
        return header


    def ack(self, code='AA', text=None):
        """ Return a new :class:`Message` acknowledging this one. The
            sending and receiving parties are swapped, and the MSA segment
            carries the acknowledgement *code* and this message's control
            id. An optional *text* is included as MSA-3; this is how a
            negative acknowledgement describes the error.
        """

        try:
            self.validate()
        except errors.ValidationError as e:
            raise errors.ValidationError('cannot acknowledge an invalid message: ' + str(e))

        header = self._segments[0]
        control_id = header.field(10).value

        response = Message()
        response.encoding = self.encoding.copy()

        response.insert_header(header.field(5).value,
                               header.field(6).value,
                               header.field(3).value,
                               header.field(4).value,
                               None,
                               'ACK',
                               control_id,
                               header.field(11).value,
                               header.field(12).value)

        response.put('MSA.1', code)
        response.put('MSA.2', control_id)

        if text:
            response.put('MSA.3', text)

        return response


    def nack(self, code, text):
        """ Return a negative acknowledgement for this message; see
            :func:`ack`.
        """

        return self.ack(code, text)


    def copy(self):
        """ Return an independent copy of this message.
        """

        duplicate = Message()
        duplicate.encoding = self.encoding.copy()

        for segment in self._segments:
            duplicate._segments.append(Segment.from_text(segment.value, duplicate.encoding))

        return duplicate


# end of class Message



def timestamp(now=None):
    """ Format *now*, or the current local time, the way MSH-7 expects:
        YYYYMMDDHHMMSS followed by four digits of fractional seconds.
    """

    if now is None:
        now = datetime.datetime.now()

    return now.strftime('%Y%m%d%H%M%S') + '.%04d' % (now.microsecond // 100)



def parse(text, validate=True):
    """ Parse *text* and return a new :class:`Message`.
    """

    return Message(text, validate)


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
