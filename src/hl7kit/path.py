""" Parsing of path expressions. A path identifies a single element of a
    message, from the segment down to the subcomponent::

        PID                 the first PID segment
        OBX[2]              the second OBX segment
        PID.5               all of PID-5, including any repetitions
        PID.3[2]            the second repetition of PID-3
        PID.5.1             first component of PID-5 (first repetition)
        PID.3[2].4.1        first subcomponent of that component

    All indices are one-based, and no greater than 9999.
"""

import collections
import re

from . import errors


segment_pattern = re.compile(r'^([A-Z][A-Z][A-Z0-9])(?:\[(\d+)\])?$')
field_pattern = re.compile(r'^(\d+)(?:\[(\d+)\])?$')
index_pattern = re.compile(r'^(\d+)$')

# Largest index accepted at any level.

maximum = 9999


class Location(collections.namedtuple('Location', ('segment', 'segment_repetition', 'field', 'field_repetition', 'component', 'subcomponent'))):
    """ A parsed path. Unspecified levels are None; the *field_repetition*
        is None when the path addresses a field as a whole.
    """

    __slots__ = ()

    @property
    def depth(self):
        """ One of 'segment', 'field', 'component', or 'subcomponent'.
        """

        if self.field is None:
            return 'segment'
        if self.component is None:
            return 'field'
        if self.subcomponent is None:
            return 'component'

        return 'subcomponent'


    @property
    def repetition(self):
        """ The field repetition to use when descending below the field
            level; the first repetition unless one was named explicitly.
        """

        if self.field_repetition is None:
            return 1
        return self.field_repetition


    def __str__(self):

        result = self.segment
        if self.segment_repetition > 1:
            result += '[%d]' % (self.segment_repetition)

        if self.field is not None:
            result += '.%d' % (self.field)
            if self.field_repetition is not None:
                result += '[%d]' % (self.field_repetition)

        if self.component is not None:
            result += '.%d' % (self.component)

        if self.subcomponent is not None:
            result += '.%d' % (self.subcomponent)

        return result


# end of class Location



def _positive(value, path, what):

    value = int(value)
    if value < 1:
        raise errors.InvalidPath(path, what + ' index must be one or greater')

    if value > maximum:
        raise errors.InvalidPath(path, what + ' index cannot exceed %d' % (maximum))

    return value



def parse(path):
    """ Parse the string *path* and return a :class:`Location`. An
        :class:`hl7kit.errors.InvalidPath` exception is raised if the
        expression is malformed.
    """

    if path is None or path == '':
        raise errors.InvalidPath(path, 'empty path')

    if isinstance(path, str):
        pass
    else:
        raise errors.InvalidPath(path, 'path must be a string')

    parts = path.split('.')

    if len(parts) > 4:
        raise errors.InvalidPath(path, 'too many levels')

    match = segment_pattern.match(parts[0])
    if match is None:
        raise errors.InvalidPath(path, 'bad segment name')

    segment = match.group(1)
    segment_repetition = 1
    field = None
    field_repetition = None
    component = None
    subcomponent = None

    if match.group(2) is not None:
        segment_repetition = _positive(match.group(2), path, 'segment repetition')

    if len(parts) > 1:
        match = field_pattern.match(parts[1])
        if match is None:
            raise errors.InvalidPath(path, 'bad field index')

        field = _positive(match.group(1), path, 'field')

        if match.group(2) is not None:
            field_repetition = _positive(match.group(2), path, 'field repetition')

    if len(parts) > 2:
        match = index_pattern.match(parts[2])
        if match is None:
            raise errors.InvalidPath(path, 'bad component index')

        component = _positive(match.group(1), path, 'component')

    if len(parts) > 3:
        match = index_pattern.match(parts[3])
        if match is None:
            raise errors.InvalidPath(path, 'bad subcomponent index')

        subcomponent = _positive(match.group(1), path, 'subcomponent')

    return Location(segment, segment_repetition, field, field_repetition, component, subcomponent)


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
