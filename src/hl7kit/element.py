""" The structural elements of a message: a :class:`Segment` holds an
    ordered list of :class:`Field` instances; a field holds one or more
    repetitions, each repetition holds components, and each component
    holds subcomponents. Subcomponents are plain strings.

    All positional arguments in this module are one-based, matching the
    numbering used in path expressions.
"""

import enum

from . import config
from . import errors


class TrimScope(enum.Flag):
    """ Which trailing delimiters to remove when trimming a message.
    """

    FIELDS = enum.auto()
    REPETITIONS = enum.auto()
    COMPONENTS = enum.auto()
    SUBCOMPONENTS = enum.auto()
    ALL = FIELDS | REPETITIONS | COMPONENTS | SUBCOMPONENTS

    @classmethod
    def coerce(cls, scope=None):
        """ Return a :class:`TrimScope` for *scope*, which may already be a
            :class:`TrimScope`, a name such as 'all' or 'fields', a
            comma-separated string of names, or an iterable of names. If
            *scope* is None the configured default is used.
        """

        if scope is None:
            scope = config.get().trim_scope

        if isinstance(scope, cls):
            return scope

        if isinstance(scope, str):
            names = scope.split(',')
        else:
            try:
                names = list(scope)
            except TypeError:
                raise errors.ArgumentError('invalid trim scope: ' + repr(scope))

        coerced = None

        for name in names:
            if isinstance(name, cls):
                flag = name
            else:
                try:
                    flag = cls[str(name).strip().upper()]
                except KeyError:
                    raise errors.ArgumentError('invalid trim scope: ' + repr(name))

            if coerced is None:
                coerced = flag
            else:
                coerced = coerced | flag

        if coerced is None:
            raise errors.ArgumentError('empty trim scope')

        return coerced


# end of class TrimScope



class Field:
    """ A single field. A *literal* field is never split on delimiters;
        this applies to MSH-1 and MSH-2, which contain the delimiters
        themselves.

        :ivar repetitions: list of repetitions; each repetition is a list of
            components, and each component is a list of subcomponent strings.
    """

    def __init__(self, encoding, value='', literal=False):

        self.encoding = encoding
        self.literal = literal
        self.repetitions = None
        self.value = value


    def __repr__(self):
        return 'Field(%r)' % (self.value)


    @property
    def value(self):
        """ The complete text of the field, including all repetitions.
        """

        repetitions = list()
        for index in range(len(self.repetitions)):
            repetitions.append(self.repetition_value(index + 1))

        return self.encoding.repetition.join(repetitions)


    @value.setter
    def value(self, value):

        if self.literal:
            self.repetitions = [[[value]]]
            return

        repetitions = list()
        for repetition in value.split(self.encoding.repetition):
            repetitions.append(self._split_repetition(repetition))

        self.repetitions = repetitions


    def _split_repetition(self, value):

        components = list()
        for component in value.split(self.encoding.component):
            components.append(component.split(self.encoding.subcomponent))

        return components


    def repetition_value(self, repetition):
        components = list()
        for subcomponents in self.repetitions[repetition - 1]:
            components.append(self.encoding.subcomponent.join(subcomponents))

        return self.encoding.component.join(components)


    def component_value(self, repetition, component):
        subcomponents = self.repetitions[repetition - 1][component - 1]
        return self.encoding.subcomponent.join(subcomponents)


    def subcomponent_value(self, repetition, component, subcomponent):
        return self.repetitions[repetition - 1][component - 1][subcomponent - 1]


    def contains(self, repetition, component=None, subcomponent=None):
        """ Return True if the requested element is present in this field.
        """

        if repetition > len(self.repetitions):
            return False

        if component is None:
            return True

        components = self.repetitions[repetition - 1]
        if component > len(components):
            return False

        if subcomponent is None:
            return True

        return subcomponent <= len(components[component - 1])


    def ensure(self, repetition, component=None, subcomponent=None):
        """ Pad this field with empty elements until the requested element
            exists.
        """

        while len(self.repetitions) < repetition:
            self.repetitions.append([['']])

        if component is None:
            return

        components = self.repetitions[repetition - 1]
        while len(components) < component:
            components.append([''])

        if subcomponent is None:
            return

        subcomponents = components[component - 1]
        while len(subcomponents) < subcomponent:
            subcomponents.append('')


    def set_repetition(self, repetition, value):
        if self.literal:
            self.value = value
        else:
            self.repetitions[repetition - 1] = self._split_repetition(value)


    def set_component(self, repetition, component, value):
        if self.literal:
            self.value = value
        else:
            subcomponents = value.split(self.encoding.subcomponent)
            self.repetitions[repetition - 1][component - 1] = subcomponents


    def set_subcomponent(self, repetition, component, subcomponent, value):
        if self.literal:
            self.value = value
        else:
            self.repetitions[repetition - 1][component - 1][subcomponent - 1] = value


    def trim(self, scope):
        """ Remove trailing empty elements within this field, according to
            the :class:`TrimScope` *scope*. At least one repetition, one
            component, and one subcomponent always remain.
        """

        if self.literal:
            return

        for components in self.repetitions:
            if scope & TrimScope.SUBCOMPONENTS:
                for subcomponents in components:
                    while len(subcomponents) > 1 and subcomponents[-1] == '':
                        subcomponents.pop()

            if scope & TrimScope.COMPONENTS:
                while len(components) > 1 and _empty(components[-1]):
                    components.pop()

        if scope & TrimScope.REPETITIONS:
            while len(self.repetitions) > 1 and _empty_repetition(self.repetitions[-1]):
                self.repetitions.pop()


# end of class Field



def _empty(subcomponents):
    for subcomponent in subcomponents:
        if subcomponent != '':
            return False

    return True



def _empty_repetition(components):
    for subcomponents in components:
        if _empty(subcomponents) == False:
            return False

    return True



class Segment:
    """ A single segment, identified by its three-character *name*. Fields
        are numbered from one; for the MSH segment, field one is the field
        delimiter and field two holds the remaining encoding characters.
    """

    header = 'MSH'

    def __init__(self, name, encoding):

        self.name = name
        self.encoding = encoding
        self.fields = list()

        if name == self.header:
            self.fields.append(Field(encoding, encoding.field, literal=True))
            self.fields.append(Field(encoding, encoding.characters, literal=True))


    def __repr__(self):
        return 'Segment(%r)' % (self.value)


    @classmethod
    def from_text(cls, text, encoding):
        """ Build a :class:`Segment` from its raw *text*, using the
            delimiters in *encoding*.
        """

        name = text[:3]
        segment = cls(name, encoding)

        if name == cls.header:
            # The field delimiter and the encoding characters are already
            # in place; what remains starts after the encoding characters.
            remainder = text[4 + len(encoding.characters):]
            if remainder == '':
                return segment

            if remainder[0] != encoding.field:
                raise errors.ValidationError('malformed MSH segment: ' + repr(text[:12]), errors.PARSING_ERROR)

            values = remainder[1:].split(encoding.field)
        else:
            remainder = text[3:]
            if remainder == '':
                return segment

            if remainder[0] != encoding.field:
                raise errors.ValidationError('invalid segment found: ' + repr(text), errors.PARSING_ERROR)

            values = remainder[1:].split(encoding.field)

        for value in values:
            segment.fields.append(Field(encoding, value))

        return segment


    @property
    def value(self):
        """ The complete text of the segment, without a segment delimiter.
        """

        values = [self.name]

        if self.name == self.header:
            # MSH-1 is the delimiter between the name and MSH-2; it is
            # not repeated as a field value of its own.
            fields = self.fields[1:]
        else:
            fields = self.fields

        for field in fields:
            values.append(field.value)

        return self.encoding.field.join(values)


    @property
    def minimum(self):
        """ The number of fields that trimming must not remove.
        """

        if self.name == self.header:
            return 2
        return 0


    def contains(self, field):
        return field <= len(self.fields)


    def field(self, field):
        return self.fields[field - 1]


    def ensure(self, field):
        """ Pad this segment with empty fields until *field* exists, and
            return that :class:`Field`.
        """

        while len(self.fields) < field:
            self.fields.append(Field(self.encoding))

        return self.fields[field - 1]


    def trim(self, scope):
        """ Remove trailing empty elements according to the
            :class:`TrimScope` *scope*.
        """

        for field in self.fields:
            field.trim(scope)

        if scope & TrimScope.FIELDS:
            fields = self.fields
            while len(fields) > self.minimum and fields[-1].value == '':
                fields.pop()


# end of class Segment


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
