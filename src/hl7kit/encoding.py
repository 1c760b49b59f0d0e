""" The :class:`Encoding` describes the delimiters used by a message, along
    with the reserved present-but-null value. Escape sequences are not
    interpreted here; values are carried verbatim.
"""

from . import errors


class Encoding:
    """ Delimiter set for a single message. The defaults are the ones every
        HL7 v2 message uses in practice; a parsed message takes its
        delimiters from the MSH segment instead.

        :ivar null: The present-but-null value, distinct from an empty
            string and from the absence of an element.
    """

    segment_delimiters = ('\r\n', '\n\r', '\r', '\n')

    def __init__(self, field='|', component='^', repetition='~', escape='\\', subcomponent='&', segment='\r'):

        self.field = field
        self.component = component
        self.repetition = repetition
        self.escape = escape
        self.subcomponent = subcomponent
        self.segment = segment
        self.null = '""'


    def __eq__(self, other):
        if isinstance(other, Encoding):
            return self.characters == other.characters and \
                    self.field == other.field and \
                    self.segment == other.segment

        return NotImplemented


    def __hash__(self):
        return hash((self.field, self.characters, self.segment))


    def __repr__(self):
        return 'Encoding(%r)' % (self.field + self.characters)


    def copy(self):
        return Encoding(self.field, self.component, self.repetition, self.escape, self.subcomponent, self.segment)


    @property
    def characters(self):
        """ The encoding characters as they appear in MSH-2.
        """

        return self.component + self.repetition + self.escape + self.subcomponent


    @property
    def structural(self):
        """ All structural delimiters below the segment level.
        """

        return (self.field, self.component, self.repetition, self.subcomponent)


    @classmethod
    def from_header(cls, segment, segment_delimiter='\r'):
        """ Derive an :class:`Encoding` from the raw text of an MSH segment.
            The field delimiter is the fourth character; the next four
            characters are the component, repetition, escape, and
            subcomponent delimiters, in that order.
        """

        if len(segment) < 8 or segment[:3] != 'MSH':
            raise errors.ValidationError('MSH segment too short to define delimiters: ' + repr(segment[:8]))

        field = segment[3]
        characters = segment[4:8]

        if field in characters:
            raise errors.ValidationError('field delimiter repeated in encoding characters: ' + repr(characters))

        if len(set(characters)) != 4:
            raise errors.ValidationError('duplicate encoding characters: ' + repr(characters))

        component, repetition, escape, subcomponent = characters
        return cls(field, component, repetition, escape, subcomponent, segment_delimiter)


    @classmethod
    def detect_segment_delimiter(cls, text):
        """ Return the segment delimiter used in *text*. The first match
            from :attr:`segment_delimiters` wins, so that a CR/LF pair is
            not mistaken for two delimiters. A message with only one
            segment, and hence no delimiter at all, gets the standard
            carriage return.
        """

        for delimiter in cls.segment_delimiters:
            if delimiter in text:
                return delimiter

        return '\r'


# end of class Encoding


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
