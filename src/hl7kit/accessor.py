""" Read and write access to a single element of a message, addressed by
    a path expression. See :mod:`hl7kit.path` for the path syntax.
"""

import collections
import re

from . import errors


ABSENT = 'absent'
NULL = 'null'
PRESENT = 'present'


class Resolution(collections.namedtuple('Resolution', ('state', 'value'))):
    """ The outcome of resolving a path: the *state* is one of
        :data:`ABSENT`, :data:`NULL`, or :data:`PRESENT`. The *value* is the
        empty string for an absent element, and the present-but-null value
        for a null element.
    """

    __slots__ = ()

    @property
    def exists(self):
        return self.state != ABSENT


# end of class Resolution



class PathValue:
    """ A :class:`PathValue` binds a *path* to a
        :class:`hl7kit.message.Message`. It holds no state of its own: every
        query and assignment goes directly to the message. The read-side
        queries never raise an exception; any failure to resolve the path
        is reported as an absent element.

        Assignments return the *document* that created this instance, so
        that calls can be chained; if there is no *document*, the message
        itself is returned.
    """

    def __init__(self, message, path, document=None):

        if message is None:
            raise errors.ArgumentError('a message is required')

        if path is None:
            raise errors.ArgumentError('a path is required')

        self.message = message
        self.path = path
        self.document = document


    def __repr__(self):
        return 'PathValue(%r)' % (self.path)


    def __str__(self):
        return self.formatted


    @property
    def continuation(self):
        if self.document is None:
            return self.message
        return self.document


    def resolve(self):
        """ Return the :class:`Resolution` of this path against the
            current contents of the message.
        """

        try:
            value = self.message.lookup(self.path)
        except errors.InvalidPath:
            value = None

        if value is None:
            return Resolution(ABSENT, '')

        if value == self.message.encoding.null:
            return Resolution(NULL, value)

        return Resolution(PRESENT, value)


    def value(self):
        """ Return the value of this element. The empty string is returned
            if the element does not exist; the present-but-null value is
            returned as-is.
        """

        return self.resolve().value


    def exists(self):
        """ Return True if the element is present, regardless of its value.
        """

        return self.resolve().exists


    def has_value(self):
        """ Return True if the element is present and its value is neither
            empty nor null.
        """

        resolution = self.resolve()
        return resolution.state == PRESENT and resolution.value != ''


    def is_null(self):
        """ Return True if the element is present and holds the
            present-but-null value. An absent element is never null.
        """

        resolution = self.resolve()

        if resolution.exists:
            return resolution.state == NULL

        return False


    @property
    def formatted(self):
        """ A human-readable rendering of the value: runs of structural
            delimiters become a single space, and a null value is shown
            as ``<null>``.
        """

        value = self.value()

        if value == '':
            return ''

        encoding = self.message.encoding
        delimiters = '[' + re.escape(''.join(encoding.structural)) + ']+'

        formatted = re.sub(delimiters, ' ', value)
        formatted = formatted.replace(encoding.null, '<null>')

        return formatted.strip()


    def set(self, value):
        """ Overwrite the existing element with *value*. Raises
            :class:`hl7kit.errors.NotFound` if the element does not exist.
        """

        self.message.set(self.path, value)
        return self.continuation


    def put(self, value):
        """ Assign *value* to the element, creating it and any missing
            structure above it.
        """

        self.message.put(self.path, value)
        return self.continuation


    def set_if(self, value, condition):
        if condition:
            return self.set(value)
        return self.continuation


    def put_if(self, value, condition):
        if condition:
            return self.put(value)
        return self.continuation


    def set_null(self):
        return self.set(self.message.encoding.null)


    def put_null(self):
        return self.put(self.message.encoding.null)


# end of class PathValue


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
