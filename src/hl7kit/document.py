""" The :class:`Document` is the principal entry point for working with a
    message. It owns a single :class:`hl7kit.message.Message` and hands out
    the short-lived objects that read, modify, and serialize it::

        document = hl7kit.create()
        document.header().sender('APP', 'FAC').receiver('EHR', 'HOSP') \\
                .message_type('ADT^A01').auto_control_id().commit()
        document['PID.5.1'].put('Smith')
        text = document.serialize().without_trailing_delimiters().to_text()
"""

import collections

from . import errors
from .accessor import PathValue
from .header import HeaderBuilder
from .message import Message
from .serialize import Serializer


class Document:
    """ Wrap *message*, or a new, empty :class:`hl7kit.message.Message`.
        The objects returned by :func:`path`, :func:`header`, and
        :func:`serialize` all operate on this same message, and must not
        outlive it.
    """

    def __init__(self, message=None):

        if message is None:
            message = Message()

        self.message = message


    def __getitem__(self, path):
        return self.path(path)


    def __len__(self):
        return len(self.message)


    def __repr__(self):
        return 'document.Document: ' + repr(self.message.serialize())


    def __str__(self):
        return self.message.serialize()


    @property
    def encoding(self):
        return self.message.encoding


    def path(self, path):
        """ Return a :class:`hl7kit.accessor.PathValue` for *path*.
        """

        return PathValue(self.message, path, self)


    def header(self):
        """ Return a new :class:`hl7kit.header.HeaderBuilder`.
        """

        return HeaderBuilder(self.message, self)


    def serialize(self):
        """ Return a new :class:`hl7kit.serialize.Serializer`.
        """

        return Serializer(self.message, self)


    def segments(self, name=None):
        return self.message.segments(name)


    def ack(self, code='AA', text=None):
        """ Return a new :class:`Document` acknowledging this one.
        """

        return Document(self.message.ack(code, text))


    def nack(self, code, text):
        return Document(self.message.nack(code, text))


    def copy(self):
        return Document(self.message.copy())


# end of class Document



class ParseResult(collections.namedtuple('ParseResult', ('document', 'error', 'code'))):
    """ The result of :func:`try_parse`. The instance is true if parsing
        succeeded, in which case *document* is set; otherwise *error* and
        *code* describe the failure.
    """

    __slots__ = ()

    def __bool__(self):
        return self.error is None


# end of class ParseResult



def create():
    """ Return a new :class:`Document` with an empty message.
    """

    return Document()



def parse(text, validate=True):
    """ Parse *text* and return a :class:`Document`. A
        :class:`hl7kit.errors.ValidationError` is raised if the text cannot
        be parsed, or, when *validate* is True, if it is not structurally
        valid.
    """

    return Document(Message(text, validate))



def try_parse(text, validate=True):
    """ Parse *text* without raising, returning a :class:`ParseResult`.
    """

    try:
        document = parse(text, validate)
    except errors.HL7Error as e:
        return ParseResult(None, str(e), e.code)

    return ParseResult(document, None, None)


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
