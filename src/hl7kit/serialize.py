""" Conversion of a message to its final output form. A :class:`Serializer`
    accumulates output options, and each of its terminal methods applies
    those options to the message before producing output.
"""

import codecs
import collections
import io
import logging

from . import config
from . import errors
from .element import TrimScope
from .message import Message


logger = logging.getLogger(__name__)

# MLLP framing bytes: start block, end block, carriage return.

mllp_start = b'\x0b'
mllp_end = b'\x1c\r'


class Serialized(collections.namedtuple('Serialized', ('text', 'error'))):
    """ The result of :func:`Serializer.try_serialize`. On success *text* is
        the serialized message and *error* is None; on failure *text* is
        None and *error* describes what went wrong. The instance is true
        if serialization succeeded.
    """

    __slots__ = ()

    def __bool__(self):
        return self.error is None


# end of class Serialized



class Serializer:
    """ Serialize *message* according to the accumulated options. The
        options are kept between calls, so the same :class:`Serializer` can
        produce output in several forms; each terminal call re-applies the
        options to the current state of the message.

        Trimming trailing delimiters modifies the message in place.
    """

    def __init__(self, message, document=None, defaults=None):

        if message is None:
            raise errors.ArgumentError('a message is required')

        if defaults is None:
            defaults = config.get()

        self.message = message
        self.document = document
        self.defaults = defaults

        self.validate = False
        self.trim = False
        self.trim_scope = None
        self.encoding = defaults.encoding


    def __str__(self):
        return self.to_text()


    @property
    def continuation(self):
        if self.document is None:
            return self.message
        return self.document


    def with_validation(self):
        """ Validate the message structure as part of serialization.
        """

        self.validate = True
        return self


    def without_trailing_delimiters(self, scope=None):
        """ Remove trailing delimiters before serializing. The *scope* is
            anything accepted by :func:`hl7kit.element.TrimScope.coerce`;
            the configured default scope is used if it is not specified.
        """

        if scope is None:
            scope = self.defaults.trim_scope

        self.trim_scope = TrimScope.coerce(scope)
        self.trim = True
        return self


    def with_encoding(self, encoding):
        """ Use the named text *encoding* when producing bytes. None restores
            the configured default.
        """

        if encoding is None:
            encoding = self.defaults.encoding

        try:
            codecs.lookup(encoding)
        except (LookupError, TypeError):
            raise errors.ArgumentError('unknown text encoding: ' + repr(encoding))

        self.encoding = encoding
        return self


    def prepare(self):
        """ Apply any options that modify the message itself.
        """

        if self.trim:
            self.message.remove_trailing_delimiters(self.trim_scope)


    def to_text(self):
        """ Return the message as text. A
            :class:`hl7kit.errors.ValidationError` is raised if validation
            is enabled and the message is not structurally valid.
        """

        self.prepare()
        return self.message.serialize(self.validate)


    def to_bytes(self):
        """ Return the message as bytes, in the selected text encoding.
        """

        return self.to_text().encode(self.encoding)


    def to_mllp(self):
        """ Return the message as bytes wrapped in MLLP framing, ready to be
            written to a socket.
        """

        return mllp(self.to_bytes())


    def to_stream(self, stream):
        """ Write the message to *stream*. A binary stream receives the
            encoded bytes; a text stream receives the text.
        """

        if stream is None:
            raise errors.ArgumentError('a stream is required')

        try:
            writable = stream.writable()
        except AttributeError:
            writable = hasattr(stream, 'write')
        except ValueError:
            # Closed streams.
            writable = False

        if writable:
            pass
        else:
            raise errors.ArgumentError('stream must be writable')

        if isinstance(stream, io.TextIOBase):
            stream.write(self.to_text())
        else:
            stream.write(self.to_bytes())

        logger.debug('wrote message to stream %r', stream)
        return self.continuation


    def to_file(self, filename):
        """ Write the message to *filename*, replacing any existing file.
        """

        # An encoding failure must leave any existing file intact.

        data = self.to_bytes()

        with open(filename, 'wb') as output:
            output.write(data)

        logger.debug('wrote message to %s', filename)
        return self.continuation


    def try_serialize(self):
        """ Serialize the message without raising an exception, returning a
            :class:`Serialized` instance. If validation is enabled the
            serialized text is parsed again, with validation, to confirm it
            is well-formed.
        """

        try:
            self.prepare()
            text = self.message.serialize(False)

            if self.validate:
                Message(text, validate=True)

        except Exception as e:
            logger.debug('serialization failed: %s', e)
            return Serialized(None, str(e))

        return Serialized(text, None)


# end of class Serializer



def mllp(data):
    """ Wrap the bytes *data* in MLLP framing.
    """

    return mllp_start + data + mllp_end



def unwrap_mllp(data):
    """ Remove MLLP framing from the bytes *data*. A
        :class:`hl7kit.errors.ArgumentError` is raised if the framing is
        not present.
    """

    if data.startswith(mllp_start) and data.endswith(mllp_end):
        return data[len(mllp_start):-len(mllp_end)]

    raise errors.ArgumentError('data is not MLLP framed')


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
