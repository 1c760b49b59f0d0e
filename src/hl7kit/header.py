""" Construction of the MSH header segment. A :class:`HeaderBuilder`
    accumulates the header fields, checks that every required field is
    present, and then inserts the complete header into the message in a
    single step.
"""

import datetime
import itertools
import logging
import secrets
import threading

from . import config
from . import errors


logger = logging.getLogger(__name__)

PRODUCTION = 'P'
TRAINING = 'T'
DEBUGGING = 'D'


class HeaderBuilder:
    """ Accumulate the fields of a message header. Every setter returns the
        builder, so that calls can be chained; :func:`commit` inserts the
        header into *message* and returns the *document* (or the message,
        if there is no document). A builder can only be committed once.

        The processing id and version default to the values in
        :func:`hl7kit.config.get`, unless other *defaults* are provided.
    """

    def __init__(self, message, document=None, defaults=None):

        if message is None:
            raise errors.ArgumentError('a message is required')

        if defaults is None:
            defaults = config.get()

        self.message = message
        self.document = document
        self.committed = False

        self._sending_application = None
        self._sending_facility = None
        self._receiving_application = None
        self._receiving_facility = None
        self._message_type = None
        self._security = None
        self._control_id = None
        self._auto_control_id = False
        self._processing_id = defaults.processing_id
        self._version = defaults.version


    def sender(self, application, facility):
        """ Set the sending application and facility (MSH-3 and MSH-4).
        """

        self._sending_application = _required(application, 'sending application')
        self._sending_facility = _required(facility, 'sending facility')
        return self


    def receiver(self, application, facility):
        """ Set the receiving application and facility (MSH-5 and MSH-6).
        """

        self._receiving_application = _required(application, 'receiving application')
        self._receiving_facility = _required(facility, 'receiving facility')
        return self


    def message_type(self, message_type):
        """ Set the message type (MSH-9), for example 'ADT^A01'.
        """

        self._message_type = _required(message_type, 'message type')
        return self


    def security(self, security):
        """ Set the optional security field (MSH-8). None clears it.
        """

        self._security = security
        return self


    def control_id(self, control_id):
        """ Use an explicit message control id (MSH-10). This cancels any
            earlier call to :func:`auto_control_id`.
        """

        self._control_id = _required(control_id, 'message control id')
        self._auto_control_id = False
        return self


    def auto_control_id(self):
        """ Generate the message control id when the header is committed.
            This cancels any earlier call to :func:`control_id`.
        """

        self._control_id = None
        self._auto_control_id = True
        return self


    def version(self, version):
        self._version = _required(version, 'version')
        return self


    def processing_id(self, processing_id):
        self._processing_id = _required(processing_id, 'processing id')
        return self


    def production(self):
        return self.processing_id(PRODUCTION)


    def test(self):
        return self.processing_id(TRAINING)


    def debug(self):
        return self.processing_id(DEBUGGING)


    def missing(self):
        """ Return a list of (field, hint) tuples, one for each required
            field that has not been set. The list is empty if the builder
            is ready to be committed.
        """

        missing = list()

        required = (
            (self._sending_application, 'sending application', 'sender()'),
            (self._sending_facility, 'sending facility', 'sender()'),
            (self._receiving_application, 'receiving application', 'receiver()'),
            (self._receiving_facility, 'receiving facility', 'receiver()'),
            (self._message_type, 'message type', 'message_type()'))

        for value, field, hint in required:
            if value is None or value == '':
                missing.append((field, hint))

        if self._auto_control_id == False:
            if self._control_id is None or self._control_id == '':
                missing.append(('message control id', 'control_id() or auto_control_id()'))

        return missing


    def commit(self):
        """ Validate the accumulated fields and insert the header into the
            message. A :class:`hl7kit.errors.MissingRequiredField` exception
            is raised, and the message left untouched, if any required field
            is missing.
        """

        if self.committed:
            raise RuntimeError('this header has already been committed')

        missing = self.missing()

        if missing:
            raise errors.MissingRequiredField(missing)

        if self._auto_control_id:
            control_id = generate_control_id()
        else:
            control_id = self._control_id

        self.message.insert_header(
            self._sending_application,
            self._sending_facility,
            self._receiving_application,
            self._receiving_facility,
            self._security,
            self._message_type,
            control_id,
            self._processing_id,
            self._version)

        self.committed = True
        logger.debug('committed header %s for %s', control_id, self._message_type)

        if self.document is None:
            return self.message
        return self.document


# end of class HeaderBuilder



def _required(value, name):

    if value is None:
        raise errors.ArgumentError(name + ' cannot be None')

    if isinstance(value, str):
        pass
    else:
        raise errors.ArgumentError(name + ' must be a string, not ' + type(value).__name__)

    return value


# Generated control ids are a 14-digit timestamp followed by a 6-digit
# suffix. The suffix comes from a counter shared by every builder in the
# process, so ids generated within the same second do not collide until
# the counter wraps; the random starting point keeps separate processes
# from marching through the same sequence.

_suffix_max = 1000000
_suffix_lock = threading.Lock()
_suffix_ticker = itertools.count(secrets.randbelow(_suffix_max))


def generate_control_id(now=None):
    """ Return a new message control id based on *now*, or on the current
        local time.
    """

    if now is None:
        now = datetime.datetime.now()

    _suffix_lock.acquire()
    try:
        suffix = next(_suffix_ticker) % _suffix_max
    finally:
        _suffix_lock.release()

    return now.strftime('%Y%m%d%H%M%S') + '%06d' % (suffix)


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
