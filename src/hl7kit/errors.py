""" Exception classes raised by :mod:`hl7kit`. Every exception derives from
    :class:`HL7Error`, and additionally from the built-in exception a caller
    would naturally expect: a path that does not resolve is a
    :class:`KeyError`, a bad argument is a :class:`ValueError`, and so on.
"""

# Error codes attached to an HL7Error. These describe the broad category of
# failure, independent of the exception class.

BAD_MESSAGE = 'Validation Error - Bad Message'
PARSING_ERROR = 'Parsing Error'
REQUIRED_FIELD_MISSING = 'Validation Error - Required field missing in message'
SERIALIZATION_ERROR = 'Serialization Error'


class HL7Error(Exception):
    """ Base class for all :mod:`hl7kit` exceptions. The optional *code*
        is one of the module-level error code strings.
    """

    def __init__(self, message, code=None):
        Exception.__init__(self, message)
        self.message = message
        self.code = code


    def __str__(self):
        return self.message


# end of class HL7Error



class NotFound(HL7Error, KeyError):
    """ The requested path does not resolve to an element in the message.
    """

    def __init__(self, path, message=None):
        if message is None:
            message = 'path not found: ' + str(path)

        HL7Error.__init__(self, message)
        self.path = path


# end of class NotFound



class ArgumentError(HL7Error, ValueError):
    """ An argument was rejected at call time.
    """

    pass



class InvalidPath(ArgumentError):
    """ A path expression could not be parsed.
    """

    def __init__(self, path, reason=None):
        message = 'invalid path expression: ' + repr(path)
        if reason:
            message = message + ' (' + reason + ')'

        ArgumentError.__init__(self, message)
        self.path = path



class ValidationError(HL7Error, ValueError):
    """ The message failed structural validation.
    """

    def __init__(self, message, code=BAD_MESSAGE):
        HL7Error.__init__(self, message, code)



class MissingRequiredField(HL7Error, ValueError):
    """ A header was committed without all of its required fields. The
        *fields* attribute is a list of (field, hint) tuples, one for each
        missing field, in the order they appear in the header.
    """

    def __init__(self, fields):

        self.fields = list(fields)

        messages = list()
        for field, hint in self.fields:
            messages.append('%s must be set using %s' % (field, hint))

        message = '; '.join(messages)
        HL7Error.__init__(self, message, REQUIRED_FIELD_MISSING)


    def __contains__(self, field):
        for missing, hint in self.fields:
            if missing == field:
                return True

        return False


# end of class MissingRequiredField


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
