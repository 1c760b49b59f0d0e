""" Python implementation of path-addressed access to HL7 v2 messages. This
    includes parsing and serializing message text, reading and writing
    individual elements by path, and building message headers.
"""

# Utility components.

from . import errors
from . import json
from . import config

# The message store and its elements.

from . import encoding
from . import path
from . import element
from . import message

# Primary public-facing interfaces.

from . import accessor
from . import header
from . import serialize
from . import document

from .document import Document, create, parse, try_parse
from .element import TrimScope
from .errors import HL7Error, NotFound, ArgumentError, InvalidPath, ValidationError, MissingRequiredField
from .message import Message

# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
