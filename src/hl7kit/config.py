""" Process-wide defaults for :mod:`hl7kit`. The defaults are an immutable
    :class:`Defaults` value; a ``defaults.json`` file in the configuration
    :func:`directory` can override any of them. Callers that want different
    values for a single operation should pass them explicitly rather than
    modifying the defaults.
"""

import collections
import logging
import os
import threading

from . import json


logger = logging.getLogger(__name__)

_cache = dict()
_cache_lock = threading.Lock()

filename = 'defaults.json'


class Defaults(collections.namedtuple('Defaults', ('processing_id', 'version', 'encoding', 'trim_scope'))):
    """ Immutable collection of default values. The *processing_id* and
        *version* are used for new message headers; *encoding* is the text
        encoding used when serializing to bytes, streams, or files; and
        *trim_scope* is the scope used when removing trailing delimiters
        without an explicit scope.
    """

    __slots__ = ()

    def override(self, overrides):
        """ Return a new :class:`Defaults` instance with the values in the
            *overrides* dictionary applied. Unknown keys are ignored.
        """

        known = dict()

        for key, value in overrides.items():
            if key in self._fields:
                known[key] = str(value)
            else:
                logger.warning('ignoring unknown configuration key: %r', key)

        return self._replace(**known)


# end of class Defaults


builtin = Defaults(processing_id='P', version='2.5', encoding='utf-8', trim_scope='all')


def directory(default=None):
    """ Return the directory where :mod:`hl7kit` configuration files are
        found. This defaults to ``$HOME/.hl7kit``, but can be overridden by
        calling this method with a valid absolute path, or by setting the
        ``HL7KIT_HOME`` environment variable. Changes to the environment
        variable are ignored unless they are made prior to the first
        invocation of this method.
    """

    if default is not None:
        default = str(default)
        default = os.path.expandvars(default)

        if os.path.isabs(default):
            pass
        else:
            raise ValueError('the configuration directory must be an absolute path')

        os.environ['HL7KIT_HOME'] = default
        directory.found = default

    found = directory.found

    if found is not None:
        return found

    try:
        found = os.environ['HL7KIT_HOME']
    except KeyError:
        pass
    else:
        directory.found = found
        return found

    try:
        home = os.environ['HOME']
    except KeyError:
        return None

    found = os.path.join(home, '.hl7kit')

    directory.found = found
    return found

directory.found = None



def load():
    """ Build a fresh :class:`Defaults` instance from the built-in values
        plus any overrides found on disk. A missing or unreadable file is
        not an error; the built-in values are returned instead.
    """

    base_dir = directory()
    if base_dir is None:
        return builtin

    path = os.path.join(base_dir, filename)

    if os.path.exists(path):
        pass
    else:
        return builtin

    try:
        overrides = json.load(path)
    except (OSError, ValueError) as e:
        logger.warning('ignoring configuration file %s: %s', path, e)
        return builtin

    if isinstance(overrides, dict):
        pass
    else:
        logger.warning('ignoring configuration file %s: not a JSON object', path)
        return builtin

    logger.debug('loaded configuration overrides from %s', path)
    return builtin.override(overrides)



def get():
    """ Return the cached :class:`Defaults` for this process, loading them
        on first use.
    """

    try:
        defaults = _cache['defaults']
    except KeyError:
        _cache_lock.acquire()

        try:
            defaults = _cache['defaults']
        except KeyError:
            defaults = load()
            _cache['defaults'] = defaults
        finally:
            _cache_lock.release()

    return defaults



def clear():
    """ Discard the cached defaults and the cached configuration directory,
        so that the next call to :func:`get` re-reads them.
    """

    _cache.clear()
    directory.found = None


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
