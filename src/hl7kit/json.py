''' Select the most capable available JSON library for reading
    :mod:`hl7kit` configuration files. Callers should use :func:`loads` and
    :func:`load` from this module rather than importing a JSON library
    directly.
'''

# Libraries are tried in order of preference; the standard library is
# always available as the last resort.

msgspec = None
orjson = None
stdlib = None

try:
    import msgspec
except ImportError:
    pass

if msgspec is None:
    try:
        import orjson
    except ImportError:
        pass

if msgspec is None and orjson is None:
    import json as stdlib


if msgspec is not None:
    library = 'msgspec'
    loads = msgspec.json.Decoder().decode
    DecodeError = msgspec.DecodeError
elif orjson is not None:
    library = 'orjson'
    loads = orjson.loads
    DecodeError = orjson.JSONDecodeError
else:
    library = 'json'
    loads = stdlib.loads
    DecodeError = stdlib.JSONDecodeError


def load(filename):
    """ Read and decode the JSON contents of *filename*. Decoding failures
        are raised as :class:`ValueError`, regardless of which library
        handled the decoding.
    """

    with open(filename, 'rb') as contents:
        raw = contents.read()

    try:
        return loads(raw)
    except DecodeError as e:
        raise ValueError('cannot decode %s: %s' % (filename, e))


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
