""" Default settings for a :class:`zbxsender.Sender`. Each setting can be
    overridden with an environment variable; explicit constructor arguments
    take precedence over both.

    ==========================  ================================  =========
    Setting                     Environment variable              Default
    ==========================  ================================  =========
    host                        ZBXSENDER_HOST                    127.0.0.1
    port                        ZBXSENDER_PORT                    10051
    connection_timeout (ms)     ZBXSENDER_CONNECTION_TIMEOUT      3000
    socket_timeout (ms)         ZBXSENDER_SOCKET_TIMEOUT          3000
    ==========================  ================================  =========
"""

import os


default_timeout = 3000

defaults = dict()
defaults['host'] = '127.0.0.1'
defaults['port'] = 10051
defaults['connection_timeout'] = default_timeout
defaults['socket_timeout'] = default_timeout

environment = dict()
environment['host'] = 'ZBXSENDER_HOST'
environment['port'] = 'ZBXSENDER_PORT'
environment['connection_timeout'] = 'ZBXSENDER_CONNECTION_TIMEOUT'
environment['socket_timeout'] = 'ZBXSENDER_SOCKET_TIMEOUT'


def get(name):
    """ Return the effective value of the setting *name*, consulting the
        environment before falling back to the built-in default. Numeric
        settings are returned as integers; a non-numeric override raises
        :class:`ValueError`.
    """

    try:
        default = defaults[name]
    except KeyError:
        raise KeyError('unknown setting: ' + repr(name))

    value = os.environ.get(environment[name])

    if value is None or value == '':
        return default

    if name == 'host':
        return value

    try:
        value = int(value)
    except ValueError:
        raise ValueError('%s must be an integer, not %r' % (environment[name], value))

    return value


def timeout(milliseconds, name='timeout'):
    """ Validate a timeout expressed in *milliseconds* and return it in
        seconds, the unit used by :mod:`socket` and :mod:`asyncio`.
    """

    milliseconds = int(milliseconds)

    if milliseconds <= 0:
        raise ValueError('%s must be positive, not %d ms' % (name, milliseconds))

    return milliseconds / 1000.0


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
