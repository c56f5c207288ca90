# Public Domain: Jared Schmidt <jared.schmidt.civ@gmail.com>
# CC0 1.0 Universal license (see https://creativecommons.org/publicdomain/zero/1.0/)
# License applies only to the contents of this file, not the collection as a whole

'''
Colon-delimited identifiers such as "my-app:maven:com.example:lib:1.0.0".

At most one segment of an identifier may itself contain the delimiter.  That
segment sits between a fixed number of leading and trailing segments, so an
identifier is decoded from both ends and whatever is left in the middle is
joined back together.
'''

from __future__ import (absolute_import, division, print_function)
__metaclass__ = type

from ansible_collections.jfrog.apptrust.plugins.module_utils.AppTrustErrors import MalformedIdentifier

DELIMITER = ':'


def encode(segments):
    '''Joins segments with the delimiter.  No escaping is done.'''
    return DELIMITER.join(segments)


def decode(identifier, prefixCount, suffixCount):
    '''Splits an identifier into (prefix, middle, suffix).

    Empty tokens are dropped, so "a::b" and ":a:b:" decode like "a:b".

    :param identifier: the composite identifier string
    :param prefixCount: number of delimiter-free leading segments
    :param suffixCount: number of delimiter-free trailing segments
    :return: tuple of (list of prefixCount strings, middle string, list of suffixCount strings)
    :raises MalformedIdentifier: when there are fewer than prefixCount + suffixCount segments
    '''
    if not isinstance(identifier, str):
        raise MalformedIdentifier('Identifier must be a string, got %r' % (identifier,))
    tokens = [token for token in identifier.split(DELIMITER) if token]
    if len(tokens) < prefixCount + suffixCount:
        raise MalformedIdentifier('Identifier "%s" has %d segment(s), expected at least %d'
                                  % (identifier, len(tokens), prefixCount + suffixCount))
    end = len(tokens) - suffixCount
    return (tokens[:prefixCount], DELIMITER.join(tokens[prefixCount:end]), tokens[end:])


class IdLayout():
    '''Maps the identifying attributes of an entity to identifier segments.

    :param prefix: attribute names of the leading segments
    :param middle: attribute name of the segment allowed to contain the delimiter
    :param suffix: attribute names of the trailing segments
    '''

    def __init__(self, prefix=(), middle=None, suffix=()):
        self.prefix = tuple(prefix)
        self.middle = middle
        self.suffix = tuple(suffix)

    @property
    def fields(self):
        if self.middle is None:
            return self.prefix + self.suffix
        return self.prefix + (self.middle,) + self.suffix

    def example(self):
        return encode(self.fields)

    def build(self, attributes):
        '''Returns the identifier for a mapping holding every identifying attribute.'''
        return encode([str(attributes[name]) for name in self.fields])

    def parse(self, identifier):
        '''Returns a dictionary of identifying attributes decoded from identifier.'''
        prefix, middle, suffix = decode(identifier, len(self.prefix), len(self.suffix))
        if self.middle is None and middle:
            raise MalformedIdentifier('Identifier "%s" must have the form %s' % (identifier, self.example()))
        if self.middle is not None and not middle:
            raise MalformedIdentifier('Identifier "%s" must have the form %s' % (identifier, self.example()))
        attributes = dict(zip(self.prefix, prefix))
        if self.middle is not None:
            attributes[self.middle] = middle
        attributes.update(zip(self.suffix, suffix))
        return attributes
