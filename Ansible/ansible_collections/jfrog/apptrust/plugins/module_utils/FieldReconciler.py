# Public Domain: Jared Schmidt <jared.schmidt.civ@gmail.com>
# CC0 1.0 Universal license (see https://creativecommons.org/publicdomain/zero/1.0/)
# License applies only to the contents of this file, not the collection as a whole

'''
This library decides how optional attributes are represented locally after a
write or read against AppTrust.

An optional attribute is absent (None), explicitly empty ("", [] or {}) or
populated.  AppTrust drops empty values from its responses, so an empty value
and an absent value look the same on the wire.  The value that was asked for
is used to tell the two apart, which keeps repeated reads from flipping
between None and an empty value.
'''

from __future__ import (absolute_import, division, print_function)
__metaclass__ = type

import copy

# Returned by createValue/updateValue when a field must be left out of a payload
OMIT = object()


class OptionalField():
    '''An optional attribute.  Subclasses set the zero value of their kind.'''

    zero = None

    def __init__(self, name):
        self.name = name

    def __repr__(self):
        return '%s(%r)' % (type(self).__name__, self.name)

    def zeroValue(self):
        return copy.copy(self.zero)

    def isPopulated(self, value):
        return value is not None and len(value) > 0

    def isExplicitEmpty(self, value):
        return value is not None and not self.isPopulated(value)

    def normalize(self, value):
        '''Collapses a value the way the wire does: empty and absent both become None.'''
        if self.isPopulated(value):
            return value
        return None

    def reconcile(self, priorObserved, desiredNext, remoteReturned):
        '''Chooses the value to keep locally.

        :param priorObserved: last known local value
        :param desiredNext: value the caller asked for
        :param remoteReturned: value AppTrust returned (None when it was omitted)
        :return: the populated remote value, an explicit empty value, or None
        '''
        if self.isPopulated(remoteReturned):
            return copy.deepcopy(remoteReturned)
        if self.isExplicitEmpty(desiredNext):
            return self.zeroValue()
        # Clearing a populated value and never setting one both end up absent
        return None

    def createValue(self, desired):
        if self.isPopulated(desired):
            return desired
        return OMIT

    def updateValue(self, prior, desired):
        '''Value to send in an update.  Dropping a populated value sends the zero
        value, since AppTrust ignores fields that are left out of a PATCH.
        '''
        if desired is None:
            if self.isPopulated(prior):
                return self.zeroValue()
            return OMIT
        return desired


class ScalarField(OptionalField):
    zero = ''


class ListField(OptionalField):
    zero = []


class MapField(OptionalField):
    zero = {}


class SentinelField(ScalarField):
    '''An enumerated string that AppTrust reports as a default sentinel when unset.
    It is never absent locally: absent and empty both read back as the sentinel.
    '''

    def __init__(self, name, sentinel='unspecified', choices=None):
        super().__init__(name)
        self.sentinel = sentinel
        self.choices = tuple(choices) if choices else None

    def zeroValue(self):
        return self.sentinel

    def normalize(self, value):
        if self.isPopulated(value):
            return value
        return self.sentinel

    def reconcile(self, priorObserved, desiredNext, remoteReturned):
        if self.isPopulated(remoteReturned):
            return remoteReturned
        return self.sentinel

    def updateValue(self, prior, desired):
        if not self.isPopulated(desired):
            if self.normalize(prior) != self.sentinel:
                return self.sentinel
            return OMIT
        return desired


def reconcile_fields(fields, prior, desired, remote):
    '''Applies OptionalField.reconcile to every field.

    :param fields: iterable of OptionalField
    :param prior: dictionary of the last local values (may be None)
    :param desired: dictionary of requested values (may be None)
    :param remote: dictionary returned by AppTrust
    :return: dictionary of field name to reconciled value
    '''
    prior = prior or dict()
    desired = desired or dict()
    return dict((f.name, f.reconcile(prior.get(f.name), desired.get(f.name), remote.get(f.name))) for f in fields)


def create_payload(fields, desired):
    payload = dict()
    for field in fields:
        value = field.createValue(desired.get(field.name))
        if value is not OMIT:
            payload[field.name] = value
    return payload


def update_payload(fields, prior, desired):
    payload = dict()
    for field in fields:
        value = field.updateValue(prior.get(field.name), desired.get(field.name))
        if value is not OMIT:
            payload[field.name] = value
    return payload


def pending_changes(fields, prior, desired):
    '''Returns the names of the fields an update would actually change, comparing
    values the way AppTrust stores them.
    '''
    changed = list()
    for field in fields:
        value = field.updateValue(prior.get(field.name), desired.get(field.name))
        if value is OMIT:
            continue
        if field.normalize(value) != field.normalize(prior.get(field.name)):
            changed.append(field.name)
    return changed
