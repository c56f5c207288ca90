# Public Domain: Jared Schmidt <jared.schmidt.civ@gmail.com>
# CC0 1.0 Universal license (see https://creativecommons.org/publicdomain/zero/1.0/)
# License applies only to the contents of this file, not the collection as a whole

'''
Errors raised by the AppTrust module_utils and the translation of AppTrust
HTTP error responses into them.
'''

from __future__ import (absolute_import, division, print_function)
__metaclass__ = type

import json

GENERIC_VALIDATION_PHRASES = ('one or more fields failed validation', 'failed validation', 'validation failed')


class AppTrustError(Exception):
    '''Base class for every failure the AppTrust API classes raise.
    Modules catch this and hand title, message and status to fail_json.
    '''

    title = 'API Error'

    def __init__(self, message, status=None, body=None):
        super().__init__(message)
        self.message = message
        self.status = status
        self.body = body

    def __str__(self):
        return self.message


class NotFound(AppTrustError):
    title = 'Resource Not Found'


class Conflict(AppTrustError):
    title = 'Resource Conflict'


class ValidationError(AppTrustError):
    title = 'Invalid Request'


class Unauthorized(AppTrustError):
    title = 'Authentication Failed'


class Forbidden(AppTrustError):
    title = 'Permission Denied'


class ServerError(AppTrustError):
    title = 'Server Error'


class MalformedIdentifier(AppTrustError):
    title = 'Invalid import ID'


class APIError(AppTrustError):
    title = 'API Error'


def error_from_response(status, body, operation, resourceType):
    '''Builds the exception matching an HTTP status code.

    :param status: HTTP status code of the failed call
    :param body: raw response body (bytes or str, may be empty)
    :param operation: verb used in messages, e.g. "create" or "read"
    :param resourceType: noun used in messages, e.g. "application version"
    :return: an AppTrustError subclass instance (not raised)
    '''
    if isinstance(body, bytes):
        body = body.decode('utf-8', errors='replace')
    body = body or ''
    detail = api_error_detail(body)

    if status == 400:
        if detail:
            return ValidationError('Failed to %s %s: %s' % (operation, resourceType, detail), status, body)
        return ValidationError('Failed to %s %s: The request was invalid (no details from server).' % (operation, resourceType), status, body)
    if status == 401:
        return Unauthorized(detail or 'Invalid credentials (no details from server).', status, body)
    if status == 403:
        return Forbidden(detail or 'You do not have permission to %s %s.' % (operation, resourceType), status, body)
    if status == 404:
        return NotFound(detail or 'The %s was not found during %s.' % (resourceType, operation), status, body)
    if status == 409:
        return Conflict(detail or 'A conflict occurred during %s %s.' % (operation, resourceType), status, body)
    if status >= 500:
        if detail:
            return ServerError('Server error (Status: %d): %s' % (status, detail), status, body)
        return ServerError('Server error during %s %s (Status: %d).' % (operation, resourceType, status), status, body)
    if detail:
        return APIError('Unexpected error (Status: %d): %s' % (status, detail), status, body)
    return APIError('Unexpected error during %s %s (Status: %d).' % (operation, resourceType, status), status, body)


def api_error_detail(body):
    '''Returns the most useful error text in a response body.  Falls back to the
    raw body when the structured message is too generic to act on.
    '''
    message = extract_user_friendly_error(body)
    if not message:
        return _truncate(body, 1000)
    if body and is_generic_validation_message(message):
        return _truncate(body, 2000)
    return message


def is_generic_validation_message(message):
    lower = message.strip().lower()
    if lower == 'invalid request':
        return True
    return any(phrase in lower for phrase in GENERIC_VALIDATION_PHRASES)


def extract_user_friendly_error(body):
    if not body:
        return ''
    try:
        parsed = json.loads(body)
    except ValueError:
        parsed = None

    if isinstance(parsed, dict):
        errors = parsed.get('errors')
        if isinstance(errors, list) and errors:
            out = ', '.join(_format_error_entry(e) for e in errors)
            details = _extract_details(parsed)
            if details:
                out = out + '\n' + details
            return out
        for key in ('message', 'error', 'detail'):
            if isinstance(parsed.get(key), str) and parsed[key]:
                return parsed[key]

    if isinstance(parsed, list) and parsed:
        messages = list()
        for entry in parsed:
            if not isinstance(entry, dict):
                continue
            if entry.get('message'):
                messages.append(str(entry['message']))
            elif entry.get('code'):
                messages.append(str(entry['code']))
        if messages:
            return '; '.join(messages)

    return 'API returned: ' + _truncate(body, 500)


def _format_error_entry(entry):
    if not isinstance(entry, dict):
        return str(entry)
    code = entry.get('code') or ''
    message = entry.get('message') or ''
    field = entry.get('field') or ''
    if field:
        return '%s: %s (%s)' % (field, message, code)
    if code:
        return '%s - %s' % (code, message)
    return message


def _extract_details(parsed):
    parts = list()
    details = parsed.get('details')
    if details is not None:
        if isinstance(details, str):
            if details:
                parts.append('details: ' + details)
        else:
            parts.append('details: ' + json.dumps(details))
    if parsed.get('validation_errors') is not None:
        parts.append('validation_errors: ' + json.dumps(parsed['validation_errors']))
    return '\n'.join(parts)


def _truncate(text, limit):
    if len(text) > limit:
        return text[:limit] + '... (truncated)'
    return text
