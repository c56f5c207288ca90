# Public Domain: Jared Schmidt <jared.schmidt.civ@gmail.com>
# CC0 1.0 Universal license (see https://creativecommons.org/publicdomain/zero/1.0/)
# License applies only to the contents of this file, not the collection as a whole

'''
This library is used for declaratively defining a desired AppTrust entity
and applying it using Create, Read, Update, Delete operations against the
JFrog AppTrust REST API, where Create is a POST message, Read is a GET
message, Update is a PATCH message, and Delete is a DELETE message.
'''

from __future__ import (absolute_import, division, print_function)
__metaclass__ = type

import base64
import json
import urllib.parse
from abc import ABC, abstractmethod
from urllib.error import HTTPError, URLError

from ansible.module_utils.basic import env_fallback
from ansible.module_utils.urls import ConnectionError as UrlsConnectionError
from ansible.module_utils.urls import Request

from ansible_collections.jfrog.apptrust.plugins.module_utils.AppTrustErrors import (
    APIError,
    AppTrustError,
    NotFound,
    ValidationError,
    error_from_response,
)

APPTRUST_API = 'apptrust/api/v1'
AUTH_TYPES = ('accesstoken', 'apikey', 'basic')


def common_argument_spec():
    '''Connection options shared by every module in the collection.
    Mirrors the apptrust_common_docs documentation fragment.
    '''
    return dict(
        base_url=dict(type='str', aliases=['url'], fallback=(env_fallback, ['JFROG_URL', 'ARTIFACTORY_URL'])),
        auth_type=dict(type='str', default='AccessToken'),
        auth_string=dict(type='str', no_log=True, fallback=(env_fallback, ['JFROG_ACCESS_TOKEN', 'ARTIFACTORY_ACCESS_TOKEN'])),
        ignore_ca_error=dict(type='bool', default=False, fallback=(env_fallback, ['JFROG_BYPASS_TLS_VERIFICATION'])),
        timeout=dict(type='int', default=30),
    )


def connection_params(module):
    '''Keyword arguments for an AppTrustApi built from a module's parameters.'''
    return dict(
        base_url=module.params['base_url'],
        auth_type=module.params['auth_type'],
        auth_string=module.params['auth_string'],
        ignore_ca_error=module.params['ignore_ca_error'],
        timeout=module.params['timeout'],
        inCheckMode=module.check_mode,
        module=module,
    )


class AppTrustApi():
    '''This class holds the connection to an AppTrust server and sends requests to it.
    Non-2xx responses are raised as AppTrustError subclasses.
    '''

    RESOURCE_LABEL = 'resource'

    def __init__(self, base_url, auth_type, auth_string, ignore_ca_error=False, inCheckMode=False, timeout=30, module=None):
        '''Creates a new AppTrust API endpoint object.

        :param base_url: Contains the schema, hostname, and port number (if not default) for the JFrog platform
        :param auth_type: Must be "accesstoken", "apikey", or "basic" (any capitalization)
        :param auth_string: For auth_type="accesstoken", it is the access token string.
            For auth_type="apikey", it is the api key.
            For auth_type="basic", it is the username and password joined with a colon in the format "username:password".
        :param ignore_ca_error: Defaults to false.  When set to true, API calls will skip cert verification.
        :param inCheckMode: Defaults to false.  When set to true, no changes will be made, but functions will still
            return as if they had.
        :param timeout: Socket timeout in seconds for each request.
        :param module: Optional AnsibleModule used for debug output and warnings.
        '''
        self.module = module
        if not base_url:
            raise ValidationError('Missing URL Configuration: the url was not found in the JFROG_URL/ARTIFACTORY_URL '
                                  'environment variable or the base_url option.')
        authType = str(auth_type or 'accesstoken').lower()
        if authType not in AUTH_TYPES:
            raise ValidationError('"auth_type" must be "Basic", "AccessToken", or "ApiKey"')
        if not auth_string:
            raise ValidationError('Missing JFrog API key or Access Token: it was not found in the JFROG_ACCESS_TOKEN/'
                                  'ARTIFACTORY_ACCESS_TOKEN environment variable or the auth_string option.')

        self.baseUrl = base_url.rstrip('/') + '/'
        if authType == 'accesstoken':
            self.headers = {"Authorization": ("Bearer " + auth_string)}
        elif authType == 'apikey':
            self.headers = {"X-JFrog-Art-Api": auth_string}
        else:
            if ':' not in auth_string:
                raise ValidationError('Basic auth_type requires that username and password be provided in auth_string '
                                      'in the format username:password')
            self.headers = {"Authorization": ("Basic " + base64.standard_b64encode(auth_string.encode('utf-8')).decode('ascii'))}
        self.ignoreCaError = bool(ignore_ca_error)
        self.inCheckMode = inCheckMode
        self.timeout = timeout
        if self.ignoreCaError:
            self._warn('API calls to AppTrust are not validating CA certs. Auth tokens vulnerable to MITM attack.')

    def _debug(self, message):
        if self.module is not None:
            self.module.debug(message)

    def _warn(self, message):
        if self.module is not None:
            self.module.warn(message)

    def _path(self, template, **params):
        '''Fills a path template, escaping every parameter as a single path segment.'''
        return template.format(**dict((k, urllib.parse.quote(str(v), safe='')) for k, v in params.items()))

    def _queryParams(self, params, names):
        '''Picks the options that are set out of params as query parameters.

        :param names: option names, or (option name, query parameter name) pairs
        :return: dictionary for _sendRequest(query=...); booleans become "true"/"false"
        '''
        query = dict()
        for name in names:
            option, key = name if isinstance(name, tuple) else (name, name)
            value = params.get(option)
            if value is None or value == []:
                continue
            if isinstance(value, bool):
                value = str(value).lower()
            query[key] = value
        return query

    def _sendRequest(self, method, urltail, content=None, query=None, operation='read'):
        '''This helper function uses self.baseUrl and urltail to send a request and return a parsed object
        :param query: dictionary of query parameters; list values are repeated
        :param operation: verb used in error messages
        :returns: Parsed JSON object (List or Dictionary), or None for an empty body
        '''
        url = self.baseUrl + urltail
        if query:
            url += '?' + urllib.parse.urlencode(query, doseq=True)
        headers = dict(self.headers)
        data = None
        if content is not None:
            data = json.dumps(content)
            headers['Content-Type'] = 'application/json'

        self._debug('%s %s' % (method, url))
        request = Request(headers=headers, validate_certs=not self.ignoreCaError, timeout=self.timeout)
        try:
            response = request.open(method, url, data=data)
        except HTTPError as e:
            body = e.read() if e.fp is not None else b''
            raise error_from_response(e.code, body, operation, self.RESOURCE_LABEL)
        except (URLError, UrlsConnectionError, OSError) as e:
            reason = getattr(e, 'reason', e)
            raise APIError('Unable to %s %s: %s' % (operation, self.RESOURCE_LABEL, reason))

        raw = response.read()
        if not raw:
            return None
        try:
            return json.loads(raw)
        except ValueError:
            raise APIError('Unable to %s %s: response is not valid JSON' % (operation, self.RESOURCE_LABEL))


class AppTrustResource(AppTrustApi, ABC):
    '''This abstract class defines an AppTrust entity and how to perform CRUD operations
    on it in a declarative fashion.  Entities are plain dictionaries keyed by attribute
    name.  The "id" attribute is always rebuilt from the identifying attributes.

    Subclasses set TYPE_NAME, RESOURCE_LABEL, ID_LAYOUT and ATTRIBUTES and implement
    the _...InAppTrust methods.
    '''

    TYPE_NAME = None
    ID_LAYOUT = None
    # Every attribute a plan may carry, identifying ones included
    ATTRIBUTES = ()
    # Identifying attributes plus any attribute AppTrust cannot change in place
    IMMUTABLE = ()

    def getId(self, attributes):
        return self.ID_LAYOUT.build(attributes)

    def identityFromId(self, identifier):
        '''Decodes an identifier into the identifying attributes.  No request is sent.'''
        return self.ID_LAYOUT.parse(identifier)

    def planFromParams(self, params):
        '''Builds a plan from module parameters, decoding params["id"] when it is given.'''
        plan = dict((name, params.get(name)) for name in self.ATTRIBUTES)
        if params.get('id'):
            plan.update(self.identityFromId(params['id']))
        return plan

    def create(self, plan):
        '''Creates the entity.  Honors check mode.
        :return: the local state of the new entity
        '''
        self._validateIdentity(plan)
        self._validatePlan(plan)
        self._validateCreate(plan)
        if self.inCheckMode:
            return self._withId(dict(plan))
        self._debug('Creating %s %s' % (self.RESOURCE_LABEL, self.getId(plan)))
        return self._withId(self._createInAppTrust(plan))

    def read(self, state):
        '''Refreshes a local state from AppTrust.
        :return: the refreshed state, or None when the entity is gone and the local copy should be discarded
        '''
        state = self._withIdentity(state)
        result = self._readFromAppTrust(state)
        if result is None:
            self._debug('%s %s not found, removing from state' % (self.RESOURCE_LABEL, self.getId(state)))
            return None
        return self._withId(result)

    def update(self, plan, state):
        '''Updates an existing entity from its previous local state.  Honors check mode.
        :return: the new local state
        '''
        self._validateIdentity(plan)
        self._validatePlan(plan)
        for name in self.IMMUTABLE:
            if state.get(name) is not None and plan.get(name) != state.get(name):
                raise ValidationError('%s cannot be changed after creation (%r -> %r)' % (name, state.get(name), plan.get(name)))
        if self.inCheckMode:
            projected = dict(state)
            projected.update(plan)
            return self._withId(projected)
        self._debug('Updating %s %s' % (self.RESOURCE_LABEL, self.getId(plan)))
        return self._withId(self._updateInAppTrust(plan, state))

    def delete(self, state):
        '''Deletes the entity.  An entity that is already gone counts as deleted.  Honors check mode.'''
        state = self._withIdentity(state)
        if self.inCheckMode:
            return
        try:
            self._deleteFromAppTrust(state)
        except NotFound:
            self._debug('%s %s not found during delete, assuming already deleted' % (self.RESOURCE_LABEL, self.getId(state)))

    def importState(self, identifier):
        '''Looks up an entity from an externally supplied identifier.
        :return: the entity's state, or None when it does not exist
        '''
        state = self.identityFromId(identifier)
        state['id'] = identifier
        return self.read(state)

    def lookup(self, plan):
        '''Finds the remote counterpart of a plan for apply() and remove().'''
        return self.read(plan)

    def pendingChanges(self, plan, current):
        '''Names of the attributes an update would change.  Nothing is updatable by default.'''
        return list()

    def apply(self, plan):
        '''Creates the entity or brings it in line with the plan.  Honors check mode.
        :return: (changed, state)
        '''
        self._validateIdentity(plan)
        self._validatePlan(plan)
        current = self.lookup(plan)
        if current is None:
            return True, self.create(plan)
        changes = self.pendingChanges(plan, current)
        if not changes:
            return False, current
        self._debug('%s %s differs in: %s' % (self.RESOURCE_LABEL, current['id'], ', '.join(changes)))
        return True, self.update(plan, current)

    def remove(self, plan):
        '''Deletes the entity if it exists.  Honors check mode.
        :return: (changed, last known state or None)
        '''
        current = self.lookup(plan)
        if current is None:
            return False, None
        self.delete(current)
        return True, current

    def _withId(self, state):
        state['id'] = self.getId(state)
        return state

    def _withIdentity(self, state):
        '''Fills missing identifying attributes from state["id"] (the case right after an import).'''
        if all(state.get(name) for name in self.ID_LAYOUT.fields):
            return state
        if not state.get('id'):
            raise ValidationError('%s requires %s or an id of the form %s'
                                  % (self.TYPE_NAME, ', '.join(self.ID_LAYOUT.fields), self.ID_LAYOUT.example()))
        merged = dict(state)
        merged.update(self.identityFromId(state['id']))
        return merged

    def _validateIdentity(self, plan):
        missing = [name for name in self.ID_LAYOUT.fields if not plan.get(name)]
        if missing:
            raise ValidationError('%s requires %s' % (self.TYPE_NAME, ', '.join(missing)))

    def _validatePlan(self, plan):
        '''Checks attribute formats before anything is sent.  Raises ValidationError.'''
        pass

    def _validateCreate(self, plan):
        '''Checks what only a create needs, in check mode too.  Raises ValidationError.'''
        pass

    @abstractmethod
    def _createInAppTrust(self, plan):
        '''Sends the create request and returns the resulting state.'''
        pass

    @abstractmethod
    def _readFromAppTrust(self, state):
        '''Returns the refreshed state, or None when AppTrust no longer has the entity.'''
        pass

    @abstractmethod
    def _updateInAppTrust(self, plan, state):
        '''Sends the update request and returns the resulting state.'''
        pass

    @abstractmethod
    def _deleteFromAppTrust(self, state):
        '''Sends the delete request.  NotFound may propagate.'''
        pass


def ensure_resource(module, resourceClass, resultKey):
    '''Runs an entity module: applies or removes the entity named by module.params
    and exits the module with the outcome.
    '''
    result = dict(changed=False, id=None)
    result[resultKey] = None
    try:
        api = resourceClass(**connection_params(module))
        plan = api.planFromParams(module.params)
        if module.params.get('state', 'present') == 'absent':
            changed, state = api.remove(plan)
        else:
            changed, state = api.apply(plan)
    except AppTrustError as e:
        module.fail_json(msg=str(e), title=e.title, status=e.status, **result)
        return

    result['changed'] = changed
    result[resultKey] = state
    if state is not None:
        result['id'] = state['id']
    module.exit_json(**result)


def report_query(module, queryClass):
    '''Runs an _info module: queryClass(...).query(module.params) returns the
    result keys, which are reported without changes.
    '''
    try:
        api = queryClass(**connection_params(module))
        found = api.query(module.params)
    except AppTrustError as e:
        module.fail_json(msg=str(e), title=e.title, status=e.status, changed=False)
        return
    module.exit_json(changed=False, **found)
