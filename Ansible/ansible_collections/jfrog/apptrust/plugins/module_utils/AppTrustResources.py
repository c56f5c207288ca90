# Public Domain: Jared Schmidt <jared.schmidt.civ@gmail.com>
# CC0 1.0 Universal license (see https://creativecommons.org/publicdomain/zero/1.0/)
# License applies only to the contents of this file, not the collection as a whole

'''
AppTrust entities managed by the collection's modules: applications, application
versions, bound packages and the promote/release/rollback actions on versions.
'''

from __future__ import (absolute_import, division, print_function)
__metaclass__ = type

import re
from abc import abstractmethod

from ansible_collections.jfrog.apptrust.plugins.module_utils.AppTrustApi import APPTRUST_API, AppTrustResource
from ansible_collections.jfrog.apptrust.plugins.module_utils.AppTrustErrors import Conflict, NotFound, ValidationError
from ansible_collections.jfrog.apptrust.plugins.module_utils.CompositeId import IdLayout
from ansible_collections.jfrog.apptrust.plugins.module_utils.FieldReconciler import (
    ListField,
    MapField,
    ScalarField,
    SentinelField,
    create_payload,
    pending_changes,
    reconcile_fields,
    update_payload,
)

APPLICATIONS_ENDPOINT = APPTRUST_API + '/applications'
APPLICATION_ENDPOINT = APPLICATIONS_ENDPOINT + '/{application_key}'
APPLICATION_VERSIONS_ENDPOINT = APPLICATION_ENDPOINT + '/versions'
APPLICATION_VERSION_ENDPOINT = APPLICATION_VERSIONS_ENDPOINT + '/{version}'
APPLICATION_VERSION_PROMOTE_ENDPOINT = APPLICATION_VERSION_ENDPOINT + '/promote'
APPLICATION_VERSION_RELEASE_ENDPOINT = APPLICATION_VERSION_ENDPOINT + '/release'
APPLICATION_VERSION_ROLLBACK_ENDPOINT = APPLICATION_VERSION_ENDPOINT + '/rollback'
APPLICATION_VERSION_STATUS_ENDPOINT = APPLICATION_VERSION_ENDPOINT + '/status'
APPLICATION_VERSION_PROMOTIONS_ENDPOINT = APPLICATION_VERSION_ENDPOINT + '/promotions'
APPLICATION_PACKAGES_ENDPOINT = APPLICATION_ENDPOINT + '/packages'
APPLICATION_PACKAGE_VERSIONS_ENDPOINT = APPLICATION_PACKAGES_ENDPOINT + '/{type}/{name}'
APPLICATION_PACKAGE_VERSION_ENDPOINT = APPLICATION_PACKAGE_VERSIONS_ENDPOINT + '/{version}'

MATURITY_LEVELS = ('unspecified', 'experimental', 'production', 'end_of_life')
CRITICALITY_LEVELS = ('unspecified', 'low', 'medium', 'high', 'critical')
APPLICATION_KEY_PATTERN = re.compile(r'^[a-z][a-z0-9\-]*[a-z0-9]$|^[a-z]$')
RELEASED_STATUSES = ('released', 'trusted_release')
UNFINISHED_PROMOTION_STATUSES = ('pending', 'failed')
DRY_RUN = 'dry_run'
VERSIONS_PAGE_LIMIT = 1000


def find_version(api, applicationKey, version):
    '''Returns the listing entry of one application version, or None.
    AppTrust has no single-version GET, so the version list is searched.
    '''
    try:
        listing = api._sendRequest('GET', api._path(APPLICATION_VERSIONS_ENDPOINT, application_key=applicationKey),
                                   query=dict(limit=VERSIONS_PAGE_LIMIT))
    except NotFound:
        return None
    for item in (listing or dict()).get('versions') or list():
        if item.get('version') == version:
            return item
    return None


class ApplicationResource(AppTrustResource):
    '''An AppTrust application.  Create POST, read GET, update PATCH, delete DELETE.'''

    TYPE_NAME = 'apptrust_application'
    RESOURCE_LABEL = 'application'
    ID_LAYOUT = IdLayout(middle='application_key')
    OPTIONAL_FIELDS = (
        ScalarField('description'),
        SentinelField('maturity_level', choices=MATURITY_LEVELS),
        SentinelField('criticality', choices=CRITICALITY_LEVELS),
        MapField('labels'),
        ListField('user_owners'),
        ListField('group_owners'),
    )
    ATTRIBUTES = ('application_key', 'application_name', 'project_key') + tuple(f.name for f in OPTIONAL_FIELDS)
    IMMUTABLE = ('application_key', 'project_key')

    def _validatePlan(self, plan):
        key = plan['application_key']
        if not 2 <= len(key) <= 64 or not APPLICATION_KEY_PATTERN.match(key):
            raise ValidationError('application_key must be 2-64 lowercase alphanumeric characters and hyphens, '
                                  'beginning with a letter (got "%s")' % key)
        if not plan.get('application_name') or len(plan['application_name']) > 255:
            raise ValidationError('application_name must be 1-255 characters long')
        if not plan.get('project_key'):
            raise ValidationError('project_key is required')
        for field in self.OPTIONAL_FIELDS:
            value = plan.get(field.name)
            if isinstance(field, SentinelField) and value and value not in field.choices:
                raise ValidationError('%s must be one of: %s (got "%s")' % (field.name, ', '.join(field.choices), value))
            if isinstance(field, ListField) and value and not all(value):
                raise ValidationError('%s entries must be at least 1 character long' % field.name)

    def _toState(self, remote, prior, desired):
        state = dict()
        for name in ('application_key', 'application_name', 'project_key'):
            state[name] = remote.get(name) or desired.get(name)
        state.update(reconcile_fields(self.OPTIONAL_FIELDS, prior, desired, remote))
        return state

    def _createInAppTrust(self, plan):
        body = dict(
            application_key=plan['application_key'],
            application_name=plan['application_name'],
            project_key=plan['project_key'],
        )
        body.update(create_payload(self.OPTIONAL_FIELDS, plan))
        try:
            result = self._sendRequest('POST', APPLICATIONS_ENDPOINT, body, operation='create')
        except Conflict as e:
            raise Conflict("An application with key '%s' already exists. Please use a different application_key."
                           % plan['application_key'], e.status, e.body)
        return self._toState(result if result is not None else plan, None, plan)

    def _readFromAppTrust(self, state):
        try:
            result = self._sendRequest('GET', self._path(APPLICATION_ENDPOINT, application_key=state['application_key']))
        except NotFound:
            return None
        return self._toState(result or dict(), state, state)

    def _updateInAppTrust(self, plan, state):
        body = dict(application_name=plan['application_name'])
        body.update(update_payload(self.OPTIONAL_FIELDS, state, plan))
        result = self._sendRequest('PATCH', self._path(APPLICATION_ENDPOINT, application_key=plan['application_key']),
                                   body, query=dict(project=plan['project_key']), operation='update')
        return self._toState(result if result is not None else plan, state, plan)

    def _deleteFromAppTrust(self, state):
        self._sendRequest('DELETE', self._path(APPLICATION_ENDPOINT, application_key=state['application_key']),
                          operation='delete')

    def pendingChanges(self, plan, current):
        changes = pending_changes(self.OPTIONAL_FIELDS, current, plan)
        if plan.get('application_name') != current.get('application_name'):
            changes.insert(0, 'application_name')
        for name in self.IMMUTABLE:
            if plan.get(name) is not None and plan.get(name) != current.get(name):
                changes.insert(0, name)
        return changes


class ApplicationVersionResource(AppTrustResource):
    '''An application version.  Sources and properties are write-only: AppTrust does
    not report them back, so they are carried over from the previous state.
    '''

    TYPE_NAME = 'apptrust_application_version'
    RESOURCE_LABEL = 'application version'
    ID_LAYOUT = IdLayout(prefix=('application_key',), middle='version')
    OPTIONAL_FIELDS = (ScalarField('tag'),)
    WRITE_ONLY = ('source_artifacts', 'source_builds', 'source_versions', 'properties', 'delete_properties')
    ATTRIBUTES = ('application_key', 'version', 'tag') + WRITE_ONLY
    IMMUTABLE = ('application_key', 'version')

    def _validatePlan(self, plan):
        tag = plan.get('tag')
        if tag and len(tag) > 128:
            raise ValidationError('tag must be at most 128 characters long')

    def _validateCreate(self, plan):
        if not self._sources(plan):
            raise ValidationError('Create application version requires at least one of source_artifacts, '
                                  'source_builds, or source_versions.')

    def _sources(self, plan):
        sources = dict()
        artifacts = list()
        for artifact in plan.get('source_artifacts') or list():
            entry = dict(path=artifact['path'])
            if artifact.get('sha256'):
                entry['sha256'] = artifact['sha256']
            artifacts.append(entry)
        if artifacts:
            sources['artifacts'] = artifacts

        builds = list()
        for build in plan.get('source_builds') or list():
            entry = dict(name=build['name'], number=build['number'])
            if build.get('include_dependencies'):
                entry['include_dependencies'] = True
            for optional in ('repository_key', 'started'):
                if build.get(optional):
                    entry[optional] = build[optional]
            builds.append(entry)
        if builds:
            sources['builds'] = builds

        versions = [dict(application_key=v['application_key'], version=v['version'])
                    for v in plan.get('source_versions') or list()]
        if versions:
            sources['versions'] = versions
        return sources

    def _toState(self, listing, prior, desired):
        state = dict(application_key=desired['application_key'], version=desired['version'])
        state.update(reconcile_fields(self.OPTIONAL_FIELDS, prior, desired, listing))
        for name in self.WRITE_ONLY:
            state[name] = desired.get(name)
        state['release_status'] = listing.get('release_status')
        state['current_stage'] = listing.get('current_stage')
        return state

    def _createInAppTrust(self, plan):
        body = dict(version=plan['version'], sources=self._sources(plan))
        body.update(create_payload(self.OPTIONAL_FIELDS, plan))
        result = self._sendRequest('POST', self._path(APPLICATION_VERSIONS_ENDPOINT, application_key=plan['application_key']),
                                   body, operation='create')
        # Creation may be asynchronous (202); whatever AppTrust echoes is used, the plan fills the rest
        echoed = dict(tag=plan.get('tag'))
        echoed.update(result or dict())
        return self._toState(echoed, None, plan)

    def _readFromAppTrust(self, state):
        found = find_version(self, state['application_key'], state['version'])
        if found is None:
            return None
        return self._toState(found, state, state)

    def _updateInAppTrust(self, plan, state):
        body = update_payload(self.OPTIONAL_FIELDS, state, plan)
        if plan.get('properties') is not None:
            body['properties'] = plan['properties']
        if plan.get('delete_properties') is not None:
            body['delete_properties'] = plan['delete_properties']
        listing = dict(tag=plan.get('tag'), release_status=state.get('release_status'), current_stage=state.get('current_stage'))
        if body:
            result = self._sendRequest('PATCH', self._path(APPLICATION_VERSION_ENDPOINT, application_key=plan['application_key'],
                                                           version=plan['version']), body, operation='update')
            listing.update(result or dict())
        return self._toState(listing, state, plan)

    def _deleteFromAppTrust(self, state):
        self._sendRequest('DELETE', self._path(APPLICATION_VERSION_ENDPOINT, application_key=state['application_key'],
                                               version=state['version']), operation='delete')

    def pendingChanges(self, plan, current):
        changes = pending_changes(self.OPTIONAL_FIELDS, current, plan)
        # Properties cannot be read back, so asking for them always means an update
        for name in ('properties', 'delete_properties'):
            if plan.get(name) is not None:
                changes.append(name)
        return changes


class BoundPackageResource(AppTrustResource):
    '''A package version bound to an application.  Every attribute is identifying.'''

    TYPE_NAME = 'apptrust_bound_package'
    RESOURCE_LABEL = 'bound package'
    ID_LAYOUT = IdLayout(prefix=('application_key', 'package_type'), middle='package_name', suffix=('package_version',))
    ATTRIBUTES = ('application_key', 'package_type', 'package_name', 'package_version')
    IMMUTABLE = ATTRIBUTES

    def _identity(self, attributes):
        return dict((name, attributes[name]) for name in self.ATTRIBUTES)

    def _createInAppTrust(self, plan):
        body = dict(
            package_type=plan['package_type'],
            package_name=plan['package_name'],
            package_version=plan['package_version'],
        )
        self._sendRequest('POST', self._path(APPLICATION_PACKAGES_ENDPOINT, application_key=plan['application_key']),
                          body, operation='create')
        return self._identity(plan)

    def _readFromAppTrust(self, state):
        path = self._path(APPLICATION_PACKAGE_VERSIONS_ENDPOINT, application_key=state['application_key'],
                          type=state['package_type'], name=state['package_name'])
        try:
            listing = self._sendRequest('GET', path, query=dict(package_version=state['package_version']))
        except NotFound:
            return None
        for item in (listing or dict()).get('versions') or list():
            if item.get('version') == state['package_version']:
                return self._identity(state)
        return None

    def _updateInAppTrust(self, plan, state):
        return self._identity(plan)

    def _deleteFromAppTrust(self, state):
        self._sendRequest('DELETE', self._path(APPLICATION_PACKAGE_VERSION_ENDPOINT, application_key=state['application_key'],
                                               type=state['package_type'], name=state['package_name'],
                                               version=state['package_version']), operation='delete')


class AppTrustVersionAction(AppTrustResource):
    '''A one-shot action on an application version.  AppTrust keeps no record that can
    be read back or deleted, so read returns the local state and delete is local only.
    apply() probes the version listing through isApplied() to stay idempotent.
    '''

    ENDPOINT = None
    OPERATION = None

    @abstractmethod
    def _body(self, plan):
        '''Returns the request body of the action.'''
        pass

    @abstractmethod
    def isApplied(self, plan, versionEntry):
        '''Tells from a version listing entry whether the action already took effect.'''
        pass

    def lookup(self, plan):
        self._validateIdentity(plan)
        found = find_version(self, plan['application_key'], plan['version'])
        if found is None or not self.isApplied(plan, found):
            return None
        return self._withId(dict(plan))

    def _createInAppTrust(self, plan):
        self._sendRequest('POST', self._path(self.ENDPOINT, application_key=plan['application_key'], version=plan['version']),
                          self._body(plan), operation=self.OPERATION)
        return dict(plan)

    def _readFromAppTrust(self, state):
        return dict(state)

    def _updateInAppTrust(self, plan, state):
        return dict(plan)

    def _deleteFromAppTrust(self, state):
        self._debug('No delete call for %s %s; dropping local state only' % (self.RESOURCE_LABEL, self.getId(state)))


class PromotionBodyMixin():

    def _body(self, plan):
        body = dict(promotion_type=plan.get('promotion_type') or 'copy')
        for name in ('included_repository_keys', 'excluded_repository_keys', 'promotion_authorization_type'):
            if plan.get(name):
                body[name] = plan[name]
        return body


class ApplicationVersionPromotionResource(PromotionBodyMixin, AppTrustVersionAction):
    TYPE_NAME = 'apptrust_application_version_promotion'
    RESOURCE_LABEL = 'application version'
    OPERATION = 'promote'
    ENDPOINT = APPLICATION_VERSION_PROMOTE_ENDPOINT
    ID_LAYOUT = IdLayout(prefix=('application_key',), middle='version', suffix=('target_stage',))
    ATTRIBUTES = ('application_key', 'version', 'target_stage', 'promotion_type', 'included_repository_keys',
                  'excluded_repository_keys', 'promotion_authorization_type')

    def _body(self, plan):
        body = dict(target_stage=plan['target_stage'])
        body.update(super()._body(plan))
        return body

    def isApplied(self, plan, versionEntry):
        if plan.get('promotion_type') == DRY_RUN:
            return False
        return versionEntry.get('current_stage') == plan['target_stage']

    def apply(self, plan):
        changed, state = super().apply(plan)
        # A dry run leaves the version where it is
        if plan.get('promotion_type') == DRY_RUN:
            return False, state
        return changed, state


class ApplicationVersionReleaseResource(PromotionBodyMixin, AppTrustVersionAction):
    TYPE_NAME = 'apptrust_application_version_release'
    RESOURCE_LABEL = 'application version'
    OPERATION = 'release'
    ENDPOINT = APPLICATION_VERSION_RELEASE_ENDPOINT
    ID_LAYOUT = IdLayout(prefix=('application_key',), middle='version')
    ATTRIBUTES = ('application_key', 'version', 'promotion_type', 'included_repository_keys',
                  'excluded_repository_keys', 'promotion_authorization_type')

    def isApplied(self, plan, versionEntry):
        return versionEntry.get('release_status') in RELEASED_STATUSES


class ApplicationVersionRollbackResource(AppTrustVersionAction):
    TYPE_NAME = 'apptrust_application_version_rollback'
    RESOURCE_LABEL = 'application version'
    OPERATION = 'rollback'
    ENDPOINT = APPLICATION_VERSION_ROLLBACK_ENDPOINT
    ID_LAYOUT = IdLayout(prefix=('application_key',), middle='version', suffix=('from_stage',))
    ATTRIBUTES = ('application_key', 'version', 'from_stage')

    def _body(self, plan):
        return dict(from_stage=plan['from_stage'])

    def isApplied(self, plan, versionEntry):
        '''A rollback took effect when the version reached from_stage and has left it since.
        Otherwise the rollback is sent and AppTrust decides.
        '''
        if versionEntry.get('current_stage') == plan['from_stage']:
            return False
        return self._reachedStage(plan)

    def _reachedStage(self, plan):
        path = self._path(APPLICATION_VERSION_PROMOTIONS_ENDPOINT, application_key=plan['application_key'],
                          version=plan['version'])
        try:
            history = self._sendRequest('GET', path, query=dict(limit=VERSIONS_PAGE_LIMIT))
        except NotFound:
            return False
        for record in (history or dict()).get('promotions') or list():
            if record.get('target_stage') == plan['from_stage'] \
                    and (record.get('status') or '').lower() not in UNFINISHED_PROMOTION_STATUSES:
                return True
        return False


def resource_types():
    '''Returns a new mapping of resource type name to its class.'''
    return dict((cls.TYPE_NAME, cls) for cls in (
        ApplicationResource,
        ApplicationVersionResource,
        BoundPackageResource,
        ApplicationVersionPromotionResource,
        ApplicationVersionReleaseResource,
        ApplicationVersionRollbackResource,
    ))
