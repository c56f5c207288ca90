#!/usr/bin/python

# Public Domain 2021, Jared Schmidt <jared.schmidt.civ@gmail.com>
# CC0 1.0 Universal license (see https://creativecommons.org/publicdomain/zero/1.0/)
# License applies only to the contents of this file, not the collection as a whole
from __future__ import (absolute_import, division, print_function)
__metaclass__ = type

DOCUMENTATION = r'''
---
module: apptrust_application_versions_info

short_description: Lists the versions of an AppTrust application

version_added: "1.0.0"

description:
    - Returns the versions of an application.  An unknown application yields no versions.

options:
    application_key:
        description: The application key.
        type: str
        required: true
    created_by:
        description: Only versions created by this user.
        type: str
    release_status:
        description: Only versions with this release status (e.g. pre_release, released, trusted_release).
        type: str
    tag:
        description: Only versions with this tag.
        type: str
    offset:
        description: Number of records to skip.
        type: int
    limit:
        description: Maximum number of versions to return.
        type: int
    order_asc:
        description: Ascending instead of descending order.
        type: bool

extends_documentation_fragment:
    - jfrog.apptrust.apptrust_common_docs

author:
    - Jared Schmidt (@jared-schmidt-civ)
'''

EXAMPLES = r'''
- name: List released versions
  jfrog.apptrust.apptrust_application_versions_info:
    application_key: payments
    release_status: released
    base_url: https://mycompany.jfrog.io
    auth_string: "{{ access_token }}"
'''

RETURN = r'''
versions:
    description: The matching versions.
    type: list
    elements: dict
    returned: success
    sample:
        - version: 1.4.0
          tag: release/1.4
          status: COMPLETED
          release_status: released
          current_stage: PROD
          created_by: alice
          created: "2025-01-10T12:00:00Z"
total:
    description: Total number of matching versions reported by AppTrust.
    type: int
    returned: success
'''

from ansible.module_utils.basic import AnsibleModule
from ansible_collections.jfrog.apptrust.plugins.module_utils.AppTrustApi import AppTrustApi, common_argument_spec, report_query
from ansible_collections.jfrog.apptrust.plugins.module_utils.AppTrustErrors import NotFound
from ansible_collections.jfrog.apptrust.plugins.module_utils.AppTrustResources import APPLICATION_VERSIONS_ENDPOINT

FILTERS = ('created_by', 'release_status', 'tag', 'offset', 'limit', 'order_asc')
VERSION_FIELDS = ('version', 'tag', 'status', 'release_status', 'current_stage', 'created_by', 'created')


def run_module():
    module_args = common_argument_spec()
    module_args.update(
        application_key=dict(type='str', required=True),
        created_by=dict(type='str', required=False),
        release_status=dict(type='str', required=False),
        tag=dict(type='str', required=False),
        offset=dict(type='int', required=False),
        limit=dict(type='int', required=False),
        order_asc=dict(type='bool', required=False),
    )

    module = AnsibleModule(
        argument_spec=module_args,
        supports_check_mode=True
    )

    report_query(module, ApplicationVersionsQuery)


def main():
    run_module()


class ApplicationVersionsQuery(AppTrustApi):
    RESOURCE_LABEL = 'application versions'

    def query(self, params):
        path = self._path(APPLICATION_VERSIONS_ENDPOINT, application_key=params['application_key'])
        try:
            found = self._sendRequest('GET', path, query=self._queryParams(params, FILTERS))
        except NotFound:
            self._debug('Application %s not found, reporting no versions' % params['application_key'])
            return dict(versions=list(), total=0)
        found = found or dict()
        versions = [dict((name, item.get(name)) for name in VERSION_FIELDS) for item in found.get('versions') or list()]
        return dict(versions=versions, total=found.get('total', 0))


if __name__ == '__main__':
    main()
