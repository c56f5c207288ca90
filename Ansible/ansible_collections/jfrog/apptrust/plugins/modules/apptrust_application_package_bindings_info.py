#!/usr/bin/python

# Public Domain 2021, Jared Schmidt <jared.schmidt.civ@gmail.com>
# CC0 1.0 Universal license (see https://creativecommons.org/publicdomain/zero/1.0/)
# License applies only to the contents of this file, not the collection as a whole
from __future__ import (absolute_import, division, print_function)
__metaclass__ = type

DOCUMENTATION = r'''
---
module: apptrust_application_package_bindings_info

short_description: Lists the packages bound to an AppTrust application

version_added: "1.0.0"

description:
    - Returns the packages bound to an application.  An unknown application yields no packages.

options:
    application_key:
        description: The application key.
        type: str
        required: true
    name:
        description: Filters by package name.
        type: str
    type:
        description: Filters by package type.
        type: str
    offset:
        description: Number of records to skip.
        type: int
    limit:
        description: Maximum number of packages to return.
        type: int

extends_documentation_fragment:
    - jfrog.apptrust.apptrust_common_docs

author:
    - Jared Schmidt (@jared-schmidt-civ)
'''

EXAMPLES = r'''
- name: List the docker packages of payments
  jfrog.apptrust.apptrust_application_package_bindings_info:
    application_key: payments
    type: docker
    base_url: https://mycompany.jfrog.io
    auth_string: "{{ access_token }}"
'''

RETURN = r'''
packages:
    description: Bound packages.
    type: list
    elements: dict
    returned: success
    sample:
        - name: payments-api
          type: docker
          num_versions: 3
          latest_version: 1.4.0
pagination:
    description: Paging of the result.  Without paging data from AppTrust, total_items is the number of packages.
    type: dict
    returned: success
    sample: {offset: 0, limit: 0, total_items: 1}
'''

from ansible.module_utils.basic import AnsibleModule
from ansible_collections.jfrog.apptrust.plugins.module_utils.AppTrustApi import AppTrustApi, common_argument_spec, report_query
from ansible_collections.jfrog.apptrust.plugins.module_utils.AppTrustErrors import NotFound
from ansible_collections.jfrog.apptrust.plugins.module_utils.AppTrustResources import APPLICATION_PACKAGES_ENDPOINT

FILTERS = ('name', 'type', 'offset', 'limit')
PACKAGE_FIELDS = ('name', 'type', 'num_versions', 'latest_version')


def run_module():
    module_args = common_argument_spec()
    module_args.update(
        application_key=dict(type='str', required=True),
        name=dict(type='str', required=False),
        type=dict(type='str', required=False),
        offset=dict(type='int', required=False),
        limit=dict(type='int', required=False),
    )

    module = AnsibleModule(
        argument_spec=module_args,
        supports_check_mode=True
    )

    report_query(module, PackageBindingsQuery)


def main():
    run_module()


class PackageBindingsQuery(AppTrustApi):
    RESOURCE_LABEL = 'application package bindings'

    def query(self, params):
        path = self._path(APPLICATION_PACKAGES_ENDPOINT, application_key=params['application_key'])
        try:
            found = self._sendRequest('GET', path, query=self._queryParams(params, FILTERS)) or dict()
        except NotFound:
            self._debug('Application %s not found, reporting no packages' % params['application_key'])
            found = dict()
        packages = [dict((name, item.get(name)) for name in PACKAGE_FIELDS) for item in found.get('packages') or list()]
        pagination = found.get('pagination')
        if pagination:
            pagination = dict(offset=pagination.get('offset', 0), limit=pagination.get('limit', 0),
                              total_items=pagination.get('total_items', 0))
        else:
            pagination = dict(offset=0, limit=0, total_items=len(packages))
        return dict(packages=packages, pagination=pagination)


if __name__ == '__main__':
    main()
