#!/usr/bin/python

# Public Domain 2021, Jared Schmidt <jared.schmidt.civ@gmail.com>
# CC0 1.0 Universal license (see https://creativecommons.org/publicdomain/zero/1.0/)
# License applies only to the contents of this file, not the collection as a whole
from __future__ import (absolute_import, division, print_function)
__metaclass__ = type

DOCUMENTATION = r'''
---
module: apptrust_bound_package_versions_info

short_description: Lists the bound versions of a package of an AppTrust application

version_added: "1.0.0"

description:
    - Returns the versions of a package that are bound to an application.  An unknown package yields no versions.

options:
    application_key:
        description: The application key.
        type: str
        required: true
    package_type:
        description: Package type.
        type: str
        required: true
    package_name:
        description: Package name.
        type: str
        required: true
    package_version:
        description: Only this package version.
        type: str
    offset:
        description: Number of records to skip.
        type: int
    limit:
        description: Maximum number of versions to return.
        type: int

extends_documentation_fragment:
    - jfrog.apptrust.apptrust_common_docs

author:
    - Jared Schmidt (@jared-schmidt-civ)
'''

EXAMPLES = r'''
- name: List bound versions of the ledger package
  jfrog.apptrust.apptrust_bound_package_versions_info:
    application_key: payments
    package_type: maven
    package_name: com.example:ledger
    base_url: https://mycompany.jfrog.io
    auth_string: "{{ access_token }}"
'''

RETURN = r'''
versions:
    description: Bound versions with their source control details.
    type: list
    elements: dict
    returned: success
    sample:
        - version: 2.0.1
          vcs_url: https://git.example.com/ledger.git
          vcs_branch: main
          vcs_revision: 3f2c1a9
total:
    description: Total number of bound versions reported by AppTrust.
    type: int
    returned: success
'''

from ansible.module_utils.basic import AnsibleModule
from ansible_collections.jfrog.apptrust.plugins.module_utils.AppTrustApi import AppTrustApi, common_argument_spec, report_query
from ansible_collections.jfrog.apptrust.plugins.module_utils.AppTrustErrors import NotFound
from ansible_collections.jfrog.apptrust.plugins.module_utils.AppTrustResources import APPLICATION_PACKAGE_VERSIONS_ENDPOINT

FILTERS = ('package_version', 'offset', 'limit')


def run_module():
    module_args = common_argument_spec()
    module_args.update(
        application_key=dict(type='str', required=True),
        package_type=dict(type='str', required=True),
        package_name=dict(type='str', required=True),
        package_version=dict(type='str', required=False),
        offset=dict(type='int', required=False),
        limit=dict(type='int', required=False),
    )

    module = AnsibleModule(
        argument_spec=module_args,
        supports_check_mode=True
    )

    report_query(module, BoundPackageVersionsQuery)


def main():
    run_module()


class BoundPackageVersionsQuery(AppTrustApi):
    RESOURCE_LABEL = 'bound package versions'

    def query(self, params):
        path = self._path(APPLICATION_PACKAGE_VERSIONS_ENDPOINT, application_key=params['application_key'],
                          type=params['package_type'], name=params['package_name'])
        try:
            found = self._sendRequest('GET', path, query=self._queryParams(params, FILTERS)) or dict()
        except NotFound:
            return dict(versions=list(), total=0)
        versions = list()
        for item in found.get('versions') or list():
            # Older servers report branch/revision instead of vcs_branch/vcs_revision
            versions.append(dict(
                version=item.get('version'),
                vcs_url=item.get('vcs_url'),
                vcs_branch=item.get('vcs_branch') or item.get('branch'),
                vcs_revision=item.get('vcs_revision') or item.get('revision'),
            ))
        return dict(versions=versions, total=found.get('total', 0))


if __name__ == '__main__':
    main()
