#!/usr/bin/python

# Public Domain 2021, Jared Schmidt <jared.schmidt.civ@gmail.com>
# CC0 1.0 Universal license (see https://creativecommons.org/publicdomain/zero/1.0/)
# License applies only to the contents of this file, not the collection as a whole
from __future__ import (absolute_import, division, print_function)
__metaclass__ = type

DOCUMENTATION = r'''
---
module: apptrust_application_version_status_info

short_description: Reads the release status of an AppTrust application version

version_added: "1.0.0"

options:
    application_key:
        description: The application key.
        type: str
        required: true
    version:
        description: The application version.
        type: str
        required: true

extends_documentation_fragment:
    - jfrog.apptrust.apptrust_common_docs

author:
    - Jared Schmidt (@jared-schmidt-civ)
'''

EXAMPLES = r'''
- name: Check whether 1.4.0 is released
  jfrog.apptrust.apptrust_application_version_status_info:
    application_key: payments
    version: 1.4.0
    base_url: https://mycompany.jfrog.io
    auth_string: "{{ access_token }}"
'''

RETURN = r'''
version_release_status:
    description: Release status of the version.  Null when the version does not exist.
    type: str
    returned: success
    sample: released
'''

from ansible.module_utils.basic import AnsibleModule
from ansible_collections.jfrog.apptrust.plugins.module_utils.AppTrustApi import AppTrustApi, common_argument_spec, report_query
from ansible_collections.jfrog.apptrust.plugins.module_utils.AppTrustErrors import NotFound
from ansible_collections.jfrog.apptrust.plugins.module_utils.AppTrustResources import APPLICATION_VERSION_STATUS_ENDPOINT


def run_module():
    module_args = common_argument_spec()
    module_args.update(
        application_key=dict(type='str', required=True),
        version=dict(type='str', required=True),
    )

    module = AnsibleModule(
        argument_spec=module_args,
        supports_check_mode=True
    )

    report_query(module, VersionStatusQuery)


def main():
    run_module()


class VersionStatusQuery(AppTrustApi):
    RESOURCE_LABEL = 'application version status'

    def query(self, params):
        path = self._path(APPLICATION_VERSION_STATUS_ENDPOINT, application_key=params['application_key'],
                          version=params['version'])
        try:
            found = self._sendRequest('GET', path)
        except NotFound:
            return dict(version_release_status=None)
        return dict(version_release_status=(found or dict()).get('version_release_status'))


if __name__ == '__main__':
    main()
