#!/usr/bin/python

# Public Domain 2021, Jared Schmidt <jared.schmidt.civ@gmail.com>
# CC0 1.0 Universal license (see https://creativecommons.org/publicdomain/zero/1.0/)
# License applies only to the contents of this file, not the collection as a whole
from __future__ import (absolute_import, division, print_function)
__metaclass__ = type

DOCUMENTATION = r'''
---
module: apptrust_application_info

short_description: Reads one AppTrust application

version_added: "1.0.0"

description:
    - Returns the details of an application.  Fails when the application does not exist.
    - Unset values are returned as null, including a C(unspecified) maturity level or criticality.

options:
    application_key:
        description: The application key.
        type: str
        required: true

extends_documentation_fragment:
    - jfrog.apptrust.apptrust_common_docs

author:
    - Jared Schmidt (@jared-schmidt-civ)
'''

EXAMPLES = r'''
- name: Read the payments application
  jfrog.apptrust.apptrust_application_info:
    application_key: payments
    base_url: https://mycompany.jfrog.io
    auth_string: "{{ access_token }}"
  register: payments
'''

RETURN = r'''
application:
    description: The application.
    type: dict
    returned: success
    sample:
        application_key: payments
        application_name: Payments Service
        project_key: fintech
        description: null
        maturity_level: production
        criticality: null
        labels: {team: checkout}
        user_owners: [alice]
        group_owners: null
'''

from ansible.module_utils.basic import AnsibleModule
from ansible_collections.jfrog.apptrust.plugins.module_utils.AppTrustApi import AppTrustApi, common_argument_spec, report_query
from ansible_collections.jfrog.apptrust.plugins.module_utils.AppTrustErrors import NotFound
from ansible_collections.jfrog.apptrust.plugins.module_utils.AppTrustResources import APPLICATION_ENDPOINT

UNSET_MARKER = 'unspecified'


def run_module():
    module_args = common_argument_spec()
    module_args.update(
        application_key=dict(type='str', required=True),
    )

    module = AnsibleModule(
        argument_spec=module_args,
        supports_check_mode=True
    )

    report_query(module, ApplicationQuery)


def main():
    run_module()


class ApplicationQuery(AppTrustApi):
    RESOURCE_LABEL = 'application'

    def query(self, params):
        key = params['application_key']
        try:
            found = self._sendRequest('GET', self._path(APPLICATION_ENDPOINT, application_key=key))
        except NotFound as e:
            raise NotFound("Application with key '%s' was not found." % key, e.status, e.body)
        return dict(application=self._toApplication(found or dict()))

    def _toApplication(self, found):
        application = dict(
            application_key=found.get('application_key'),
            application_name=found.get('application_name'),
            project_key=found.get('project_key'),
        )
        for name in ('description', 'labels', 'user_owners', 'group_owners'):
            application[name] = found.get(name) or None
        for name in ('maturity_level', 'criticality'):
            value = found.get(name)
            application[name] = value if value and value != UNSET_MARKER else None
        return application


if __name__ == '__main__':
    main()
