#!/usr/bin/python

# Public Domain 2021, Jared Schmidt <jared.schmidt.civ@gmail.com>
# CC0 1.0 Universal license (see https://creativecommons.org/publicdomain/zero/1.0/)
# License applies only to the contents of this file, not the collection as a whole
from __future__ import (absolute_import, division, print_function)
__metaclass__ = type

DOCUMENTATION = r'''
---
module: apptrust_applications_info

short_description: Lists AppTrust applications

version_added: "1.0.0"

description:
    - Returns the applications matching the given filters.  No match is an empty list, not a failure.

options:
    project_key:
        description: Only applications of this project.  All projects when left out.
        type: str
    name:
        description: Filters by application name.
        type: str
    owners:
        description: Filters by application owners (users or groups).
        type: list
        elements: str
    maturity_level:
        description: Filters by maturity level.
        choices: [unspecified, experimental, production, end_of_life]
        type: str
    criticality:
        description: Filters by criticality.
        choices: [unspecified, low, medium, high, critical]
        type: str
    labels:
        description: Filters by labels in the format C(key:value).
        type: list
        elements: str
    order_by:
        description: Orders the applications by name or creation time.  AppTrust orders by C(created) when left out.
        choices: [name, created]
        type: str
    order_asc:
        description: Ascending instead of descending order.
        type: bool
    offset:
        description: Number of records to skip.
        type: int
    limit:
        description: Maximum number of applications to return.  AppTrust returns 100 when left out.
        type: int

extends_documentation_fragment:
    - jfrog.apptrust.apptrust_common_docs

author:
    - Jared Schmidt (@jared-schmidt-civ)
'''

EXAMPLES = r'''
- name: List production applications of the fintech project
  jfrog.apptrust.apptrust_applications_info:
    project_key: fintech
    maturity_level: production
    labels:
      - team:checkout
    base_url: https://mycompany.jfrog.io
    auth_string: "{{ access_token }}"
'''

RETURN = r'''
applications:
    description: The matching applications.
    type: list
    elements: dict
    returned: success
    sample:
        - application_key: payments
          application_name: Payments Service
          project_key: fintech
total:
    description: Number of applications returned.
    type: int
    returned: success
offset:
    description: The offset that was requested, 0 by default.
    type: int
    returned: success
limit:
    description: The limit that was requested, 0 when left out.
    type: int
    returned: success
'''

from ansible.module_utils.basic import AnsibleModule
from ansible_collections.jfrog.apptrust.plugins.module_utils.AppTrustApi import AppTrustApi, common_argument_spec, report_query
from ansible_collections.jfrog.apptrust.plugins.module_utils.AppTrustErrors import NotFound
from ansible_collections.jfrog.apptrust.plugins.module_utils.AppTrustResources import (
    APPLICATIONS_ENDPOINT,
    CRITICALITY_LEVELS,
    MATURITY_LEVELS,
)

# (module option, query parameter)
FILTERS = (
    'project_key',
    'name',
    ('maturity_level', 'maturity'),
    'criticality',
    'order_by',
    'order_asc',
    'offset',
    'limit',
    ('owners', 'owner'),
    ('labels', 'label'),
)


def run_module():
    module_args = common_argument_spec()
    module_args.update(
        project_key=dict(type='str', required=False),
        name=dict(type='str', required=False),
        owners=dict(type='list', elements='str', required=False),
        maturity_level=dict(type='str', required=False, choices=list(MATURITY_LEVELS)),
        criticality=dict(type='str', required=False, choices=list(CRITICALITY_LEVELS)),
        labels=dict(type='list', elements='str', required=False),
        order_by=dict(type='str', required=False, choices=['name', 'created']),
        order_asc=dict(type='bool', required=False),
        offset=dict(type='int', required=False),
        limit=dict(type='int', required=False),
    )

    module = AnsibleModule(
        argument_spec=module_args,
        supports_check_mode=True
    )

    report_query(module, ApplicationsQuery)


def main():
    run_module()


class ApplicationsQuery(AppTrustApi):
    '''The list endpoint answers with a bare array and no pagination data, so
    total is the number of entries and offset/limit echo the request.
    '''

    RESOURCE_LABEL = 'applications'

    def query(self, params):
        try:
            found = self._sendRequest('GET', APPLICATIONS_ENDPOINT, query=self._queryParams(params, FILTERS))
        except NotFound:
            self._debug('No applications found')
            found = list()
        applications = [dict(application_key=app.get('application_key'),
                             application_name=app.get('application_name'),
                             project_key=app.get('project_key')) for app in found or list()]
        return dict(
            applications=applications,
            total=len(applications),
            offset=params.get('offset') or 0,
            limit=params.get('limit') or 0,
        )


if __name__ == '__main__':
    main()
