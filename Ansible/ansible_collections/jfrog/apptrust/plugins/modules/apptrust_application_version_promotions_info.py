#!/usr/bin/python

# Public Domain 2021, Jared Schmidt <jared.schmidt.civ@gmail.com>
# CC0 1.0 Universal license (see https://creativecommons.org/publicdomain/zero/1.0/)
# License applies only to the contents of this file, not the collection as a whole
from __future__ import (absolute_import, division, print_function)
__metaclass__ = type

DOCUMENTATION = r'''
---
module: apptrust_application_version_promotions_info

short_description: Lists the promotions of an AppTrust application version

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
    include:
        description: Set to C(message) to return the messages of each promotion.
        type: str
    offset:
        description: Number of records to skip.
        type: int
    limit:
        description: Maximum number of promotions to return.
        type: int
    filter_by:
        description: Filter by application_version, target_stage, promoted_by, or status (success, pending, failed).
        type: str
    order_by:
        description: Order by created, created_by, version or stage.  AppTrust orders by C(created) when left out.
        type: str
    order_asc:
        description: Ascending instead of descending order.
        type: bool

extends_documentation_fragment:
    - jfrog.apptrust.apptrust_common_docs

author:
    - Jared Schmidt (@jared-schmidt-civ)
'''

EXAMPLES = r'''
- name: List failed promotions with their messages
  jfrog.apptrust.apptrust_application_version_promotions_info:
    application_key: payments
    version: 1.4.0
    include: message
    filter_by: failed
    base_url: https://mycompany.jfrog.io
    auth_string: "{{ access_token }}"
'''

RETURN = r'''
promotions:
    description: Promotion records.  C(messages) holds the message texts.
    type: list
    elements: dict
    returned: success
    sample:
        - application_key: payments
          application_version: 1.4.0
          project_key: fintech
          source_stage: DEV
          target_stage: QA
          status: COMPLETED
          created: "2025-01-10T12:00:00Z"
          created_by: alice
          created_millis: 1736510400000
          messages: []
total:
    description: Total number of promotions.
    type: int
    returned: success
limit:
    description: Page size AppTrust applied.
    type: int
    returned: success
offset:
    description: Number of records AppTrust skipped.
    type: int
    returned: success
'''

from ansible.module_utils.basic import AnsibleModule
from ansible_collections.jfrog.apptrust.plugins.module_utils.AppTrustApi import AppTrustApi, common_argument_spec, report_query
from ansible_collections.jfrog.apptrust.plugins.module_utils.AppTrustResources import APPLICATION_VERSION_PROMOTIONS_ENDPOINT

FILTERS = ('include', 'offset', 'limit', 'filter_by', 'order_by', 'order_asc')
PROMOTION_FIELDS = ('application_key', 'application_version', 'project_key', 'source_stage', 'target_stage',
                    'status', 'created', 'created_by', 'created_millis')


def run_module():
    module_args = common_argument_spec()
    module_args.update(
        application_key=dict(type='str', required=True),
        version=dict(type='str', required=True),
        include=dict(type='str', required=False),
        offset=dict(type='int', required=False),
        limit=dict(type='int', required=False),
        filter_by=dict(type='str', required=False),
        order_by=dict(type='str', required=False),
        order_asc=dict(type='bool', required=False),
    )

    module = AnsibleModule(
        argument_spec=module_args,
        supports_check_mode=True
    )

    report_query(module, PromotionsQuery)


def main():
    run_module()


class PromotionsQuery(AppTrustApi):
    RESOURCE_LABEL = 'application version promotions'

    def query(self, params):
        path = self._path(APPLICATION_VERSION_PROMOTIONS_ENDPOINT, application_key=params['application_key'],
                          version=params['version'])
        found = self._sendRequest('GET', path, query=self._queryParams(params, FILTERS)) or dict()
        promotions = list()
        for record in found.get('promotions') or list():
            promotion = dict((name, record.get(name)) for name in PROMOTION_FIELDS)
            promotion['messages'] = [message.get('text') for message in record.get('messages') or list()]
            promotions.append(promotion)
        return dict(promotions=promotions, total=found.get('total', 0), limit=found.get('limit', 0),
                    offset=found.get('offset', 0))


if __name__ == '__main__':
    main()
