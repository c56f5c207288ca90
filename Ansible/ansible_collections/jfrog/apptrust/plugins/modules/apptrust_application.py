#!/usr/bin/python

# Public Domain 2021, Jared Schmidt <jared.schmidt.civ@gmail.com>
# CC0 1.0 Universal license (see https://creativecommons.org/publicdomain/zero/1.0/)
# License applies only to the contents of this file, not the collection as a whole
from __future__ import (absolute_import, division, print_function)
__metaclass__ = type

DOCUMENTATION = r'''
---
module: apptrust_application

short_description: Creates, updates, and deletes AppTrust applications

version_added: "1.0.0"

description:
    - Applications are business-aware entities that serve as a centralized system of record for
      software assets throughout their lifecycle.
    - Optional options that are left out are cleared on the server when they were previously set.
      Setting an option to an empty value ("", [] or {}) also clears it on the server but keeps the
      empty value in the returned application.

options:
    application_key:
        description:
          - The application key.  2-64 lowercase alphanumeric characters and hyphens, beginning with a letter.
          - Cannot be changed after creation.
        type: str
    application_name:
        description:
          - The application display name, unique within the project.  1-255 characters.
          - Required when I(state=present).
        type: str
    project_key:
        description:
          - The key of the project the application belongs to.  Cannot be changed after creation.
          - Required when I(state=present).
        type: str
    description:
        description: A free-text description of the application.
        type: str
    maturity_level:
        description: The maturity level of the application.  Reported as C(unspecified) when not set.
        choices: [unspecified, experimental, production, end_of_life]
        type: str
    criticality:
        description: How critical the application is for the business.  Reported as C(unspecified) when not set.
        choices: [unspecified, low, medium, high, critical]
        type: str
    labels:
        description: Key-value pairs for labeling the application.
        type: dict
    user_owners:
        description: Users of the project who own the application.
        type: list
        elements: str
    group_owners:
        description: Groups of the project who own the application.
        type: list
        elements: str

extends_documentation_fragment:
    - jfrog.apptrust.apptrust_common_docs
    - jfrog.apptrust.apptrust_common_docs.state

author:
    - Jared Schmidt (@jared-schmidt-civ)
'''

EXAMPLES = r'''
- name: Add or update an application
  jfrog.apptrust.apptrust_application:
    application_key: payments
    application_name: Payments Service
    project_key: fintech
    description: Card payment processing
    maturity_level: production
    criticality: high
    labels:
      team: checkout
    user_owners:
      - alice
    base_url: https://mycompany.jfrog.io
    auth_string: "{{ access_token }}"

- name: Look up an application by id and delete it
  jfrog.apptrust.apptrust_application:
    id: payments
    state: absent
    base_url: https://mycompany.jfrog.io
    auth_string: "{{ access_token }}"
'''

RETURN = r'''
id:
    description: Identifier of the application (its key).
    type: str
    returned: always
    sample: payments
application:
    description: The application after execution.  Null when it is absent.
    type: dict
    returned: always
    sample:
        application_key: payments
        application_name: Payments Service
        project_key: fintech
        description: Card payment processing
        maturity_level: production
        criticality: high
        labels: {team: checkout}
        user_owners: [alice]
        group_owners: null
        id: payments
'''

from ansible.module_utils.basic import AnsibleModule
from ansible_collections.jfrog.apptrust.plugins.module_utils.AppTrustApi import common_argument_spec, ensure_resource
from ansible_collections.jfrog.apptrust.plugins.module_utils.AppTrustResources import (
    CRITICALITY_LEVELS,
    MATURITY_LEVELS,
    ApplicationResource,
)


def run_module():
    # define available arguments/parameters a user can pass to the module
    module_args = common_argument_spec()
    module_args.update(
        id=dict(type='str', required=False),
        state=dict(type='str', default='present', choices=['present', 'absent']),
        application_key=dict(type='str', required=False),
        application_name=dict(type='str', required=False),
        project_key=dict(type='str', required=False),
        description=dict(type='str', required=False),
        maturity_level=dict(type='str', required=False, choices=list(MATURITY_LEVELS)),
        criticality=dict(type='str', required=False, choices=list(CRITICALITY_LEVELS)),
        labels=dict(type='dict', required=False),
        user_owners=dict(type='list', elements='str', required=False),
        group_owners=dict(type='list', elements='str', required=False),
    )

    module = AnsibleModule(
        argument_spec=module_args,
        mutually_exclusive=[('id', 'application_key')],
        required_one_of=[('id', 'application_key')],
        required_if=[('state', 'present', ('application_name', 'project_key'))],
        supports_check_mode=True
    )

    ensure_resource(module, ApplicationResource, 'application')


def main():
    run_module()


if __name__ == '__main__':
    main()
