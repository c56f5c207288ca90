#!/usr/bin/python

# Public Domain 2021, Jared Schmidt <jared.schmidt.civ@gmail.com>
# CC0 1.0 Universal license (see https://creativecommons.org/publicdomain/zero/1.0/)
# License applies only to the contents of this file, not the collection as a whole
from __future__ import (absolute_import, division, print_function)
__metaclass__ = type

DOCUMENTATION = r'''
---
module: apptrust_import

short_description: Looks up an existing AppTrust entity by its composite identifier

version_added: "1.0.0"

description:
    - Decodes I(id) according to I(resource_type) and reads the entity it names.
    - The result has the same shape as the result of the matching entity module, so it can be fed back into it.
    - Fails when the identifier is malformed or the entity does not exist.  Nothing is changed.
    - Promotions, releases and rollbacks leave no record in AppTrust, so they are rebuilt from the identifier alone.

options:
    resource_type:
        description: The kind of entity the identifier names.
        choices:
          - apptrust_application
          - apptrust_application_version
          - apptrust_bound_package
          - apptrust_application_version_promotion
          - apptrust_application_version_release
          - apptrust_application_version_rollback
        type: str
        required: true
    id:
        description:
          - Colon separated identifier, e.g. C(payments), C(payments:1.4.0), C(payments:maven:com.example:ledger:2.0.1)
            or C(payments:1.4.0:QA).
        type: str
        required: true

extends_documentation_fragment:
    - jfrog.apptrust.apptrust_common_docs

author:
    - Jared Schmidt (@jared-schmidt-civ)
'''

EXAMPLES = r'''
- name: Import a bound package
  jfrog.apptrust.apptrust_import:
    resource_type: apptrust_bound_package
    id: payments:maven:com.example:ledger:2.0.1
    base_url: https://mycompany.jfrog.io
    auth_string: "{{ access_token }}"
  register: binding
'''

RETURN = r'''
id:
    description: Identifier rebuilt from the entity's attributes.
    type: str
    returned: success
entity:
    description: The entity that was read.
    type: dict
    returned: success
'''

from ansible.module_utils.basic import AnsibleModule
from ansible_collections.jfrog.apptrust.plugins.module_utils.AppTrustApi import common_argument_spec, connection_params
from ansible_collections.jfrog.apptrust.plugins.module_utils.AppTrustErrors import AppTrustError, NotFound
from ansible_collections.jfrog.apptrust.plugins.module_utils.AppTrustResources import resource_types


def run_module():
    types = resource_types()
    module_args = common_argument_spec()
    module_args.update(
        resource_type=dict(type='str', required=True, choices=sorted(types)),
        id=dict(type='str', required=True),
    )

    module = AnsibleModule(
        argument_spec=module_args,
        supports_check_mode=True
    )

    result = dict(changed=False)
    resourceClass = types[module.params['resource_type']]
    try:
        api = resourceClass(**connection_params(module))
        entity = api.importState(module.params['id'])
        if entity is None:
            raise NotFound("Cannot import non-existent remote object: %s '%s' was not found"
                           % (api.RESOURCE_LABEL, module.params['id']), 404)
    except AppTrustError as e:
        module.fail_json(msg=str(e), title=e.title, status=e.status, **result)
        return

    result['id'] = entity['id']
    result['entity'] = entity
    module.exit_json(**result)


def main():
    run_module()


if __name__ == '__main__':
    main()
