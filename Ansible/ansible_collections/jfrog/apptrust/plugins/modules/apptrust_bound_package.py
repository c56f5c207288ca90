#!/usr/bin/python

# Public Domain 2021, Jared Schmidt <jared.schmidt.civ@gmail.com>
# CC0 1.0 Universal license (see https://creativecommons.org/publicdomain/zero/1.0/)
# License applies only to the contents of this file, not the collection as a whole
from __future__ import (absolute_import, division, print_function)
__metaclass__ = type

DOCUMENTATION = r'''
---
module: apptrust_bound_package

short_description: Binds package versions to AppTrust applications

version_added: "1.0.0"

description:
    - Binds a package version to an application, or removes the binding.
    - A package version can be bound to only one application.

options:
    application_key:
        description: The application key.
        type: str
    package_type:
        description: Package type (e.g. maven, docker, npm, generic).
        type: str
    package_name:
        description: Package name.  May contain colons, e.g. a maven C(group:artifact).
        type: str
    package_version:
        description: Package version.
        type: str

extends_documentation_fragment:
    - jfrog.apptrust.apptrust_common_docs
    - jfrog.apptrust.apptrust_common_docs.state

author:
    - Jared Schmidt (@jared-schmidt-civ)
'''

EXAMPLES = r'''
- name: Bind a maven package version
  jfrog.apptrust.apptrust_bound_package:
    application_key: payments
    package_type: maven
    package_name: com.example:ledger
    package_version: 2.0.1
    base_url: https://mycompany.jfrog.io
    auth_string: "{{ access_token }}"

- name: Unbind it again using its id
  jfrog.apptrust.apptrust_bound_package:
    id: payments:maven:com.example:ledger:2.0.1
    state: absent
    base_url: https://mycompany.jfrog.io
    auth_string: "{{ access_token }}"
'''

RETURN = r'''
id:
    description: Identifier of the binding, application_key:package_type:package_name:package_version.
    type: str
    returned: always
    sample: payments:maven:com.example:ledger:2.0.1
bound_package:
    description: The binding after execution.  Null when it is absent.
    type: dict
    returned: always
'''

from ansible.module_utils.basic import AnsibleModule
from ansible_collections.jfrog.apptrust.plugins.module_utils.AppTrustApi import common_argument_spec, ensure_resource
from ansible_collections.jfrog.apptrust.plugins.module_utils.AppTrustResources import BoundPackageResource

IDENTIFYING = ('application_key', 'package_type', 'package_name', 'package_version')


def run_module():
    module_args = common_argument_spec()
    module_args.update(
        id=dict(type='str', required=False),
        state=dict(type='str', default='present', choices=['present', 'absent']),
        application_key=dict(type='str', required=False),
        package_type=dict(type='str', required=False),
        package_name=dict(type='str', required=False),
        package_version=dict(type='str', required=False),
    )

    module = AnsibleModule(
        argument_spec=module_args,
        mutually_exclusive=[('id', name) for name in IDENTIFYING],
        required_one_of=[('id', 'application_key')],
        required_together=[IDENTIFYING],
        supports_check_mode=True
    )

    ensure_resource(module, BoundPackageResource, 'bound_package')


def main():
    run_module()


if __name__ == '__main__':
    main()
