#!/usr/bin/python

# Public Domain 2021, Jared Schmidt <jared.schmidt.civ@gmail.com>
# CC0 1.0 Universal license (see https://creativecommons.org/publicdomain/zero/1.0/)
# License applies only to the contents of this file, not the collection as a whole
from __future__ import (absolute_import, division, print_function)
__metaclass__ = type

DOCUMENTATION = r'''
---
module: apptrust_application_version_rollback

short_description: Rolls back the latest promotion of an AppTrust application version

version_added: "1.0.0"

description:
    - Rolls an application version back out of I(from_stage).
    - Nothing is sent when the promotion history shows the version reached I(from_stage) and has left it since.
    - Otherwise the rollback is sent and AppTrust reports whether it is possible.

options:
    id:
        description:
          - Identifier of a rollback, application_key:version:from_stage.
          - Replaces I(application_key), I(version) and I(from_stage).
        type: str
    application_key:
        description: The application key.
        type: str
    version:
        description: The application version to roll back.
        type: str
    from_stage:
        description: Stage from which to roll back (e.g. QA, PROD).
        type: str

extends_documentation_fragment:
    - jfrog.apptrust.apptrust_common_docs

author:
    - Jared Schmidt (@jared-schmidt-civ)
'''

EXAMPLES = r'''
- name: Roll 1.4.0 back out of QA
  jfrog.apptrust.apptrust_application_version_rollback:
    id: payments:1.4.0:QA
    base_url: https://mycompany.jfrog.io
    auth_string: "{{ access_token }}"
'''

RETURN = r'''
id:
    description: Identifier of the rollback, application_key:version:from_stage.
    type: str
    returned: always
    sample: payments:1.4.0:QA
rollback:
    description: The rollback that was requested.
    type: dict
    returned: always
'''

from ansible.module_utils.basic import AnsibleModule
from ansible_collections.jfrog.apptrust.plugins.module_utils.AppTrustApi import common_argument_spec, ensure_resource
from ansible_collections.jfrog.apptrust.plugins.module_utils.AppTrustResources import ApplicationVersionRollbackResource


def run_module():
    module_args = common_argument_spec()
    module_args.update(
        id=dict(type='str', required=False),
        application_key=dict(type='str', required=False),
        version=dict(type='str', required=False),
        from_stage=dict(type='str', required=False),
    )

    module = AnsibleModule(
        argument_spec=module_args,
        mutually_exclusive=[('id', 'application_key'), ('id', 'version'), ('id', 'from_stage')],
        required_one_of=[('id', 'application_key')],
        required_together=[('application_key', 'version', 'from_stage')],
        supports_check_mode=True
    )

    ensure_resource(module, ApplicationVersionRollbackResource, 'rollback')


def main():
    run_module()


if __name__ == '__main__':
    main()
