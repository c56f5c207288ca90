#!/usr/bin/python

# Public Domain 2021, Jared Schmidt <jared.schmidt.civ@gmail.com>
# CC0 1.0 Universal license (see https://creativecommons.org/publicdomain/zero/1.0/)
# License applies only to the contents of this file, not the collection as a whole
from __future__ import (absolute_import, division, print_function)
__metaclass__ = type

DOCUMENTATION = r'''
---
module: apptrust_application_version_promotion

short_description: Promotes an AppTrust application version to a lifecycle stage

version_added: "1.0.0"

description:
    - Promotes an application version to a target lifecycle stage.
    - Nothing is sent when the version is already in I(target_stage).

options:
    id:
        description:
          - Identifier of a promotion, application_key:version:target_stage.
          - Replaces I(application_key), I(version) and I(target_stage).
        type: str
    application_key:
        description: The application key.
        type: str
    version:
        description: The application version to promote.
        type: str
    target_stage:
        description: Target lifecycle stage (e.g. QA, PROD).
        type: str
    promotion_type:
        description:
          - How artifacts are promoted.  AppTrust uses C(copy) when it is left out.
          - C(dry_run) is sent on every run and never reports a change.
        choices: [move, copy, keep, dry_run]
        type: str
    included_repository_keys:
        description: Repository keys to include in the promotion.
        type: list
        elements: str
    excluded_repository_keys:
        description: Repository keys to exclude from the promotion.
        type: list
        elements: str
    promotion_authorization_type:
        description: Promotion authorization type.
        type: str

extends_documentation_fragment:
    - jfrog.apptrust.apptrust_common_docs

author:
    - Jared Schmidt (@jared-schmidt-civ)
'''

EXAMPLES = r'''
- name: Promote 1.4.0 to QA
  jfrog.apptrust.apptrust_application_version_promotion:
    application_key: payments
    version: 1.4.0
    target_stage: QA
    promotion_type: move
    base_url: https://mycompany.jfrog.io
    auth_string: "{{ access_token }}"
'''

RETURN = r'''
id:
    description: Identifier of the promotion, application_key:version:target_stage.
    type: str
    returned: always
    sample: payments:1.4.0:QA
promotion:
    description: The promotion that was requested.
    type: dict
    returned: always
'''

from ansible.module_utils.basic import AnsibleModule
from ansible_collections.jfrog.apptrust.plugins.module_utils.AppTrustApi import common_argument_spec, ensure_resource
from ansible_collections.jfrog.apptrust.plugins.module_utils.AppTrustResources import ApplicationVersionPromotionResource


def run_module():
    module_args = common_argument_spec()
    module_args.update(
        id=dict(type='str', required=False),
        application_key=dict(type='str', required=False),
        version=dict(type='str', required=False),
        target_stage=dict(type='str', required=False),
        promotion_type=dict(type='str', required=False, choices=['move', 'copy', 'keep', 'dry_run']),
        included_repository_keys=dict(type='list', elements='str', required=False),
        excluded_repository_keys=dict(type='list', elements='str', required=False),
        promotion_authorization_type=dict(type='str', required=False),
    )

    module = AnsibleModule(
        argument_spec=module_args,
        mutually_exclusive=[('id', 'application_key'), ('id', 'version'), ('id', 'target_stage')],
        required_one_of=[('id', 'application_key')],
        required_together=[('application_key', 'version', 'target_stage')],
        supports_check_mode=True
    )

    ensure_resource(module, ApplicationVersionPromotionResource, 'promotion')


def main():
    run_module()


if __name__ == '__main__':
    main()
