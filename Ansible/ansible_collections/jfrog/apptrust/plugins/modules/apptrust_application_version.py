#!/usr/bin/python

# Public Domain 2021, Jared Schmidt <jared.schmidt.civ@gmail.com>
# CC0 1.0 Universal license (see https://creativecommons.org/publicdomain/zero/1.0/)
# License applies only to the contents of this file, not the collection as a whole
from __future__ import (absolute_import, division, print_function)
__metaclass__ = type

DOCUMENTATION = r'''
---
module: apptrust_application_version

short_description: Creates, tags, and deletes AppTrust application versions

version_added: "1.0.0"

description:
    - Creates an application version from artifacts, builds, or other application versions.
    - At least one source is required when the version is created.  Sources are only used at creation.
    - I(properties) and I(delete_properties) cannot be read back from AppTrust, so a run that sets them
      always reports a change.

options:
    application_key:
        description: The application key.
        type: str
    version:
        description: The application version (e.g. SemVer 1.0.0).
        type: str
    tag:
        description: Tag associated with the version (e.g. branch name).  Max 128 characters.
        type: str
    source_artifacts:
        description: Artifacts to include in the version.
        type: list
        elements: dict
        suboptions:
            path:
                description: Path to the artifact in the repository.
                type: str
                required: true
            sha256:
                description: SHA256 checksum of the artifact.
                type: str
    source_builds:
        description: Builds to include in the version.
        type: list
        elements: dict
        suboptions:
            name:
                description: Build name.
                type: str
                required: true
            number:
                description: Build number.
                type: str
                required: true
            include_dependencies:
                description: Include build dependencies.
                type: bool
            repository_key:
                description: Build-info repository key.
                type: str
            started:
                description: Build timestamp (ISO 8601).
                type: str
    source_versions:
        description: Other application versions to include.
        type: list
        elements: dict
        suboptions:
            application_key:
                description: Application key of the source version.
                type: str
                required: true
            version:
                description: Version of the source application.
                type: str
                required: true
    properties:
        description: Version properties, each key mapped to a list of values.
        type: dict
    delete_properties:
        description: Property keys to remove.
        type: list
        elements: str

extends_documentation_fragment:
    - jfrog.apptrust.apptrust_common_docs
    - jfrog.apptrust.apptrust_common_docs.state

author:
    - Jared Schmidt (@jared-schmidt-civ)
'''

EXAMPLES = r'''
- name: Create a version from a build
  jfrog.apptrust.apptrust_application_version:
    application_key: payments
    version: 1.4.0
    tag: release/1.4
    source_builds:
      - name: payments-ci
        number: "231"
    base_url: https://mycompany.jfrog.io
    auth_string: "{{ access_token }}"

- name: Delete a version
  jfrog.apptrust.apptrust_application_version:
    id: payments:1.4.0
    state: absent
    base_url: https://mycompany.jfrog.io
    auth_string: "{{ access_token }}"
'''

RETURN = r'''
id:
    description: Identifier of the version, application_key:version.
    type: str
    returned: always
    sample: payments:1.4.0
application_version:
    description: The version after execution.  Null when it is absent.
    type: dict
    returned: always
    sample:
        application_key: payments
        version: 1.4.0
        tag: release/1.4
        release_status: pre_release
        current_stage: DEV
        id: payments:1.4.0
'''

from ansible.module_utils.basic import AnsibleModule
from ansible_collections.jfrog.apptrust.plugins.module_utils.AppTrustApi import common_argument_spec, ensure_resource
from ansible_collections.jfrog.apptrust.plugins.module_utils.AppTrustResources import ApplicationVersionResource


def run_module():
    module_args = common_argument_spec()
    module_args.update(
        id=dict(type='str', required=False),
        state=dict(type='str', default='present', choices=['present', 'absent']),
        application_key=dict(type='str', required=False),
        version=dict(type='str', required=False),
        tag=dict(type='str', required=False),
        source_artifacts=dict(type='list', elements='dict', required=False, options=dict(
            path=dict(type='str', required=True),
            sha256=dict(type='str', required=False),
        )),
        source_builds=dict(type='list', elements='dict', required=False, options=dict(
            name=dict(type='str', required=True),
            number=dict(type='str', required=True),
            include_dependencies=dict(type='bool', required=False),
            repository_key=dict(type='str', required=False),
            started=dict(type='str', required=False),
        )),
        source_versions=dict(type='list', elements='dict', required=False, options=dict(
            application_key=dict(type='str', required=True),
            version=dict(type='str', required=True),
        )),
        properties=dict(type='dict', required=False),
        delete_properties=dict(type='list', elements='str', required=False),
    )

    module = AnsibleModule(
        argument_spec=module_args,
        mutually_exclusive=[('id', 'application_key'), ('id', 'version')],
        required_one_of=[('id', 'application_key')],
        required_together=[('application_key', 'version')],
        supports_check_mode=True
    )

    ensure_resource(module, ApplicationVersionResource, 'application_version')


def main():
    run_module()


if __name__ == '__main__':
    main()
