#!/usr/bin/python

# Public Domain 2021, Jared Schmidt <jared.schmidt.civ@gmail.com>
# CC0 1.0 Universal license (see https://creativecommons.org/publicdomain/zero/1.0/)
# License applies only to the contents of this file, not the collection as a whole
from __future__ import (absolute_import, division, print_function)
__metaclass__ = type


class ModuleDocFragment(object):
    DOCUMENTATION = r'''
options:
    base_url:
        description:
        - Base url of the JFrog platform.  It must include the schema (http or https), the fqdn, and port
            number (if not 80 or 443).
        - If not set, the C(JFROG_URL) and then the C(ARTIFACTORY_URL) environment variables are used.
        aliases:
        - url
        type: str
    auth_type:
        description:
        - Specifies which authentication type to use with the AppTrust API.  Basic auth uses an admin's username
            and password.
        choices:
        - AccessToken
        - ApiKey
        - Basic
        default: AccessToken
        type: str
    auth_string:
        description:
        - The authentication string to be provided in AppTrust api calls.  Paired with selection given in "auth_type".
        - Basic auth requires that auth_string be provided in the format "username:password".  The module performs the base64 encoding.
        - AccessToken and ApiKey require that auth_string be the access token or api key.
        - If not set, the C(JFROG_ACCESS_TOKEN) and then the C(ARTIFACTORY_ACCESS_TOKEN) environment variables are used.
        type: str
    ignore_ca_error:
        description:
        - Flag to disable CA verification.  Opens API calls to MITM attack.  Do not use in production environments.
        - If not set, the C(JFROG_BYPASS_TLS_VERIFICATION) environment variable is used.
        default: False
        type: bool
    timeout:
        description:
        - Socket timeout in seconds for each API call.
        default: 30
        type: int

requirements:
    - Python >= 3.8

notes:
    - Check mode is supported.
'''

    STATE = r'''
options:
    id:
        description:
        - Composite identifier of an existing entity, as returned in C(id) by a previous run.
        - Replaces the identifying options.  Parts are separated by colons.
        type: str
    state:
        description:
        - Desired state of the entity after execution.
        - "present" ensures the entity exists and matches the options.  Optional options that are left out are
            cleared on the server.
        - "absent" ensures the entity is deleted.  An entity that is already gone is not an error.
        default: present
        choices:
        - present
        - absent
        type: str
'''
