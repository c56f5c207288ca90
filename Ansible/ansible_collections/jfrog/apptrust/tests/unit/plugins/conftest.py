# Public Domain: Jared Schmidt <jared.schmidt.civ@gmail.com>
# CC0 1.0 Universal license (see https://creativecommons.org/publicdomain/zero/1.0/)
# License applies only to the contents of this file, not the collection as a whole

import functools

import pytest

from ansible_collections.jfrog.apptrust.plugins.module_utils import AppTrustApi as api_module
from ansible_collections.jfrog.apptrust.tests.unit.plugins.apptrust_fakes import (
    BASE_URL,
    FakeAnsibleModuleFactory,
    FakeAppTrust,
    FakeModule,
    FakeRequest,
    ModuleExit,
)


@pytest.fixture
def apptrust(monkeypatch):
    '''A fresh fake AppTrust server wired in place of the HTTP layer.'''
    server = FakeAppTrust()
    monkeypatch.setattr(api_module, 'Request', functools.partial(FakeRequest, server))
    return server


@pytest.fixture
def connection():
    return dict(base_url=BASE_URL, auth_type='AccessToken', auth_string='token-123')


@pytest.fixture
def make_module(connection):
    '''Builds a FakeModule whose params hold the connection options plus the given ones.'''
    def make(check_mode=False, **params):
        merged = dict(connection, ignore_ca_error=False, timeout=30)
        merged.update(params)
        return FakeModule(merged, check_mode=check_mode)
    return make


@pytest.fixture
def run_ansible_module(monkeypatch, connection):
    '''Runs a module's run_module() with AnsibleModule replaced.
    Returns (factory, raised ModuleExit/ModuleFail).
    '''
    def run(moduleFile, check_mode=False, **args):
        merged = dict(connection)
        merged.update(args)
        factory = FakeAnsibleModuleFactory(merged, check_mode=check_mode)
        monkeypatch.setattr(moduleFile, 'AnsibleModule', factory)
        with pytest.raises(ModuleExit) as raised:
            moduleFile.run_module()
        return factory, raised.value
    return run
