# Public Domain: Jared Schmidt <jared.schmidt.civ@gmail.com>
# CC0 1.0 Universal license (see https://creativecommons.org/publicdomain/zero/1.0/)
# License applies only to the contents of this file, not the collection as a whole

import pathlib

import pytest

from ansible_collections.jfrog.apptrust.plugins.modules import (
    apptrust_application,
    apptrust_application_version,
    apptrust_application_version_promotion,
    apptrust_application_version_release,
    apptrust_application_version_rollback,
    apptrust_bound_package,
    apptrust_import,
)
from ansible_collections.jfrog.apptrust.tests.unit.plugins.apptrust_fakes import ModuleFail

PLUGINS = pathlib.Path(apptrust_application.__file__).parents[1]


@pytest.fixture
def payments(apptrust):
    apptrust.addApplication(application_key='payments', application_name='Payments', project_key='fintech')
    apptrust.addVersion('payments', '1.4.0', tag='main')
    return apptrust


def test_application_module_creates_then_reports_no_change(apptrust, run_ansible_module):
    args = dict(application_key='payments', application_name='Payments', project_key='fintech',
                labels={'team': 'checkout'}, group_owners=[])
    factory, outcome = run_ansible_module(apptrust_application, **args)
    assert not isinstance(outcome, ModuleFail)
    assert outcome.result['changed'] is True
    assert outcome.result['id'] == 'payments'
    assert outcome.result['application']['group_owners'] == []
    assert factory.spec['supports_check_mode'] is True
    assert factory.spec['argument_spec']['auth_string']['no_log'] is True

    _, outcome = run_ansible_module(apptrust_application, **args)
    assert outcome.result['changed'] is False


def test_application_module_check_mode(apptrust, run_ansible_module):
    _, outcome = run_ansible_module(apptrust_application, check_mode=True, application_key='payments',
                                    application_name='Payments', project_key='fintech')
    assert outcome.result['changed'] is True
    assert apptrust.applications == dict()


def test_application_module_absent_by_id(payments, run_ansible_module):
    _, outcome = run_ansible_module(apptrust_application, id='payments', state='absent')
    assert outcome.result['changed'] is True
    assert 'payments' not in payments.applications

    _, outcome = run_ansible_module(apptrust_application, id='payments', state='absent')
    assert outcome.result == dict(changed=False, id=None, application=None)


def test_application_module_fails_on_conflicting_update(payments, run_ansible_module):
    _, outcome = run_ansible_module(apptrust_application, application_key='payments', application_name='Payments',
                                    project_key='other')
    assert isinstance(outcome, ModuleFail)
    assert outcome.result['title'] == 'Invalid Request'
    assert 'project_key cannot be changed' in outcome.result['msg']


def test_version_module_fails_on_bad_id(apptrust, run_ansible_module):
    _, outcome = run_ansible_module(apptrust_application_version, id='payments', state='absent')
    assert isinstance(outcome, ModuleFail)
    assert outcome.result['title'] == 'Invalid import ID'
    assert apptrust.requests == []


def test_version_module_updates_tag(payments, run_ansible_module):
    _, outcome = run_ansible_module(apptrust_application_version, application_key='payments', version='1.4.0',
                                    tag='release/1.4')
    assert outcome.result['changed'] is True
    assert outcome.result['application_version']['tag'] == 'release/1.4'
    assert outcome.result['id'] == 'payments:1.4.0'


def test_version_module_requires_sources_to_create(payments, run_ansible_module):
    _, outcome = run_ansible_module(apptrust_application_version, application_key='payments', version='2.0.0')
    assert isinstance(outcome, ModuleFail)
    assert 'at least one of source_artifacts' in outcome.result['msg']


def test_version_module_creates_from_other_versions(payments, run_ansible_module):
    _, outcome = run_ansible_module(apptrust_application_version, application_key='payments', version='2.0.0',
                                    source_versions=[dict(application_key='payments', version='1.4.0')])
    assert outcome.result['changed'] is True
    assert payments.calls('POST')[0]['body']['sources'] == dict(versions=[dict(application_key='payments', version='1.4.0')])


def test_bound_package_module(payments, run_ansible_module):
    args = dict(application_key='payments', package_type='docker', package_name='payments-api', package_version='1.4.0')
    factory, outcome = run_ansible_module(apptrust_bound_package, **args)
    assert outcome.result['changed'] is True
    assert outcome.result['id'] == 'payments:docker:payments-api:1.4.0'
    assert factory.spec['required_together'] == [apptrust_bound_package.IDENTIFYING]

    _, outcome = run_ansible_module(apptrust_bound_package, id='payments:docker:payments-api:1.4.0', state='absent')
    assert outcome.result['changed'] is True
    assert payments.packages['payments'] == []


def test_promotion_module_is_idempotent(payments, run_ansible_module):
    args = dict(application_key='payments', version='1.4.0', target_stage='QA', promotion_type='move')
    _, outcome = run_ansible_module(apptrust_application_version_promotion, **args)
    assert outcome.result['changed'] is True
    assert outcome.result['promotion']['promotion_type'] == 'move'

    _, outcome = run_ansible_module(apptrust_application_version_promotion, **args)
    assert outcome.result['changed'] is False
    assert len(payments.calls('POST')) == 1


def test_release_module_check_mode(payments, run_ansible_module):
    _, outcome = run_ansible_module(apptrust_application_version_release, check_mode=True, id='payments:1.4.0')
    assert outcome.result['changed'] is True
    assert outcome.result['release']['id'] == 'payments:1.4.0'
    assert payments.calls('POST') == []


def test_rollback_module(payments, run_ansible_module):
    payments.versions['payments'][0]['current_stage'] = 'QA'
    _, outcome = run_ansible_module(apptrust_application_version_rollback, id='payments:1.4.0:QA')
    assert outcome.result['changed'] is True
    assert outcome.result['rollback']['from_stage'] == 'QA'
    assert payments.versions['payments'][0]['current_stage'] == ''


def test_import_module_reads_entity(payments, run_ansible_module):
    factory, outcome = run_ansible_module(apptrust_import, resource_type='apptrust_application_version',
                                          id='payments:1.4.0')
    assert outcome.result['changed'] is False
    assert outcome.result['id'] == 'payments:1.4.0'
    assert outcome.result['entity']['tag'] == 'main'
    assert 'apptrust_bound_package' in factory.spec['argument_spec']['resource_type']['choices']


def test_import_module_fails_for_missing_entity(payments, run_ansible_module):
    _, outcome = run_ansible_module(apptrust_import, resource_type='apptrust_application', id='ghost')
    assert isinstance(outcome, ModuleFail)
    assert outcome.result['title'] == 'Resource Not Found'
    assert outcome.result['msg'] == "Cannot import non-existent remote object: application 'ghost' was not found"


def test_import_module_fails_for_malformed_id(payments, run_ansible_module):
    _, outcome = run_ansible_module(apptrust_import, resource_type='apptrust_bound_package', id='payments:docker')
    assert isinstance(outcome, ModuleFail)
    assert outcome.result['title'] == 'Invalid import ID'


@pytest.mark.parametrize('source', sorted(PLUGINS.glob('*/*.py')), ids=lambda path: path.name)
def test_plugin_files_use_python3_semantics(source):
    text = source.read_text()
    assert 'from __future__ import (absolute_import, division, print_function)' in text
    assert '__metaclass__ = type' in text
