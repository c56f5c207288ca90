# Public Domain: Jared Schmidt <jared.schmidt.civ@gmail.com>
# CC0 1.0 Universal license (see https://creativecommons.org/publicdomain/zero/1.0/)
# License applies only to the contents of this file, not the collection as a whole

import pytest

from ansible_collections.jfrog.apptrust.plugins.module_utils.AppTrustErrors import (
    Conflict,
    MalformedIdentifier,
    NotFound,
    ServerError,
    ValidationError,
)
from ansible_collections.jfrog.apptrust.plugins.module_utils.AppTrustResources import (
    ApplicationResource,
    ApplicationVersionPromotionResource,
    ApplicationVersionReleaseResource,
    ApplicationVersionResource,
    ApplicationVersionRollbackResource,
    BoundPackageResource,
    resource_types,
)


def application_plan(**overrides):
    plan = dict((name, None) for name in ApplicationResource.ATTRIBUTES)
    plan.update(application_key='app1', application_name='App One', project_key='p1')
    plan.update(overrides)
    return plan


def version_plan(**overrides):
    plan = dict((name, None) for name in ApplicationVersionResource.ATTRIBUTES)
    plan.update(application_key='app1', version='1.0.0', source_builds=[dict(name='ci', number='7')])
    plan.update(overrides)
    return plan


@pytest.fixture
def app1(apptrust):
    return apptrust.addApplication(application_key='app1', application_name='App One', project_key='p1')


# -- applications -----------------------------------------------------------

def test_create_keeps_explicit_empty_owners(apptrust, connection):
    api = ApplicationResource(**connection)
    changed, state = api.apply(application_plan(user_owners=[]))
    assert changed is True
    assert state['user_owners'] == []
    assert state['group_owners'] is None
    assert state['maturity_level'] == 'unspecified'
    assert state['criticality'] == 'unspecified'
    assert state['id'] == 'app1'
    assert 'user_owners' not in apptrust.calls('POST')[0]['body']


def test_apply_is_idempotent(apptrust, connection):
    api = ApplicationResource(**connection)
    plan = application_plan(description='', labels={}, user_owners=['alice'], maturity_level='production')
    _, first = api.apply(plan)
    changed, second = api.apply(plan)
    assert changed is False
    assert second == first
    assert apptrust.calls('PATCH') == []


def test_clearing_owners_ends_absent(apptrust, app1, connection):
    app1['user_owners'] = ['alice']
    api = ApplicationResource(**connection)
    changed, state = api.apply(application_plan(user_owners=None))
    assert changed is True
    assert state['user_owners'] is None
    assert apptrust.lastRequest()['body']['user_owners'] == []
    assert apptrust.lastRequest()['query'] == dict(project=['p1'])


def test_emptying_owners_ends_explicit_empty(apptrust, app1, connection):
    app1['user_owners'] = ['alice']
    api = ApplicationResource(**connection)
    changed, state = api.apply(application_plan(user_owners=[]))
    assert changed is True
    assert state['user_owners'] == []
    assert api.apply(application_plan(user_owners=[]))[0] is False


def test_dropping_maturity_resets_it_to_unspecified(apptrust, app1, connection):
    app1['maturity_level'] = 'production'
    api = ApplicationResource(**connection)
    changed, state = api.apply(application_plan())
    assert changed is True
    assert state['maturity_level'] == 'unspecified'
    assert apptrust.lastRequest()['body']['maturity_level'] == 'unspecified'


def test_rename_is_an_update(apptrust, app1, connection):
    api = ApplicationResource(**connection)
    changed, state = api.apply(application_plan(application_name='Renamed'))
    assert changed is True
    assert state['application_name'] == 'Renamed'
    assert apptrust.applications['app1']['application_name'] == 'Renamed'


def test_project_cannot_change(apptrust, app1, connection):
    api = ApplicationResource(**connection)
    with pytest.raises(ValidationError):
        api.apply(application_plan(project_key='other'))


@pytest.mark.parametrize('overrides', [
    dict(application_key='A'),
    dict(application_key='1app'),
    dict(application_key='app-'),
    dict(application_key='a' * 65),
    dict(application_name=''),
    dict(application_name='n' * 256),
    dict(maturity_level='legacy'),
    dict(user_owners=['alice', '']),
])
def test_invalid_plans_send_nothing(apptrust, connection, overrides):
    api = ApplicationResource(**connection)
    with pytest.raises(ValidationError):
        api.create(application_plan(**overrides))
    assert apptrust.calls('POST') == []


def test_apply_validates_before_looking_up(apptrust, connection):
    api = ApplicationResource(**connection)
    with pytest.raises(ValidationError):
        api.apply(application_plan(application_key='Bad Key'))
    assert apptrust.requests == []


def test_duplicate_key_is_a_conflict(apptrust, app1, connection):
    api = ApplicationResource(**connection)
    with pytest.raises(Conflict) as raised:
        api.create(application_plan())
    assert str(raised.value) == ("An application with key 'app1' already exists. "
                                 "Please use a different application_key.")


def test_read_of_missing_entity_discards_it(apptrust, make_module, connection):
    module = make_module()
    api = ApplicationResource(module=module, **connection)
    assert api.read(dict(application_key='gone')) is None
    assert 'application gone not found, removing from state' in module.debugs


def test_delete_twice_is_not_an_error(apptrust, app1, connection):
    api = ApplicationResource(**connection)
    state = api.read(dict(application_key='app1'))
    api.delete(state)
    api.delete(state)
    assert 'app1' not in apptrust.applications


def test_remove_reports_whether_anything_was_deleted(apptrust, app1, connection):
    api = ApplicationResource(**connection)
    changed, state = api.remove(application_plan())
    assert changed is True
    assert state['application_key'] == 'app1'
    assert api.remove(application_plan()) == (False, None)


def test_server_errors_surface(apptrust, app1, connection):
    apptrust.fail('GET', 'applications/app1', 500, '{"message": "database unavailable"}')
    api = ApplicationResource(**connection)
    with pytest.raises(ServerError) as raised:
        api.read(dict(application_key='app1'))
    assert str(raised.value) == 'Server error (Status: 500): database unavailable'


def test_check_mode_sends_no_writes(apptrust, app1, connection):
    api = ApplicationResource(inCheckMode=True, **connection)
    changed, state = api.apply(application_plan(description='new'))
    assert changed is True
    assert state['description'] == 'new'
    changed, _ = api.apply(application_plan(application_key='app2'))
    assert changed is True
    assert api.remove(application_plan())[0] is True
    assert [r['method'] for r in apptrust.requests] == ['GET', 'GET', 'GET']
    assert 'app1' in apptrust.applications


def test_import_reads_every_attribute(apptrust, app1, connection):
    app1.update(labels={'team': 'core'}, criticality='high')
    api = ApplicationResource(**connection)
    state = api.importState('app1')
    assert state['labels'] == {'team': 'core'}
    assert state['criticality'] == 'high'
    assert state['maturity_level'] == 'unspecified'
    assert state['description'] is None


def test_plan_from_params_decodes_id(connection):
    api = ApplicationResource(**connection)
    plan = api.planFromParams(dict(id='app9', application_name='Nine', project_key='p1'))
    assert plan['application_key'] == 'app9'
    assert plan['application_name'] == 'Nine'


# -- application versions -----------------------------------------------------

def test_version_needs_a_source(apptrust, app1, connection):
    api = ApplicationVersionResource(**connection)
    with pytest.raises(ValidationError):
        api.apply(version_plan(source_builds=None))


def test_version_needs_a_source_in_check_mode(apptrust, app1, connection):
    api = ApplicationVersionResource(inCheckMode=True, **connection)
    with pytest.raises(ValidationError) as raised:
        api.apply(version_plan(source_builds=None))
    assert 'at least one of source_artifacts' in str(raised.value)
    assert [r['method'] for r in apptrust.requests] == ['GET']


def test_version_create_then_read_is_stable(apptrust, app1, connection):
    api = ApplicationVersionResource(**connection)
    changed, state = api.apply(version_plan(tag='main', source_artifacts=[dict(path='libs/a.jar', sha256=None)]))
    assert changed is True
    assert state['id'] == 'app1:1.0.0'
    body = apptrust.calls('POST')[0]['body']
    assert body == dict(version='1.0.0', tag='main',
                        sources=dict(artifacts=[dict(path='libs/a.jar')], builds=[dict(name='ci', number='7')]))
    changed, again = api.apply(version_plan(tag='main', source_artifacts=[dict(path='libs/a.jar', sha256=None)]))
    assert changed is False
    assert again['tag'] == 'main'
    assert again['release_status'] == 'pre_release'
    assert again['source_builds'] == [dict(name='ci', number='7')]


def test_version_tag_can_be_cleared(apptrust, app1, connection):
    apptrust.addVersion('app1', '1.0.0', tag='main')
    api = ApplicationVersionResource(**connection)
    changed, state = api.apply(version_plan())
    assert changed is True
    assert state['tag'] is None
    assert apptrust.lastRequest()['body'] == dict(tag='')


def test_version_properties_always_update(apptrust, app1, connection):
    apptrust.addVersion('app1', '1.0.0', tag='main')
    api = ApplicationVersionResource(**connection)
    plan = version_plan(tag='main', properties={'env': ['qa']}, delete_properties=['old'])
    changed, state = api.apply(plan)
    assert changed is True
    assert apptrust.lastRequest()['body'] == dict(tag='main', properties={'env': ['qa']}, delete_properties=['old'])
    assert state['tag'] == 'main'
    assert api.apply(plan)[0] is True


def test_version_tag_is_limited(apptrust, app1, connection):
    api = ApplicationVersionResource(**connection)
    with pytest.raises(ValidationError):
        api.apply(version_plan(tag='t' * 129))


def test_version_id_keeps_colons_in_version(connection):
    api = ApplicationVersionResource(**connection)
    assert api.identityFromId('app1:1.0:rc1') == dict(application_key='app1', version='1.0:rc1')


def test_missing_version_is_discarded(apptrust, app1, connection):
    api = ApplicationVersionResource(**connection)
    assert api.read(dict(application_key='app1', version='9.9.9')) is None
    assert api.read(dict(application_key='nope', version='1.0.0')) is None


def test_version_delete(apptrust, app1, connection):
    apptrust.addVersion('app1', '1.0.0')
    api = ApplicationVersionResource(**connection)
    assert api.remove(version_plan())[0] is True
    assert apptrust.versions['app1'] == []
    assert api.remove(version_plan())[0] is False


# -- bound packages -----------------------------------------------------------

BINDING_ID = 'app1:maven:com.example:ledger:2.0.1'


def test_binding_lifecycle(apptrust, app1, connection):
    api = BoundPackageResource(**connection)
    plan = api.planFromParams(dict(id=BINDING_ID))
    assert plan['package_name'] == 'com.example:ledger'

    changed, state = api.apply(plan)
    assert changed is True
    assert state['id'] == BINDING_ID
    assert apptrust.packages['app1'] == [dict(type='maven', name='com.example:ledger', version='2.0.1')]
    assert api.apply(plan) == (False, state)

    assert api.remove(plan)[0] is True
    assert apptrust.packages['app1'] == []
    api.delete(state)


def test_binding_import_of_unbound_version(apptrust, app1, connection):
    apptrust.addPackage('app1', 'maven', 'com.example:ledger', '1.0.0')
    api = BoundPackageResource(**connection)
    assert api.importState(BINDING_ID) is None
    assert api.importState('app1:maven:com.example:ledger:1.0.0')['package_version'] == '1.0.0'


def test_binding_requires_every_part(connection):
    api = BoundPackageResource(**connection)
    with pytest.raises(MalformedIdentifier):
        api.importState('app1:maven')


# -- promote, release, rollback -----------------------------------------------

def test_promotion_is_sent_once(apptrust, app1, connection):
    apptrust.addVersion('app1', '1.0.0')
    api = ApplicationVersionPromotionResource(**connection)
    plan = api.planFromParams(dict(id='app1:1.0.0:QA', promotion_type=None, included_repository_keys=['qa-local']))
    changed, state = api.apply(plan)
    assert changed is True
    assert state['id'] == 'app1:1.0.0:QA'
    assert apptrust.calls('POST')[0]['body'] == dict(target_stage='QA', promotion_type='copy',
                                                     included_repository_keys=['qa-local'])
    assert api.apply(plan)[0] is False
    assert len(apptrust.calls('POST')) == 1


def test_promotion_of_missing_version_fails(apptrust, app1, connection):
    api = ApplicationVersionPromotionResource(**connection)
    plan = api.planFromParams(dict(id='app1:9.9.9:QA'))
    with pytest.raises(NotFound):
        api.apply(plan)


def test_release_is_skipped_when_released(apptrust, app1, connection):
    apptrust.addVersion('app1', '1.0.0', release_status='trusted_release')
    api = ApplicationVersionReleaseResource(**connection)
    changed, state = api.apply(api.planFromParams(dict(id='app1:1.0.0')))
    assert changed is False
    assert state['id'] == 'app1:1.0.0'
    assert apptrust.calls('POST') == []


def test_release(apptrust, app1, connection):
    apptrust.addVersion('app1', '1.0.0')
    api = ApplicationVersionReleaseResource(**connection)
    changed, _ = api.apply(api.planFromParams(dict(application_key='app1', version='1.0.0', promotion_type='move')))
    assert changed is True
    assert apptrust.calls('POST')[0]['body'] == dict(promotion_type='move')
    assert apptrust.versions['app1'][0]['release_status'] == 'released'


def test_rollback_only_from_the_current_stage(apptrust, app1, connection):
    apptrust.addVersion('app1', '1.0.0')
    promotion = ApplicationVersionPromotionResource(**connection)
    promotion.apply(promotion.planFromParams(dict(id='app1:1.0.0:QA')))

    api = ApplicationVersionRollbackResource(**connection)
    plan = api.planFromParams(dict(id='app1:1.0.0:QA'))
    changed, state = api.apply(plan)
    assert changed is True
    assert apptrust.lastRequest()['body'] == dict(from_stage='QA')
    assert apptrust.versions['app1'][0]['current_stage'] == ''
    assert api.apply(plan) == (False, state)
    assert len(apptrust.calls('POST')) == 2


def test_rollback_from_a_stage_never_reached_is_sent(apptrust, app1, connection):
    apptrust.addVersion('app1', '1.0.0', current_stage='DEV')
    api = ApplicationVersionRollbackResource(**connection)
    with pytest.raises(ValidationError) as raised:
        api.apply(api.planFromParams(dict(id='app1:1.0.0:PROD')))
    assert 'Version is not in stage PROD' in str(raised.value)
    assert apptrust.lastRequest()['body'] == dict(from_stage='PROD')
    assert apptrust.versions['app1'][0]['current_stage'] == 'DEV'


def test_dry_run_promotion_never_reports_a_change(apptrust, app1, connection):
    apptrust.addVersion('app1', '1.0.0', current_stage='DEV')
    api = ApplicationVersionPromotionResource(**connection)
    plan = api.planFromParams(dict(id='app1:1.0.0:QA', promotion_type='dry_run'))
    assert api.apply(plan)[0] is False
    assert api.apply(plan)[0] is False
    assert [call['body']['promotion_type'] for call in apptrust.calls('POST')] == ['dry_run', 'dry_run']
    assert apptrust.versions['app1'][0]['current_stage'] == 'DEV'


def test_action_delete_is_local_only(apptrust, make_module, connection):
    module = make_module()
    api = ApplicationVersionRollbackResource(module=module, **connection)
    api.delete(dict(application_key='app1', version='1.0.0', from_stage='QA'))
    assert apptrust.requests == []
    assert module.debugs == ['No delete call for application version app1:1.0.0:QA; dropping local state only']


def test_action_read_returns_local_state(connection):
    api = ApplicationVersionPromotionResource(**connection)
    state = api.read(dict(id='app1:1.0.0:PROD'))
    assert state['target_stage'] == 'PROD'
    assert state['id'] == 'app1:1.0.0:PROD'


# -- registry -----------------------------------------------------------------

def test_registry_lists_every_resource():
    types = resource_types()
    assert sorted(types) == [
        'apptrust_application',
        'apptrust_application_version',
        'apptrust_application_version_promotion',
        'apptrust_application_version_release',
        'apptrust_application_version_rollback',
        'apptrust_bound_package',
    ]
    types.clear()
    assert len(resource_types()) == 6
