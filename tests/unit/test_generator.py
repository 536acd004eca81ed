import json
import logging
import pytest

from firebase_test_env.config.exceptions import (
    IncompleteCredentialException,
    MissingIdentifierException,
    TokenIssuanceException,
)
from firebase_test_env.generator import create_test_env_file


BASE_ENV = {
    'TEST_UID': 'user-1',
    'FIREBASE_PROJECT_ID': 'my-project',
    'FIREBASE_API_KEY': 'api-key',
}


@pytest.fixture
def configured(workspace, service_account, write_json):
    """Workspace with a complete local service account."""
    write_json(workspace.service_account_path, service_account)
    return workspace


def _read(path):
    return json.loads(path.read_text())


class TestCreateTestEnvFile:
    """Test the end to end generation of the test env file."""

    def test_writes_output_file(self, configured, fake_issuer):
        token = create_test_env_file('local', BASE_ENV, configured, fake_issuer)

        assert token == 'abc123'
        assert _read(configured.test_env_file_path) == {
            'TEST_UID': 'user-1',
            'FIREBASE_API_KEY': 'api-key',
            'FIREBASE_PROJECT_ID': 'my-project',
            'FIREBASE_AUTH_JWT': 'abc123',
        }

    def test_output_is_two_space_indented(self, configured, fake_issuer):
        create_test_env_file('local', BASE_ENV, configured, fake_issuer)
        content = configured.test_env_file_path.read_text()
        assert content == json.dumps(_read(configured.test_env_file_path), indent=2)

    def test_issuer_called_once_with_testing_claim(self, configured, fake_issuer, service_account):
        create_test_env_file('local', BASE_ENV, configured, fake_issuer)

        assert len(fake_issuer.calls) == 1
        call = fake_issuer.calls[0]
        assert call['uid'] == 'user-1'
        assert call['project_id'] == 'my-project'
        assert call['claims'] == {'isTesting': True}
        assert call['credential'] == service_account

    def test_stage_fields_included_when_stage_project_set(self, configured, fake_issuer):
        env = dict(BASE_ENV, STAGE_FIREBASE_PROJECT_ID='stage1', STAGE_FIREBASE_API_KEY='key1')

        create_test_env_file('local', env, configured, fake_issuer)

        output = _read(configured.test_env_file_path)
        assert output['STAGE_FIREBASE_PROJECT_ID'] == 'stage1'
        assert output['STAGE_FIREBASE_API_KEY'] == 'key1'

    def test_stage_api_key_alone_is_ignored(self, configured, fake_issuer):
        env = dict(BASE_ENV, STAGE_FIREBASE_API_KEY='key1')

        create_test_env_file('local', env, configured, fake_issuer)

        output = _read(configured.test_env_file_path)
        assert 'STAGE_FIREBASE_PROJECT_ID' not in output
        assert 'STAGE_FIREBASE_API_KEY' not in output

    def test_missing_api_keys_are_left_out(self, configured, fake_issuer):
        env = {'TEST_UID': 'user-1', 'FIREBASE_PROJECT_ID': 'my-project', 'STAGE_FIREBASE_PROJECT_ID': 'stage1'}

        create_test_env_file('local', env, configured, fake_issuer)

        assert _read(configured.test_env_file_path) == {
            'TEST_UID': 'user-1',
            'FIREBASE_PROJECT_ID': 'my-project',
            'FIREBASE_AUTH_JWT': 'abc123',
            'STAGE_FIREBASE_PROJECT_ID': 'stage1',
        }

    def test_output_file_overwritten(self, configured, fake_issuer, write_json):
        write_json(configured.test_env_file_path, {'OLD': 'value'})

        create_test_env_file('local', BASE_ENV, configured, fake_issuer)

        assert 'OLD' not in _read(configured.test_env_file_path)

    def test_prefixed_environment(self, configured, fake_issuer):
        env = {
            'STAGE_TEST_UID': 'stage-user',
            'STAGE_FIREBASE_PROJECT_ID': 'my-project',
            'STAGE_FIREBASE_API_KEY': 'stage-key',
        }

        create_test_env_file('stage', env, configured, fake_issuer)

        output = _read(configured.test_env_file_path)
        assert output['TEST_UID'] == 'stage-user'
        assert output['FIREBASE_API_KEY'] == 'stage-key'

    def test_local_config_file_supplies_values(self, configured, fake_issuer, write_json):
        write_json(configured.local_config_path, BASE_ENV)

        create_test_env_file('local', {}, configured, fake_issuer)

        assert _read(configured.test_env_file_path)['TEST_UID'] == 'user-1'

    def test_project_id_from_firebaserc(self, configured, fake_issuer, write_json):
        write_json(configured.registry_path, {'projects': {'default': 'my-project'}})

        create_test_env_file('local', {'TEST_UID': 'user-1'}, configured, fake_issuer)

        assert _read(configured.test_env_file_path)['FIREBASE_PROJECT_ID'] == 'my-project'

    def test_non_string_env_name_defaults_to_local(self, configured, fake_issuer):
        create_test_env_file(None, BASE_ENV, configured, fake_issuer)
        assert fake_issuer.calls[0]['uid'] == 'user-1'


class TestServiceAccountFile:
    """Test the write-once service account file."""

    def test_created_when_absent(self, workspace, fake_issuer, service_account):
        env = dict(BASE_ENV, SERVICE_ACCOUNT=json.dumps(service_account))

        create_test_env_file('local', env, workspace, fake_issuer)

        assert _read(workspace.service_account_path) == service_account
        assert workspace.service_account_path.read_text() == json.dumps(service_account, indent=2)

    def test_existing_file_left_untouched(self, workspace, fake_issuer, service_account, write_json):
        write_json(workspace.service_account_path, service_account)
        original = workspace.service_account_path.read_text()
        other = dict(service_account, client_id='999')
        env = dict(BASE_ENV, SERVICE_ACCOUNT=json.dumps(other))

        create_test_env_file('local', env, workspace, fake_issuer)
        create_test_env_file('local', env, workspace, fake_issuer)

        assert workspace.service_account_path.read_text() == original


class TestFailures:
    """Test that each failure aborts before files change."""

    def test_missing_uid_never_calls_issuer(self, configured, fake_issuer):
        with pytest.raises(MissingIdentifierException):
            create_test_env_file('stage', {'FIREBASE_PROJECT_ID': 'my-project'}, configured, fake_issuer)

        assert fake_issuer.calls == []
        assert not configured.test_env_file_path.exists()

    def test_incomplete_credential_never_calls_issuer(self, workspace, fake_issuer, service_account, write_json):
        service_account['private_key'] = None
        service_account['client_email'] = None
        write_json(workspace.service_account_path, service_account)

        with pytest.raises(IncompleteCredentialException) as excinfo:
            create_test_env_file('local', BASE_ENV, workspace, fake_issuer)

        assert excinfo.value.missing_fields == ['private_key', 'client_email']
        assert fake_issuer.calls == []

    def test_issuer_failure_leaves_output_unchanged(self, configured, make_issuer, write_json):
        write_json(configured.test_env_file_path, {'TEST_UID': 'previous'})
        before = configured.test_env_file_path.read_text()
        issuer = make_issuer(error=Exception('bad cred'))

        with pytest.raises(TokenIssuanceException) as excinfo:
            create_test_env_file('local', BASE_ENV, configured, issuer)

        assert 'bad cred' in str(excinfo.value)
        assert 'user-1' in str(excinfo.value)
        assert configured.test_env_file_path.read_text() == before

    def test_issuer_failure_does_not_create_service_account(self, workspace, make_issuer, service_account):
        env = dict(BASE_ENV, SERVICE_ACCOUNT=json.dumps(service_account))

        with pytest.raises(TokenIssuanceException):
            create_test_env_file('local', env, workspace, make_issuer(error=RuntimeError('quota')))

        assert not workspace.service_account_path.exists()

    def test_project_mismatch_only_warns(self, configured, fake_issuer, caplog):
        env = dict(BASE_ENV, FIREBASE_PROJECT_ID='other-project')

        with caplog.at_level(logging.WARNING):
            token = create_test_env_file('local', env, configured, fake_issuer)

        assert token == 'abc123'
        assert 'project_id my-project does not match env var: other-project' in caplog.text
        assert _read(configured.test_env_file_path)['FIREBASE_PROJECT_ID'] == 'other-project'
