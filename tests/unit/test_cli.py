"""Tests for the command line interface."""
import pytest
from typer.testing import CliRunner

from tinycert.cli import main as cli
from tinycert.core.api import Session

SERVER_PATH = 'https://tinycert.test/api/v1/'

runner = CliRunner()

CREDENTIALS = [
    '--email', 'user@example.com',
    '--passphrase', 'pw',
    '--api-key', 'key',
    '--server', SERVER_PATH,
]


@pytest.fixture(autouse=True)
def fake_session(monkeypatch, http):
    """Route CLI sessions through the fake HTTP session."""
    for name in ('TINYCERT_EMAIL', 'TINYCERT_PASSWORD', 'TINYCERT_APIKEY', 'TINYCERT_SERVER'):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setattr(cli, 'Session', lambda config: Session(config, http=http))


def invoke(*args, **kwargs):
    return runner.invoke(cli.app, CREDENTIALS + list(args), **kwargs)


class TestCACommands:
    """Test suite for ca commands."""

    def test_list(self, routes, reply, http):
        routes['ca/list'] = reply(200, [{'id': 1, 'name': 'Acme Root'}])

        result = invoke('ca', 'list')

        assert result.exit_code == 0, result.output
        assert 'Acme Root' in result.output
        assert http.post.call_args_list[-1].args[0] == SERVER_PATH + 'disconnect'

    def test_get_writes_file(self, routes, reply, tmp_path):
        routes['ca/details'] = reply(200, {'pem': 'PEM-DATA'})
        target = tmp_path / 'ca.pem'

        result = invoke('ca', 'get', '3', '--output', str(target))

        assert result.exit_code == 0, result.output
        assert target.read_text() == 'PEM-DATA'

    def test_create(self, routes, reply, sent):
        routes['ca/new'] = reply(200, {'ca_id': 77})

        result = invoke('ca', 'create', '--org', 'Acme', '--locality', 'Berlin', '--state', 'BE', '--country', 'DE')

        assert result.exit_code == 0, result.output
        assert 'Created CA 77' in result.output
        assert dict(sent('ca/new'))['hash_method'] == 'sha256'

    def test_delete_requires_confirmation(self, http):
        result = invoke('ca', 'delete', '3', input='n\n')

        assert result.exit_code != 0
        http.post.assert_not_called()

    def test_delete_with_yes(self, routes, reply):
        routes['ca/delete'] = reply(200, {})

        result = invoke('ca', 'delete', '3', '--yes')

        assert result.exit_code == 0, result.output

    def test_server_error_exits_1(self, routes, reply):
        routes['ca/list'] = reply(403, 'forbidden')

        result = invoke('ca', 'list')

        assert result.exit_code == 1
        assert 'forbidden' in result.output

    def test_missing_credentials(self, http):
        result = runner.invoke(cli.app, ['--server', SERVER_PATH, 'ca', 'list'])

        assert result.exit_code == 1
        assert 'Missing TinyCert credentials' in result.output
        http.post.assert_not_called()


class TestCertCommands:
    """Test suite for cert commands."""

    def test_list_status_bitmask(self, routes, reply, sent):
        routes['cert/list'] = reply(200, [{'id': 9, 'name': 'www', 'status': 'hold', 'expires': 0}])

        result = invoke('cert', 'list', '5', '--status', 'good,hold')

        assert result.exit_code == 0, result.output
        assert 'www' in result.output
        assert dict(sent('cert/list'))['what'] == '10'

    def test_list_bad_status(self):
        result = invoke('cert', 'list', '5', '--status', 'pending')

        assert result.exit_code != 0

    def test_create_with_sans(self, routes, reply, sent):
        routes['cert/new'] = reply(200, {'cert_id': 12})

        result = invoke('cert', 'create', '5', '--cn', 'www.example.com',
                        '--dns', 'example.com', '--alt-email', 'admin@example.com')

        assert result.exit_code == 0, result.output
        fields = dict(sent('cert/new'))
        assert fields['SANs[0][DNS]'] == 'example.com'
        assert fields['SANs[1][email]'] == 'admin@example.com'

    def test_get_pkcs12(self, routes, reply, sent):
        routes['cert/details'] = reply(200, {'pem': '', 'pkcs12': 'P12'})

        result = invoke('cert', 'get', '4', '--what', 'pkcs12')

        assert result.exit_code == 0, result.output
        assert 'P12' in result.output
        assert dict(sent('cert/details'))['what'] == 'pkcs12'

    def test_reissue(self, routes, reply):
        routes['cert/reissue'] = reply(200, {'cert_id': 13})

        result = invoke('cert', 'reissue', '12')

        assert 'as 13' in result.output

    def test_status(self, routes, reply, sent):
        routes['cert/status'] = reply(200, {})

        result = invoke('cert', 'status', '12', 'revoked')

        assert result.exit_code == 0, result.output
        assert dict(sent('cert/status'))['status'] == 'revoked'

    def test_auth_failure(self, routes, reply):
        routes['connect'] = reply(401, 'bad credentials')

        result = invoke('cert', 'reissue', '12')

        assert result.exit_code == 1
        assert 'Unable to connect' in result.output
