import paramiko
import pytest

from install_verifier.domain.errors import ResolutionError
from install_verifier.domain.system_info import NodeInfo
from install_verifier.infrastructure.remote.ssh import HOST_KEY_POLICIES, SshCommandRunner

NODE = NodeInfo(ip="10.0.1.1", user="root", password="pw", port=2222)


class FakeChannel:
    def __init__(self, status: int) -> None:
        self.status = status

    def recv_exit_status(self) -> int:
        return self.status


class FakeStream:
    def __init__(self, data: bytes, status: int = 0) -> None:
        self.data = data
        self.channel = FakeChannel(status)

    def read(self) -> bytes:
        return self.data


class FakeClient:
    def __init__(self, stdout: bytes = b"", stderr: bytes = b"", status: int = 0, error: Exception | None = None):
        self.stdout = stdout
        self.stderr = stderr
        self.status = status
        self.error = error
        self.connect_kwargs: dict = {}
        self.commands: list[str] = []
        self.closed = False
        self.system_keys_loaded = False

    def set_missing_host_key_policy(self, policy) -> None:
        self.policy = policy

    def load_system_host_keys(self) -> None:
        self.system_keys_loaded = True

    def connect(self, hostname, **kwargs) -> None:
        if self.error is not None:
            raise self.error
        self.connect_kwargs = {"hostname": hostname, **kwargs}

    def exec_command(self, command, timeout=None):
        self.commands.append(command)
        return None, FakeStream(self.stdout, self.status), FakeStream(self.stderr, self.status)

    def close(self) -> None:
        self.closed = True


def test_run_returns_stdout_and_closes():
    client = FakeClient(stdout=b"10.0.2.1 app1\n")
    runner = SshCommandRunner(timeout=5.0, client_factory=lambda: client)

    output = runner.run(NODE, "cat /etc/hosts")

    assert output == "10.0.2.1 app1\n"
    assert client.commands == ["cat /etc/hosts"]
    assert client.connect_kwargs["hostname"] == "10.0.1.1"
    assert client.connect_kwargs["port"] == 2222
    assert client.connect_kwargs["username"] == "root"
    assert client.connect_kwargs["password"] == "pw"
    assert client.connect_kwargs["timeout"] == 5.0
    assert client.closed


def test_authentication_failure():
    client = FakeClient(error=paramiko.AuthenticationException("denied"))
    runner = SshCommandRunner(client_factory=lambda: client)

    with pytest.raises(ResolutionError) as excinfo:
        runner.run(NODE, "true")

    assert "root@10.0.1.1" in str(excinfo.value)
    assert client.closed


def test_unreachable_node():
    client = FakeClient(error=TimeoutError("timed out"))
    runner = SshCommandRunner(client_factory=lambda: client)

    with pytest.raises(ResolutionError):
        runner.run(NODE, "true")


def test_non_zero_exit_status():
    client = FakeClient(stderr=b"command not found\n", status=127)
    runner = SshCommandRunner(client_factory=lambda: client)

    with pytest.raises(ResolutionError) as excinfo:
        runner.run(NODE, "verify-cli alerts --format json")

    assert "127" in str(excinfo.value)
    assert "command not found" in str(excinfo.value)


def test_known_hosts_checked_and_unknown_keys_rejected_by_default():
    client = FakeClient()
    runner = SshCommandRunner(client_factory=lambda: client)

    runner.run(NODE, "true")

    assert client.system_keys_loaded
    assert isinstance(client.policy, paramiko.RejectPolicy)


@pytest.mark.parametrize("name", sorted(HOST_KEY_POLICIES))
def test_configured_host_key_policy(name: str):
    client = FakeClient()
    runner = SshCommandRunner(host_key_policy=name, client_factory=lambda: client)

    runner.run(NODE, "true")

    assert type(client.policy) is HOST_KEY_POLICIES[name]


def test_unknown_host_key_policy():
    with pytest.raises(ValueError):
        SshCommandRunner(host_key_policy="trust-everyone")


def test_rejected_host_key():
    client = FakeClient(error=paramiko.SSHException("Server '10.0.1.1' not found in known_hosts"))
    runner = SshCommandRunner(client_factory=lambda: client)

    with pytest.raises(ResolutionError) as excinfo:
        runner.run(NODE, "true")

    assert "known_hosts" in str(excinfo.value)
    assert client.closed
