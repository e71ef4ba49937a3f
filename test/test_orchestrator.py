import asyncio
import json
import logging
from unittest.mock import MagicMock

import pytest
from eth_utils import to_checksum_address

from conftest import FakeClient, make_address
from deployer.config import DeployConfig, load_config
from deployer.constants import LOGGER_NAME
from deployer.models import ContractArtifact
from deployer.orchestrator import DeploymentOrchestrator, RunState, dispatch, main

FOO_ABI = [{"type": "function", "name": "foo", "inputs": [], "outputs": []}]


@pytest.fixture(autouse=True)
def instant_sleep(monkeypatch):
    original_sleep = asyncio.sleep

    async def no_sleep(delay):
        await original_sleep(0)

    monkeypatch.setattr(asyncio, "sleep", no_sleep)


@pytest.fixture
def config():
    return DeployConfig(url="http://localhost:8545", pk="0x" + "01" * 32, gas_price="2")


def make_orchestrator(config, tmp_path, token_artifact, client=None, **kwargs):
    client = client or FakeClient()
    factory = MagicMock(return_value=client)
    kwargs.setdefault('contracts', [ContractArtifact(name="Vault", abi=FOO_ABI, bytecode="0x01")])
    kwargs.setdefault('abis', {"Foo": FOO_ABI})
    orchestrator = DeploymentOrchestrator(
        config,
        client_factory=factory,
        token_artifact=token_artifact,
        abi_dir=tmp_path / "abis",
        **kwargs,
    )
    return orchestrator, factory, client


def test_full_run(config, tmp_path, token_artifact, capsys):
    orchestrator, factory, client = make_orchestrator(config, tmp_path, token_artifact)

    context = asyncio.run(orchestrator.run())

    factory.assert_called_once_with(config.url, config.pk)
    assert orchestrator.state is RunState.DONE
    assert context.tokens == {
        "USDT": to_checksum_address(make_address(1)),
        "TEXB": to_checksum_address(make_address(3)),
    }
    assert context.contract_addresses == {"Vault": to_checksum_address(make_address(5))}
    build = client.w3.eth.contract.return_value.constructor.return_value.build_transaction
    assert [call.args[0]['gasPrice'] for call in build.call_args_list] == [2 * 10 ** 9] * 3
    assert (tmp_path / "abis" / "Foo.json").exists()

    out = capsys.readouterr().out
    assert "current endpoint http://localhost:8545" in out
    assert f"wallet: {client.address}" in out
    assert out.index("=====Contracts=====") < out.index("=====Tokens=====")
    assert f'"Vault": "{to_checksum_address(make_address(5))}",' in out
    assert f'"USDT": "{to_checksum_address(make_address(1))}",' in out


def test_receipt_timeout_reaches_poller(tmp_path, token_artifact):
    config = DeployConfig(url="http://x", pk="0x" + "01" * 32, receipt_timeout=12.5)
    orchestrator, _, client = make_orchestrator(config, tmp_path, token_artifact)
    orchestrator.client = client

    deployer = orchestrator._build_deployer()

    assert deployer.poll_options == {'timeout': 12.5}
    assert deployer.send_options.gas_price == 10 * 10 ** 9


def test_abi_directive_skips_deployment(config, tmp_path, token_artifact):
    orchestrator, factory, client = make_orchestrator(config, tmp_path, token_artifact)

    written = dispatch(orchestrator, ["abi"])

    factory.assert_not_called()
    assert client.sent == []
    assert written == [tmp_path / "abis" / "Foo.json"]
    assert json.loads(written[0].read_text()) == FOO_ABI
    assert orchestrator.state is RunState.ABIS_EXPORTED


@pytest.mark.parametrize("argv", [[], ["deploy"]])
def test_other_arguments_run_everything(config, tmp_path, token_artifact, argv):
    orchestrator, factory, client = make_orchestrator(config, tmp_path, token_artifact)

    dispatch(orchestrator, argv)

    factory.assert_called_once()
    assert len(client.sent) == 5
    assert orchestrator.state is RunState.DONE


def test_failure_aborts_run(config, tmp_path, token_artifact):
    client = FakeClient()

    async def broken(tx, signer=None):
        raise ConnectionError("rpc down")

    client.send_transaction = broken
    orchestrator, _, _ = make_orchestrator(config, tmp_path, token_artifact, client=client)

    with pytest.raises(ConnectionError):
        asyncio.run(orchestrator.run())

    assert orchestrator.state is RunState.CONFIG_LOADED
    assert orchestrator.context.tokens == {"USDT": "", "TEXB": ""}
    assert not (tmp_path / "abis").exists()


def test_default_abis_come_from_artifacts(config, tmp_path, token_artifact, monkeypatch):
    monkeypatch.setattr("deployer.orchestrator.ABI_EXPORT_CONTRACTS", ("Vault",))
    artifacts_dir = tmp_path / "artifacts"
    artifacts_dir.mkdir()
    (artifacts_dir / "Vault.json").write_text(json.dumps({"abi": FOO_ABI, "bytecode": "0x01"}))
    config = DeployConfig(url=config.url, pk=config.pk, artifacts_dir=artifacts_dir)
    orchestrator, _, _ = make_orchestrator(config, tmp_path, token_artifact, abis=None)

    assert orchestrator.collect_abis() == {"Vault": FOO_ABI}


@pytest.fixture
def cli_env(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr("deployer.orchestrator.load_config",
                        lambda env=None: load_config(tmp_path / "missing.json", env=env))
    monkeypatch.setenv("DEPLOY_LOG_DIR", str(tmp_path / "logs"))
    yield tmp_path
    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)


def test_main_abi_never_builds_client(cli_env, monkeypatch):
    client_factory = MagicMock()
    monkeypatch.setattr("deployer.orchestrator.ChainClient", client_factory)

    main(["abi"])

    client_factory.assert_not_called()
    assert (cli_env / "logs" / "deployer.log").exists()


def test_main_logs_and_reraises_failure(cli_env, monkeypatch, caplog):
    monkeypatch.setenv("DEPLOY_RPC_URL", "http://127.0.0.1:1")
    monkeypatch.setenv("DEPLOY_PRIVATE_KEY", "0x" + "01" * 32)
    client_factory = MagicMock(side_effect=ConnectionError("Failed to connect to http://127.0.0.1:1"))
    monkeypatch.setattr("deployer.orchestrator.ChainClient", client_factory)

    with caplog.at_level(logging.ERROR, logger=LOGGER_NAME):
        with pytest.raises(ConnectionError):
            main([])

    client_factory.assert_called_once_with("http://127.0.0.1:1", "0x" + "01" * 32)
    assert "Deployment failed: Failed to connect to http://127.0.0.1:1" in caplog.text
