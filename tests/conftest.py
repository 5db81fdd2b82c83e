"""
Shared fixtures: config files, compiled artifacts and a mocked Web3
"""

import json
from unittest.mock import MagicMock

import pytest
from hexbytes import HexBytes
from loguru import logger
from web3 import Web3

# Well-known development account (Hardhat / Anvil account #0)
DEV_PRIVATE_KEY = "0xac0974bec39a17e36ba4a6b4d238ff944bacb478cbed5efcae784d7bf4f2ff80"
DEV_ADDRESS = "0xf39Fd6e51aad88F6F4ce6aB8827279cffFb92266"

# Init code that returns a one-byte (STOP) runtime
REGISTRY_BYTECODE = "0x6001600c60003960016000f300"
REGISTRY_ABI = [
    {
        "inputs": [],
        "stateMutability": "nonpayable",
        "type": "constructor"
    }
]

DEPLOYED_ADDRESS = "0x5FbDB2315678afecb367f032d93F642f64180aa3"
TX_HASH = HexBytes(b'\xab' * 32)

ENV_VARS = [
    'PRIVATE_KEY',
    'DEPLOY_NETWORK',
    'DEPLOY_CONFIG',
    'TEST_RPC_URL',
    'NIDUM_TESTNET_RPC_URL',
    'POLYGON_AMOY_RPC_URL'
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Isolate tests from the developer's environment and .env file"""
    for var in ENV_VARS:
        monkeypatch.delenv(var, raising=False)
    monkeypatch.setattr('utils.config_loader.load_dotenv', lambda *args, **kwargs: False)


@pytest.fixture
def log_messages():
    """Capture loguru output"""
    messages = []
    handler_id = logger.add(lambda message: messages.append(str(message)), format="{message}")
    yield messages
    logger.remove(handler_id)


def write_artifact(artifacts_dir, name, bytecode=REGISTRY_BYTECODE, solc_version="0.8.22"):
    """Lay out a compiled artifact the way the compiler toolchain does"""
    contract_dir = artifacts_dir / "contracts" / f"{name}.sol"
    contract_dir.mkdir(parents=True, exist_ok=True)

    (contract_dir / f"{name}.json").write_text(json.dumps({
        "_format": "hh-sol-artifact-1",
        "contractName": name,
        "sourceName": f"contracts/{name}.sol",
        "abi": REGISTRY_ABI,
        "bytecode": bytecode,
        "deployedBytecode": "0x00"
    }))

    if solc_version:
        build_info_dir = artifacts_dir / "build-info"
        build_info_dir.mkdir(parents=True, exist_ok=True)
        (build_info_dir / f"{name.lower()}.json").write_text(json.dumps({
            "_format": "hh-sol-build-info-1",
            "solcVersion": solc_version
        }))
        (contract_dir / f"{name}.dbg.json").write_text(json.dumps({
            "_format": "hh-sol-dbg-1",
            "buildInfo": f"../../build-info/{name.lower()}.json"
        }))

    return contract_dir / f"{name}.json"


@pytest.fixture
def artifacts_dir(tmp_path):
    """Artifacts directory holding a compiled MachineRegistry"""
    path = tmp_path / "artifacts"
    write_artifact(path, "MachineRegistry")
    return path


@pytest.fixture
def config_file(tmp_path, artifacts_dir):
    """Harness configuration pointing at the temporary artifacts"""
    path = tmp_path / "network_config.json"
    path.write_text(json.dumps({
        "solidity": {"version": "0.8.22"},
        "default_network": "localhost",
        "paths": {"artifacts": str(artifacts_dir)},
        "networks": {
            "localhost": {
                "url": "http://127.0.0.1:8545",
                "accounts_env": ["PRIVATE_KEY"]
            },
            "testnet": {
                "url_env": "TEST_RPC_URL",
                "accounts_env": ["PRIVATE_KEY"],
                "chain_id": 31337,
                "timeout": 5
            },
            "unreachable": {
                "url": "http://127.0.0.1:1",
                "accounts_env": ["PRIVATE_KEY"],
                "timeout": 2
            }
        },
        "etherscan": {
            "api_key": {"testnet": "TESTNET_API_KEY"}
        },
        "deployment": {
            "confirmation_timeout": 30,
            "gas_buffer": 1.5,
            "default_gas_limit": 2000000
        }
    }))
    return path


@pytest.fixture
def mock_w3():
    """Web3 stand-in for a funded development chain"""
    w3 = MagicMock()
    w3.eth.chain_id = 31337
    w3.eth.gas_price = 1_000_000_000
    w3.eth.get_balance.return_value = 10 ** 18
    w3.eth.get_transaction_count.return_value = 0
    w3.from_wei = Web3.from_wei

    constructor = w3.eth.contract.return_value.constructor.return_value
    constructor.estimate_gas.return_value = 100_000
    constructor.build_transaction.side_effect = lambda tx: {
        **tx,
        'value': 0,
        'data': REGISTRY_BYTECODE
    }

    w3.eth.send_raw_transaction.return_value = TX_HASH
    w3.eth.wait_for_transaction_receipt.return_value = {
        'status': 1,
        'contractAddress': DEPLOYED_ADDRESS.lower(),
        'gasUsed': 95_000,
        'blockNumber': 1
    }
    return w3
