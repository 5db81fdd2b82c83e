"""
Deployment Runner
Runs a deployment script against a configured network

    python deploy.py [--network NAME] [--config PATH] [script]
"""

import os
import argparse
import subprocess
import sys

DEFAULT_SCRIPT = "scripts/deploy.py"


def script_module(script_path: str) -> str:
    """scripts/deploy.py -> scripts.deploy, relative to the working directory"""
    module = os.path.relpath(os.path.realpath(script_path), os.path.realpath(os.getcwd()))
    if module == os.pardir or module.startswith(os.pardir + os.sep):
        raise ValueError(f"Script must live under {os.getcwd()}: {script_path}")
    if module.endswith('.py'):
        module = module[:-3]
    return module.replace(os.sep, '.')


def build_command(script_path: str):
    return [sys.executable, "-m", script_module(script_path)]


def build_env(network=None, config=None):
    env = dict(os.environ)
    if network:
        env['DEPLOY_NETWORK'] = network
    if config:
        env['DEPLOY_CONFIG'] = config
    return env


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Run a deployment script")
    parser.add_argument('script', nargs='?', default=DEFAULT_SCRIPT)
    parser.add_argument('--network', help="Network name from the config file")
    parser.add_argument('--config', help="Config file (default: config/network_config.json)")
    return parser.parse_args(argv)


def run(argv=None) -> int:
    args = parse_args(argv)

    try:
        command = build_command(args.script)
    except ValueError as e:
        print(e, file=sys.stderr)
        return 2

    result = subprocess.run(
        command,
        cwd=".",
        env=build_env(args.network, args.config)
    )
    return result.returncode


if __name__ == "__main__":
    # Banner on stderr keeps stdout for the deployed address
    print("=" * 70, file=sys.stderr)
    print("MachineRegistry Deployment", file=sys.stderr)
    print("=" * 70, file=sys.stderr)
    print(file=sys.stderr)

    sys.exit(run())
