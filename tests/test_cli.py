import contextlib
import io
import os
import unittest
from unittest import mock

import requests

from erc1271 import cli

from dummies import EOA, PROXY_VALIDATOR, WALLET, DummyEth, DummyWeb3, FakeWallet, sign

ENV_KEYS = ("RPC_URL", "RPC_TIMEOUT", "ERC1271_VALIDATOR_ADDRESS", "ERC1271_VALID_SIGNATURE")


class CliTests(unittest.TestCase):
    def setUp(self):
        self.eth = DummyEth()
        self.eth.deploy(WALLET, FakeWallet())
        self.connect_args = None

        def fake_connect(rpc_url, timeout):
            self.connect_args = (rpc_url, timeout)
            return DummyWeb3(self.eth)

        patcher = mock.patch.object(cli, "connect", side_effect=fake_connect)
        patcher.start()
        self.addCleanup(patcher.stop)

        env = mock.patch.dict(os.environ, {}, clear=False)
        env.start()
        self.addCleanup(env.stop)
        for key in ENV_KEYS:
            os.environ.pop(key, None)

    def run_cli(self, *argv):
        out = io.StringIO()
        with contextlib.redirect_stdout(out):
            code = cli.main(list(argv))
        return code, out.getvalue().strip()

    def test_valid(self):
        code, out = self.run_cli("-a", WALLET, "-m", "Hello go test!", "-s", sign("Hello go test!"))
        self.assertEqual((code, out), (0, "true"))
        self.assertEqual(self.connect_args, ("https://cloudflare-eth.com", 10.0))

    def test_invalid_exits_cleanly(self):
        code, out = self.run_cli("--address", WALLET, "--message", "Hello go test!!", "--signature", sign("Hello go test!"))
        self.assertEqual((code, out), (0, "false"))

    def test_eoa(self):
        code, out = self.run_cli("-a", EOA, "-m", "Hello go test!", "--sig", sign("Hello go test!"))
        self.assertEqual((code, out), (0, "false"))

    def test_overrides(self):
        self.eth.deploy(PROXY_VALIDATOR, FakeWallet())
        code, out = self.run_cli(
            "-r", "http://localhost:8545",
            "--timeout", "3",
            "-a", EOA,
            "-m", "Hello go test!",
            "-s", sign("Hello go test!"),
            "-v", PROXY_VALIDATOR,
            "--vs", "0x1626ba7e",
        )
        self.assertEqual((code, out), (0, "true"))
        self.assertEqual(self.connect_args, ("http://localhost:8545", 3.0))
        self.assertEqual(self.eth.calls[-1][0]["to"], PROXY_VALIDATOR)

    def test_settings_from_environment(self):
        os.environ["RPC_URL"] = "http://node:8545"
        os.environ["RPC_TIMEOUT"] = "2.5"
        os.environ["ERC1271_VALID_SIGNATURE"] = "0x01020304"
        code, out = self.run_cli("-a", WALLET, "-m", "Hello go test!", "-s", sign("Hello go test!"))
        self.assertEqual((code, out), (0, "false"))
        self.assertEqual(self.connect_args, ("http://node:8545", 2.5))

    def test_missing_arguments(self):
        self.assertEqual(self.run_cli("-m", "x", "-s", "0x00")[0], 2)
        self.assertEqual(self.run_cli("-a", WALLET, "-m", "x")[0], 2)
        self.assertIsNone(self.connect_args)

    def test_malformed_input(self):
        self.assertEqual(self.run_cli("-a", "0x1234", "-s", "0x00")[0], 2)
        self.assertEqual(self.run_cli("-a", WALLET, "-s", "0x00", "--vs", "0x00")[0], 2)

    def test_bad_timeout_in_environment(self):
        os.environ["RPC_TIMEOUT"] = "soon"
        self.assertEqual(self.run_cli("-a", WALLET, "-s", "0x00")[0], 2)

    def test_transport_failure(self):
        self.eth.code_error = requests.exceptions.ConnectionError("connection refused")
        code, out = self.run_cli("-a", WALLET, "-m", "Hello go test!", "-s", sign("Hello go test!"))
        self.assertEqual(code, 1)
        self.assertEqual(out, "")


if __name__ == "__main__":
    unittest.main()
