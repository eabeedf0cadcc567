import unittest
from types import SimpleNamespace
from unittest.mock import MagicMock, patch

from substrateinterface.exceptions import SubstrateRequestException

from agent.errors import ChainOperationError
from services.substrate_service import SubstrateService

ALICE = "5GrwvaEF5zXb26Fz9rcQpDWS57CtERHpNehXCPcNoHGKutQY"


class DeriveKeypairTest(unittest.TestCase):
    def setUp(self) -> None:
        self.service = SubstrateService()

    def test_secret_uri(self) -> None:
        keypair = self.service.derive_keypair("//Alice")
        self.assertEqual(ALICE, keypair.ss58_address)

    def test_hex_seed_uses_create_from_seed(self) -> None:
        seed = "0x" + "11" * 32

        with patch("services.substrate_service.Keypair") as mock_keypair:
            mock_keypair.create_from_seed.return_value = SimpleNamespace(ss58_address=ALICE)
            self.service.derive_keypair(seed)

        mock_keypair.create_from_seed.assert_called_once_with(seed, crypto_type=self.service.crypto_type)
        mock_keypair.create_from_uri.assert_not_called()


class SubstrateServiceAsyncTest(unittest.IsolatedAsyncioTestCase):
    async def asyncSetUp(self) -> None:
        self.service = SubstrateService()
        self.session = MagicMock()
        self.signer = SimpleNamespace(ss58_address=ALICE)

    async def test_connect(self) -> None:
        with patch("services.substrate_service.SubstrateInterface") as mock_interface:
            mock_interface.return_value.chain = "Westend"
            session = await self.service.connect("wss://westend-rpc.polkadot.io")

        mock_interface.assert_called_once_with(url="wss://westend-rpc.polkadot.io")
        self.assertIs(mock_interface.return_value, session)

    async def test_disconnect(self) -> None:
        await self.service.disconnect(self.session)
        self.session.close.assert_called_once_with()

    async def test_submit_call_success(self) -> None:
        self.session.submit_extrinsic.return_value = SimpleNamespace(
            is_success=True, extrinsic_hash="0xabc", error_message=None
        )

        result = await self.service.submit_call(
            self.session, self.signer, "Proxy", "add_proxy", {"delegate": ALICE, "proxy_type": "Any", "delay": 0}
        )

        self.assertEqual("0xabc", result)
        self.session.compose_call.assert_called_once_with(
            call_module="Proxy",
            call_function="add_proxy",
            call_params={"delegate": ALICE, "proxy_type": "Any", "delay": 0},
        )
        self.session.create_signed_extrinsic.assert_called_once_with(
            call=self.session.compose_call.return_value, keypair=self.signer
        )
        self.session.submit_extrinsic.assert_called_once_with(
            self.session.create_signed_extrinsic.return_value, wait_for_inclusion=True
        )

    async def test_submit_call_failed_receipt(self) -> None:
        self.session.submit_extrinsic.return_value = SimpleNamespace(
            is_success=False, extrinsic_hash="0xabc", error_message={"name": "Duplicate"}
        )

        with self.assertRaises(ChainOperationError) as ctx:
            await self.service.submit_call(self.session, self.signer, "Proxy", "add_proxy", {})

        self.assertIn("Duplicate", str(ctx.exception))

    async def test_submit_call_rejected_by_node(self) -> None:
        self.session.submit_extrinsic.side_effect = SubstrateRequestException("Inability to pay some fees")

        with self.assertRaises(ChainOperationError):
            await self.service.submit_call(self.session, self.signer, "Proxy", "remove_proxy", {})

    async def test_query_returns_value(self) -> None:
        self.session.query.return_value = SimpleNamespace(value=[[], 0])

        result = await self.service.query(self.session, "Proxy", "Proxies", [ALICE])

        self.assertEqual([[], 0], result)
        self.session.query.assert_called_once_with("Proxy", "Proxies", [ALICE])
