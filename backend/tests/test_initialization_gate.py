import asyncio
import unittest
from types import SimpleNamespace

from agent.errors import ErrorKind, NotReadyError
from agent.state import ChainContext, InitializationGate

SIGNER = SimpleNamespace(ss58_address="5GrwvaEF5zXb26Fz9rcQpDWS57CtERHpNehXCPcNoHGKutQY")


class InitializationGateTest(unittest.IsolatedAsyncioTestCase):
    async def asyncSetUp(self) -> None:
        self.gate = InitializationGate()
        self.context = ChainContext(session=object(), signer=SIGNER)

    async def test_require_names_missing_signing_key(self) -> None:
        with self.assertRaises(NotReadyError) as ctx:
            self.gate.require()

        self.assertEqual("signing key", ctx.exception.resource)
        self.assertEqual(ErrorKind.NOT_READY, ctx.exception.kind)

    async def test_require_names_missing_connection(self) -> None:
        self.gate.set_signer(SIGNER)

        with self.assertRaises(NotReadyError) as ctx:
            self.gate.require()

        self.assertEqual("connection", ctx.exception.resource)

    async def test_waiters_are_released_on_resolve(self) -> None:
        waiters = [asyncio.create_task(self.gate.wait()) for _ in range(3)]
        await asyncio.sleep(0)
        self.assertFalse(any(w.done() for w in waiters))

        self.gate.resolve(self.context)

        results = await asyncio.gather(*waiters)
        self.assertEqual([self.context] * 3, results)
        self.assertTrue(self.gate.is_ready)
        self.assertIs(self.context, self.gate.require())
        self.assertEqual(SIGNER.ss58_address, self.gate.require().address)

    async def test_wait_after_resolve_returns_immediately(self) -> None:
        self.gate.resolve(self.context)
        self.assertIs(self.context, await self.gate.wait())

    async def test_resolve_twice_raises(self) -> None:
        self.gate.resolve(self.context)

        with self.assertRaises(RuntimeError):
            self.gate.resolve(self.context)

    async def test_failure_is_reraised_to_waiters(self) -> None:
        waiter = asyncio.create_task(self.gate.wait())
        await asyncio.sleep(0)

        self.gate.fail(ConnectionError("node unreachable"))

        with self.assertRaises(ConnectionError):
            await waiter

    async def test_wait_timeout_is_left_to_the_caller(self) -> None:
        with self.assertRaises(asyncio.TimeoutError):
            await self.gate.wait(timeout=0.01)

        self.gate.resolve(self.context)
        self.assertIs(self.context, await self.gate.wait(timeout=0.01))

    async def test_close_releases_waiters_and_blocks_use(self) -> None:
        waiter = asyncio.create_task(self.gate.wait())
        await asyncio.sleep(0)

        self.gate.close()

        with self.assertRaises(NotReadyError):
            await waiter
        with self.assertRaises(NotReadyError):
            self.gate.require()
        self.assertFalse(self.gate.is_ready)

    async def test_close_after_resolve(self) -> None:
        self.gate.resolve(self.context)
        self.gate.close()

        self.assertIsNone(self.gate.context)
        with self.assertRaises(NotReadyError):
            await self.gate.wait()
